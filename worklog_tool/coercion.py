"""Boundary coercion for values coming out of the document store.

Report and project records are written by several forms over time, so any
numeric field may arrive as an int, a float, a numeric string, an empty
string or nothing at all. Everything monetary is turned into a finite
Decimal here; anything unusable or absurdly large becomes zero.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any

ZERO = Decimal("0")
CENT = Decimal("0.01")

# Largest decimal exponent (either sign) accepted for a stored figure. Beyond
# it the value is a typo or garbage, and cent rounding would overflow.
MAX_EXPONENT = 15


def to_decimal(value: Any) -> Decimal:
    """Coerce ``value`` to a finite Decimal, returning 0 when it cannot."""
    if value is None or isinstance(value, bool):
        return ZERO

    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, int):
        result = Decimal(value)
    elif isinstance(value, float):
        result = Decimal(str(value))
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return ZERO
        try:
            result = Decimal(text)
        except InvalidOperation:
            return ZERO
    else:
        return ZERO

    if not result.is_finite():
        return ZERO
    if result and abs(result.adjusted()) > MAX_EXPONENT:
        return ZERO
    return result


def to_bool(value: Any) -> bool:
    """Interpret flags stored as booleans or as "true"/"false" strings."""
    if isinstance(value, str):
        return value.strip().lower() in ("true", "1", "yes")
    return bool(value)


def to_cents(value: Decimal) -> Decimal:
    return value.quantize(CENT, ROUND_HALF_UP)

"""Clock-time arithmetic for labor entries.

Entry and exit times are stored as "HH:MM" strings. A shift whose exit is
not after its entry is taken to cross midnight, so 22:00 -> 06:00 is 8h.
Identical entry and exit count as nothing worked (0h, not 24h).
"""

from __future__ import annotations

import re
from datetime import date
from decimal import Decimal
from typing import Optional

from worklog_tool.coercion import ZERO

_CLOCK_RE = re.compile(r'^\s*(\d{1,2}):(\d{2})\s*$')

MINUTES_PER_DAY = 24 * 60


def parse_clock(value: object) -> Optional[int]:
    """Return minutes since midnight for an "HH:MM" string, or None."""
    if not isinstance(value, str):
        return None
    match = _CLOCK_RE.match(value)
    if not match:
        return None
    hours, minutes = int(match.group(1)), int(match.group(2))
    if hours >= 24 or minutes >= 60:
        return None
    return hours * 60 + minutes


def hours_between(start: object, end: object) -> Decimal:
    """Elapsed hours from ``start`` to ``end``, wrapping past midnight."""
    if not start or not end:
        return ZERO

    start_min = parse_clock(start)
    end_min = parse_clock(end)
    if start_min is None or end_min is None:
        return ZERO

    if end_min <= start_min:
        end_min += MINUTES_PER_DAY

    elapsed = end_min - start_min
    # Same start and end: logged nothing.
    if elapsed == MINUTES_PER_DAY:
        return ZERO
    return Decimal(elapsed) / Decimal(60)


def iso_week_number(day: date) -> int:
    """ISO-8601 week number, as the report forms store it in ``weekNumber``."""
    return day.isocalendar()[1]

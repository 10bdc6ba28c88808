"""Purchased materials total for one report."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from decimal import Decimal
from typing import Optional, Union

from worklog_tool.models import MaterialItem, MaterialsCalc

MaterialLike = Union[MaterialItem, Mapping]


def _as_item(item: object) -> MaterialItem:
    if isinstance(item, MaterialItem):
        return item
    if isinstance(item, Mapping):
        return MaterialItem(
            description=str(item.get("description") or ""),
            cost=item.get("cost"),
        )
    return MaterialItem()


def calculate_materials(items: Optional[Iterable[MaterialLike]]) -> MaterialsCalc:
    """Sum material costs. Unreadable costs count as 0 but stay itemised.

    Negative costs (discounts, returns) are summed as they are.
    """
    if not items or not isinstance(items, Iterable) or isinstance(items, (str, bytes, Mapping)):
        return MaterialsCalc()

    material_items = tuple(_as_item(item) for item in items)
    total = sum((item.cost for item in material_items), Decimal("0"))

    return MaterialsCalc(total_materials_cost=total, material_items=material_items)

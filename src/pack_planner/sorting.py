from __future__ import annotations

from operator import attrgetter
from typing import Iterable

from pack_planner.models import ItemRecord, SortOrder


_by_length = attrgetter("length")


def sort_items(items: Iterable[ItemRecord], order: SortOrder) -> list[ItemRecord]:
    """
    Return the records in the order they should be offered to the packer.

    NATURAL keeps the input order. SHORT_TO_LONG and LONG_TO_SHORT sort by
    length; both are stable, so records of equal length keep their input order.
    """
    order = SortOrder(order)
    if order is SortOrder.NATURAL:
        return list(items)
    if order is SortOrder.SHORT_TO_LONG:
        return sorted(items, key=_by_length)
    if order is SortOrder.LONG_TO_SHORT:
        # reverse=True keeps ties in input order
        return sorted(items, key=_by_length, reverse=True)

    raise ValueError(f"Unknown sort order: {order!r}")

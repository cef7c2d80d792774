# src/pack_planner/packing/planner.py

from __future__ import annotations

import logging
import math
from typing import Iterable

from pack_planner.errors import InvalidLimits, UnpackableItem
from pack_planner.models import ItemRecord, Pack, PackLimits, SortOrder
from pack_planner.packing.accumulator import PackAccumulator
from pack_planner.sorting import sort_items

logger = logging.getLogger(__name__)


def check_limits(limits: PackLimits) -> None:
    # `not >` so that NaN is rejected as well
    if not limits.max_items > 0 or not limits.max_weight > 0:
        raise InvalidLimits(limits.max_items, limits.max_weight)


def max_units_to_add(
    accumulator: PackAccumulator,
    unit_weight: float,
    weight_tolerance: float = 0.0,
) -> int:
    """
    Largest number of units of `unit_weight` that fit into `accumulator`
    without breaking the item count or the weight limit.

    Weightless units are bounded by the item count only. The weight bound
    comes from a float division, so it is walked back until the resulting
    pack weight really is within `max_weight + weight_tolerance`.
    """
    by_count = max(accumulator.remaining_capacity_items(), 0)
    if unit_weight == 0:
        return by_count

    ceiling = accumulator.limits.max_weight + weight_tolerance
    room = ceiling - accumulator.weight
    if room < 0:
        return 0

    raw = room / unit_weight
    by_weight = math.floor(raw) if math.isfinite(raw) else by_count

    units = min(by_count, by_weight)
    while units > 0 and accumulator.weight + units * unit_weight > ceiling:
        units -= 1
    return units


def _close(accumulator: PackAccumulator, packs: list[Pack]) -> None:
    pack = accumulator.finalize(len(packs) + 1)
    logger.debug(
        f"closed pack {pack.pack_number}: items={pack.item_count} "
        f"weight={pack.total_weight:.3f} length={pack.total_length}"
    )
    packs.append(pack)


def plan(
    items: Iterable[ItemRecord],
    order: SortOrder,
    limits: PackLimits,
    *,
    weight_tolerance: float = 0.0,
) -> tuple[Pack, ...]:
    """
    Greedily distribute item records over packs.

    - Records are offered in the given sort order, one at a time
    - A record's quantity is split over as many consecutive packs as needed
    - A pack is closed as soon as the next unit does not fit
    - Pack numbers start at 1 and have no gaps

    Raises:
        InvalidLimits: if either limit is not positive (checked before any item).
        UnpackableItem: if one unit of a record does not fit into an empty pack.
            Nothing is returned in that case.
    """
    check_limits(limits)
    if weight_tolerance < 0:
        raise ValueError(f"weight_tolerance must be >= 0, got {weight_tolerance!r}")

    ordered = sort_items(items, order)

    packs: list[Pack] = []
    current = PackAccumulator(limits)

    for record in ordered:
        remaining = record.quantity
        while remaining > 0:
            placeable = min(remaining, max_units_to_add(current, record.unit_weight, weight_tolerance))

            if placeable > 0:
                current.add(record.id, record.length, placeable, record.unit_weight)
                remaining -= placeable
                continue

            if current.is_empty:
                raise UnpackableItem(record.id, record.unit_weight, limits.max_weight)

            _close(current, packs)
            current = PackAccumulator(limits)

    if not current.is_empty:
        _close(current, packs)

    logger.info(
        f"planned packs={len(packs)} records={len(ordered)} order={SortOrder(order).value} "
        f"max_items={limits.max_items} max_weight={limits.max_weight}"
    )
    return tuple(packs)

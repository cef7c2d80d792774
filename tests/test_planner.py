"""Tests for the greedy pack planner."""

from __future__ import annotations

import math
import random
from collections import Counter

import pytest

from pack_planner.errors import InvalidLimits, UnpackableItem
from pack_planner.models import ItemRecord, PackLimits, SortOrder
from pack_planner.packing.accumulator import PackAccumulator
from pack_planner.packing.planner import max_units_to_add, plan


def scenario_a() -> tuple[list[ItemRecord], PackLimits]:
    items = [
        ItemRecord(id=1001, length=6200, quantity=30, unit_weight=9.653),
        ItemRecord(id=2001, length=7200, quantity=50, unit_weight=11.21),
    ]
    return items, PackLimits(max_items=40, max_weight=500.0)


def assert_within_limits(packs, limits: PackLimits) -> None:
    for p in packs:
        assert p.item_count <= limits.max_items
        assert p.total_weight <= limits.max_weight


def assert_full_coverage(packs, items) -> None:
    placed: Counter[int] = Counter()
    for p in packs:
        for e in p.entries:
            placed[e.item_id] += e.quantity
    requested: Counter[int] = Counter()
    for it in items:
        requested[it.id] += it.quantity
    assert +placed == +requested


def test_scenario_a_natural_order() -> None:
    """The documented example splits item 2001 over two packs."""
    items, limits = scenario_a()

    packs = plan(items, SortOrder.NATURAL, limits)

    assert len(packs) == 2

    first, second = packs
    assert first.pack_number == 1
    assert [(e.item_id, e.quantity, e.unit_weight) for e in first.entries] == [
        (1001, 30, 9.653),
        (2001, 10, 11.21),
    ]
    assert first.total_weight == pytest.approx(401.69)
    assert first.total_length == 7200

    assert second.pack_number == 2
    assert [(e.item_id, e.quantity) for e in second.entries] == [(2001, 40)]
    assert second.total_weight == pytest.approx(448.4)
    assert second.total_length == 7200


def test_unit_heavier_than_pack_is_unpackable() -> None:
    items = [ItemRecord(id=7, length=100, quantity=1, unit_weight=600.0)]
    limits = PackLimits(max_items=40, max_weight=500.0)

    with pytest.raises(UnpackableItem) as excinfo:
        plan(items, SortOrder.NATURAL, limits)

    assert excinfo.value.item_id == 7
    assert excinfo.value.unit_weight == 600.0
    assert excinfo.value.max_weight == 500.0


def test_unpackable_item_after_other_packs_aborts_the_whole_run() -> None:
    """No partial pack list is returned when a later record cannot be packed."""
    items = [
        ItemRecord(id=1, length=10, quantity=5, unit_weight=1.0),
        ItemRecord(id=2, length=10, quantity=1, unit_weight=11.0),
    ]
    limits = PackLimits(max_items=2, max_weight=10.0)

    with pytest.raises(UnpackableItem) as excinfo:
        plan(items, SortOrder.NATURAL, limits)
    assert excinfo.value.item_id == 2


@pytest.mark.parametrize(
    "max_items, max_weight",
    [
        (0, 500.0),
        (40, 0.0),
        (-1, 500.0),
        (40, -5.0),
        (40, math.nan),
    ],
)
def test_invalid_limits_are_rejected_before_planning(max_items: int, max_weight: float) -> None:
    # The item would be unpackable; limits must be checked first
    items = [ItemRecord(id=1, length=1, quantity=1, unit_weight=1e9)]
    limits = PackLimits(max_items=max_items, max_weight=max_weight)

    with pytest.raises(InvalidLimits):
        plan(items, SortOrder.NATURAL, limits)


def test_invalid_limits_with_no_items() -> None:
    with pytest.raises(InvalidLimits):
        plan([], SortOrder.NATURAL, PackLimits(max_items=0, max_weight=0.0))


def test_short_to_long_keeps_equal_lengths_in_input_order() -> None:
    items = [
        ItemRecord(id=1, length=100, quantity=1, unit_weight=1.0),
        ItemRecord(id=2, length=50, quantity=1, unit_weight=1.0),
        ItemRecord(id=3, length=100, quantity=1, unit_weight=1.0),
    ]
    limits = PackLimits(max_items=10, max_weight=100.0)

    packs = plan(items, SortOrder.SHORT_TO_LONG, limits)

    assert [e.item_id for e in packs[0].entries] == [2, 1, 3]


def test_long_to_short_orders_entries_by_descending_length() -> None:
    items = [
        ItemRecord(id=1, length=100, quantity=3, unit_weight=1.0),
        ItemRecord(id=2, length=50, quantity=3, unit_weight=1.0),
        ItemRecord(id=3, length=300, quantity=3, unit_weight=1.0),
        ItemRecord(id=4, length=100, quantity=3, unit_weight=1.0),
    ]
    limits = PackLimits(max_items=4, max_weight=100.0)

    packs = plan(items, SortOrder.LONG_TO_SHORT, limits)

    lengths = [e.length for p in packs for e in p.entries]
    assert lengths == sorted(lengths, reverse=True)
    assert [e.item_id for p in packs for e in p.entries] == [3, 1, 1, 4, 4, 2]


def test_zero_quantity_records_are_skipped() -> None:
    items = [
        ItemRecord(id=1, length=10, quantity=0, unit_weight=1.0),
        ItemRecord(id=2, length=20, quantity=2, unit_weight=1.0),
    ]
    limits = PackLimits(max_items=5, max_weight=10.0)

    packs = plan(items, SortOrder.NATURAL, limits)

    assert len(packs) == 1
    assert [e.item_id for e in packs[0].entries] == [2]


def test_only_zero_quantities_give_no_packs() -> None:
    items = [ItemRecord(id=1, length=10, quantity=0, unit_weight=1000.0)]
    assert plan(items, SortOrder.NATURAL, PackLimits(max_items=1, max_weight=1.0)) == ()


def test_empty_input_gives_no_packs() -> None:
    assert plan([], SortOrder.LONG_TO_SHORT, PackLimits(max_items=1, max_weight=1.0)) == ()


def test_weightless_items_are_bounded_by_count_only() -> None:
    items = [ItemRecord(id=1, length=10, quantity=7, unit_weight=0.0)]
    limits = PackLimits(max_items=3, max_weight=1.0)

    packs = plan(items, SortOrder.NATURAL, limits)

    assert [p.item_count for p in packs] == [3, 3, 1]
    assert all(p.total_weight == 0.0 for p in packs)


def test_weight_limit_splits_a_record() -> None:
    items = [ItemRecord(id=1, length=10, quantity=10, unit_weight=3.0)]
    limits = PackLimits(max_items=100, max_weight=10.0)

    packs = plan(items, SortOrder.NATURAL, limits)

    assert [p.item_count for p in packs] == [3, 3, 3, 1]
    assert [p.total_weight for p in packs] == [9.0, 9.0, 9.0, 3.0]


def test_float_rounding_never_admits_an_overweight_unit() -> None:
    # 0.3 / 0.1 == 2.9999999999999996 and 3 * 0.1 == 0.30000000000000004
    items = [ItemRecord(id=1, length=10, quantity=3, unit_weight=0.1)]
    limits = PackLimits(max_items=10, max_weight=0.3)

    packs = plan(items, SortOrder.NATURAL, limits)

    assert [p.item_count for p in packs] == [2, 1]
    assert_within_limits(packs, limits)


def test_weight_tolerance_admits_a_unit_within_tolerance() -> None:
    items = [ItemRecord(id=1, length=10, quantity=3, unit_weight=0.1)]
    limits = PackLimits(max_items=10, max_weight=0.3)

    packs = plan(items, SortOrder.NATURAL, limits, weight_tolerance=1e-9)

    assert [p.item_count for p in packs] == [3]


def test_negative_weight_tolerance_is_rejected() -> None:
    with pytest.raises(ValueError):
        plan([], SortOrder.NATURAL, PackLimits(max_items=1, max_weight=1.0), weight_tolerance=-1.0)


def test_pack_numbers_are_consecutive_from_one() -> None:
    items = [ItemRecord(id=i, length=i * 10, quantity=7, unit_weight=2.5) for i in range(1, 6)]
    limits = PackLimits(max_items=4, max_weight=9.0)

    packs = plan(items, SortOrder.NATURAL, limits)

    assert [p.pack_number for p in packs] == list(range(1, len(packs) + 1))


def test_plan_is_deterministic() -> None:
    items, limits = scenario_a()

    assert plan(items, SortOrder.LONG_TO_SHORT, limits) == plan(items, SortOrder.LONG_TO_SHORT, limits)


@pytest.mark.parametrize("order", list(SortOrder))
@pytest.mark.parametrize("seed", [1, 7, 42])
def test_random_inputs_are_fully_covered_within_limits(order: SortOrder, seed: int) -> None:
    rng = random.Random(seed)
    limits = PackLimits(max_items=rng.randint(1, 30), max_weight=rng.uniform(50.0, 200.0))
    items = [
        ItemRecord(
            id=1000 + i,
            length=rng.randint(0, 9000),
            quantity=rng.randint(0, 60),
            unit_weight=round(rng.uniform(0.0, 50.0), 3),
        )
        for i in range(25)
    ]

    packs = plan(items, order, limits)

    assert_full_coverage(packs, items)
    assert_within_limits(packs, limits)
    assert [p.pack_number for p in packs] == list(range(1, len(packs) + 1))
    for p in packs:
        assert p.total_length == max(e.length for e in p.entries)
        assert p.total_weight == pytest.approx(sum(e.weight for e in p.entries))


# max_units_to_add


def test_max_units_limited_by_weight() -> None:
    acc = PackAccumulator(PackLimits(max_items=10, max_weight=50.0))
    acc.add(1, 10, 5, 6.0)  # 5 items, 30.0

    assert max_units_to_add(acc, 5.0) == 4


def test_max_units_limited_by_count() -> None:
    acc = PackAccumulator(PackLimits(max_items=10, max_weight=50.0))
    acc.add(1, 10, 4, 5.0)
    acc.add(2, 10, 5, 0.0)  # 9 items, 20.0

    assert max_units_to_add(acc, 5.0) == 1


def test_max_units_when_both_limits_agree() -> None:
    acc = PackAccumulator(PackLimits(max_items=10, max_weight=50.0))
    acc.add(1, 10, 9, 5.0)  # 9 items, 45.0

    assert max_units_to_add(acc, 5.0) == 1


def test_max_units_on_full_pack_is_zero() -> None:
    acc = PackAccumulator(PackLimits(max_items=2, max_weight=50.0))
    acc.add(1, 10, 2, 1.0)

    assert max_units_to_add(acc, 1.0) == 0
    assert max_units_to_add(acc, 0.0) == 0


def test_max_units_with_unbounded_weight_limit() -> None:
    acc = PackAccumulator(PackLimits(max_items=3, max_weight=math.inf))

    assert max_units_to_add(acc, 1e300) == 3

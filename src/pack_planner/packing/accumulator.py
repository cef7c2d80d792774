"""Mutable state for the pack currently being filled."""

from __future__ import annotations

from pack_planner.models import Pack, PackEntry, PackLimits


class PackAccumulator:
    """
    One in-progress pack.

    The accumulator only records what it is given; keeping additions within
    the limits is the planner's job. Once finalized it cannot be reused.
    """

    def __init__(self, limits: PackLimits):
        self.limits = limits
        self.entries: list[PackEntry] = []
        self.item_count = 0
        self.weight = 0.0
        self.longest = 0
        self._finalized = False

    @property
    def is_empty(self) -> bool:
        return not self.entries

    def remaining_capacity_items(self) -> int:
        return self.limits.max_items - self.item_count

    def remaining_capacity_weight(self) -> float:
        return self.limits.max_weight - self.weight

    def add(self, item_id: int, length: int, quantity: int, unit_weight: float) -> PackEntry:
        if self._finalized:
            raise RuntimeError("Cannot add to a pack that has already been finalized")

        entry = PackEntry(
            item_id=item_id,
            length=length,
            quantity=quantity,
            unit_weight=unit_weight,
        )
        self.entries.append(entry)
        self.item_count += quantity
        self.weight += quantity * unit_weight
        if length > self.longest:
            self.longest = length
        return entry

    def finalize(self, pack_number: int) -> Pack:
        if self._finalized:
            raise RuntimeError("Pack has already been finalized")
        self._finalized = True
        return Pack(
            pack_number=pack_number,
            entries=tuple(self.entries),
            total_weight=self.weight,
            total_length=self.longest,
        )

    def __repr__(self) -> str:
        return (
            f"PackAccumulator(entries={len(self.entries)}, items={self.item_count}, "
            f"weight={self.weight!r}, longest={self.longest})"
        )

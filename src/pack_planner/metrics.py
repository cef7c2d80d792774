from __future__ import annotations

from typing import Sequence

from pack_planner.models import Pack, PackLimits, PlanMetrics


def fill_rates(pack: Pack, limits: PackLimits) -> tuple[float, float]:
    """(weight fill, item fill) of one pack, clamped to [0, 1]."""
    weight_fill = 0.0 if limits.max_weight <= 0 else pack.total_weight / limits.max_weight
    item_fill = 0.0 if limits.max_items <= 0 else pack.item_count / limits.max_items
    return min(weight_fill, 1.0), min(item_fill, 1.0)


def compute_plan_metrics(packs: Sequence[Pack], limits: PackLimits) -> PlanMetrics:
    if not packs:
        return PlanMetrics()

    rates = [fill_rates(p, limits) for p in packs]
    return PlanMetrics(
        pack_count=len(packs),
        total_units=sum(p.item_count for p in packs),
        total_weight=sum(p.total_weight for p in packs),
        max_length=max(p.total_length for p in packs),
        mean_weight_fill=sum(w for w, _ in rates) / len(rates),
        mean_item_fill=sum(i for _, i in rates) / len(rates),
    )

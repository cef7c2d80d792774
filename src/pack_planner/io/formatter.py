"""Render finalized packs as text blocks or JSON."""

from __future__ import annotations

import json
import math
from decimal import Decimal
from typing import Any, Sequence

from pack_planner.models import Pack, PackEntry, PlanMetrics

DEFAULT_PRECISION = 2


def _fixed_point(text: str) -> str:
    """Trim trailing zeros but keep one decimal: 448.40 -> 448.4, 500.00 -> 500.0."""
    if "." not in text:
        return text + ".0"
    text = text.rstrip("0")
    return text + "0" if text.endswith(".") else text


def format_weight(value: float, precision: int = DEFAULT_PRECISION) -> str:
    """Round to `precision` decimals and print in fixed-point without padding zeros."""
    if not math.isfinite(value):
        return repr(float(value))
    return _fixed_point(f"{float(value):.{precision}f}")


def format_unit_weight(value: float) -> str:
    """Shortest round-trip digits of `value`, never in scientific notation (0.00001, not 1e-05)."""
    if not math.isfinite(value):
        return repr(value)
    return _fixed_point(format(Decimal(repr(float(value))), "f"))


def format_entry(entry: PackEntry) -> str:
    return f"{entry.item_id},{entry.length},{entry.quantity},{format_unit_weight(entry.unit_weight)}"


def format_pack(pack: Pack, precision: int = DEFAULT_PRECISION) -> str:
    """
    One block per pack:

        Pack Number: 1
        1001,6200,30,9.653
        2001,7200,10,11.21
        Pack Length: 7200, Pack Weight: 401.69
    """
    lines = [f"Pack Number: {pack.pack_number}"]
    lines.extend(format_entry(e) for e in pack.entries)
    lines.append(f"Pack Length: {pack.total_length}, Pack Weight: {format_weight(pack.total_weight, precision)}")
    return "\n".join(lines)


def format_packs(packs: Sequence[Pack], precision: int = DEFAULT_PRECISION) -> str:
    """All blocks separated by a blank line, with a trailing newline."""
    if not packs:
        return ""
    return "\n\n".join(format_pack(p, precision) for p in packs) + "\n"


def packs_to_dict(packs: Sequence[Pack], metrics: PlanMetrics | None = None) -> dict[str, Any]:
    data: dict[str, Any] = {
        "packs": [p.model_dump(mode="json") for p in packs],
    }
    if metrics is not None:
        data["metrics"] = metrics.model_dump(mode="json")
    return data


def packs_to_json(packs: Sequence[Pack], metrics: PlanMetrics | None = None, indent: int = 2) -> str:
    return json.dumps(packs_to_dict(packs, metrics), indent=indent, sort_keys=True) + "\n"

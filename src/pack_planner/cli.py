from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Sequence, TextIO

from pack_planner.config import ConfigError, Settings, load_settings
from pack_planner.errors import PackPlannerError
from pack_planner.io.formatter import format_packs, packs_to_json
from pack_planner.io.reader import read_plan_input
from pack_planner.metrics import compute_plan_metrics
from pack_planner.models import Pack, PlanInput, PlanMetrics
from pack_planner.packing.planner import plan

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pack-planner",
        description="Split weighted items into packs limited by item count and weight.",
    )
    parser.add_argument(
        "--input",
        help="Input file in the line protocol (default: stdin, read until a blank line)",
    )
    parser.add_argument("--output", help="Write the packs to this file instead of stdout")
    parser.add_argument(
        "--format",
        choices=["text", "json"],
        default="text",
        help="text = one block per pack, json = packs and metrics as JSON",
    )
    parser.add_argument(
        "--summary",
        action="store_true",
        help="Print pack count, units and fill rates to stderr after planning",
    )
    parser.add_argument(
        "--log-level",
        help="Logging level (overrides PACK_PLANNER_LOG_LEVEL)",
    )
    return parser


def load_input(path: str | None, stdin: TextIO) -> PlanInput:
    if path is None:
        return read_plan_input(stdin)
    with open(path, "r", encoding="utf-8") as f:
        return read_plan_input(f)


def run_plan(data: PlanInput, settings: Settings) -> tuple[tuple[Pack, ...], PlanMetrics]:
    packs = plan(
        data.items,
        data.sort_order,
        data.limits,
        weight_tolerance=settings.weight_tolerance,
    )
    return packs, compute_plan_metrics(packs, data.limits)


def render(packs: Sequence[Pack], metrics: PlanMetrics, fmt: str, settings: Settings) -> str:
    if fmt == "json":
        return packs_to_json(packs, metrics)
    return format_packs(packs, precision=settings.weight_precision)


def write_output(text: str, path: str | None, stdout: TextIO) -> None:
    """Write to `path` (creating parent folders) or to stdout."""
    if path is None:
        stdout.write(text)
        return
    output_path = Path(path).resolve()
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(text, encoding="utf-8")
    logger.info(f"packs written to {output_path}")


def main(
    argv: Sequence[str] | None = None,
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
    stderr: TextIO | None = None,
) -> int:
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    stderr = stderr or sys.stderr

    args = build_parser().parse_args(argv)

    try:
        settings = load_settings()
        if args.log_level:
            settings = settings.model_copy(update={"log_level": Settings(log_level=args.log_level).log_level})
    except (ConfigError, ValueError) as e:
        print(f"❌ {e}", file=stderr)
        return 2

    logging.basicConfig(
        level=settings.log_level,
        format="%(levelname)s %(name)s: %(message)s",
        stream=stderr,
    )

    try:
        data = load_input(args.input, stdin)
        packs, metrics = run_plan(data, settings)
    except PackPlannerError as e:
        logger.debug("planning failed", exc_info=True)
        print(f"❌ {e}", file=stderr)
        return 1
    except (OSError, UnicodeDecodeError) as e:
        print(f"❌ cannot read input: {e}", file=stderr)
        return 1

    if args.summary:
        print(
            f"Packs={metrics.pack_count}, Units={metrics.total_units}, "
            f"Weight={metrics.total_weight:.{settings.weight_precision}f}, "
            f"WeightFill={metrics.mean_weight_fill:.3f}, ItemFill={metrics.mean_item_fill:.3f}",
            file=stderr,
        )

    try:
        write_output(render(packs, metrics, args.format, settings), args.output, stdout)
    except OSError as e:
        print(f"❌ cannot write output: {e}", file=stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())

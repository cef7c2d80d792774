"""FastAPI endpoint for the pack planner."""

from __future__ import annotations

import json
import logging
from functools import lru_cache
from typing import Any, Union

from fastapi import Depends, FastAPI, HTTPException, Response

from pack_planner.config import Settings, load_settings
from pack_planner.errors import InputFormatError, PackPlannerError
from pack_planner.io.formatter import format_packs
from pack_planner.io.reader import parse_plan_text
from pack_planner.io.schemas import (
    ErrorSchema,
    PlanRequestSchema,
    PlanResponseSchema,
    PlanTextRequestSchema,
)
from pack_planner.metrics import compute_plan_metrics
from pack_planner.models import ItemRecord, PackLimits, SortOrder
from pack_planner.packing.planner import plan

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Pack Planner API",
    description="Split weighted items into packs limited by item count and weight",
)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return load_settings()


def error_response(e: PackPlannerError, status_code: int) -> Response:
    """Friendly JSON body for a planning error."""
    body = ErrorSchema(
        error=e.kind,
        summary=str(e),
        line_number=getattr(e, "line_number", None),
    )
    return Response(
        content=json.dumps(body.model_dump()),
        status_code=status_code,
        media_type="application/json",
    )


def _run(
    items: list[ItemRecord] | tuple[ItemRecord, ...],
    order: SortOrder,
    limits: PackLimits,
    settings: Settings,
    rendered: bool = False,
) -> PlanResponseSchema:
    packs = plan(items, order, limits, weight_tolerance=settings.weight_tolerance)
    metrics = compute_plan_metrics(packs, limits)
    logger.info(
        f"packs={metrics.pack_count}, units={metrics.total_units}, "
        f"weight_fill={metrics.mean_weight_fill:.3f}"
    )
    return PlanResponseSchema(
        packs=list(packs),
        metrics=metrics,
        rendered=format_packs(packs, precision=settings.weight_precision) if rendered else None,
    )


@app.post("/plan", response_model=PlanResponseSchema, responses={422: {"model": ErrorSchema}})
async def plan_packs(
    request: PlanRequestSchema,
    settings: Settings = Depends(get_settings),
) -> Union[PlanResponseSchema, Response]:
    """
    Plan packs from structured input.

    Input (request body):
        {
            "sort_order": "NATURAL",
            "max_items": 40,
            "max_weight": 500.0,
            "items": [
                { "id": 1001, "length": 6200, "quantity": 30, "unit_weight": 9.653 }
            ]
        }
    """
    try:
        return _run(request.items, request.sort_order, request.limits(), settings)
    except PackPlannerError as e:
        logger.info(f"/plan rejected: {e}")
        return error_response(e, 422)
    except Exception as e:
        logger.error(f"ERROR in /plan endpoint: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e))


@app.post(
    "/plan/text",
    response_model=PlanResponseSchema,
    responses={400: {"model": ErrorSchema}, 422: {"model": ErrorSchema}},
)
async def plan_text(
    request: PlanTextRequestSchema,
    settings: Settings = Depends(get_settings),
) -> Union[PlanResponseSchema, Response]:
    """Plan packs from the line protocol; the response includes the text rendering."""
    try:
        data = parse_plan_text(request.text)
    except InputFormatError as e:
        logger.info(f"/plan/text rejected input: {e}")
        return error_response(e, 400)

    try:
        return _run(data.items, data.sort_order, data.limits, settings, rendered=True)
    except PackPlannerError as e:
        logger.info(f"/plan/text rejected: {e}")
        return error_response(e, 422)
    except Exception as e:
        logger.error(f"ERROR in /plan/text endpoint: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e))


@app.get("/health")
async def health(settings: Settings = Depends(get_settings)) -> dict[str, Any]:
    """Health check endpoint."""
    return {
        "ok": True,
        "weight_precision": settings.weight_precision,
        "weight_tolerance": settings.weight_tolerance,
    }

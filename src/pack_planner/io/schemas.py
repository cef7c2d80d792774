"""Data schemas for the HTTP API."""

from typing import List, Optional
from pydantic import BaseModel, Field

from pack_planner.models import ItemRecord, Pack, PackLimits, PlanMetrics, SortOrder

class PlanRequestSchema(BaseModel):
    """Schema for a structured planning request."""
    sort_order: SortOrder = Field(default=SortOrder.NATURAL, description="Order in which records are packed")
    max_items: int = Field(description="Maximum number of items per pack")
    max_weight: float = Field(description="Maximum weight per pack")
    items: List[ItemRecord] = Field(default_factory=list, description="Item records to pack")

    def limits(self) -> PackLimits:
        return PackLimits(max_items=self.max_items, max_weight=self.max_weight)

class PlanTextRequestSchema(BaseModel):
    """Schema for a planning request in the line protocol."""
    text: str = Field(min_length=1, description="Header line followed by item lines")

class PlanResponseSchema(BaseModel):
    """Schema for a planning result."""
    packs: List[Pack] = Field(description="Packs in creation order")
    metrics: PlanMetrics
    rendered: Optional[str] = Field(default=None, description="Text rendering of the packs")

class ErrorSchema(BaseModel):
    """Schema for a planning error."""
    error: str = Field(description="Error kind, e.g. UNPACKABLE_ITEM")
    summary: str = Field(description="Human-readable message")
    line_number: Optional[int] = None

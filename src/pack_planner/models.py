from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, computed_field


class SortOrder(str, Enum):
    """Order in which item records are offered to the packer."""

    NATURAL = "NATURAL"
    SHORT_TO_LONG = "SHORT_TO_LONG"
    LONG_TO_SHORT = "LONG_TO_SHORT"

    def __str__(self) -> str:
        return self.value


class ItemRecord(BaseModel):
    """A batch of `quantity` identical items as read from the input."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(description="Item identifier")
    length: int = Field(ge=0, description="Length of a single item")
    quantity: int = Field(ge=0, description="Number of identical items in the batch")
    unit_weight: float = Field(ge=0, description="Weight of a single item")


class PackLimits(BaseModel):
    """Per-pack limits, constant for a whole planning run.

    Positivity is checked by the planner so that it can report InvalidLimits.
    """

    model_config = ConfigDict(frozen=True)

    max_items: int = Field(description="Maximum number of items in a pack")
    max_weight: float = Field(description="Maximum total weight of a pack")


class PackEntry(BaseModel):
    """Slice of an item record's quantity placed into one pack."""

    model_config = ConfigDict(frozen=True)

    item_id: int
    length: int = Field(ge=0)
    quantity: int = Field(gt=0, description="Quantity placed in this pack")
    unit_weight: float = Field(ge=0)

    @property
    def weight(self) -> float:
        return self.quantity * self.unit_weight


class Pack(BaseModel):
    """Finalized pack."""

    model_config = ConfigDict(frozen=True)

    pack_number: int = Field(ge=1, description="1-based sequence number")
    entries: tuple[PackEntry, ...] = Field(default_factory=tuple)
    total_weight: float = Field(ge=0, description="Sum of entry weights")
    # A pack is as long as its longest item
    total_length: int = Field(ge=0, description="Longest entry length")

    @computed_field  # type: ignore[prop-decorator]
    @property
    def item_count(self) -> int:
        return sum(e.quantity for e in self.entries)


class PlanInput(BaseModel):
    """Everything the planner needs, as produced by the input reader."""

    model_config = ConfigDict(frozen=True)

    sort_order: SortOrder
    limits: PackLimits
    items: tuple[ItemRecord, ...] = Field(default_factory=tuple)


class PlanMetrics(BaseModel):
    """Summary figures for a finished plan."""

    pack_count: int = 0
    total_units: int = 0
    total_weight: float = 0.0
    max_length: int = 0
    mean_weight_fill: float = Field(default=0.0, ge=0, le=1)
    mean_item_fill: float = Field(default=0.0, ge=0, le=1)

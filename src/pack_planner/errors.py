"""Exceptions raised while reading input and planning packs."""

from __future__ import annotations


class PackPlannerError(ValueError):
    """Base class for every error the planner reports to its callers."""

    #: Short machine-readable label used by the API error bodies.
    kind = "PACK_PLANNER_ERROR"


class InvalidLimits(PackPlannerError):
    """Raised when the pack limits cannot hold anything."""

    kind = "INVALID_LIMITS"

    def __init__(self, max_items: int, max_weight: float) -> None:
        self.max_items = max_items
        self.max_weight = max_weight
        super().__init__(
            f"Invalid pack limits: max_items={max_items!r}, max_weight={max_weight!r}. "
            "Both must be greater than zero."
        )


class UnpackableItem(PackPlannerError):
    """Raised when a single unit of an item does not fit into an empty pack."""

    kind = "UNPACKABLE_ITEM"

    def __init__(self, item_id: int, unit_weight: float, max_weight: float) -> None:
        self.item_id = item_id
        self.unit_weight = unit_weight
        self.max_weight = max_weight
        super().__init__(
            f"Item {item_id} cannot be packed: a single unit weighs {unit_weight!r}, "
            f"which exceeds the pack limit of {max_weight!r}."
        )


class InputFormatError(PackPlannerError):
    """Raised by the input reader for a line it cannot accept.

    Attributes:
        line: The offending input line, as read.
        line_number: 1-based position of the line in the input.
    """

    kind = "INVALID_INPUT"

    def __init__(self, message: str, line: str = "", line_number: int | None = None) -> None:
        self.line = line
        self.line_number = line_number
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)


class MissingHeader(InputFormatError):
    """The input does not start with a pack information header."""


class DuplicateHeader(InputFormatError):
    """A pack information header appears after the first line."""


class UnrecognizedLine(InputFormatError):
    """A line starts with neither a number nor a sort order keyword."""


class InvalidHeader(InputFormatError):
    """The header has the wrong shape or an unparsable value."""

    def __init__(self, message: str, line: str = "", line_number: int | None = None, field: str | None = None) -> None:
        self.field = field
        super().__init__(message, line=line, line_number=line_number)


class InvalidItemRecord(InputFormatError):
    """An item line has the wrong shape or an unparsable value."""

    def __init__(self, message: str, line: str = "", line_number: int | None = None, field: str | None = None) -> None:
        self.field = field
        super().__init__(message, line=line, line_number=line_number)

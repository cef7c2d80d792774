"""Line protocol reader.

The input is a header line followed by item lines, ended by a blank line
or the end of the stream:

    NATURAL,40,500.0
    1001,6200,30,9.653
    2001,7200,50,11.21

Header fields: sort order, max items per pack, max weight per pack.
Item fields: id, length, quantity, unit weight.
"""

from __future__ import annotations

from typing import Iterable

from pydantic import ValidationError

from pack_planner.errors import (
    DuplicateHeader,
    InvalidHeader,
    InvalidItemRecord,
    MissingHeader,
    UnrecognizedLine,
)
from pack_planner.models import ItemRecord, PackLimits, PlanInput, SortOrder


HEADER_FIELDS = ("sort_order", "max_items", "max_weight")
ITEM_FIELDS = ("id", "length", "quantity", "unit_weight")

SORT_KEYWORDS = tuple(o.value for o in SortOrder)


def _split(line: str) -> list[str]:
    return [part.strip() for part in line.split(",")]


def _first_error_field(e: ValidationError) -> str | None:
    errors = e.errors()
    if errors and errors[0].get("loc"):
        return str(errors[0]["loc"][0])
    return None


def starts_with_keyword(line: str) -> bool:
    return line.startswith(SORT_KEYWORDS)


def parse_header(line: str, line_number: int | None = 1) -> tuple[SortOrder, PackLimits]:
    """Parse `SORT_ORDER,max_items,max_weight`."""
    text = line.strip()
    parts = _split(text)
    if len(parts) != len(HEADER_FIELDS):
        raise InvalidHeader(
            f"expected {len(HEADER_FIELDS)} values in pack information {text!r}, got {len(parts)}",
            line=line,
            line_number=line_number,
        )

    token, max_items, max_weight = parts
    try:
        order = SortOrder(token)
    except ValueError:
        raise InvalidHeader(
            f"invalid sort order {token!r}; expected one of {list(SORT_KEYWORDS)}",
            line=line,
            line_number=line_number,
            field="sort_order",
        ) from None

    try:
        items = int(max_items)
    except ValueError as e:
        raise InvalidHeader(
            f"invalid number of items per pack {max_items!r}; expected an integer",
            line=line,
            line_number=line_number,
            field="max_items",
        ) from e

    try:
        weight = float(max_weight)
    except ValueError as e:
        raise InvalidHeader(
            f"invalid pack weight {max_weight!r}; expected a number",
            line=line,
            line_number=line_number,
            field="max_weight",
        ) from e

    return order, PackLimits(max_items=items, max_weight=weight)


def parse_item(line: str, line_number: int | None = None) -> ItemRecord:
    """Parse `id,length,quantity,unit_weight`."""
    text = line.strip()
    parts = _split(text)
    if len(parts) != len(ITEM_FIELDS):
        raise InvalidItemRecord(
            f"expected {len(ITEM_FIELDS)} values in item {text!r}, got {len(parts)}",
            line=line,
            line_number=line_number,
        )

    converters = (int, int, int, float)
    values = {}
    for name, convert, raw in zip(ITEM_FIELDS, converters, parts):
        try:
            values[name] = convert(raw)
        except ValueError as e:
            kind = "an integer" if convert is int else "a number"
            raise InvalidItemRecord(
                f"invalid {name.replace('_', ' ')} {raw!r}; expected {kind}",
                line=line,
                line_number=line_number,
                field=name,
            ) from e

    try:
        return ItemRecord(**values)
    except ValidationError as e:
        field = _first_error_field(e)
        raise InvalidItemRecord(
            f"invalid {field or 'value'} in item {text!r}: {e.errors()[0]['msg']}",
            line=line,
            line_number=line_number,
            field=field,
        ) from e


def read_plan_input(lines: Iterable[str]) -> PlanInput:
    """
    Read a header and item lines until the first blank line.

    Raises InputFormatError subclasses for anything it cannot accept; the
    offending line and its 1-based number travel with the exception.
    """
    header: tuple[SortOrder, PackLimits] | None = None
    items: list[ItemRecord] = []

    for line_number, raw in enumerate(lines, start=1):
        line = raw.rstrip("\r\n")
        text = line.strip()
        if not text:
            break

        is_keyword = starts_with_keyword(text)
        is_number = text[0].isdigit()

        if not is_keyword and not is_number:
            raise UnrecognizedLine(
                f"{text!r} should start with a number or one of {list(SORT_KEYWORDS)}",
                line=line,
                line_number=line_number,
            )

        if line_number == 1:
            if not is_keyword:
                raise MissingHeader(
                    f"the first line must hold the pack information, got {text!r}",
                    line=line,
                    line_number=line_number,
                )
            header = parse_header(line, line_number)
            continue

        if is_keyword:
            raise DuplicateHeader(
                f"pack information {text!r} repeated after the first line",
                line=line,
                line_number=line_number,
            )
        items.append(parse_item(line, line_number))

    if header is None:
        raise MissingHeader("input is empty; expected pack information on the first line")

    order, limits = header
    return PlanInput(sort_order=order, limits=limits, items=tuple(items))


def parse_plan_text(text: str) -> PlanInput:
    return read_plan_input(text.splitlines())

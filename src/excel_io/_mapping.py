"""Row mapping between records and sheet cells.

Encoding walks a record's descriptors in order and emits one cell per scalar
field and one cell per entry of each flattened mapping field. Decoding matches
raw cells to fields through the header row.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping, Sequence
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import TypeVar

from excel_io._decoders.fields import convert_field_value
from excel_io._exceptions import FieldConversionError
from excel_io.logging import get_logger
from excel_io.schema import FieldDescriptor, cell_type_for, describe
from excel_io.types.cells import CellType, EncodedCell, OutputValue, RawCell, ResolvedValue

_R = TypeVar("_R")

_log = get_logger(__name__)

ResolveFn = Callable[[RawCell], ResolvedValue]


def _encode_value(value: object, cell_type: CellType) -> OutputValue:
    """Turn a field value into the value stored in its cell.

    Numbers stay numeric for number cells. Text cells hold booleans as
    "True"/"False", enums by member name and dates as ISO-8601.
    """
    if value is None:
        return None
    if cell_type == "number" and isinstance(value, (int, float, Decimal)):
        if not isinstance(value, bool):
            return value
    if isinstance(value, bool):
        return "True" if value else "False"
    if isinstance(value, Enum):
        return value.name
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return str(value)


def _mapping_entries(record: object, descriptor: FieldDescriptor) -> Iterator[tuple[str, object]]:
    raw: object = getattr(record, descriptor.name)
    if raw is None:
        return
    if not isinstance(raw, Mapping):
        raise FieldConversionError(
            descriptor.name, f"Expected a mapping, got {type(raw).__name__}"
        )
    for key, entry in raw.items():
        yield str(key), entry


def _traverse(
    record: object, descriptors: Sequence[FieldDescriptor]
) -> Iterator[tuple[str, object, CellType]]:
    """Yield (header, value, cell type) for every output cell of a record."""
    for descriptor in descriptors:
        if descriptor.flattenable:
            for key, entry in _mapping_entries(record, descriptor):
                yield key, entry, "string"
            continue
        yield descriptor.logical_name, getattr(record, descriptor.name), cell_type_for(descriptor)


def encode_row(record: object, descriptors: Sequence[FieldDescriptor]) -> list[EncodedCell]:
    """Encode a record as one row of cells.

    Args:
        record: Record instance.
        descriptors: Descriptors of the record's type.

    Returns:
        Cells in column order.
    """
    return [
        EncodedCell(header=header, value=_encode_value(value, cell_type), cell_type=cell_type)
        for header, value, cell_type in _traverse(record, descriptors)
    ]


def encode_header(record: object, descriptors: Sequence[FieldDescriptor]) -> list[EncodedCell]:
    """Encode the header row for a record.

    Flattened mapping fields contribute their keys, so the header depends on
    the record it is built from.

    Args:
        record: Record whose row layout the header describes.
        descriptors: Descriptors of the record's type.

    Returns:
        Text cells in column order.
    """
    return [
        EncodedCell(header=header, value=header, cell_type="string")
        for header, _value, _cell_type in _traverse(record, descriptors)
    ]


def _index_by_name(descriptors: Sequence[FieldDescriptor]) -> dict[str, FieldDescriptor]:
    """Index scalar descriptors by case-folded logical name, first match wins."""
    by_name: dict[str, FieldDescriptor] = {}
    for descriptor in descriptors:
        if descriptor.flattenable:
            continue
        by_name.setdefault(descriptor.logical_name.casefold(), descriptor)
    return by_name


def _as_text(value: ResolvedValue) -> str:
    if value is None:
        return ""
    if isinstance(value, datetime):
        return value.isoformat()
    return str(value)


def decode_row(
    header_map: Mapping[str, str],
    cells: Sequence[RawCell],
    record_type: type[_R],
    resolve: ResolveFn,
    decimal_separator: str,
) -> _R:
    """Decode one row of raw cells into a record.

    Args:
        header_map: Column label to header text.
        cells: Raw cells of the row.
        record_type: Dataclass to construct.
        resolve: Resolves a raw cell to its runtime value.
        decimal_separator: Configured decimal separator.

    Returns:
        New record instance.

    Raises:
        FieldConversionError: If any matched cell cannot be converted, or the
            record cannot be constructed from the converted values.
    """
    descriptors = describe(record_type)
    by_name = _index_by_name(descriptors)
    mapping_field = next((d for d in descriptors if d.flattenable), None)

    init_values: dict[str, object] = {}
    late_values: dict[str, object] = {}
    collected: dict[str, str] = {}

    for cell in cells:
        header = header_map.get(cell["column"])
        if not header:
            continue
        descriptor = by_name.get(header.casefold())
        if descriptor is None:
            if mapping_field is not None:
                collected[header] = _as_text(resolve(cell))
            else:
                _log.debug(
                    "Skipping column %s: no matching field on %s",
                    header,
                    record_type.__qualname__,
                    extra={"header": [header], "row_index": cell["row"]},
                )
            continue

        value = resolve(cell)
        if value is None and not descriptor.optional:
            continue
        converted = convert_field_value(
            value,
            descriptor.value_type,
            descriptor.name,
            optional=descriptor.optional,
            decimal_separator=decimal_separator,
        )
        target = init_values if descriptor.init else late_values
        target[descriptor.name] = converted

    if mapping_field is not None and collected:
        target = init_values if mapping_field.init else late_values
        target[mapping_field.name] = collected

    factory: Callable[..., _R] = record_type
    try:
        record = factory(**init_values)
    except TypeError as e:
        raise FieldConversionError(record_type.__qualname__, str(e)) from e
    for name, value in late_values.items():
        setattr(record, name, value)
    return record


__all__ = [
    "ResolveFn",
    "decode_row",
    "encode_header",
    "encode_row",
]

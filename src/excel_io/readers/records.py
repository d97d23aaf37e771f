"""Sheet reader: turns the rows of one sheet into typed records.

The first physical row of a sheet is its header. Every following row becomes
one record of the requested type.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TypeVar

from excel_io._decoders.values import resolve_cell_value
from excel_io._exceptions import SheetNotFoundError
from excel_io._mapping import ResolveFn, decode_row
from excel_io.logging import get_logger
from excel_io.readers.base import DocumentReaderProtocol
from excel_io.types.cells import RawCell, ResolvedValue

_R = TypeVar("_R")

_log = get_logger(__name__)


def _header_map(cells: Sequence[RawCell], resolve: ResolveFn) -> dict[str, str]:
    """Map column label to header text, skipping blank header cells."""
    headers: dict[str, str] = {}
    for cell in cells:
        value = resolve(cell)
        if value is None:
            continue
        text = str(value)
        if text == "":
            continue
        headers[cell["column"]] = text
    return headers


def read_records(
    reader: DocumentReaderProtocol,
    sheet_name: str,
    record_type: type[_R],
    *,
    decimal_separator: str,
    require_sheet: bool,
    path: str,
) -> list[_R]:
    """Read every data row of a sheet as a record.

    Args:
        reader: Open package.
        sheet_name: Exact, case-sensitive sheet name.
        record_type: Dataclass each row is decoded into.
        decimal_separator: Configured decimal separator.
        require_sheet: Raise instead of returning [] for a missing sheet.
        path: Workbook location for log records and errors.

    Returns:
        Records in row order.

    Raises:
        SheetNotFoundError: If the sheet is missing and require_sheet is set.
        FieldConversionError: If a row cannot be decoded.
    """
    if sheet_name not in reader.list_sheets():
        if require_sheet:
            raise SheetNotFoundError(path, sheet_name)
        _log.info(
            "Sheet %s not found, returning no records",
            sheet_name,
            extra={"sheet": sheet_name, "path": path},
        )
        return []

    def resolve(cell: RawCell) -> ResolvedValue:
        return resolve_cell_value(cell, reader, decimal_separator)

    header: dict[str, str] | None = None
    records: list[_R] = []
    for _row_index, cells in reader.enumerate_rows(sheet_name):
        if header is None:
            header = _header_map(cells, resolve)
            continue
        records.append(
            decode_row(
                header,
                cells,
                record_type,
                resolve,
                decimal_separator,
            )
        )

    _log.info(
        "Read %d rows from sheet %s",
        len(records),
        sheet_name,
        extra={"sheet": sheet_name, "rows": len(records), "path": path},
    )
    return records


__all__ = [
    "read_records",
]

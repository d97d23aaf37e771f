"""Sheet writer: groups records by sheet and writes them as rows.

A sheet that does not exist yet (or exists with no rows) gets a header row
built from its first record, followed by the data rows. An existing sheet is
appended to after its last populated row, without a header.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence

from excel_io._exceptions import SchemaError
from excel_io._mapping import encode_header, encode_row
from excel_io.logging import get_logger
from excel_io.schema import describe
from excel_io.types.record import ExcelRow
from excel_io.writers.base import DocumentWriterProtocol

_log = get_logger(__name__)


def group_by_sheet(
    records: Iterable[object], sheet_name: str | None
) -> dict[str, list[object]]:
    """Group records by target sheet in first-appearance order.

    Args:
        records: Records to write.
        sheet_name: Explicit sheet for every record, or None to use each
            record's own sheet_name.

    Returns:
        Mapping of sheet name to its records.

    Raises:
        SchemaError: If no sheet name is given and a record has none.
    """
    if sheet_name is not None:
        return {sheet_name: list(records)}

    groups: dict[str, list[object]] = {}
    for record in records:
        if not isinstance(record, ExcelRow):
            raise SchemaError(
                type(record).__qualname__,
                "Records written without an explicit sheet name must expose sheet_name",
            )
        groups.setdefault(record.sheet_name, []).append(record)
    return groups


def _warn_on_header_mismatch(
    store: DocumentWriterProtocol, sheet_name: str, first: object
) -> None:
    stored = store.read_header(sheet_name)
    expected = [cell["value"] for cell in encode_header(first, describe(type(first)))]
    if stored != expected:
        _log.warning(
            "Header of sheet %s does not match appended rows; rows are appended by position",
            sheet_name,
            extra={"sheet": sheet_name, "header": stored},
        )


def _write_group(
    store: DocumentWriterProtocol,
    sheet_name: str,
    records: Sequence[object],
    warn_on_header_mismatch: bool,
) -> int:
    """Write one sheet's records and return the number of data rows written."""
    created = store.get_or_create_sheet(sheet_name)
    if not records:
        return 0

    first = records[0]
    last_row = store.last_row_index(sheet_name)
    if created or last_row == 0:
        store.append_row(sheet_name, 1, encode_header(first, describe(type(first))))
        next_row = 2
    else:
        if warn_on_header_mismatch:
            _warn_on_header_mismatch(store, sheet_name, first)
        next_row = last_row + 1

    for offset, record in enumerate(records):
        store.append_row(sheet_name, next_row + offset, encode_row(record, describe(type(record))))

    _log.info(
        "Wrote %d rows to sheet %s starting at row %d",
        len(records),
        sheet_name,
        next_row,
        extra={"sheet": sheet_name, "rows": len(records), "row_index": next_row},
    )
    return len(records)


def write_groups(
    store: DocumentWriterProtocol,
    groups: Mapping[str, Sequence[object]],
    *,
    warn_on_header_mismatch: bool,
) -> dict[str, int]:
    """Write each group of records to its sheet.

    Args:
        store: Open workbook store.
        groups: Sheet name to records, in the order sheets are written.
        warn_on_header_mismatch: Log a warning when an existing sheet's header
            differs from the header of the appended records.

    Returns:
        Sheet name to number of data rows written.

    Raises:
        SchemaError: If a record type cannot be described.
    """
    summary: dict[str, int] = {}
    for sheet_name, records in groups.items():
        summary[sheet_name] = _write_group(store, sheet_name, records, warn_on_header_mismatch)
    return summary


__all__ = [
    "group_by_sheet",
    "write_groups",
]

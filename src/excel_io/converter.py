"""Converter between typed records and spreadsheet sheets.

ExcelConverter is the public entry point. Each call opens the workbook,
performs one write, append or read, and releases the workbook on every exit
path.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import Protocol, TypeVar

from excel_io.config import ExcelIOSettings, load_excel_io_settings
from excel_io.readers.package import open_package
from excel_io.readers.records import read_records
from excel_io.schema import declared_sheet_name
from excel_io.types.cells import WorkbookTarget
from excel_io.types.record import ExcelRow
from excel_io.writers.records import group_by_sheet, write_groups
from excel_io.writers.workbook import create_workbook_store, open_or_create_workbook_store

_R = TypeVar("_R")


def _target_name(target: WorkbookTarget) -> str:
    if isinstance(target, (str, Path)):
        return str(target)
    return "<stream>"


class ExcelConverterProtocol(Protocol):
    """Protocol for record/sheet converters."""

    def write(
        self,
        records: Iterable[object],
        target: WorkbookTarget,
        sheet_name: str | None = None,
    ) -> dict[str, int]:
        """Write records to a new workbook."""
        ...

    def append(self, record: ExcelRow, target: WorkbookTarget) -> dict[str, int]:
        """Append one record to a workbook."""
        ...

    def read(
        self,
        record_type: type[_R],
        target: WorkbookTarget,
        sheet_name: str | None = None,
        *,
        require_sheet: bool = False,
    ) -> list[_R]:
        """Read records from a sheet."""
        ...

    def list_sheets(self, target: WorkbookTarget) -> list[str]:
        """List sheet names in workbook order."""
        ...


class ExcelConverter:
    """Writes records to sheets and reads sheets back into records.

    Records are dataclasses. Without an explicit sheet name each record is
    written to the sheet named by its ``sheet_name``.

    All methods raise exceptions on failure - no recovery or fallbacks.
    """

    def __init__(self, settings: ExcelIOSettings | None = None) -> None:
        """Initialize converter.

        Args:
            settings: Converter settings; loaded from the environment if None.
        """
        self._settings = settings if settings is not None else load_excel_io_settings()

    @property
    def settings(self) -> ExcelIOSettings:
        """Return the settings in effect."""
        return self._settings

    def write(
        self,
        records: Iterable[object],
        target: WorkbookTarget,
        sheet_name: str | None = None,
    ) -> dict[str, int]:
        """Write records to a new workbook, replacing anything at target.

        Args:
            records: Records to write.
            target: Path or seekable binary stream.
            sheet_name: Sheet for every record; None groups records by their
                own sheet_name in first-appearance order.

        Returns:
            Sheet name to number of data rows written.

        Raises:
            SchemaError: If a record cannot be described or has no sheet name.
            DocumentAccessError: If the workbook cannot be saved.
        """
        groups = group_by_sheet(records, sheet_name)
        with create_workbook_store(target) as store:
            return write_groups(
                store, groups, warn_on_header_mismatch=self._settings["warn_on_header_mismatch"]
            )

    def append(self, record: ExcelRow, target: WorkbookTarget) -> dict[str, int]:
        """Append one record to its sheet, creating the workbook if needed.

        Args:
            record: Record exposing sheet_name.
            target: Path or seekable binary stream.

        Returns:
            Sheet name to number of data rows written.

        Raises:
            SchemaError: If the record cannot be described.
            DocumentAccessError: If the workbook cannot be opened or saved.
        """
        return self.append_many([record], target)

    def append_many(
        self,
        records: Iterable[object],
        target: WorkbookTarget,
        sheet_name: str | None = None,
    ) -> dict[str, int]:
        """Append records to an existing workbook, creating it if needed.

        Args:
            records: Records to append.
            target: Path or seekable binary stream.
            sheet_name: Sheet for every record; None uses each record's own.

        Returns:
            Sheet name to number of data rows written.

        Raises:
            SchemaError: If a record cannot be described or has no sheet name.
            DocumentAccessError: If the workbook cannot be opened or saved.
        """
        groups = group_by_sheet(records, sheet_name)
        with open_or_create_workbook_store(target) as store:
            return write_groups(
                store, groups, warn_on_header_mismatch=self._settings["warn_on_header_mismatch"]
            )

    def read(
        self,
        record_type: type[_R],
        target: WorkbookTarget,
        sheet_name: str | None = None,
        *,
        require_sheet: bool = False,
    ) -> list[_R]:
        """Read the rows of a sheet as records.

        Args:
            record_type: Dataclass each row is decoded into.
            target: Path or seekable binary stream.
            sheet_name: Sheet to read; defaults to the type's declared sheet name.
            require_sheet: Raise SheetNotFoundError instead of returning [] when
                the sheet does not exist.

        Returns:
            Records in row order.

        Raises:
            DocumentAccessError: If the workbook cannot be opened.
            SheetNotFoundError: If require_sheet is set and the sheet is missing.
            FieldConversionError: If a row cannot be decoded.
            UnsupportedNumericFormatError: If a cell's number format has no decoder.
        """
        name = sheet_name if sheet_name is not None else declared_sheet_name(record_type)
        with open_package(target) as reader:
            return read_records(
                reader,
                name,
                record_type,
                decimal_separator=self._settings["decimal_separator"],
                require_sheet=require_sheet,
                path=_target_name(target),
            )

    def list_sheets(self, target: WorkbookTarget) -> list[str]:
        """List sheet names in workbook order.

        Raises:
            DocumentAccessError: If the workbook cannot be opened.
        """
        with open_package(target) as reader:
            return reader.list_sheets()


__all__ = [
    "ExcelConverter",
    "ExcelConverterProtocol",
]

"""Typed view of the parts of openpyxl that excel_io touches.

The write and append paths build workbooks with openpyxl; the read path only
borrows its serial-date conversion. openpyxl is imported lazily through
``__import__`` and every object crosses into excel_io through these Protocols.
"""

from __future__ import annotations

from datetime import datetime, time
from decimal import Decimal
from pathlib import Path
from typing import BinaryIO, Protocol

# Cell values excel_io writes or reads back through openpyxl
_OpenpyxlValue = str | int | float | bool | Decimal | datetime | None


class CellProtocol(Protocol):
    """A worksheet cell; data_type "s" forces text storage."""

    value: _OpenpyxlValue
    data_type: str


class WorksheetProtocol(Protocol):
    """A worksheet addressed by 1-based row and column."""

    @property
    def title(self) -> str: ...

    @title.setter
    def title(self, value: str) -> None: ...

    @property
    def max_row(self) -> int: ...

    @property
    def max_column(self) -> int: ...

    def cell(self, row: int, column: int, value: _OpenpyxlValue = None) -> CellProtocol: ...


class WorkbookProtocol(Protocol):
    """An in-memory workbook, saved once when a store closes."""

    @property
    def active(self) -> WorksheetProtocol: ...

    @property
    def sheetnames(self) -> list[str]: ...

    def __getitem__(self, name: str) -> WorksheetProtocol: ...

    def create_sheet(self, title: str) -> WorksheetProtocol: ...

    def save(self, filename: str | Path | BinaryIO) -> None: ...

    def close(self) -> None: ...


class _LoadWorkbookFn(Protocol):
    def __call__(self, filename: Path | BinaryIO) -> WorkbookProtocol: ...


class _WorkbookCtor(Protocol):
    def __call__(self) -> WorkbookProtocol: ...


class _FromExcelFn(Protocol):
    def __call__(self, value: float) -> datetime | time: ...


def _load_workbook(source: Path | BinaryIO) -> WorkbookProtocol:
    """Load an existing workbook for modification.

    Args:
        source: Workbook path, or a binary stream positioned at its start.
            Streams skip openpyxl's file-extension check.

    Returns:
        The loaded workbook.
    """
    openpyxl_mod = __import__("openpyxl")
    load: _LoadWorkbookFn = openpyxl_mod.load_workbook
    return load(source)


def _create_workbook() -> WorkbookProtocol:
    """Create an empty workbook holding openpyxl's default sheet."""
    openpyxl_mod = __import__("openpyxl")
    ctor: _WorkbookCtor = openpyxl_mod.Workbook
    return ctor()


def _from_excel(serial: float) -> datetime | time:
    """Convert a 1900-system serial day number.

    openpyxl shifts serials between 0 and 60 by one day to skip the
    nonexistent 1900-02-29, and returns a time for serials below 1.

    Args:
        serial: Serial day number.

    Returns:
        datetime, or time for fractional serials below 1.
    """
    dt_mod = __import__("openpyxl.utils.datetime", fromlist=["from_excel"])
    convert: _FromExcelFn = dt_mod.from_excel
    return convert(serial)


__all__ = [
    "CellProtocol",
    "WorkbookProtocol",
    "WorksheetProtocol",
    "_create_workbook",
    "_from_excel",
    "_load_workbook",
]

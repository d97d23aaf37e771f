"""Strictly typed conversion between records and spreadsheet sheets.

This library writes sequences of dataclass records to named sheets of a .xlsx
workbook (creating sheets or appending to existing ones) and reads named
sheets back into typed records:
- Writing and appending via openpyxl
- Reading via a raw package reader that decodes cells from their stored
  text, data-type tag and number format

All data structures use dataclasses, TypedDicts and Protocols for strict typing.
No Any, cast, or type: ignore used anywhere.
"""

from __future__ import annotations

# Errors
from excel_io._exceptions import (
    DateDecodeError,
    DocumentAccessError,
    ExcelIOError,
    FieldConversionError,
    MissingSharedStringTableError,
    SchemaError,
    SheetNotFoundError,
    UnsupportedNumericFormatError,
)

# Column codec
from excel_io.columns import cell_address, index_to_label, label_to_index, split_address

# Settings
from excel_io.config import ExcelIOSettings, default_settings, load_excel_io_settings

# Converter
from excel_io.converter import ExcelConverter, ExcelConverterProtocol

# Schema
from excel_io.schema import FieldDescriptor, column, declared_sheet_name, describe, excel_columns

# Types
from excel_io.types.cells import CellType, EncodedCell, RawCell, WorkbookTarget
from excel_io.types.record import ExcelRow

__all__ = [
    "CellType",
    "DateDecodeError",
    "DocumentAccessError",
    "EncodedCell",
    "ExcelConverter",
    "ExcelConverterProtocol",
    "ExcelIOError",
    "ExcelIOSettings",
    "ExcelRow",
    "FieldConversionError",
    "FieldDescriptor",
    "MissingSharedStringTableError",
    "RawCell",
    "SchemaError",
    "SheetNotFoundError",
    "UnsupportedNumericFormatError",
    "WorkbookTarget",
    "cell_address",
    "column",
    "declared_sheet_name",
    "default_settings",
    "describe",
    "excel_columns",
    "index_to_label",
    "label_to_index",
    "load_excel_io_settings",
    "split_address",
]

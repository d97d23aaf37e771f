"""Cell-level type definitions shared by the readers, writers and row mapper.

All cell structures are TypedDicts with strict typing.
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from pathlib import Path
from typing import BinaryIO, Literal, TypedDict

# Cell type emitted on write: numeric kinds become "number", everything else "string"
CellType = Literal["number", "string"]

# Value produced by the value resolver from a raw stored cell
ResolvedValue = str | bool | float | Decimal | datetime | None

# Value handed to the workbook store for a single output cell
OutputValue = str | int | float | Decimal | None

# Value a record field may hold after conversion
FieldValue = str | int | float | bool | Decimal | datetime | date | Enum | None

# Location of a workbook: a filesystem path or a seekable binary stream
WorkbookTarget = str | Path | BinaryIO


class RawCell(TypedDict):
    """A cell exactly as persisted in a worksheet part.

    Attributes:
        row: 1-based row index.
        column: Column label (e.g. "A", "AB").
        text: Stored text of the value node, None when the cell has no value node.
        data_type: The cell's ``t`` attribute, None when absent.
        style_index: The cell's ``s`` attribute, None when absent.
    """

    row: int
    column: str
    text: str | None
    data_type: str | None
    style_index: int | None


class EncodedCell(TypedDict):
    """One output cell produced by the row mapper.

    Attributes:
        header: Logical column name the cell belongs to.
        value: Value to store.
        cell_type: Spreadsheet cell type to emit.
    """

    header: str
    value: OutputValue
    cell_type: CellType


__all__ = [
    "CellType",
    "EncodedCell",
    "FieldValue",
    "OutputValue",
    "RawCell",
    "ResolvedValue",
    "WorkbookTarget",
]

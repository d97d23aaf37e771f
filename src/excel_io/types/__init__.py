"""Type definitions for excel_io data structures.

All types are TypedDicts, Literals or Protocols with strict typing.
"""

from __future__ import annotations

from excel_io.types.cells import (
    CellType,
    EncodedCell,
    FieldValue,
    OutputValue,
    RawCell,
    ResolvedValue,
    WorkbookTarget,
)
from excel_io.types.record import EXCEL_ROW_MEMBERS, ExcelRow

__all__ = [
    "EXCEL_ROW_MEMBERS",
    "CellType",
    "EncodedCell",
    "ExcelRow",
    "FieldValue",
    "OutputValue",
    "RawCell",
    "ResolvedValue",
    "WorkbookTarget",
]

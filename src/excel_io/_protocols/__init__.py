"""Protocol definitions for external library abstraction.

Internal protocols used to provide type-safe interfaces to openpyxl
without importing it directly at module load time.
"""

from __future__ import annotations

from excel_io._protocols.openpyxl import (
    CellProtocol,
    WorkbookProtocol,
    WorksheetProtocol,
    _create_workbook,
    _from_excel,
    _load_workbook,
)

__all__ = [
    "CellProtocol",
    "WorkbookProtocol",
    "WorksheetProtocol",
    "_create_workbook",
    "_from_excel",
    "_load_workbook",
]

"""Writers for spreadsheet packages.

Provides the writer protocol, the openpyxl workbook store and the sheet writer.
"""

from __future__ import annotations

from excel_io.writers.base import DocumentWriterProtocol
from excel_io.writers.records import group_by_sheet, write_groups
from excel_io.writers.workbook import (
    WorkbookStore,
    create_workbook_store,
    open_or_create_workbook_store,
)

__all__ = [
    "DocumentWriterProtocol",
    "WorkbookStore",
    "create_workbook_store",
    "group_by_sheet",
    "open_or_create_workbook_store",
    "write_groups",
]

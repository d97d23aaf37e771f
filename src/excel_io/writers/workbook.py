"""Workbook store for writing sheets via openpyxl.

Implements DocumentWriterProtocol over an openpyxl workbook that is saved back
to its target when the store is closed.
Uses Protocol-based dynamic imports for external libraries.
"""

from __future__ import annotations

import io
import zipfile
from collections.abc import Sequence
from decimal import Decimal
from pathlib import Path
from types import TracebackType

from excel_io._exceptions import DocumentAccessError
from excel_io._protocols.openpyxl import (
    WorkbookProtocol,
    WorksheetProtocol,
    _create_workbook,
    _load_workbook,
)
from excel_io.logging import get_logger
from excel_io.types.cells import EncodedCell, WorkbookTarget

_log = get_logger(__name__)


def _number_text(value: int | float | Decimal) -> str:
    """Shortest text that parses back to exactly value."""
    if isinstance(value, float):
        return repr(value)
    return str(value)


def _target_name(target: WorkbookTarget) -> str:
    if isinstance(target, (str, Path)):
        return str(target)
    return "<stream>"


class WorkbookStore:
    """Write access to one workbook for the duration of a converter call.

    A freshly created workbook carries openpyxl's default sheet; the first
    sheet created through the store takes it over by renaming it.

    All methods raise exceptions on failure - no recovery or fallbacks.
    """

    def __init__(
        self,
        workbook: WorkbookProtocol,
        target: WorkbookTarget,
        *,
        fresh: bool,
    ) -> None:
        """Initialize store.

        Args:
            workbook: Open workbook.
            target: Location the workbook is saved to on close.
            fresh: True if the workbook was just created and still holds only
                the default sheet.
        """
        self._workbook = workbook
        self._target = target
        self._name = _target_name(target)
        self._placeholder: WorksheetProtocol | None = workbook.active if fresh else None
        self._closed = False

    def __enter__(self) -> WorkbookStore:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()

    def _sheet(self, sheet_name: str) -> WorksheetProtocol:
        if sheet_name not in self._workbook.sheetnames:
            raise DocumentAccessError(self._name, f"Sheet '{sheet_name}' does not exist")
        return self._workbook[sheet_name]

    def has_sheet(self, sheet_name: str) -> bool:
        """Return True if a sheet with this exact name exists."""
        if self._placeholder is not None and self._placeholder.title == sheet_name:
            return False
        return sheet_name in self._workbook.sheetnames

    def get_or_create_sheet(self, sheet_name: str) -> bool:
        """Ensure a sheet exists.

        Args:
            sheet_name: Exact sheet name.

        Returns:
            True if the sheet was created by this call.
        """
        if self.has_sheet(sheet_name):
            return False
        if self._placeholder is not None:
            self._placeholder.title = sheet_name
            self._placeholder = None
        else:
            self._workbook.create_sheet(title=sheet_name)
        _log.debug("Created sheet %s", sheet_name, extra={"sheet": sheet_name, "path": self._name})
        return True

    def last_row_index(self, sheet_name: str) -> int:
        """Return the index of the last populated row, 0 for an empty sheet."""
        ws = self._sheet(sheet_name)
        if ws.max_row == 1 and ws.max_column == 1 and ws.cell(row=1, column=1).value is None:
            return 0
        return ws.max_row

    def read_header(self, sheet_name: str) -> list[str]:
        """Return the text of row 1, empty for an empty sheet."""
        if self.last_row_index(sheet_name) == 0:
            return []
        ws = self._sheet(sheet_name)
        header: list[str] = []
        for col_idx in range(1, ws.max_column + 1):
            value = ws.cell(row=1, column=col_idx).value
            header.append(str(value) if value is not None else "")
        return header

    def append_row(
        self,
        sheet_name: str,
        row_index: int,
        cells: Sequence[EncodedCell],
    ) -> None:
        """Write cells left to right starting at column A of row_index.

        Text cells are stored as strings even when they look like formulas.
        Numbers are stored as their exact text instead of openpyxl's
        16-significant-digit rendering.

        Args:
            sheet_name: Exact sheet name.
            row_index: 1-based row index.
            cells: Cells in column order.
        """
        ws = self._sheet(sheet_name)
        for col_idx, encoded in enumerate(cells, start=1):
            cell = ws.cell(row=row_index, column=col_idx)
            value = encoded["value"]
            if encoded["cell_type"] == "string":
                cell.value = str(value) if value is not None else ""
                cell.data_type = "s"
            elif isinstance(value, (int, float, Decimal)) and not isinstance(value, bool):
                cell.value = _number_text(value)
                cell.data_type = "n"
            else:
                cell.value = value

    def close(self) -> None:
        """Save the workbook to its target and release it.

        Raises:
            DocumentAccessError: If the workbook cannot be saved.
        """
        if self._closed:
            return
        self._closed = True
        try:
            if isinstance(self._target, (str, Path)):
                out_path = Path(self._target)
                out_path.parent.mkdir(parents=True, exist_ok=True)
                self._workbook.save(out_path)
            else:
                self._target.seek(0)
                self._target.truncate()
                self._workbook.save(self._target)
        except OSError as e:
            raise DocumentAccessError(self._name, f"Cannot save workbook: {e}") from e
        finally:
            self._workbook.close()
        _log.debug("Saved workbook %s", self._name, extra={"path": self._name})


def _existing_bytes(target: WorkbookTarget) -> bytes:
    """Return the current content of a target, empty when it does not exist."""
    if isinstance(target, (str, Path)):
        path = Path(target)
        if not path.exists():
            return b""
        try:
            return path.read_bytes()
        except OSError as e:
            raise DocumentAccessError(str(target), f"Cannot read workbook: {e}") from e
    target.seek(0)
    return target.read()


def create_workbook_store(target: WorkbookTarget) -> WorkbookStore:
    """Open a store over a new, empty workbook that replaces target on close.

    Args:
        target: Path or seekable binary stream.

    Returns:
        WorkbookStore to use as a context manager.
    """
    return WorkbookStore(_create_workbook(), target, fresh=True)


def open_or_create_workbook_store(target: WorkbookTarget) -> WorkbookStore:
    """Open a store over the workbook at target, or a new one if there is none.

    A missing file, an empty file and an empty stream all start a new workbook.

    Args:
        target: Path or seekable binary stream.

    Returns:
        WorkbookStore to use as a context manager.

    Raises:
        DocumentAccessError: If target holds something that is not a workbook.
    """
    content = _existing_bytes(target)
    if not content:
        return create_workbook_store(target)
    try:
        workbook = _load_workbook(io.BytesIO(content))
    except (zipfile.BadZipFile, KeyError) as e:
        raise DocumentAccessError(_target_name(target), "Not a spreadsheet package") from e
    return WorkbookStore(workbook, target, fresh=False)


__all__ = [
    "WorkbookStore",
    "create_workbook_store",
    "open_or_create_workbook_store",
]

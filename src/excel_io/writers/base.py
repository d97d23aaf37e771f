"""Protocol definitions for writer interfaces.

Defines the typed contract the sheet writer consumes from a spreadsheet package.
No recovery, no best-effort - failures propagate as exceptions.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from excel_io.types.cells import EncodedCell


class DocumentWriterProtocol(Protocol):
    """Protocol for write access to a spreadsheet package.

    Implementations own the package for the duration of one converter call
    and persist it when closed.
    """

    def has_sheet(self, sheet_name: str) -> bool:
        """Return True if a sheet with this exact name exists."""
        ...

    def get_or_create_sheet(self, sheet_name: str) -> bool:
        """Ensure a sheet exists.

        Args:
            sheet_name: Exact sheet name.

        Returns:
            True if the sheet was created by this call.
        """
        ...

    def last_row_index(self, sheet_name: str) -> int:
        """Return the index of the last populated row, 0 for an empty sheet."""
        ...

    def read_header(self, sheet_name: str) -> list[str]:
        """Return the text of row 1, empty for an empty sheet."""
        ...

    def append_row(
        self,
        sheet_name: str,
        row_index: int,
        cells: Sequence[EncodedCell],
    ) -> None:
        """Write cells left to right starting at column A of row_index.

        Args:
            sheet_name: Exact sheet name.
            row_index: 1-based row index.
            cells: Cells in column order.
        """
        ...

    def close(self) -> None:
        """Persist and release the package."""
        ...


__all__ = [
    "DocumentWriterProtocol",
]

"""Protocol definitions for reader interfaces.

Defines the typed contract the sheet reader consumes from a spreadsheet package.
No recovery, no best-effort - failures propagate as exceptions.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Protocol

from excel_io.types.cells import RawCell


class DocumentReaderProtocol(Protocol):
    """Protocol for read access to a spreadsheet package.

    Implementations expose cells exactly as stored so that value decoding
    stays with the caller. All methods raise exceptions on failure.
    """

    def list_sheets(self) -> list[str]:
        """Return sheet names in workbook order."""
        ...

    def enumerate_rows(self, sheet_name: str) -> Iterator[tuple[int, list[RawCell]]]:
        """Yield (row index, cells) for every physical row of a sheet.

        Args:
            sheet_name: Exact sheet name.

        Raises:
            SheetNotFoundError: If the sheet does not exist.
            DocumentAccessError: If the worksheet part cannot be read.
        """
        ...

    def resolve_shared_string(self, index: int) -> str:
        """Look up an entry of the shared-string table.

        Raises:
            MissingSharedStringTableError: If the package has no string table.
            DocumentAccessError: If index is out of range.
        """
        ...

    def resolve_number_format(self, style_index: int) -> int | None:
        """Return the numeric format id of a cell style, None without a style table.

        Raises:
            DocumentAccessError: If style_index is out of range.
        """
        ...

    def close(self) -> None:
        """Release the package."""
        ...


__all__ = [
    "DocumentReaderProtocol",
]

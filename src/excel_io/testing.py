"""Test hooks and fakes for excel_io library.

This module provides hooks for testing without mocking or monkeypatching.
Production code calls hooks directly; tests set hooks to fakes.

Usage:
    from excel_io.testing import hooks, make_fake_env, reset_hooks

    # In tests:
    def test_something() -> None:
        env = make_fake_env()
        env.set("EXCEL_IO_DECIMAL_SEPARATOR", ",")
        # ... test code ...

    # Use reset_hooks() in conftest.py fixtures to restore defaults.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping, Sequence

from excel_io._exceptions import (
    DocumentAccessError,
    MissingSharedStringTableError,
    SheetNotFoundError,
)
from excel_io.types.cells import RawCell

# ---------------------------------------------------------------------------
# Type aliases for hooks
# ---------------------------------------------------------------------------

GetEnvFn = Callable[[str], str | None]
LocaleDecimalPointFn = Callable[[], str]


# ---------------------------------------------------------------------------
# Hooks container
# ---------------------------------------------------------------------------


class _HooksContainer:
    """Container for all hookable functions.

    Hooks are set to production implementations at module load time.
    Tests override hooks to use fakes.
    """

    get_env: GetEnvFn
    locale_decimal_point: LocaleDecimalPointFn


hooks = _HooksContainer()


# ---------------------------------------------------------------------------
# Production implementations
# ---------------------------------------------------------------------------


def _prod_get_env(key: str) -> str | None:
    """Production implementation: read from os.environ."""
    import os

    return os.getenv(key)


def _prod_locale_decimal_point() -> str:
    """Production implementation: decimal point of the running locale."""
    import locale

    point: str = locale.localeconv()["decimal_point"]
    return point


def reset_hooks() -> None:
    """Restore every hook to its production implementation."""
    hooks.get_env = _prod_get_env
    hooks.locale_decimal_point = _prod_locale_decimal_point


reset_hooks()


# ---------------------------------------------------------------------------
# Fakes
# ---------------------------------------------------------------------------


class FakeEnv:
    """In-memory environment installed into hooks.get_env."""

    def __init__(self) -> None:
        self._values: dict[str, str] = {}

    def set(self, key: str, value: str) -> None:
        """Set an environment value."""
        self._values[key] = value

    def unset(self, key: str) -> None:
        """Remove an environment value if present."""
        self._values.pop(key, None)

    def get(self, key: str) -> str | None:
        """Read an environment value."""
        return self._values.get(key)


def make_fake_env() -> FakeEnv:
    """Create an empty fake environment and install it as hooks.get_env."""
    env = FakeEnv()
    hooks.get_env = env.get
    return env


class FakeDocumentReader:
    """In-memory implementation of DocumentReaderProtocol.

    Sheets are given as lists of raw cells; rows are grouped by each cell's
    row index in ascending order.
    """

    def __init__(
        self,
        sheets: Mapping[str, Sequence[RawCell]],
        shared_strings: Sequence[str] | None = None,
        number_formats: Sequence[int] | None = None,
    ) -> None:
        self._sheets = {name: list(cells) for name, cells in sheets.items()}
        self._shared_strings = list(shared_strings) if shared_strings is not None else None
        self._number_formats = list(number_formats) if number_formats is not None else None
        self.closed = False

    def list_sheets(self) -> list[str]:
        return list(self._sheets)

    def enumerate_rows(self, sheet_name: str) -> Iterator[tuple[int, list[RawCell]]]:
        if sheet_name not in self._sheets:
            raise SheetNotFoundError("<memory>", sheet_name)
        rows: dict[int, list[RawCell]] = {}
        for cell in self._sheets[sheet_name]:
            rows.setdefault(cell["row"], []).append(cell)
        for row_index in sorted(rows):
            yield row_index, rows[row_index]

    def resolve_shared_string(self, index: int) -> str:
        if self._shared_strings is None:
            raise MissingSharedStringTableError(index)
        if index < 0 or index >= len(self._shared_strings):
            raise DocumentAccessError("<memory>", f"Shared string {index} out of range")
        return self._shared_strings[index]

    def resolve_number_format(self, style_index: int) -> int | None:
        if self._number_formats is None:
            return None
        if style_index < 0 or style_index >= len(self._number_formats):
            raise DocumentAccessError("<memory>", f"Style {style_index} out of range")
        return self._number_formats[style_index]

    def close(self) -> None:
        self.closed = True


def make_raw_cell(
    address: str,
    text: str | None,
    *,
    data_type: str | None = None,
    style_index: int | None = None,
) -> RawCell:
    """Build a RawCell from an A1 address.

    Args:
        address: Cell address such as "B3".
        text: Stored text, None for a cell without a value node.
        data_type: Optional ``t`` attribute.
        style_index: Optional ``s`` attribute.

    Returns:
        RawCell TypedDict.
    """
    from excel_io.columns import split_address

    label, row = split_address(address)
    return RawCell(
        row=row if row is not None else 1,
        column=label,
        text=text,
        data_type=data_type,
        style_index=style_index,
    )


__all__ = [
    "FakeDocumentReader",
    "FakeEnv",
    "GetEnvFn",
    "LocaleDecimalPointFn",
    "hooks",
    "make_fake_env",
    "make_raw_cell",
    "reset_hooks",
]

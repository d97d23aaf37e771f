"""Record capability shared by every type written to or read from a sheet."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class ExcelRow(Protocol):
    """A record that knows which sheet it belongs to.

    Implementations expose ``sheet_name`` as a class constant, a dataclass field
    with a default, or a property. Members of this protocol are never treated as
    data columns.
    """

    @property
    def sheet_name(self) -> str:
        """Return the name of the sheet this record is written to."""
        ...


def _protocol_members(protocol: type) -> frozenset[str]:
    """Collect the public member names a protocol class declares."""
    return frozenset(name for name in vars(protocol) if not name.startswith("_"))


EXCEL_ROW_MEMBERS: frozenset[str] = _protocol_members(ExcelRow)


__all__ = [
    "EXCEL_ROW_MEMBERS",
    "ExcelRow",
]

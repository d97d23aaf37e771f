"""Tests for testing module."""

from __future__ import annotations

import pytest

from excel_io._exceptions import (
    DocumentAccessError,
    MissingSharedStringTableError,
    SheetNotFoundError,
)
from excel_io.readers.base import DocumentReaderProtocol
from excel_io.testing import (
    FakeDocumentReader,
    _prod_get_env,
    hooks,
    make_fake_env,
    make_raw_cell,
    reset_hooks,
)


def test_make_fake_env_installs_hook() -> None:
    env = make_fake_env()
    assert hooks.get_env("EXCEL_IO_ANY") is None
    env.set("EXCEL_IO_ANY", "1")
    assert hooks.get_env("EXCEL_IO_ANY") == "1"
    env.unset("EXCEL_IO_ANY")
    env.unset("EXCEL_IO_ANY")
    assert hooks.get_env("EXCEL_IO_ANY") is None


def test_reset_hooks_restores_production() -> None:
    make_fake_env()
    reset_hooks()
    assert hooks.get_env is _prod_get_env


def test_production_locale_decimal_point() -> None:
    assert len(hooks.locale_decimal_point()) == 1


def test_make_raw_cell() -> None:
    cell = make_raw_cell("AB12", "x", data_type="s", style_index=3)
    assert cell == {
        "row": 12,
        "column": "AB",
        "text": "x",
        "data_type": "s",
        "style_index": 3,
    }


class TestFakeDocumentReader:
    def test_groups_cells_into_sorted_rows(self) -> None:
        reader = FakeDocumentReader(
            {
                "S": [
                    make_raw_cell("A3", "c"),
                    make_raw_cell("A1", "a"),
                    make_raw_cell("B1", "b"),
                ],
                "Empty": [],
            }
        )
        rows = list(reader.enumerate_rows("S"))
        assert [index for index, _ in rows] == [1, 3]
        assert [c["column"] for c in rows[0][1]] == ["A", "B"]
        assert reader.list_sheets() == ["S", "Empty"]
        assert list(reader.enumerate_rows("Empty")) == []

    def test_unknown_sheet(self) -> None:
        reader = FakeDocumentReader({})
        with pytest.raises(SheetNotFoundError):
            list(reader.enumerate_rows("S"))

    def test_tables(self) -> None:
        reader = FakeDocumentReader({}, shared_strings=["x"], number_formats=[0, 14])
        assert reader.resolve_shared_string(0) == "x"
        assert reader.resolve_number_format(1) == 14
        with pytest.raises(DocumentAccessError):
            reader.resolve_shared_string(1)
        with pytest.raises(DocumentAccessError):
            reader.resolve_number_format(2)

    def test_without_tables(self) -> None:
        reader = FakeDocumentReader({})
        assert reader.resolve_number_format(0) is None
        with pytest.raises(MissingSharedStringTableError):
            reader.resolve_shared_string(0)

    def test_satisfies_protocol_and_closes(self) -> None:
        reader: DocumentReaderProtocol = FakeDocumentReader({})
        reader.close()
        assert isinstance(reader, FakeDocumentReader)
        assert reader.closed is True

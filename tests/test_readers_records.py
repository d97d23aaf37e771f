"""Tests for readers.records module."""

from __future__ import annotations

import logging

import pytest

from excel_io._exceptions import FieldConversionError, SheetNotFoundError
from excel_io.readers.records import read_records
from excel_io.testing import FakeDocumentReader, make_raw_cell
from tests.sample_records import BodyRow


def _body_reader() -> FakeDocumentReader:
    return FakeDocumentReader(
        {
            "Sheet2": [
                make_raw_cell("A1", "0", data_type="s"),
                make_raw_cell("B1", "Age", data_type="inlineStr"),
                make_raw_cell("C1", "height", data_type="inlineStr"),
                make_raw_cell("A2", "1", data_type="s"),
                make_raw_cell("B2", "30"),
                make_raw_cell("C2", "170", data_type="n"),
                make_raw_cell("A3", "2", data_type="s"),
                make_raw_cell("B3", "12"),
            ],
        },
        shared_strings=["Eye Colour", "Blue", "Green"],
    )


def test_reads_rows_after_header() -> None:
    records = read_records(
        _body_reader(),
        "Sheet2",
        BodyRow,
        decimal_separator=".",
        require_sheet=False,
        path="<memory>",
    )
    assert records == [
        BodyRow(eye_colour="Blue", age=30, height=170),
        BodyRow(eye_colour="Green", age=12, height=0),
    ]


def test_missing_sheet_returns_empty(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.INFO, logger="excel_io.readers.records"):
        records = read_records(
            _body_reader(),
            "sheet2",
            BodyRow,
            decimal_separator=".",
            require_sheet=False,
            path="<memory>",
        )
    assert records == []
    assert any("sheet2" in r.getMessage() for r in caplog.records)


def test_missing_sheet_required() -> None:
    with pytest.raises(SheetNotFoundError) as exc_info:
        read_records(
            _body_reader(),
            "Other",
            BodyRow,
            decimal_separator=".",
            require_sheet=True,
            path="book.xlsx",
        )
    assert exc_info.value.sheet_name == "Other"
    assert exc_info.value.path == "book.xlsx"


def test_header_only_sheet() -> None:
    reader = FakeDocumentReader({"Sheet2": [make_raw_cell("A1", "age", data_type="str")]})
    records = read_records(
        reader, "Sheet2", BodyRow, decimal_separator=".", require_sheet=False, path="<memory>"
    )
    assert records == []


def test_blank_header_cells_ignored() -> None:
    reader = FakeDocumentReader(
        {
            "Sheet2": [
                make_raw_cell("A1", "", data_type="inlineStr"),
                make_raw_cell("B1", "age", data_type="inlineStr"),
                make_raw_cell("A2", "ignored", data_type="inlineStr"),
                make_raw_cell("B2", "4"),
            ]
        }
    )
    records = read_records(
        reader, "Sheet2", BodyRow, decimal_separator=".", require_sheet=False, path="<memory>"
    )
    assert records == [BodyRow(age=4)]


def test_decode_failure_propagates() -> None:
    reader = FakeDocumentReader(
        {
            "Sheet2": [
                make_raw_cell("A1", "age", data_type="inlineStr"),
                make_raw_cell("A2", "abc", data_type="inlineStr"),
            ]
        }
    )
    with pytest.raises(FieldConversionError):
        read_records(
            reader, "Sheet2", BodyRow, decimal_separator=".", require_sheet=False, path="<memory>"
        )


def test_comma_separator_numbers() -> None:
    reader = FakeDocumentReader(
        {
            "Sheet2": [
                make_raw_cell("A1", "age", data_type="inlineStr"),
                make_raw_cell("A2", "7"),
            ]
        }
    )
    records = read_records(
        reader, "Sheet2", BodyRow, decimal_separator=",", require_sheet=False, path="<memory>"
    )
    assert records == [BodyRow(age=7)]

"""Tests for converter module."""

from __future__ import annotations

import io
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from pathlib import Path
from typing import ClassVar

import pytest

from excel_io._exceptions import (
    DocumentAccessError,
    FieldConversionError,
    SchemaError,
    SheetNotFoundError,
    UnsupportedNumericFormatError,
)
from excel_io._protocols.openpyxl import _create_workbook
from excel_io.config import default_settings
from excel_io.converter import ExcelConverter
from excel_io.testing import make_fake_env
from tests.sample_records import (
    BodyRow,
    Category,
    CustomerRow,
    ExplicitPropertiesRow,
    NamelessRow,
    PartialRow,
    PropertiesRow,
    ScalarRow,
)


@dataclass
class _NumericNameRow:
    sheet_name: ClassVar[str] = "Scalars"
    name: int = 0


@dataclass
class _PreciseRow:
    sheet_name: ClassVar[str] = "Precise"
    amount: Decimal = Decimal(0)
    ratio: float = 0.0
    big: int = 0


def _converter() -> ExcelConverter:
    return ExcelConverter(default_settings())


class TestWrite:
    def test_single_sheet_workbook(self) -> None:
        rows = [CustomerRow(sheet_name="Sheet1", customer_id=i) for i in range(100)]
        result = io.BytesIO()
        summary = _converter().write(rows, result)
        assert summary == {"Sheet1": 100}
        assert len(result.getvalue()) > 0

        read = _converter().read(CustomerRow, result)
        assert [r.customer_id for r in read] == list(range(100))

    def test_multi_sheet_workbook(self) -> None:
        rows = [CustomerRow(sheet_name=f"Sheet{i}") for i in range(100)]
        result = io.BytesIO()
        summary = _converter().write(rows, result)
        assert len(summary) == 100
        assert _converter().list_sheets(result) == [f"Sheet{i}" for i in range(100)]
        assert len(_converter().read(CustomerRow, result, "Sheet42")) == 1

    def test_written_sheets_can_be_read(self, tmp_path: Path) -> None:
        written = CustomerRow(
            sheet_name="Sheet1",
            address="123 Fake",
            first_name="John",
            last_name="Doe",
            last_contact=datetime(2024, 2, 3, 4, 5, 6),
            customer_id=1,
            is_active=True,
            balance=Decimal("100.00"),
            category=Category.CategoryA,
        )
        target = tmp_path / "customers.tmp"
        _converter().write([written], target)

        read = _converter().read(CustomerRow, target)
        assert read == [written]

    def test_scalar_round_trip(self) -> None:
        row = ScalarRow(
            name="Lana Wachowski, Lilly Wachowski",
            count=-12,
            ratio=0.125,
            amount=Decimal("19.99"),
            flag=True,
            category=Category.CategoryC,
            stamp=datetime(1999, 3, 31, 23, 59, 1),
            day=date(1999, 3, 31),
            note="=not a formula",
            limit=None,
        )
        stream = io.BytesIO()
        _converter().write([row], stream)
        assert _converter().read(ScalarRow, stream) == [row]

    def test_numbers_keep_full_precision(self) -> None:
        row = _PreciseRow(amount=Decimal("12345678901234567.89"), ratio=0.1 + 0.2, big=2**60 + 1)
        stream = io.BytesIO()
        _converter().write([row], stream)
        assert _converter().read(_PreciseRow, stream) == [row]

    def test_empty_write_keeps_default_sheet(self) -> None:
        stream = io.BytesIO()
        assert _converter().write([], stream) == {}
        assert _converter().list_sheets(stream) == ["Sheet"]

    def test_explicit_sheet_name_for_plain_records(self) -> None:
        stream = io.BytesIO()
        _converter().write([NamelessRow(value=5)], stream, sheet_name="Values")
        assert _converter().read(NamelessRow, stream, "Values") == [NamelessRow(value=5)]

    def test_records_without_sheet_name_rejected(self) -> None:
        with pytest.raises(SchemaError):
            _converter().write([NamelessRow()], io.BytesIO())

    def test_write_replaces_existing_workbook(self, tmp_path: Path) -> None:
        target = tmp_path / "replace.xlsx"
        _converter().write([BodyRow(age=1)], target)
        _converter().write([CustomerRow()], target)
        assert _converter().list_sheets(target) == ["Sheet1"]


class TestFlattenedColumns:
    def test_mapping_keys_become_columns(self, tmp_path: Path) -> None:
        target = tmp_path / "props.tmp"
        written = PropertiesRow(
            custom_properties={"Key1": "Value1", "Key2": "Value2", "Key3": "Value3"}
        )
        _converter().write([written], target)

        read = _converter().read(ExplicitPropertiesRow, target)
        assert len(read) == 1
        assert (read[0].key1, read[0].key2, read[0].key3) == ("Value1", "Value2", "Value3")

    def test_mapping_reassembled_on_read(self) -> None:
        stream = io.BytesIO()
        written = PropertiesRow(custom_properties={"Key1": "a", "Key2": "b"})
        _converter().write([written], stream)
        assert _converter().read(PropertiesRow, stream) == [written]

    def test_mixed_scalar_and_mapping(self) -> None:
        stream = io.BytesIO()
        written = PartialRow(key1="k", extra={"Colour": "red", "Size": "L"})
        _converter().write([written], stream)
        assert _converter().read(PartialRow, stream) == [written]


class TestAppend:
    def test_append_to_missing_stream(self) -> None:
        stream = io.BytesIO()
        expected = ExplicitPropertiesRow(key1="a", key2="b", key3="c")
        _converter().append(expected, stream)
        assert _converter().read(ExplicitPropertiesRow, stream) == [expected]

    def test_append_to_existing_file(self, tmp_path: Path) -> None:
        target = tmp_path / "append.tmp"
        first = ExplicitPropertiesRow(key1="a", key2="b", key3="c")
        second = ExplicitPropertiesRow(key1="d", key2="e", key3="f")
        _converter().append(first, target)
        _converter().append(second, target)
        assert _converter().read(ExplicitPropertiesRow, target) == [first, second]

    def test_append_does_not_duplicate_header(self) -> None:
        stream = io.BytesIO()
        for age in range(5):
            _converter().append(BodyRow(age=age), stream)
        rows = _converter().read(BodyRow, stream)
        assert [r.age for r in rows] == [0, 1, 2, 3, 4]

    def test_append_many_adds_new_sheet(self) -> None:
        stream = io.BytesIO()
        _converter().write([CustomerRow()], stream)
        summary = _converter().append_many([BodyRow(age=1), BodyRow(age=2)], stream)
        assert summary == {"Sheet2": 2}
        assert _converter().list_sheets(stream) == ["Sheet1", "Sheet2"]

    def test_append_to_existing_empty_sheet_writes_header(self, tmp_path: Path) -> None:
        target = tmp_path / "empty-sheet.xlsx"
        wb = _create_workbook()
        wb.active.title = "Sheet2"
        wb.save(target)
        wb.close()

        _converter().append(BodyRow(age=9), target)
        assert _converter().read(BodyRow, target) == [BodyRow(age=9)]


class TestRead:
    def test_missing_sheet_returns_empty(self) -> None:
        stream = io.BytesIO()
        _converter().write([CustomerRow()], stream)
        assert _converter().read(BodyRow, stream) == []

    def test_missing_sheet_required(self) -> None:
        stream = io.BytesIO()
        _converter().write([CustomerRow()], stream)
        with pytest.raises(SheetNotFoundError):
            _converter().read(BodyRow, stream, require_sheet=True)

    def test_sheet_name_is_case_sensitive(self) -> None:
        stream = io.BytesIO()
        _converter().write([CustomerRow()], stream)
        assert _converter().read(CustomerRow, stream, "sheet1") == []

    def test_openpyxl_dates_decoded_from_number_format(self, tmp_path: Path) -> None:
        target = tmp_path / "dates.xlsx"
        wb = _create_workbook()
        ws = wb.active
        ws.title = "Scalars"
        ws.cell(row=1, column=1, value="stamp")
        ws.cell(row=1, column=2, value="count")
        ws.cell(row=2, column=1, value=datetime(2024, 1, 2, 3, 4, 5))
        ws.cell(row=2, column=2, value=3)
        wb.save(target)
        wb.close()

        (row,) = _converter().read(ScalarRow, target)
        assert row.stamp == datetime(2024, 1, 2, 3, 4, 5)
        assert row.count == 3

    def test_unsupported_format_fails_without_mutation(self, tmp_path: Path) -> None:
        target = tmp_path / "formatted.xlsx"
        wb = _create_workbook()
        ws = wb.active
        ws.title = "Scalars"
        ws.cell(row=1, column=1, value="ratio")
        cell = ws.cell(row=2, column=1, value=1.5)
        cell.number_format = "0.00"
        wb.save(target)
        wb.close()
        before = target.read_bytes()

        with pytest.raises(UnsupportedNumericFormatError) as exc_info:
            _converter().read(ScalarRow, target)
        assert exc_info.value.code == 2
        assert target.read_bytes() == before

    def test_conversion_error(self) -> None:
        stream = io.BytesIO()
        _converter().write([ScalarRow(name="abc")], stream)
        with pytest.raises(FieldConversionError):
            _converter().read(_NumericNameRow, stream)

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(DocumentAccessError):
            _converter().read(BodyRow, tmp_path / "nope.xlsx")

    def test_comma_separator_from_environment(self) -> None:
        env = make_fake_env()
        env.set("EXCEL_IO_DECIMAL_SEPARATOR", ",")
        converter = ExcelConverter()
        assert converter.settings["decimal_separator"] == ","

        stream = io.BytesIO()
        row = ScalarRow(ratio=2.75, amount=Decimal("3.5"), count=4)
        converter.write([row], stream)
        assert converter.read(ScalarRow, stream) == [row]

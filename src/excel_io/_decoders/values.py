"""Decoder functions turning raw stored cells into typed runtime values.

The decision is driven by the cell's data-type tag, its style's numeric-format
code and the package's shared-string table.
"""

from __future__ import annotations

from datetime import date, datetime, time, timedelta
from decimal import Decimal, InvalidOperation

from excel_io._exceptions import (
    DateDecodeError,
    DocumentAccessError,
    FieldConversionError,
    UnsupportedNumericFormatError,
)
from excel_io._protocols.openpyxl import _from_excel
from excel_io.readers.base import DocumentReaderProtocol
from excel_io.types.cells import RawCell, ResolvedValue

_SHARED_STRING_TAG = "s"
_BOOLEAN_TAG = "b"
# openpyxl writes t="n" on every numeric cell; it is the schema default
_NUMBER_TAG = "n"

_VERBATIM_FORMATS = frozenset({0, 49, 168})
_NORMALIZED_FORMATS = frozenset({1, 44})
_FLOAT_FORMATS = frozenset({9, 10, 11, 12})
_DATE_FORMATS = frozenset({14, 15, 16, 17, 18, 19, 20, 21, 22, 164, 165, 166, 169})
_CURRENCY_FORMAT = 167

_EMPTY_DATE_SERIAL = 2.0
_FICTITIOUS_LEAP_DAY_SERIAL = 60
_SERIAL_EPOCH = date(1899, 12, 30)


def _normalize_decimal_separator(text: str, separator: str) -> str:
    """Rewrite both '.' and ',' to the configured decimal separator.

    Args:
        text: Stored numeric text.
        separator: Configured decimal separator.

    Returns:
        Normalized text.
    """
    return text.replace(".", separator).replace(",", separator)


def _to_parseable(text: str, separator: str) -> str:
    """Reverse the configured separator so float/Decimal can parse the text."""
    if separator == ".":
        return text.strip()
    return text.strip().replace(separator, ".")


def _parse_float(text: str, separator: str, address: str) -> float:
    """Parse normalized text as a float.

    Raises:
        FieldConversionError: If the text is not numeric.
    """
    try:
        return float(_to_parseable(text, separator))
    except ValueError:
        raise FieldConversionError(address, f"Cannot parse '{text}' as float") from None


def _parse_decimal(text: str, address: str) -> Decimal:
    """Parse stored text as a fixed-point decimal.

    Raises:
        FieldConversionError: If the text is not a decimal number.
    """
    try:
        return Decimal(text.strip())
    except InvalidOperation:
        raise FieldConversionError(address, f"Cannot parse '{text}' as decimal") from None


def _decode_serial_date(text: str, separator: str) -> datetime:
    """Decode an OLE Automation serial day number.

    Day 0 is 1899-12-30, so serial 2 is 1900-01-01 and serial 61 is
    1900-03-01. Empty text decodes to serial 2. Serials below one day decode
    to a time on the epoch date.

    Args:
        text: Stored cell text.
        separator: Configured decimal separator.

    Returns:
        Decoded datetime.

    Raises:
        DateDecodeError: If the text is not numeric.
    """
    if text.strip() == "":
        serial = _EMPTY_DATE_SERIAL
    else:
        normalized = _normalize_decimal_separator(text, separator)
        try:
            serial = float(_to_parseable(normalized, separator))
        except ValueError:
            raise DateDecodeError(text) from None

    decoded = _from_excel(serial)
    if isinstance(decoded, time):
        return datetime.combine(_SERIAL_EPOCH, decoded)
    # from_excel skips 1900-02-29 for serials below 60; day numbers are OLE days
    if 0 < serial < _FICTITIOUS_LEAP_DAY_SERIAL:
        return decoded - timedelta(days=1)
    return decoded


def _resolve_shared_string(cell: RawCell, reader: DocumentReaderProtocol) -> str:
    text = cell["text"]
    stripped = text.strip() if text is not None else ""
    if not stripped.isdigit():
        raise DocumentAccessError(
            f"{cell['column']}{cell['row']}", f"Invalid shared string index {text!r}"
        )
    return reader.resolve_shared_string(int(stripped))


def _resolve_formatted(
    cell: RawCell,
    format_code: int,
    separator: str,
) -> ResolvedValue:
    """Decode a styled cell from its numeric-format code.

    Args:
        cell: Raw cell with a stored value.
        format_code: Numeric format id of the cell's style.
        separator: Configured decimal separator.

    Returns:
        Resolved value.

    Raises:
        UnsupportedNumericFormatError: If no decoder handles format_code.
        DateDecodeError: If a date-formatted cell is not numeric.
        FieldConversionError: If a numeric-formatted cell is not numeric.
    """
    text = cell["text"] if cell["text"] is not None else ""
    address = f"{cell['column']}{cell['row']}"

    if format_code in _VERBATIM_FORMATS:
        return text
    if format_code in _NORMALIZED_FORMATS:
        return _normalize_decimal_separator(text, separator)
    if format_code in _FLOAT_FORMATS:
        return _parse_float(_normalize_decimal_separator(text, separator), separator, address)
    if format_code in _DATE_FORMATS:
        return _decode_serial_date(text, separator)
    if format_code == _CURRENCY_FORMAT:
        return _parse_decimal(text, address)
    raise UnsupportedNumericFormatError(format_code, cell["text"])


def resolve_cell_value(
    cell: RawCell,
    reader: DocumentReaderProtocol,
    decimal_separator: str,
) -> ResolvedValue:
    """Resolve a raw stored cell to its typed runtime value.

    Args:
        cell: Cell exactly as stored in the worksheet part.
        reader: Package the cell belongs to, for shared strings and styles.
        decimal_separator: Separator numeric text is normalized to.

    Returns:
        str, bool, float, Decimal, datetime, or None for a styled cell
        without a stored value.

    Raises:
        MissingSharedStringTableError: If a shared-string cell has no table to read.
        UnsupportedNumericFormatError: If the style's format code has no decoder.
        DateDecodeError: If a date-formatted cell is not numeric.
    """
    tag = cell["data_type"]
    if tag == _SHARED_STRING_TAG:
        return _resolve_shared_string(cell, reader)
    if tag == _BOOLEAN_TAG:
        return cell["text"] != "0"
    if tag is not None and tag != _NUMBER_TAG:
        return cell["text"] if cell["text"] is not None else ""

    style_index = cell["style_index"]
    if style_index is None:
        text = cell["text"] if cell["text"] is not None else ""
        return _normalize_decimal_separator(text, decimal_separator)

    if cell["text"] is None:
        return None
    format_code = reader.resolve_number_format(style_index)
    if format_code is None:
        return None
    return _resolve_formatted(cell, format_code, decimal_separator)


__all__ = [
    "_decode_serial_date",
    "_normalize_decimal_separator",
    "_to_parseable",
    "resolve_cell_value",
]

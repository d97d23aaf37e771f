"""Decoder functions for converting stored cells to typed values.

Internal module: the value resolver turns raw cells into runtime values and
the field converter narrows those values to declared field types.
"""

from __future__ import annotations

from excel_io._decoders.fields import (
    _extract_bool,
    _extract_date,
    _extract_datetime,
    _extract_decimal,
    _extract_enum,
    _extract_float,
    _extract_int,
    _extract_string,
    convert_field_value,
)
from excel_io._decoders.values import (
    _decode_serial_date,
    _normalize_decimal_separator,
    _to_parseable,
    resolve_cell_value,
)

__all__ = [
    "_decode_serial_date",
    "_extract_bool",
    "_extract_date",
    "_extract_datetime",
    "_extract_decimal",
    "_extract_enum",
    "_extract_float",
    "_extract_int",
    "_extract_string",
    "_normalize_decimal_separator",
    "_to_parseable",
    "convert_field_value",
    "resolve_cell_value",
]

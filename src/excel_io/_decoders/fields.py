"""Decoder functions converting resolved cell values to declared field types.

Each extractor accepts the value the resolver produced and the field name used
in error messages, and either returns the typed value or raises
FieldConversionError.
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from enum import Enum

from excel_io._decoders.values import _to_parseable
from excel_io._exceptions import FieldConversionError
from excel_io.types.cells import FieldValue, ResolvedValue

_TRUE_TEXT = frozenset({"true", "yes", "1", "y"})
_FALSE_TEXT = frozenset({"false", "no", "0", "n"})


def _extract_string(value: ResolvedValue, field: str) -> str:
    """Extract string value.

    Args:
        value: Resolved cell value.
        field: Field name for error messages.

    Returns:
        String value.

    Raises:
        FieldConversionError: If value is None.
    """
    if value is None:
        raise FieldConversionError(field, "Value is None, expected string")
    if isinstance(value, str):
        return value
    if isinstance(value, datetime):
        return value.isoformat()
    return str(value)


def _extract_int(value: ResolvedValue, field: str, separator: str) -> int:
    """Extract integer value with validation.

    Args:
        value: Resolved cell value.
        field: Field name for error messages.
        separator: Configured decimal separator.

    Returns:
        Integer value.

    Raises:
        FieldConversionError: If value cannot be converted to int.
    """
    if value is None:
        raise FieldConversionError(field, "Value is None, expected int")
    if isinstance(value, bool):
        raise FieldConversionError(field, "Value is bool, expected int")
    if isinstance(value, (float, Decimal)):
        if value != int(value):
            raise FieldConversionError(field, f"Value {value} is not integral")
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
        try:
            as_float = float(_to_parseable(value, separator))
        except ValueError:
            raise FieldConversionError(field, f"Cannot parse '{value}' as int") from None
        if not as_float.is_integer():
            raise FieldConversionError(field, f"Value '{value}' is not integral")
        return int(as_float)
    raise FieldConversionError(field, f"Cannot convert {type(value).__name__} to int")


def _extract_float(value: ResolvedValue, field: str, separator: str) -> float:
    """Extract float value with validation.

    Args:
        value: Resolved cell value.
        field: Field name for error messages.
        separator: Configured decimal separator.

    Returns:
        Float value.

    Raises:
        FieldConversionError: If value cannot be converted to float.
    """
    if value is None:
        raise FieldConversionError(field, "Value is None, expected float")
    if isinstance(value, bool):
        raise FieldConversionError(field, "Value is bool, expected float")
    if isinstance(value, (float, Decimal)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(_to_parseable(value, separator))
        except ValueError:
            raise FieldConversionError(field, f"Cannot parse '{value}' as float") from None
    raise FieldConversionError(field, f"Cannot convert {type(value).__name__} to float")


def _extract_decimal(value: ResolvedValue, field: str, separator: str) -> Decimal:
    """Extract fixed-point decimal value with validation.

    Raises:
        FieldConversionError: If value cannot be converted to Decimal.
    """
    if value is None:
        raise FieldConversionError(field, "Value is None, expected decimal")
    if isinstance(value, bool):
        raise FieldConversionError(field, "Value is bool, expected decimal")
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    if isinstance(value, str):
        try:
            return Decimal(_to_parseable(value, separator))
        except InvalidOperation:
            raise FieldConversionError(field, f"Cannot parse '{value}' as decimal") from None
    raise FieldConversionError(field, f"Cannot convert {type(value).__name__} to decimal")


def _extract_bool(value: ResolvedValue, field: str) -> bool:
    """Extract boolean value with validation.

    Args:
        value: Resolved cell value.
        field: Field name for error messages.

    Returns:
        Boolean value.

    Raises:
        FieldConversionError: If value cannot be converted to bool.
    """
    if value is None:
        raise FieldConversionError(field, "Value is None, expected bool")
    if isinstance(value, bool):
        return value
    if isinstance(value, (float, Decimal)):
        return bool(value)
    if isinstance(value, str):
        lower = value.strip().lower()
        if lower in _TRUE_TEXT:
            return True
        if lower in _FALSE_TEXT:
            return False
        raise FieldConversionError(field, f"Cannot parse '{value}' as bool")
    raise FieldConversionError(field, f"Cannot convert {type(value).__name__} to bool")


def _extract_enum(value: ResolvedValue, field: str, enum_type: type[Enum]) -> Enum:
    """Extract enum member by name.

    Raises:
        FieldConversionError: If value does not name a member of enum_type.
    """
    if not isinstance(value, str):
        raise FieldConversionError(
            field, f"Cannot convert {type(value).__name__} to {enum_type.__name__}"
        )
    try:
        return enum_type[value.strip()]
    except KeyError:
        raise FieldConversionError(
            field, f"'{value}' is not a member of {enum_type.__name__}"
        ) from None


def _extract_datetime(value: ResolvedValue, field: str) -> datetime:
    """Extract datetime from a decoded date or ISO-8601 text.

    Raises:
        FieldConversionError: If value cannot be converted to datetime.
    """
    if isinstance(value, datetime):
        return value
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value.strip())
        except ValueError:
            raise FieldConversionError(field, f"Cannot parse '{value}' as datetime") from None
    raise FieldConversionError(field, f"Cannot convert {type(value).__name__} to datetime")


def _extract_date(value: ResolvedValue, field: str) -> date:
    """Extract date from a decoded date or ISO-8601 text.

    Raises:
        FieldConversionError: If value cannot be converted to date.
    """
    return _extract_datetime(value, field).date()


def convert_field_value(
    value: ResolvedValue,
    value_type: object,
    field: str,
    *,
    optional: bool,
    decimal_separator: str,
) -> FieldValue:
    """Convert a resolved cell value to a field's declared type.

    Args:
        value: Value produced by the value resolver.
        value_type: Declared type with any Optional wrapper removed.
        field: Field name for error messages.
        optional: Whether the field accepts None.
        decimal_separator: Configured decimal separator.

    Returns:
        Converted field value. Optional fields map None and empty text to None.

    Raises:
        FieldConversionError: If the value cannot be converted.
    """
    if optional and (value is None or value == ""):
        return None
    if value_type is str:
        return _extract_string(value, field)
    if value_type is bool:
        return _extract_bool(value, field)
    if value_type is int:
        return _extract_int(value, field, decimal_separator)
    if value_type is float:
        return _extract_float(value, field, decimal_separator)
    if value_type is Decimal:
        return _extract_decimal(value, field, decimal_separator)
    if value_type is datetime:
        return _extract_datetime(value, field)
    if value_type is date:
        return _extract_date(value, field)
    if isinstance(value_type, type) and issubclass(value_type, Enum):
        return _extract_enum(value, field, value_type)
    raise FieldConversionError(field, f"Unsupported field type {value_type!r}")


__all__ = [
    "_extract_bool",
    "_extract_date",
    "_extract_datetime",
    "_extract_decimal",
    "_extract_enum",
    "_extract_float",
    "_extract_int",
    "_extract_string",
    "convert_field_value",
]

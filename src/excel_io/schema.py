"""Schema descriptors for record types.

A record type is a dataclass. Each field becomes one column, named by its
display alias when declared with ``column(display_name=...)`` and by its own
name otherwise. A ``dict[str, str]`` field declared with ``excel_columns()``
expands into one column per mapping entry.

Example:
    >>> from dataclasses import dataclass
    >>> from excel_io.schema import column, describe
    >>> @dataclass
    ... class Person:
    ...     sheet_name = "People"
    ...     name: str = ""
    ...     eye_colour: str = column(display_name="Eye Colour", default="")
    >>> [d.logical_name for d in describe(Person)]
    ['name', 'Eye Colour']
"""

from __future__ import annotations

import collections.abc
import dataclasses
import functools
import inspect
import types
import typing
from collections.abc import Callable
from decimal import Decimal
from typing import TypeVar

from excel_io._exceptions import SchemaError
from excel_io.types.cells import CellType
from excel_io.types.record import EXCEL_ROW_MEMBERS

_T = TypeVar("_T")

_DISPLAY_NAME_KEY = "excel_io.display_name"
_EXPAND_KEY = "excel_io.expand"
_NUMERIC_TYPES: tuple[type, ...] = (int, float, Decimal)


@dataclasses.dataclass(frozen=True)
class FieldDescriptor:
    """One column-bearing field of a record type.

    Attributes:
        name: Dataclass field name.
        display_name: Declared display alias, None when absent.
        declared_type: Resolved type annotation.
        value_type: declared_type with any Optional wrapper removed.
        optional: Whether the field accepts None.
        flattenable: Whether the field expands into one column per mapping entry.
        init: Whether the field is a constructor argument.
    """

    name: str
    display_name: str | None
    declared_type: object
    value_type: object
    optional: bool
    flattenable: bool
    init: bool

    @property
    def logical_name(self) -> str:
        """Return the column header for this field."""
        return self.display_name if self.display_name is not None else self.name


@typing.overload
def column(display_name: str, *, default: _T) -> _T: ...


@typing.overload
def column(display_name: str, *, default_factory: Callable[[], _T]) -> _T: ...


def column(
    display_name: str,
    *,
    default: object = dataclasses.MISSING,
    default_factory: Callable[[], object] | None = None,
) -> object:
    """Declare a dataclass field with a display alias.

    Args:
        display_name: Column header used instead of the field name.
        default: Field default.
        default_factory: Zero-argument callable producing the default,
            for mutable defaults.

    Returns:
        A dataclass field specifier.
    """
    metadata = {_DISPLAY_NAME_KEY: display_name}
    if default_factory is not None:
        with_factory: object = dataclasses.field(default_factory=default_factory, metadata=metadata)
        return with_factory
    with_default: object = dataclasses.field(default=default, metadata=metadata)
    return with_default


def excel_columns() -> dict[str, str]:
    """Declare a mapping field that expands into one column per entry.

    Returns:
        A dataclass field specifier defaulting to an empty dict.
    """
    declared: dict[str, str] = dataclasses.field(default_factory=dict, metadata={_EXPAND_KEY: True})
    return declared


def _unwrap_optional(declared: object, type_name: str, field_name: str) -> tuple[object, bool]:
    """Remove an Optional wrapper from a declared type.

    Returns:
        Tuple of (inner type, whether None was allowed).

    Raises:
        SchemaError: If the type is a union other than Optional[X].
    """
    origin = typing.get_origin(declared)
    if origin is not typing.Union and origin is not types.UnionType:
        return declared, False
    members = typing.get_args(declared)
    inner = [m for m in members if m is not type(None)]
    if len(inner) != 1 or len(members) != 2:
        raise SchemaError(type_name, f"Field '{field_name}' has unsupported union {declared!r}")
    return inner[0], True


def _is_text_mapping(value_type: object) -> bool:
    """Return True if value_type is a str -> str mapping."""
    origin = typing.get_origin(value_type)
    if not isinstance(origin, type) or not issubclass(origin, collections.abc.Mapping):
        return False
    return typing.get_args(value_type) == (str, str)


def _describe_field(
    field: dataclasses.Field[object], declared: object, type_name: str
) -> FieldDescriptor:
    value_type, optional = _unwrap_optional(declared, type_name, field.name)
    flattenable = bool(field.metadata.get(_EXPAND_KEY, False))
    if flattenable and not _is_text_mapping(value_type):
        raise SchemaError(
            type_name, f"Field '{field.name}' marked excel_columns() must be dict[str, str]"
        )
    raw_display = field.metadata.get(_DISPLAY_NAME_KEY)
    display_name = raw_display if isinstance(raw_display, str) else None
    return FieldDescriptor(
        name=field.name,
        display_name=display_name,
        declared_type=declared,
        value_type=value_type,
        optional=optional,
        flattenable=flattenable,
        init=field.init,
    )


@functools.cache
def describe(record_type: type) -> tuple[FieldDescriptor, ...]:
    """Describe the columns of a record type.

    Fields appear in declaration order. The sheet-name accessor is never a
    column.

    Args:
        record_type: A dataclass type.

    Returns:
        Tuple of field descriptors.

    Raises:
        SchemaError: If record_type is not a dataclass or declares an
            unsupported field.
    """
    type_name = record_type.__qualname__
    if not dataclasses.is_dataclass(record_type):
        raise SchemaError(type_name, "Record types must be dataclasses")

    try:
        hints = typing.get_type_hints(record_type)
    except NameError as e:
        raise SchemaError(type_name, f"Cannot resolve annotations: {e}") from e

    descriptors: list[FieldDescriptor] = []
    for field in dataclasses.fields(record_type):
        if field.name in EXCEL_ROW_MEMBERS:
            continue
        descriptors.append(_describe_field(field, hints[field.name], type_name))
    return tuple(descriptors)


def cell_type_for(descriptor: FieldDescriptor) -> CellType:
    """Return the cell type written for a scalar field.

    int, float and Decimal fields (and Optional thereof) are numbers; bool and
    everything else is text.
    """
    if descriptor.value_type in _NUMERIC_TYPES:
        return "number"
    return "string"


def declared_sheet_name(record_type: type) -> str:
    """Return the sheet name a record type reads from by default.

    Args:
        record_type: Record type.

    Returns:
        The class-level sheet name, else the sheet name of a default instance.

    Raises:
        SchemaError: If the type exposes no sheet name.
    """
    type_name = record_type.__qualname__
    static_value: object = inspect.getattr_static(record_type, "sheet_name", None)
    if isinstance(static_value, str):
        return static_value

    try:
        instance: object = record_type()
    except TypeError as e:
        raise SchemaError(
            type_name, "No sheet name given and the type cannot be default-constructed"
        ) from e
    value: object = getattr(instance, "sheet_name", None)
    if isinstance(value, str):
        return value
    raise SchemaError(type_name, "Record type does not expose a sheet_name")


__all__ = [
    "FieldDescriptor",
    "cell_type_for",
    "column",
    "declared_sheet_name",
    "describe",
    "excel_columns",
]

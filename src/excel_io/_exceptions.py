"""Exception hierarchy for excel_io library.

All exceptions propagate without recovery. Callers handle failures explicitly.
"""

from __future__ import annotations


class ExcelIOError(Exception):
    """Base exception for excel_io library.

    All library exceptions inherit from this base class.
    """


class UnsupportedNumericFormatError(ExcelIOError):
    """Raised when a cell's style carries a numeric format code with no decoder.

    Attributes:
        code: The numeric format id from the style table.
        text: The stored cell text that could not be decoded.
    """

    def __init__(self, code: int, text: str | None) -> None:
        self.code = code
        self.text = text
        super().__init__(f"Format with ID {code} is not supported (cell value: {text!r})")


class MissingSharedStringTableError(ExcelIOError):
    """Raised when a cell references the shared-string table but the package has none.

    Attributes:
        index: The shared-string index the cell referenced.
    """

    def __init__(self, index: int) -> None:
        self.index = index
        super().__init__(f"Shared string {index} referenced but workbook has no string table")


class DateDecodeError(ExcelIOError):
    """Raised when a date-formatted cell does not hold a serial day number.

    Attributes:
        text: The stored cell text.
    """

    def __init__(self, text: str) -> None:
        self.text = text
        super().__init__(f"Cannot decode {text!r} as a serial date")


class FieldConversionError(ExcelIOError):
    """Raised when a resolved cell value cannot be converted to a field's type.

    Attributes:
        field: Name of the target field (or record type for construction failures).
        message: Description of the conversion failure.
    """

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        self.message = message
        super().__init__(f"{field}: {message}")


class SheetNotFoundError(ExcelIOError):
    """Raised when a caller requires a sheet that the workbook does not contain.

    Attributes:
        path: The workbook location.
        sheet_name: The requested sheet name.
    """

    def __init__(self, path: str, sheet_name: str) -> None:
        self.path = path
        self.sheet_name = sheet_name
        super().__init__(f"Sheet '{sheet_name}' not found: {path}")


class DocumentAccessError(ExcelIOError):
    """Raised when the spreadsheet package cannot be opened, parsed or saved.

    Attributes:
        path: The workbook location.
        message: Description of the failure.
    """

    def __init__(self, path: str, message: str) -> None:
        self.path = path
        self.message = message
        super().__init__(f"{message}: {path}")


class SchemaError(ExcelIOError):
    """Raised when a record type cannot be described as spreadsheet columns.

    Attributes:
        type_name: Qualified name of the record type.
        message: Description of the problem.
    """

    def __init__(self, type_name: str, message: str) -> None:
        self.type_name = type_name
        self.message = message
        super().__init__(f"{type_name}: {message}")


__all__ = [
    "DateDecodeError",
    "DocumentAccessError",
    "ExcelIOError",
    "FieldConversionError",
    "MissingSharedStringTableError",
    "SchemaError",
    "SheetNotFoundError",
    "UnsupportedNumericFormatError",
]

"""Column label codec for A1-style cell references.

Column labels are bijective base-26 numerals over A-Z with no zero symbol:
1 -> "A", 26 -> "Z", 27 -> "AA", 53 -> "BA".
"""

from __future__ import annotations

import re

_FIRST_LETTER = ord("A")
_ALPHABET_SIZE = 26
_ADDRESS_RE = re.compile(r"^([A-Za-z]+)(\d*)$")


def index_to_label(column_index: int) -> str:
    """Convert a 1-based column index to its column label.

    Args:
        column_index: 1-based column index.

    Returns:
        Column label (e.g., "A", "Z", "AA").

    Raises:
        ValueError: If column_index is not positive.
    """
    if column_index < 1:
        raise ValueError(f"Column index must be positive, got {column_index}")

    label = ""
    remaining = column_index
    while remaining > 0:
        remainder = (remaining - 1) % _ALPHABET_SIZE
        label = chr(_FIRST_LETTER + remainder) + label
        remaining = (remaining - 1) // _ALPHABET_SIZE
    return label


def label_to_index(label: str) -> int:
    """Convert a column label back to its 1-based column index.

    Args:
        label: Column label, case-insensitive.

    Returns:
        1-based column index.

    Raises:
        ValueError: If label is empty or contains non A-Z characters.
    """
    if not label:
        raise ValueError("Column label must not be empty")

    index = 0
    for ch in label.upper():
        digit = ord(ch) - _FIRST_LETTER + 1
        if digit < 1 or digit > _ALPHABET_SIZE:
            raise ValueError(f"Invalid column label: {label!r}")
        index = index * _ALPHABET_SIZE + digit
    return index


def cell_address(row_index: int, column_index: int) -> str:
    """Compose an A1-style cell address.

    Args:
        row_index: 1-based row index.
        column_index: 1-based column index.

    Returns:
        Cell address (e.g., "A4").
    """
    return f"{index_to_label(column_index)}{row_index}"


def split_address(address: str) -> tuple[str, int | None]:
    """Split a cell address into its column label and row index.

    Args:
        address: Cell address such as "AB12" or a bare label such as "AB".

    Returns:
        Tuple of (upper-case column label, row index or None).

    Raises:
        ValueError: If address is not an A1-style reference.
    """
    match = _ADDRESS_RE.match(address)
    if match is None:
        raise ValueError(f"Invalid cell address: {address!r}")
    label, digits = match.groups()
    return label.upper(), int(digits) if digits else None


__all__ = [
    "cell_address",
    "index_to_label",
    "label_to_index",
    "split_address",
]

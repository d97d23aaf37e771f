"""Readers for spreadsheet packages.

Provides the reader protocol and the raw package store. The sheet reader
lives in ``excel_io.readers.records``.
"""

from __future__ import annotations

from excel_io.readers.base import DocumentReaderProtocol
from excel_io.readers.package import PackageReader, open_package

__all__ = [
    "DocumentReaderProtocol",
    "PackageReader",
    "open_package",
]

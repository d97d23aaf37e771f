"""Raw spreadsheet package reader.

Reads a .xlsx package directly with zipfile and ElementTree so that every cell
is exposed exactly as persisted: stored text, ``t`` tag and ``s`` style index.
Decoding those into values is left to the value resolver.
"""

from __future__ import annotations

import io
import posixpath
import zipfile
from collections.abc import Iterator
from pathlib import Path
from types import TracebackType
from typing import BinaryIO
from xml.etree import ElementTree as ET

from excel_io._exceptions import (
    DocumentAccessError,
    MissingSharedStringTableError,
    SheetNotFoundError,
)
from excel_io.columns import index_to_label, label_to_index, split_address
from excel_io.logging import get_logger
from excel_io.types.cells import RawCell, WorkbookTarget

_log = get_logger(__name__)

_NS_MAIN = "{http://schemas.openxmlformats.org/spreadsheetml/2006/main}"
_NS_DOC_REL = "{http://schemas.openxmlformats.org/officeDocument/2006/relationships}"
_NS_PKG_REL = "{http://schemas.openxmlformats.org/package/2006/relationships}"

_ROOT_RELS = "_rels/.rels"
_OFFICE_DOCUMENT_SUFFIX = "/officeDocument"
_SHARED_STRINGS_SUFFIX = "/sharedStrings"
_STYLES_SUFFIX = "/styles"

_ROW = f"{_NS_MAIN}row"
_CELL = f"{_NS_MAIN}c"
_VALUE = f"{_NS_MAIN}v"
_INLINE = f"{_NS_MAIN}is"
_TEXT = f"{_NS_MAIN}t"
_RUN = f"{_NS_MAIN}r"

_INLINE_STRING_TAG = "inlineStr"


def _target_name(target: WorkbookTarget) -> str:
    if isinstance(target, (str, Path)):
        return str(target)
    return "<stream>"


def _rels_part_for(part: str) -> str:
    """Return the relationships part name for a package part."""
    directory, name = posixpath.split(part)
    return posixpath.join(directory, "_rels", f"{name}.rels")


def _resolve_target(source_part: str, target: str) -> str:
    """Resolve a relationship target against the part that declares it."""
    if target.startswith("/"):
        return target.lstrip("/")
    base_dir = posixpath.dirname(source_part)
    return posixpath.normpath(posixpath.join(base_dir, target))


def _string_item_text(item: ET.Element) -> str:
    """Concatenate the text runs of a shared-string item or inline string.

    Phonetic runs are ignored.
    """
    parts: list[str] = []
    for child in item:
        if child.tag == _TEXT:
            parts.append(child.text or "")
        elif child.tag == _RUN:
            run_text = child.find(_TEXT)
            if run_text is not None:
                parts.append(run_text.text or "")
    return "".join(parts)


def _cell_text(cell: ET.Element, data_type: str | None) -> str | None:
    """Return the stored text of a cell, None when it has no value node."""
    if data_type == _INLINE_STRING_TAG:
        inline = cell.find(_INLINE)
        return _string_item_text(inline) if inline is not None else None
    value = cell.find(_VALUE)
    if value is None:
        return None
    return value.text or ""


class PackageReader:
    """Read access to a spreadsheet package.

    Implements DocumentReaderProtocol. The shared-string table and the style
    table are parsed on first use.
    """

    def __init__(self, archive: zipfile.ZipFile, path: str) -> None:
        """Initialize reader over an open archive.

        Args:
            archive: Open zip archive of the package.
            path: Location used in error messages.
        """
        self._archive = archive
        self._path = path
        self._part_names = frozenset(archive.namelist())
        self._workbook_part = self._find_workbook_part()
        self._relationships: dict[str, tuple[str, str]] = {}
        self._sheets: dict[str, str] = {}
        if self._workbook_part is not None:
            self._relationships = self._read_relationships(self._workbook_part)
            self._sheets = self._read_sheet_parts(self._workbook_part)
        self._shared_strings: list[str] | None = None
        self._shared_strings_loaded = False
        self._number_formats: list[int] | None = None
        self._number_formats_loaded = False

    def __enter__(self) -> PackageReader:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()

    def _parse_part(self, part: str) -> ET.Element:
        """Parse an XML part of the package.

        Raises:
            DocumentAccessError: If the part is missing or not well-formed XML.
        """
        try:
            data = self._archive.read(part)
        except KeyError:
            raise DocumentAccessError(self._path, f"Missing package part {part}") from None
        try:
            return ET.fromstring(data)
        except ET.ParseError as e:
            raise DocumentAccessError(self._path, f"Malformed package part {part}: {e}") from e

    def _has_part(self, part: str) -> bool:
        return part in self._part_names

    def _find_workbook_part(self) -> str | None:
        if not self._has_part(_ROOT_RELS):
            return None
        root = self._parse_part(_ROOT_RELS)
        for rel in root.iter(f"{_NS_PKG_REL}Relationship"):
            if rel.get("Type", "").endswith(_OFFICE_DOCUMENT_SUFFIX):
                return _resolve_target("", rel.get("Target", ""))
        return None

    def _read_relationships(self, part: str) -> dict[str, tuple[str, str]]:
        """Map relationship id to (type, resolved part name) for a part."""
        rels_part = _rels_part_for(part)
        if not self._has_part(rels_part):
            return {}
        root = self._parse_part(rels_part)
        relationships: dict[str, tuple[str, str]] = {}
        for rel in root.iter(f"{_NS_PKG_REL}Relationship"):
            rel_id = rel.get("Id")
            target = rel.get("Target")
            if rel_id is None or target is None:
                continue
            relationships[rel_id] = (rel.get("Type", ""), _resolve_target(part, target))
        return relationships

    def _read_sheet_parts(self, workbook_part: str) -> dict[str, str]:
        """Map sheet name to worksheet part name in workbook order."""
        root = self._parse_part(workbook_part)
        sheets: dict[str, str] = {}
        for sheet in root.iter(f"{_NS_MAIN}sheet"):
            name = sheet.get("name")
            rel_id = sheet.get(f"{_NS_DOC_REL}id")
            if name is None or rel_id is None or rel_id not in self._relationships:
                continue
            sheets[name] = self._relationships[rel_id][1]
        return sheets

    def _related_part(self, type_suffix: str) -> str | None:
        for rel_type, part in self._relationships.values():
            if rel_type.endswith(type_suffix):
                return part
        return None

    def _load_shared_strings(self) -> list[str] | None:
        if self._shared_strings_loaded:
            return self._shared_strings
        self._shared_strings_loaded = True
        part = self._related_part(_SHARED_STRINGS_SUFFIX)
        if part is None or not self._has_part(part):
            return None
        root = self._parse_part(part)
        self._shared_strings = [_string_item_text(item) for item in root.iter(f"{_NS_MAIN}si")]
        return self._shared_strings

    def _load_number_formats(self) -> list[int] | None:
        if self._number_formats_loaded:
            return self._number_formats
        self._number_formats_loaded = True
        part = self._related_part(_STYLES_SUFFIX)
        if part is None or not self._has_part(part):
            return None
        root = self._parse_part(part)
        cell_xfs = root.find(f"{_NS_MAIN}cellXfs")
        if cell_xfs is None:
            return None
        self._number_formats = [
            int(xf.get("numFmtId", "0")) for xf in cell_xfs.findall(f"{_NS_MAIN}xf")
        ]
        return self._number_formats

    def list_sheets(self) -> list[str]:
        """Return sheet names in workbook order."""
        return list(self._sheets)

    def _raw_cell(self, element: ET.Element, row_index: int, previous_column: int) -> RawCell:
        reference = element.get("r")
        if reference is not None:
            label, _row = split_address(reference)
        else:
            label = index_to_label(previous_column + 1)
        data_type = element.get("t")
        style = element.get("s")
        return RawCell(
            row=row_index,
            column=label,
            text=_cell_text(element, data_type),
            data_type=data_type,
            style_index=int(style) if style is not None else None,
        )

    def enumerate_rows(self, sheet_name: str) -> Iterator[tuple[int, list[RawCell]]]:
        """Yield (row index, cells) for every physical row of a sheet.

        Args:
            sheet_name: Exact sheet name.

        Raises:
            SheetNotFoundError: If the sheet does not exist.
            DocumentAccessError: If the worksheet part is missing or malformed.
        """
        if sheet_name not in self._sheets:
            raise SheetNotFoundError(self._path, sheet_name)
        part = self._sheets[sheet_name]
        try:
            stream = self._archive.open(part)
        except KeyError:
            raise DocumentAccessError(self._path, f"Missing package part {part}") from None

        previous_row = 0
        with stream:
            try:
                for _event, element in ET.iterparse(stream, events=("end",)):
                    if element.tag != _ROW:
                        continue
                    row_attr = element.get("r")
                    row_index = int(row_attr) if row_attr is not None else previous_row + 1
                    previous_row = row_index

                    cells: list[RawCell] = []
                    previous_column = 0
                    for cell_element in element.findall(_CELL):
                        cell = self._raw_cell(cell_element, row_index, previous_column)
                        previous_column = label_to_index(cell["column"])
                        cells.append(cell)
                    yield row_index, cells
                    element.clear()
            except ET.ParseError as e:
                raise DocumentAccessError(
                    self._path, f"Malformed package part {part}: {e}"
                ) from e

    def resolve_shared_string(self, index: int) -> str:
        """Look up an entry of the shared-string table.

        Raises:
            MissingSharedStringTableError: If the package has no string table.
            DocumentAccessError: If index is out of range.
        """
        table = self._load_shared_strings()
        if table is None:
            raise MissingSharedStringTableError(index)
        if index < 0 or index >= len(table):
            raise DocumentAccessError(self._path, f"Shared string {index} out of range")
        return table[index]

    def resolve_number_format(self, style_index: int) -> int | None:
        """Return the numeric format id of a cell style, None without a style table.

        Raises:
            DocumentAccessError: If style_index is out of range.
        """
        formats = self._load_number_formats()
        if formats is None:
            return None
        if style_index < 0 or style_index >= len(formats):
            raise DocumentAccessError(self._path, f"Style {style_index} out of range")
        return formats[style_index]

    def close(self) -> None:
        """Release the package."""
        self._archive.close()


def _open_archive(target: WorkbookTarget, name: str) -> zipfile.ZipFile:
    source: str | Path | BinaryIO
    if isinstance(target, (str, Path)):
        path = Path(target)
        if not path.exists():
            raise DocumentAccessError(name, "File does not exist")
        source = path
    else:
        target.seek(0)
        source = io.BytesIO(target.read())
    try:
        return zipfile.ZipFile(source)
    except zipfile.BadZipFile as e:
        raise DocumentAccessError(name, "Not a spreadsheet package") from e


def open_package(target: WorkbookTarget) -> PackageReader:
    """Open a spreadsheet package for reading.

    Args:
        target: Path to the workbook, or a seekable binary stream.

    Returns:
        PackageReader to use as a context manager.

    Raises:
        DocumentAccessError: If the package cannot be opened or parsed.
    """
    name = _target_name(target)
    archive = _open_archive(target, name)
    try:
        reader = PackageReader(archive, name)
    except DocumentAccessError:
        archive.close()
        raise
    _log.debug("Opened package %s", name, extra={"path": name})
    return reader


__all__ = [
    "PackageReader",
    "open_package",
]

"""Spreadsheet table sources.

``.xlsx`` workbooks are read with openpyxl and legacy ``.xls`` workbooks
with xlrd; the format is detected from the content signature. Only the
first worksheet is read. Cell values are converted to text at read time so
rows carry the same raw representation as delimited text.
"""

from __future__ import annotations

from datetime import date, datetime, time
import io
from typing import TYPE_CHECKING, Any
import zipfile

from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException
import xlrd
from xlrd.compdoc import CompDocError

from ...application.models import TableFileType
from ...constants import Signatures
from ...domain.exceptions import SourceParseError

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence
    from typing import BinaryIO

    from .table_reader import Record


def format_cell(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, bool):
        return "True" if value else "False"
    if isinstance(value, float):
        if value.is_integer():
            return str(int(value))
        return format(value, ".15g")
    if isinstance(value, datetime):
        if value.time() == time(0, 0):
            return value.date().isoformat()
        return value.isoformat(sep=" ")
    if isinstance(value, (date, time)):
        return value.isoformat()
    return str(value)


def normalize_cells(cells: Sequence[str | None], width: int) -> list[str | None]:
    values = list(cells)
    if all(value is None or value == "" for value in values):
        return []
    while len(values) > width and values[-1] is None:
        values.pop()
    if len(values) < width:
        values.extend([None] * (width - len(values)))
    return values


class XlsxRecordSource:
    file_type = TableFileType.XLS

    def __init__(self, content: bytes) -> None:
        super().__init__()
        try:
            self._workbook = load_workbook(
                io.BytesIO(content), read_only=True, data_only=True
            )
        except (InvalidFileException, zipfile.BadZipFile, KeyError) as e:
            raise SourceParseError(f"Failed to open XLSX workbook: {e}") from e
        self._sheet = self._workbook.worksheets[0]
        self._width = self._sheet.max_column or 0
        self._rows = self._iterate()

    def read_labels(self, source_has_header: bool) -> Record:
        first = next(self._rows, None)
        if first is None:
            return []
        if not self._width:
            self._width = len(first)
        labels = normalize_cells(first, self._width)
        if not source_has_header:
            self._rows = self._iterate()
        return labels

    def next_record(self) -> Record | None:
        cells = next(self._rows, None)
        if cells is None:
            return None
        return normalize_cells(cells, self._width)

    def close(self) -> None:
        self._workbook.close()

    def _iterate(self) -> Iterator[list[str | None]]:
        for row in self._sheet.iter_rows(values_only=True):
            yield [format_cell(value) for value in row]


class XlsRecordSource:
    file_type = TableFileType.XLS

    def __init__(self, content: bytes) -> None:
        super().__init__()
        try:
            self._book = xlrd.open_workbook(file_contents=content, on_demand=True)
            self._sheet = self._book.sheet_by_index(0)
        except (xlrd.XLRDError, CompDocError) as e:
            raise SourceParseError(f"Failed to open XLS workbook: {e}") from e
        self._width = self._sheet.ncols
        self._position = 0

    def read_labels(self, source_has_header: bool) -> Record:
        if self._sheet.nrows == 0:
            return []
        labels = self._read(0)
        self._position = 1 if source_has_header else 0
        return labels

    def next_record(self) -> Record | None:
        if self._position >= self._sheet.nrows:
            return None
        record = self._read(self._position)
        self._position += 1
        return record

    def close(self) -> None:
        self._book.release_resources()

    def _read(self, row_index: int) -> list[str | None]:
        cells = [self._format(cell) for cell in self._sheet.row(row_index)]
        return normalize_cells(cells, self._width)

    def _format(self, cell: xlrd.sheet.Cell) -> str | None:
        match cell.ctype:
            case xlrd.XL_CELL_EMPTY | xlrd.XL_CELL_BLANK:
                return None
            case xlrd.XL_CELL_NUMBER:
                return format_cell(float(cell.value))
            case xlrd.XL_CELL_DATE:
                return format_cell(
                    xlrd.xldate.xldate_as_datetime(cell.value, self._book.datemode)
                )
            case xlrd.XL_CELL_BOOLEAN:
                return format_cell(bool(cell.value))
            case xlrd.XL_CELL_ERROR:
                return xlrd.error_text_from_code.get(cell.value, "#ERR")
            case _:
                return str(cell.value)


def open_spreadsheet_source(content: bytes) -> XlsxRecordSource | XlsRecordSource:
    if content.startswith(Signatures.XLSX):
        return XlsxRecordSource(content)
    if content.startswith(Signatures.XLS):
        return XlsRecordSource(content)
    raise SourceParseError(
        "Unrecognized spreadsheet content: expected an XLSX or XLS workbook"
    )


def open_spreadsheet_stream(stream: BinaryIO) -> XlsxRecordSource | XlsRecordSource:
    try:
        return open_spreadsheet_source(stream.read())
    finally:
        stream.close()

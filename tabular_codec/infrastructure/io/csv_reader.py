from __future__ import annotations

import codecs
import io
from typing import TYPE_CHECKING, BinaryIO

from ...application.models import CsvDialect, TableFileType
from .csv_parser import CsvParser
from .table_reader import Record, is_empty_record

if TYPE_CHECKING:
    from typing import TextIO


class CsvRecordSource:
    file_type = TableFileType.CSV

    def __init__(self, stream: TextIO, dialect: CsvDialect | None = None) -> None:
        super().__init__()
        self._stream = stream
        self._parser = CsvParser(stream, dialect or CsvDialect())
        self._pending: list[str] | None = None

    @classmethod
    def from_stream(
        cls, stream: BinaryIO, dialect: CsvDialect | None = None
    ) -> CsvRecordSource:
        dialect = dialect or CsvDialect()
        encoding = dialect.encoding
        if codecs.lookup(encoding).name == "utf-8":
            encoding = "utf-8-sig"
        text = io.TextIOWrapper(stream, encoding=encoding, newline="")
        return cls(text, dialect)

    @classmethod
    def from_content(
        cls, content: bytes, dialect: CsvDialect | None = None
    ) -> CsvRecordSource:
        return cls.from_stream(io.BytesIO(content), dialect)

    @property
    def parser(self) -> CsvParser:
        return self._parser

    def read_labels(self, source_has_header: bool) -> Record:
        if self._parser.end_of_file:
            return []
        first = self._parser.parse_next_line()
        if is_empty_record(first) and self._parser.end_of_file:
            return []
        if not source_has_header:
            self._pending = first
        return first

    def next_record(self) -> Record | None:
        if self._pending is not None:
            record, self._pending = self._pending, None
            return record
        if self._parser.end_of_file:
            return None
        return self._parser.parse_next_line()

    def close(self) -> None:
        self._stream.close()

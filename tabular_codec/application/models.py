"""Configuration value objects and writer parameters.

These are plain immutable values supplied by the caller (or built from
``CodecConfig``) and handed to the reader and writer services.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field
from enum import StrEnum
import re

from ..constants import Defaults, Markers
from ..domain.entities.culture import INVARIANT, Culture
from ..domain.entities.schema import DuplicateColumnPolicy
from ..domain.exceptions import ArgumentError

_ESCAPE_PATTERN = re.compile(r"\\(.)")


class TableFileType(StrEnum):
    CSV = "csv"
    XLS = "xls"
    XML = "xml"
    JSON = "json"


WRITABLE_FILE_TYPES = frozenset({TableFileType.CSV, TableFileType.XLS, TableFileType.XML})


def unescape_delimiter(value: str) -> str:
    """Turn escaped delimiter text such as ``"\\t"`` or ``"\\r\\n"`` into characters."""

    def replace(match: re.Match[str]) -> str:
        return Markers.CSV_ESCAPES.get(match.group(1), match.group(0))

    return _ESCAPE_PATTERN.sub(replace, value)


@dataclass(frozen=True, slots=True)
class CsvDialect:
    column_delimiter: str = Defaults.COLUMN_DELIMITER
    row_delimiter: str = Defaults.ROW_DELIMITER
    quotation: str = Defaults.QUOTATION
    escape_character: str = Defaults.ESCAPE_CHARACTER
    culture: Culture | None = None
    encoding: str = Defaults.CSV_ENCODING

    def __post_init__(self) -> None:
        column_delimiter = (
            unescape_delimiter(self.column_delimiter)
            if self.column_delimiter and self.column_delimiter.strip(" ")
            else Defaults.COLUMN_DELIMITER
        )
        row_delimiter = (
            unescape_delimiter(self.row_delimiter)
            if self.row_delimiter and self.row_delimiter.strip(" ")
            else Defaults.ROW_DELIMITER
        )
        object.__setattr__(self, "column_delimiter", column_delimiter)
        object.__setattr__(self, "row_delimiter", row_delimiter)
        if not self.quotation:
            object.__setattr__(self, "quotation", Defaults.QUOTATION)
        if not self.escape_character:
            object.__setattr__(self, "escape_character", Defaults.ESCAPE_CHARACTER)
        if len(self.quotation) != 1:
            raise ArgumentError(
                f"quotation must be a single character, got {self.quotation!r}"
            )
        if len(self.escape_character) != 1:
            raise ArgumentError(
                f"escape_character must be a single character, got {self.escape_character!r}"
            )
        if column_delimiter == row_delimiter:
            raise ArgumentError("column_delimiter and row_delimiter must differ")


@dataclass(frozen=True, slots=True)
class XmlDialect:
    indent: bool = Defaults.XML_INDENT
    indent_chars: str = Defaults.XML_INDENT_CHARS
    encoding: str = Defaults.XML_ENCODING
    omit_xml_declaration: bool = Defaults.XML_OMIT_DECLARATION

    def __post_init__(self) -> None:
        if self.indent_chars.strip(" \t"):
            raise ArgumentError(
                f"indent_chars must be whitespace, got {self.indent_chars!r}"
            )
        if not self.encoding:
            raise ArgumentError("encoding must not be empty")


@dataclass(frozen=True, slots=True)
class TableConfiguration:
    table_file_type: TableFileType = TableFileType.CSV
    csv_dialect: CsvDialect = field(default_factory=CsvDialect)
    xml_dialect: XmlDialect = field(default_factory=XmlDialect)
    culture: Culture = INVARIANT
    duplicate_column_policy: DuplicateColumnPolicy = DuplicateColumnPolicy.REJECT
    case_sensitive_lookup: bool = Defaults.CASE_SENSITIVE_LOOKUP

    @property
    def csv_culture(self) -> Culture:
        return self.csv_dialect.culture or self.culture


@dataclass(slots=True)
class TableWriterParameters[T]:
    data: Iterable[T] | None = None
    format: TableFileType | str = TableFileType.CSV
    include_header: bool = False
    get_column_values: Callable[[T], Iterable[str | None]] | None = None
    column_names: Sequence[str] | None = None
    configuration: TableConfiguration | None = None

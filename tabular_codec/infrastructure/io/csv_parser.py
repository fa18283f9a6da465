"""Character-level tokenizer for delimited text.

The parser reads one record per call and honours the dialect's column and
row delimiters (which may be longer than one character), quotation and
escape characters. Inside quoted text a doubled quotation character stands
for a literal one. The escape character followed by itself stands for a
literal escape character, whatever that character is.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from ...constants import Markers
from ...domain.exceptions import CsvParsingError

if TYPE_CHECKING:
    from typing import TextIO

    from ...application.models import CsvDialect

_CHUNK_SIZE = 8192


@dataclass(slots=True)
class Cursor:
    line: int = 1
    character: int = 0

    def copy(self) -> Cursor:
        return Cursor(self.line, self.character)


def to_literal(text: str) -> str:
    reverse = {v: k for k, v in Markers.CSV_ESCAPES.items()}
    return "".join(f"\\{reverse[c]}" if c in reverse else c for c in text)


class CsvParser:
    def __init__(self, stream: TextIO, dialect: CsvDialect) -> None:
        super().__init__()
        self._stream = stream
        self._dialect = dialect
        self._buffer = ""
        self._position = 0
        self._cursor = Cursor()
        self._end_of_file = False
        self._universal_newline = dialect.row_delimiter == "\r\n"

    @property
    def end_of_file(self) -> bool:
        return self._end_of_file

    @property
    def cursor(self) -> Cursor:
        return self._cursor.copy()

    def parse_all(self) -> list[list[str]]:
        rows: list[list[str]] = []
        while not self._end_of_file:
            rows.append(self.parse_next_line())
        return rows

    def parse_next_line(self) -> list[str]:
        if self._end_of_file:
            raise CsvParsingError(
                "End of file reached.", self._cursor.line, self._cursor.character
            )
        column_delimiter = self._dialect.column_delimiter
        row_delimiter = self._dialect.row_delimiter
        quotation = self._dialect.quotation
        escape = self._dialect.escape_character
        element: list[str] = []
        results: list[str] = []
        while True:
            character = self._next()
            if character == "" or character == row_delimiter[0]:
                if character:
                    self._consume_delimiter(row_delimiter, "row delimiter")
                self._next_line()
                results.append("".join(element))
                return results
            if self._universal_newline and character == "\n":
                self._next_line()
                results.append("".join(element))
                return results
            if character == column_delimiter[0]:
                self._consume_delimiter(column_delimiter, "column delimiter")
                results.append("".join(element))
                element = []
                continue
            if character == quotation:
                element.append(self._quoted())
                continue
            if character == escape:
                element.append(self._escaped())
                continue
            element.append(character)

    def _quoted(self) -> str:
        quotation = self._dialect.quotation
        escape = self._dialect.escape_character
        start = self._cursor.copy()
        value: list[str] = []
        while (character := self._next()) != "":
            if character == quotation:
                if self._peek() != quotation:
                    return "".join(value)
                self._next()
                value.append(quotation)
                continue
            if character == escape:
                value.append(self._escaped())
                continue
            value.append(character)
        raise CsvParsingError(
            "The literal string was not terminated.", start.line, start.character
        )

    def _escaped(self) -> str:
        character = self._next()
        if character == self._dialect.escape_character:
            return character
        escaped = Markers.CSV_ESCAPES.get(character) if character else None
        if escaped is None:
            raise CsvParsingError(
                "The escaped character is not recognized as valid escapable character.",
                self._cursor.line,
                self._cursor.character,
            )
        return escaped

    def _consume_delimiter(self, delimiter: str, name: str) -> None:
        found = delimiter[0]
        for expected in delimiter[1:]:
            character = self._peek()
            if character == "":
                return
            found += character
            if character != expected:
                raise CsvParsingError(
                    f"Problems with the file while parsing the {name}: "
                    f"Expecting '{to_literal(delimiter)}' but found '{to_literal(found)}'.",
                    self._cursor.line,
                    self._cursor.character,
                )
            self._next()

    def _next(self) -> str:
        if not self._fill():
            self._end_of_file = True
            return ""
        character = self._buffer[self._position]
        self._position += 1
        self._cursor.character += 1
        return character

    def _peek(self) -> str:
        if not self._fill():
            return ""
        return self._buffer[self._position]

    def _fill(self) -> bool:
        if self._position < len(self._buffer):
            return True
        self._buffer = self._stream.read(_CHUNK_SIZE)
        self._position = 0
        return bool(self._buffer)

    def _next_line(self) -> None:
        self._cursor.line += 1
        self._cursor.character = 0

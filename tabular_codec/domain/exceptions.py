class TableCodecError(Exception):
    pass


class ArgumentError(TableCodecError, ValueError):
    pass


class UnsupportedFormatError(TableCodecError):
    pass


class SchemaError(TableCodecError):
    pass


class ColumnNotFoundError(SchemaError):
    pass


class AmbiguousColumnError(SchemaError):
    pass


class ColumnIndexError(SchemaError, IndexError):
    pass


class SchemaMismatchError(SchemaError):
    pass


class FormatConversionError(TableCodecError, ValueError):
    def __init__(self, column_index: int, target_type: str, value: object) -> None:
        super().__init__(
            f"Column {column_index}: cannot convert {value!r} to {target_type}"
        )
        self.column_index = column_index
        self.target_type = target_type
        self.value = value


class InvalidCharacterError(TableCodecError, ValueError):
    """A value holds a character the target format cannot store.

    ``row`` is the 1-based data row, or 0 for the header row.
    """

    def __init__(self, row: int, column: str, value: str) -> None:
        location = f"Row {row}" if row else "Header"
        super().__init__(
            f"{location}, column {column!r}: {value!r} contains a character "
            "that cannot be written"
        )
        self.row = row
        self.column = column
        self.value = value


class SourceParseError(TableCodecError):
    pass


class CsvParsingError(SourceParseError):
    def __init__(self, message: str, line: int, character: int) -> None:
        super().__init__(f"[Line: {line} Character: {character}]: {message}")
        self.line = line
        self.character = character


class ReaderStateError(TableCodecError):
    pass


class ReaderClosedError(ReaderStateError):
    pass


class NoCurrentRowError(ReaderStateError):
    pass

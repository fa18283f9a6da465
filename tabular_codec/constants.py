from typing import ClassVar


class Defaults:
    COLUMN_DELIMITER = ","
    ROW_DELIMITER = "\r\n"
    QUOTATION = '"'
    ESCAPE_CHARACTER = "\\"
    CSV_ENCODING = "utf-8"
    XML_INDENT = True
    XML_INDENT_CHARS = "  "
    XML_ENCODING = "utf-8"
    XML_OMIT_DECLARATION = False
    CULTURE = "invariant"
    SOURCE_HAS_HEADER = True
    CASE_SENSITIVE_LOOKUP = False
    DUPLICATE_COLUMNS = "reject"
    CONFIG_FILE = "tabular_codec.toml"


class Names:
    GENERATED_COLUMN_PREFIX = "Column"
    BLANK_XML_NAME = "Column"
    XML_TABLE_ELEMENT = "Table"
    XML_ROW_ELEMENT = "Row"
    XLS_SHEET_TITLE = "Sheet1"


class Signatures:
    XLSX = b"PK\x03\x04"
    XLS = b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1"


class Markers:
    XML_NAME_EXTRA_CHARS: ClassVar[frozenset[str]] = frozenset({"-", ".", "_"})
    CSV_ESCAPES: ClassVar[dict[str, str]] = {
        "'": "'",
        '"': '"',
        "\\": "\\",
        "0": "\0",
        "a": "\a",
        "b": "\b",
        "f": "\f",
        "n": "\n",
        "r": "\r",
        "t": "\t",
        "v": "\v",
    }


class LogLevels:
    NORMAL = 0
    VERBOSE = 1
    DEBUG = 2

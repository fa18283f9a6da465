from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, replace
import os
from pathlib import Path
import tomllib
from typing import cast
import warnings

from .application.models import (
    CsvDialect,
    TableConfiguration,
    TableFileType,
    XmlDialect,
)
from .constants import Defaults
from .domain.entities.culture import get_culture
from .domain.entities.schema import DuplicateColumnPolicy

_TRUE_STRINGS = frozenset({"1", "true", "yes", "on"})
_FALSE_STRINGS = frozenset({"0", "false", "no", "off"})


@dataclass(frozen=True, slots=True)
class CodecConfig:
    file_type: str = TableFileType.CSV.value
    culture: str = Defaults.CULTURE
    csv_column_delimiter: str = Defaults.COLUMN_DELIMITER
    csv_row_delimiter: str = Defaults.ROW_DELIMITER
    csv_quotation: str = Defaults.QUOTATION
    csv_escape_character: str = Defaults.ESCAPE_CHARACTER
    csv_encoding: str = Defaults.CSV_ENCODING
    csv_culture: str | None = None
    xml_indent: bool = Defaults.XML_INDENT
    xml_indent_chars: str = Defaults.XML_INDENT_CHARS
    xml_encoding: str = Defaults.XML_ENCODING
    xml_omit_declaration: bool = Defaults.XML_OMIT_DECLARATION
    duplicate_columns: str = Defaults.DUPLICATE_COLUMNS
    case_sensitive_lookup: bool = Defaults.CASE_SENSITIVE_LOOKUP

    def __post_init__(self) -> None:
        if self.file_type not in {t.value for t in TableFileType}:
            raise ValueError(
                f"file_type must be one of csv/xls/xml/json, got {self.file_type!r}"
            )
        if self.duplicate_columns not in {p.value for p in DuplicateColumnPolicy}:
            raise ValueError(
                "duplicate_columns must be one of first/last/reject, "
                f"got {self.duplicate_columns!r}"
            )
        get_culture(self.culture)
        if self.csv_culture is not None:
            get_culture(self.csv_culture)
        if self.xml_indent_chars.strip(" \t"):
            raise ValueError(
                f"xml_indent_chars must be whitespace, got {self.xml_indent_chars!r}"
            )

    @classmethod
    def from_env(cls) -> CodecConfig:
        raw_csv_culture = os.getenv("TABULAR_CSV_CULTURE")
        csv_culture = raw_csv_culture.strip() if raw_csv_culture else None
        return cls(
            file_type=os.getenv("TABULAR_FILE_TYPE", TableFileType.CSV.value).lower(),
            culture=os.getenv("TABULAR_CULTURE", Defaults.CULTURE),
            csv_column_delimiter=os.getenv(
                "TABULAR_CSV_DELIMITER", Defaults.COLUMN_DELIMITER
            ),
            csv_row_delimiter=os.getenv(
                "TABULAR_CSV_ROW_DELIMITER", Defaults.ROW_DELIMITER
            ),
            csv_encoding=os.getenv("TABULAR_CSV_ENCODING", Defaults.CSV_ENCODING),
            csv_culture=csv_culture or None,
            xml_indent=_coerce_bool(
                os.getenv("TABULAR_XML_INDENT", str(Defaults.XML_INDENT)),
                key="TABULAR_XML_INDENT",
            ),
            duplicate_columns=os.getenv(
                "TABULAR_DUPLICATE_COLUMNS", Defaults.DUPLICATE_COLUMNS
            ).lower(),
        )

    def to_table_configuration(self) -> TableConfiguration:
        csv_culture = get_culture(self.csv_culture) if self.csv_culture else None
        return TableConfiguration(
            table_file_type=TableFileType(self.file_type),
            csv_dialect=CsvDialect(
                column_delimiter=self.csv_column_delimiter,
                row_delimiter=self.csv_row_delimiter,
                quotation=self.csv_quotation,
                escape_character=self.csv_escape_character,
                culture=csv_culture,
                encoding=self.csv_encoding,
            ),
            xml_dialect=XmlDialect(
                indent=self.xml_indent,
                indent_chars=self.xml_indent_chars,
                encoding=self.xml_encoding,
                omit_xml_declaration=self.xml_omit_declaration,
            ),
            culture=get_culture(self.culture),
            duplicate_column_policy=DuplicateColumnPolicy(self.duplicate_columns),
            case_sensitive_lookup=self.case_sensitive_lookup,
        )


# (table, key) -> CodecConfig field
_TOML_FIELDS: dict[tuple[str, str], str] = {
    ("default", "file_type"): "file_type",
    ("default", "culture"): "culture",
    ("csv", "column_delimiter"): "csv_column_delimiter",
    ("csv", "row_delimiter"): "csv_row_delimiter",
    ("csv", "quotation"): "csv_quotation",
    ("csv", "escape_character"): "csv_escape_character",
    ("csv", "encoding"): "csv_encoding",
    ("csv", "culture"): "csv_culture",
    ("xml", "indent"): "xml_indent",
    ("xml", "indent_chars"): "xml_indent_chars",
    ("xml", "encoding"): "xml_encoding",
    ("xml", "omit_declaration"): "xml_omit_declaration",
    ("schema", "duplicate_columns"): "duplicate_columns",
    ("schema", "case_sensitive"): "case_sensitive_lookup",
}
_BOOL_FIELDS = frozenset({"xml_indent", "xml_omit_declaration", "case_sensitive_lookup"})
_LOWERCASE_FIELDS = frozenset({"file_type", "duplicate_columns"})


class ConfigLoader:
    pass

    @staticmethod
    def load(config_file: Path | None = None) -> CodecConfig:
        config = CodecConfig.from_env()
        if config_file is None:
            config_file = Path(Defaults.CONFIG_FILE)
        if config_file.exists():
            try:
                config = ConfigLoader._load_from_toml(config_file, config)
            except Exception as e:
                warnings.warn(
                    f"Failed to load config from {config_file}: {e}", stacklevel=2
                )
        return config

    @staticmethod
    def _load_from_toml(config_file: Path, base_config: CodecConfig) -> CodecConfig:
        with config_file.open("rb") as handle:
            data = tomllib.load(handle)
        changes: dict[str, object] = {}
        for (table, key), field_name in _TOML_FIELDS.items():
            value = _get_table(data, table).get(key)
            if value is None:
                continue
            changes[field_name] = _coerce_field(field_name, value, key=f"{table}.{key}")
        return replace(base_config, **changes)


def _get_table(data: Mapping[str, object], key: str) -> Mapping[str, object]:
    value = data.get(key)
    if isinstance(value, Mapping):
        return cast("Mapping[str, object]", value)
    return {}


def _coerce_field(field_name: str, value: object, *, key: str) -> object:
    if field_name in _BOOL_FIELDS:
        return _coerce_bool(value, key=key)
    text = _coerce_str(value, key=key)
    if field_name in _LOWERCASE_FIELDS:
        return text.lower()
    if field_name == "csv_culture":
        return text.strip() or None
    return text


def _coerce_str(value: object, *, key: str) -> str:
    if isinstance(value, str):
        return value
    raise ValueError(f"{key} must be a string, got {type(value).__name__}")


def _coerce_bool(value: object, *, key: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
    raise ValueError(f"{key} must be a boolean, got {value!r}")

"""Unit tests for TableWriterService."""

import io

import pytest

from tabular_codec.application.models import (
    TableConfiguration,
    TableFileType,
    TableWriterParameters,
    XmlDialect,
)
from tabular_codec.application.ports.services import TableWriterServicePort
from tabular_codec.domain.exceptions import (
    ArgumentError,
    SchemaMismatchError,
    UnsupportedFormatError,
)
from tabular_codec.infrastructure.services import TableWriterService


class Person:
    def __init__(self, name: str, age: int, email: str | None):
        self.name = name
        self.age = age
        self.email = email


PEOPLE = [Person("John", 25, "john@example.com"), Person("Jane", 31, None)]


def person_values(person: Person) -> list[str | None]:
    return [person.name, str(person.age), person.email]


def parameters(fmt=TableFileType.CSV, **overrides) -> TableWriterParameters[Person]:
    values = {
        "data": PEOPLE,
        "format": fmt,
        "include_header": True,
        "get_column_values": person_values,
        "column_names": ["Name", "Age", "Email"],
    }
    values.update(overrides)
    return TableWriterParameters(**values)


class RecordingLogger:
    def __init__(self):
        self.written: list[tuple] = []
        self.errors: list[str] = []

    def error(self, message: str) -> None:
        self.errors.append(message)

    def log_table_written(self, file_type, row_count, column_count=None):
        self.written.append((file_type, row_count, column_count))


class TestTableWriterService:
    """Test suite for TableWriterService."""

    def setup_method(self):
        self.service = TableWriterService()

    def test_implements_port(self):
        assert isinstance(self.service, TableWriterServicePort)

    def test_csv_to_bytes(self):
        content = self.service.write_to_bytes(parameters())

        text = content.decode("utf-8")
        assert "Name,Age,Email" in text
        assert "John,25,john@example.com" in text

    def test_write_to_stream_returns_row_count(self):
        target = io.BytesIO()

        assert self.service.write_to_stream(target, parameters()) == 2
        assert not target.closed

    def test_format_given_as_string(self):
        content = self.service.write_to_bytes(parameters("xml"))

        assert b"<Table>" in content

    def test_xls_output_is_a_zip_workbook(self):
        content = self.service.write_to_bytes(parameters(TableFileType.XLS))

        assert content.startswith(b"PK\x03\x04")

    def test_xml_dialect_from_configuration(self):
        configuration = TableConfiguration(xml_dialect=XmlDialect(indent=False))

        content = self.service.write_to_bytes(
            parameters(TableFileType.XML, configuration=configuration)
        )

        assert b"<Table><Row><Name>John</Name>" in content

    @pytest.mark.parametrize(
        "overrides",
        [{"data": None}, {"get_column_values": None}],
    )
    def test_missing_arguments_raise(self, overrides: dict):
        with pytest.raises(ArgumentError):
            self.service.write_to_bytes(parameters(**overrides))

    def test_none_target_raises(self):
        with pytest.raises(ArgumentError, match="target"):
            self.service.write_to_stream(None, parameters())

    def test_none_parameters_raise(self):
        with pytest.raises(ArgumentError, match="parameters"):
            self.service.write_to_bytes(None)

    @pytest.mark.parametrize("fmt", [TableFileType.JSON, "parquet", 7])
    def test_unsupported_format_raises_before_writing(self, fmt: object):
        target = io.BytesIO()

        with pytest.raises(UnsupportedFormatError, match="TableWriter not found"):
            self.service.write_to_stream(target, parameters(fmt))
        assert target.getvalue() == b""

    def test_logger_records_writes_and_errors(self):
        logger = RecordingLogger()
        service = TableWriterService(logger=logger)

        service.write_to_bytes(parameters())
        with pytest.raises(SchemaMismatchError):
            service.write_to_bytes(
                parameters(
                    TableFileType.XML,
                    data=[PEOPLE[0], "bad"],
                    get_column_values=lambda item: (
                        person_values(item) if isinstance(item, Person) else [item]
                    ),
                )
            )

        assert logger.written == [(TableFileType.CSV, 2, 3)]
        assert len(logger.errors) == 1

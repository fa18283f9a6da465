"""Infrastructure adapter that opens a TableReader for a source."""

from __future__ import annotations

import io
from typing import TYPE_CHECKING, BinaryIO, override

from ...application.models import TableConfiguration, TableFileType
from ...application.ports.services import LoggerPort, TableReaderServicePort
from ...domain.exceptions import ArgumentError, UnsupportedFormatError
from ..io.csv_reader import CsvRecordSource
from ..io.json_reader import JsonRecordSource
from ..io.table_reader import TableReader
from ..io.xls_reader import open_spreadsheet_stream
from ..io.xml_reader import XmlRecordSource
from ..logging.null_logger import NullLogger

if TYPE_CHECKING:
    from ..io.table_reader import RecordSource


def resolve_file_type(value: object) -> TableFileType:
    if isinstance(value, TableFileType):
        return value
    if isinstance(value, str):
        try:
            return TableFileType(value.strip().lower())
        except ValueError:
            pass
    raise UnsupportedFormatError(f"TableReader not found for file type {value!r}")


class TableReaderService(TableReaderServicePort):
    """Pick the record source for the configured file type and wrap it.

    The returned reader owns the source: closing the reader closes the
    caller's stream. Seekable streams are rewound to the start first.
    """

    def __init__(
        self,
        *,
        logger: LoggerPort | None = None,
        default_configuration: TableConfiguration | None = None,
    ) -> None:
        super().__init__()
        self._logger = logger or NullLogger()
        self._default_configuration = default_configuration or TableConfiguration()

    @property
    def default_configuration(self) -> TableConfiguration:
        return self._default_configuration

    @override
    def get_reader_instance(
        self,
        source: bytes | bytearray | BinaryIO | None,
        source_has_header: bool,
        configuration: TableConfiguration | None = None,
    ) -> TableReader:
        if source is None:
            raise ArgumentError("source must not be None")
        configuration = configuration or self._default_configuration
        file_type = resolve_file_type(configuration.table_file_type)

        stream = self._as_stream(source)
        record_source = self._open_source(stream, file_type, configuration)
        culture = (
            configuration.csv_culture
            if file_type is TableFileType.CSV
            else configuration.culture
        )
        self._logger.debug(f"Opening {file_type} reader (culture={culture.name})")
        return TableReader(
            record_source,
            source_has_header,
            configuration,
            culture=culture,
            logger=self._logger,
        )

    @staticmethod
    def _as_stream(source: bytes | bytearray | BinaryIO) -> BinaryIO:
        if isinstance(source, bytes | bytearray | memoryview):
            return io.BytesIO(bytes(source))
        if not hasattr(source, "read"):
            raise ArgumentError(
                f"source must be bytes or a binary stream, got {type(source).__name__}"
            )
        if source.seekable():
            source.seek(0)
        return source

    @staticmethod
    def _open_source(
        stream: BinaryIO, file_type: TableFileType, configuration: TableConfiguration
    ) -> RecordSource:
        match file_type:
            case TableFileType.CSV:
                return CsvRecordSource.from_stream(stream, configuration.csv_dialect)
            case TableFileType.XLS:
                return open_spreadsheet_stream(stream)
            case TableFileType.XML:
                return XmlRecordSource.from_stream(stream)
            case TableFileType.JSON:
                return JsonRecordSource.from_stream(stream)
        raise UnsupportedFormatError(f"TableReader not found for {file_type!r}")

"""Infrastructure adapter that serializes items through a format writer."""

from __future__ import annotations

import io
from typing import TYPE_CHECKING, BinaryIO, override

from ...application.models import (
    WRITABLE_FILE_TYPES,
    TableConfiguration,
    TableFileType,
    TableWriterParameters,
)
from ...application.ports.services import LoggerPort, TableWriterServicePort
from ...domain.exceptions import (
    ArgumentError,
    TableCodecError,
    UnsupportedFormatError,
)
from ..io.csv_writer import write_csv
from ..io.xls_writer import write_xls
from ..io.xml_writer import write_xml
from ..logging.null_logger import NullLogger

if TYPE_CHECKING:
    from collections.abc import Sequence


def resolve_writer_format(value: object) -> TableFileType:
    file_type: TableFileType | None = None
    if isinstance(value, TableFileType):
        file_type = value
    elif isinstance(value, str):
        try:
            file_type = TableFileType(value.strip().lower())
        except ValueError:
            file_type = None
    if file_type is None or file_type not in WRITABLE_FILE_TYPES:
        raise UnsupportedFormatError(f"TableWriter not found for format {value!r}")
    return file_type


class TableWriterService(TableWriterServicePort):
    """Validate writer parameters and dispatch to the format writer.

    All argument checks happen before any byte reaches the target. The
    target stream is flushed but never closed.
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

    @override
    def write_to_stream(
        self, target: BinaryIO | None, parameters: TableWriterParameters | None
    ) -> int:
        if target is None:
            raise ArgumentError("target must not be None")
        if parameters is None:
            raise ArgumentError("parameters must not be None")
        if parameters.data is None:
            raise ArgumentError("Data property cannot be None.")
        if parameters.get_column_values is None:
            raise ArgumentError("get_column_values must not be None")
        file_type = resolve_writer_format(parameters.format)
        configuration = parameters.configuration or self._default_configuration
        column_names: Sequence[str] | None = parameters.column_names

        try:
            match file_type:
                case TableFileType.CSV:
                    written = write_csv(
                        target,
                        parameters.data,
                        parameters.include_header,
                        parameters.get_column_values,
                        column_names,
                        configuration.csv_dialect,
                    )
                case TableFileType.XLS:
                    written = write_xls(
                        target,
                        parameters.data,
                        parameters.include_header,
                        parameters.get_column_values,
                        column_names,
                    )
                case _:
                    written = write_xml(
                        target,
                        parameters.data,
                        parameters.include_header,
                        parameters.get_column_values,
                        column_names,
                        configuration.xml_dialect,
                    )
        except TableCodecError as e:
            self._logger.error(f"Failed to write {file_type} table: {e}")
            raise

        self._logger.log_table_written(
            file_type,
            written,
            len(column_names) if column_names is not None else None,
        )
        return written

    @override
    def write_to_bytes(self, parameters: TableWriterParameters | None) -> bytes:
        buffer = io.BytesIO()
        self.write_to_stream(buffer, parameters)
        return buffer.getvalue()

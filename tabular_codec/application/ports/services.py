from __future__ import annotations

from typing import TYPE_CHECKING, BinaryIO, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ...domain.entities.row import Row
    from ...domain.entities.schema import TableSchema
    from ..models import TableConfiguration, TableWriterParameters


@runtime_checkable
class LoggerPort(Protocol):
    pass

    def info(self, message: str) -> None: ...

    def success(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...

    def debug(self, message: str) -> None: ...

    def verbose(self, message: str) -> None: ...

    def log_reader_opened(
        self, file_type: str, column_count: int, *, source_has_header: bool
    ) -> None: ...

    def log_reader_closed(self, file_type: str, rows_read: int) -> None: ...

    def log_table_written(
        self, file_type: str, row_count: int, column_count: int | None = None
    ) -> None: ...

    def log_final_stats(self) -> None: ...


@runtime_checkable
class TableReaderPort(Protocol):
    pass

    @property
    def schema(self) -> TableSchema: ...

    def read_row(self) -> bool: ...

    def get_current_row(self) -> Row: ...

    def close(self) -> None: ...


@runtime_checkable
class TableReaderServicePort(Protocol):
    pass

    def get_reader_instance(
        self,
        source: bytes | bytearray | BinaryIO | None,
        source_has_header: bool,
        configuration: TableConfiguration | None = None,
    ) -> TableReaderPort: ...


@runtime_checkable
class TableWriterServicePort(Protocol):
    pass

    def write_to_stream(
        self, target: BinaryIO | None, parameters: TableWriterParameters | None
    ) -> int: ...

    def write_to_bytes(self, parameters: TableWriterParameters | None) -> bytes: ...

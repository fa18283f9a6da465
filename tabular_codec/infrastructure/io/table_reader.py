"""Format-independent table reader.

A TableReader owns one RecordSource (the per-format strategy), infers the
schema once during construction and then advances record by record.

Reader states::

    SCHEMA_READY -> READING <-> READING -> EXHAUSTED
    (any state) -> CLOSED

Once EXHAUSTED, ``read_row()`` keeps returning False. A structural error
(schema mismatch, malformed source) also moves the reader to EXHAUSTED after
the error has been raised, so a malformed source never yields further rows.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from enum import StrEnum
from typing import TYPE_CHECKING, Protocol, Self

from ...application.models import TableConfiguration, TableFileType
from ...application.ports.services import TableReaderPort
from ...domain.entities.row import Row
from ...domain.entities.schema import TableSchema
from ...domain.exceptions import (
    NoCurrentRowError,
    ReaderClosedError,
    SchemaMismatchError,
)
from ..logging.null_logger import NullLogger

if TYPE_CHECKING:
    from types import TracebackType

    import pandas as pd

    from ...application.ports.services import LoggerPort
    from ...domain.entities.culture import Culture

type Record = Sequence[str | None]


class RecordSource(Protocol):
    """Per-format access to the physical records of a table source."""

    file_type: TableFileType

    def read_labels(self, source_has_header: bool) -> Record:
        """Return the first record's labels and position on the first data record.

        When the source has a header, the header record is consumed. Otherwise
        the next call to ``next_record`` returns the first record again.
        An empty source returns an empty sequence.
        """
        ...

    def next_record(self) -> Record | None:
        """Return the next record, or None when the source is exhausted."""
        ...

    def close(self) -> None: ...


class ReaderState(StrEnum):
    SCHEMA_READY = "schema_ready"
    READING = "reading"
    EXHAUSTED = "exhausted"
    CLOSED = "closed"


def is_empty_record(record: Record) -> bool:
    if len(record) == 0:
        return True
    return len(record) == 1 and not record[0]


class TableReader(TableReaderPort):
    def __init__(
        self,
        source: RecordSource,
        source_has_header: bool,
        configuration: TableConfiguration | None = None,
        *,
        culture: Culture | None = None,
        logger: LoggerPort | None = None,
    ) -> None:
        super().__init__()
        configuration = configuration or TableConfiguration()
        self._source = source
        self._culture = culture or configuration.culture
        self._logger = logger or NullLogger()
        self._current: Row | None = None
        self._rows_read = 0
        try:
            labels = source.read_labels(source_has_header)
            self._schema = TableSchema.initialize(
                labels,
                source_has_header,
                duplicate_policy=configuration.duplicate_column_policy,
                case_sensitive=configuration.case_sensitive_lookup,
            )
        except BaseException:
            source.close()
            raise
        self._state = ReaderState.SCHEMA_READY
        for name in self._schema.duplicated_names():
            self._logger.warning(f"Duplicate column name '{name}' in {self.file_type}")
        self._logger.log_reader_opened(
            self.file_type,
            self._schema.column_count,
            source_has_header=source_has_header,
        )

    @property
    def schema(self) -> TableSchema:
        return self._schema

    @property
    def file_type(self) -> TableFileType:
        return self._source.file_type

    @property
    def state(self) -> ReaderState:
        return self._state

    @property
    def rows_read(self) -> int:
        return self._rows_read

    def read_row(self) -> bool:
        if self._state is ReaderState.CLOSED:
            raise ReaderClosedError("Can not read a row when the reader is closed.")
        if self._state is ReaderState.EXHAUSTED:
            return False
        try:
            record = self._source.next_record()
        except Exception:
            self._state = ReaderState.EXHAUSTED
            raise
        if record is None or is_empty_record(record):
            self._state = ReaderState.EXHAUSTED
            return False
        index = self._rows_read + 1
        if len(record) != self._schema.column_count:
            self._state = ReaderState.EXHAUSTED
            raise SchemaMismatchError(
                f"The row number {index} does not have the proper amount of columns. "
                f"The file has {self._schema.column_count} but the row has {len(record)}."
            )
        self._rows_read = index
        self._current = Row(index, tuple(record), self._schema, self._culture)
        self._state = ReaderState.READING
        return True

    def get_current_row(self) -> Row:
        if self._current is None:
            raise NoCurrentRowError("No row has been read from this table.")
        return self._current

    def to_dataframe(self) -> pd.DataFrame:
        from .frame_adapter import read_frame

        return read_frame(self)

    def close(self) -> None:
        if self._state is ReaderState.CLOSED:
            return
        self._state = ReaderState.CLOSED
        try:
            self._source.close()
        finally:
            self._logger.log_reader_closed(self.file_type, self._rows_read)

    def __iter__(self) -> Iterator[Row]:
        while self.read_row():
            yield self.get_current_row()

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

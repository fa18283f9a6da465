from typing import override

from ...application.ports.services import LoggerPort


class NullLogger(LoggerPort):
    pass

    @override
    def info(self, message: str) -> None:
        return

    @override
    def success(self, message: str) -> None:
        return

    @override
    def warning(self, message: str) -> None:
        return

    @override
    def error(self, message: str) -> None:
        return

    @override
    def debug(self, message: str) -> None:
        return

    @override
    def verbose(self, message: str) -> None:
        return

    @override
    def log_reader_opened(
        self, file_type: str, column_count: int, *, source_has_header: bool
    ) -> None:
        return None

    @override
    def log_reader_closed(self, file_type: str, rows_read: int) -> None:
        return None

    @override
    def log_table_written(
        self, file_type: str, row_count: int, column_count: int | None = None
    ) -> None:
        return None

    @override
    def log_final_stats(self) -> None:
        return None

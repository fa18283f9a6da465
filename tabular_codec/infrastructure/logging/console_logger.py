from dataclasses import dataclass, field
from datetime import datetime
from enum import IntEnum
from typing import override

from rich.console import Console
from rich.markup import escape

from ...application.ports.services import LoggerPort
from ...constants import LogLevels


class LogLevel(IntEnum):
    NORMAL = LogLevels.NORMAL
    VERBOSE = LogLevels.VERBOSE
    DEBUG = LogLevels.DEBUG


@dataclass(slots=True)
class LogContext:
    file_type: str = ""
    operation: str = ""
    start_time: datetime = field(default_factory=datetime.now)

    def elapsed_ms(self) -> float:
        return (datetime.now() - self.start_time).total_seconds() * 1000


def _empty_stats() -> dict[str, int]:
    return {
        "readers_opened": 0,
        "rows_read": 0,
        "tables_written": 0,
        "rows_written": 0,
        "warnings": 0,
        "errors": 0,
    }


class ConsoleLogger(LoggerPort):
    pass

    def __init__(self, console: Console | None = None, verbosity: int = 0) -> None:
        super().__init__()
        self.console = console or Console()
        self.verbosity = verbosity
        self._context: LogContext | None = None
        self._stats: dict[str, int] = _empty_stats()

    def set_context(self, **kwargs: str) -> None:
        if self._context is None:
            self._context = LogContext()
        for key, value in kwargs.items():
            if hasattr(self._context, key):
                setattr(self._context, key, value)

    def clear_context(self) -> None:
        self._context = None

    @override
    def info(self, message: str, *, level: int = LogLevel.NORMAL) -> None:
        if self.verbosity >= level:
            prefix = self._get_prefix()
            self.console.print(f"{prefix}{message}")

    @override
    def verbose(self, message: str) -> None:
        if self.verbosity >= LogLevel.VERBOSE:
            prefix = self._get_prefix()
            self.console.print(f"[dim]{prefix}{message}[/dim]")

    @override
    def debug(self, message: str) -> None:
        if self.verbosity >= LogLevel.DEBUG:
            prefix = self._get_prefix()
            self.console.print(f"[dim cyan]{prefix}{message}[/dim cyan]")

    @override
    def success(self, message: str) -> None:
        self.console.print(f"[green]✓[/green] {message}")

    @override
    def warning(self, message: str) -> None:
        self._stats["warnings"] += 1
        self.console.print(f"[yellow]⚠[/yellow] {message}")

    @override
    def error(self, message: str) -> None:
        self._stats["errors"] += 1
        self.console.print(f"[red]✗[/red] {message}")

    @override
    def log_reader_opened(
        self, file_type: str, column_count: int, *, source_has_header: bool
    ) -> None:
        self.set_context(file_type=str(file_type), operation="read")
        self._stats["readers_opened"] += 1
        header = "header" if source_has_header else "no header"
        self.verbose(f"Opened {file_type} reader: {column_count} columns ({header})")

    @override
    def log_reader_closed(self, file_type: str, rows_read: int) -> None:
        self._stats["rows_read"] += rows_read
        msg = f"Closed {file_type} reader after {rows_read:,} rows"
        if self._context is not None and self.verbosity >= LogLevel.DEBUG:
            msg += f" ({self._context.elapsed_ms():.1f} ms)"
        self.verbose(msg)
        self.clear_context()

    @override
    def log_table_written(
        self, file_type: str, row_count: int, column_count: int | None = None
    ) -> None:
        self._stats["tables_written"] += 1
        self._stats["rows_written"] += row_count
        msg = f"Wrote {row_count:,} rows as {file_type}"
        if column_count is not None and self.verbosity >= LogLevel.DEBUG:
            msg += f" ({column_count} columns)"
        self.verbose(msg)

    @override
    def log_final_stats(self) -> None:
        if self.verbosity >= LogLevel.VERBOSE:
            self.console.print()
            self.console.print("[dim]Codec Statistics:[/dim]")
            self.console.print(
                f"[dim]  Readers opened: {self._stats['readers_opened']}[/dim]"
            )
            self.console.print(f"[dim]  Rows read: {self._stats['rows_read']:,}[/dim]")
            self.console.print(
                f"[dim]  Tables written: {self._stats['tables_written']}[/dim]"
            )
            self.console.print(
                f"[dim]  Rows written: {self._stats['rows_written']:,}[/dim]"
            )
            if self._stats["warnings"] > 0:
                self.console.print(
                    f"[dim yellow]  Warnings: {self._stats['warnings']}[/dim yellow]"
                )
            if self._stats["errors"] > 0:
                self.console.print(
                    f"[dim red]  Errors: {self._stats['errors']}[/dim red]"
                )

    def get_stats(self) -> dict[str, int]:
        return self._stats.copy()

    def reset_stats(self) -> None:
        self._stats = _empty_stats()

    def _get_prefix(self) -> str:
        if self._context is None or self.verbosity < LogLevel.DEBUG:
            return ""
        parts = [p for p in (self._context.file_type, self._context.operation) if p]
        return escape(f"[{':'.join(parts)}] ") if parts else ""

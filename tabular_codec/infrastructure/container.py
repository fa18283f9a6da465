from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console

from ..config import CodecConfig
from .logging.console_logger import ConsoleLogger
from .logging.null_logger import NullLogger
from .services.table_reader_service import TableReaderService
from .services.table_writer_service import TableWriterService

if TYPE_CHECKING:
    from ..application.models import TableConfiguration
    from ..application.ports.services import (
        LoggerPort,
        TableReaderServicePort,
        TableWriterServicePort,
    )


class DependencyContainer:
    pass

    def __init__(
        self,
        config: CodecConfig | None = None,
        verbose: int = 0,
        console: Console | None = None,
        use_null_logger: bool = False,
    ) -> None:
        super().__init__()
        self.config = config or CodecConfig()
        self.verbose = verbose
        self.console = console or Console()
        self.use_null_logger = use_null_logger
        self._logger_instance: LoggerPort | None = None
        self._table_configuration_instance: TableConfiguration | None = None
        self._reader_service_instance: TableReaderServicePort | None = None
        self._writer_service_instance: TableWriterServicePort | None = None

    def create_logger(self) -> LoggerPort:
        if self._logger_instance is None:
            if self.use_null_logger:
                self._logger_instance = NullLogger()
            else:
                self._logger_instance = ConsoleLogger(
                    console=self.console, verbosity=self.verbose
                )
        return self._logger_instance

    def create_table_configuration(self) -> TableConfiguration:
        if self._table_configuration_instance is None:
            self._table_configuration_instance = self.config.to_table_configuration()
        return self._table_configuration_instance

    def create_reader_service(self) -> TableReaderServicePort:
        if self._reader_service_instance is None:
            self._reader_service_instance = TableReaderService(
                logger=self.create_logger(),
                default_configuration=self.create_table_configuration(),
            )
        return self._reader_service_instance

    def create_writer_service(self) -> TableWriterServicePort:
        if self._writer_service_instance is None:
            self._writer_service_instance = TableWriterService(
                logger=self.create_logger(),
                default_configuration=self.create_table_configuration(),
            )
        return self._writer_service_instance

    def reset_singletons(self) -> None:
        self._logger_instance = None
        self._table_configuration_instance = None
        self._reader_service_instance = None
        self._writer_service_instance = None

    def override_logger(self, logger: LoggerPort) -> None:
        self._logger_instance = logger

    def override_reader_service(self, service: TableReaderServicePort) -> None:
        self._reader_service_instance = service

    def override_writer_service(self, service: TableWriterServicePort) -> None:
        self._writer_service_instance = service


def create_default_container(verbose: int = 0) -> DependencyContainer:
    return DependencyContainer(verbose=verbose)

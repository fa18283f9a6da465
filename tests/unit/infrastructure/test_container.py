"""Tests for dependency injection container.

These tests verify the container correctly creates and wires up dependencies,
including singleton patterns, configuration injection, and testing overrides.
"""

from rich.console import Console

from tabular_codec.application.models import TableFileType, TableWriterParameters
from tabular_codec.application.ports import (
    LoggerPort,
    TableReaderServicePort,
    TableWriterServicePort,
)
from tabular_codec.config import CodecConfig
from tabular_codec.infrastructure.container import (
    DependencyContainer,
    create_default_container,
)
from tabular_codec.infrastructure.logging import ConsoleLogger, NullLogger
from tabular_codec.infrastructure.services import (
    TableReaderService,
    TableWriterService,
)


class MockLogger:
    """Mock logger for testing overrides."""

    def __init__(self):
        self.messages = []

    def info(self, message: str) -> None:
        self.messages.append(("info", message))

    def success(self, message: str) -> None:
        self.messages.append(("success", message))

    def warning(self, message: str) -> None:
        self.messages.append(("warning", message))

    def error(self, message: str) -> None:
        self.messages.append(("error", message))

    def debug(self, message: str) -> None:
        self.messages.append(("debug", message))

    def verbose(self, message: str) -> None:
        self.messages.append(("verbose", message))

    def log_reader_opened(self, file_type, column_count, *, source_has_header):
        self.messages.append(("opened", str(file_type)))

    def log_reader_closed(self, file_type, rows_read):
        self.messages.append(("closed", str(file_type)))

    def log_table_written(self, file_type, row_count, column_count=None):
        self.messages.append(("written", str(file_type)))

    def log_final_stats(self) -> None:
        self.messages.append(("stats", ""))


class TestDependencyContainer:
    """Tests for DependencyContainer class."""

    def test_create_container_with_defaults(self):
        """Test creating container with default configuration."""
        container = DependencyContainer()

        assert container.verbose == 0
        assert container.console is not None
        assert container.use_null_logger is False
        assert container.config == CodecConfig()

    def test_create_container_with_null_logger(self):
        """Test creating container with null logger enabled."""
        container = DependencyContainer(use_null_logger=True)

        assert isinstance(container.create_logger(), NullLogger)

    def test_create_container_with_custom_console(self):
        """Test creating container with custom console."""
        custom_console = Console()
        container = DependencyContainer(console=custom_console)

        assert container.console is custom_console

    def test_create_default_container(self):
        container = create_default_container(verbose=1)

        assert container.verbose == 1


class TestLoggerFactory:
    """Tests for logger factory method."""

    def test_create_logger_returns_console_logger(self):
        """Test that create_logger returns ConsoleLogger by default."""
        logger = DependencyContainer().create_logger()

        assert isinstance(logger, ConsoleLogger)
        assert isinstance(logger, LoggerPort)

    def test_create_logger_is_singleton(self):
        """Test that create_logger returns the same instance (singleton)."""
        container = DependencyContainer()

        assert container.create_logger() is container.create_logger()

    def test_create_logger_respects_verbose_level(self):
        """Test that logger is created with correct verbosity."""
        logger = DependencyContainer(verbose=2).create_logger()

        assert isinstance(logger, ConsoleLogger)
        assert logger.verbosity == 2


class TestServiceFactories:
    """Tests for reader and writer service factories."""

    def test_services_are_singletons(self):
        container = DependencyContainer(use_null_logger=True)

        reader_service = container.create_reader_service()
        writer_service = container.create_writer_service()

        assert isinstance(reader_service, TableReaderService)
        assert isinstance(reader_service, TableReaderServicePort)
        assert isinstance(writer_service, TableWriterService)
        assert isinstance(writer_service, TableWriterServicePort)
        assert reader_service is container.create_reader_service()
        assert writer_service is container.create_writer_service()

    def test_config_drives_default_table_configuration(self):
        container = DependencyContainer(
            config=CodecConfig(file_type="json"), use_null_logger=True
        )

        reader = container.create_reader_service().get_reader_instance(
            b'{"Items":[{"a":"1"}]}', True
        )

        assert container.create_table_configuration().table_file_type is TableFileType.JSON
        assert reader.schema.column_names == ["a"]

    def test_override_logger_is_used_by_services(self):
        container = DependencyContainer()
        mock_logger = MockLogger()
        container.override_logger(mock_logger)

        container.create_writer_service().write_to_bytes(
            _parameters([("a", "b")])
        )

        assert ("written", "csv") in mock_logger.messages

    def test_reset_singletons(self):
        container = DependencyContainer(use_null_logger=True)
        first = container.create_reader_service()

        container.reset_singletons()

        assert container.create_reader_service() is not first

    def test_override_services(self):
        container = DependencyContainer(use_null_logger=True)
        reader_service = TableReaderService()
        writer_service = TableWriterService()

        container.override_reader_service(reader_service)
        container.override_writer_service(writer_service)

        assert container.create_reader_service() is reader_service
        assert container.create_writer_service() is writer_service


def _parameters(rows):
    return TableWriterParameters(data=rows, get_column_values=list)

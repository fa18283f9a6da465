from .services import (
    LoggerPort,
    TableReaderPort,
    TableReaderServicePort,
    TableWriterServicePort,
)

__all__ = [
    "LoggerPort",
    "TableReaderPort",
    "TableReaderServicePort",
    "TableWriterServicePort",
]

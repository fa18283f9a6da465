"""Infrastructure service adapters.

This package contains adapter implementations of application-layer ports.
"""

from .table_reader_service import TableReaderService
from .table_writer_service import TableWriterService

__all__ = [
    "TableReaderService",
    "TableWriterService",
]

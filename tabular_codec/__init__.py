"""Tabular codec package.

Reads tabular data from CSV, XLS/XLSX, XML and JSON sources through one
schema-aware row interface, and writes sequences of items as CSV, XLSX or
XML.

Features:
- Header-driven or generated column schemas
- Typed, culture-aware row accessors
- Configurable CSV dialects and XML output
- pandas DataFrame bridge
"""

from importlib.metadata import PackageNotFoundError, version

try:  # pragma: no cover
    __version__ = version("tabular-codec")
except PackageNotFoundError:  # pragma: no cover
    __version__ = "0.0.0"

# Core exports
from tabular_codec.application.models import (
    CsvDialect,
    TableConfiguration,
    TableFileType,
    TableWriterParameters,
    XmlDialect,
)
from tabular_codec.config import CodecConfig, ConfigLoader
from tabular_codec.domain.entities import Column, Row, TableSchema
from tabular_codec.domain.exceptions import TableCodecError
from tabular_codec.infrastructure.io.frame_adapter import (
    frame_writer_parameters,
    read_frame,
)
from tabular_codec.infrastructure.services import (
    TableReaderService,
    TableWriterService,
)

__all__ = [
    "__version__",
    # Configuration
    "CodecConfig",
    "ConfigLoader",
    "CsvDialect",
    "TableConfiguration",
    "TableFileType",
    "XmlDialect",
    # Reading
    "Column",
    "Row",
    "TableReaderService",
    "TableSchema",
    "read_frame",
    # Writing
    "TableWriterParameters",
    "TableWriterService",
    "frame_writer_parameters",
    # Errors
    "TableCodecError",
]

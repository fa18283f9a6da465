"""Infrastructure I/O layer.

Record sources (CSV, XLS/XLSX, XML, JSON) behind a single TableReader, and
the CSV, XLSX and XML writers.
"""

# Lightweight re-exports for convenience.
# Internal modules should still import from defining modules to avoid cycles.

from .csv_reader import CsvRecordSource
from .csv_writer import write_csv
from .frame_adapter import frame_writer_parameters, read_frame
from .json_reader import JsonRecordSource
from .table_reader import ReaderState, RecordSource, TableReader
from .xls_reader import XlsRecordSource, XlsxRecordSource, open_spreadsheet_source
from .xls_writer import write_xls
from .xml_reader import XmlRecordSource
from .xml_utils import sanitize_xml_name
from .xml_writer import write_xml

__all__ = [
    "CsvRecordSource",
    "JsonRecordSource",
    "ReaderState",
    "RecordSource",
    "TableReader",
    "XlsRecordSource",
    "XlsxRecordSource",
    "XmlRecordSource",
    "frame_writer_parameters",
    "open_spreadsheet_source",
    "read_frame",
    "sanitize_xml_name",
    "write_csv",
    "write_xls",
    "write_xml",
]

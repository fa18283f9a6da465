"""Unit tests for the spreadsheet record sources."""

from collections.abc import Callable
from datetime import datetime

import pytest

from tabular_codec.domain.exceptions import SourceParseError
from tabular_codec.infrastructure.io.table_reader import TableReader
from tabular_codec.infrastructure.io.xls_reader import (
    XlsRecordSource,
    XlsxRecordSource,
    format_cell,
    normalize_cells,
    open_spreadsheet_source,
)

type XlsxFactory = Callable[[list[list[object]]], bytes]
type XlsFactory = Callable[[list[list[object]]], bytes]


def read_all(content: bytes, source_has_header: bool = True):
    with TableReader(open_spreadsheet_source(content), source_has_header) as reader:
        return reader.schema.column_names, [list(row) for row in reader]


class TestXlsxRecordSource:
    """Workbooks are built in memory with openpyxl."""

    def test_reads_header_and_rows(self, make_xlsx: XlsxFactory):
        content = make_xlsx([["Name", "Age"], ["John", 25], ["Jane", 31]])

        names, rows = read_all(content)

        assert names == ["Name", "Age"]
        assert rows == [["John", "25"], ["Jane", "31"]]

    def test_without_header_first_row_is_not_skipped(self, make_xlsx: XlsxFactory):
        content = make_xlsx([["a", "b"], ["c", "d"]])

        names, rows = read_all(content, source_has_header=False)

        assert names == ["Column1", "Column2"]
        assert rows == [["a", "b"], ["c", "d"]]

    def test_missing_cells_are_none(self, make_xlsx: XlsxFactory):
        content = make_xlsx([["A", "B", "C"], ["x", None, "z"]])

        _, rows = read_all(content)

        assert rows == [["x", None, "z"]]

    def test_typed_cells_are_rendered_as_text(self, make_xlsx: XlsxFactory):
        content = make_xlsx(
            [["When", "Ratio", "Flag"], [datetime(2024, 5, 6), 0.125, True]]
        )

        _, rows = read_all(content)

        assert rows == [["2024-05-06", "0.125", "True"]]

    def test_blank_row_ends_the_table(self, make_xlsx: XlsxFactory):
        content = make_xlsx([["A"], ["1"], [None], ["2"]])

        _, rows = read_all(content)

        assert rows == [["1"]]

    def test_source_type(self, make_xlsx: XlsxFactory):
        assert isinstance(open_spreadsheet_source(make_xlsx([["A"]])), XlsxRecordSource)


class TestXlsRecordSource:
    """Legacy BIFF8 workbooks are built in memory by the make_xls fixture."""

    def test_reads_header_and_rows(self, make_xls: XlsFactory):
        content = make_xls([["Name", "Age"], ["John", 25], ["Jane", 31.5]])

        names, rows = read_all(content)

        assert names == ["Name", "Age"]
        assert rows == [["John", "25"], ["Jane", "31.5"]]

    def test_without_header_first_row_is_not_skipped(self, make_xls: XlsFactory):
        content = make_xls([["a", "b"], ["c", "d"]])

        names, rows = read_all(content, source_has_header=False)

        assert names == ["Column1", "Column2"]
        assert rows == [["a", "b"], ["c", "d"]]

    def test_blank_row_ends_the_table(self, make_xls: XlsFactory):
        content = make_xls([["A"], ["1"], [None], ["2"]])

        _, rows = read_all(content)

        assert rows == [["1"]]

    def test_date_cells_are_rendered_as_iso_text(self, make_xls: XlsFactory):
        content = make_xls(
            [
                ["Visit", "Taken"],
                [datetime(2024, 1, 1), datetime(2024, 1, 1, 12, 30)],
            ]
        )

        _, rows = read_all(content)

        assert rows == [["2024-01-01", "2024-01-01 12:30:00"]]

    def test_boolean_and_missing_cells(self, make_xls: XlsFactory):
        content = make_xls([["A", "B", "C"], [True, None, False]])

        _, rows = read_all(content)

        assert rows == [["True", None, "False"]]

    def test_source_type(self, make_xls: XlsFactory):
        source = open_spreadsheet_source(make_xls([["A"]]))

        assert isinstance(source, XlsRecordSource)
        source.close()

    def test_stream_without_workbook_records_raises(self, make_xls: XlsFactory):
        content = bytearray(make_xls([["A"], ["1"]]))
        # the Workbook stream starts after the header, allocation and
        # directory sectors
        content[1536:1540] = b"\0\0\0\0"

        with pytest.raises(SourceParseError, match="Failed to open XLS"):
            open_spreadsheet_source(bytes(content))


class TestOpenSpreadsheetSource:
    def test_unknown_signature_raises(self):
        with pytest.raises(SourceParseError, match="Unrecognized spreadsheet"):
            open_spreadsheet_source(b"Name,Age\r\n")

    def test_corrupt_zip_raises(self):
        with pytest.raises(SourceParseError):
            open_spreadsheet_source(b"PK\x03\x04garbage")


class TestCellFormatting:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (None, None),
            (25.0, "25"),
            (0.1, "0.1"),
            (7, "7"),
            (False, "False"),
            (datetime(2024, 1, 2, 3, 4, 5), "2024-01-02 03:04:05"),
            ("text", "text"),
        ],
    )
    def test_format_cell(self, value: object, expected: str | None):
        assert format_cell(value) == expected

    def test_normalize_pads_short_rows(self):
        assert normalize_cells(["a"], 3) == ["a", None, None]

    def test_normalize_trims_trailing_empty_cells(self):
        assert normalize_cells(["a", "b", None, None], 2) == ["a", "b"]

    def test_normalize_blank_row_is_empty(self):
        assert normalize_cells([None, ""], 2) == []

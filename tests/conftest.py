from collections.abc import Callable, Sequence
from datetime import datetime
import io
import struct

from openpyxl import Workbook
import pytest

_CODEC_ENV_VARS = (
    "TABULAR_FILE_TYPE",
    "TABULAR_CULTURE",
    "TABULAR_CSV_DELIMITER",
    "TABULAR_CSV_ROW_DELIMITER",
    "TABULAR_CSV_ENCODING",
    "TABULAR_CSV_CULTURE",
    "TABULAR_XML_INDENT",
    "TABULAR_DUPLICATE_COLUMNS",
)


@pytest.fixture(autouse=True)
def _clean_codec_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep CodecConfig.from_env() deterministic regardless of the shell."""
    for name in _CODEC_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def make_xlsx() -> Callable[[Sequence[Sequence[object]]], bytes]:
    """Build an in-memory .xlsx workbook whose first sheet holds ``rows``."""

    def build(rows: Sequence[Sequence[object]]) -> bytes:
        workbook = Workbook()
        sheet = workbook.active
        for row in rows:
            sheet.append(list(row))
        buffer = io.BytesIO()
        workbook.save(buffer)
        return buffer.getvalue()

    return build


_EXCEL_EPOCH = datetime(1899, 12, 30)
_SECTOR = 512
_MIN_STANDARD_STREAM = 4096
_FREE, _END_OF_CHAIN, _FAT_SECTOR = -1, -2, -3


def _biff_record(code: int, data: bytes = b"") -> bytes:
    return struct.pack("<HH", code, len(data)) + data

def _biff_bof(stream_type: int) -> bytes:
    data = struct.pack("<HHHHII", 0x0600, stream_type, 0x0DBB, 0x07CC, 0, 6)
    return _biff_record(0x0809, data)


def _biff_cell(row: int, column: int, value: object) -> bytes:
    if isinstance(value, bool):
        data = struct.pack("<HHHBB", row, column, 0, int(value), 0)
        return _biff_record(0x0205, data)
    if isinstance(value, datetime):
        serial = (value - _EXCEL_EPOCH).total_seconds() / 86400
        return _biff_record(0x0203, struct.pack("<HHHd", row, column, 1, serial))
    if isinstance(value, (int, float)):
        data = struct.pack("<HHHd", row, column, 0, float(value))
        return _biff_record(0x0203, data)
    text = str(value).encode("latin-1")
    data = struct.pack("<HHHHB", row, column, 0, len(text), 0) + text
    return _biff_record(0x0204, data)


def _biff_workbook_stream(rows: Sequence[Sequence[object]]) -> bytes:
    # XF 0 uses the General format, XF 1 the built-in m/d/yyyy date format
    xfs = b"".join(
        _biff_record(
            0x00E0, struct.pack("<HHHBBBBIiH", 0, key, 0, 0, 0, 0, 0, 0, 0, 0)
        )
        for key in (0, 14)
    )
    head = _biff_bof(0x0005) + _biff_record(0x0042, struct.pack("<H", 1200))
    head += _biff_record(0x0022, struct.pack("<H", 0)) + xfs
    sheet_name = b"Sheet1"
    boundsheet_size = 4 + 8 + len(sheet_name)
    sheet_offset = len(head) + boundsheet_size + 4
    boundsheet = struct.pack("<iBBBB", sheet_offset, 0, 0, len(sheet_name), 0)
    globals_ = head + _biff_record(0x0085, boundsheet + sheet_name)
    globals_ += _biff_record(0x000A)
    cells = b"".join(
        _biff_cell(row_index, column_index, value)
        for row_index, row in enumerate(rows)
        for column_index, value in enumerate(row)
        if value is not None
    )
    return globals_ + _biff_bof(0x0010) + cells + _biff_record(0x000A)


def _directory_entry(
    name: str, entry_type: int, child: int, first_sector: int, size: int
) -> bytes:
    encoded = (name + "\0").encode("utf-16-le")
    return (
        encoded.ljust(64, b"\0")
        + struct.pack("<HBBiii", len(encoded), entry_type, 1, -1, -1, child)
        + b"\0" * 36
        + struct.pack("<iiI", first_sector, size, 0)
    )


def _compound_document(stream: bytes) -> bytes:
    """Wrap ``stream`` as the ``Workbook`` stream of an OLE2 compound file.

    Sector 0 holds the allocation table, sector 1 the directory and the
    stream follows contiguously, padded so it never lands in the mini-stream.
    """
    stream_size = max(len(stream), _MIN_STANDARD_STREAM)
    stream_size += -stream_size % _SECTOR
    stream_sectors = stream_size // _SECTOR
    if 2 + stream_sectors > _SECTOR // 4:
        raise ValueError("worksheet too large for a single allocation sector")
    chain = [_FAT_SECTOR, _END_OF_CHAIN]
    chain += [sector + 1 for sector in range(2, 1 + stream_sectors)]
    chain += [_END_OF_CHAIN]
    chain += [_FREE] * (_SECTOR // 4 - len(chain))

    header = b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1" + b"\0" * 16
    header += struct.pack("<HHHHH", 0x003E, 0x0003, 0xFFFE, 9, 6) + b"\0" * 10
    header += struct.pack(
        "<iiiiiiii",
        1,
        1,
        0,
        _MIN_STANDARD_STREAM,
        _END_OF_CHAIN,
        0,
        _END_OF_CHAIN,
        0,
    )
    header += struct.pack("<109i", 0, *([_FREE] * 108))

    directory = _directory_entry("Root Entry", 5, 1, _END_OF_CHAIN, 0)
    directory += _directory_entry("Workbook", 2, -1, 2, stream_size)
    directory = directory.ljust(_SECTOR, b"\0")

    allocation = struct.pack(f"<{_SECTOR // 4}i", *chain)
    return header + allocation + directory + stream.ljust(stream_size, b"\0")


@pytest.fixture
def make_xls() -> Callable[[Sequence[Sequence[object]]], bytes]:
    """Build an in-memory legacy .xls (BIFF8) workbook holding ``rows``.

    Strings become LABEL cells, numbers NUMBER cells, booleans BOOLERR
    cells and datetimes date-formatted NUMBER cells; ``None`` leaves the
    cell out.
    """

    def build(rows: Sequence[Sequence[object]]) -> bytes:
        return _compound_document(_biff_workbook_stream(rows))

    return build

"""Spreadsheet writer producing a single-sheet ``.xlsx`` workbook via openpyxl."""

from __future__ import annotations

from typing import TYPE_CHECKING

from openpyxl import Workbook
from openpyxl.cell.cell import TYPE_STRING
from openpyxl.utils.exceptions import IllegalCharacterError

from ...constants import Names
from ...domain.exceptions import InvalidCharacterError, SchemaMismatchError
from .table_writer import plan_table

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Sequence
    from typing import BinaryIO

    from openpyxl.worksheet.worksheet import Worksheet


def write_text_row(
    sheet: Worksheet,
    sheet_row: int,
    values: Sequence[str | None],
    column_names: Sequence[str],
    data_row: int,
) -> None:
    """Store ``values`` in ``sheet_row`` as literal text cells.

    The data type is forced to string after assignment, so text such as
    ``"=1+1"`` is kept as written instead of becoming a formula.
    """
    for column, value in enumerate(values, start=1):
        cell = sheet.cell(row=sheet_row, column=column)
        if value is None:
            continue
        try:
            cell.value = value
        except IllegalCharacterError as e:
            raise InvalidCharacterError(data_row, column_names[column - 1], value) from e
        cell.data_type = TYPE_STRING


def write_xls[T](
    target: BinaryIO,
    data: Iterable[T],
    include_header: bool,
    get_column_values: Callable[[T], Iterable[str | None]],
    column_names: Sequence[str] | None = None,
) -> int:
    """Write ``data`` as a workbook with one sheet named ``Sheet1``.

    Every cell is stored as text. Nothing is written when the column count is
    zero. A row whose width differs from the first row, or a value holding a
    control character a workbook cannot store, raises before the workbook is
    saved.
    """
    layout, rows = plan_table(data, include_header, get_column_values, column_names)
    if layout.column_count == 0:
        return 0

    workbook = Workbook()
    sheet = workbook.active
    sheet.title = Names.XLS_SHEET_TITLE
    offset = 1 if include_header else 0
    if include_header:
        write_text_row(sheet, 1, layout.column_names, layout.column_names, 0)

    written = 0
    for values in rows:
        if len(values) != layout.column_count:
            raise SchemaMismatchError(
                f"Row {written + 1} has {len(values)} values; "
                f"expected {layout.column_count}"
            )
        write_text_row(
            sheet, offset + written + 1, values, layout.column_names, written + 1
        )
        written += 1

    workbook.save(target)
    return written

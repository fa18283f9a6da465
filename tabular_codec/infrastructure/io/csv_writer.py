"""Delimited text writer.

Rows wider or narrower than the first row are truncated or padded with empty
fields. A field is quoted when it contains a delimiter, the quotation
character, the escape character or a line break. Inside a quoted field the
quotation character is doubled and so is the escape character, which the
parser reads back as one literal escape character for any dialect.
"""

from __future__ import annotations

import io
from typing import TYPE_CHECKING

from ...application.models import CsvDialect
from .table_writer import fit_values, plan_table

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Sequence
    from typing import BinaryIO


def quote_field(value: str | None, dialect: CsvDialect) -> str:
    if value is None:
        return ""
    specials = (
        dialect.column_delimiter,
        dialect.row_delimiter,
        dialect.quotation,
        dialect.escape_character,
        "\r",
        "\n",
    )
    if not any(special in value for special in specials):
        return value
    escape = dialect.escape_character
    quote = dialect.quotation
    if escape != quote:
        value = value.replace(escape, escape * 2)
    return quote + value.replace(quote, quote * 2) + quote


def format_record(values: Sequence[str | None], dialect: CsvDialect) -> str:
    fields = (quote_field(value, dialect) for value in values)
    return dialect.column_delimiter.join(fields) + dialect.row_delimiter


def write_csv[T](
    target: BinaryIO,
    data: Iterable[T],
    include_header: bool,
    get_column_values: Callable[[T], Iterable[str | None]],
    column_names: Sequence[str] | None = None,
    dialect: CsvDialect | None = None,
) -> int:
    """Write ``data`` to ``target`` and return the number of data rows written.

    The target stream is flushed but left open.
    """
    dialect = dialect or CsvDialect()
    layout, rows = plan_table(data, include_header, get_column_values, column_names)

    text = io.TextIOWrapper(
        target, encoding=dialect.encoding, newline="", write_through=True
    )
    written = 0
    try:
        if include_header and layout.column_count:
            text.write(format_record(layout.column_names, dialect))
        for values in rows:
            text.write(format_record(fit_values(values, layout.column_count), dialect))
            written += 1
        text.flush()
    finally:
        text.detach()
    return written

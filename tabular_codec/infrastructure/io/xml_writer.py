"""XML writer.

Output shape::

    <?xml version="1.0" encoding="utf-8"?>
    <Table>
      <Row>
        <Name>John</Name>
      </Row>
    </Table>

Element names are the column names run through :func:`sanitize_xml_name`;
columns without a name are ``Column1..ColumnN``. ``None`` values are written
as empty elements.
"""

from __future__ import annotations

import io
from typing import TYPE_CHECKING
import xml.etree.ElementTree as ET

from ...application.models import XmlDialect
from ...constants import Names
from ...domain.exceptions import InvalidCharacterError, SchemaMismatchError
from .table_writer import plan_table
from .xml_utils import is_valid_xml_text, sanitize_xml_names

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Sequence
    from typing import BinaryIO


def check_row_text(
    row_number: int, element_names: Sequence[str], values: Sequence[str | None]
) -> None:
    for name, value in zip(element_names, values, strict=True):
        if value and not is_valid_xml_text(value):
            raise InvalidCharacterError(row_number, name, value)


def build_row_element(
    element_names: Sequence[str], values: Sequence[str | None]
) -> ET.Element:
    row = ET.Element(Names.XML_ROW_ELEMENT)
    for name, value in zip(element_names, values, strict=True):
        ET.SubElement(row, name).text = value or ""
    return row


def write_xml[T](
    target: BinaryIO,
    data: Iterable[T],
    include_header: bool,
    get_column_values: Callable[[T], Iterable[str | None]],
    column_names: Sequence[str] | None = None,
    dialect: XmlDialect | None = None,
) -> int:
    """Stream ``data`` to ``target`` as XML and return the number of rows.

    ``include_header`` has no effect on the markup; element names always come
    from ``column_names`` when given. Rows are serialized one at a time, so a
    width mismatch raises :class:`SchemaMismatchError` after the preceding
    rows have already been written. A value holding a character XML 1.0 does
    not allow raises :class:`InvalidCharacterError` the same way.
    """
    del include_header
    dialect = dialect or XmlDialect()
    layout, rows = plan_table(data, True, get_column_values, column_names)
    element_names = sanitize_xml_names(layout.column_names)
    newline = "\n" if dialect.indent else ""
    row_prefix = newline + (dialect.indent_chars if dialect.indent else "")
    table = Names.XML_TABLE_ELEMENT

    text = io.TextIOWrapper(
        target,
        encoding=dialect.encoding,
        errors="xmlcharrefreplace",
        newline="",
        write_through=True,
    )
    written = 0
    try:
        if not dialect.omit_xml_declaration:
            text.write(f'<?xml version="1.0" encoding="{dialect.encoding}"?>{newline}')
        for values in rows:
            if len(values) != layout.column_count:
                raise SchemaMismatchError(
                    f"Row {written + 1} has {len(values)} values; "
                    f"expected {layout.column_count}"
                )
            check_row_text(written + 1, element_names, values)
            if written == 0:
                text.write(f"<{table}>")
            row = build_row_element(element_names, values)
            if dialect.indent:
                ET.indent(row, space=dialect.indent_chars, level=1)
            markup = ET.tostring(row, encoding="unicode", short_empty_elements=False)
            text.write(row_prefix + markup)
            written += 1
        text.write(f"{newline}</{table}>" if written else f"<{table} />")
        text.flush()
    finally:
        text.detach()
    return written

"""Bridge between table readers/writers and pandas DataFrames."""

from __future__ import annotations

from datetime import date, datetime
from typing import TYPE_CHECKING, Any, cast

import pandas as pd

from ...application.models import TableFileType, TableWriterParameters

if TYPE_CHECKING:
    from ...application.models import TableConfiguration
    from .table_reader import TableReader


def read_frame(reader: TableReader) -> pd.DataFrame:
    """Drain the remaining rows of ``reader`` into a DataFrame.

    Columns follow the reader's schema order and keep the raw string values
    (``None`` for missing spreadsheet cells); no type inference is applied.
    """
    records = [list(row.values) for row in reader]
    columns = list(reader.schema.column_names)
    if not records:
        return pd.DataFrame({name: pd.Series(dtype=object) for name in columns})
    return pd.DataFrame(records, columns=columns, dtype=object)


def format_frame_value(value: object) -> str | None:
    """Render a DataFrame cell as text. Missing values become ``None``."""
    try:
        if bool(pd.isna(cast(Any, value))):
            return None
    except (TypeError, ValueError):
        pass

    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return format(value, ".15g")
    if isinstance(value, pd.Timestamp | datetime):
        if value.time() == datetime.min.time():
            return value.date().isoformat()
        return value.isoformat(sep=" ")
    if isinstance(value, date):
        return value.isoformat()
    return str(value)


def frame_writer_parameters(
    frame: pd.DataFrame,
    fmt: TableFileType | str = TableFileType.CSV,
    *,
    include_header: bool = True,
    configuration: TableConfiguration | None = None,
) -> TableWriterParameters[tuple[object, ...]]:
    """Build writer parameters that stream ``frame`` row by row."""

    def get_column_values(row: tuple[object, ...]) -> list[str | None]:
        return [format_frame_value(value) for value in row]

    return TableWriterParameters(
        data=frame.itertuples(index=False, name=None),
        format=fmt,
        include_header=include_header,
        get_column_values=get_column_values,
        column_names=[str(column) for column in frame.columns],
        configuration=configuration,
    )

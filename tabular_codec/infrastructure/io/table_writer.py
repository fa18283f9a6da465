"""Column layout shared by the format writers.

Writers stream ``data`` once. The first item fixes the column count; when
there is no data the count comes from the supplied column names (header-only
output). Header names that are missing are generated as ``Column1..ColumnN``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from ...domain.entities.schema import generated_column_name

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Iterator, Sequence

type ColumnValues = list[str | None]


@dataclass(frozen=True, slots=True)
class TableLayout:
    column_count: int
    column_names: tuple[str, ...]
    has_data: bool


def fit_values(
    values: Sequence[str | None], column_count: int, fill: str | None = ""
) -> ColumnValues:
    fitted = list(values[:column_count])
    if len(fitted) < column_count:
        fitted.extend([fill] * (column_count - len(fitted)))
    return fitted


def resolve_column_names(
    column_names: Sequence[str] | None, column_count: int
) -> tuple[str, ...]:
    if column_names is None:
        return tuple(generated_column_name(i) for i in range(column_count))
    names = [str(name) for name in column_names[:column_count]]
    names.extend(generated_column_name(i) for i in range(len(names), column_count))
    return tuple(names)


def plan_table[T](
    data: Iterable[T],
    include_header: bool,
    get_column_values: Callable[[T], Iterable[str | None]],
    column_names: Sequence[str] | None = None,
) -> tuple[TableLayout, Iterator[ColumnValues]]:
    items = iter(data)
    names = list(column_names) if column_names is not None else None
    try:
        first = next(items)
    except StopIteration:
        column_count = len(names) if include_header and names is not None else 0
        layout = TableLayout(
            column_count, resolve_column_names(names, column_count), has_data=False
        )
        return layout, iter(())

    first_values = list(get_column_values(first))
    column_count = len(first_values)
    layout = TableLayout(
        column_count, resolve_column_names(names, column_count), has_data=True
    )

    def rows() -> Iterator[ColumnValues]:
        yield first_values
        for item in items:
            yield list(get_column_values(item))

    return layout, rows()

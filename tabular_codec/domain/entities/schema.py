"""Table schema: the ordered column layout of a table source.

A schema is inferred once from the first record of a source and is never
mutated afterwards. Every row produced by the same reader is validated
against it.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from enum import StrEnum

from ...constants import Names
from ..exceptions import AmbiguousColumnError, ColumnNotFoundError
from .column import Column


class DuplicateColumnPolicy(StrEnum):
    """How a name lookup resolves two columns that share a name."""

    FIRST = "first"
    LAST = "last"
    REJECT = "reject"


def generated_column_name(index: int) -> str:
    return f"{Names.GENERATED_COLUMN_PREFIX}{index + 1}"


class TableSchema:
    def __init__(
        self,
        columns: Sequence[Column] = (),
        *,
        duplicate_policy: DuplicateColumnPolicy = DuplicateColumnPolicy.REJECT,
        case_sensitive: bool = False,
    ) -> None:
        super().__init__()
        for position, column in enumerate(columns):
            if column.index != position:
                raise ValueError(
                    f"Column indices must be dense and ordered; "
                    f"expected {position}, got {column.index}"
                )
        self._columns: tuple[Column, ...] = tuple(columns)
        self._duplicate_policy = duplicate_policy
        self._case_sensitive = case_sensitive
        self._by_name: dict[str, list[Column]] = {}
        for column in self._columns:
            self._by_name.setdefault(self._key(column.name), []).append(column)

    @classmethod
    def initialize(
        cls,
        labels: Sequence[str | None],
        source_has_header: bool,
        *,
        duplicate_policy: DuplicateColumnPolicy = DuplicateColumnPolicy.REJECT,
        case_sensitive: bool = False,
    ) -> TableSchema:
        """Build a schema from the first record of a source.

        Args:
            labels: Field values of the first record (header text, element
                names or object keys). Only the count matters when the source
                has no header.
            source_has_header: Whether the labels are column names.
            duplicate_policy: Resolution of duplicated names on lookup.
            case_sensitive: Whether name lookups are case-sensitive.

        Returns:
            The initialized schema. An empty label list yields an empty schema.
        """
        columns: list[Column] = []
        for index, label in enumerate(labels):
            name = label.strip() if source_has_header and label else ""
            columns.append(Column(index, name or generated_column_name(index)))
        return cls(
            columns, duplicate_policy=duplicate_policy, case_sensitive=case_sensitive
        )

    @property
    def column_count(self) -> int:
        return len(self._columns)

    @property
    def column_names(self) -> list[str]:
        return [column.name for column in self._columns]

    @property
    def duplicate_policy(self) -> DuplicateColumnPolicy:
        return self._duplicate_policy

    def get_columns(self) -> tuple[Column, ...]:
        return self._columns

    def get_column(self, key: str | int) -> Column | None:
        if isinstance(key, int):
            if 0 <= key < len(self._columns):
                return self._columns[key]
            return None
        matches = self._by_name.get(self._key(key))
        if not matches:
            return None
        if len(matches) == 1:
            return matches[0]
        match self._duplicate_policy:
            case DuplicateColumnPolicy.FIRST:
                return matches[0]
            case DuplicateColumnPolicy.LAST:
                return matches[-1]
            case _:
                indices = ", ".join(str(c.index) for c in matches)
                raise AmbiguousColumnError(
                    f"Column name '{key}' is ambiguous (indices {indices})"
                )

    def get_required_column(self, name: str) -> Column:
        column = self.get_column(name)
        if column is None:
            raise ColumnNotFoundError(f"Column not found: '{name}'")
        return column

    def duplicated_names(self) -> list[str]:
        return [cols[0].name for cols in self._by_name.values() if len(cols) > 1]

    def __len__(self) -> int:
        return len(self._columns)

    def __iter__(self) -> Iterator[Column]:
        return iter(self._columns)

    def __getitem__(self, index: int) -> Column:
        return self._columns[index]

    def __repr__(self) -> str:
        return f"TableSchema({self.column_names!r})"

    def _key(self, name: str) -> str:
        return name if self._case_sensitive else name.casefold()

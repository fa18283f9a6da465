"""Row values with typed, culture-aware access.

A Row is an immutable snapshot of one record. Readers hand out a fresh Row
on every successful read, so a Row obtained earlier stays valid after the
reader moves on. Typed accessors convert the raw text on each call and never
cache the converted value.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING

from ..exceptions import ColumnIndexError, FormatConversionError
from .culture import INVARIANT, Culture

if TYPE_CHECKING:
    from .schema import TableSchema

_FLOAT32_MAX = 3.4028234663852886e38


@dataclass(frozen=True, slots=True)
class Row:
    index: int
    values: tuple[str | None, ...]
    schema: TableSchema = field(repr=False)
    culture: Culture = field(default=INVARIANT, repr=False)

    def __getitem__(self, key: int | str) -> str | None:
        return self.values[self._position(key)]

    def __len__(self) -> int:
        return len(self.values)

    def __iter__(self) -> Iterator[str | None]:
        return iter(self.values)

    def as_dict(self) -> dict[str, str | None]:
        return dict(zip(self.schema.column_names, self.values, strict=True))

    def get_value(self, key: int | str) -> str | None:
        return self[key]

    def get_string(self, key: int | str) -> str | None:
        return self[key]

    def is_null(self, key: int | str) -> bool:
        value = self[key]
        return value is None or value == ""

    def get_boolean(self, key: int | str) -> bool:
        return self._convert(key, "Boolean", self.culture.parse_boolean)

    def get_char(self, key: int | str) -> str:
        def to_char(text: str) -> str:
            if len(text) != 1:
                raise ValueError("expected exactly one character")
            return text

        return self._convert(key, "Char", to_char)

    def get_byte(self, key: int | str) -> int:
        return self._integer(key, "Byte", 0, 2**8 - 1)

    def get_sbyte(self, key: int | str) -> int:
        return self._integer(key, "SByte", -(2**7), 2**7 - 1)

    def get_int16(self, key: int | str) -> int:
        return self._integer(key, "Int16", -(2**15), 2**15 - 1)

    def get_uint16(self, key: int | str) -> int:
        return self._integer(key, "UInt16", 0, 2**16 - 1)

    def get_int32(self, key: int | str) -> int:
        return self._integer(key, "Int32", -(2**31), 2**31 - 1)

    def get_uint32(self, key: int | str) -> int:
        return self._integer(key, "UInt32", 0, 2**32 - 1)

    def get_int64(self, key: int | str) -> int:
        return self._integer(key, "Int64", -(2**63), 2**63 - 1)

    def get_uint64(self, key: int | str) -> int:
        return self._integer(key, "UInt64", 0, 2**64 - 1)

    def get_single(self, key: int | str) -> float:
        def to_single(text: str) -> float:
            value = self.culture.parse_float(text)
            if abs(value) > _FLOAT32_MAX and abs(value) != float("inf"):
                raise ValueError("out of range for Single")
            return value

        return self._convert(key, "Single", to_single)

    def get_double(self, key: int | str) -> float:
        return self._convert(key, "Double", self.culture.parse_float)

    def get_decimal(self, key: int | str) -> Decimal:
        return self._convert(key, "Decimal", self.culture.parse_decimal)

    def get_datetime(self, key: int | str) -> datetime:
        return self._convert(key, "DateTime", self.culture.parse_datetime)

    def _integer(self, key: int | str, type_name: str, low: int, high: int) -> int:
        def to_integer(text: str) -> int:
            value = self.culture.parse_integer(text)
            if not low <= value <= high:
                raise ValueError(f"out of range for {type_name}")
            return value

        return self._convert(key, type_name, to_integer)

    def _convert[T](
        self, key: int | str, type_name: str, parse: Callable[[str], T]
    ) -> T:
        position = self._position(key)
        raw = self.values[position]
        if raw is None:
            raise FormatConversionError(position, type_name, raw)
        try:
            return parse(raw)
        except ValueError as e:
            raise FormatConversionError(position, type_name, raw) from e

    def _position(self, key: int | str) -> int:
        if isinstance(key, str):
            return self.schema.get_required_column(key).index
        if key < 0 or key >= len(self.values):
            raise ColumnIndexError(
                f"The index of the column '{key}' is out of range "
                f"for the row number {self.index}."
            )
        return key

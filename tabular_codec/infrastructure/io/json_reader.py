"""JSON table source.

Expected document shape: a single top-level object whose first property is
an array of flat objects::

    {"Items": [{"Name": "x", "Age": 5}, {"Name": "y", "Age": 7}]}

Column names come from the keys of the first array element. Each row
projects the element's values in their declaration order.
"""

from __future__ import annotations

from dataclasses import dataclass
import json
from typing import TYPE_CHECKING, Any

from ...application.models import TableFileType
from ...domain.exceptions import SourceParseError

if TYPE_CHECKING:
    from typing import BinaryIO

    from .table_reader import Record


@dataclass(frozen=True, slots=True)
class JsonNumber:
    """A number token kept as its source text."""

    text: str

    def __str__(self) -> str:
        return self.text


def compact_json(value: Any) -> str:
    """Serialize ``value`` without spaces, writing numbers as their source text."""
    if isinstance(value, JsonNumber):
        return value.text
    if isinstance(value, dict):
        members = (
            f"{json.dumps(str(key), ensure_ascii=False)}:{compact_json(item)}"
            for key, item in value.items()
        )
        return "{" + ",".join(members) + "}"
    if isinstance(value, list):
        return "[" + ",".join(compact_json(item) for item in value) + "]"
    return json.dumps(value, ensure_ascii=False)


def stringify_json_value(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    if isinstance(value, (dict, list)):
        return compact_json(value)
    return str(value)


class JsonRecordSource:
    file_type = TableFileType.JSON

    def __init__(self, document: dict[str, Any]) -> None:
        super().__init__()
        self._items = self._find_items(document)
        self._index = 0

    @classmethod
    def from_content(cls, content: bytes) -> JsonRecordSource:
        try:
            document = json.loads(
                content.decode("utf-8-sig"),
                parse_float=JsonNumber,
                parse_int=JsonNumber,
            )
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise SourceParseError(f"Failed to parse JSON table source: {e}") from e
        if not isinstance(document, dict):
            raise SourceParseError(
                f"JSON table source must be an object, got {type(document).__name__}"
            )
        return cls(document)

    @classmethod
    def from_stream(cls, stream: BinaryIO) -> JsonRecordSource:
        try:
            return cls.from_content(stream.read())
        finally:
            stream.close()

    def read_labels(self, source_has_header: bool) -> Record:
        _ = source_has_header
        if not self._items or not isinstance(self._items[0], dict):
            return []
        return list(self._items[0].keys())

    def next_record(self) -> Record | None:
        if self._index >= len(self._items):
            return None
        item = self._items[self._index]
        self._index += 1
        if not isinstance(item, dict):
            return []
        return [stringify_json_value(value) for value in item.values()]

    def close(self) -> None:
        self._items = []

    @staticmethod
    def _find_items(document: dict[str, Any]) -> list[Any]:
        if not document:
            return []
        items = next(iter(document.values()))
        if not isinstance(items, list):
            return []
        return items

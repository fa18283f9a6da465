"""XML table source.

Tables are stored as a list element whose children are items and whose
grandchildren are the item's fields::

    <Table>
      <Row><Name>x</Name><Age>5</Age></Row>
    </Table>

Wrapped documents such as ``<Root><List><Item><Col1>..`` are supported too:
the item list is the first level whose items carry leaf field elements.
"""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING
from xml.etree import ElementTree as ET

from ...application.models import TableFileType
from ...domain.exceptions import SourceParseError

if TYPE_CHECKING:
    from typing import BinaryIO

    from .table_reader import Record


class XmlCursorState(StrEnum):
    AT_ROOT = "at_root"
    POSITIONED = "positioned"
    EXHAUSTED = "exhausted"


def local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def element_text(element: ET.Element) -> str:
    return "".join(element.itertext())


def _first_child(element: ET.Element) -> ET.Element | None:
    return next(iter(element), None)


def locate_item_list(root: ET.Element) -> ET.Element:
    container = root
    while True:
        first_item = _first_child(container)
        if first_item is None:
            return container
        first_field = _first_child(first_item)
        if first_field is None or _first_child(first_field) is None:
            return container
        container = first_item


class XmlRecordSource:
    file_type = TableFileType.XML

    def __init__(self, root: ET.Element) -> None:
        super().__init__()
        self._items: list[ET.Element] = list(locate_item_list(root))
        self._state = XmlCursorState.AT_ROOT
        self._position = -1

    @classmethod
    def from_stream(cls, stream: BinaryIO) -> XmlRecordSource:
        try:
            root = ET.parse(stream).getroot()
        except ET.ParseError as e:
            raise SourceParseError(f"Failed to parse XML table source: {e}") from e
        finally:
            stream.close()
        return cls(root)

    @property
    def state(self) -> XmlCursorState:
        return self._state

    def read_labels(self, source_has_header: bool) -> Record:
        _ = source_has_header
        if not self._items:
            return []
        labels = [local_name(field.tag) for field in self._items[0]]
        self._rewind()
        return labels

    def next_record(self) -> Record | None:
        match self._state:
            case XmlCursorState.EXHAUSTED:
                return None
            case XmlCursorState.AT_ROOT:
                self._position = 0
            case XmlCursorState.POSITIONED:
                self._position += 1
        if self._position >= len(self._items):
            self._state = XmlCursorState.EXHAUSTED
            return None
        self._state = XmlCursorState.POSITIONED
        return [element_text(field) for field in self._items[self._position]]

    def close(self) -> None:
        self._items = []
        self._state = XmlCursorState.EXHAUSTED

    def _rewind(self) -> None:
        self._state = XmlCursorState.AT_ROOT
        self._position = -1

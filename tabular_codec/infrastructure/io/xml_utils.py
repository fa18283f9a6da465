from collections.abc import Iterable
import re

from ...constants import Markers, Names

# complement of the XML 1.0 Char production
_INVALID_XML_CHAR = re.compile(
    "[^\t\n\r\u0020-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]"
)


def _is_name_start(ch: str) -> bool:
    return ch.isalpha() or ch == "_"


def _is_name_char(ch: str) -> bool:
    return ch.isalpha() or ch.isdecimal() or ch in Markers.XML_NAME_EXTRA_CHARS


def sanitize_xml_name(name: str | None) -> str:
    """Turn an arbitrary column name into a valid XML element name.

    The first character must be a letter or underscore; the following ones may
    be letters, digits, ``-``, ``.`` or ``_``. Every other character is
    replaced by ``_`` (never dropped), so the result has the same length as
    the input. A blank name becomes ``"Column"``.
    """
    if name is None or not name.strip():
        return Names.BLANK_XML_NAME
    first = name[0] if _is_name_start(name[0]) else "_"
    return first + "".join(ch if _is_name_char(ch) else "_" for ch in name[1:])


def sanitize_xml_names(names: Iterable[str | None]) -> tuple[str, ...]:
    return tuple(sanitize_xml_name(name) for name in names)


def is_valid_xml_name(name: str) -> bool:
    if not name or not _is_name_start(name[0]):
        return False
    return all(_is_name_char(ch) for ch in name[1:])


def is_valid_xml_text(value: str) -> bool:
    return _INVALID_XML_CHAR.search(value) is None

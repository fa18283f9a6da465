"""Format providers used by typed row accessors.

A Culture describes how numbers, booleans and dates are written in a source
file. Conversions happen at access time, so the same raw text can be read with
different cultures without re-reading the source.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal, InvalidOperation
import re

_INTEGER_PATTERN = re.compile(r"^[+-]?\d+$")


@dataclass(frozen=True, slots=True)
class Culture:
    name: str
    decimal_separator: str = "."
    group_separator: str = ","
    datetime_formats: tuple[str, ...] = field(default_factory=tuple)
    true_values: frozenset[str] = frozenset({"true"})
    false_values: frozenset[str] = frozenset({"false"})

    def parse_integer(self, text: str) -> int:
        cleaned = text.strip()
        if not _INTEGER_PATTERN.match(cleaned):
            raise ValueError(f"not an integer: {text!r}")
        return int(cleaned)

    def parse_decimal(self, text: str) -> Decimal:
        cleaned = self._normalize_number(text)
        try:
            value = Decimal(cleaned)
        except InvalidOperation as e:
            raise ValueError(f"not a number: {text!r}") from e
        if not value.is_finite():
            raise ValueError(f"not a finite number: {text!r}")
        return value

    def parse_float(self, text: str) -> float:
        cleaned = self._normalize_number(text)
        return float(cleaned)

    def parse_boolean(self, text: str) -> bool:
        cleaned = text.strip().lower()
        if cleaned in self.true_values:
            return True
        if cleaned in self.false_values:
            return False
        raise ValueError(f"not a boolean: {text!r}")

    def parse_datetime(self, text: str) -> datetime:
        cleaned = text.strip()
        for fmt in self.datetime_formats:
            try:
                return datetime.strptime(cleaned, fmt)
            except ValueError:
                continue
        return datetime.fromisoformat(cleaned)

    def _normalize_number(self, text: str) -> str:
        cleaned = text.strip()
        if not cleaned:
            raise ValueError("empty number")
        # a group separator is dropped wherever it appears: de-DE "1.5" is 15
        if "." not in (self.decimal_separator, self.group_separator) and "." in cleaned:
            raise ValueError(f"unexpected '.' in {text!r}")
        if self.group_separator:
            cleaned = cleaned.replace(self.group_separator, "")
        if self.decimal_separator != ".":
            cleaned = cleaned.replace(self.decimal_separator, ".")
        return cleaned


INVARIANT = Culture(
    name="invariant",
    datetime_formats=(
        "%m/%d/%Y %H:%M:%S",
        "%m/%d/%Y %H:%M",
        "%m/%d/%Y",
    ),
)

_CULTURES: dict[str, Culture] = {
    "invariant": INVARIANT,
    "en-us": Culture(
        name="en-US",
        datetime_formats=(
            "%m/%d/%Y %I:%M:%S %p",
            "%m/%d/%Y %H:%M:%S",
            "%m/%d/%Y",
        ),
    ),
    "en-gb": Culture(
        name="en-GB",
        datetime_formats=("%d/%m/%Y %H:%M:%S", "%d/%m/%Y"),
    ),
    "es-es": Culture(
        name="es-ES",
        decimal_separator=",",
        group_separator=".",
        datetime_formats=("%d/%m/%Y %H:%M:%S", "%d/%m/%Y"),
    ),
    "de-de": Culture(
        name="de-DE",
        decimal_separator=",",
        group_separator=".",
        datetime_formats=("%d.%m.%Y %H:%M:%S", "%d.%m.%Y"),
    ),
    "fr-fr": Culture(
        name="fr-FR",
        decimal_separator=",",
        group_separator=" ",
        datetime_formats=("%d/%m/%Y %H:%M:%S", "%d/%m/%Y"),
    ),
    "pt-br": Culture(
        name="pt-BR",
        decimal_separator=",",
        group_separator=".",
        datetime_formats=("%d/%m/%Y %H:%M:%S", "%d/%m/%Y"),
    ),
}


def get_culture(name: str | None) -> Culture:
    """Resolve a culture by name (case-insensitive).

    Args:
        name: Culture name such as "invariant", "en-US" or "de-DE". ``None``
            or an empty name selects the invariant culture.

    Returns:
        The matching Culture

    Raises:
        ValueError: If the culture is not known
    """
    if not name or not name.strip():
        return INVARIANT
    culture = _CULTURES.get(name.strip().lower())
    if culture is None:
        known = ", ".join(sorted(c.name for c in _CULTURES.values()))
        raise ValueError(f"Unknown culture '{name}'. Known cultures: {known}")
    return culture


def known_cultures() -> list[str]:
    return sorted(c.name for c in _CULTURES.values())

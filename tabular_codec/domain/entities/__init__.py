from .column import Column
from .culture import INVARIANT, Culture, get_culture, known_cultures
from .row import Row
from .schema import (
    DuplicateColumnPolicy,
    TableSchema,
    generated_column_name,
)

__all__ = [
    "INVARIANT",
    "Column",
    "Culture",
    "DuplicateColumnPolicy",
    "Row",
    "TableSchema",
    "generated_column_name",
    "get_culture",
    "known_cultures",
]

"""Unit tests for Column."""

import pytest

from tabular_codec.domain.entities import Column


class TestColumn:
    """Test suite for Column value object."""

    def test_defaults_to_string_type(self):
        """A column without an explicit type is a text column."""
        column = Column(0, "Name")

        assert column.type is str

    def test_str_shows_index_name_and_type(self):
        """str() renders index, name and type name."""
        assert str(Column(2, "Age", int)) == "2 - Age[int]"

    def test_negative_index_is_rejected(self):
        """Column indices are zero-based and never negative."""
        with pytest.raises(ValueError, match="non-negative"):
            Column(-1, "Name")

    def test_empty_name_is_rejected(self):
        """Every column has a name."""
        with pytest.raises(ValueError, match="must have a name"):
            Column(0, "")

    def test_column_is_immutable(self):
        """Column is frozen."""
        column = Column(0, "Name")

        with pytest.raises(Exception):  # FrozenInstanceError
            column.name = "Other"  # type: ignore[misc]

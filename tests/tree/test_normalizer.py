"""Tests for ValueNormalizer: typed scalars <-> control content."""

import math

import pytest

from docsync.tree.nodes import ValueKind
from docsync.tree.normalizer import ValueNormalizer


@pytest.fixture
def normalizer() -> ValueNormalizer:
    """Provide a shared ValueNormalizer instance for all tests."""
    return ValueNormalizer()


class TestToContent:
    """Rendering Document scalars into control content."""

    def test_string(self, normalizer: ValueNormalizer) -> None:
        assert normalizer.to_content("hi", ValueKind.STRING) == "hi"

    def test_integral_float_shown_as_int(self, normalizer: ValueNormalizer) -> None:
        assert normalizer.to_content(3.0, ValueKind.NUMBER) == "3"

    def test_fractional_float(self, normalizer: ValueNormalizer) -> None:
        assert normalizer.to_content(2.5, ValueKind.NUMBER) == "2.5"

    def test_boolean_is_bool(self, normalizer: ValueNormalizer) -> None:
        assert normalizer.to_content(True, ValueKind.BOOLEAN) is True

    def test_null_placeholder(self, normalizer: ValueNormalizer) -> None:
        assert normalizer.to_content(None, ValueKind.NULL) == "null"


class TestParse:
    """Parsing control content back into typed scalars."""

    @pytest.mark.parametrize(
        ("content", "expected"),
        [("12", 12), ("-7", -7), ("1.5", 1.5), (" 4 ", 4), ("abc", 0), ("", 0), ("nan", 0), ("inf", 0)],
    )
    def test_number(self, normalizer: ValueNormalizer, content: str, expected: float) -> None:
        result = normalizer.parse(content, ValueKind.NUMBER)
        assert result == expected
        assert not (isinstance(result, float) and math.isnan(result))

    def test_integer_text_stays_int(self, normalizer: ValueNormalizer) -> None:
        assert isinstance(normalizer.parse("12", ValueKind.NUMBER), int)

    def test_boolean_from_bool(self, normalizer: ValueNormalizer) -> None:
        assert normalizer.parse(False, ValueKind.BOOLEAN) is False

    def test_boolean_from_text(self, normalizer: ValueNormalizer) -> None:
        assert normalizer.parse("TRUE", ValueKind.BOOLEAN) is True
        assert normalizer.parse("no", ValueKind.BOOLEAN) is False

    def test_null_literal(self, normalizer: ValueNormalizer) -> None:
        assert normalizer.parse("Null", ValueKind.NULL) is None

    def test_null_control_keeps_other_text(self, normalizer: ValueNormalizer) -> None:
        assert normalizer.parse("something", ValueKind.NULL) == "something"

    def test_string(self, normalizer: ValueNormalizer) -> None:
        assert normalizer.parse("42", ValueKind.STRING) == "42"


class TestDiffers:
    """Staleness check used by incremental rendering."""

    def test_equal_numbers_in_different_forms(self, normalizer: ValueNormalizer) -> None:
        assert not normalizer.differs("3", 3.0, ValueKind.NUMBER)

    def test_changed_number(self, normalizer: ValueNormalizer) -> None:
        assert normalizer.differs("3", 4, ValueKind.NUMBER)

    def test_boolean(self, normalizer: ValueNormalizer) -> None:
        assert normalizer.differs(False, True, ValueKind.BOOLEAN)
        assert not normalizer.differs(True, True, ValueKind.BOOLEAN)

    def test_string(self, normalizer: ValueNormalizer) -> None:
        assert normalizer.differs("a", "b", ValueKind.STRING)
        assert not normalizer.differs("a", "a", ValueKind.STRING)

    def test_null(self, normalizer: ValueNormalizer) -> None:
        assert not normalizer.differs("null", None, ValueKind.NULL)

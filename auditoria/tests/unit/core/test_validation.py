"""Unit tests for the composable validators."""

from enum import Enum
from functools import partial
from uuid import uuid4

import pytest

from auditoria.core.errors import ValidationError
from auditoria.core.validation import (
    validate_boolean,
    validate_enum,
    validate_integer,
    validate_list,
    validate_string,
    validate_uuid,
)


class Color(Enum):
    RED = "red"
    BLUE = "blue"


@pytest.mark.unit
class TestValidators:
    """Test suite for validate_* helpers."""

    def test_string_strips_and_checks_length(self):
        """Test strings are stripped before length checks."""
        assert validate_string("  abc  ", "name", min_length=3) == "abc"
        with pytest.raises(ValidationError) as exc_info:
            validate_string("ab", "name", min_length=3)
        assert exc_info.value.details["field"] == "name"

    def test_optional_blank_string_is_none(self):
        """Test blank optional values normalize to None."""
        assert validate_string("   ", "name", required=False) is None

    def test_integer_bounds(self):
        """Test integer parsing and bounds."""
        assert validate_integer("7", "page", min_value=1) == 7
        with pytest.raises(ValidationError):
            validate_integer(0, "page", min_value=1)
        with pytest.raises(ValidationError):
            validate_integer(True, "page")

    @pytest.mark.parametrize(("raw", "expected"), [("yes", True), ("OFF", False), (True, True)])
    def test_boolean_spellings(self, raw, expected):
        """Test common boolean spellings."""
        assert validate_boolean(raw, "flag") is expected

    def test_enum_is_case_insensitive(self):
        """Test enum lookup by value ignores case."""
        assert validate_enum("RED", "color", Color) is Color.RED
        with pytest.raises(ValidationError):
            validate_enum("green", "color", Color)

    def test_uuid(self):
        """Test UUID parsing."""
        value = uuid4()
        assert validate_uuid(str(value), "id") == value
        with pytest.raises(ValidationError):
            validate_uuid("nope", "id")

    def test_list_with_item_validator(self):
        """Test comma-separated strings and per-item validation."""
        colors = validate_list(
            "red, blue", "colors", item_validator=partial(validate_enum, enum_class=Color)
        )
        assert colors == [Color.RED, Color.BLUE]

        with pytest.raises(ValidationError) as exc_info:
            validate_list(
                ["red", "green"], "colors", item_validator=partial(validate_enum, enum_class=Color)
            )
        assert exc_info.value.details["field"] == "colors[1]"

"""
Tests for input validation.

Both channels are covered: ErrorResult values from validate_input and
InvalidInputError from require_valid_input.
"""

import pytest

from note_parser_backend.core.parser_engine import (
    ErrorKind,
    ErrorResult,
    require_valid_input,
    validate_input,
)
from note_parser_backend.exceptions import InvalidInputError


class TestValidateInput:
    """Test the value channel."""

    def test_valid_text_returns_none(self):
        assert validate_input("call John") is None

    def test_none_is_invalid(self):
        error = validate_input(None)
        assert isinstance(error, ErrorResult)
        assert error.kind == ErrorKind.INVALID_INPUT
        assert error.message == "Input cannot be None"

    @pytest.mark.parametrize("value", [42, 3.5, ["call John"], {"text": "x"}, b"bytes"])
    def test_non_string_is_invalid(self, value):
        error = validate_input(value)
        assert error.kind == ErrorKind.INVALID_INPUT
        assert f"got {type(value).__name__}" in error.message

    @pytest.mark.parametrize("value", ["", "   ", "\n\t "])
    def test_blank_is_invalid(self, value):
        error = validate_input(value)
        assert error.kind == ErrorKind.INVALID_INPUT
        assert error.message == "Input cannot be empty"

    def test_parser_name_prefixes_message(self):
        error = validate_input("", "date")
        assert error.message == "date: Input cannot be empty"
        assert error.parser == "date"

    def test_validation_is_idempotent(self):
        """Validating the same value twice yields equal results."""
        for value in (None, "", 7, "note"):
            assert validate_input(value) == validate_input(value)


class TestRequireValidInput:
    """Test the fault channel."""

    def test_returns_text_when_valid(self):
        assert require_valid_input("note") == "note"

    def test_raises_with_equivalent_error(self):
        with pytest.raises(InvalidInputError) as exc_info:
            require_valid_input(None, "subject")

        assert exc_info.value.error == validate_input(None, "subject")
        assert exc_info.value.parser_name == "subject"
        assert "Input cannot be None" in str(exc_info.value)

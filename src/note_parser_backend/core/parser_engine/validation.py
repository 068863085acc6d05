"""
Input validation shared by every field parser and by the orchestrator.

Two channels are offered. ``validate_input`` returns an ``ErrorResult``
value and is what field parsers call first. ``require_valid_input`` raises
``InvalidInputError`` for callers written in the fault-propagating style.
"""

from typing import Any, Optional

from ...exceptions.parser_exceptions import InvalidInputError
from .types import ErrorKind, ErrorResult


def validate_input(value: Any, parser_name: Optional[str] = None) -> Optional[ErrorResult]:
    """Validate parser input.

    Args:
        value: Candidate input text
        parser_name: Name used to prefix error messages

    Returns:
        ``ErrorResult(INVALID_INPUT)`` when the input is None, not a string
        or blank after trimming; None when the input is valid.
    """
    prefix = f"{parser_name}: " if parser_name else ""

    if value is None:
        return ErrorResult(ErrorKind.INVALID_INPUT, f"{prefix}Input cannot be None", parser_name)

    if not isinstance(value, str):
        return ErrorResult(
            ErrorKind.INVALID_INPUT,
            f"{prefix}Input must be a string, got {type(value).__name__}",
            parser_name,
        )

    if not value.strip():
        return ErrorResult(ErrorKind.INVALID_INPUT, f"{prefix}Input cannot be empty", parser_name)

    return None


def require_valid_input(value: Any, parser_name: Optional[str] = None) -> str:
    """Validate parser input, raising ``InvalidInputError`` on failure."""
    error = validate_input(value, parser_name)
    if error is not None:
        raise InvalidInputError(error)
    return value

"""
Parser engine exceptions for Note Parser.

Custom exception classes raised by the parser registry and by the
fault-propagating input validator. Field-level failures during a parse
pass are not raised: the orchestrator records them as error entries.
"""

from typing import List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from ..core.parser_engine.types import ErrorResult


class NoteParserError(Exception):
    """Base exception for all Note Parser errors."""

    def __init__(
        self,
        message: str,
        parser_name: Optional[str] = None,
        suggestions: Optional[List[str]] = None
    ) -> None:
        """
        Initialize parser error.

        Args:
            message: Error description
            parser_name: Name of the field parser involved, if any
            suggestions: List of suggested fixes
        """
        super().__init__(message)
        self.parser_name = parser_name
        self.suggestions = suggestions or []

    def __str__(self) -> str:
        """Return formatted error message with suggestions."""
        msg = super().__str__()

        if self.parser_name:
            msg = f"{msg}\nParser: {self.parser_name}"

        if self.suggestions:
            msg += "\n\nSuggestions:"
            for i, suggestion in enumerate(self.suggestions, 1):
                msg += f"\n  {i}. {suggestion}"

        return msg


class ParserRegistrationError(NoteParserError):
    """Base exception for rejected parser registrations."""
    pass


class DuplicateParserError(ParserRegistrationError):
    """Exception raised when a parser name is registered twice."""

    def __init__(self, parser_name: str) -> None:
        super().__init__(
            f"Parser already registered: {parser_name}",
            parser_name,
            [
                "Register each field parser under a unique name",
                f"Call unregister('{parser_name}') first to replace it explicitly",
            ],
        )


class InvalidParserError(ParserRegistrationError):
    """Exception raised when a candidate parser does not satisfy the parser contract."""

    def __init__(self, message: str, parser_name: Optional[str] = None) -> None:
        super().__init__(
            message,
            parser_name,
            [
                "Field parsers must have a non-empty string name",
                "Field parsers must provide a callable parse(text, patterns)",
            ],
        )


class ParserDependencyError(ParserRegistrationError):
    """Exception raised when declared parser dependencies form a cycle."""

    def __init__(self, parser_name: str, cycle: List[str]) -> None:
        super().__init__(
            f"Dependency cycle detected: {' -> '.join(cycle)}",
            parser_name,
            ["Remove one of the depends_on declarations in the cycle"],
        )
        self.cycle = cycle


class InvalidInputError(NoteParserError):
    """Exception raised by the fault-propagating input validator."""

    def __init__(self, error: "ErrorResult") -> None:
        super().__init__(error.message, error.parser)
        self.error = error

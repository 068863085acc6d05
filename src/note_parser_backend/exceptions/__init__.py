"""
Exceptions package for Note Parser.

This package contains custom exception classes for parser registration,
input validation and configuration errors.
"""

from .parser_exceptions import (
    NoteParserError,
    ParserRegistrationError,
    DuplicateParserError,
    InvalidParserError,
    ParserDependencyError,
    InvalidInputError,
)

from .config_exceptions import (
    ConfigurationError,
    ConfigurationFileNotFoundError,
    ConfigurationValidationError,
    ConfigurationSchemaError,
    EnvironmentVariableError,
)

__all__ = [
    # Parser engine exceptions
    "NoteParserError",
    "ParserRegistrationError",
    "DuplicateParserError",
    "InvalidParserError",
    "ParserDependencyError",
    "InvalidInputError",
    # Configuration exceptions
    "ConfigurationError",
    "ConfigurationFileNotFoundError",
    "ConfigurationValidationError",
    "ConfigurationSchemaError",
    "EnvironmentVariableError",
]

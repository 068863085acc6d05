"""
Configuration-related exceptions for Note Parser.

Custom exception classes for handling configuration loading, validation,
and environment variable errors with user-friendly messages.
"""

from typing import List, Optional

from .parser_exceptions import NoteParserError


class ConfigurationError(NoteParserError):
    """Base exception for configuration-related errors."""

    def __init__(
        self,
        message: str,
        config_file: Optional[str] = None,
        suggestions: Optional[List[str]] = None
    ) -> None:
        """
        Initialize configuration error.

        Args:
            message: Error description
            config_file: Configuration file path that caused the error
            suggestions: List of suggested fixes
        """
        super().__init__(message, None, suggestions)
        self.config_file = config_file

    def __str__(self) -> str:
        """Return formatted error message with the offending file."""
        msg = Exception.__str__(self)

        if self.config_file:
            msg = f"{msg}\nConfig file: {self.config_file}"

        if self.suggestions:
            msg += "\n\nSuggestions:"
            for i, suggestion in enumerate(self.suggestions, 1):
                msg += f"\n  {i}. {suggestion}"

        return msg


class ConfigurationFileNotFoundError(ConfigurationError):
    """Exception raised when an explicitly requested configuration file is missing."""

    def __init__(self, message: str, config_file: Optional[str] = None) -> None:
        super().__init__(
            message,
            config_file,
            [
                "Check the --config-path argument",
                "Omit the path to run with built-in defaults",
            ],
        )


class ConfigurationValidationError(ConfigurationError):
    """Exception raised when configuration fails schema validation."""

    def __init__(
        self,
        message: str,
        config_file: Optional[str] = None,
        validation_errors: Optional[List[str]] = None,
        invalid_fields: Optional[List[str]] = None
    ) -> None:
        """
        Initialize validation error.

        Args:
            message: Error description
            config_file: Configuration file with validation errors
            validation_errors: List of specific validation error messages
            invalid_fields: Dotted paths of the fields that failed validation
        """
        suggestions = ["Compare with noteparser.config.json in the project root"]
        if invalid_fields:
            suggestions.append(f"Fix these fields: {', '.join(invalid_fields)}")

        super().__init__(message, config_file, suggestions)
        self.validation_errors = validation_errors or []
        self.invalid_fields = invalid_fields or []

    def __str__(self) -> str:
        msg = super().__str__()

        if self.validation_errors:
            msg += "\n\nValidation errors:"
            for i, error in enumerate(self.validation_errors, 1):
                msg += f"\n  {i}. {error}"

        return msg


class ConfigurationSchemaError(ConfigurationError):
    """Exception raised when the configuration schema itself is invalid."""

    def __init__(
        self,
        message: str,
        schema_file: Optional[str] = None,
        schema_errors: Optional[List[str]] = None
    ) -> None:
        super().__init__(message, schema_file, ["Check the schema against the JSON Schema specification"])
        self.schema_errors = schema_errors or []


class EnvironmentVariableError(ConfigurationError):
    """Exception raised when an environment override cannot be converted."""

    def __init__(self, message: str, variable_name: Optional[str] = None) -> None:
        suggestions = []
        if variable_name:
            suggestions.append(f"Check the value of {variable_name} in the environment or .env file")
        super().__init__(message, None, suggestions)
        self.variable_name = variable_name

"""
Schema validation for configuration management.

This module provides JSON schema loading, validation, and error handling
capabilities for the Note Parser configuration system.
"""

import logging
from typing import Any, Dict, Optional

import jsonschema

from ...exceptions.config_exceptions import (
    ConfigurationFileNotFoundError,
    ConfigurationSchemaError,
    ConfigurationValidationError,
)
from .defaults import CONFIG_SCHEMA
from .file_operations import FileOperations
from .paths import ConfigPaths


logger = logging.getLogger(__name__)


class SchemaValidator:
    """
    Schema validation for configuration management.

    Uses a schema file from the project's schema directory when present,
    and the built-in schema otherwise.
    """

    def __init__(self, file_ops: FileOperations, paths: ConfigPaths) -> None:
        """
        Initialize schema validator.

        Args:
            file_ops: File operations instance
            paths: Configuration paths instance
        """
        self.file_ops = file_ops
        self.paths = paths
        self.logger = logger

    def load_schema(self, schema_file: Optional[str] = None) -> Dict[str, Any]:
        """
        Load JSON schema for configuration validation.

        Args:
            schema_file: Path to schema file (default: built-in schema unless
                the project ships config/schema/config_schema.json)

        Returns:
            Loaded JSON schema

        Raises:
            ConfigurationSchemaError: If an explicitly named schema cannot be loaded
        """
        if schema_file is None:
            default_path = self.file_ops.resolve_path(
                f"{self.paths.SCHEMA_DIR}/{self.paths.DEFAULT_CONFIG_SCHEMA}"
            )
            if not default_path.exists():
                self.logger.debug("Using built-in configuration schema")
                return CONFIG_SCHEMA
            schema_file = str(default_path)

        try:
            return self.file_ops.load_json_file(schema_file)
        except ConfigurationFileNotFoundError as e:
            raise ConfigurationSchemaError(
                f"Configuration schema file not found: {schema_file}",
                str(schema_file)
            ) from e
        except Exception as e:
            raise ConfigurationSchemaError(
                f"Invalid configuration schema: {e}",
                str(schema_file)
            ) from e

    def validate_config(
        self,
        config: Dict[str, Any],
        schema: Optional[Dict[str, Any]] = None,
        config_file: str = "unknown"
    ) -> bool:
        """
        Validate configuration against JSON schema.

        Args:
            config: Configuration dictionary to validate
            schema: JSON schema (loads default if not provided)
            config_file: Configuration file name for error reporting

        Returns:
            True if validation passes

        Raises:
            ConfigurationValidationError: If validation fails
            ConfigurationSchemaError: If the schema itself is invalid
        """
        if schema is None:
            schema = self.load_schema()

        try:
            validator_cls = jsonschema.validators.validator_for(schema)
            validator_cls.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ConfigurationSchemaError(
                f"Invalid JSON schema: {e.message}",
                schema_errors=[e.message]
            ) from e

        errors = sorted(
            validator_cls(schema).iter_errors(config),
            key=lambda e: [str(p) for p in e.absolute_path],
        )
        if not errors:
            return True

        validation_errors = [e.message for e in errors]
        invalid_fields = [
            ".".join(str(p) for p in e.absolute_path)
            for e in errors
            if e.absolute_path
        ]
        self.logger.error(f"Configuration validation failed with {len(errors)} error(s)")
        raise ConfigurationValidationError(
            f"Configuration validation failed: {errors[0].message}",
            config_file,
            validation_errors,
            invalid_fields
        )

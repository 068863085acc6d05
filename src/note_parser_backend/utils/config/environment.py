"""
Environment variable handling for configuration management.

This module maps NOTE_PARSER_* environment variables onto configuration
keys and converts their string values to the configured types.
"""

import logging
import os
from copy import deepcopy
from typing import Any, Dict, Optional, Tuple

from ...exceptions.config_exceptions import EnvironmentVariableError


logger = logging.getLogger(__name__)

TRUE_VALUES = ('true', '1', 'yes', 'on', 'enabled')
FALSE_VALUES = ('false', '0', 'no', 'off', 'disabled')


class EnvironmentHandler:
    """
    Environment variable handling for configuration management.

    Handles environment variable overrides and type conversion.
    """

    def __init__(self) -> None:
        """Initialize environment handler."""
        self.logger = logger

    def get_env_mapping(self) -> Dict[str, Tuple[str, str]]:
        """
        Get mapping of environment variable names to configuration keys.

        Returns:
            Dictionary mapping env var names to (config key, target type)
        """
        return {
            'NOTE_PARSER_LOG_LEVEL': ('logging.level', 'upper'),
            'NOTE_PARSER_LOG_FORMAT': ('logging.format', 'string'),
            'NOTE_PARSER_LOG_FILE': ('logging.file', 'string'),
            'NOTE_PARSER_EXCLUDE': ('parser.exclude', 'list'),
            'NOTE_PARSER_TIMEOUT': ('parser.parser_timeout_seconds', 'float'),
            'NOTE_PARSER_CASE_INSENSITIVE': ('parser.case_insensitive', 'boolean'),
        }

    def convert_env_value(self, value: str, target_type: str = 'string', variable: Optional[str] = None) -> Any:
        """
        Convert environment variable string to appropriate Python type.

        Args:
            value: Environment variable value (always string)
            target_type: Target type ('string', 'upper', 'boolean', 'float', 'list')
            variable: Variable name for error reporting

        Returns:
            Converted value

        Raises:
            EnvironmentVariableError: If conversion fails
        """
        value = value.strip()

        if target_type == 'boolean':
            lowered = value.lower()
            if lowered in TRUE_VALUES:
                return True
            if lowered in FALSE_VALUES:
                return False
            raise EnvironmentVariableError(
                f"Cannot convert '{value}' to boolean",
                variable
            )
        if target_type == 'float':
            if not value:
                return None
            try:
                return float(value)
            except ValueError as e:
                raise EnvironmentVariableError(
                    f"Cannot convert '{value}' to a number: {e}",
                    variable
                ) from e
        if target_type == 'list':
            return [item.strip() for item in value.split(',') if item.strip()]
        if target_type == 'upper':
            return value.upper()
        return value

    def apply_environment_overrides(self, config: Dict[str, Any]) -> Dict[str, Any]:
        """
        Apply environment variable overrides to configuration.

        A variable that cannot be converted is logged and skipped.

        Args:
            config: Base configuration dictionary

        Returns:
            Configuration with environment overrides applied
        """
        result = deepcopy(config)

        for env_var, (config_key, target_type) in self.get_env_mapping().items():
            env_value = os.getenv(env_var)
            if env_value is None:
                continue

            try:
                converted_value = self.convert_env_value(env_value, target_type, env_var)
            except EnvironmentVariableError as e:
                self.logger.warning(f"Failed to apply environment variable {env_var}: {e}")
                continue

            set_nested_value(result, config_key, converted_value)
            self.logger.debug(f"Applied environment override: {env_var} -> {config_key}")

        return result

    def active_overrides(self) -> Dict[str, str]:
        """Environment variables currently set, keyed by variable name."""
        return {
            env_var: config_key
            for env_var, (config_key, _) in self.get_env_mapping().items()
            if os.getenv(env_var) is not None
        }


def set_nested_value(config: Dict[str, Any], key_path: str, value: Any) -> None:
    """Set a nested value in configuration using dot notation."""
    keys = key_path.split('.')
    current = config

    for key in keys[:-1]:
        if not isinstance(current.get(key), dict):
            current[key] = {}
        current = current[key]

    current[keys[-1]] = value

"""
Main configuration manager for Note Parser.

This module provides the ConfigManager class that orchestrates loading,
default merging, environment overrides and schema validation.
"""

import logging
import os
from copy import deepcopy
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from ...exceptions.config_exceptions import ConfigurationError
from .defaults import DEFAULT_CONFIG
from .environment import EnvironmentHandler, set_nested_value
from .file_operations import FileOperations
from .paths import ConfigPaths
from .schema_validation import SchemaValidator


logger = logging.getLogger(__name__)

_MISSING = object()


def deep_merge_dicts(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge ``override`` over ``base`` without mutating either."""
    result = deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(result.get(key), dict):
            result[key] = deep_merge_dicts(result[key], value)
        else:
            result[key] = deepcopy(value)
    return result


class ConfigManager:
    """
    Configuration manager for Note Parser.

    Handles loading and merging of configuration from multiple sources:
    - Built-in defaults
    - The project configuration file (noteparser.config.json)
    - Environment variables (optionally from a .env file)
    """

    def __init__(
        self,
        config_file: Optional[str] = None,
        project_root: Optional[Union[str, Path]] = None,
        load_env: bool = True,
    ) -> None:
        """
        Initialize the ConfigManager.

        Args:
            config_file: Path to configuration file. When given, the file must
                exist; when omitted, noteparser.config.json is used if present.
            project_root: Project root directory (default: current working directory)
            load_env: Whether to load environment variables from .env file
        """
        self.project_root = Path(project_root or os.getcwd()).resolve()
        self.paths = ConfigPaths()
        self.explicit_file = config_file is not None
        self.config_file = config_file or self.paths.DEFAULT_CONFIG_FILE

        self._config: Dict[str, Any] = {}
        self._loaded = False
        self._source: Optional[str] = None

        self.logger = logger

        self.file_ops = FileOperations(self.project_root, self.paths.ENV_FILE)
        self.schema_validator = SchemaValidator(self.file_ops, self.paths)
        self.env_handler = EnvironmentHandler()

        if load_env:
            self.file_ops.load_environment_variables()

    @property
    def config(self) -> Dict[str, Any]:
        """Get the current configuration. Loads if not already loaded."""
        if not self._loaded:
            self.load_config()
        return deepcopy(self._config)

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    @property
    def source(self) -> Optional[str]:
        """Path of the loaded configuration file, or None for built-in defaults."""
        return self._source

    def load_config(self, force_reload: bool = False, validate: bool = True) -> Dict[str, Any]:
        """
        Load configuration from all sources.

        Args:
            force_reload: Force reloading even if already loaded
            validate: Whether to validate configuration against schema

        Returns:
            Loaded configuration dictionary

        Raises:
            ConfigurationFileNotFoundError: If an explicitly named file is missing
            ConfigurationValidationError: If validation fails
            ConfigurationError: If loading fails for any other reason
        """
        if self._loaded and not force_reload:
            self.logger.debug("Configuration already loaded, returning cached version")
            return deepcopy(self._config)

        try:
            user_config = self._load_user_config()

            self.logger.debug("Merging with default configuration")
            merged_config = deep_merge_dicts(DEFAULT_CONFIG, user_config)

            self.logger.debug("Applying environment variable overrides")
            config = self.env_handler.apply_environment_overrides(merged_config)

            if validate:
                self.schema_validator.validate_config(
                    config, config_file=self._source or "<defaults>"
                )
        except ConfigurationError as e:
            self.logger.error(f"Configuration loading failed: {e}")
            self._loaded = False
            raise

        self._config = config
        self._loaded = True
        self.logger.info("Configuration loaded successfully")
        return deepcopy(self._config)

    def _load_user_config(self) -> Dict[str, Any]:
        path = self.file_ops.resolve_path(self.config_file)
        if not path.exists() and not self.explicit_file:
            self.logger.debug(f"No configuration file at {path}, using built-in defaults")
            self._source = None
            return {}

        self.logger.info(f"Loading configuration from {path}")
        data = self.file_ops.load_json_file(path)
        self._source = str(path)
        return data

    def reload_config(self) -> Dict[str, Any]:
        """Force reload configuration from all sources."""
        return self.load_config(force_reload=True)

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value by key using dot notation.

        Args:
            key: Configuration key (e.g. 'parser.exclude')
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        if not self._loaded:
            self.load_config()

        value: Any = self._config
        try:
            for k in key.split('.'):
                value = value[k]
        except (KeyError, TypeError):
            return default
        return deepcopy(value)

    def set(self, key: str, value: Any) -> None:
        """
        Set a configuration value by key using dot notation.

        This modifies the in-memory configuration only.
        """
        if not self._loaded:
            self.load_config()
        set_nested_value(self._config, key, value)

    def has(self, key: str) -> bool:
        """Check if a configuration key exists."""
        return self.get(key, _MISSING) is not _MISSING

    def reset(self) -> None:
        """Reset configuration state, forcing reload on next access."""
        self._config = {}
        self._loaded = False
        self._source = None

    def validate_config(self, config: Optional[Dict[str, Any]] = None) -> bool:
        """Validate configuration (the loaded one by default) against the schema."""
        if config is None:
            config = self.config
        return self.schema_validator.validate_config(config, config_file=self.config_file)

    def get_config_summary(self) -> Dict[str, Any]:
        """
        Get a summary of the current configuration state.

        Returns:
            Dictionary with configuration summary
        """
        return {
            "loaded": self._loaded,
            "config_file": self.config_file,
            "source": self._source or "built-in defaults",
            "project_root": str(self.project_root),
            "config_keys": self._get_all_keys(self._config) if self._loaded else [],
            "environment_overrides": self.env_handler.active_overrides(),
        }

    def _get_all_keys(self, config: Dict[str, Any], prefix: str = "") -> List[str]:
        keys = []
        for key, value in config.items():
            full_key = f"{prefix}.{key}" if prefix else key
            keys.append(full_key)
            if isinstance(value, dict):
                keys.extend(self._get_all_keys(value, full_key))
        return keys

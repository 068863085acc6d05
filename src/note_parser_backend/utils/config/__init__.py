"""Configuration management package.

This package provides a modular configuration system with support for:
- JSON schema validation
- Environment variable overrides
- Built-in default values
- Path management and file operations

Usage:
    from note_parser_backend.utils.config import ConfigManager

    config = ConfigManager()
    exclude = config.get("parser.exclude", [])
"""

from .manager import ConfigManager, deep_merge_dicts
from .paths import ConfigPaths
from .defaults import DEFAULT_CONFIG, CONFIG_SCHEMA
from .file_operations import FileOperations
from .schema_validation import SchemaValidator
from .environment import EnvironmentHandler

__all__ = [
    'ConfigManager',
    'ConfigPaths',
    'DEFAULT_CONFIG',
    'CONFIG_SCHEMA',
    'FileOperations',
    'SchemaValidator',
    'EnvironmentHandler',
    'deep_merge_dicts',
]

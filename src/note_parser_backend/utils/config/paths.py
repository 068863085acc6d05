"""
Configuration file paths and constants for Note Parser.

This module provides the ConfigPaths dataclass containing default paths
and constants used throughout the configuration system.
"""

from dataclasses import dataclass


@dataclass
class ConfigPaths:
    """Configuration file paths and constants."""

    DEFAULT_CONFIG_FILE: str = "noteparser.config.json"
    SCHEMA_DIR: str = "./config/schema"
    ENV_FILE: str = ".env"
    DEFAULT_CONFIG_SCHEMA: str = "config_schema.json"

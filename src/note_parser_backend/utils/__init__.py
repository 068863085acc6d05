"""
Utility modules for Note Parser.

This package contains configuration management and logging setup.
"""

from .config import ConfigManager, ConfigPaths
from .logging_config import JSONFormatter, LogFormat, LoggingManager, LogLevel

__all__ = [
    "ConfigManager",
    "ConfigPaths",
    "JSONFormatter",
    "LogFormat",
    "LoggingManager",
    "LogLevel",
]

"""
Logging configuration for Note Parser.

Module code logs through ``logging.getLogger(__name__)``; this module
configures the root logger once per process from the ``logging`` section
of the configuration: level, standard/detailed/JSON formats, optional
rotating log file, and a rich console handler for the CLI.
"""

import json
import logging
import logging.handlers
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional, Union

from rich.console import Console
from rich.logging import RichHandler


class LogLevel(Enum):
    """Log level enumeration."""
    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR
    CRITICAL = logging.CRITICAL

    @classmethod
    def parse(cls, value: Union[str, "LogLevel", None]) -> "LogLevel":
        if isinstance(value, cls):
            return value
        try:
            return cls[str(value or "INFO").upper()]
        except KeyError:
            raise ValueError(f"Unknown log level: {value}") from None


class LogFormat(Enum):
    """Log format types."""
    STANDARD = "standard"
    JSON = "json"
    DETAILED = "detailed"


# Attributes every LogRecord carries; anything else came from ``extra=``
_STANDARD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {'message', 'asctime', 'extra_data'}


class JSONFormatter(logging.Formatter):
    """One JSON object per record, with ``extra_data`` and ``extra=`` fields merged in."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
            "message": record.getMessage(),
        }

        extra_data = getattr(record, 'extra_data', None)
        if isinstance(extra_data, dict):
            log_data.update(extra_data)

        for attr_name, attr_value in record.__dict__.items():
            if attr_name.startswith('_') or attr_name in _STANDARD_ATTRS:
                continue
            log_data[attr_name] = attr_value

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str, ensure_ascii=False, separators=(',', ':'))


FORMATTERS = {
    LogFormat.STANDARD: '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    LogFormat.DETAILED: '%(asctime)s - %(name)s - %(levelname)s - %(module)s:%(funcName)s:%(lineno)d - %(message)s',
}


class LoggingManager:
    """Configures the root logger."""

    def __init__(
        self,
        log_level: LogLevel = LogLevel.INFO,
        log_format: LogFormat = LogFormat.STANDARD,
        log_file: Optional[Path] = None,
        enable_console: bool = True,
        rich_console: bool = False,
        enable_rotation: bool = False,
        max_bytes: int = 10 * 1024 * 1024,
        backup_count: int = 5,
        console: Optional[Console] = None,
    ):
        self.log_level = log_level
        self.log_format = log_format
        self.log_file = Path(log_file) if log_file else None
        self.enable_console = enable_console
        self.rich_console = rich_console
        self.enable_rotation = enable_rotation
        self.max_bytes = max_bytes
        self.backup_count = backup_count
        self.console = console

        self._setup_root_logger()

    @classmethod
    def from_config(cls, logging_config: Dict[str, Any], verbose: bool = False, **kwargs) -> "LoggingManager":
        """Build from the ``logging`` configuration section.

        ``verbose`` forces DEBUG regardless of the configured level.
        """
        level = LogLevel.DEBUG if verbose else LogLevel.parse(logging_config.get("level"))
        return cls(
            log_level=level,
            log_format=LogFormat(logging_config.get("format") or "standard"),
            log_file=logging_config.get("file"),
            **kwargs,
        )

    def _setup_root_logger(self) -> None:
        root_logger = logging.getLogger()
        root_logger.setLevel(self.log_level.value)

        for handler in list(root_logger.handlers):
            root_logger.removeHandler(handler)
            handler.close()

        if self.enable_console:
            root_logger.addHandler(self._create_console_handler())

        if self.log_file:
            file_handler = self._create_file_handler()
            file_handler.setLevel(self.log_level.value)
            file_handler.setFormatter(self._create_formatter())
            root_logger.addHandler(file_handler)

    def _create_formatter(self) -> logging.Formatter:
        if self.log_format == LogFormat.JSON:
            return JSONFormatter()
        return logging.Formatter(FORMATTERS[self.log_format])

    def _create_console_handler(self) -> logging.Handler:
        if self.rich_console and self.log_format != LogFormat.JSON:
            handler: logging.Handler = RichHandler(
                console=self.console or Console(stderr=True),
                show_path=self.log_level == LogLevel.DEBUG,
                rich_tracebacks=True,
            )
            handler.setFormatter(logging.Formatter("%(message)s"))
        else:
            handler = logging.StreamHandler()
            handler.setFormatter(self._create_formatter())
        handler.setLevel(self.log_level.value)
        return handler

    def _create_file_handler(self) -> logging.Handler:
        self.log_file.parent.mkdir(parents=True, exist_ok=True)
        if self.enable_rotation:
            return logging.handlers.RotatingFileHandler(
                filename=self.log_file,
                maxBytes=self.max_bytes,
                backupCount=self.backup_count,
                encoding='utf-8',
            )
        return logging.FileHandler(self.log_file, encoding='utf-8')

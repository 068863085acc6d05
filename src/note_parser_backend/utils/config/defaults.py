"""
Built-in configuration defaults and schema.

Used whenever no configuration file (or no schema file) is present in the
project root, so the parser runs with no setup at all.
"""

from typing import Any, Dict

CONFIG_VERSION = "1.0.0"

DEFAULT_CONFIG: Dict[str, Any] = {
    "version": CONFIG_VERSION,
    "parser": {
        "exclude": [],
        "case_insensitive": True,
        "parser_timeout_seconds": None,
        "record_stats": True,
    },
    "post_processing": {
        "derive_deadline": True,
        "summary": True,
    },
    "logging": {
        "level": "INFO",
        "format": "standard",
        "file": None,
    },
}

CONFIG_SCHEMA: Dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "title": "Note Parser configuration",
    "type": "object",
    "properties": {
        "version": {"type": "string"},
        "parser": {
            "type": "object",
            "properties": {
                "exclude": {
                    "type": "array",
                    "items": {"type": "string", "minLength": 1},
                    "uniqueItems": True,
                },
                "case_insensitive": {"type": "boolean"},
                "parser_timeout_seconds": {
                    "type": ["number", "null"],
                    "exclusiveMinimum": 0,
                },
                "record_stats": {"type": "boolean"},
            },
            "additionalProperties": False,
        },
        "post_processing": {
            "type": "object",
            "properties": {
                "derive_deadline": {"type": "boolean"},
                "summary": {"type": "boolean"},
            },
            "additionalProperties": False,
        },
        "logging": {
            "type": "object",
            "properties": {
                "level": {"enum": ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]},
                "format": {"enum": ["standard", "json", "detailed"]},
                "file": {"type": ["string", "null"]},
            },
            "additionalProperties": False,
        },
    },
    "required": ["version"],
}

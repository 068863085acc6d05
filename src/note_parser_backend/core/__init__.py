"""
Core parsing components for Note Parser.

- parser_engine: orchestration engine, field parser contract and data model
- field_parsers: bundled rule sets for the standard note fields
- factory: configuration-driven orchestrator construction
"""

from .factory import create_orchestrator

__all__ = ["create_orchestrator"]

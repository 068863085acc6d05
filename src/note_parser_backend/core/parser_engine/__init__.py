"""
Parser Engine

This module provides the orchestration engine that runs independent field
parsers over free-form note text and merges their results.

Components:
- types: Confidence levels, FieldResult, ErrorResult, DocumentResult
- validation: Input validation with value and fault channels
- patterns: Pattern compilation with a per-parser cache
- confidence: Candidate arbitration and document-level confidence
- base: The FieldParser contract and the pattern-driven base class
- registry: Unique-name parser registry with dependency ordering
- stats: Per-orchestrator parser statistics
- post_processor: Cross-field derivation and summary line
- orchestrator: The parse pass itself
"""

from .types import (
    Confidence,
    ErrorKind,
    ErrorResult,
    FieldResult,
    ParseOptions,
    ParseRequest,
    DocumentResult,
)
from .validation import validate_input, require_valid_input
from .patterns import PatternCompiler, PatternSet, default_compiler, pattern_source
from .confidence import select_winner, should_replace, overall_confidence
from .base import Candidate, FieldParser, PatternFieldParser
from .registry import ParserRegistry
from .stats import ParserStats, ParserStatsEntry
from .post_processor import PostProcessor
from .orchestrator import ParserOrchestrator

__all__ = [
    # Types
    "Confidence",
    "ErrorKind",
    "ErrorResult",
    "FieldResult",
    "ParseOptions",
    "ParseRequest",
    "DocumentResult",

    # Validation
    "validate_input",
    "require_valid_input",

    # Patterns
    "PatternCompiler",
    "PatternSet",
    "pattern_source",
    "default_compiler",

    # Arbitration
    "select_winner",
    "should_replace",
    "overall_confidence",

    # Parser contract
    "Candidate",
    "FieldParser",
    "PatternFieldParser",

    # Orchestration
    "ParserRegistry",
    "ParserStats",
    "ParserStatsEntry",
    "PostProcessor",
    "ParserOrchestrator",
]

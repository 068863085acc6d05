"""
Orchestrator Factory

Builds a ParserOrchestrator wired from configuration: pattern compiler
flags, default excludes, parser timeout, stats recording and the
post-processing switches. The bundled field parsers are registered in
default order unless the caller supplies its own.
"""

import logging
from typing import Callable, Iterable, Optional

from ..utils.config import ConfigManager
from .field_parsers import default_parsers
from .parser_engine import (
    FieldParser,
    ParserOrchestrator,
    ParserRegistry,
    PatternCompiler,
    PostProcessor,
    default_compiler,
)

logger = logging.getLogger(__name__)


def create_orchestrator(
    config_manager: Optional[ConfigManager] = None,
    parsers: Optional[Iterable[FieldParser]] = None,
    today: Optional[Callable] = None,
) -> ParserOrchestrator:
    """
    Create a configured orchestrator.

    Args:
        config_manager: Configuration source (default: ConfigManager() for the
            current directory)
        parsers: Field parsers to register in order (default: bundled parsers)
        today: Clock for relative dates, passed to the bundled date parser

    Returns:
        ParserOrchestrator with every parser registered

    Raises:
        ParserRegistrationError: If the supplied parsers cannot be registered
        ConfigurationError: If configuration cannot be loaded
    """
    config = config_manager or ConfigManager()

    if config.get("parser.case_insensitive", True):
        compiler = default_compiler
    else:
        # Compiled sets are cached by parser name, so other flags need their own cache
        compiler = PatternCompiler(case_insensitive=False)

    orchestrator = ParserOrchestrator(
        registry=ParserRegistry(compiler),
        post_processor=PostProcessor(
            derive_deadline=config.get("post_processing.derive_deadline", True),
            build_summary=config.get("post_processing.summary", True),
        ),
        default_exclude=config.get("parser.exclude", []) or (),
        parser_timeout=config.get("parser.parser_timeout_seconds"),
        record_stats=config.get("parser.record_stats", True),
    )

    for parser in (parsers if parsers is not None else default_parsers(today=today)):
        orchestrator.register(parser.name, parser)

    logger.debug("Created orchestrator with parsers: %s", ", ".join(orchestrator.registry.names()))
    return orchestrator

"""
Parser Orchestrator

Drives one parse pass: validates the document, runs every registered field
parser strictly in sequence, isolates each parser's failures, records
per-parser timing into the orchestrator's stats store, merges results and
applies post-processing.
"""

import asyncio
import inspect
import logging
import time
from typing import Any, Iterable, List, Mapping, Optional, Tuple, Union

from .confidence import overall_confidence
from .patterns import PatternCompiler
from .post_processor import PostProcessor
from .registry import ParserRegistry
from .stats import ParserStats
from .types import (
    DocumentResult,
    ErrorKind,
    ErrorResult,
    FieldResult,
    ParseOptions,
    ParseRequest,
)
from .validation import validate_input

logger = logging.getLogger(__name__)

OptionsLike = Union[None, ParseOptions, Mapping[str, Any]]

# Reported as the failing parser when cross-field rules raise
POST_PROCESSOR_NAME = "post_processor"


class ParserOrchestrator:
    """Registers field parsers and runs parse passes over input text.

    The orchestrator is Idle between calls and Parsing during one. Distinct
    calls share only the stats store and the pattern cache.
    """

    def __init__(
        self,
        registry: Optional[ParserRegistry] = None,
        stats: Optional[ParserStats] = None,
        post_processor: Optional[PostProcessor] = None,
        compiler: Optional[PatternCompiler] = None,
        default_exclude: Iterable[str] = (),
        parser_timeout: Optional[float] = None,
        record_stats: bool = True,
    ):
        """Initialize orchestrator.

        Args:
            registry: Parser registry (default: new empty registry)
            stats: Stats store owned by this orchestrator (default: new store)
            post_processor: Cross-field rules and summary builder
            compiler: Pattern compiler for a new registry (default: process-wide)
            default_exclude: Field names excluded from every pass
            parser_timeout: Per-parser timeout in seconds, applied by ``aparse``
            record_stats: Whether to feed timings into the stats store
        """
        self.registry = registry if registry is not None else ParserRegistry(compiler)
        self._stats = stats if stats is not None else ParserStats()
        self.post_processor = post_processor or PostProcessor()
        self.default_exclude = frozenset(default_exclude)
        self.parser_timeout = parser_timeout
        self.record_stats = record_stats
        self.logger = logger

    @property
    def stats(self) -> ParserStats:
        return self._stats

    def register(self, name: str, parser: Any) -> None:
        """Register a field parser. Fails fast on duplicate or invalid parsers."""
        self.registry.register(name, parser)

    def parse(self, text: Any, options: OptionsLike = None) -> Union[DocumentResult, ErrorResult]:
        """Run one synchronous parse pass.

        Args:
            text: Input text
            options: ParseOptions or ``{"exclude": [...]}``

        Returns:
            The completed DocumentResult, or an INVALID_INPUT ErrorResult when
            the document itself is invalid
        """
        request, error = self._prepare(text, options)
        if error is not None:
            return error

        start_time = time.perf_counter()
        document = DocumentResult(text=request.text)

        for name, parser in self._scheduled(request):
            parser_start = time.perf_counter()
            try:
                outcome = parser.parse(request.text, self.registry.get_patterns(name))
                if inspect.isawaitable(outcome):
                    _discard_awaitable(outcome)
                    outcome = ErrorResult(
                        ErrorKind.PARSER_ERROR,
                        "asynchronous parser requires aparse()",
                        name,
                    )
            except Exception as e:
                self.logger.error("Parser %s failed: %s", name, e, exc_info=True)
                outcome = ErrorResult(ErrorKind.PARSER_ERROR, str(e) or type(e).__name__, name)

            self._merge(document, name, outcome, parser_start)

        return self._finish(document, start_time)

    async def aparse(self, text: Any, options: OptionsLike = None) -> Union[DocumentResult, ErrorResult]:
        """Run one parse pass, awaiting asynchronous parsers one at a time.

        Parsers are never run concurrently with each other. When a parser
        timeout is configured, a parser exceeding it is recorded as a
        PARSER_ERROR and the pass continues.
        """
        request, error = self._prepare(text, options)
        if error is not None:
            return error

        start_time = time.perf_counter()
        document = DocumentResult(text=request.text)

        for name, parser in self._scheduled(request):
            parser_start = time.perf_counter()
            try:
                outcome = parser.parse(request.text, self.registry.get_patterns(name))
                if inspect.isawaitable(outcome):
                    outcome = await self._await_parser(name, outcome)
            except Exception as e:
                self.logger.error("Parser %s failed: %s", name, e, exc_info=True)
                outcome = ErrorResult(ErrorKind.PARSER_ERROR, str(e) or type(e).__name__, name)

            self._merge(document, name, outcome, parser_start)

        return self._finish(document, start_time)

    async def _await_parser(self, name: str, awaitable: Any) -> Any:
        if self.parser_timeout is None:
            return await awaitable

        try:
            return await asyncio.wait_for(awaitable, timeout=self.parser_timeout)
        except asyncio.TimeoutError:
            self.logger.error("Parser %s timed out after %.3fs", name, self.parser_timeout)
            return ErrorResult(
                ErrorKind.PARSER_ERROR,
                f"Parser timed out after {self.parser_timeout}s",
                name,
            )

    def _prepare(self, text: Any, options: OptionsLike) -> Tuple[Optional[ParseRequest], Optional[ErrorResult]]:
        error = validate_input(text)
        if error is not None:
            self.logger.warning("Invalid input: %s", error.message)
            return None, error

        parse_options = ParseOptions.coerce(options).merged_with(self.default_exclude)
        self.logger.debug("Starting parse pass: %d chars, exclude=%s",
                          len(text), sorted(parse_options.exclude))
        return ParseRequest(text=text, options=parse_options), None

    def _scheduled(self, request: ParseRequest) -> List[Tuple[str, Any]]:
        return [
            (name, parser)
            for name, parser in self.registry.items()
            if name not in request.options.exclude
        ]

    def _merge(self, document: DocumentResult, name: str, outcome: Any, parser_start: float) -> None:
        duration_ms = (time.perf_counter() - parser_start) * 1000
        failed = False

        if isinstance(outcome, FieldResult):
            document.fields[name] = outcome
        elif isinstance(outcome, ErrorResult):
            failed = True
            error = outcome if outcome.parser == name else ErrorResult(outcome.kind, outcome.message, name)
            document.errors.append(error)
            self.logger.warning("Parser %s returned %s: %s", name, error.kind.value, error.message)
        elif outcome is not None:
            failed = True
            document.errors.append(ErrorResult(
                ErrorKind.PARSER_ERROR,
                f"Unexpected result type {type(outcome).__name__}",
                name,
            ))
            self.logger.warning("Parser %s returned unexpected %s", name, type(outcome).__name__)

        document.timings[name] = duration_ms
        if self.record_stats:
            self._stats.record(name, duration_ms, failed=failed)
        self.logger.debug("Parser %s finished in %.3f ms", name, duration_ms)

    def _finish(self, document: DocumentResult, start_time: float) -> DocumentResult:
        try:
            processed = self.post_processor.process(document)
        except Exception as e:
            self.logger.error("Post-processing failed: %s", e, exc_info=True)
            processed = document
            processed.errors.append(ErrorResult(
                ErrorKind.PARSER_ERROR,
                f"Post-processing failed: {str(e) or type(e).__name__}",
                POST_PROCESSOR_NAME,
            ))

        processed.overall_confidence = overall_confidence(list(processed.confidences.values()))
        processed.total_duration_ms = (time.perf_counter() - start_time) * 1000

        self.logger.info("Parsed %d fields (%d errors) with %s confidence in %.2f ms",
                         len(processed.fields), len(processed.errors),
                         processed.overall_confidence.value, processed.total_duration_ms)
        return processed


def _discard_awaitable(awaitable: Any) -> None:
    close = getattr(awaitable, "close", None)
    if callable(close):
        close()

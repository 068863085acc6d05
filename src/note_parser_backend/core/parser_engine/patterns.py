"""
Pattern Compiler

Turns a field parser's raw pattern declarations into compiled regular
expressions once and caches the result per parser name, so repeated
parse passes reuse the same matcher instances.
"""

import logging
import re
import threading
from typing import Any, Dict, Hashable, Iterator, Mapping, Optional, Tuple, Union

logger = logging.getLogger(__name__)

RawPattern = Union[str, re.Pattern]


def pattern_source(raw_patterns: Any) -> Hashable:
    """Hashable fingerprint of raw pattern declarations, used to validate the cache."""
    if not isinstance(raw_patterns, Mapping):
        return None

    source = []
    for name, pattern in raw_patterns.items():
        if isinstance(pattern, re.Pattern):
            source.append((name, pattern.pattern, pattern.flags))
        elif isinstance(pattern, str):
            source.append((name, pattern))
        else:
            source.append((name, type(pattern).__name__))
    return tuple(source)


class PatternSet(Mapping):
    """Read-only, ordered mapping of pattern name to compiled matcher.

    Iteration order is declaration order, which is also the order in which
    field parsers evaluate candidates.
    """

    def __init__(self, owner: str, patterns: Optional[Dict[str, re.Pattern]] = None):
        self.owner = owner
        self._patterns: Dict[str, re.Pattern] = dict(patterns or {})

    def __getitem__(self, name: str) -> re.Pattern:
        return self._patterns[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._patterns)

    def __len__(self) -> int:
        return len(self._patterns)

    def __repr__(self) -> str:
        return f"PatternSet(owner={self.owner!r}, patterns={list(self._patterns)})"


class PatternCompiler:
    """Compiles and caches pattern sets keyed by field parser name."""

    def __init__(self, case_insensitive: bool = True):
        """Initialize compiler.

        Args:
            case_insensitive: Compile string patterns with re.IGNORECASE
        """
        self.case_insensitive = case_insensitive
        self._cache: Dict[str, Tuple[Hashable, PatternSet]] = {}
        self._lock = threading.Lock()
        self._stats = {
            'compilations': 0,
            'cache_hits': 0,
        }

    def compile(self, parser_name: str, raw_patterns: Any) -> PatternSet:
        """Compile raw patterns for a parser, reusing the cached set when present.

        The cache is keyed by parser name and checked against the raw
        declarations, so a different parser registered under a known name
        gets its own patterns rather than the cached ones.

        Args:
            parser_name: Cache key; one pattern set per field parser
            raw_patterns: Mapping of pattern name to regex string or compiled pattern

        Returns:
            PatternSet for the parser. Invalid or absent input yields an
            empty set, never an exception.
        """
        source = pattern_source(raw_patterns)

        with self._lock:
            cached = self._cache.get(parser_name)
            if cached is not None and cached[0] == source:
                self._stats['cache_hits'] += 1
                return cached[1]

        pattern_set = self._build(parser_name, raw_patterns)

        with self._lock:
            # First stored set wins when two threads compile the same parser
            existing = self._cache.get(parser_name)
            if existing is not None and existing[0] == source:
                return existing[1]
            if existing is not None:
                logger.debug("Patterns for parser %s changed; replacing cached set", parser_name)
            self._cache[parser_name] = (source, pattern_set)
            self._stats['compilations'] += 1

        logger.debug("Compiled %d patterns for parser %s", len(pattern_set), parser_name)
        return pattern_set

    def _build(self, parser_name: str, raw_patterns: Any) -> PatternSet:
        if not raw_patterns or not isinstance(raw_patterns, Mapping):
            return PatternSet(parser_name)

        flags = re.IGNORECASE if self.case_insensitive else 0
        compiled: Dict[str, re.Pattern] = {}

        try:
            for name, pattern in raw_patterns.items():
                if isinstance(pattern, re.Pattern):
                    compiled[name] = pattern
                elif isinstance(pattern, str):
                    compiled[name] = re.compile(pattern, flags)
                else:
                    logger.warning("Skipping pattern %s.%s of unsupported type %s",
                                   parser_name, name, type(pattern).__name__)
        except re.error as e:
            logger.error("Error compiling patterns for parser %s: %s", parser_name, e)
            return PatternSet(parser_name)

        return PatternSet(parser_name, compiled)

    def get(self, parser_name: str) -> Optional[PatternSet]:
        """Get a cached pattern set without compiling."""
        cached = self._cache.get(parser_name)
        return cached[1] if cached is not None else None

    def invalidate(self, parser_name: Optional[str] = None) -> None:
        """Drop one cached pattern set, or all of them."""
        with self._lock:
            if parser_name is None:
                self._cache.clear()
            else:
                self._cache.pop(parser_name, None)

    def get_stats(self) -> Dict[str, int]:
        stats = dict(self._stats)
        stats['cached_parsers'] = len(self._cache)
        return stats


# Process-wide compiler shared by orchestrators that do not bring their own
default_compiler = PatternCompiler()

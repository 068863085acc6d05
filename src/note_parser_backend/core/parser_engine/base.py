"""
Field Parser Contract

Every field parser exposes a stable ``name``, a ``parse(text, patterns)``
operation, and optionally a ``patterns`` declaration that the Pattern
Compiler turns into a ``PatternSet`` at registration time.

``PatternFieldParser`` implements the common internal shape shared by the
bundled rule sets: validate, evaluate every pattern, build one candidate
per match, arbitrate, return the winner.
"""

import logging
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, ClassVar, Dict, List, Mapping, Optional, Tuple

from .confidence import select_winner
from .patterns import PatternSet, RawPattern
from .types import Confidence, FieldResult, ParseOutcome
from .validation import validate_input

logger = logging.getLogger(__name__)

# Failures inside a candidate's value extraction mark that candidate invalid
EXTRACTION_ERRORS = (ValueError, TypeError, KeyError, IndexError, OverflowError)


@dataclass(frozen=True)
class Candidate:
    """A tentative extraction produced by one matching pattern."""
    value: Any
    confidence: Confidence
    pattern: str
    original_match: str

    def to_field_result(self) -> FieldResult:
        return FieldResult(
            value=self.value,
            confidence=self.confidence,
            pattern=self.pattern,
            original_match=self.original_match,
        )


class FieldParser(ABC):
    """Base class for pluggable field parsers.

    Attributes:
        name: Field name the parser produces
        patterns: Raw pattern declarations, name to regex string or compiled pattern
        depends_on: Names of parsers that must run before this one
        multi_valued: True when the value is a list (e.g. tags)
    """
    name: ClassVar[str] = ""
    patterns: ClassVar[Mapping[str, RawPattern]] = {}
    depends_on: ClassVar[Tuple[str, ...]] = ()
    multi_valued: ClassVar[bool] = False

    @abstractmethod
    def parse(self, text: Any, patterns: PatternSet) -> ParseOutcome:
        """Extract this parser's field from text.

        Returns:
            A FieldResult, an ErrorResult, or None when nothing matched
        """

    def describe(self) -> Dict[str, Any]:
        """Describe the parser for listings."""
        return {
            "name": self.name,
            "patterns": list(self.patterns or {}),
            "depends_on": list(self.depends_on),
            "multi_valued": self.multi_valued,
        }

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"


class PatternFieldParser(FieldParser):
    """Field parser driven by named patterns and a per-pattern confidence policy.

    Subclasses declare ``patterns`` and implement ``build_candidate`` for a
    single match. Raising one of ``EXTRACTION_ERRORS`` or returning None
    from ``build_candidate`` discards that candidate.
    """

    def parse(self, text: Any, patterns: PatternSet) -> ParseOutcome:
        error = validate_input(text, self.name)
        if error is not None:
            return error

        winner = select_winner(self.collect_candidates(text, patterns))
        if winner is None:
            return None
        return winner.to_field_result()

    def collect_candidates(self, text: str, patterns: PatternSet) -> List[Candidate]:
        """Evaluate every pattern in declaration order and build candidates.

        Each pattern contributes at most one candidate: the first occurrence
        in the text that builds one.
        """
        candidates = []
        for pattern_name, regex in patterns.items():
            candidate = self._first_candidate(pattern_name, regex, text)
            if candidate is not None:
                candidates.append(candidate)

        return candidates

    def _first_candidate(self, pattern_name: str, regex: re.Pattern, text: str) -> Optional[Candidate]:
        for match in regex.finditer(text):
            try:
                candidate = self.build_candidate(pattern_name, match, text)
            except EXTRACTION_ERRORS as e:
                logger.debug("Discarding %s candidate from pattern %s: %s", self.name, pattern_name, e)
                continue

            if candidate is not None:
                return candidate
        return None

    @abstractmethod
    def build_candidate(self, pattern_name: str, match: re.Match, text: str) -> Optional[Candidate]:
        """Build a candidate for one matching pattern."""

    def candidate(
        self,
        value: Any,
        confidence: Confidence,
        pattern_name: str,
        match: re.Match,
        original_match: Optional[str] = None
    ) -> Candidate:
        """Convenience constructor for subclasses."""
        return Candidate(
            value=value,
            confidence=confidence,
            pattern=pattern_name,
            original_match=original_match if original_match is not None else match.group(0).strip(),
        )

"""
Parser Engine Types

Core data structures shared by the orchestrator, the field parsers and the
post-processor: confidence levels, per-field results, error values and the
aggregate document result of one parse pass.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, FrozenSet, Iterable, List, Mapping, Optional, Union


class Confidence(Enum):
    """Three ordered confidence levels."""
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"

    @property
    def rank(self) -> int:
        return _CONFIDENCE_RANK[self]

    def __lt__(self, other):
        if not isinstance(other, Confidence):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other):
        if not isinstance(other, Confidence):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other):
        if not isinstance(other, Confidence):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other):
        if not isinstance(other, Confidence):
            return NotImplemented
        return self.rank >= other.rank

    def __str__(self) -> str:
        return self.value


_CONFIDENCE_RANK = {
    Confidence.LOW: 1,
    Confidence.MEDIUM: 2,
    Confidence.HIGH: 3,
}


class ErrorKind(Enum):
    """Kinds of error values produced during parsing."""
    INVALID_INPUT = "INVALID_INPUT"
    PARSER_ERROR = "PARSER_ERROR"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class ErrorResult:
    """An error returned as a value rather than raised.

    Attributes:
        kind: INVALID_INPUT or PARSER_ERROR
        message: Human-readable description
        parser: Name of the field parser that produced the error, if any
    """
    kind: ErrorKind
    message: str
    parser: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        result = {"kind": self.kind.value, "message": self.message}
        if self.parser is not None:
            result["parser"] = self.parser
        return result


@dataclass(frozen=True)
class FieldResult:
    """The single winning extraction for one field on one input.

    Attributes:
        value: Parser-specific structured value
        confidence: Confidence level of the winning pattern
        pattern: Name of the winning pattern
        original_match: Substring of the input the pattern matched
    """
    value: Any
    confidence: Confidence
    pattern: str
    original_match: str

    def __post_init__(self):
        if not isinstance(self.confidence, Confidence):
            raise ValueError(f"confidence must be a Confidence, got {type(self.confidence)}")
        if not self.pattern or not isinstance(self.pattern, str):
            raise ValueError(f"pattern must be a non-empty string, got: {self.pattern!r}")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "value": self.value,
            "confidence": self.confidence.value,
            "pattern": self.pattern,
            "originalMatch": self.original_match,
        }


ParseOutcome = Optional[Union[FieldResult, ErrorResult]]


@dataclass(frozen=True)
class ParseOptions:
    """Per-call options for one parse pass."""
    exclude: FrozenSet[str] = frozenset()

    @classmethod
    def coerce(cls, options: Union[None, "ParseOptions", Mapping[str, Any]]) -> "ParseOptions":
        """Build options from None, a ParseOptions or a ``{"exclude": [...]}`` mapping."""
        if options is None:
            return cls()
        if isinstance(options, cls):
            return options
        if isinstance(options, Mapping):
            exclude = options.get("exclude") or ()
            if isinstance(exclude, str):
                exclude = (exclude,)
            return cls(exclude=frozenset(exclude))
        raise TypeError(f"options must be a mapping or ParseOptions, got {type(options)}")

    def merged_with(self, exclude: Iterable[str]) -> "ParseOptions":
        """Return options with additional excluded field names."""
        return ParseOptions(exclude=self.exclude | frozenset(exclude))


@dataclass(frozen=True)
class ParseRequest:
    """Raw input text plus options; immutable for the duration of a pass."""
    text: Any
    options: ParseOptions = field(default_factory=ParseOptions)


@dataclass
class DocumentResult:
    """Aggregate result of one parse pass.

    Owned exclusively by the pass that builds it until it is returned.
    A field with no match is absent from ``fields``.
    """
    text: str
    fields: Dict[str, FieldResult] = field(default_factory=dict)
    timings: Dict[str, float] = field(default_factory=dict)
    overall_confidence: Confidence = Confidence.LOW
    summary: str = ""
    errors: List[ErrorResult] = field(default_factory=list)
    total_duration_ms: float = 0.0

    @property
    def values(self) -> Dict[str, Any]:
        """Field name to extracted value."""
        return {name: result.value for name, result in self.fields.items()}

    @property
    def confidences(self) -> Dict[str, Confidence]:
        """Field name to confidence level."""
        return {name: result.confidence for name, result in self.fields.items()}

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    def get(self, name: str) -> Optional[FieldResult]:
        return self.fields.get(name)

    def to_dict(self) -> Dict[str, Any]:
        result = {
            "text": self.text,
            "fields": {name: value.to_dict() for name, value in self.fields.items()},
            "timings": dict(self.timings),
            "confidence": self.overall_confidence.value,
            "summary": self.summary,
            "totalDuration": self.total_duration_ms,
        }
        if self.errors:
            result["errors"] = [error.to_dict() for error in self.errors]
        return result

"""
Subject field parser.

The subject is what the note is about. An explicit ``[subject:...]``
marker wins; otherwise the note itself, stripped of times, dates,
priority markers and tags, is taken as the subject.
"""

import re
from typing import Any, List, Optional

from ..parser_engine.base import Candidate, PatternFieldParser
from ..parser_engine.types import Confidence, ErrorKind, ErrorResult, ParseOutcome
from ..parser_engine.patterns import PatternSet
from .action import ACTION_VERBS

CLEANUP_PATTERNS = [
    re.compile(p, re.IGNORECASE) for p in (
        r'\[[a-z]+:[^\]]*\]',
        r'\b(?:at|by)\s+\d{1,2}(?::\d{2})?\s*(?:am|pm)\b',
        r'\b\d{1,2}(?::\d{2})?\s*(?:am|pm)\b',
        r'\b(?:at|by)\s+\d{1,2}:\d{2}\b',
        r'\b(?:on\s+)?\d{4}-\d{2}-\d{2}\b',
        r'\bin\s+the\s+(?:morning|afternoon|evening)\b',
        r'\bfor\s+(?:project|phase)\s+\S+',
        r'\b(?:high|medium|low|urgent|critical)\s+priority\b',
        r'(?<![\w.])@\w+',
        r'#[\w-]+',
    )
]

STOP_WORDS = {
    'a', 'an', 'the', 'and', 'or', 'but', 'to', 'in', 'on', 'at', 'by', 'for',
    'with', 'of', 'from', 'about', 'is', 'are', 'be', 'it', 'this', 'that',
    'today', 'tomorrow', 'yesterday', 'next', 'me', 'my',
}

INVALID_START_WORDS = {'the', 'a', 'an', 'to', 'in'}

MIN_SUBJECT_LENGTH = 2

_CONTROL_CHARS = re.compile(r'[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]')
_ACTION_VERB = re.compile(
    r'^(?:' + '|'.join(v.replace(' ', r'\s+') for v in ACTION_VERBS) + r')\b',
    re.IGNORECASE,
)


def clean_subject(text: str) -> str:
    """Remove time, date, priority and tag references and tidy whitespace."""
    for pattern in CLEANUP_PATTERNS:
        text = pattern.sub(' ', text)
    text = re.sub(r'\s+', ' ', text)
    return text.strip(' \t\n,;:-.')


def key_terms(text: str) -> List[str]:
    terms = []
    for word in re.findall(r"[\w'-]+", text.lower()):
        if len(word) > 2 and word not in STOP_WORDS and word not in terms:
            terms.append(word)
    return terms


class SubjectParser(PatternFieldParser):
    """Extracts ``{text, key_terms, has_action_verb}``."""

    name = 'subject'
    patterns = {
        'explicit_subject': r'\[subject:\s*([^\]]+)\]',
        'inferred_subject': r'\S[\s\S]*',
    }

    def parse(self, text: Any, patterns: PatternSet) -> ParseOutcome:
        if isinstance(text, str) and _CONTROL_CHARS.search(text):
            return ErrorResult(ErrorKind.PARSER_ERROR, "Text contains control characters", self.name)
        return super().parse(text, patterns)

    def build_candidate(self, pattern_name: str, match: re.Match, text: str) -> Optional[Candidate]:
        if pattern_name == 'explicit_subject':
            subject = re.sub(r'\s+', ' ', match.group(1)).strip()
            confidence = Confidence.HIGH
        elif pattern_name == 'inferred_subject':
            subject = clean_subject(match.group(0))
            if not self._acceptable(subject):
                return None
            confidence = Confidence.MEDIUM
        else:
            return None

        if len(subject) < MIN_SUBJECT_LENGTH:
            return None

        value = {
            'text': subject,
            'key_terms': key_terms(subject),
            'has_action_verb': bool(_ACTION_VERB.match(subject)),
        }
        return self.candidate(value, confidence, pattern_name, match, subject)

    def _acceptable(self, subject: str) -> bool:
        words = subject.split()
        if not words:
            return False
        return words[0].lower() not in INVALID_START_WORDS

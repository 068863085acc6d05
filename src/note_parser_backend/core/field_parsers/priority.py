"""
Priority field parser.

Maps priority markers and keywords onto a fixed level scale.
"""

import re
from typing import Optional

from ..parser_engine.base import Candidate, PatternFieldParser
from ..parser_engine.types import Confidence

PRIORITY_LEVELS = {
    'critical': 5,
    'urgent': 4,
    'high': 3,
    'medium': 2,
    'low': 1,
    'none': 0,
}

PRIORITY_ALIASES = {
    'highest': 'critical',
    'important': 'high',
    'normal': 'medium',
    'minor': 'low',
    'asap': 'urgent',
}

_TERMS = '|'.join(list(PRIORITY_LEVELS) + list(PRIORITY_ALIASES))


def normalize_level(term: str) -> str:
    """Resolve a priority term to its canonical level.

    Raises:
        KeyError: If the term is not a known level or alias
    """
    term = term.lower().strip()
    level = PRIORITY_ALIASES.get(term, term)
    if level not in PRIORITY_LEVELS:
        raise KeyError(term)
    return level


class PriorityParser(PatternFieldParser):
    """Extracts ``{level, score}``."""

    name = 'priority'
    patterns = {
        'explicit_priority': r'\[priority:\s*(\w+)\s*\]',
        'hashtag': rf'#({_TERMS})(?:-priority)?\b',
        'keyword': rf'\b(?:({_TERMS})\s+priority|priority\s*(?:is\s+|:\s*)({_TERMS}))\b',
        'bare_term': r'\b(urgent|asap|critical|important)\b',
    }

    CONFIDENCE = {
        'explicit_priority': Confidence.HIGH,
        'hashtag': Confidence.HIGH,
        'keyword': Confidence.MEDIUM,
        'bare_term': Confidence.LOW,
    }

    def build_candidate(self, pattern_name: str, match: re.Match, text: str) -> Optional[Candidate]:
        confidence = self.CONFIDENCE.get(pattern_name)
        if confidence is None:
            return None

        term = next((group for group in match.groups() if group), None)
        if term is None:
            return None
        level = normalize_level(term)
        value = {'level': level, 'score': PRIORITY_LEVELS[level]}
        return self.candidate(value, confidence, pattern_name, match)

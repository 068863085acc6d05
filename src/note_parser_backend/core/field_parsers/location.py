"""
Location field parser.

Picks up explicit ``[location:...]`` markers and, with low confidence,
places introduced by "in" or "at".
"""

import re
from typing import Optional

from ..parser_engine.base import Candidate, PatternFieldParser
from ..parser_engine.types import Confidence

ROOM_KEYWORDS = ('room', 'conference', 'meeting', 'office', 'hall')

# Words after "in"/"at" that rarely name a place
NON_PLACES = {
    'morning', 'afternoon', 'evening', 'night', 'tonight', 'noon', 'midnight',
    'day', 'days', 'week', 'weeks', 'month', 'months', 'year', 'years',
    'minute', 'minutes', 'hour', 'hours', 'time', 'least', 'most', 'advance',
    'progress', 'general', 'order', 'case', 'total', 'addition', 'front', 'person',
    'all', 'once', 'first', 'last', 'risk',
}


def location_type(name: str) -> str:
    lowered = name.lower()
    if any(keyword in lowered for keyword in ROOM_KEYWORDS):
        return 'room'
    return 'unknown'


class LocationParser(PatternFieldParser):
    """Extracts ``{name, type}``."""

    name = 'location'
    patterns = {
        'explicit_location': r'\[location:\s*([^\]]+)\]',
        'inferred_location': (
            r'\b(?:in|at)\s+(?:the\s+)?'
            r"([a-z][\w'-]*(?:\s+(?:room|hall|office|building|\d+[a-z]?)\b)?)"
        ),
    }

    def build_candidate(self, pattern_name: str, match: re.Match, text: str) -> Optional[Candidate]:
        if pattern_name == 'explicit_location':
            location = match.group(1).strip()
            confidence = Confidence.HIGH
        elif pattern_name == 'inferred_location':
            if not self._looks_like_place(match.group(1)):
                return None
            location = match.group(1).strip()
            confidence = Confidence.LOW
        else:
            return None

        if not location:
            return None
        value = {'name': location, 'type': location_type(location)}
        return self.candidate(value, confidence, pattern_name, match)

    def _looks_like_place(self, name: str) -> bool:
        return name.split()[0].lower() not in NON_PLACES

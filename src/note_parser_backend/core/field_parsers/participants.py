"""
Participants field parser.

Finds the people a note involves: explicit lists, ``@mentions``,
``Name (role)`` assignments, and names after "with".
"""

import re
from typing import Any, Dict, Iterable, List, Optional

from ..parser_engine.base import Candidate, PatternFieldParser
from ..parser_engine.types import Confidence

STOP_WORDS = {
    'the', 'a', 'an', 'and', 'or', 'to', 'in', 'at', 'on', 'for', 'of', 'by',
    'me', 'us', 'them', 'him', 'her', 'my', 'our', 'your', 'his', 'their',
    'today', 'tomorrow', 'yesterday', 'everyone', 'someone',
}

_ROLE = re.compile(r'^\s*([^()]+?)\s*\(([^)]+)\)\s*$')


def person(name: str, role: Optional[str] = None) -> Dict[str, Any]:
    entry = {'name': name.strip()}
    if role:
        entry['role'] = role.strip()
    return entry


def dedupe_people(people: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Drop repeated names (case-insensitive), keeping first occurrence."""
    seen = set()
    result = []
    for entry in people:
        key = entry['name'].lower()
        if entry['name'] and key not in seen:
            seen.add(key)
            result.append(entry)
    return result


class ParticipantsParser(PatternFieldParser):
    """Extracts ``{participants, count}``."""

    name = 'participants'
    patterns = {
        'explicit_list': r'\[participants:\s*([^\]]+)\]',
        'mentions': r'(?<![\w.])@(\w+)',
        'role_assignment': r'\b([a-z]\w*)\s*\(([^)]+)\)',
        'implicit': r"\bwith\s+([a-z][\w'-]*(?:\s*(?:,|\band\b)\s*[a-z][\w'-]*)*)",
    }

    def build_candidate(self, pattern_name: str, match: re.Match, text: str) -> Optional[Candidate]:
        original = None

        if pattern_name == 'explicit_list':
            people = []
            for item in match.group(1).split(','):
                role_match = _ROLE.match(item)
                if role_match:
                    people.append(person(role_match.group(1), role_match.group(2)))
                else:
                    people.append(person(item))
            confidence = Confidence.HIGH
        elif pattern_name == 'mentions':
            found = list(match.re.finditer(text))
            people = [person(m.group(1)) for m in found]
            original = ' '.join(m.group(0) for m in found)
            confidence = Confidence.HIGH
        elif pattern_name == 'role_assignment':
            found = list(match.re.finditer(text))
            people = [person(m.group(1), m.group(2)) for m in found]
            original = ' '.join(m.group(0) for m in found)
            confidence = Confidence.MEDIUM
        elif pattern_name == 'implicit':
            names = re.split(r'\s*(?:,|\band\b)\s*', match.group(1), flags=re.IGNORECASE)
            people = [person(name) for name in names if name and name.lower() not in STOP_WORDS]
            confidence = Confidence.LOW
        else:
            return None

        people = dedupe_people(people)
        if not people:
            return None

        value = {'participants': people, 'count': len(people)}
        return self.candidate(value, confidence, pattern_name, match, original)

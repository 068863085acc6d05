"""
Action field parser.

Recognizes the task verb and its object, e.g. ``call John tomorrow`` or
``need to review the budget``. Imperative verbs at the start of the note
and explicit ``[action:...]`` markers are trusted most; hedged or inferred
phrasings score lower.
"""

import re
from typing import Optional

from ..parser_engine.base import Candidate, PatternFieldParser
from ..parser_engine.types import Confidence

ACTION_VERBS = [
    'follow up', 'call', 'review', 'send', 'complete', 'write', 'create',
    'update', 'check', 'schedule', 'meeting', 'meet', 'finish', 'start',
    'prepare', 'organize', 'plan', 'discuss', 'contact', 'research',
    'analyze', 'email', 'book', 'buy', 'fix', 'submit',
]

# Words that double as nouns, normalized to their verb form
VERB_ALIASES = {
    'meeting': 'meet',
}

HEDGING_PREFIXES = ['maybe', 'urgent', 'quick', 'brief', 'important']

# Phrases that start a new clause and end the action's object
BOUNDARIES = [
    r'the cost is estimated',
    r'should be involved',
    r'must be completed',
    r'will be done',
    r'of \$\d+k?\b',
    r'for phase \d+',
    r'#[a-z0-9]+',
    r'\[[a-z]+:',
]

_VERBS = '|'.join(v.replace(' ', r'\s+') for v in ACTION_VERBS)


def _clean_object(text: str) -> str:
    return re.sub(r'\s+', ' ', re.sub(r'[,.]+', '', text)).strip()


class ActionParser(PatternFieldParser):
    """Extracts ``{verb, object, is_complete}``."""

    name = 'action'
    patterns = {
        'explicit_action': r'\[action:\s*([^\]]+)\]',
        'completed_action': r'[✓✔]\s*(\w+)\s+(.+)',
        'start_verb': (
            rf'^\s*(?:({"|".join(HEDGING_PREFIXES)})\s+)?({_VERBS})\s+(.+?)'
            rf'(?:\s+(?:{"|".join(BOUNDARIES)}).*)?$'
        ),
        'explicit_verb': rf'\b(?:need\s+to|must|should|have\s+to)\s+({_VERBS})\s+(.+)',
        'inferred_verb': rf'\b(?:maybe|probably)\s+({_VERBS})\s+(.+)',
        'to_prefix': r'\bto\s+(\w+)\s+(.+)',
    }

    def build_candidate(self, pattern_name: str, match: re.Match, text: str) -> Optional[Candidate]:
        is_complete = False

        if pattern_name == 'explicit_action':
            verb, _, obj = match.group(1).strip().partition(' ')
            confidence = Confidence.HIGH
        elif pattern_name == 'completed_action':
            verb, obj = match.group(1), match.group(2)
            is_complete = True
            confidence = Confidence.HIGH
        elif pattern_name == 'start_verb':
            prefix = match.group(1)
            verb, obj = match.group(2), match.group(3)
            # "urgent" still reads as a direct instruction
            if not prefix or prefix.lower() == 'urgent':
                confidence = Confidence.HIGH
            else:
                confidence = Confidence.MEDIUM
        elif pattern_name == 'explicit_verb':
            verb, obj = match.group(1), match.group(2)
            confidence = Confidence.MEDIUM
        elif pattern_name in ('inferred_verb', 'to_prefix'):
            verb, obj = match.group(1), match.group(2)
            confidence = Confidence.LOW
        else:
            return None

        verb = re.sub(r'\s+', ' ', verb.lower().strip())
        obj = _clean_object(obj)
        if not verb or not obj:
            return None

        value = {
            'verb': VERB_ALIASES.get(verb, verb),
            'object': obj,
            'is_complete': is_complete,
        }
        return self.candidate(value, confidence, pattern_name, match)

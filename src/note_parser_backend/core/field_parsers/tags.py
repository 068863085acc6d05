"""
Tags field parser.

Collects every tag in the note. Tags are the one multi-valued field: the
value is an ordered list with duplicates removed.
"""

import re
from typing import List, Optional

from ..parser_engine.base import Candidate, PatternFieldParser
from ..parser_engine.types import Confidence


def unique(items) -> List[str]:
    seen = set()
    result = []
    for item in items:
        if item and item not in seen:
            seen.add(item)
            result.append(item)
    return result


class TagsParser(PatternFieldParser):
    """Extracts a list of lowercase tags."""

    name = 'tags'
    multi_valued = True
    patterns = {
        'explicit_tag': r'\[tags?:\s*([^\]]+)\]',
        'hashtag': r'(?<![\w#&])#([a-z0-9][\w-]*)',
    }

    def build_candidate(self, pattern_name: str, match: re.Match, text: str) -> Optional[Candidate]:
        if pattern_name == 'explicit_tag':
            tags = unique(
                tag.strip().lstrip('#').lower()
                for tag in match.group(1).split(',')
            )
            confidence = Confidence.HIGH
            original = match.group(0)
        elif pattern_name == 'hashtag':
            # One match proves the pattern applies; gather every occurrence
            found = list(match.re.finditer(text))
            tags = unique(m.group(1).lower() for m in found)
            confidence = Confidence.MEDIUM
            original = ' '.join(m.group(0) for m in found)
        else:
            return None

        if not tags:
            return None
        return self.candidate(tags, confidence, pattern_name, match, original)

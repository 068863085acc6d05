"""
Time field parser.

Normalizes clock times and day periods to a 24-hour ``HH:MM`` string.
"""

import re
from typing import Optional

from ..parser_engine.base import Candidate, PatternFieldParser
from ..parser_engine.types import Confidence

# Day periods resolve to the hour they start at
PERIOD_HOURS = {
    'morning': 9,
    'afternoon': 12,
    'evening': 17,
    'tonight': 20,
}


def format_time(hour: int, minute: int = 0) -> str:
    """Format a validated hour and minute as ``HH:MM``."""
    if not 0 <= hour <= 23:
        raise ValueError(f"hour {hour} out of range")
    if not 0 <= minute <= 59:
        raise ValueError(f"minute {minute} out of range")
    return f"{hour:02d}:{minute:02d}"


class TimeParser(PatternFieldParser):
    """Extracts a time of day."""

    name = 'time'
    patterns = {
        'twenty_four_hour': r'\b(\d{1,2}):(\d{2})\b(?!\s*(?:am|pm)\b)',
        'specific': r'\b(?:(?:at|by)\s+)?(\d{1,2})(?::(\d{2}))?\s*(am|pm)\b',
        'period': r'\bin\s+the\s+(morning|afternoon|evening)\b',
        'bare_period': r'\b(morning|afternoon|evening|tonight)\b',
    }

    def build_candidate(self, pattern_name: str, match: re.Match, text: str) -> Optional[Candidate]:
        if pattern_name == 'twenty_four_hour':
            value = format_time(int(match.group(1)), int(match.group(2)))
            return self.candidate(value, Confidence.HIGH, pattern_name, match)

        if pattern_name == 'specific':
            hour = int(match.group(1))
            minute = int(match.group(2) or 0)
            if not 1 <= hour <= 12:
                raise ValueError(f"hour {hour} invalid on a 12-hour clock")
            meridiem = match.group(3).lower()
            if meridiem == 'pm' and hour != 12:
                hour += 12
            elif meridiem == 'am' and hour == 12:
                hour = 0
            original = re.sub(r'^(?:at|by)\s+', '', match.group(0).strip(), flags=re.IGNORECASE)
            return self.candidate(format_time(hour, minute), Confidence.HIGH, pattern_name, match, original)

        if pattern_name in ('period', 'bare_period'):
            hour = PERIOD_HOURS[match.group(1).lower()]
            confidence = Confidence.MEDIUM if pattern_name == 'period' else Confidence.LOW
            return self.candidate(format_time(hour), confidence, pattern_name, match)

        return None

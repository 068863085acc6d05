"""
Date field parser.

Resolves explicit, natural and relative date phrases to an ISO date
string. Relative phrases are resolved against an injectable clock.
"""

import calendar
import re
from datetime import date, timedelta
from typing import Callable, Optional

from ..parser_engine.base import Candidate, PatternFieldParser
from ..parser_engine.types import Confidence

MONTHS = {
    'jan': 1, 'feb': 2, 'mar': 3, 'apr': 4, 'may': 5, 'jun': 6,
    'jul': 7, 'aug': 8, 'sep': 9, 'oct': 10, 'nov': 11, 'dec': 12,
}

WEEKDAYS = ['monday', 'tuesday', 'wednesday', 'thursday', 'friday', 'saturday', 'sunday']

MIN_YEAR = 1900
MAX_YEAR = 2100


def add_months(start: date, months: int) -> date:
    """Add calendar months, clamping the day to the target month's length."""
    month_index = start.month - 1 + months
    year = start.year + month_index // 12
    month = month_index % 12 + 1
    day = min(start.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def checked_date(year: int, month: int, day: int) -> date:
    """Build a date, raising ValueError outside the supported range."""
    if not MIN_YEAR <= year <= MAX_YEAR:
        raise ValueError(f"year {year} outside {MIN_YEAR}-{MAX_YEAR}")
    return date(year, month, day)


class DateParser(PatternFieldParser):
    """Extracts a date as ``YYYY-MM-DD``."""

    name = 'date'
    patterns = {
        'explicit_date': r'\[date:\s*(\d{4})-(\d{1,2})-(\d{1,2})\s*\]',
        'iso_date': r'\b(\d{4})-(\d{2})-(\d{2})\b',
        'natural_date': (
            r'\b(?:on\s+)?(?:the\s+)?(jan|feb|mar|apr|may|jun|jul|aug|sep|oct|nov|dec)[a-z]*\.?'
            r'\s+(\d{1,2})(?:st|nd|rd|th)?,?\s+(\d{4})\b'
        ),
        'relative_date': r'\b(today|tomorrow|yesterday)\b',
        'weekday_reference': rf'\bnext\s+({"|".join(WEEKDAYS)})\b',
        'in_period': r'\bin\s+(\d+)\s+(day|week|month|year)s?\b',
        'implicit_date': r'\bsometime\s+next\s+week\b',
        'next_period': r'\bnext\s+(week|month|year)\b',
    }

    def __init__(self, today: Optional[Callable[[], date]] = None):
        """Initialize parser.

        Args:
            today: Clock returning the reference date (default: date.today)
        """
        self.today = today or date.today

    def build_candidate(self, pattern_name: str, match: re.Match, text: str) -> Optional[Candidate]:
        resolved = self._resolve(pattern_name, match)
        if resolved is None:
            return None
        value, confidence = resolved
        return self.candidate(value.isoformat(), confidence, pattern_name, match)

    def _resolve(self, pattern_name: str, match: re.Match):
        if pattern_name in ('explicit_date', 'iso_date'):
            year, month, day = (int(g) for g in match.groups())
            return checked_date(year, month, day), Confidence.HIGH

        if pattern_name == 'natural_date':
            month = MONTHS[match.group(1).lower()[:3]]
            return checked_date(int(match.group(3)), month, int(match.group(2))), Confidence.HIGH

        today = self.today()

        if pattern_name == 'relative_date':
            offset = {'today': 0, 'tomorrow': 1, 'yesterday': -1}[match.group(1).lower()]
            return today + timedelta(days=offset), Confidence.MEDIUM

        if pattern_name == 'weekday_reference':
            target = WEEKDAYS.index(match.group(1).lower())
            resolved = today + timedelta(days=7)
            while resolved.weekday() != target:
                resolved += timedelta(days=1)
            return resolved, Confidence.MEDIUM

        if pattern_name == 'in_period':
            amount = int(match.group(1))
            return self._shift(today, amount, match.group(2).lower()), Confidence.MEDIUM

        if pattern_name == 'implicit_date':
            return today + timedelta(days=7), Confidence.LOW

        if pattern_name == 'next_period':
            return self._shift(today, 1, match.group(1).lower()), Confidence.LOW

        return None

    def _shift(self, start: date, amount: int, unit: str) -> date:
        if unit == 'day':
            return start + timedelta(days=amount)
        if unit == 'week':
            return start + timedelta(weeks=amount)
        if unit == 'month':
            return add_months(start, amount)
        return add_months(start, amount * 12)

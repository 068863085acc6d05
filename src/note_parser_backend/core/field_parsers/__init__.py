"""
Field Parsers

Bundled rule sets, one per note field. ``default_parsers`` returns them in
the default registration order.
"""

from typing import Callable, List, Optional

from ..parser_engine.base import FieldParser
from .subject import SubjectParser
from .action import ActionParser
from .date import DateParser
from .time import TimeParser
from .participants import ParticipantsParser
from .location import LocationParser
from .priority import PriorityParser
from .tags import TagsParser

DEFAULT_PARSER_ORDER = (
    'subject', 'action', 'date', 'time', 'participants', 'location', 'priority', 'tags',
)


def default_parsers(today: Optional[Callable] = None) -> List[FieldParser]:
    """Create the bundled parsers in default registration order.

    Args:
        today: Clock for relative dates (default: date.today)
    """
    return [
        SubjectParser(),
        ActionParser(),
        DateParser(today=today),
        TimeParser(),
        ParticipantsParser(),
        LocationParser(),
        PriorityParser(),
        TagsParser(),
    ]


__all__ = [
    'DEFAULT_PARSER_ORDER',
    'default_parsers',
    'SubjectParser',
    'ActionParser',
    'DateParser',
    'TimeParser',
    'ParticipantsParser',
    'LocationParser',
    'PriorityParser',
    'TagsParser',
]

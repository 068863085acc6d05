"""Tests for the location field parser."""

import pytest

from note_parser_backend.core.field_parsers import LocationParser
from note_parser_backend.core.parser_engine import Confidence


@pytest.fixture
def parse(run_parser):
    parser = LocationParser()
    return lambda text: run_parser(parser, text)


class TestLocationParser:
    """Test location extraction."""

    def test_explicit_marker(self, parse):
        result = parse("standup [location: HQ Berlin]")

        assert result.confidence is Confidence.HIGH
        assert result.value == {"name": "HQ Berlin", "type": "unknown"}

    def test_room_number(self, parse):
        result = parse("meet in room 4")

        assert result.pattern == "inferred_location"
        assert result.confidence is Confidence.LOW
        assert result.value == {"name": "room 4", "type": "room"}

    def test_article_is_skipped(self, parse):
        assert parse("lunch at the cafe").value == {"name": "cafe", "type": "unknown"}

    def test_times_are_not_places(self, parse):
        assert parse("call John at 2pm") is None
        assert parse("ship in 3 days") is None

    def test_later_place_found_after_time_phrase(self, parse):
        result = parse("review in the afternoon at the office")
        assert result.value == {"name": "office", "type": "room"}

    def test_no_location(self, parse):
        assert parse("call John tomorrow") is None

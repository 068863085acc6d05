"""Tests for the participants field parser."""

import pytest

from note_parser_backend.core.field_parsers import ParticipantsParser
from note_parser_backend.core.parser_engine import Confidence


@pytest.fixture
def parse(run_parser):
    parser = ParticipantsParser()
    return lambda text: run_parser(parser, text)


class TestParticipantsParser:
    """Test participant extraction."""

    def test_explicit_list_with_roles(self, parse):
        result = parse("[participants: John (lead), Sarah] kickoff")

        assert result.pattern == "explicit_list"
        assert result.confidence is Confidence.HIGH
        assert result.value == {
            "participants": [{"name": "John", "role": "lead"}, {"name": "Sarah"}],
            "count": 2,
        }

    def test_mentions(self, parse):
        result = parse("ping @alice and @bob about the release")

        assert result.pattern == "mentions"
        assert result.confidence is Confidence.HIGH
        assert [p["name"] for p in result.value["participants"]] == ["alice", "bob"]
        assert result.original_match == "@alice @bob"

    def test_email_is_not_a_mention(self, parse):
        assert parse("email john@example.com") is None

    def test_role_assignment(self, parse):
        result = parse("Alice (reviewer) and Bob (author) sign off")

        assert result.confidence is Confidence.MEDIUM
        assert result.value["participants"] == [
            {"name": "Alice", "role": "reviewer"},
            {"name": "Bob", "role": "author"},
        ]

    def test_implicit_with_list(self, parse):
        result = parse("sync with John, Sarah and Bob tomorrow")

        assert result.pattern == "implicit"
        assert result.confidence is Confidence.LOW
        assert [p["name"] for p in result.value["participants"]] == ["John", "Sarah", "Bob"]
        assert result.value["count"] == 3

    def test_duplicates_removed(self, parse):
        result = parse("ping @sam and @Sam")
        assert result.value["count"] == 1

    def test_stop_words_only_yields_nothing(self, parse):
        assert parse("catch up with me") is None

    def test_no_participants(self, parse):
        assert parse("write the report") is None

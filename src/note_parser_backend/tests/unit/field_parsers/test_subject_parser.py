"""Tests for the subject field parser."""

import pytest

from note_parser_backend.core.field_parsers import SubjectParser
from note_parser_backend.core.field_parsers.subject import clean_subject
from note_parser_backend.core.parser_engine import Confidence, ErrorKind, ErrorResult


@pytest.fixture
def parse(run_parser):
    parser = SubjectParser()
    return lambda text: run_parser(parser, text)


class TestSubjectParser:
    """Test subject extraction."""

    def test_inferred_subject_is_cleaned(self, parse):
        result = parse("call John tomorrow at 2pm #urgent")

        assert result.pattern == "inferred_subject"
        assert result.confidence is Confidence.MEDIUM
        assert result.value == {
            "text": "call John tomorrow",
            "key_terms": ["call", "john"],
            "has_action_verb": True,
        }

    def test_explicit_marker(self, parse):
        result = parse("[subject: Budget review] see attached")

        assert result.pattern == "explicit_subject"
        assert result.confidence is Confidence.HIGH
        assert result.value["text"] == "Budget review"
        assert result.value["has_action_verb"] is False

    def test_invalid_start_word(self, parse):
        assert parse("the usual") is None

    def test_nothing_left_after_cleanup(self, parse):
        assert parse("#urgent @sam") is None

    def test_control_characters_are_an_error(self, parse):
        result = parse("bad\x00input")

        assert isinstance(result, ErrorResult)
        assert result.kind == ErrorKind.PARSER_ERROR
        assert result.parser == "subject"

    def test_clean_subject(self):
        assert clean_subject("Plan offsite high priority by 5pm, #ops") == "Plan offsite"

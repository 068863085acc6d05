"""
End-to-end tests: bundled parsers through the orchestrator.

The clock is fixed to Friday 2025-03-14.
"""

import pytest

from note_parser_backend.core.field_parsers import DEFAULT_PARSER_ORDER
from note_parser_backend.core.parser_engine import Confidence, DocumentResult, ErrorKind


class TestEndToEnd:
    """Test complete parse passes over realistic notes."""

    def test_call_john_tomorrow(self, note_orchestrator):
        result = note_orchestrator.parse("call John tomorrow at 2pm #urgent")

        assert isinstance(result, DocumentResult)
        assert result.errors == []

        action = result.fields["action"]
        assert action.confidence is Confidence.HIGH
        assert action.value["verb"] == "call"

        date = result.fields["date"]
        assert date.value == "2025-03-15"
        assert date.confidence is Confidence.MEDIUM

        time = result.fields["time"]
        assert time.value == "14:00"
        assert time.confidence is Confidence.HIGH

        assert result.fields["tags"].value == ["urgent"]
        assert result.fields["priority"].value == {"level": "urgent", "score": 4}
        assert "location" not in result.fields
        assert "participants" not in result.fields

        assert result.summary
        assert "Task:" in result.summary
        assert result.summary == (
            "Task: call John tomorrow | When: 2025-03-15 at 14:00"
            " | Priority: urgent | Tags: #urgent"
        )

    def test_subject_gains_deadline(self, note_orchestrator):
        result = note_orchestrator.parse("call John tomorrow at 2pm #urgent")
        assert result.fields["subject"].value["deadline"] == "2025-03-15"

    def test_every_bundled_parser_is_timed(self, note_orchestrator):
        result = note_orchestrator.parse("call John tomorrow at 2pm #urgent")

        assert list(result.timings) == list(DEFAULT_PARSER_ORDER)
        assert note_orchestrator.stats.get("date").invocations == 1

    def test_rich_note(self, note_orchestrator):
        result = note_orchestrator.parse(
            "[subject: Quarterly planning] meet with Alice and Bob in room 4 "
            "next monday in the morning, high priority #planning #q2"
        )

        assert result.values["subject"]["text"] == "Quarterly planning"
        assert result.values["date"] == "2025-03-24"
        assert result.values["time"] == "09:00"
        assert [p["name"] for p in result.values["participants"]["participants"]] == ["Alice", "Bob"]
        assert result.values["location"]["name"] == "room 4"
        assert result.values["priority"]["level"] == "high"
        assert result.values["tags"] == ["planning", "q2"]
        assert result.summary.startswith("Task: Quarterly planning | When: 2025-03-24 at 09:00")

    def test_excluding_fields(self, note_orchestrator):
        result = note_orchestrator.parse(
            "call John tomorrow at 2pm #urgent",
            {"exclude": ["date", "tags"]},
        )

        assert "date" not in result.fields
        assert "tags" not in result.fields
        assert "date" not in result.timings
        assert result.fields["time"].value == "14:00"

    def test_no_fields_extracted(self, note_orchestrator):
        result = note_orchestrator.parse("the")

        assert result.fields == {}
        assert result.overall_confidence is Confidence.LOW
        assert result.summary == ""

    def test_invalid_document(self, note_orchestrator):
        result = note_orchestrator.parse("  ")
        assert result.kind == ErrorKind.INVALID_INPUT

    def test_control_characters_isolated_to_subject(self, note_orchestrator):
        result = note_orchestrator.parse("call John\x07 tomorrow")

        assert [error.parser for error in result.errors] == ["subject"]
        assert result.fields["date"].value == "2025-03-15"

    def test_to_dict(self, note_orchestrator):
        serialized = note_orchestrator.parse("call John at 2pm").to_dict()

        assert serialized["fields"]["time"]["originalMatch"] == "2pm"
        assert serialized["fields"]["time"]["confidence"] == "HIGH"
        assert "errors" not in serialized

    @pytest.mark.asyncio
    async def test_async_pass_matches_sync_pass(self, note_orchestrator):
        text = "call John tomorrow at 2pm #urgent"

        sync_result = note_orchestrator.parse(text)
        async_result = await note_orchestrator.aparse(text)

        assert async_result.values == sync_result.values
        assert async_result.summary == sync_result.summary

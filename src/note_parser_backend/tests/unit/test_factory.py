"""Tests for configuration-driven orchestrator construction."""

import json

from note_parser_backend.core.factory import create_orchestrator
from note_parser_backend.core.field_parsers import DEFAULT_PARSER_ORDER, TimeParser
from note_parser_backend.utils.config import ConfigManager


def write_config(directory, data):
    (directory / "noteparser.config.json").write_text(json.dumps(data), encoding="utf-8")


class TestCreateOrchestrator:
    """Test the factory."""

    def test_defaults_register_bundled_parsers(self, project_dir, fixed_today):
        orchestrator = create_orchestrator(
            ConfigManager(project_root=project_dir, load_env=False),
            today=lambda: fixed_today,
        )

        assert orchestrator.registry.execution_order() == list(DEFAULT_PARSER_ORDER)
        assert orchestrator.parser_timeout is None
        assert orchestrator.record_stats is True

        result = orchestrator.parse("call John tomorrow")
        assert result.values["date"] == "2025-03-15"

    def test_configuration_is_applied(self, project_dir):
        write_config(project_dir, {
            "version": "1.0.0",
            "parser": {"exclude": ["location"], "parser_timeout_seconds": 2.5, "record_stats": False},
            "post_processing": {"summary": False},
        })

        orchestrator = create_orchestrator(ConfigManager(project_root=project_dir, load_env=False))

        assert orchestrator.default_exclude == frozenset({"location"})
        assert orchestrator.parser_timeout == 2.5
        assert orchestrator.record_stats is False
        assert orchestrator.post_processor.build_summary is False

        result = orchestrator.parse("lunch at the cafe at 1pm")
        assert "location" not in result.fields
        assert result.summary == ""

    def test_case_sensitive_configuration_uses_own_compiler(self, project_dir):
        write_config(project_dir, {"version": "1.0.0", "parser": {"case_insensitive": False}})

        orchestrator = create_orchestrator(ConfigManager(project_root=project_dir, load_env=False))

        assert orchestrator.registry.compiler.case_insensitive is False
        assert "priority" not in orchestrator.parse("HIGH PRIORITY").fields

    def test_custom_parsers(self, project_dir):
        orchestrator = create_orchestrator(
            ConfigManager(project_root=project_dir, load_env=False),
            parsers=[TimeParser()],
        )

        assert orchestrator.registry.names() == ["time"]

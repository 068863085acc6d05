"""
Unit tests for ConfigManager.

Tests cover default fallback, file loading, merging, environment
overrides, schema validation and error handling.
"""

import json

import pytest

from note_parser_backend.exceptions.config_exceptions import (
    ConfigurationError,
    ConfigurationFileNotFoundError,
    ConfigurationSchemaError,
    ConfigurationValidationError,
    EnvironmentVariableError,
)
from note_parser_backend.utils.config import (
    DEFAULT_CONFIG,
    ConfigManager,
    ConfigPaths,
    EnvironmentHandler,
    deep_merge_dicts,
)


def write_json(path, data):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data), encoding="utf-8")


class TestConfigPaths:
    """Test ConfigPaths dataclass."""

    def test_default_paths(self):
        paths = ConfigPaths()
        assert paths.DEFAULT_CONFIG_FILE == "noteparser.config.json"
        assert paths.SCHEMA_DIR == "./config/schema"
        assert paths.ENV_FILE == ".env"


class TestLoading:
    """Test configuration loading."""

    def test_missing_default_file_uses_builtin_defaults(self, project_dir):
        manager = ConfigManager(project_root=project_dir, load_env=False)

        assert manager.load_config() == DEFAULT_CONFIG
        assert manager.source is None
        assert manager.is_loaded

    def test_missing_explicit_file_raises(self, project_dir):
        manager = ConfigManager(config_file="custom.json", project_root=project_dir, load_env=False)

        with pytest.raises(ConfigurationFileNotFoundError):
            manager.load_config()
        assert not manager.is_loaded

    def test_file_merged_over_defaults(self, project_dir):
        write_json(project_dir / "noteparser.config.json", {
            "version": "1.0.0",
            "parser": {"exclude": ["tags"]},
        })
        manager = ConfigManager(project_root=project_dir, load_env=False)

        assert manager.get("parser.exclude") == ["tags"]
        assert manager.get("parser.case_insensitive") is True
        assert manager.get("logging.level") == "INFO"
        assert manager.source.endswith("noteparser.config.json")

    def test_invalid_json(self, project_dir):
        (project_dir / "noteparser.config.json").write_text("{not json", encoding="utf-8")

        with pytest.raises(ConfigurationError) as exc_info:
            ConfigManager(project_root=project_dir, load_env=False).load_config()
        assert "Invalid JSON" in str(exc_info.value)

    def test_non_object_json(self, project_dir):
        write_json(project_dir / "noteparser.config.json", ["a"])

        with pytest.raises(ConfigurationError):
            ConfigManager(project_root=project_dir, load_env=False).load_config()

    def test_validation_failure_lists_fields(self, project_dir):
        write_json(project_dir / "noteparser.config.json", {
            "version": "1.0.0",
            "parser": {"parser_timeout_seconds": -1, "unknown": True},
        })

        with pytest.raises(ConfigurationValidationError) as exc_info:
            ConfigManager(project_root=project_dir, load_env=False).load_config()

        assert "parser.parser_timeout_seconds" in exc_info.value.invalid_fields
        assert len(exc_info.value.validation_errors) == 2

    def test_validation_can_be_skipped(self, project_dir):
        write_json(project_dir / "noteparser.config.json", {"version": "1.0.0", "extra": 1})
        manager = ConfigManager(project_root=project_dir, load_env=False)
        assert manager.load_config(validate=False)["extra"] == 1

    def test_project_schema_file_is_used(self, project_dir):
        write_json(project_dir / "config" / "schema" / "config_schema.json", {
            "type": "object",
            "required": ["owner"],
        })

        with pytest.raises(ConfigurationValidationError):
            ConfigManager(project_root=project_dir, load_env=False).load_config()

    def test_invalid_schema_file(self, project_dir):
        write_json(project_dir / "config" / "schema" / "config_schema.json", {"type": 12})

        with pytest.raises(ConfigurationSchemaError):
            ConfigManager(project_root=project_dir, load_env=False).load_config()


class TestAccessors:
    """Test dot-notation access."""

    def test_get_set_has(self, project_dir):
        manager = ConfigManager(project_root=project_dir, load_env=False)

        assert manager.get("parser.missing", "fallback") == "fallback"
        assert manager.has("logging.format")
        assert not manager.has("logging.nope")

        manager.set("parser.exclude", ["date"])
        assert manager.get("parser.exclude") == ["date"]

    def test_get_returns_copies(self, project_dir):
        manager = ConfigManager(project_root=project_dir, load_env=False)
        manager.get("parser.exclude").append("date")
        assert manager.get("parser.exclude") == []

    def test_reset_and_reload(self, project_dir):
        manager = ConfigManager(project_root=project_dir, load_env=False)
        manager.set("parser.exclude", ["date"])

        manager.reset()
        assert not manager.is_loaded
        assert manager.get("parser.exclude") == []

        manager.set("parser.exclude", ["time"])
        assert manager.reload_config()["parser"]["exclude"] == []

    def test_config_summary(self, project_dir, monkeypatch):
        monkeypatch.setenv("NOTE_PARSER_LOG_LEVEL", "debug")
        manager = ConfigManager(project_root=project_dir, load_env=False)
        manager.load_config()

        summary = manager.get_config_summary()

        assert summary["source"] == "built-in defaults"
        assert "parser.exclude" in summary["config_keys"]
        assert summary["environment_overrides"] == {"NOTE_PARSER_LOG_LEVEL": "logging.level"}


class TestEnvironmentOverrides:
    """Test NOTE_PARSER_* overrides."""

    def test_overrides_applied(self, project_dir, monkeypatch):
        monkeypatch.setenv("NOTE_PARSER_LOG_LEVEL", "debug")
        monkeypatch.setenv("NOTE_PARSER_EXCLUDE", "date, tags,")
        monkeypatch.setenv("NOTE_PARSER_TIMEOUT", "1.5")
        monkeypatch.setenv("NOTE_PARSER_CASE_INSENSITIVE", "off")

        manager = ConfigManager(project_root=project_dir, load_env=False)

        assert manager.get("logging.level") == "DEBUG"
        assert manager.get("parser.exclude") == ["date", "tags"]
        assert manager.get("parser.parser_timeout_seconds") == 1.5
        assert manager.get("parser.case_insensitive") is False

    def test_unconvertible_value_is_skipped(self, project_dir, monkeypatch):
        monkeypatch.setenv("NOTE_PARSER_TIMEOUT", "soon")
        manager = ConfigManager(project_root=project_dir, load_env=False)
        assert manager.get("parser.parser_timeout_seconds") is None

    def test_invalid_override_fails_validation(self, project_dir, monkeypatch):
        monkeypatch.setenv("NOTE_PARSER_LOG_FORMAT", "xml")
        with pytest.raises(ConfigurationValidationError):
            ConfigManager(project_root=project_dir, load_env=False).load_config()

    def test_dotenv_file_is_loaded(self, project_dir, monkeypatch):
        (project_dir / ".env").write_text("NOTE_PARSER_EXCLUDE=location\n", encoding="utf-8")

        manager = ConfigManager(project_root=project_dir)

        assert manager.get("parser.exclude") == ["location"]

    @pytest.mark.parametrize("value,expected", [("yes", True), ("0", False), ("Enabled", True)])
    def test_boolean_conversion(self, value, expected):
        assert EnvironmentHandler().convert_env_value(value, "boolean") is expected

    def test_boolean_conversion_error(self):
        with pytest.raises(EnvironmentVariableError) as exc_info:
            EnvironmentHandler().convert_env_value("maybe", "boolean", "NOTE_PARSER_CASE_INSENSITIVE")
        assert exc_info.value.variable_name == "NOTE_PARSER_CASE_INSENSITIVE"


class TestDeepMerge:
    """Test dictionary merging."""

    def test_nested_merge_does_not_mutate(self):
        base = {"a": {"b": 1, "c": 2}, "d": [1]}
        merged = deep_merge_dicts(base, {"a": {"c": 3}, "d": [2]})

        assert merged == {"a": {"b": 1, "c": 3}, "d": [2]}
        assert base == {"a": {"b": 1, "c": 2}, "d": [1]}

"""Shared test fixtures and configuration for Note Parser backend tests."""

from datetime import date

import pytest

from note_parser_backend.core.field_parsers import default_parsers
from note_parser_backend.core.parser_engine import (
    ParserOrchestrator,
    ParserRegistry,
    PatternCompiler,
)

# Configure asyncio for pytest-asyncio
pytest_plugins = ("pytest_asyncio",)

# A Friday
FIXED_TODAY = date(2025, 3, 14)

ENV_VARS = (
    "NOTE_PARSER_LOG_LEVEL",
    "NOTE_PARSER_LOG_FORMAT",
    "NOTE_PARSER_LOG_FILE",
    "NOTE_PARSER_EXCLUDE",
    "NOTE_PARSER_TIMEOUT",
    "NOTE_PARSER_CASE_INSENSITIVE",
)


class StubParser:
    """Minimal object satisfying the field parser contract."""

    def __init__(self, name, outcome=None, raises=None, patterns=None, depends_on=(), calls=None):
        self.name = name
        self.outcome = outcome
        self.raises = raises
        self.patterns = patterns or {}
        self.depends_on = tuple(depends_on)
        self.calls = calls if calls is not None else []
        self.seen_patterns = None

    def parse(self, text, patterns):
        self.calls.append(self.name)
        self.seen_patterns = patterns
        if self.raises is not None:
            raise self.raises
        return self.outcome


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep NOTE_PARSER_* variables from the host out of every test."""
    for var in ENV_VARS:
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def fixed_today():
    return FIXED_TODAY


@pytest.fixture
def stub_parser():
    """The StubParser class, for building test parsers."""
    return StubParser


@pytest.fixture
def compiler():
    """Fresh pattern compiler so cached sets never leak between tests."""
    return PatternCompiler()


@pytest.fixture
def registry(compiler):
    return ParserRegistry(compiler)


@pytest.fixture
def orchestrator(registry):
    return ParserOrchestrator(registry=registry)


@pytest.fixture
def note_orchestrator(compiler):
    """Orchestrator with every bundled parser and a fixed clock."""
    orchestrator = ParserOrchestrator(registry=ParserRegistry(compiler))
    for parser in default_parsers(today=lambda: FIXED_TODAY):
        orchestrator.register(parser.name, parser)
    return orchestrator


@pytest.fixture
def run_parser(compiler):
    """Run one field parser directly with its compiled patterns."""
    def run(parser, text):
        return parser.parse(text, compiler.compile(parser.name, parser.patterns))
    return run


@pytest.fixture
def project_dir(tmp_path, monkeypatch):
    """Empty working directory with no configuration or .env file."""
    monkeypatch.chdir(tmp_path)
    return tmp_path

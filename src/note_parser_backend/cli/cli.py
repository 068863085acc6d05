"""
Note Parser CLI Application.

Main entry point for the note-parser command-line interface: parse notes,
list the registered field parsers, and show configuration status.
"""

import logging
from typing import Optional

import typer
from rich import print as rprint
from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from .. import __version__
from ..exceptions.config_exceptions import ConfigurationError
from ..exceptions.parser_exceptions import NoteParserError
from ..utils.config import ConfigManager
from ..utils.logging_config import LoggingManager, LogLevel
from .parse import register_commands

# Console for rich output; log records go to stderr
console = Console()
err_console = Console(stderr=True)

app = typer.Typer(
    name="note-parser",
    help="Extract structured fields from free-form notes",
    add_completion=False,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)

register_commands(app)

# Global state
_config_manager: Optional[ConfigManager] = None
_global_config: dict = {}


def setup_logging(verbose: bool = False, logging_config: Optional[dict] = None) -> logging.Logger:
    """
    Set up logging for a CLI invocation.

    Console output goes through a rich handler on stderr at WARNING, or
    DEBUG with ``--verbose``. A configured log file receives the
    configured level and format.

    Args:
        verbose: Enable verbose (DEBUG) logging
        logging_config: The ``logging`` configuration section

    Returns:
        Configured logger instance
    """
    manager = LoggingManager.from_config(
        logging_config or {},
        verbose=verbose,
        rich_console=True,
        console=err_console,
    )

    # Keep routine INFO lines off the terminal unless asked for
    if not verbose:
        for handler in logging.getLogger().handlers:
            if not isinstance(handler, logging.FileHandler):
                handler.setLevel(max(manager.log_level.value, LogLevel.WARNING.value))

    return logging.getLogger("note_parser_backend")


def get_config_manager(config_path: Optional[str] = None) -> ConfigManager:
    """
    Get or create the global configuration manager.

    Args:
        config_path: Optional path to configuration file

    Returns:
        Loaded ConfigManager instance

    Raises:
        typer.Exit: If configuration loading fails
    """
    global _config_manager

    if _config_manager is None or config_path:
        try:
            manager = ConfigManager(config_file=config_path, load_env=True)
            manager.load_config()
        except ConfigurationError as e:
            rprint(f"[red]Configuration Error:[/red] {e}")
            raise typer.Exit(1)
        _config_manager = manager

    return _config_manager


def get_global_config() -> dict:
    """Get the global options of the current invocation."""
    return _global_config


@app.callback()
def main(
    ctx: typer.Context,
    config_path: Optional[str] = typer.Option(
        None,
        "--config-path",
        "-c",
        help="Path to configuration file (default: noteparser.config.json)",
        metavar="PATH",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose logging (DEBUG level)",
    ),
) -> None:
    """
    Note Parser CLI - pull subject, action, date, time, participants,
    location, priority and tags out of a note.

    Common workflows:
    • Parse a note: note-parser parse "call John tomorrow at 2pm #urgent"
    • Machine-readable output: note-parser parse --json "..."
    • See what runs: note-parser parsers
    """
    global _config_manager, _global_config

    # A previous invocation in the same process must not leak its configuration
    _config_manager = None
    config_manager = get_config_manager(config_path)
    logger = setup_logging(verbose, config_manager.get("logging", {}))

    _global_config = {
        "config_path": config_path,
        "verbose": verbose,
        "config_manager": config_manager,
        "logger": logger,
    }
    ctx.obj = _global_config.copy()


@app.command()
def info() -> None:
    """Show configuration status."""
    config_manager = get_config_manager()
    summary = config_manager.get_config_summary()

    info_text = Text()
    info_text.append("Note Parser Information\n\n", style="bold blue")
    info_text.append(f"Version: {__version__}\n")
    info_text.append(f"Config version: {config_manager.get('version', 'Unknown')}\n")
    info_text.append(f"Config source: {summary['source']}\n")
    info_text.append(f"Project root: {summary['project_root']}\n\n")

    info_text.append("Configuration:\n", style="bold")
    exclude = config_manager.get("parser.exclude", [])
    timeout = config_manager.get("parser.parser_timeout_seconds")
    info_text.append(f"• Excluded parsers: {', '.join(exclude) if exclude else 'none'}\n")
    info_text.append(f"• Case-insensitive patterns: {config_manager.get('parser.case_insensitive', True)}\n")
    info_text.append(f"• Parser timeout: {f'{timeout}s' if timeout else 'none'}\n")
    info_text.append(f"• Log level: {config_manager.get('logging.level', 'INFO')}\n")

    overrides = summary["environment_overrides"]
    if overrides:
        info_text.append("\nEnvironment overrides:\n", style="bold")
        for env_var, config_key in overrides.items():
            info_text.append(f"• {env_var} → {config_key}\n")

    console.print(Panel(info_text, title="System Information", border_style="blue"))


@app.command()
def version() -> None:
    """Show version information."""
    rprint(f"Note Parser [blue]v{__version__}[/blue]")


def handle_cli_error(error: Exception) -> None:
    """Print a user-friendly message for an unexpected error."""
    logger = logging.getLogger("note_parser_backend")

    if isinstance(error, ConfigurationError):
        rprint(f"[red]Configuration Error:[/red] {error}")
    elif isinstance(error, NoteParserError):
        rprint(f"[red]Parser Error:[/red] {error}")
    else:
        rprint(f"[red]Error:[/red] {error}")
    logger.debug("Error details", exc_info=True)


def cli_main() -> None:
    """
    Main CLI entry point with error handling.

    This function is called by the console script entry point.
    """
    try:
        app()
    except typer.Exit:
        raise
    except KeyboardInterrupt:
        rprint("\n[yellow]Operation cancelled by user[/yellow]")
        raise typer.Exit(130)
    except Exception as e:
        handle_cli_error(e)
        raise typer.Exit(1)


if __name__ == "__main__":
    cli_main()

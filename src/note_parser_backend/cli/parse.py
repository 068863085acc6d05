"""
Parsing commands for Note Parser CLI.

``parse`` runs one parse pass over a note and renders the result;
``parsers`` lists the registered field parsers in execution order.
"""

import json
from datetime import date
from typing import Any, List, Optional

import typer
from rich import print as rprint
from rich.console import Console
from rich.table import Table

from ..core.factory import create_orchestrator
from ..core.parser_engine import DocumentResult, ErrorResult, ParserOrchestrator
from ..exceptions.parser_exceptions import ParserRegistrationError

console = Console()

CONFIDENCE_STYLES = {
    "HIGH": "green",
    "MEDIUM": "yellow",
    "LOW": "red",
}


def _get_config_manager():
    """Get the configuration manager from the main CLI module."""
    from .cli import get_config_manager
    return get_config_manager()


def _build_orchestrator(today: Optional[str] = None) -> ParserOrchestrator:
    clock = None
    if today:
        try:
            fixed = date.fromisoformat(today)
        except ValueError:
            rprint(f"[red]Error:[/red] --today must be YYYY-MM-DD, got {today!r}")
            raise typer.Exit(2)

        def clock() -> date:
            return fixed

    try:
        return create_orchestrator(_get_config_manager(), today=clock)
    except ParserRegistrationError as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)


def _format_value(value: Any) -> str:
    if isinstance(value, dict):
        return ", ".join(f"{k}={_format_value(v)}" for k, v in value.items())
    if isinstance(value, list):
        return "[" + ", ".join(_format_value(v) for v in value) + "]"
    return str(value)


def _render_document(document: DocumentResult) -> None:
    table = Table(title="Extracted Fields")
    table.add_column("Field", style="cyan")
    table.add_column("Value", style="white")
    table.add_column("Confidence")
    table.add_column("Pattern", style="magenta")
    table.add_column("ms", justify="right", style="blue")

    for name, result in document.fields.items():
        level = result.confidence.value
        table.add_row(
            name,
            _format_value(result.value),
            f"[{CONFIDENCE_STYLES[level]}]{level}[/{CONFIDENCE_STYLES[level]}]",
            result.pattern,
            f"{document.timings.get(name, 0.0):.2f}",
        )

    if document.fields:
        console.print(table)
    else:
        rprint("[yellow]No fields extracted[/yellow]")

    for error in document.errors:
        rprint(f"[red]{error.kind.value}[/red] ({error.parser}): {error.message}")

    rprint(f"Overall confidence: [bold]{document.overall_confidence.value}[/bold]")
    if document.summary:
        console.print(document.summary, markup=False, highlight=False, soft_wrap=True)


def parse(
    text: str = typer.Argument(..., help="Note text to parse"),
    exclude: Optional[List[str]] = typer.Option(
        None,
        "--exclude",
        "-x",
        help="Field parser to skip (repeatable)",
    ),
    as_json: bool = typer.Option(
        False,
        "--json",
        help="Print the result as JSON",
    ),
    today: Optional[str] = typer.Option(
        None,
        "--today",
        help="Reference date for relative dates (YYYY-MM-DD)",
        metavar="DATE",
    ),
) -> None:
    """Parse a note and show the extracted fields."""
    orchestrator = _build_orchestrator(today)
    result = orchestrator.parse(text, {"exclude": exclude or []})

    if isinstance(result, ErrorResult):
        if as_json:
            typer.echo(json.dumps({"error": result.to_dict()}))
        else:
            rprint(f"[red]{result.kind.value}:[/red] {result.message}")
        raise typer.Exit(1)

    if as_json:
        typer.echo(json.dumps(result.to_dict(), default=str, ensure_ascii=False))
    else:
        _render_document(result)


def parsers() -> None:
    """List registered field parsers in execution order."""
    orchestrator = _build_orchestrator()
    excluded = orchestrator.default_exclude

    table = Table(title="Field Parsers")
    table.add_column("#", justify="right", style="blue")
    table.add_column("Field", style="cyan")
    table.add_column("Parser", style="green")
    table.add_column("Patterns", style="white")
    table.add_column("Depends on", style="magenta")

    for position, entry in enumerate(orchestrator.registry.describe(), 1):
        name = entry["name"]
        label = f"{name} (excluded)" if name in excluded else name
        table.add_row(
            str(position),
            label,
            entry["parser"],
            ", ".join(entry["patterns"]) or "-",
            ", ".join(entry["depends_on"]) or "-",
        )

    console.print(table)


def register_commands(app: typer.Typer) -> None:
    """Attach the parsing commands to the main app."""
    app.command("parse")(parse)
    app.command("parsers")(parsers)

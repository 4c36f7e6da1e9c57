"""CLI command: safeskill scan <path> — audit one skill directory."""

from __future__ import annotations

from pathlib import Path

import click
from rich.console import Console

from safeskill.cli import EXIT_CODES
from safeskill.reporter import format_skill_json, format_skill_report
from safeskill.scanner.engine import scan_skill

console = Console(stderr=True)


@click.command()
@click.argument("path", type=click.Path())
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["detailed", "json"]),
    default="detailed",
    help="Output format.",
)
def scan(path: str, output_format: str) -> None:
    """Scan a specific skill/server directory for security issues."""
    if not Path(path).exists():
        console.print(f"[red]Error:[/red] Directory not found: {path}")
        raise SystemExit(1)

    result = scan_skill(path)
    if output_format == "json":
        click.echo(format_skill_json(result))
    else:
        click.echo(format_skill_report(result))

    raise SystemExit(EXIT_CODES[result.rating])

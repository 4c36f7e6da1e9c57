"""CLI command: safeskill config — check MCP client configuration only."""

from __future__ import annotations

import click
from rich.console import Console
from rich.table import Table

from safeskill.config import SafeSkillConfig
from safeskill.config_checker import check_config
from safeskill.scanner.models import Severity

console = Console(stderr=True)

_SEVERITY_COLORS = {
    Severity.CRITICAL: "red",
    Severity.HIGH: "magenta",
    Severity.MEDIUM: "yellow",
    Severity.LOW: "blue",
    Severity.INFO: "white",
}


@click.command()
def config() -> None:
    """Check your MCP configuration for security issues."""
    findings = check_config(SafeSkillConfig.load().home_dir)

    if not findings:
        click.echo("Your MCP configuration looks secure. No issues found.")
        raise SystemExit(0)

    table = Table(title="Configuration issues", show_lines=True)
    table.add_column("Severity", style="bold", width=10)
    table.add_column("Issue")
    table.add_column("Fix")
    for f in findings:
        color = _SEVERITY_COLORS.get(f.severity, "white")
        table.add_row(
            f"[{color}]{f.severity.value.upper()}[/{color}]",
            f"{f.title}\n[dim]{f.file}[/dim]\n{f.plain_english}",
            f.recommendation,
        )

    click.echo(
        f"Found {len(findings)} configuration issue"
        f"{'' if len(findings) == 1 else 's'}:"
    )
    console.print(table)

    has_critical = any(f.severity == Severity.CRITICAL for f in findings)
    raise SystemExit(2 if has_critical else 1)

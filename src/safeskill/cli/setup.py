"""CLI command: safeskill setup — audit every installed skill plus config."""

from __future__ import annotations

import click
from rich.console import Console

from safeskill.cli import EXIT_CODES
from safeskill.config import SafeSkillConfig
from safeskill.config_checker import check_config
from safeskill.reporter import (
    format_conversational,
    format_setup_json,
    format_setup_report,
)
from safeskill.scanner.engine import config_only_result, scan_setup

console = Console(stderr=True)

_FORMATTERS = {
    "conversational": format_conversational,
    "detailed": format_setup_report,
    "json": format_setup_json,
}


@click.command()
@click.option(
    "--skills-dir",
    type=click.Path(),
    default=None,
    help="Override the auto-detected skills directory.",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(sorted(_FORMATTERS)),
    default="detailed",
    help="Output format.",
)
def setup(skills_dir: str | None = None, output_format: str = "detailed") -> None:
    """Scan your entire MCP setup (default command)."""
    config = SafeSkillConfig.load()
    skills_path = config.find_skills_dir(skills_dir)
    config_findings = check_config(config.home_dir)

    if skills_path is None and not config_findings:
        click.echo(
            "No MCP skills directory found and no configuration issues detected."
        )
        click.echo(
            "If you have MCP skills installed, use --skills-dir=<path> to specify "
            "the location."
        )
        raise SystemExit(0)

    if skills_path is not None:
        console.print(
            f"[bold]SafeSkill[/bold] scanning [cyan]{skills_path}[/cyan]\n"
        )
        result = scan_setup(skills_path, config_findings)
    else:
        result = config_only_result(config_findings)

    click.echo(_FORMATTERS[output_format](result))
    raise SystemExit(EXIT_CODES[result.overall_rating])

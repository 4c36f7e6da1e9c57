"""CLI command: safeskill server — start the web API."""

from __future__ import annotations

import click
from rich.console import Console

from safeskill.config import SafeSkillConfig

console = Console(stderr=True)


@click.command()
@click.option(
    "--port",
    type=int,
    default=None,
    help="Port to listen on (default: 8471).",
)
def server(port: int | None) -> None:
    """Start the SafeSkill web API."""
    try:
        import uvicorn
    except ImportError:
        console.print(
            "[red]Web dependencies not installed.[/red]\n"
            "Install with: pip install safeskill[web]"
        )
        raise SystemExit(1)

    config = SafeSkillConfig.load()
    if port is not None:
        config.web_port = port

    console.print(
        f"[bold]SafeSkill[/bold] web API starting on "
        f"[cyan]http://{config.web_host}:{config.web_port}[/cyan]"
    )
    console.print("  [dim]Bound to 127.0.0.1 only[/dim]\n")

    from safeskill.web.app import create_app

    uvicorn.run(
        create_app(config),
        host=config.web_host,
        port=config.web_port,
        log_level="info",
    )

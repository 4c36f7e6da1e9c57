"""CLI entry point — Click group with global options."""

from __future__ import annotations

import logging

import click

from safeskill import __version__
from safeskill.scanner.models import Rating

# Process exit code per rating
EXIT_CODES = {
    Rating.GREEN: 0,
    Rating.YELLOW: 1,
    Rating.RED: 2,
}


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="safeskill")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.pass_context
def main(ctx: click.Context, verbose: bool) -> None:
    """SafeSkill — one-click security audit for your MCP setup.

    Run without a command to audit the whole setup.
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose

    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    if ctx.invoked_subcommand is None:
        from safeskill.cli.setup import setup

        ctx.invoke(setup)


def _register_commands() -> None:
    from safeskill.cli.bulk import bulk  # noqa: F811
    from safeskill.cli.config import config  # noqa: F811
    from safeskill.cli.scan import scan  # noqa: F811
    from safeskill.cli.server import server  # noqa: F811
    from safeskill.cli.setup import setup  # noqa: F811

    main.add_command(setup)
    main.add_command(scan)
    main.add_command(config)
    main.add_command(bulk)
    main.add_command(server)


_register_commands()

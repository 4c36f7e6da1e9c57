"""CLI command: safeskill bulk — scan MCP packages published to npm."""

from __future__ import annotations

import json
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from safeskill.bulk import BulkEntry, collect_packages, timed_bulk_scan
from safeskill.config import SafeSkillConfig

console = Console(stderr=True)

_RATING_COLORS = {"GREEN": "green", "YELLOW": "yellow", "RED": "red"}


@click.command()
@click.argument("queries", nargs=-1)
@click.option(
    "--output",
    "-o",
    type=click.Path(),
    default="safeskill-bulk-results.json",
    help="Where to write the JSON results.",
)
@click.option(
    "--workers",
    "-w",
    type=int,
    default=None,
    help="Packages scanned in parallel (default: 5).",
)
@click.option(
    "--limit",
    type=int,
    default=None,
    help="Scan at most this many packages.",
)
def bulk(
    queries: tuple[str, ...],
    output: str,
    workers: int | None,
    limit: int | None,
) -> None:
    """Search npm for MCP packages and scan each one."""
    config = SafeSkillConfig.load()
    queries = queries or config.bulk_queries
    workers = workers or config.bulk_workers

    console.print("[bold]SafeSkill[/bold] bulk scanner")
    console.print(f"Searching npm for {len(queries)} queries...")
    packages = collect_packages(queries)
    if limit is not None:
        packages = packages[:limit]
    console.print(f"Found [cyan]{len(packages)}[/cyan] unique MCP packages\n")

    total = len(packages)

    def _progress(index: int, entry: BulkEntry) -> None:
        prefix = f"[{index + 1}/{total}] {entry.package.name}"
        if entry.scan is None:
            if entry.error == "download_failed":
                console.print(f"{prefix} [red]DOWNLOAD FAILED[/red]")
            else:
                console.print(f"{prefix} [red]FAILED[/red] {escape(entry.error or '')}")
            return
        rating = entry.scan.rating.value
        color = _RATING_COLORS[rating]
        console.print(
            f"{prefix} [{color}]{rating}[/{color}] {entry.scan.score}/100 "
            f"({len(entry.scan.findings)} findings, "
            f"{entry.scan.scanned_files} files)"
        )

    report = timed_bulk_scan(packages, workers=workers, on_result=_progress)
    Path(output).write_text(json.dumps(report, indent=2), encoding="utf-8")

    _print_summary(report)
    console.print(f"\nFull results saved to [cyan]{output}[/cyan]")


def _print_summary(report: dict) -> None:
    meta = report["metadata"]
    summary = report["summary"]

    console.print(
        f"\nScanned {meta['totalScanned']} of {meta['totalPackages']} packages "
        f"({meta['totalFailed']} failed) in {meta['scanDuration'] / 1000:.1f}s"
    )
    console.print(f"Total findings: {meta['totalFindings']}")
    console.print(
        f"Average score: {summary['averageScore']}/100, "
        f"median: {summary['medianScore']}/100"
    )

    table = Table(title="Top issues", show_lines=False)
    table.add_column("Count", justify="right")
    table.add_column("Rule", style="cyan")
    table.add_column("Title")
    for rule in summary["topRules"][:10]:
        table.add_row(str(rule["count"]), rule["ruleId"], rule["title"])
    console.print(table)

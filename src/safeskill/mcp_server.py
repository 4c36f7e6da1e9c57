"""MCP server exposing the scanner as agent tools over stdio."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from mcp.server.fastmcp import FastMCP

from safeskill.config import SafeSkillConfig
from safeskill.config_checker import check_config as run_config_check
from safeskill.reporter import (
    format_conversational,
    format_setup_json,
    format_setup_report,
    format_skill_json,
    format_skill_report,
)
from safeskill.scanner.engine import config_only_result
from safeskill.scanner.engine import scan_setup as run_setup_scan
from safeskill.scanner.engine import scan_skill as run_skill_scan

mcp = FastMCP("safeskill")

@mcp.tool()
def scan_setup(
    format: Literal["conversational", "detailed", "json"] = "conversational",
    skills_dir: str | None = None,
) -> str:
    """Scan your entire MCP setup for security issues.

    Returns a plain-English report with an overall safety score and a
    per-skill breakdown.

    Args:
        format: 'conversational' for a chat-friendly summary, 'detailed' for a
            full markdown report, 'json' for raw data.
        skills_dir: Path to the MCP skills directory. Auto-detected if omitted.
    """
    config = SafeSkillConfig.load()
    skills_path = config.find_skills_dir(skills_dir)
    config_findings = run_config_check(config.home_dir)

    if skills_path is None:
        result = config_only_result(config_findings)
        if format == "json":
            return format_setup_json(result)
        if not config_findings:
            return (
                "I couldn't find any MCP skills installed on your system, and your "
                "configuration looks clean. You're good!"
            )
    else:
        result = run_setup_scan(skills_path, config_findings)

    if format == "json":
        return format_setup_json(result)
    if format == "detailed":
        return format_setup_report(result)
    return format_conversational(result)


@mcp.tool()
def scan_skill(
    path: str,
    format: Literal["detailed", "json"] = "detailed",
) -> str:
    """Scan a specific MCP skill/server directory for security issues.

    Args:
        path: Path to the skill directory to scan.
        format: 'detailed' for a markdown report, 'json' for raw data.
    """
    if not Path(path).exists():
        return (
            f"Directory not found: {path}. Please provide a valid path to a skill "
            "directory."
        )

    result = run_skill_scan(path)
    return format_skill_json(result) if format == "json" else format_skill_report(result)


@mcp.tool()
def check_config() -> str:
    """Check MCP configuration files for exposed ports, missing auth, and secrets."""
    findings = run_config_check(SafeSkillConfig.load().home_dir)
    if not findings:
        return "Your MCP configuration looks secure. No issues found."

    lines = [
        f"Found {len(findings)} configuration issue"
        f"{'' if len(findings) == 1 else 's'}:",
        "",
    ]
    for f in findings:
        lines.append(f"**{f.title}** [{f.severity.value.upper()}]")
        lines.append(f.plain_english)
        lines.append(f"**Fix:** {f.recommendation}")
        lines.append("")
    return "\n".join(lines)


def main() -> None:
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()

"""Markdown renderer — detailed skill and setup reports."""

from __future__ import annotations

from safeskill import __version__
from safeskill.scanner.models import (
    Finding,
    SetupScanResult,
    Severity,
    SkillScanResult,
)
from safeskill.scanner.scoring import score_bar

SEVERITY_ORDER = (
    Severity.CRITICAL,
    Severity.HIGH,
    Severity.MEDIUM,
    Severity.LOW,
    Severity.INFO,
)


def format_skill_report(result: SkillScanResult) -> str:
    lines = [
        f"## {result.skill_name}",
        "",
        f"**Score: {result.score}/100** {result.rating.value} {score_bar(result.score)}",
        f"Scanned {result.scanned_files} files in {result.scan_duration}ms",
        "",
    ]

    if not result.findings:
        lines.append("No security issues found. This skill looks clean.")
        return "\n".join(lines)

    by_severity = {
        sev: [f for f in result.findings if f.severity == sev]
        for sev in SEVERITY_ORDER
    }
    for sev, group in by_severity.items():
        if not group:
            continue
        lines.append(f"### {sev.value.upper()} ({len(group)})")
        lines.append("")
        lines.extend(format_finding(f) for f in group)

    critical = len(by_severity[Severity.CRITICAL])
    high = len(by_severity[Severity.HIGH])

    lines.append("### What to do")
    lines.append("")
    if critical:
        lines.append(
            f"- **Remove immediately**: This skill has {critical} critical "
            f"issue{'' if critical == 1 else 's'}. Do not use it until these "
            "are resolved."
        )
    elif high:
        lines.append(
            f"- **Review carefully**: This skill has {high} high-severity "
            f"issue{'' if high == 1 else 's'}. Only use it if you trust the author."
        )
    else:
        lines.append(
            "- **Proceed with caution**: Minor issues found. Review the details above."
        )

    return "\n".join(lines)


def format_setup_report(result: SetupScanResult) -> str:
    lines = [
        "# SafeSkill Security Report",
        "",
        f"**Overall Score: {result.overall_score}/100** "
        f"{result.overall_rating.value} {score_bar(result.overall_score)}",
        "",
        result.summary,
        "",
    ]

    if result.config_findings:
        lines.append("## Configuration Issues")
        lines.append("")
        lines.extend(format_finding(f) for f in result.config_findings)

    if result.skills:
        # Worst first
        ordered = sorted(result.skills, key=lambda s: s.score)

        lines.append(f"## Skills ({len(ordered)} scanned)")
        lines.append("")
        lines.append("| Skill | Score | Rating | Issues |")
        lines.append("|-------|-------|--------|--------|")
        for s in ordered:
            lines.append(
                f"| {s.skill_name} | {s.score}/100 | {s.rating.value} "
                f"| {len(s.findings)} |"
            )
        lines.append("")

        with_findings = [s for s in ordered if s.findings]
        if with_findings:
            lines.append("## Detailed Findings")
            lines.append("")
            for s in with_findings:
                lines.extend([format_skill_report(s), "", "---", ""])
    else:
        lines.append("No skills found to scan.")

    lines.extend(
        [
            "",
            "---",
            f"*Scanned in {result.scan_duration}ms by SafeSkill v{__version__}*",
        ]
    )
    return "\n".join(lines)


def format_finding(finding: Finding) -> str:
    location = f"`{finding.file}`"
    if finding.line:
        location += f":{finding.line}"

    lines = [
        f"**{finding.title}** [{finding.severity.value.upper()}]",
        f"File: {location}",
        "",
        finding.plain_english,
        "",
    ]
    if finding.matched_content:
        lines.extend(["```", finding.matched_content, "```", ""])
    lines.append(f"**Fix:** {finding.recommendation}")
    lines.append("")
    return "\n".join(lines)

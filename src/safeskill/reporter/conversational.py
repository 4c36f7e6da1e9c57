"""Conversational renderer — chat-friendly summary of a setup scan."""

from __future__ import annotations

from safeskill.scanner.models import Rating, SetupScanResult, Severity


def format_conversational(result: SetupScanResult) -> str:
    score_line = f"**Overall Score: {result.overall_score}/100** {result.overall_rating.value}"

    if result.total_findings == 0:
        return "\n".join(
            [
                "I scanned your entire setup and everything looks clean. "
                "No security issues found.",
                "",
                score_line,
            ]
        )

    critical = sum(
        1
        for s in result.skills
        for f in s.findings
        if f.severity == Severity.CRITICAL
    ) + sum(1 for f in result.config_findings if f.severity == Severity.CRITICAL)

    lines: list[str] = []
    if critical:
        lines.append(
            f"I found **{result.total_findings} security issues** in your setup, "
            f"including **{critical} critical** ones that need immediate attention."
        )
    else:
        lines.append(
            f"I found **{result.total_findings} security issues** in your setup. "
            "Nothing critical, but there are things worth reviewing."
        )
    lines.extend(["", score_line, ""])

    red = [s for s in result.skills if s.rating == Rating.RED]
    yellow = [s for s in result.skills if s.rating == Rating.YELLOW]
    green = [s for s in result.skills if s.rating == Rating.GREEN]

    if red:
        lines.append("### Skills you should remove:")
        lines.append("")
        for s in red:
            top = next(
                (f for f in s.findings if f.severity == Severity.CRITICAL),
                s.findings[0],
            )
            lines.append(
                f"- **{s.skill_name}** (Score: {s.score}/100): {top.plain_english}"
            )
        lines.append("")

    if yellow:
        lines.append("### Skills to review:")
        lines.append("")
        for s in yellow:
            lines.append(
                f"- **{s.skill_name}** (Score: {s.score}/100): "
                f"{s.findings[0].plain_english}"
            )
        lines.append("")

    if green:
        names = ", ".join(s.skill_name for s in green)
        lines.append(f"### Clean skills: {names}")
        lines.append("")

    if result.config_findings:
        lines.append("### Configuration issues:")
        lines.append("")
        for f in result.config_findings:
            lines.append(f"- **{f.title}**: {f.plain_english}")
        lines.append("")

    lines.append("### What to do next:")
    lines.append("")
    steps: list[str] = []
    if red:
        steps.append(
            "**Remove these skills now**: " + ", ".join(s.skill_name for s in red)
        )
    if yellow:
        steps.append(
            "**Review these skills**: "
            + ", ".join(s.skill_name for s in yellow)
            + " (check if you trust their authors)"
        )
    if result.config_findings:
        steps.append("**Fix configuration issues** listed above")
    lines.extend(f"{i}. {step}" for i, step in enumerate(steps, start=1))

    return "\n".join(lines)

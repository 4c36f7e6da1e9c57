"""Rule matcher — runs catalog rules line by line over collected files."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from safeskill.scanner.models import FileEntry, Finding
from safeskill.scanner.rules.base import Rule

# Longest snippet kept on a finding
MAX_SNIPPET = 200


def match_file(file: FileEntry, rules: Sequence[Rule]) -> list[Finding]:
    """Return findings for one file, at most one per (rule, line)."""
    findings: list[Finding] = []
    lines = file.content.split("\n")

    for rule in rules:
        if not rule.applies_to(file.relative_path):
            continue

        for line_num, line in enumerate(lines, start=1):
            # First matching pattern wins; one finding per rule per line
            if rule.first_match(line) is None:
                continue

            snippet = line.strip()[:MAX_SNIPPET]
            findings.append(
                Finding(
                    rule_id=rule.id,
                    severity=rule.severity,
                    title=rule.title,
                    description=rule.description,
                    plain_english=rule.plain_english(file.relative_path, snippet),
                    file=file.relative_path,
                    line=line_num,
                    matched_content=snippet,
                    recommendation=rule.recommendation,
                )
            )

    return findings


def match_files(files: Iterable[FileEntry], rules: Sequence[Rule]) -> list[Finding]:
    """Run ``rules`` over every file, in file order."""
    findings: list[Finding] = []
    for file in files:
        findings.extend(match_file(file, rules))
    return findings

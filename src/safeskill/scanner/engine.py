"""Scan engine — runs collector, matcher and scorer over skill directories."""

from __future__ import annotations

import logging
import os
import time
from collections.abc import Sequence
from pathlib import Path

from safeskill.scanner.collector import get_skill_name, walk_directory
from safeskill.scanner.matcher import match_files
from safeskill.scanner.models import (
    Finding,
    Rating,
    SetupScanResult,
    Severity,
    SkillScanResult,
)
from safeskill.scanner.rules import ALL_RULES
from safeskill.scanner.rules.base import Rule
from safeskill.scanner.scoring import (
    compute_overall_score,
    compute_score,
    score_to_rating,
)

logger = logging.getLogger(__name__)


class ScanEngine:
    """Scans single skills, or every skill under a root, with a fixed rule set."""

    def __init__(self, rules: Sequence[Rule] | None = None) -> None:
        self._rules = tuple(rules) if rules is not None else ALL_RULES

    @property
    def rules(self) -> tuple[Rule, ...]:
        return self._rules

    def scan(self, skill_path: str | Path) -> SkillScanResult:
        """Scan one skill directory."""
        start = time.monotonic()
        files = walk_directory(skill_path)
        findings = match_files(files, self._rules)
        score = compute_score(findings)

        logger.debug(
            "Scanned %s: %d files, %d findings, score %d",
            skill_path,
            len(files),
            len(findings),
            score,
        )

        return SkillScanResult(
            skill_name=get_skill_name(skill_path),
            skill_path=str(skill_path),
            findings=tuple(findings),
            score=score,
            rating=score_to_rating(score),
            scanned_files=len(files),
            scan_duration=_elapsed_ms(start),
        )

    def scan_many(
        self,
        skills_root: str | Path,
        config_findings: Sequence[Finding] = (),
    ) -> SetupScanResult:
        """Scan every immediate subdirectory of ``skills_root`` as a skill."""
        start = time.monotonic()
        config_findings = tuple(config_findings)

        try:
            with os.scandir(skills_root) as it:
                skill_dirs = sorted(
                    Path(entry.path) for entry in it if entry.is_dir()
                )
        except OSError as e:
            logger.debug("Could not read skills directory %s: %s", skills_root, e)
            return SetupScanResult(
                overall_score=100,
                overall_rating=Rating.GREEN,
                skills=(),
                config_findings=config_findings,
                total_findings=len(config_findings),
                scan_duration=_elapsed_ms(start),
                summary=f"Could not read skills directory: {skills_root}",
            )

        skills = tuple(self.scan(path) for path in skill_dirs)
        overall = compute_overall_score((s.score for s in skills), config_findings)

        return SetupScanResult(
            overall_score=overall,
            overall_rating=score_to_rating(overall),
            skills=skills,
            config_findings=config_findings,
            total_findings=len(config_findings)
            + sum(len(s.findings) for s in skills),
            scan_duration=_elapsed_ms(start),
            summary=generate_summary(skills, config_findings),
        )


def config_only_result(config_findings: Sequence[Finding]) -> SetupScanResult:
    """Setup result for a machine with no skills directory at all."""
    config_findings = tuple(config_findings)
    overall = compute_overall_score((), config_findings)
    return SetupScanResult(
        overall_score=overall,
        overall_rating=score_to_rating(overall),
        config_findings=config_findings,
        total_findings=len(config_findings),
        summary="Could not find an MCP skills directory. "
        "Config check results are below.",
    )


def generate_summary(
    skills: Sequence[SkillScanResult],
    config_findings: Sequence[Finding],
) -> str:
    """Describe a setup scan in one or more sentences."""
    all_findings = list(config_findings)
    for s in skills:
        all_findings.extend(s.findings)

    total = len(all_findings)
    if total == 0:
        return "No security issues found. Your setup looks clean."

    critical = sum(1 for f in all_findings if f.severity == Severity.CRITICAL)
    red_skills = [s for s in skills if s.rating == Rating.RED]

    parts = [
        f"Found {total} issue{_plural(total)} across "
        f"{len(skills)} skill{_plural(len(skills))}."
    ]
    if critical:
        verb = "requires" if critical == 1 else "require"
        parts.append(
            f"{critical} critical issue{_plural(critical)} {verb} immediate attention."
        )
    if red_skills:
        names = ", ".join(s.skill_name for s in red_skills)
        n_red = len(red_skills)
        parts.append(f"{n_red} skill{_plural(n_red)} rated RED: {names}.")

    return " ".join(parts)


_DEFAULT_ENGINE = ScanEngine()


def scan_skill(skill_path: str | Path) -> SkillScanResult:
    """Scan one skill directory with the built-in catalog."""
    return _DEFAULT_ENGINE.scan(skill_path)


def scan_setup(
    skills_root: str | Path,
    config_findings: Sequence[Finding] = (),
) -> SetupScanResult:
    """Scan every skill under ``skills_root`` with the built-in catalog."""
    return _DEFAULT_ENGINE.scan_many(skills_root, config_findings)


def _plural(n: int) -> str:
    return "" if n == 1 else "s"


def _elapsed_ms(start: float) -> int:
    return int((time.monotonic() - start) * 1000)

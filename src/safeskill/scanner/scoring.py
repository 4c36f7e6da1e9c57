"""Scoring — reduces findings to a 0-100 score and a rating tier."""

from __future__ import annotations

import math
from collections import Counter
from collections.abc import Iterable, Sequence

from safeskill.scanner.models import Finding, Rating, Severity

# Per-rule weight for skill findings
SEVERITY_WEIGHTS: dict[Severity, int] = {
    Severity.CRITICAL: 25,
    Severity.HIGH: 15,
    Severity.MEDIUM: 8,
    Severity.LOW: 3,
    Severity.INFO: 0,
}

# Flat per-finding penalty for configuration findings
CONFIG_PENALTIES: dict[Severity, int] = {
    Severity.CRITICAL: 20,
    Severity.HIGH: 10,
    Severity.MEDIUM: 5,
    Severity.LOW: 2,
    Severity.INFO: 0,
}

# Extra occurrences of one rule that still add to the deduction
MAX_EXTRA_OCCURRENCES = 5
REPEAT_FACTOR = 0.3

GREEN_THRESHOLD = 80
YELLOW_THRESHOLD = 50


def rule_deduction(severity: Severity, count: int) -> float:
    """Deduction for ``count`` findings of a single rule.

    The first occurrence costs the full weight, each further one 30% of it,
    capped at five extra occurrences.
    """
    weight = SEVERITY_WEIGHTS[severity]
    return weight + min(count - 1, MAX_EXTRA_OCCURRENCES) * (weight * REPEAT_FACTOR)


def compute_score(findings: Sequence[Finding]) -> int:
    """Score one skill's findings."""
    if not findings:
        return 100

    counts: Counter[str] = Counter()
    severities: dict[str, Severity] = {}
    for f in findings:
        counts[f.rule_id] += 1
        severities.setdefault(f.rule_id, f.severity)

    total = sum(rule_deduction(severities[rid], n) for rid, n in counts.items())
    return clamp_score(100 - total)


def compute_overall_score(
    skill_scores: Iterable[int],
    config_findings: Iterable[Finding],
) -> int:
    """Combine per-skill scores and configuration findings into one score."""
    scores = list(skill_scores)
    score = sum(scores) / len(scores) if scores else 100.0

    for f in config_findings:
        score -= CONFIG_PENALTIES[f.severity]

    return clamp_score(score)


def clamp_score(value: float) -> int:
    """Round half up and clamp to [0, 100]."""
    return max(0, min(100, math.floor(value + 0.5)))


def score_to_rating(score: int) -> Rating:
    if score >= GREEN_THRESHOLD:
        return Rating.GREEN
    if score >= YELLOW_THRESHOLD:
        return Rating.YELLOW
    return Rating.RED


def score_bar(score: int, width: int = 20) -> str:
    """Render a score as a fixed-width ``[####----]`` bar."""
    filled = max(0, min(width, math.floor(score / (100 / width) + 0.5)))
    return "[" + "#" * filled + "-" * (width - filled) + "]"

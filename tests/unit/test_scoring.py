"""Tests for scoring and rating."""

from __future__ import annotations

import pytest

from safeskill.scanner.models import Finding, Rating, Severity
from safeskill.scanner.scoring import (
    clamp_score,
    compute_overall_score,
    compute_score,
    rule_deduction,
    score_bar,
    score_to_rating,
)


def _finding(rule_id: str, severity: Severity, line: int = 1) -> Finding:
    return Finding(
        rule_id=rule_id,
        severity=severity,
        title="t",
        description="d",
        plain_english="p",
        file="index.js",
        recommendation="r",
        line=line,
    )


class TestComputeScore:
    def test_no_findings(self):
        assert compute_score([]) == 100

    def test_single_critical(self):
        assert compute_score([_finding("EXEC-001", Severity.CRITICAL)]) == 75

    def test_critical_and_high(self):
        findings = [
            _finding("FS-001", Severity.CRITICAL),
            _finding("EXEC-002", Severity.HIGH),
        ]
        assert compute_score(findings) == 60

    def test_repeats_are_capped(self):
        six = [_finding("NET-004", Severity.MEDIUM, line=i) for i in range(6)]
        # 8 + 5 * 2.4 = 20
        assert compute_score(six) == 80
        many = [_finding("NET-004", Severity.MEDIUM, line=i) for i in range(50)]
        assert compute_score(many) == 80

    def test_repeat_rounding_half_up(self):
        # 15 + 1 * 4.5 = 19.5 -> 80.5 -> 81
        two = [_finding("EXEC-002", Severity.HIGH, line=i) for i in range(2)]
        assert compute_score(two) == 81

    def test_info_costs_nothing(self):
        assert compute_score([_finding("X-001", Severity.INFO)]) == 100

    def test_floors_at_zero(self):
        findings = [_finding(f"R-{i:03d}", Severity.CRITICAL) for i in range(10)]
        assert compute_score(findings) == 0

    def test_more_findings_never_raise_score(self):
        base = [_finding("EXEC-001", Severity.CRITICAL)]
        previous = compute_score(base)
        for i in range(1, 8):
            base.append(_finding("EXEC-001", Severity.CRITICAL, line=i + 1))
            current = compute_score(base)
            assert current <= previous
            previous = current


class TestRuleDeduction:
    @pytest.mark.parametrize(
        ("severity", "count", "expected"),
        [
            (Severity.CRITICAL, 1, 25),
            (Severity.CRITICAL, 2, 32.5),
            (Severity.LOW, 6, 7.5),
            (Severity.LOW, 20, 7.5),
            (Severity.INFO, 3, 0),
        ],
    )
    def test_values(self, severity, count, expected):
        assert rule_deduction(severity, count) == pytest.approx(expected)


class TestOverallScore:
    def test_mean_of_skills(self):
        assert compute_overall_score([100, 60], []) == 80

    def test_no_skills(self):
        assert compute_overall_score([], []) == 100

    def test_config_penalties(self):
        configs = [
            _finding("CFG-001", Severity.CRITICAL),
            _finding("CFG-002", Severity.HIGH),
            _finding("CFG-006", Severity.MEDIUM),
            _finding("CFG-005", Severity.LOW),
        ]
        assert compute_overall_score([100], configs) == 63

    def test_mean_then_penalty(self):
        configs = [_finding("CFG-001", Severity.CRITICAL)]
        assert compute_overall_score([100, 60], configs) == 60

    def test_clamped(self):
        configs = [_finding("CFG-001", Severity.CRITICAL)] * 10
        assert compute_overall_score([100], configs) == 0

    def test_half_up_mean(self):
        assert compute_overall_score([75, 76], []) == 76


class TestRating:
    @pytest.mark.parametrize(
        ("score", "rating"),
        [
            (100, Rating.GREEN),
            (80, Rating.GREEN),
            (79, Rating.YELLOW),
            (50, Rating.YELLOW),
            (49, Rating.RED),
            (0, Rating.RED),
        ],
    )
    def test_thresholds(self, score, rating):
        assert score_to_rating(score) == rating


def test_clamp_score():
    assert clamp_score(-3.2) == 0
    assert clamp_score(104) == 100
    assert clamp_score(62.5) == 63
    assert clamp_score(62.4) == 62


def test_score_bar():
    assert score_bar(100) == "[" + "#" * 20 + "]"
    assert score_bar(0) == "[" + "-" * 20 + "]"
    assert score_bar(50) == "[" + "#" * 10 + "-" * 10 + "]"
    assert len(score_bar(37, width=10)) == 12

"""Scanner data models — files, findings and scan results."""

from __future__ import annotations

import enum
from dataclasses import dataclass


class Severity(enum.Enum):
    """Finding severity level."""

    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    INFO = "info"


class Rating(enum.Enum):
    """Three-tier classification derived from a score."""

    GREEN = "GREEN"
    YELLOW = "YELLOW"
    RED = "RED"


@dataclass(frozen=True)
class FileEntry:
    """A text file collected under a skill root."""

    path: str
    relative_path: str
    content: str
    size: int


@dataclass(frozen=True)
class Finding:
    """A single rule match in one file, at one line."""

    rule_id: str
    severity: Severity
    title: str
    description: str
    plain_english: str
    file: str
    recommendation: str
    line: int | None = None
    matched_content: str | None = None

    def to_dict(self) -> dict:
        data = {
            "ruleId": self.rule_id,
            "severity": self.severity.value,
            "title": self.title,
            "description": self.description,
            "plainEnglish": self.plain_english,
            "file": self.file,
        }
        if self.line is not None:
            data["line"] = self.line
        if self.matched_content is not None:
            data["matchedContent"] = self.matched_content
        data["recommendation"] = self.recommendation
        return data


@dataclass(frozen=True)
class SkillScanResult:
    """Result of scanning one skill directory."""

    skill_name: str
    skill_path: str
    findings: tuple[Finding, ...] = ()
    score: int = 100
    rating: Rating = Rating.GREEN
    scanned_files: int = 0
    scan_duration: int = 0

    def to_dict(self) -> dict:
        return {
            "skillName": self.skill_name,
            "skillPath": self.skill_path,
            "findings": [f.to_dict() for f in self.findings],
            "score": self.score,
            "rating": self.rating.value,
            "scannedFiles": self.scanned_files,
            "scanDuration": self.scan_duration,
        }


@dataclass(frozen=True)
class SetupScanResult:
    """Result of scanning every skill under a root plus config findings."""

    overall_score: int
    overall_rating: Rating
    skills: tuple[SkillScanResult, ...] = ()
    config_findings: tuple[Finding, ...] = ()
    total_findings: int = 0
    scan_duration: int = 0
    summary: str = ""

    def to_dict(self) -> dict:
        return {
            "overallScore": self.overall_score,
            "overallRating": self.overall_rating.value,
            "skills": [s.to_dict() for s in self.skills],
            "configFindings": [f.to_dict() for f in self.config_findings],
            "totalFindings": self.total_findings,
            "scanDuration": self.scan_duration,
            "summary": self.summary,
        }

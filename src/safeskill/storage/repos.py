"""Repository classes for async CRUD operations on SQLite."""

from __future__ import annotations

import time
import uuid

import aiosqlite

from safeskill.scanner.models import Finding, Severity, SkillScanResult


class ScanRepo:
    """CRUD for scan results and findings."""

    def __init__(self, db: aiosqlite.Connection) -> None:
        self._db = db

    async def save_result(self, result: SkillScanResult, target: str = "") -> str:
        scan_id = uuid.uuid4().hex[:12]
        await self._db.execute(
            "INSERT INTO scan_results "
            "(id, target, skill_name, score, rating, scanned_files, "
            "scan_duration, timestamp) "
            "VALUES (?, ?, ?, ?, ?, ?, ?, ?)",
            (
                scan_id,
                target or result.skill_name,
                result.skill_name,
                result.score,
                result.rating.value,
                result.scanned_files,
                result.scan_duration,
                time.time(),
            ),
        )

        await self._db.executemany(
            "INSERT INTO scan_findings "
            "(scan_id, rule_id, severity, title, description, plain_english, "
            "file, line, matched_content, recommendation) "
            "VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)",
            [
                (
                    scan_id,
                    f.rule_id,
                    f.severity.value,
                    f.title,
                    f.description,
                    f.plain_english,
                    f.file,
                    f.line,
                    f.matched_content,
                    f.recommendation,
                )
                for f in result.findings
            ],
        )

        await self._db.commit()
        return scan_id

    async def get(self, scan_id: str) -> dict | None:
        cursor = await self._db.execute(
            "SELECT * FROM scan_results WHERE id = ?", (scan_id,)
        )
        row = await cursor.fetchone()
        if not row:
            return None

        result = _row_to_scan(row)
        cursor = await self._db.execute(
            "SELECT * FROM scan_findings WHERE scan_id = ? ORDER BY id",
            (scan_id,),
        )
        result["findings"] = [_row_to_finding(r).to_dict() async for r in cursor]
        return result

    async def list_all(self, limit: int = 50, offset: int = 0) -> list[dict]:
        cursor = await self._db.execute(
            "SELECT * FROM scan_results ORDER BY timestamp DESC LIMIT ? OFFSET ?",
            (limit, offset),
        )
        return [_row_to_scan(row) async for row in cursor]


def _row_to_scan(row: aiosqlite.Row) -> dict:
    """Scan summary in the same camelCase shape as scan responses."""
    return {
        "id": row["id"],
        "target": row["target"],
        "skillName": row["skill_name"],
        "score": row["score"],
        "rating": row["rating"],
        "scannedFiles": row["scanned_files"],
        "scanDuration": row["scan_duration"],
        "timestamp": row["timestamp"],
    }

def _row_to_finding(row: aiosqlite.Row) -> Finding:
    return Finding(
        rule_id=row["rule_id"],
        severity=Severity(row["severity"]),
        title=row["title"],
        description=row["description"],
        plain_english=row["plain_english"],
        file=row["file"],
        recommendation=row["recommendation"],
        line=row["line"],
        matched_content=row["matched_content"],
    )

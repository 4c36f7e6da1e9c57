"""Bulk registry scan — download and scan many packages in parallel."""

from __future__ import annotations

import logging
import math
import statistics
import time
from collections import Counter
from collections.abc import Callable, Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from pathlib import Path

import requests

from safeskill.fetch import FetchError, download_package, work_area
from safeskill.scanner.engine import scan_skill
from safeskill.scanner.models import SkillScanResult, Severity

logger = logging.getLogger(__name__)

NPM_SEARCH_URL = "https://registry.npmjs.org/-/v1/search"
SEARCH_PAGE_SIZE = 250

Downloader = Callable[[str, Path], Path]


@dataclass(frozen=True)
class PackageInfo:
    """Registry metadata for one package."""

    name: str
    version: str = ""
    description: str = ""
    publisher: str | None = None
    date: str | None = None

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "version": self.version,
            "description": self.description,
            "publisher": self.publisher,
            "date": self.date,
        }


@dataclass
class BulkEntry:
    """Outcome of scanning one package."""

    package: PackageInfo
    scan: SkillScanResult | None = None
    error: str | None = None
    downloaded_at: str = field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )

    def to_dict(self) -> dict:
        data = {
            "package": self.package.to_dict(),
            "scan": self.scan.to_dict() if self.scan else None,
            "downloadedAt": self.downloaded_at,
        }
        if self.error:
            data["error"] = self.error
        return data


def search_npm(
    query: str,
    session: requests.Session | None = None,
    timeout: float = 30.0,
) -> list[PackageInfo]:
    """Page through the npm search API for ``query``."""
    session = session or requests.Session()
    results: list[PackageInfo] = []
    offset = 0

    while True:
        try:
            resp = session.get(
                NPM_SEARCH_URL,
                params={"text": query, "size": SEARCH_PAGE_SIZE, "from": offset},
                timeout=timeout,
            )
            resp.raise_for_status()
            data = resp.json()
        except (requests.RequestException, ValueError) as e:
            logger.warning("npm search %r stopped at offset %d: %s", query, offset, e)
            break

        objects = data.get("objects", [])
        if not objects:
            break

        for obj in objects:
            pkg = obj.get("package") or {}
            if not pkg.get("name"):
                continue
            results.append(
                PackageInfo(
                    name=pkg["name"],
                    version=pkg.get("version", ""),
                    description=pkg.get("description") or "",
                    publisher=(pkg.get("publisher") or {}).get("username"),
                    date=pkg.get("date"),
                )
            )

        offset += len(objects)
        if offset >= data.get("total", 0) or len(objects) < SEARCH_PAGE_SIZE:
            break

    return results


def is_mcp_related(pkg: PackageInfo) -> bool:
    text = f"{pkg.name} {pkg.description}".lower()
    return (
        "mcp" in text
        or "model context protocol" in text
        or "model-context-protocol" in text
    )


def collect_packages(
    queries: Iterable[str],
    session: requests.Session | None = None,
) -> list[PackageInfo]:
    """Search every query and keep unique MCP-related packages, first seen wins."""
    session = session or requests.Session()
    found: dict[str, PackageInfo] = {}
    for query in queries:
        for pkg in search_npm(query, session=session):
            if pkg.name not in found and is_mcp_related(pkg):
                found[pkg.name] = pkg
    return list(found.values())


def scan_package(
    pkg: PackageInfo,
    downloader: Downloader = download_package,
) -> BulkEntry:
    """Download ``pkg`` into its own work area, scan it, and clean up.

    Failures are recorded on the entry; one broken package never aborts
    the batch.
    """
    entry = BulkEntry(package=pkg)
    safe_name = pkg.name.replace("@", "_").replace("/", "_")

    try:
        with work_area(prefix=f"safeskill-{safe_name}-") as work_dir:
            try:
                package_dir = downloader(pkg.name, work_dir)
            except FetchError as e:
                logger.info("Download failed for %s: %s", pkg.name, e)
                entry.error = "download_failed"
                return entry

            result = scan_skill(package_dir)
    except Exception as e:
        logger.warning("Scan failed for %s: %s", pkg.name, e)
        entry.error = f"scan_error: {e}"
        return entry

    entry.scan = replace(result, skill_name=pkg.name)
    return entry


def run_bulk_scan(
    packages: Sequence[PackageInfo],
    workers: int = 5,
    downloader: Downloader = download_package,
    on_result: Callable[[int, BulkEntry], None] | None = None,
) -> list[BulkEntry]:
    """Scan ``packages`` with at most ``workers`` in flight, preserving order."""
    with ThreadPoolExecutor(max_workers=max(1, workers)) as pool:
        futures = [pool.submit(scan_package, pkg, downloader) for pkg in packages]
        entries: list[BulkEntry] = []
        for index, future in enumerate(futures):
            entry = future.result()
            entries.append(entry)
            if on_result:
                on_result(index, entry)
    return entries


def summarize(entries: Sequence[BulkEntry], duration_ms: int = 0) -> dict:
    """Aggregate statistics over bulk results, in the published JSON shape."""
    scanned = [e.scan for e in entries if e.scan is not None]
    failed = len(entries) - len(scanned)

    by_rating = {"GREEN": 0, "YELLOW": 0, "RED": 0}
    by_severity = {s.value: 0 for s in Severity}
    rule_counts: Counter[str] = Counter()
    rule_titles: dict[str, str] = {}

    for scan in scanned:
        by_rating[scan.rating.value] += 1
        for f in scan.findings:
            by_severity[f.severity.value] += 1
            rule_counts[f.rule_id] += 1
            rule_titles.setdefault(f.rule_id, f.title)

    scores = sorted(s.score for s in scanned)
    average = math.floor(statistics.fmean(scores) + 0.5) if scores else 0
    median = scores[len(scores) // 2] if scores else 0

    top_rules = [
        {"ruleId": rid, "title": rule_titles[rid], "count": n}
        for rid, n in rule_counts.most_common(20)
    ]
    worst = sorted((s for s in scanned if s.score < 100), key=lambda s: s.score)[:30]

    return {
        "metadata": {
            "scannedAt": datetime.now(timezone.utc).isoformat(),
            "totalPackages": len(entries),
            "totalScanned": len(scanned),
            "totalFailed": failed,
            "totalFindings": sum(len(s.findings) for s in scanned),
            "scanDuration": duration_ms,
        },
        "summary": {
            "byRating": by_rating,
            "bySeverity": by_severity,
            "topRules": top_rules,
            "averageScore": average,
            "medianScore": median,
            "worstPackages": [
                {"name": s.skill_name, "score": s.score, "findings": len(s.findings)}
                for s in worst
            ],
        },
        "results": [e.to_dict() for e in entries],
    }


def timed_bulk_scan(
    packages: Sequence[PackageInfo],
    workers: int = 5,
    downloader: Downloader = download_package,
    on_result: Callable[[int, BulkEntry], None] | None = None,
) -> dict:
    start = time.monotonic()
    entries = run_bulk_scan(packages, workers, downloader, on_result)
    return summarize(entries, int((time.monotonic() - start) * 1000))
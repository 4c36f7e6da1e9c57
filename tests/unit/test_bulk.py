"""Tests for the bulk registry scanner."""

from __future__ import annotations

import threading
import time
from pathlib import Path

import requests

from safeskill.bulk import (
    BulkEntry,
    PackageInfo,
    collect_packages,
    is_mcp_related,
    run_bulk_scan,
    scan_package,
    search_npm,
    summarize,
    timed_bulk_scan,
)
from safeskill.fetch import DownloadError

_SOURCES = {
    "evil-mcp": "eval(payload)\n",
    "clean-mcp": "module.exports = {};\n",
    "spawn-mcp": "require('child_process')\n",
}


class FakeDownloader:
    """Writes canned sources into the work dir instead of calling npm."""

    def __init__(self, sources=None, fail=(), broken=(), delay=0.0):
        self.sources = sources or _SOURCES
        self.fail = set(fail)
        self.broken = set(broken)
        self.delay = delay
        self.work_dirs: list[Path] = []
        self.active = 0
        self.max_active = 0
        self._lock = threading.Lock()

    def __call__(self, name: str, work_dir: Path) -> Path:
        with self._lock:
            self.work_dirs.append(work_dir)
            self.active += 1
            self.max_active = max(self.max_active, self.active)
        try:
            if self.delay:
                time.sleep(self.delay)
            if name in self.broken:
                raise PermissionError("npm not executable")
            if name in self.fail:
                raise DownloadError(f"no such package {name}")
            package_dir = work_dir / "package"
            package_dir.mkdir()
            (package_dir / "index.js").write_text(self.sources.get(name, ""))
            return package_dir
        finally:
            with self._lock:
                self.active -= 1


class FakeResponse:
    def __init__(self, payload, status=200):
        self._payload = payload
        self.status_code = status

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self):
        return self._payload


class FakeSession:
    def __init__(self, pages):
        self.pages = list(pages)
        self.calls: list[dict] = []

    def get(self, url, params=None, timeout=None):
        self.calls.append(dict(params))
        return self.pages.pop(0)


def _obj(name, description="", publisher="alice"):
    return {
        "package": {
            "name": name,
            "version": "1.0.0",
            "description": description,
            "publisher": {"username": publisher},
            "date": "2025-01-01T00:00:00.000Z",
        }
    }


class TestScanPackage:
    def test_scans_and_cleans_up(self):
        downloader = FakeDownloader()
        entry = scan_package(PackageInfo(name="evil-mcp"), downloader)

        assert entry.error is None
        assert entry.scan.skill_name == "evil-mcp"
        assert [f.rule_id for f in entry.scan.findings] == ["EXEC-001"]
        assert entry.scan.score == 75
        assert not downloader.work_dirs[0].exists()

    def test_download_failure_cleans_up(self):
        downloader = FakeDownloader(fail={"gone-mcp"})
        entry = scan_package(PackageInfo(name="gone-mcp"), downloader)

        assert entry.scan is None
        assert entry.error == "download_failed"
        assert not downloader.work_dirs[0].exists()

    def test_scoped_names_get_distinct_dirs(self):
        downloader = FakeDownloader()
        scan_package(PackageInfo(name="@acme/tool-mcp"), downloader)
        scan_package(PackageInfo(name="@acme/tool-mcp"), downloader)
        first, second = downloader.work_dirs
        assert first != second
        assert "@" not in first.name and "/" not in first.name


class TestRunBulkScan:
    def test_preserves_order_and_reports_progress(self):
        names = ["evil-mcp", "clean-mcp", "spawn-mcp", "gone-mcp"]
        seen: list[tuple[int, str]] = []
        entries = run_bulk_scan(
            [PackageInfo(name=n) for n in names],
            workers=3,
            downloader=FakeDownloader(fail={"gone-mcp"}),
            on_result=lambda i, e: seen.append((i, e.package.name)),
        )
        assert [e.package.name for e in entries] == names
        assert seen == list(enumerate(names))
        assert entries[3].error == "download_failed"

    def test_worker_bound(self):
        downloader = FakeDownloader(delay=0.05)
        run_bulk_scan(
            [PackageInfo(name=f"pkg-{i}-mcp") for i in range(8)],
            workers=2,
            downloader=downloader,
        )
        assert downloader.max_active <= 2
        assert all(not d.exists() for d in downloader.work_dirs)

    def test_unexpected_error_does_not_abort_batch(self):
        downloader = FakeDownloader(broken={"locked-mcp"})
        entries = run_bulk_scan(
            [PackageInfo(name="evil-mcp"), PackageInfo(name="locked-mcp")],
            downloader=downloader,
        )
        assert [e.package.name for e in entries] == ["evil-mcp", "locked-mcp"]
        assert entries[0].scan.score == 75
        assert entries[1].scan is None
        assert entries[1].error == "scan_error: npm not executable"
        assert all(not d.exists() for d in downloader.work_dirs)

    def test_empty(self):
        assert run_bulk_scan([], downloader=FakeDownloader()) == []


class TestSummarize:
    def test_aggregates(self):
        names = ["evil-mcp", "clean-mcp", "spawn-mcp", "gone-mcp"]
        entries = run_bulk_scan(
            [PackageInfo(name=n) for n in names],
            downloader=FakeDownloader(fail={"gone-mcp"}),
        )
        report = summarize(entries, duration_ms=1234)

        meta = report["metadata"]
        assert meta["totalPackages"] == 4
        assert meta["totalScanned"] == 3
        assert meta["totalFailed"] == 1
        assert meta["totalFindings"] == 2
        assert meta["scanDuration"] == 1234

        summary = report["summary"]
        assert summary["byRating"] == {"GREEN": 2, "YELLOW": 1, "RED": 0}
        assert summary["bySeverity"]["critical"] == 1
        assert summary["bySeverity"]["high"] == 1
        # (75 + 100 + 85) / 3 = 86.67
        assert summary["averageScore"] == 87
        assert summary["medianScore"] == 85
        assert [w["name"] for w in summary["worstPackages"]] == ["evil-mcp", "spawn-mcp"]
        assert {r["ruleId"] for r in summary["topRules"]} == {"EXEC-001", "EXEC-002"}

        results = report["results"]
        assert results[3]["error"] == "download_failed"
        assert results[3]["scan"] is None
        assert results[0]["scan"]["skillName"] == "evil-mcp"

    def test_no_entries(self):
        report = summarize([])
        assert report["summary"]["averageScore"] == 0
        assert report["summary"]["medianScore"] == 0
        assert report["results"] == []

    def test_timed_bulk_scan(self):
        report = timed_bulk_scan(
            [PackageInfo(name="clean-mcp")], downloader=FakeDownloader()
        )
        assert report["metadata"]["totalScanned"] == 1
        assert report["metadata"]["scanDuration"] >= 0


class TestRegistrySearch:
    def test_pages_until_total(self):
        session = FakeSession(
            [
                FakeResponse({"objects": [_obj(f"p{i}-mcp") for i in range(250)], "total": 260}),
                FakeResponse({"objects": [_obj(f"q{i}-mcp") for i in range(10)], "total": 260}),
            ]
        )
        results = search_npm("mcp", session=session)
        assert len(results) == 260
        assert [c["from"] for c in session.calls] == [0, 250]
        assert results[0].publisher == "alice"
        assert results[0].version == "1.0.0"

    def test_http_error_returns_partial(self):
        session = FakeSession(
            [
                FakeResponse({"objects": [_obj(f"p{i}") for i in range(250)], "total": 600}),
                FakeResponse({}, status=503),
            ]
        )
        assert len(search_npm("mcp", session=session)) == 250

    def test_collect_dedupes_and_filters(self):
        session = FakeSession(
            [
                FakeResponse({"objects": [_obj("a-mcp"), _obj("left-pad")], "total": 2}),
                FakeResponse(
                    {
                        "objects": [
                            _obj("a-mcp", description="dupe"),
                            _obj("weather", description="A Model Context Protocol server"),
                        ],
                        "total": 2,
                    }
                ),
            ]
        )
        packages = collect_packages(["q1", "q2"], session=session)
        assert [p.name for p in packages] == ["a-mcp", "weather"]
        assert packages[0].description == ""

    def test_skips_nameless_objects(self):
        session = FakeSession(
            [
                FakeResponse(
                    {
                        "objects": [{"package": {"version": "1.0.0"}}, {}, _obj("ok-mcp")],
                        "total": 3,
                    }
                )
            ]
        )
        assert [p.name for p in search_npm("mcp", session=session)] == ["ok-mcp"]

    def test_is_mcp_related(self):
        assert is_mcp_related(PackageInfo(name="server-mcp"))
        assert is_mcp_related(PackageInfo(name="x", description="model-context-protocol tools"))
        assert not is_mcp_related(PackageInfo(name="left-pad"))


def test_entry_serialization():
    entry = BulkEntry(package=PackageInfo(name="x"), error="download_failed")
    data = entry.to_dict()
    assert data["package"]["name"] == "x"
    assert data["scan"] is None
    assert data["error"] == "download_failed"
    assert "downloadedAt" in data

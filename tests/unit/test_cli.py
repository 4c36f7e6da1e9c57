"""Tests for CLI commands using Click's CliRunner."""

from __future__ import annotations

import json
import shutil

from click.testing import CliRunner

from safeskill.cli import main


def _runner() -> CliRunner:
    return CliRunner()


def test_main_help():
    result = _runner().invoke(main, ["--help"])
    assert result.exit_code == 0
    assert "SafeSkill" in result.output
    for command in ("setup", "scan", "config", "bulk", "server"):
        assert command in result.output


def test_main_version():
    result = _runner().invoke(main, ["--version"])
    assert result.exit_code == 0
    assert "0.1.0" in result.output


class TestScan:
    def test_clean_skill_exits_zero(self, clean_skill):
        result = _runner().invoke(main, ["scan", str(clean_skill)])
        assert result.exit_code == 0
        assert "## clean-skill" in result.output
        assert "looks clean" in result.output

    def test_yellow_exits_one(self, make_skill):
        skill = make_skill({"index.js": "eval(userInput)\n"})
        result = _runner().invoke(main, ["scan", str(skill), "--format", "json"])
        assert result.exit_code == 1
        data = json.loads(result.stdout)
        assert data["score"] == 75
        assert data["rating"] == "YELLOW"

    def test_red_exits_two(self, malicious_skill):
        result = _runner().invoke(main, ["scan", str(malicious_skill)])
        assert result.exit_code == 2
        assert "### CRITICAL" in result.output

    def test_missing_path(self, tmp_path):
        result = _runner().invoke(main, ["scan", str(tmp_path / "nope")])
        assert result.exit_code == 1

    def test_bad_format_rejected(self, clean_skill):
        result = _runner().invoke(main, ["scan", str(clean_skill), "--format", "xml"])
        assert result.exit_code == 2
        assert "Invalid value" in result.output


class TestSetup:
    def test_nothing_found(self, isolated_home):
        result = _runner().invoke(main, ["setup"])
        assert result.exit_code == 0
        assert "No MCP skills directory found" in result.output

    def test_default_command_is_setup(self, isolated_home):
        result = _runner().invoke(main, [])
        assert result.exit_code == 0
        assert "No MCP skills directory found" in result.output

    def test_explicit_skills_dir(self, isolated_home, tmp_path, fixtures_dir):
        skills = tmp_path / "skills"
        shutil.copytree(fixtures_dir / "clean-skill", skills / "clean-skill")
        result = _runner().invoke(
            main, ["setup", "--skills-dir", str(skills), "--format", "json"]
        )
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["overallScore"] == 100
        assert [s["skillName"] for s in data["skills"]] == ["clean-skill"]

    def test_auto_detected_dir_with_red_skill(self, isolated_home, fixtures_dir):
        skills = isolated_home / ".mcp" / "skills"
        shutil.copytree(fixtures_dir / "malicious-skill", skills / "malicious-skill")
        result = _runner().invoke(main, ["setup"])
        assert result.exit_code == 2
        assert "# SafeSkill Security Report" in result.output

    def test_config_issues_without_skills(self, isolated_home, fixtures_dir):
        shutil.copy(fixtures_dir / "mcp_config.json", isolated_home / ".mcp.json")
        result = _runner().invoke(main, ["setup", "--format", "json"])
        data = json.loads(result.stdout)
        assert data["skills"] == []
        assert len(data["configFindings"]) == 5
        # 100 - 20 - 10 - 5 - 5 - 10
        assert data["overallScore"] == 50
        assert result.exit_code == 1

    def test_conversational_format(self, isolated_home, tmp_path, fixtures_dir):
        skills = tmp_path / "skills"
        shutil.copytree(fixtures_dir / "clean-skill", skills / "clean-skill")
        result = _runner().invoke(
            main, ["setup", "--skills-dir", str(skills), "--format", "conversational"]
        )
        assert result.exit_code == 0
        assert "everything looks clean" in result.output


class TestConfig:
    def test_clean(self, isolated_home):
        result = _runner().invoke(main, ["config"])
        assert result.exit_code == 0
        assert "looks secure" in result.output

    def test_critical_exits_two(self, isolated_home, fixtures_dir):
        shutil.copy(fixtures_dir / "mcp_config.json", isolated_home / ".mcp.json")
        result = _runner().invoke(main, ["config"])
        assert result.exit_code == 2
        assert "Found 5 configuration issues" in result.output

    def test_non_critical_exits_one(self, isolated_home):
        (isolated_home / ".mcp.json").write_text("{oops")
        result = _runner().invoke(main, ["config"])
        assert result.exit_code == 1


class TestBulk:
    def test_writes_report(self, isolated_home, tmp_path, monkeypatch):
        from safeskill.bulk import PackageInfo
        from safeskill.cli import bulk as bulk_cli

        monkeypatch.setattr(
            bulk_cli,
            "collect_packages",
            lambda queries: [PackageInfo(name="a-mcp"), PackageInfo(name="b-mcp")],
        )

        def _fake_scan(packages, workers, on_result):
            assert workers == 2
            return {
                "metadata": {
                    "totalScanned": 1,
                    "totalPackages": len(packages),
                    "totalFailed": 0,
                    "totalFindings": 0,
                    "scanDuration": 10,
                },
                "summary": {"averageScore": 100, "medianScore": 100, "topRules": []},
                "results": [],
            }

        monkeypatch.setattr(bulk_cli, "timed_bulk_scan", _fake_scan)
        output = tmp_path / "out.json"
        result = _runner().invoke(
            main, ["bulk", "mcp", "-o", str(output), "-w", "2", "--limit", "1"]
        )
        assert result.exit_code == 0, result.output
        assert json.loads(output.read_text())["metadata"]["totalPackages"] == 1


def test_server_help():
    result = _runner().invoke(main, ["server", "--help"])
    assert result.exit_code == 0
    assert "--port" in result.output

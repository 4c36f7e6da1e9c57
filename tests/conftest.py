"""Shared test fixtures."""

from __future__ import annotations

import shutil
from collections.abc import Callable
from pathlib import Path

import pytest


@pytest.fixture
def fixtures_dir() -> Path:
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def clean_skill(fixtures_dir: Path, tmp_path: Path) -> Path:
    return Path(shutil.copytree(fixtures_dir / "clean-skill", tmp_path / "clean-skill"))


@pytest.fixture
def malicious_skill(fixtures_dir: Path, tmp_path: Path) -> Path:
    return Path(
        shutil.copytree(fixtures_dir / "malicious-skill", tmp_path / "malicious-skill")
    )


@pytest.fixture
def make_skill(tmp_path: Path) -> Callable[..., Path]:
    """Create a skill directory from a ``{relative_path: content}`` mapping."""

    def _make(files: dict[str, str], name: str = "skill", root: Path | None = None) -> Path:
        skill_dir = (root or tmp_path) / name
        skill_dir.mkdir(parents=True, exist_ok=True)
        for rel, content in files.items():
            path = skill_dir / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        return skill_dir

    return _make


@pytest.fixture
def isolated_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point HOME and XDG dirs at an empty temporary tree."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(home / ".config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(home / ".local" / "share"))
    monkeypatch.delenv("SAFESKILL_SKILLS_DIR", raising=False)
    monkeypatch.delenv("SAFESKILL_BULK_WORKERS", raising=False)
    monkeypatch.delenv("SAFESKILL_WEB_PORT", raising=False)
    return home

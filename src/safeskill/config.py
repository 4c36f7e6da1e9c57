"""Global configuration — XDG paths, env vars, optional YAML file, defaults."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

# Where MCP clients commonly install skills, relative to home
DEFAULT_SKILLS_DIRS = (
    Path(".mcp") / "skills",
    Path(".mcp") / "servers",
    Path(".config") / "mcp" / "skills",
    Path(".claude") / "mcp",
    Path("Library") / "Application Support" / "Claude" / "mcp",
)

DEFAULT_BULK_QUERIES = (
    "mcp-server",
    "mcp+server",
    "keywords:mcp",
    "keywords:model-context-protocol",
    "mcp+tool",
    "@modelcontextprotocol",
)


def _default_data_dir() -> Path:
    xdg = os.environ.get("XDG_DATA_HOME")
    if xdg:
        return Path(xdg) / "safeskill"
    return Path.home() / ".local" / "share" / "safeskill"


def _default_config_dir() -> Path:
    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "safeskill"
    return Path.home() / ".config" / "safeskill"


@dataclass
class SafeSkillConfig:
    """Application-wide configuration."""

    home_dir: Path = field(default_factory=Path.home)
    data_dir: Path = field(default_factory=_default_data_dir)
    config_dir: Path = field(default_factory=_default_config_dir)
    skills_dirs: list[Path] = field(default_factory=list)
    bulk_workers: int = 5
    bulk_queries: tuple[str, ...] = DEFAULT_BULK_QUERIES
    download_timeout: float = 30.0
    web_host: str = "127.0.0.1"  # Loopback only
    web_port: int = 8471

    @classmethod
    def load(cls) -> SafeSkillConfig:
        """Load config from ``config.yaml`` and environment variables."""
        config = cls()

        config_file = config.config_dir / "config.yaml"
        if config_file.is_file():
            config.apply_file(config_file)

        env_skills = os.environ.get("SAFESKILL_SKILLS_DIR")
        if env_skills:
            config.skills_dirs.insert(0, Path(env_skills).expanduser())

        env_workers = os.environ.get("SAFESKILL_BULK_WORKERS")
        if env_workers:
            config.bulk_workers = int(env_workers)

        env_port = os.environ.get("SAFESKILL_WEB_PORT")
        if env_port:
            config.web_port = int(env_port)

        return config

    def apply_file(self, path: str | Path) -> None:
        """Merge settings from a YAML config file."""
        data = yaml.safe_load(Path(path).read_text(encoding="utf-8")) or {}
        if not isinstance(data, dict):
            raise ValueError("Config YAML must be a mapping")

        dirs = data.get("skills_dirs", [])
        if isinstance(dirs, str):
            dirs = [dirs]
        self.skills_dirs.extend(Path(d).expanduser() for d in dirs)

        if "bulk_workers" in data:
            self.bulk_workers = int(data["bulk_workers"])
        if "bulk_queries" in data:
            self.bulk_queries = tuple(str(q) for q in data["bulk_queries"])
        if "download_timeout" in data:
            self.download_timeout = float(data["download_timeout"])

    def candidate_skills_dirs(self) -> list[Path]:
        """Configured skills directories first, then the well-known locations."""
        return self.skills_dirs + [self.home_dir / d for d in DEFAULT_SKILLS_DIRS]

    def find_skills_dir(self, override: str | Path | None = None) -> Path | None:
        """First existing skills directory; an explicit override is the only candidate."""
        candidates = (
            [Path(override).expanduser()] if override else self.candidate_skills_dirs()
        )
        for candidate in candidates:
            if candidate.exists():
                return candidate
        return None

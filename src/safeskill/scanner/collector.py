"""File collector — enumerates scannable text files under a skill root."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from safeskill.scanner.models import FileEntry

logger = logging.getLogger(__name__)

# Directories to always skip (dot-directories are skipped as well)
SKIP_DIRS = frozenset(
    {
        "node_modules",
        ".git",
        ".svn",
        "__pycache__",
        ".tox",
        ".mypy_cache",
        ".pytest_cache",
        "dist",
        "build",
        ".next",
        "venv",
        ".venv",
        "env",
    }
)

SCANNABLE_EXTENSIONS = frozenset(
    {
        ".js",
        ".ts",
        ".mjs",
        ".cjs",
        ".py",
        ".rb",
        ".sh",
        ".bash",
        ".json",
        ".yaml",
        ".yml",
        ".md",
        ".txt",
        ".env",
        ".cfg",
        ".conf",
        ".ini",
        ".toml",
    }
)

# Max file size to scan (1 MiB)
MAX_FILE_SIZE = 1_048_576


def get_extension(filename: str) -> str:
    """Return the lowercased extension, treating ``.env*`` names as ``.env``."""
    if filename == ".env" or filename.startswith(".env."):
        return ".env"
    dot = filename.rfind(".")
    if dot == -1:
        return ""
    return filename[dot:].lower()


def get_skill_name(skill_path: str | Path) -> str:
    return Path(skill_path).name


def walk_directory(root: str | Path) -> list[FileEntry]:
    """Collect every eligible file under ``root``.

    Files in a directory come before the files of its subdirectories.
    Unreadable directories and files are skipped; an absent root yields an
    empty list.
    """
    root = Path(root)
    files: list[FileEntry] = []

    def _on_error(err: OSError) -> None:
        logger.debug("Skipping directory %s: %s", err.filename, err)

    for current, dirs, names in os.walk(root, onerror=_on_error):
        # Prune skipped directories in-place
        dirs[:] = [d for d in dirs if d not in SKIP_DIRS and not d.startswith(".")]

        for name in names:
            if get_extension(name) not in SCANNABLE_EXTENSIONS:
                continue
            entry = _read_entry(Path(current) / name, root)
            if entry is not None:
                files.append(entry)

    return files


def _read_entry(path: Path, root: Path) -> FileEntry | None:
    try:
        # Links may point outside the skill root
        if path.is_symlink() or not path.is_file():
            return None
        size = path.stat().st_size
        if size > MAX_FILE_SIZE:
            logger.debug("Skipping %s: %d bytes exceeds size cap", path, size)
            return None
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.debug("Skipping %s: %s", path, e)
        return None

    return FileEntry(
        path=str(path),
        relative_path=path.relative_to(root).as_posix(),
        content=content,
        size=size,
    )

"""Package materialization — download an npm or GitHub package to a local dir."""

from __future__ import annotations

import contextlib
import logging
import re
import shutil
import subprocess
import tarfile
import tempfile
from collections.abc import Iterator
from pathlib import Path

logger = logging.getLogger(__name__)

_GITHUB_URL = re.compile(
    r"(?:https?://)?github\.com/([a-zA-Z0-9_.-]+/[a-zA-Z0-9_.-]+)"
)
_NPM_URL = re.compile(
    r"(?:https?://)?(?:www\.)?npmjs\.com/package/([@a-zA-Z0-9_.\-/]+)"
)
_NPM_NAME = re.compile(r"^(?:@[a-zA-Z0-9][a-zA-Z0-9_.-]*/)?[a-zA-Z0-9][a-zA-Z0-9_.-]*$")


class FetchError(Exception):
    """A package could not be materialized locally."""


class DownloadError(FetchError):
    """The package manager failed to download the package."""


class ExtractError(FetchError):
    """The downloaded archive was missing, corrupt or oddly laid out."""


def sanitize_package_name(target: str) -> str | None:
    """Normalize user input into an ``npm pack`` spec, or None if invalid.

    Accepts ``name``, ``@scope/name``, npmjs.com package URLs and GitHub
    repository URLs (returned as ``github:owner/repo``).
    """
    cleaned = target.strip()

    gh = _GITHUB_URL.search(cleaned)
    if gh:
        return f"github:{gh.group(1).removesuffix('.git')}"

    npm = _NPM_URL.search(cleaned)
    if npm:
        cleaned = npm.group(1).rstrip("/")

    if _NPM_NAME.match(cleaned):
        return cleaned
    return None


@contextlib.contextmanager
def work_area(prefix: str = "safeskill-") -> Iterator[Path]:
    """A uniquely named temporary directory, removed on exit."""
    path = Path(tempfile.mkdtemp(prefix=prefix))
    try:
        yield path
    finally:
        shutil.rmtree(path, ignore_errors=True)
        logger.debug("Removed work area %s", path)


def download_package(
    package_spec: str,
    target_dir: str | Path,
    timeout: float = 30.0,
) -> Path:
    """Run ``npm pack`` into ``target_dir`` and extract it.

    Returns the extracted package root (npm tarballs unpack to ``package/``).
    """
    target_dir = Path(target_dir)
    target_dir.mkdir(parents=True, exist_ok=True)

    try:
        subprocess.run(
            ["npm", "pack", package_spec, "--pack-destination", str(target_dir)],
            check=True,
            capture_output=True,
            timeout=timeout,
        )
    except FileNotFoundError as e:
        raise DownloadError("npm is not installed") from e
    except (subprocess.CalledProcessError, subprocess.TimeoutExpired) as e:
        raise DownloadError(f"Could not download {package_spec!r}") from e

    tarballs = sorted(target_dir.glob("*.tgz"))
    if not tarballs:
        raise ExtractError("Package downloaded but could not be extracted.")

    try:
        with tarfile.open(tarballs[0], "r:gz") as tar:
            members = _checked_members(tar, target_dir)
            if hasattr(tarfile, "data_filter"):
                tar.extractall(target_dir, members=members, filter="data")
            else:
                tar.extractall(target_dir, members=members)
    except (tarfile.TarError, OSError) as e:
        raise ExtractError("Package downloaded but could not be extracted.") from e

    package_dir = target_dir / "package"
    if not package_dir.is_dir():
        raise ExtractError("Package extracted but has unexpected structure.")
    return package_dir


def _checked_members(
    tar: tarfile.TarFile, target_dir: Path
) -> list[tarfile.TarInfo]:
    """Return the archive members, refusing any that would escape ``target_dir``.

    Only regular files and directories are accepted; links and device nodes
    are rejected outright.
    """
    root = target_dir.resolve()
    members = tar.getmembers()
    for member in members:
        if not (member.isfile() or member.isdir()):
            raise ExtractError(
                f"Refusing archive member {member.name!r}: not a regular file"
            )
        name = Path(member.name)
        if (
            name.is_absolute()
            or ".." in name.parts
            or not (root / name).resolve().is_relative_to(root)
        ):
            raise ExtractError(f"Refusing archive member {member.name!r}: unsafe path")
    return members

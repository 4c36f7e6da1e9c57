"""Configuration checker — inspects MCP client config files for risky settings."""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path

from safeskill.scanner.models import Finding, Severity

logger = logging.getLogger(__name__)

# Claude Desktop config locations (macOS, Linux, Windows), relative to home
CLAUDE_CONFIGS = (
    Path("Library") / "Application Support" / "Claude" / "claude_desktop_config.json",
    Path(".config") / "claude" / "claude_desktop_config.json",
    Path("AppData") / "Roaming" / "Claude" / "claude_desktop_config.json",
)

GENERIC_CONFIGS = (
    Path(".mcp") / "config.json",
    Path(".mcp.json"),
    Path(".cline") / "mcp_settings.json",
)

_SECRET_KEY = re.compile(r"(?:api[_-]?key|secret|token|password)", re.IGNORECASE)
_INSECURE_FLAG = re.compile(
    r"--no-auth|--disable-auth|--no-ssl|--insecure", re.IGNORECASE
)
_RUNNER = re.compile(r"^(?:npx|uvx|bunx)\b")


def config_paths(home_dir: str | Path) -> list[Path]:
    home = Path(home_dir)
    return [home / p for p in (*CLAUDE_CONFIGS, *GENERIC_CONFIGS)]


def check_config(home_dir: str | Path) -> list[Finding]:
    """Check every known MCP config file under ``home_dir``."""
    findings: list[Finding] = []
    for path in config_paths(home_dir):
        if path.exists():
            findings.extend(check_mcp_config(path))
    return findings


def check_mcp_config(config_path: str | Path) -> list[Finding]:
    """Check a single MCP config file."""
    config_path = Path(config_path)
    file = str(config_path)

    try:
        content = config_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.debug("Skipping config %s: %s", config_path, e)
        return []

    try:
        config = json.loads(content)
    except json.JSONDecodeError:
        return [
            Finding(
                rule_id="CFG-001",
                severity=Severity.LOW,
                title="Malformed configuration file",
                description="Configuration file is not valid JSON",
                plain_english=(
                    f'Your config file at "{file}" isn\'t valid JSON. This might '
                    "cause unexpected behavior."
                ),
                file=file,
                recommendation="Fix the JSON syntax in your configuration file.",
            )
        ]

    if not isinstance(config, dict):
        return []

    servers = config.get("mcpServers") or config.get("servers") or {}
    if not isinstance(servers, dict):
        return []

    findings: list[Finding] = []
    for name, server in servers.items():
        if not isinstance(server, dict):
            continue
        findings.extend(_check_url(name, server, file))
        findings.extend(_check_env(name, server, file))
        findings.extend(_check_args(name, server, file))
        findings.extend(_check_command(name, server, file))
    return findings


def _check_url(name: str, server: dict, file: str) -> list[Finding]:
    url = server.get("url") or server.get("endpoint") or ""
    if not isinstance(url, str) or not url:
        return []

    findings: list[Finding] = []
    if "0.0.0.0" in url:
        findings.append(
            Finding(
                rule_id="CFG-002",
                severity=Severity.CRITICAL,
                title=f'Skill "{name}" is exposed to the internet',
                description=(
                    "Server binds to 0.0.0.0, making it accessible from any network"
                ),
                plain_english=(
                    f'Your skill "{name}" is configured to listen on all network '
                    "interfaces (0.0.0.0). This means anyone on your network, or "
                    "the internet if you don't have a firewall, can connect to it "
                    "and use your AI agent."
                ),
                file=file,
                recommendation=(
                    'Change the bind address to "127.0.0.1" or "localhost" to only '
                    "allow local connections."
                ),
            )
        )

    if (
        url.startswith("http://")
        and "localhost" not in url
        and "127.0.0.1" not in url
    ):
        findings.append(
            Finding(
                rule_id="CFG-003",
                severity=Severity.HIGH,
                title=f'Skill "{name}" uses unencrypted HTTP',
                description="Server communicates over plain HTTP instead of HTTPS",
                plain_english=(
                    f'Your skill "{name}" connects over plain HTTP (not HTTPS). '
                    "This means your data, including any API keys or sensitive "
                    "information, is sent unencrypted and could be intercepted."
                ),
                file=file,
                recommendation="Use HTTPS instead of HTTP for remote connections.",
            )
        )
    return findings


def _check_env(name: str, server: dict, file: str) -> list[Finding]:
    env = server.get("env")
    if not isinstance(env, dict):
        return []

    findings: list[Finding] = []
    for key, value in env.items():
        if not isinstance(value, str):
            continue
        if _SECRET_KEY.search(key) and len(value) > 8 and not value.startswith("$"):
            findings.append(
                Finding(
                    rule_id="CFG-004",
                    severity=Severity.MEDIUM,
                    title=f'Hardcoded secret in "{name}" configuration',
                    description=(
                        f'Environment variable "{key}" appears to contain a '
                        "hardcoded secret"
                    ),
                    plain_english=(
                        f'Your skill "{name}" has a secret ({key}) hardcoded '
                        "directly in the config file. If this file is shared, "
                        "committed to git, or backed up to the cloud, the secret "
                        "is exposed."
                    ),
                    file=file,
                    recommendation=(
                        f'Move "{key}" to a .env file or use your system\'s secret '
                        "management. Never hardcode secrets in config files."
                    ),
                )
            )
    return findings


def _check_args(name: str, server: dict, file: str) -> list[Finding]:
    args = server.get("args")
    if not isinstance(args, list):
        return []

    match = _INSECURE_FLAG.search(" ".join(str(a) for a in args))
    if not match:
        return []

    return [
        Finding(
            rule_id="CFG-005",
            severity=Severity.HIGH,
            title=f'Skill "{name}" has security disabled',
            description=(
                "Server is launched with security features explicitly disabled"
            ),
            plain_english=(
                f'Your skill "{name}" is configured with security features turned '
                f"off ({match.group(0)}). This makes it vulnerable to unauthorized "
                "access."
            ),
            file=file,
            recommendation=(
                "Remove the insecure flags and enable proper authentication."
            ),
        )
    ]


def _check_command(name: str, server: dict, file: str) -> list[Finding]:
    command = server.get("command")
    if not isinstance(command, str) or not _RUNNER.match(command):
        return []

    runner = command.split(" ")[0]
    return [
        Finding(
            rule_id="CFG-006",
            severity=Severity.MEDIUM,
            title=f'Skill "{name}" runs via {runner}',
            description="Server runs packages directly without prior installation",
            plain_english=(
                f'Your skill "{name}" uses {runner} to run a package directly from '
                "the internet without installing it first. This means you're "
                "trusting the package registry to serve the correct code every "
                "time; a supply chain attack could serve malicious code instead."
            ),
            file=file,
            recommendation=(
                "Install the package locally first (`npm install`), then reference "
                "the local binary instead of using npx."
            ),
        )
    ]

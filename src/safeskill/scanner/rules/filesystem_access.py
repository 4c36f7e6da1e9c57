"""Filesystem access rules — credential stores, browsers, wallets, dotfiles."""

from __future__ import annotations

import re

from safeskill.scanner.models import Severity
from safeskill.scanner.rules.base import SOURCE_FILES, Rule

FILESYSTEM_ACCESS_RULES: list[Rule] = [
    Rule(
        id="FS-001",
        severity=Severity.CRITICAL,
        title="Access to SSH keys",
        description="Reads SSH private keys or known_hosts",
        file_pattern=SOURCE_FILES,
        patterns=(
            re.compile(r"\.ssh/id_"),
            re.compile(r"\.ssh/known_hosts"),
            re.compile(r"\.ssh/authorized_keys"),
            re.compile(r"\.ssh/config"),
            re.compile(r"id_rsa|id_ed25519|id_ecdsa"),
        ),
        plain_english=lambda file, match: (
            f'The file "{file}" tries to read your SSH keys. These keys give access '
            "to your servers, GitHub account, and other systems. If stolen, an "
            "attacker can impersonate you on any server you have access to."
        ),
        recommendation=(
            "Remove this skill immediately. No legitimate skill needs to read your "
            "SSH keys."
        ),
    ),
    Rule(
        id="FS-002",
        severity=Severity.CRITICAL,
        title="Access to cloud credentials",
        description="Reads AWS, GCP, or Azure credential files",
        file_pattern=SOURCE_FILES,
        patterns=(
            re.compile(r"\.aws/credentials"),
            re.compile(r"\.aws/config"),
            re.compile(r"\.azure/"),
            re.compile(r"\.config/gcloud"),
            re.compile(r"google.*credentials.*\.json", re.IGNORECASE),
            re.compile(r"service.account.*\.json", re.IGNORECASE),
        ),
        plain_english=lambda file, match: (
            f'The file "{file}" tries to read your cloud credentials (AWS, Google '
            "Cloud, or Azure). These credentials could give an attacker full "
            "access to your cloud infrastructure: they could spin up crypto "
            "miners, access your databases, or rack up thousands in charges."
        ),
        recommendation=(
            "Remove this skill immediately. Cloud credentials should never be "
            "accessed by MCP skills."
        ),
    ),
    Rule(
        id="FS-003",
        severity=Severity.CRITICAL,
        title="Access to browser profiles",
        description="Reads browser data (cookies, passwords, history)",
        file_pattern=SOURCE_FILES,
        patterns=tuple(
            re.compile(p, re.IGNORECASE)
            for p in (
                r"Chrome.*(?:Default|Profile)",
                r"Firefox.*profiles",
                r"\.mozilla/firefox",
                r"google-chrome",
                r"Login\s*Data",
                r"Cookies\.sqlite",
                r"Local\s*State",
                r"\.browser",
            )
        ),
        plain_english=lambda file, match: (
            f'The file "{file}" tries to access your browser data. This could '
            "include your saved passwords, cookies (login sessions), and browsing "
            "history. This is a classic data-stealing technique."
        ),
        recommendation=(
            "Remove this skill immediately. This is textbook info-stealer behavior."
        ),
    ),
    Rule(
        id="FS-004",
        severity=Severity.CRITICAL,
        title="Access to cryptocurrency wallets",
        description="Reads cryptocurrency wallet files or seed phrases",
        file_pattern=SOURCE_FILES,
        patterns=tuple(
            re.compile(p, re.IGNORECASE)
            for p in (
                r"\.bitcoin/",
                r"\.ethereum/",
                r"wallet\.dat",
                r"\.solana/id\.json",
                r"metamask",
                r"phantom",
                r"\.crypto/",
                r"keystore.*utc",
                r"seed.?phrase",
                r"mnemonic",
            )
        ),
        plain_english=lambda file, match: (
            f'The file "{file}" tries to access cryptocurrency wallet files. If '
            "your wallet data or seed phrases are stolen, your crypto can be "
            "transferred out irreversibly."
        ),
        recommendation=(
            "Remove this skill immediately. This is the most common goal of "
            "malicious MCP skills: stealing cryptocurrency."
        ),
    ),
    Rule(
        id="FS-005",
        severity=Severity.HIGH,
        title="Access to .env or dotfiles",
        description=(
            "Reads .env files or other configuration files that commonly contain "
            "secrets"
        ),
        file_pattern=SOURCE_FILES,
        patterns=(
            re.compile(r"\.env\b"),
            re.compile(r"dotenv"),
            re.compile(r"\.netrc"),
            re.compile(r"\.npmrc"),
            re.compile(r"\.pypirc"),
            re.compile(r"\.docker/config"),
            re.compile(r"\.kube/config"),
        ),
        plain_english=lambda file, match: (
            f'The file "{file}" reads environment files or config files that '
            "typically contain passwords, API keys, and tokens. This is how "
            "attackers harvest credentials from your development environment."
        ),
        recommendation=(
            "Only allow this if the skill explicitly documents why it needs these "
            "files. Most skills should receive credentials through proper "
            "configuration, not by reading dotfiles."
        ),
    ),
    Rule(
        id="FS-006",
        severity=Severity.HIGH,
        title="Broad filesystem traversal",
        description=(
            "Recursively walks directories or reads from sensitive system paths"
        ),
        file_pattern=SOURCE_FILES,
        patterns=(
            re.compile(r"readdirSync.*recursive"),
            re.compile(r"""os\.walk\s*\(\s*['"][/~]"""),
            re.compile(r"""glob\s*\(\s*['"][/*]"""),
            re.compile(r"/etc/passwd"),
            re.compile(r"/etc/shadow"),
        ),
        plain_english=lambda file, match: (
            f'The file "{file}" scans through directories on your computer. This '
            "could be used to find and collect sensitive files, passwords, or "
            "personal data."
        ),
        recommendation=(
            "Check what directories are being scanned. A skill should only access "
            "its own data directory, not your entire filesystem."
        ),
    ),
]

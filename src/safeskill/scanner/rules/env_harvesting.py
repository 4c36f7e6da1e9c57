"""Environment harvesting rules — bulk env reads and env-over-network."""

from __future__ import annotations

import re

from safeskill.scanner.models import Severity
from safeskill.scanner.rules.base import SOURCE_FILES, Rule

ENV_HARVESTING_RULES: list[Rule] = [
    Rule(
        id="ENV-001",
        severity=Severity.HIGH,
        title="Bulk environment variable harvesting",
        description="Reads all environment variables, not just specific ones needed",
        file_pattern=SOURCE_FILES,
        patterns=(
            re.compile(r"process\.env(?![\[.])"),
            re.compile(r"Object\.\w+\(process\.env\)"),
            re.compile(r"JSON\.stringify\(process\.env\)"),
            re.compile(r"os\.environ(?!\[|\.get)"),
            re.compile(r"dict\(os\.environ\)"),
            re.compile(r"\{.*\.\.\.process\.env"),
        ),
        plain_english=lambda file, match: (
            f'The file "{file}" reads ALL of your environment variables at once. '
            "Environment variables often contain API keys, database passwords, "
            "and tokens. A legitimate skill only needs specific variables, not "
            "all of them."
        ),
        recommendation=(
            "Check if this skill actually needs environment variables. If it does, "
            "it should only access specific named ones (like OPENAI_API_KEY), not "
            "dump all of them."
        ),
    ),
    Rule(
        id="ENV-002",
        severity=Severity.CRITICAL,
        title="Environment variables sent over network",
        description="Reads environment variables and sends them via HTTP",
        file_pattern=SOURCE_FILES,
        patterns=(
            re.compile(r"process\.env.{0,100}(?:fetch|axios|request|http)"),
            re.compile(r"(?:fetch|axios|request|http).{0,100}process\.env"),
            re.compile(r"os\.environ.{0,100}(?:urlopen|requests|urllib)"),
            re.compile(r"(?:urlopen|requests|urllib).{0,100}os\.environ"),
        ),
        plain_english=lambda file, match: (
            f'The file "{file}" reads your environment variables AND sends data '
            "over the network. This is the classic pattern for credential theft: "
            "read your secrets, send them to the attacker."
        ),
        recommendation=(
            "Remove this skill immediately. This pattern is almost always malicious."
        ),
    ),
]

"""Network exfiltration rules — chat bots, webhooks, raw IPs, drop sites."""

from __future__ import annotations

import re

from safeskill.scanner.models import Severity
from safeskill.scanner.rules.base import Rule, extensions

_NETWORK_FILES = extensions("js", "ts", "mjs", "cjs", "py", "rb", "json")

NETWORK_EXFIL_RULES: list[Rule] = [
    Rule(
        id="NET-001",
        severity=Severity.CRITICAL,
        title="Data exfiltration to Telegram Bot API",
        description=(
            "Sends data to Telegram Bot API, commonly used for data exfiltration"
        ),
        file_pattern=_NETWORK_FILES,
        patterns=(
            re.compile(r"api\.telegram\.org/bot", re.IGNORECASE),
            re.compile(r"telegram\.org/bot.*sendMessage", re.IGNORECASE),
            re.compile(r"telegram\.org/bot.*sendDocument", re.IGNORECASE),
        ),
        plain_english=lambda file, match: (
            f'The file "{file}" sends data to a Telegram bot. This is the #1 method '
            "used by malicious skills to steal your data: your API keys, "
            "passwords, or files get sent to an attacker's Telegram chat."
        ),
        recommendation=(
            "Remove this skill immediately. Legitimate skills have no reason to "
            "communicate with Telegram bots."
        ),
    ),
    Rule(
        id="NET-002",
        severity=Severity.CRITICAL,
        title="Data exfiltration via Discord webhook",
        description=(
            "Sends data to Discord webhooks, commonly used for data exfiltration"
        ),
        file_pattern=_NETWORK_FILES,
        patterns=(
            re.compile(r"discord(?:app)?\.com/api/webhooks/", re.IGNORECASE),
            re.compile(r"discord\.com/api/webhooks", re.IGNORECASE),
        ),
        plain_english=lambda file, match: (
            f'The file "{file}" sends data to a Discord webhook. Attackers use '
            "Discord webhooks to receive stolen data because they're free, "
            "anonymous, and hard to trace."
        ),
        recommendation=(
            "Remove this skill immediately unless it's explicitly a Discord "
            "integration skill AND you set up the webhook yourself."
        ),
    ),
    Rule(
        id="NET-003",
        severity=Severity.HIGH,
        title="Outbound HTTP to hardcoded IP address",
        description=(
            "Makes HTTP requests to hardcoded IP addresses instead of domain names"
        ),
        file_pattern=_NETWORK_FILES,
        patterns=(
            re.compile(r"https?://\d{1,3}\.\d{1,3}\.\d{1,3}\.\d{1,3}"),
            re.compile(r"""fetch\s*\(\s*['"`]https?://\d{1,3}\."""),
            re.compile(r"""axios\.\w+\s*\(\s*['"`]https?://\d{1,3}\."""),
            re.compile(r"""requests\.\w+\s*\(\s*['"`]https?://\d{1,3}\."""),
        ),
        plain_english=lambda file, match: (
            f'The file "{file}" connects to a raw IP address instead of a normal '
            "website. Legitimate services use domain names. Raw IP addresses are "
            "often used to avoid detection and connect to attacker-controlled "
            "servers."
        ),
        recommendation=(
            "Investigate what this IP address is. If you can't determine it's a "
            "legitimate service, remove this skill."
        ),
    ),
    Rule(
        id="NET-004",
        severity=Severity.MEDIUM,
        title="Data encoding before transmission",
        description="Encodes data (base64/hex) before sending it over the network",
        file_pattern=_NETWORK_FILES,
        patterns=(
            re.compile(r"btoa\s*\(.*fetch"),
            re.compile(r"base64.*(?:fetch|axios|request|http)"),
            re.compile(r"(?:fetch|axios|request|http).*base64"),
            re.compile(r"b64encode.*(?:urlopen|requests|urllib)"),
        ),
        plain_english=lambda file, match: (
            f'The file "{file}" encodes data before sending it to a server. While '
            "encoding itself isn't always malicious, this pattern is common in "
            "data theft: the encoding hides what's being sent."
        ),
        recommendation=(
            "Check what data is being encoded and where it's being sent. If you "
            "can't determine both, this is suspicious."
        ),
    ),
    Rule(
        id="NET-005",
        severity=Severity.HIGH,
        title="Outbound connection to paste/webhook service",
        description=(
            "Connects to paste services or generic webhook endpoints used for "
            "exfiltration"
        ),
        file_pattern=_NETWORK_FILES,
        patterns=tuple(
            re.compile(p, re.IGNORECASE)
            for p in (
                r"pastebin\.com",
                r"paste\.ee",
                r"hastebin\.com",
                r"webhook\.site",
                r"requestbin",
                r"ngrok\.io",
                r"burpcollaborator",
                r"pipedream\.net",
                r"hookbin\.com",
            )
        ),
        plain_english=lambda file, match: (
            f'The file "{file}" connects to a paste or webhook service. These '
            "services are frequently used by attackers as anonymous drop points "
            "for stolen data."
        ),
        recommendation=(
            "Remove this skill unless you specifically set up this webhook for "
            "your own use."
        ),
    ),
]

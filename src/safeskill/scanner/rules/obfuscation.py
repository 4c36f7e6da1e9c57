"""Obfuscation rules — runtime decoding, invisible characters, JS tricks."""

from __future__ import annotations

import re

from safeskill.scanner.models import Severity
from safeskill.scanner.rules.base import Rule, extensions

_OBFUSCATION_FILES = extensions("js", "ts", "mjs", "cjs", "py", "rb", "json", "md")
_JS_FILES = extensions("js", "mjs", "cjs", "ts")

OBFUSCATION_RULES: list[Rule] = [
    Rule(
        id="OBF-001",
        severity=Severity.HIGH,
        title="Base64-encoded string decoded at runtime",
        description=(
            "Decodes base64-encoded strings at runtime, often used to hide "
            "malicious payloads"
        ),
        file_pattern=_OBFUSCATION_FILES,
        patterns=(
            re.compile(r"atob\s*\("),
            re.compile(r"""Buffer\.from\s*\([^)]+,\s*['"]base64['"]\)"""),
            re.compile(r"base64\.b64decode\s*\("),
            re.compile(r"base64\.decodebytes\s*\("),
            re.compile(r"Base64\.decode64\s*\("),
        ),
        plain_english=lambda file, match: (
            f'The file "{file}" decodes hidden base64-encoded content at runtime. '
            "This is a common obfuscation technique: the actual malicious code is "
            "hidden as an encoded string so it doesn't show up in simple code "
            "reviews."
        ),
        recommendation=(
            "Investigate what's being decoded. If you can't determine it's benign "
            "data (like an image), this is highly suspicious."
        ),
    ),
    Rule(
        id="OBF-002",
        severity=Severity.HIGH,
        title="Hex-encoded string decoded at runtime",
        description="Decodes hex-encoded strings, another obfuscation method",
        file_pattern=_OBFUSCATION_FILES,
        patterns=(
            re.compile(r"""Buffer\.from\s*\([^)]+,\s*['"]hex['"]\)"""),
            re.compile(r"bytes\.fromhex\s*\("),
            re.compile(r"\\x[0-9a-f]{2}(?:\\x[0-9a-f]{2}){5,}", re.IGNORECASE),
        ),
        plain_english=lambda file, match: (
            f'The file "{file}" decodes hex-encoded content at runtime. Like '
            "base64, hex encoding is used to hide the true contents of strings "
            "such as URLs, commands, or other payloads."
        ),
        recommendation=(
            "Decode the hex string yourself to see what it contains. If it's a URL "
            "or command, this skill is likely malicious."
        ),
    ),
    Rule(
        id="OBF-003",
        severity=Severity.MEDIUM,
        title="Hidden Unicode characters",
        description=(
            "Contains invisible Unicode characters that could be used for "
            "homograph attacks or hiding code"
        ),
        file_pattern=_OBFUSCATION_FILES,
        patterns=(
            re.compile("[\u200b\u200c\u200d\u2060\ufeff]"),
            re.compile("[\u202a-\u202e]"),
            re.compile("[\u2066-\u2069]"),
            re.compile("[\u00ad]"),
        ),
        plain_english=lambda file, match: (
            f'The file "{file}" contains invisible Unicode characters. These can be '
            "used to hide malicious code that looks normal in a text editor but "
            "actually does something different, for example making a URL look "
            "like it goes to google.com when it actually goes to evil.com."
        ),
        recommendation=(
            "View the raw file in a hex editor. This pattern is used in "
            "supply-chain attacks to make code appear safe while actually being "
            "malicious."
        ),
    ),
    Rule(
        id="OBF-004",
        severity=Severity.HIGH,
        title="Obfuscated JavaScript patterns",
        description="Uses common JS obfuscation patterns to hide code intent",
        file_pattern=_JS_FILES,
        patterns=(
            re.compile(r"""\[['"]\\x"""),
            re.compile(r"String\.fromCharCode\s*\("),
            re.compile(r"""\['constructor'\]\s*\(\s*['"]return"""),
            re.compile(r"""\bwindow\[(?:['"]\\x|atob)"""),
            re.compile(r"""\[["']apply["']\]"""),
        ),
        plain_english=lambda file, match: (
            f'The file "{file}" uses JavaScript obfuscation techniques to hide what '
            "it does. Legitimate code is written to be readable; obfuscated code "
            "is written to avoid detection."
        ),
        recommendation=(
            "Remove this skill. There is no legitimate reason for an MCP skill to "
            "use code obfuscation."
        ),
    ),
]

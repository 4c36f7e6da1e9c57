"""Code execution rules — eval, child processes, shell injection."""

from __future__ import annotations

import re

from safeskill.scanner.models import Severity
from safeskill.scanner.rules.base import SOURCE_FILES, Rule

CODE_EXECUTION_RULES: list[Rule] = [
    Rule(
        id="EXEC-001",
        severity=Severity.CRITICAL,
        title="Dynamic code execution with eval()",
        description="Uses eval() or similar to execute dynamically constructed code",
        file_pattern=SOURCE_FILES,
        patterns=(
            re.compile(r"\beval\s*\("),
            re.compile(r"\bnew\s+Function\s*\("),
            re.compile(r"""\bexec\s*\(\s*(?:f["']|["`]|compile)"""),
        ),
        plain_english=lambda file, match: (
            f'The file "{file}" uses eval() or dynamic code execution. This means '
            "it can run arbitrary code at runtime, a common technique in malware "
            "to hide what it actually does."
        ),
        recommendation=(
            "Remove this skill immediately unless you trust the author completely. "
            "Dynamic code execution is the #1 red flag in malicious skills."
        ),
    ),
    Rule(
        id="EXEC-002",
        severity=Severity.HIGH,
        title="Child process execution",
        description="Spawns shell commands or child processes",
        file_pattern=SOURCE_FILES,
        patterns=(
            re.compile(r"\bchild_process\b"),
            re.compile(r"\bexecSync\b"),
            re.compile(r"\bspawnSync?\b"),
            re.compile(r"\bexecFileSync?\b"),
            re.compile(r"\bsubprocess\.(?:run|call|Popen|check_output)\b"),
            re.compile(r"\bos\.system\s*\("),
            re.compile(r"\bos\.popen\s*\("),
        ),
        plain_english=lambda file, match: (
            f'The file "{file}" can run system commands on your computer. This '
            "gives it the ability to install software, delete files, or do "
            "anything you can do in a terminal."
        ),
        recommendation=(
            "Only allow this if the skill explicitly needs to run commands (like a "
            "git or docker skill). If it's a simple data skill, this is suspicious."
        ),
    ),
    Rule(
        id="EXEC-003",
        severity=Severity.CRITICAL,
        title="Shell command with string interpolation",
        description=(
            "Constructs shell commands using string interpolation or concatenation"
        ),
        file_pattern=SOURCE_FILES,
        patterns=(
            re.compile(r"exec(?:Sync)?\s*\(\s*`[^`]*\$\{"),
            re.compile(r"""exec(?:Sync)?\s*\(\s*['"][^'"]*['"]\s*\+"""),
            re.compile(r"""os\.system\s*\(\s*f['"]"""),
            re.compile(r"""subprocess\.(?:run|call|Popen)\s*\(\s*f['"]"""),
        ),
        plain_english=lambda file, match: (
            f'The file "{file}" builds shell commands by inserting variables into '
            "strings. This is a command injection vulnerability: an attacker could "
            "trick it into running malicious commands."
        ),
        recommendation=(
            "Remove this skill. Shell commands built from user input are extremely "
            "dangerous and a hallmark of malicious code."
        ),
    ),
]

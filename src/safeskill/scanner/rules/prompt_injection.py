"""Prompt injection rules — instructions aimed at the agent, not the user."""

from __future__ import annotations

import re

from safeskill.scanner.models import Severity
from safeskill.scanner.rules.base import Rule, extensions

# Files an agent reads as skill or tool descriptions
DESCRIPTION_FILES = extensions("md", "txt", "yaml", "yml", "json")
_ALL_TEXT_FILES = extensions(
    "js", "ts", "mjs", "cjs", "py", "rb", "json", "yaml", "yml", "md", "txt"
)

PROMPT_INJECTION_RULES: list[Rule] = [
    Rule(
        id="PI-001",
        severity=Severity.CRITICAL,
        title="Prompt injection in skill description",
        description=(
            "Skill description contains instructions that attempt to override "
            "agent behavior"
        ),
        file_pattern=DESCRIPTION_FILES,
        patterns=tuple(
            re.compile(p, re.IGNORECASE)
            for p in (
                r"ignore\s+(?:all\s+)?previous\s+instructions",
                r"disregard\s+(?:all\s+)?prior",
                r"you\s+are\s+now\s+(?:a|an)\s+(?!mcp|skill)",
                r"system\s*:\s*you\s+(?:must|should|are)",
                r"\bdo\s+not\s+(?:reveal|share|tell|disclose|show)\b"
                r".*\b(?:instructions|prompt|system)\b",
            )
        ),
        plain_english=lambda file, match: (
            f'The file "{file}" contains prompt injection: hidden instructions that '
            "try to take over your AI agent. Instead of doing what you ask, your "
            "agent could be tricked into following the attacker's instructions, "
            "like sending your data to them."
        ),
        recommendation=(
            "Remove this skill immediately. Prompt injection in a skill description "
            "is a deliberate attack on your agent."
        ),
    ),
    Rule(
        id="PI-002",
        severity=Severity.HIGH,
        title="Hidden instructions in tool descriptions",
        description=(
            "Tool or parameter descriptions contain instructions beyond normal "
            "documentation"
        ),
        file_pattern=_ALL_TEXT_FILES,
        patterns=tuple(
            re.compile(p, re.IGNORECASE)
            for p in (
                r"(?:always|must|should)\s+(?:include|send|forward|copy|attach)\s+"
                r"(?:the\s+)?(?:api.?key|token|password|secret|credential)",
                r"(?:before|after)\s+(?:each|every|any)\s+(?:request|call|response),?"
                r"\s+(?:also\s+)?(?:send|forward|copy)",
                r"(?:silently|quietly|secretly|without\s+telling)\s+"
                r"(?:send|copy|forward|include)",
            )
        ),
        plain_english=lambda file, match: (
            f'The file "{file}" contains hidden instructions that try to make your '
            "agent silently send your credentials or data somewhere. This is a "
            "sophisticated prompt injection attack."
        ),
        recommendation=(
            "Remove this skill immediately. This is a deliberate attempt to steal "
            "your credentials through your AI agent."
        ),
    ),
    Rule(
        id="PI-003",
        severity=Severity.MEDIUM,
        title="Invisible text in description files",
        description=(
            "Uses HTML comments, zero-width characters, or other techniques to "
            "hide text"
        ),
        file_pattern=DESCRIPTION_FILES,
        patterns=tuple(
            re.compile(p, re.IGNORECASE)
            for p in (
                r"<!--.*?(?:system|instruction|ignore|override).*?-->",
                r"\[.*?\]\(.*?javascript:",
                r"\[.*?\]\(\s*data:",
            )
        ),
        plain_english=lambda file, match: (
            f'The file "{file}" contains hidden text that\'s invisible in normal '
            "rendering. This hidden text could contain instructions that trick "
            "your AI agent."
        ),
        recommendation=(
            "View the raw source of this file to see what's hidden. If it contains "
            "instructions, remove this skill."
        ),
    ),
]

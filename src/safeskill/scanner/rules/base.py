"""Rule record shared by every category in the catalog."""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass

from safeskill.scanner.models import Severity


@dataclass(frozen=True)
class Rule:
    """A declarative detection rule.

    ``file_pattern`` is searched against a file's relative path to decide
    whether the rule applies; ``patterns`` are tried in order against each
    line and the first hit wins.
    """

    id: str
    severity: Severity
    title: str
    description: str
    file_pattern: re.Pattern[str]
    patterns: tuple[re.Pattern[str], ...]
    plain_english: Callable[[str, str], str]
    recommendation: str

    def applies_to(self, relative_path: str) -> bool:
        return self.file_pattern.search(relative_path) is not None

    def first_match(self, line: str) -> re.Match[str] | None:
        for pattern in self.patterns:
            match = pattern.search(line)
            if match:
                return match
        return None


def extensions(*exts: str) -> re.Pattern[str]:
    """Compile a case-insensitive file predicate for the given extensions."""
    alternation = "|".join(re.escape(e.lstrip(".")) for e in exts)
    return re.compile(rf"\.(?:{alternation})$", re.IGNORECASE)


SOURCE_FILES = extensions("js", "ts", "mjs", "cjs", "py", "rb", "sh", "bash")

"""Rule catalog — every detection rule, grouped by category.

The catalog is the concatenation of the category lists, in a fixed order.
Grouping carries no runtime meaning; the matcher sees one flat list.
"""

from __future__ import annotations

from safeskill.scanner.models import Severity
from safeskill.scanner.rules.base import Rule
from safeskill.scanner.rules.code_execution import CODE_EXECUTION_RULES
from safeskill.scanner.rules.env_harvesting import ENV_HARVESTING_RULES
from safeskill.scanner.rules.filesystem_access import FILESYSTEM_ACCESS_RULES
from safeskill.scanner.rules.network_exfil import NETWORK_EXFIL_RULES
from safeskill.scanner.rules.obfuscation import OBFUSCATION_RULES
from safeskill.scanner.rules.prompt_injection import PROMPT_INJECTION_RULES
from safeskill.scanner.rules.secrets import SECRETS_RULES

CATEGORIES: dict[str, tuple[Rule, ...]] = {
    "code-execution": tuple(CODE_EXECUTION_RULES),
    "network-exfil": tuple(NETWORK_EXFIL_RULES),
    "filesystem-access": tuple(FILESYSTEM_ACCESS_RULES),
    "obfuscation": tuple(OBFUSCATION_RULES),
    "prompt-injection": tuple(PROMPT_INJECTION_RULES),
    "env-harvesting": tuple(ENV_HARVESTING_RULES),
    "secrets": tuple(SECRETS_RULES),
}

ALL_RULES: tuple[Rule, ...] = tuple(
    rule for rules in CATEGORIES.values() for rule in rules
)

_BY_ID = {rule.id: rule for rule in ALL_RULES}


def get_rule_by_id(rule_id: str) -> Rule | None:
    return _BY_ID.get(rule_id)


def get_rules_by_severity(severity: Severity) -> list[Rule]:
    return [r for r in ALL_RULES if r.severity == severity]


__all__ = [
    "ALL_RULES",
    "CATEGORIES",
    "Rule",
    "get_rule_by_id",
    "get_rules_by_severity",
]

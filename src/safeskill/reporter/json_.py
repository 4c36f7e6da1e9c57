"""JSON renderer — the stable wire shape of scan results."""

from __future__ import annotations

import json

from safeskill.scanner.models import SetupScanResult, SkillScanResult


def format_skill_json(result: SkillScanResult) -> str:
    return json.dumps(result.to_dict(), indent=2, ensure_ascii=False)


def format_setup_json(result: SetupScanResult) -> str:
    return json.dumps(result.to_dict(), indent=2, ensure_ascii=False)

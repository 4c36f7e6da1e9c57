"""Report renderers for skill and setup scan results."""

from safeskill.reporter.conversational import format_conversational
from safeskill.reporter.json_ import format_setup_json, format_skill_json
from safeskill.reporter.markdown import format_setup_report, format_skill_report

__all__ = [
    "format_conversational",
    "format_setup_json",
    "format_setup_report",
    "format_skill_json",
    "format_skill_report",
]

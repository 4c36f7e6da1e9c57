"""SafeSkill — static security scanner for AI-agent skills and MCP servers."""

__version__ = "0.1.0"

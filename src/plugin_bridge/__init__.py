"""
Plugin Bridge - convert Claude plugins for other AI coding assistants.

Converts a Claude plugin (agents, commands, skills, hooks, MCP servers) to:
- OpenCode (.opencode/ + opencode.json)
- Gemini CLI (.gemini/)
"""

__version__ = "0.1.0"

# Trigger target auto-registration on import
from plugin_bridge import targets  # noqa: F401

__all__ = [
    "cli",
    "config",
    "core",
    "services",
    "targets",
    "utils",
]

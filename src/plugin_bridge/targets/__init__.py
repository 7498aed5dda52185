"""
Target auto-registration.
Import every target module so it registers itself with target_registry.
"""

from plugin_bridge.targets import gemini, opencode  # noqa: F401

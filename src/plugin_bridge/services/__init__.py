"""
Services: business logic kept out of the CLI.

Each service handles one flow: convert, install.
"""

from plugin_bridge.services.convert_service import run_convert, run_install

__all__ = ["run_convert", "run_install"]

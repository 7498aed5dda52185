"""
Interactive target picker for `convert` / `install --interactive`.
"""

from typing import List, Optional

import questionary
from questionary import Style

from plugin_bridge.core.target import TargetRegistry
from plugin_bridge.utils import Colors

CUSTOM_STYLE = Style(
    [
        ("qmark", "fg:#00d4ff bold"),
        ("question", "bold"),
        ("answer", "fg:#00d4ff bold"),
        ("pointer", "fg:#00d4ff bold"),
        ("highlighted", "fg:#00d4ff bold bg:default"),
        ("selected", "fg:#00d4ff bold bg:default"),
        ("checkbox", "fg:#888888"),
        ("checkbox-selected", "fg:#00d4ff bold"),
    ]
)


def select_targets(registry: TargetRegistry, default: str = "opencode") -> Optional[List[str]]:
    """
    Checkbox of registered targets followed by a confirmation.

    Returns:
        Selected target names (first one is the primary target), or None if cancelled.
    """
    choices = [
        questionary.Choice(
            f"{t.display_name} ({t.layout.dot_dir}/)",
            value=t.name,
            checked=t.name == default,
        )
        for t in registry.all()
    ]
    selected = questionary.checkbox(
        "Select target formats:",
        choices=choices,
        style=CUSTOM_STYLE,
        instruction="Space=toggle, Enter=confirm",
    ).ask()

    if not selected:
        print(f"{Colors.YELLOW}No target selected. Use Space to toggle, then Enter.{Colors.ENDC}")
        return None

    print(f"\n  Targets: {Colors.CYAN}{', '.join(selected)}{Colors.ENDC}")
    if not questionary.confirm("Proceed?", default=True, style=CUSTOM_STYLE).ask():
        print(f"{Colors.YELLOW}Cancelled.{Colors.ENDC}")
        return None
    return list(selected)

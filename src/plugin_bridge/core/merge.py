"""
Config merge policy for the single per-target JSON config file.

Plugin-provided defaults never overwrite a value the user already set inside
the mergeable sub-keys; new entries are added.
"""

import copy
from typing import Any, Dict, Iterable, Optional

from .types import MergeStrategy


def merge_section(incoming: Any, existing: Any) -> Any:
    """One level deep, existing fields win."""
    if not isinstance(existing, dict) or not isinstance(incoming, dict):
        return copy.deepcopy(existing)
    merged = copy.deepcopy(existing)
    for key, value in incoming.items():
        if key not in merged:
            merged[key] = copy.deepcopy(value)
    return merged


def merge_config(
    incoming: Dict[str, Any],
    existing: Optional[Dict[str, Any]],
    mergeable_keys: Iterable[str],
    strategy: MergeStrategy = MergeStrategy.USER_WINS,
) -> Dict[str, Any]:
    if not existing:
        return copy.deepcopy(incoming)

    mergeable = set(mergeable_keys)
    merged = copy.deepcopy(existing)

    for key, value in incoming.items():
        if key in mergeable:
            merged[key] = merge_section(value, existing[key]) if key in existing else copy.deepcopy(value)
        elif key not in existing or strategy == MergeStrategy.PLUGIN_WINS:
            merged[key] = copy.deepcopy(value)

    return merged

"""
Target descriptor and registry.
Adding a new tool = write a converter + a TargetLayout, then register.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, List, Optional

from .types import Bundle, ClaudePlugin, ConvertOptions, TargetLayout, WriteResult
from .writer import write_bundle

Converter = Callable[[ClaudePlugin, ConvertOptions], Bundle]


@dataclass(frozen=True)
class Target:
    name: str
    display_name: str
    layout: TargetLayout
    convert: Converter
    # Project-scoped targets write to <base>/<dot_dir> instead of the output root.
    project_scoped: bool = False

    def write(self, output_root: Path, bundle: Bundle) -> WriteResult:
        return write_bundle(self.layout, output_root, bundle)


class TargetRegistry:
    def __init__(self):
        self._targets: Dict[str, Target] = {}

    def register(self, target: Target) -> None:
        self._targets[target.name] = target

    def get(self, name: str) -> Optional[Target]:
        return self._targets.get(name.lower())

    def require(self, name: str) -> Target:
        target = self.get(name)
        if target is None:
            raise ValueError(f"Unknown target: {name} (available: {', '.join(self.names())})")
        return target

    def all(self) -> List[Target]:
        return list(self._targets.values())

    def names(self) -> List[str]:
        return list(self._targets.keys())


target_registry = TargetRegistry()

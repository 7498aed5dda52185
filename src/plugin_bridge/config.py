"""
Runtime settings and output-root resolution.

Everything that depends on the process environment (home dir, cwd, env vars)
is read once into Settings by the CLI and passed down explicitly.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from plugin_bridge.core.target import Target

GITHUB_SOURCE_ENV = "PLUGIN_BRIDGE_GITHUB_SOURCE"
DEFAULT_GITHUB_SOURCE = "https://github.com/EveryInc/compound-engineering-plugin"


@dataclass(frozen=True)
class Settings:
    home: Path
    cwd: Path
    github_source: str = DEFAULT_GITHUB_SOURCE

    @classmethod
    def from_environment(cls) -> "Settings":
        override = os.environ.get(GITHUB_SOURCE_ENV, "").strip()
        return cls(
            home=Path.home(),
            cwd=Path.cwd(),
            github_source=override or DEFAULT_GITHUB_SOURCE,
        )

    @property
    def opencode_global_root(self) -> Path:
        # OpenCode global config lives at ~/.config/opencode (XDG)
        return self.home / ".config" / "opencode"

    def expand_home(self, value: str) -> Path:
        if value == "~":
            return self.home
        if value.startswith("~/"):
            return self.home / value[2:]
        return Path(value)

    def resolve_path(self, value: str) -> Path:
        path = self.expand_home(value)
        return path if path.is_absolute() else (self.cwd / path).resolve()

    def resolve_output_root(self, value: Optional[str], install: bool = False) -> Path:
        if value and value.strip():
            return self.resolve_path(value.strip())
        return self.opencode_global_root if install else self.cwd


def resolve_target_output_root(
    target: Target,
    output_root: Path,
    settings: Settings,
    has_explicit_output: bool = True,
) -> Path:
    """
    Project-scoped targets (Gemini) always land in `<base>/<dot_dir>`; when
    installing without --output the base is the cwd rather than the global
    OpenCode root.
    """
    if not target.project_scoped:
        return output_root
    base = output_root if has_explicit_output else settings.cwd
    return base / target.layout.dot_dir

"""
Plugin source resolution for `install`.

A reference that looks like a path (., /, ~) is used in place; anything else
is a plugin name fetched from the configured GitHub source.
"""

import subprocess
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from plugin_bridge.config import Settings


def is_local_reference(reference: str) -> bool:
    return reference.startswith((".", "/", "~"))


def clone_repo(source: str, destination: Path) -> None:
    try:
        subprocess.run(
            ["git", "clone", "--depth", "1", source, str(destination)],
            check=True,
            capture_output=True,
        )
    except subprocess.CalledProcessError as e:
        stderr = e.stderr.decode(errors="replace").strip() if e.stderr else ""
        raise RuntimeError(f"Failed to clone {source}. {stderr}".strip()) from e


@contextmanager
def resolved_plugin_path(reference: str, settings: Settings) -> Iterator[Path]:
    """Yield a local plugin directory; temporary checkouts are removed on exit."""
    if is_local_reference(reference):
        path = settings.resolve_path(reference)
        if not path.exists():
            raise FileNotFoundError(f"Local plugin path not found: {path}")
        yield path
        return

    with tempfile.TemporaryDirectory(prefix="plugin-bridge-") as temp_root:
        checkout = Path(temp_root) / "repo"
        clone_repo(settings.github_source, checkout)
        plugin_path = checkout / "plugins" / reference
        if not plugin_path.exists():
            raise FileNotFoundError(f"Could not find plugin {reference} in {settings.github_source}.")
        yield plugin_path

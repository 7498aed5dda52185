"""Where each artifact kind lands for a given output root."""

from pathlib import Path

from .types import TargetLayout, TargetPaths


def resolve_paths(layout: TargetLayout, output_root: Path) -> TargetPaths:
    """
    Pure path computation, no filesystem access.

    If the output root is already the target's home (e.g. `.opencode`, or
    `opencode` for ~/.config/opencode) artifacts go directly under it,
    otherwise under `<root>/<dot_dir>`.
    """
    root = Path(output_root)
    home = root if root.name in layout.home_names else root / layout.dot_dir
    config_base = root if layout.config_at_output_root else home
    return TargetPaths(
        root=root,
        home=home,
        config_path=config_base / layout.config_filename,
        directories={subdir: home / subdir for subdir in layout.subdirs},
    )

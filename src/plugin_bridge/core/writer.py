"""
Generic bundle writer shared by every target.

A target only contributes a TargetLayout; the sequence is always:
resolve paths -> ensure dirs -> merge config (with backup) -> artifacts.
Errors propagate and nothing is rolled back.
"""

from pathlib import Path
from typing import Any, Dict, Optional

from .files import backup_file, copy_dir, ensure_dir, path_exists, read_json, write_json, write_text
from .merge import merge_config
from .paths import resolve_paths
from .types import Advisory, AdvisoryKind, Bundle, TargetLayout, WriteResult


def _backup(path: Path, result: WriteResult) -> None:
    backup_path = backup_file(path)
    if backup_path:
        result.advisories.append(
            Advisory(
                AdvisoryKind.BACKUP_CREATED,
                f"Backed up existing {path.name} to {backup_path}",
                path=backup_path,
            )
        )


def _incoming_config(layout: TargetLayout, bundle: Bundle) -> Optional[Dict[str, Any]]:
    config: Dict[str, Any] = dict(bundle.config) if bundle.config is not None else {}
    if bundle.servers and layout.server_key:
        config[layout.server_key] = dict(bundle.servers)
    if bundle.config is None and not bundle.servers:
        return None
    return config


def _load_existing(config_path: Path, result: WriteResult) -> Optional[Dict[str, Any]]:
    if not path_exists(config_path):
        return None
    try:
        existing = read_json(config_path)
    except ValueError:
        existing = None
    if not isinstance(existing, dict):
        result.advisories.append(
            Advisory(
                AdvisoryKind.CONFIG_REPLACED,
                f"Warning: existing {config_path.name} could not be parsed and will be replaced.",
                path=config_path,
            )
        )
        return None
    return existing


def write_config(layout: TargetLayout, config_path: Path, incoming: Dict[str, Any], result: WriteResult) -> None:
    _backup(config_path, result)
    existing = _load_existing(config_path, result)
    merged = merge_config(incoming, existing, layout.mergeable_keys, layout.config_strategy)
    write_json(config_path, merged)
    result.config_path = config_path


def write_bundle(layout: TargetLayout, output_root: Path, bundle: Bundle) -> WriteResult:
    """
    Materialize a converter's bundle under `output_root`.

    Returns:
        WriteResult listing written files and advisories (backups, config
        fallbacks). All writes are complete when this returns.
    """
    paths = resolve_paths(layout, Path(output_root))
    result = WriteResult(root=paths.root, home=paths.home)

    ensure_dir(paths.root)
    ensure_dir(paths.home)

    incoming = _incoming_config(layout, bundle)
    if incoming is not None:
        write_config(layout, paths.config_path, incoming, result)

    for kind in layout.file_kinds:
        for artifact in bundle.files.get(kind.name, []):
            dest = paths.directory(kind.subdir) / kind.relative_path(artifact.name)
            _backup(dest, result)
            write_text(dest, artifact.content + "\n")
            result.files_written.append(dest)

    for kind in layout.directory_kinds:
        for artifact in bundle.directories.get(kind.name, []):
            dest = paths.directory(kind.subdir) / artifact.name
            copy_dir(artifact.source_dir, dest)
            result.directories_copied.append(dest)

    return result

"""
Filesystem primitives used by every target writer.

All functions take Path objects and raise on failure; nothing here swallows
OSError.
"""

import json
import os
import shutil
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional


def path_exists(path: Path) -> bool:
    return Path(path).exists()


def ensure_dir(path: Path) -> None:
    Path(path).mkdir(parents=True, exist_ok=True)


def read_json(path: Path) -> Any:
    """Raises ValueError (JSONDecodeError/UnicodeDecodeError) on malformed content."""
    return json.loads(Path(path).read_text(encoding="utf-8"))


def write_json(path: Path, data: Dict[str, Any]) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")


def write_text(path: Path, content: str) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


def copy_dir(source: Path, destination: Path) -> None:
    """Merge-copy: files already at the destination but absent from source stay."""
    shutil.copytree(source, destination, dirs_exist_ok=True)


def _backup_stamp() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H-%M-%S-%fZ")


def backup_file(path: Path) -> Optional[Path]:
    """
    Copy an existing file to `<name>.bak.<timestamp>` before it is overwritten.

    Returns:
        The backup path, or None if nothing existed at `path`.
    """
    path = Path(path)
    if not path.is_file():
        return None

    data = path.read_bytes()
    stamp = _backup_stamp()
    candidate = path.with_name(f"{path.name}.bak.{stamp}")
    counter = 0
    while True:
        try:
            with open(candidate, "xb") as fh:
                fh.write(data)
                fh.flush()
                os.fsync(fh.fileno())
            break
        except FileExistsError:
            counter += 1
            candidate = path.with_name(f"{path.name}.bak.{stamp}-{counter}")

    shutil.copystat(path, candidate)
    return candidate

"""YAML frontmatter and TOML command formatting."""

import json
import re
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml

_FRONTMATTER_RE = re.compile(r"^---\r?\n(.*?)\r?\n---\r?\n?(.*)$", re.DOTALL)


def parse_frontmatter(text: str, source: Optional[Path] = None) -> Tuple[Dict[str, Any], str]:
    """
    Split `---` delimited YAML from the body. Missing frontmatter -> ({}, text).

    Raises:
        ValueError: if the YAML is malformed or not a mapping.
    """
    match = _FRONTMATTER_RE.match(text)
    if not match:
        return {}, text
    where = f" in {source}" if source else ""
    try:
        data = yaml.safe_load(match.group(1)) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid frontmatter{where}: {e}") from e
    if not isinstance(data, dict):
        raise ValueError(f"Frontmatter{where} must be a YAML mapping")
    return data, match.group(2).lstrip("\n")


def format_frontmatter(data: Dict[str, Any], body: str) -> str:
    fields = {k: v for k, v in data.items() if v is not None}
    if not fields:
        return body
    dumped = yaml.safe_dump(fields, default_flow_style=False, allow_unicode=True, sort_keys=False)
    return f"---\n{dumped}---\n\n{body}"


def to_toml(description: str, prompt: str) -> str:
    """Gemini command file: basic-string description, multi-line prompt."""
    escaped_prompt = prompt.replace("\\", "\\\\").replace('"""', '\\"\\"\\"')
    lines = [
        f"description = {json.dumps(description, ensure_ascii=False)}",
        'prompt = """',
        escaped_prompt,
        '"""',
    ]
    return "\n".join(lines)

"""Name normalization shared by the converters."""

import re
from typing import Set

_SLASHES = re.compile(r"[\\/]+")
_SEPARATORS = re.compile(r"[:\s]+")
_INVALID = re.compile(r"[^a-z0-9_-]+")
_DASHES = re.compile(r"-+")


def normalize_name(value: str) -> str:
    trimmed = value.strip()
    if not trimmed:
        return "item"
    normalized = trimmed.lower()
    normalized = _SLASHES.sub("-", normalized)
    normalized = _SEPARATORS.sub("-", normalized)
    normalized = _INVALID.sub("-", normalized)
    normalized = _DASHES.sub("-", normalized).strip("-")
    return normalized or "item"


def unique_name(base: str, used: Set[str]) -> str:
    """`base`, then `base-2`, `base-3`, ... Records the result in `used`."""
    if base not in used:
        used.add(base)
        return base
    index = 2
    while f"{base}-{index}" in used:
        index += 1
    name = f"{base}-{index}"
    used.add(name)
    return name


def sanitize_description(value: str, max_length: int = 1024) -> str:
    normalized = " ".join(value.split())
    if len(normalized) <= max_length:
        return normalized
    ellipsis = "..."
    return normalized[: max(0, max_length - len(ellipsis))].rstrip() + ellipsis

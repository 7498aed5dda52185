"""Core abstractions for Plugin Bridge."""

from .types import Advisory, AdvisoryKind, Bundle, ConvertOptions, TargetLayout, WriteResult
from .target import Target, target_registry
from .writer import write_bundle
from .loader import load_claude_plugin

__all__ = [
    "Advisory",
    "AdvisoryKind",
    "Bundle",
    "ConvertOptions",
    "TargetLayout",
    "WriteResult",
    "Target",
    "target_registry",
    "write_bundle",
    "load_claude_plugin",
]

"""
Convert/install flow: load plugin -> convert -> write, for the primary
target and any extra targets.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from plugin_bridge.config import Settings, resolve_target_output_root
from plugin_bridge.core.loader import load_claude_plugin
from plugin_bridge.core.target import Target, TargetRegistry, target_registry
from plugin_bridge.core.types import (
    AGENT_MODES,
    PERMISSION_MODES,
    Advisory,
    ClaudePlugin,
    ConvertOptions,
    WriteResult,
)
from plugin_bridge.services.plugin_source import resolved_plugin_path


@dataclass
class TargetOutcome:
    target: str
    root: Path
    result: WriteResult
    advisories: List[Advisory] = field(default_factory=list)


@dataclass
class RunReport:
    plugin_name: str
    outcomes: List[TargetOutcome] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)


def validate_options(options: ConvertOptions) -> None:
    if options.permissions not in PERMISSION_MODES:
        raise ValueError(f"Unknown permissions mode: {options.permissions}")
    if options.agent_mode not in AGENT_MODES:
        raise ValueError(f"Unknown agent mode: {options.agent_mode}")


def convert_and_write(target: Target, plugin: ClaudePlugin, options: ConvertOptions, root: Path) -> TargetOutcome:
    bundle = target.convert(plugin, options)
    result = target.write(root, bundle)
    return TargetOutcome(
        target=target.name,
        root=root,
        result=result,
        advisories=[*bundle.advisories, *result.advisories],
    )


def run_targets(
    plugin: ClaudePlugin,
    target_name: str,
    extra_targets: List[str],
    options: ConvertOptions,
    output_root: Path,
    settings: Settings,
    has_explicit_output: bool = True,
    registry: TargetRegistry = target_registry,
) -> RunReport:
    target = registry.require(target_name)
    validate_options(options)

    report = RunReport(plugin_name=plugin.manifest.name)
    primary_root = resolve_target_output_root(target, output_root, settings, has_explicit_output)
    report.outcomes.append(convert_and_write(target, plugin, options, primary_root))

    for extra in extra_targets:
        handler = registry.get(extra)
        if handler is None:
            report.skipped.append(extra)
            continue
        extra_root = resolve_target_output_root(handler, output_root / extra, settings, has_explicit_output)
        report.outcomes.append(convert_and_write(handler, plugin, options, extra_root))

    return report


def run_convert(
    source: str,
    target_name: str,
    settings: Settings,
    output: Optional[str] = None,
    extra_targets: Optional[List[str]] = None,
    options: Optional[ConvertOptions] = None,
) -> RunReport:
    target_registry.require(target_name)
    plugin = load_claude_plugin(settings.resolve_path(source))
    return run_targets(
        plugin,
        target_name,
        extra_targets or [],
        options or ConvertOptions(),
        settings.resolve_output_root(output),
        settings,
    )


def run_install(
    reference: str,
    target_name: str,
    settings: Settings,
    output: Optional[str] = None,
    extra_targets: Optional[List[str]] = None,
    options: Optional[ConvertOptions] = None,
) -> RunReport:
    target_registry.require(target_name)
    has_explicit_output = bool(output and output.strip())
    with resolved_plugin_path(reference, settings) as plugin_path:
        plugin = load_claude_plugin(plugin_path)
        return run_targets(
            plugin,
            target_name,
            extra_targets or [],
            options or ConvertOptions(),
            settings.resolve_output_root(output, install=True),
            settings,
            has_explicit_output=has_explicit_output,
        )

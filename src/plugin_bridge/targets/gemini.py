"""
Gemini CLI target.

Output structure (under .gemini/):
- skills/<name>/SKILL.md   (generated from Claude agents)
- skills/<name>/           (Claude skills, copied as-is)
- commands/<path>.toml     (Claude commands; `a:b` -> a/b.toml)
- settings.json            (mcpServers merged into existing settings)

Reference: https://github.com/google-gemini/gemini-cli/blob/main/docs/cli/commands.md
"""

import re
from typing import Dict, List, Optional, Set

from plugin_bridge.core.frontmatter import format_frontmatter, to_toml
from plugin_bridge.core.naming import normalize_name, sanitize_description, unique_name
from plugin_bridge.core.target import Target, target_registry
from plugin_bridge.core.types import (
    Advisory,
    AdvisoryKind,
    Bundle,
    ClaudeAgent,
    ClaudeCommand,
    ClaudeMcpServer,
    ClaudePlugin,
    ConvertOptions,
    DirectoryArtifact,
    DirectoryKind,
    FileKind,
    MergeStrategy,
    TargetLayout,
    TextArtifact,
)

GEMINI_DESCRIPTION_MAX_LENGTH = 1024

GEMINI_LAYOUT = TargetLayout(
    name="gemini",
    dot_dir=".gemini",
    home_names=(".gemini",),
    config_filename="settings.json",
    mergeable_keys=("mcpServers",),
    server_key="mcpServers",
    config_strategy=MergeStrategy.USER_WINS,
    file_kinds=(
        FileKind("skills", "skills", "{name}/SKILL.md"),
        FileKind("commands", "commands", "{name}.toml"),
    ),
    directory_kinds=(DirectoryKind("skill_dirs", "skills"),),
)

_TASK_CALL = re.compile(r"^(\s*-?\s*)Task\s+([a-z][a-z0-9-]*)\(([^)]+)\)", re.MULTILINE)
_AGENT_REF = re.compile(
    r"@([a-z][a-z0-9-]*-(?:agent|reviewer|researcher|analyst|specialist|oracle|sentinel|guardian|strategist))",
    re.IGNORECASE,
)


def transform_content_for_gemini(body: str) -> str:
    """
    Rewrite Claude-specific syntax:
    - `Task agent-name(args)` -> `Use the agent-name skill to: args`
    - `.claude/` and `~/.claude/` -> `.gemini/` and `~/.gemini/`
    - `@agent-name` -> `the agent-name skill`
    """
    result = _TASK_CALL.sub(
        lambda m: f"{m.group(1)}Use the {normalize_name(m.group(2))} skill to: {m.group(3).strip()}",
        body,
    )
    result = result.replace("~/.claude/", "~/.gemini/").replace(".claude/", ".gemini/")
    return _AGENT_REF.sub(lambda m: f"the {normalize_name(m.group(1))} skill", result)


def convert_agent_to_skill(agent: ClaudeAgent, used_names: Set[str]) -> TextArtifact:
    name = unique_name(normalize_name(agent.name), used_names)
    description = sanitize_description(
        agent.description or f"Use this skill for {agent.name} tasks",
        GEMINI_DESCRIPTION_MAX_LENGTH,
    )

    body = transform_content_for_gemini(agent.body.strip())
    if agent.capabilities:
        capabilities = "\n".join(f"- {c}" for c in agent.capabilities)
        body = f"## Capabilities\n{capabilities}\n\n{body}".strip()
    if not body:
        body = f"Instructions converted from the {agent.name} agent."

    return TextArtifact(name=name, content=format_frontmatter({"name": name, "description": description}, body))


def resolve_command_path(name: str) -> List[str]:
    return [normalize_name(segment) for segment in name.split(":")]


def convert_command(command: ClaudeCommand, used_names: Set[str]) -> TextArtifact:
    # Namespaces become directories: workflows:plan -> workflows/plan
    path_key = unique_name("/".join(resolve_command_path(command.name)), used_names)

    description = command.description or f"Converted from Claude command {command.name}"
    prompt = transform_content_for_gemini(command.body.strip())
    if command.argument_hint:
        prompt += "\n\nUser request: {{args}}"

    return TextArtifact(name=path_key, content=to_toml(description, prompt))


def convert_mcp_servers(servers: Dict[str, ClaudeMcpServer]) -> Optional[Dict[str, dict]]:
    if not servers:
        return None
    result: Dict[str, dict] = {}
    for name, server in servers.items():
        entry: dict = {}
        if server.is_remote:
            if server.url:
                entry["url"] = server.url
            if server.headers:
                entry["headers"] = dict(server.headers)
        elif server.command:
            entry["command"] = server.command
            if server.args:
                entry["args"] = list(server.args)
            if server.env:
                entry["env"] = dict(server.env)
        result[name] = entry
    return result


def convert_claude_to_gemini(plugin: ClaudePlugin, _options: ConvertOptions) -> Bundle:
    used_skill_names: Set[str] = set()
    used_command_names: Set[str] = set()

    skill_dirs = [DirectoryArtifact(name=s.name, source_dir=s.source_dir) for s in plugin.skills]
    for skill in skill_dirs:
        used_skill_names.add(normalize_name(skill.name))

    bundle = Bundle(
        servers=convert_mcp_servers(plugin.mcp_servers),
        files={
            "skills": [convert_agent_to_skill(a, used_skill_names) for a in plugin.agents],
            "commands": [convert_command(c, used_command_names) for c in plugin.commands],
        },
        directories={"skill_dirs": skill_dirs},
    )

    if plugin.hooks:
        bundle.advisories.append(
            Advisory(
                AdvisoryKind.HOOKS_SKIPPED,
                "Warning: Gemini CLI hooks use a different format (BeforeTool/AfterTool with matchers). "
                "Hooks were skipped during conversion.",
            )
        )

    return bundle


target_registry.register(
    Target(
        name="gemini",
        display_name="Gemini CLI",
        layout=GEMINI_LAYOUT,
        convert=convert_claude_to_gemini,
        project_scoped=True,
    )
)

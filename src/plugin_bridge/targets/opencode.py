"""
OpenCode target.
Converts Claude plugin agents/commands/skills to OpenCode format.

Output structure:
- opencode.json (main config at the output root; mcp/permission/tools merged)
- .opencode/agents/*.md (agents with frontmatter: description, mode, model, temperature)
- .opencode/commands/*.md (custom commands)
- .opencode/plugins/converted-hooks.ts (hooks that have an OpenCode event)
- .opencode/skills/<skill-name>/ (copied as-is)

When the output root is `.opencode` or `~/.config/opencode` everything is
written directly into it.

Reference: https://opencode.ai/docs/config/
           https://opencode.ai/docs/agents/
           https://opencode.ai/docs/plugins/
"""

import json
import re
from typing import Any, Dict, List, Optional, Set, Tuple

from plugin_bridge.core.frontmatter import format_frontmatter
from plugin_bridge.core.naming import normalize_name, sanitize_description, unique_name
from plugin_bridge.core.target import Target, target_registry
from plugin_bridge.core.types import (
    Advisory,
    AdvisoryKind,
    Bundle,
    ClaudeAgent,
    ClaudeCommand,
    ClaudeHooks,
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

OPENCODE_SCHEMA = "https://opencode.ai/config.json"

OPENCODE_LAYOUT = TargetLayout(
    name="opencode",
    dot_dir=".opencode",
    # Global install: ~/.config/opencode; project install: .opencode
    home_names=("opencode", ".opencode"),
    config_filename="opencode.json",
    mergeable_keys=("mcp", "permission", "tools"),
    server_key="mcp",
    config_strategy=MergeStrategy.PLUGIN_WINS,
    config_at_output_root=True,
    file_kinds=(
        FileKind("agents", "agents", "{name}.md"),
        FileKind("commands", "commands", "{name}.md"),
        FileKind("plugins", "plugins", "{name}"),
    ),
    directory_kinds=(DirectoryKind("skills", "skills"),),
)

# =============================================================================
# TOOL / PERMISSION MAPPING
# =============================================================================

OPENCODE_TOOLS = [
    "read", "write", "edit", "bash", "grep", "glob", "list",
    "webfetch", "skill", "patch", "task", "todowrite", "todoread",
]

CLAUDE_TO_OPENCODE_TOOLS = {
    "read": "read",
    "write": "write",
    "edit": "edit",
    "multiedit": "edit",
    "notebookedit": "edit",
    "bash": "bash",
    "grep": "grep",
    "glob": "glob",
    "ls": "list",
    "webfetch": "webfetch",
    "websearch": "webfetch",
    "skill": "skill",
    "task": "task",
    "todowrite": "todowrite",
    "todoread": "todoread",
}

_TOOL_SPEC = re.compile(r"^\s*([A-Za-z]+)\s*(?:\((.*)\))?\s*$")

MODEL_ALIASES = {
    "sonnet": "anthropic/claude-sonnet-4-5",
    "opus": "anthropic/claude-opus-4-1",
    "haiku": "anthropic/claude-haiku-4-5",
}

# Claude hook event -> OpenCode plugin event
HOOK_EVENT_MAP = {
    "PreToolUse": "tool.execute.before",
    "PostToolUse": "tool.execute.after",
    "SessionStart": "session.created",
    "Stop": "session.idle",
}
TOOL_EVENTS = {"tool.execute.before", "tool.execute.after"}
HOOKS_PLUGIN_NAME = "converted-hooks.ts"


def parse_tool_spec(spec: str) -> Tuple[Optional[str], Optional[str]]:
    """`Bash(git diff:*)` -> ("bash", "git diff *"); `Read` -> ("read", None)."""
    match = _TOOL_SPEC.match(spec)
    if not match:
        return None, None
    tool = CLAUDE_TO_OPENCODE_TOOLS.get(match.group(1).lower())
    pattern = match.group(2)
    if pattern:
        pattern = pattern.replace(":*", " *").strip()
    return tool, pattern or None


def build_permissions(commands: List[ClaudeCommand], mode: str) -> Dict[str, Any]:
    if mode == "none":
        return {}
    if mode == "broad":
        return {
            "permission": {tool: "allow" for tool in OPENCODE_TOOLS},
            "tools": {tool: True for tool in OPENCODE_TOOLS},
        }

    allowed: Set[str] = set()
    bash_patterns: List[str] = []
    for command in commands:
        for spec in command.allowed_tools:
            tool, pattern = parse_tool_spec(spec)
            if not tool:
                continue
            if tool == "bash" and pattern:
                if pattern not in bash_patterns:
                    bash_patterns.append(pattern)
            else:
                allowed.add(tool)

    permission: Dict[str, Any] = {tool: "allow" if tool in allowed else "deny" for tool in OPENCODE_TOOLS}
    if bash_patterns and "bash" not in allowed:
        bash_rules = {pattern: "allow" for pattern in bash_patterns}
        bash_rules["*"] = "deny"
        permission["bash"] = bash_rules
    tools = {tool: tool in allowed or (tool == "bash" and bool(bash_patterns)) for tool in OPENCODE_TOOLS}
    return {"permission": permission, "tools": tools}


def normalize_model(model: Optional[str]) -> Optional[str]:
    """OpenCode uses provider/model syntax."""
    if not model or model.lower() == "inherit":
        return None
    if "/" in model:
        return model
    lowered = model.lower()
    if lowered in MODEL_ALIASES:
        return MODEL_ALIASES[lowered]
    if lowered.startswith(("gpt-", "o1", "o3", "o4")):
        return f"openai/{model}"
    if lowered.startswith("gemini-"):
        return f"google/{model}"
    return f"anthropic/{model}"


def infer_temperature(agent: ClaudeAgent) -> float:
    sample = f"{agent.name} {agent.description or ''}".lower()
    if re.search(r"review|audit|security|sentinel|oracle|lint|verif|guardian", sample):
        return 0.1
    if re.search(r"plan|architect|strategist|analy|research", sample):
        return 0.2
    if re.search(r"doc|readme|changelog|editor|writer", sample):
        return 0.3
    if re.search(r"brainstorm|creative|ideate|design|concept", sample):
        return 0.6
    return 0.3


def transform_content_for_opencode(body: str) -> str:
    return body.replace("~/.claude/", "~/.config/opencode/").replace(".claude/", ".opencode/")


# =============================================================================
# CONVERSION FUNCTIONS
# =============================================================================


def convert_agent(agent: ClaudeAgent, options: ConvertOptions, used_names: Set[str]) -> TextArtifact:
    name = unique_name(normalize_name(agent.name), used_names)
    frontmatter: Dict[str, Any] = {
        "description": sanitize_description(agent.description or f"Use this agent for {agent.name} tasks"),
        "mode": options.agent_mode,
        "model": normalize_model(agent.model),
    }
    if options.infer_temperature:
        frontmatter["temperature"] = infer_temperature(agent)

    body = transform_content_for_opencode(agent.body.strip())
    if agent.capabilities:
        capabilities = "\n".join(f"- {c}" for c in agent.capabilities)
        body = f"## Capabilities\n{capabilities}\n\n{body}".strip()
    if not body:
        body = f"Instructions converted from the {agent.name} agent."

    return TextArtifact(name=name, content=format_frontmatter(frontmatter, body))


def convert_command(command: ClaudeCommand, used_names: Set[str]) -> TextArtifact:
    name = unique_name(normalize_name(command.name), used_names)
    frontmatter = {
        "description": command.description or f"Converted from Claude command {command.name}",
        "model": normalize_model(command.model),
    }
    body = transform_content_for_opencode(command.body.strip())
    return TextArtifact(name=name, content=format_frontmatter(frontmatter, body))


def convert_mcp_servers(servers: Dict[str, ClaudeMcpServer]) -> Optional[Dict[str, dict]]:
    if not servers:
        return None
    result: Dict[str, dict] = {}
    for name, server in servers.items():
        if server.command and not server.is_remote:
            entry: Dict[str, Any] = {"type": "local", "command": [server.command, *server.args]}
            if server.env:
                entry["environment"] = dict(server.env)
        else:
            entry = {"type": "remote", "url": server.url or ""}
            if server.headers:
                entry["headers"] = dict(server.headers)
        entry["enabled"] = True
        result[name] = entry
    return result


def _render_handler(event: str, blocks: List[str]) -> str:
    signature = "async (input) =>" if event in TOOL_EVENTS else "async () =>"
    inner = "\n".join(blocks)
    return f'    "{event}": {signature} {{\n{inner}\n    }},'


def convert_hooks(hooks: ClaudeHooks) -> Tuple[Optional[TextArtifact], List[Advisory]]:
    """Command hooks become one OpenCode plugin; everything else is reported."""
    handlers: Dict[str, List[str]] = {}
    skipped: List[str] = []

    for event, matchers in hooks.hooks.items():
        oc_event = HOOK_EVENT_MAP.get(event)
        if not oc_event:
            skipped.append(event)
            continue
        for matcher in matchers:
            for hook in matcher.hooks:
                if hook.type != "command" or not hook.command:
                    skipped.append(f"{event} ({hook.type})")
                    continue
                run = f"await $`sh -c ${{{json.dumps(hook.command)}}}`"
                if oc_event in TOOL_EVENTS and matcher.matcher != "*":
                    block = f"      if (matches(input.tool, {json.dumps(matcher.matcher)})) {{\n        {run}\n      }}"
                else:
                    block = f"      {run}"
                handlers.setdefault(oc_event, []).append(block)

    advisories = []
    if skipped:
        advisories.append(
            Advisory(
                AdvisoryKind.HOOKS_SKIPPED,
                f"Warning: OpenCode has no equivalent for hooks: {', '.join(sorted(set(skipped)))}. They were skipped.",
            )
        )
    if not handlers:
        return None, advisories

    rendered = "\n".join(_render_handler(event, blocks) for event, blocks in handlers.items())
    content = (
        'import type { Plugin } from "@opencode-ai/plugin"\n'
        "\n"
        "const matches = (tool: string, pattern: string) =>\n"
        '  new RegExp(`^(?:${pattern})$`, "i").test(tool)\n'
        "\n"
        "export const ConvertedHooks: Plugin = async ({ $ }) => {\n"
        "  return {\n"
        f"{rendered}\n"
        "  }\n"
        "}"
    )
    return TextArtifact(name=HOOKS_PLUGIN_NAME, content=content), advisories


def convert_claude_to_opencode(plugin: ClaudePlugin, options: ConvertOptions) -> Bundle:
    used_agent_names: Set[str] = set()
    used_command_names: Set[str] = set()

    config: Dict[str, Any] = {"$schema": OPENCODE_SCHEMA}
    config.update(build_permissions(plugin.commands, options.permissions))

    bundle = Bundle(
        config=config,
        servers=convert_mcp_servers(plugin.mcp_servers),
        files={
            "agents": [convert_agent(a, options, used_agent_names) for a in plugin.agents],
            "commands": [convert_command(c, used_command_names) for c in plugin.commands],
            "plugins": [],
        },
        directories={
            "skills": [DirectoryArtifact(name=s.name, source_dir=s.source_dir) for s in plugin.skills],
        },
    )

    if plugin.hooks:
        hook_plugin, advisories = convert_hooks(plugin.hooks)
        if hook_plugin:
            bundle.files["plugins"].append(hook_plugin)
        bundle.advisories.extend(advisories)

    return bundle


target_registry.register(
    Target(
        name="opencode",
        display_name="OpenCode",
        layout=OPENCODE_LAYOUT,
        convert=convert_claude_to_opencode,
    )
)

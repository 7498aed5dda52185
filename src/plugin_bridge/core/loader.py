"""
Claude plugin loader.

Layout read:
- .claude-plugin/plugin.json (manifest, required)
- agents/**/*.md, commands/**/*.md, skills/<name>/SKILL.md
- hooks/hooks.json (or manifest "hooks")
- .mcp.json (or manifest "mcpServers")
"""

from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .files import read_json
from .frontmatter import parse_frontmatter
from .types import (
    ClaudeAgent,
    ClaudeCommand,
    ClaudeHooks,
    ClaudeManifest,
    ClaudeMcpServer,
    ClaudePlugin,
    ClaudeSkill,
    HookCommand,
    HookMatcher,
)

MANIFEST_PATH = Path(".claude-plugin") / "plugin.json"


def _resolve_within(root: Path, relative: str) -> Path:
    target = (root / relative).resolve()
    try:
        target.relative_to(root)
    except ValueError:
        raise ValueError(f"Path escapes plugin root: {relative}") from None
    return target


def _dirs(root: Path, default: str, extra: Union[str, List[str], None]) -> List[Path]:
    dirs = [root / default]
    if isinstance(extra, str):
        extra = [extra]
    for entry in extra or []:
        resolved = _resolve_within(root, entry)
        if resolved not in dirs:
            dirs.append(resolved)
    return [d for d in dirs if d.is_dir()]


def _as_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [v.strip() for v in value.split(",") if v.strip()]
    return [str(v) for v in value]


def _optional_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(value)


def load_agents(dirs: List[Path]) -> List[ClaudeAgent]:
    agents = []
    for directory in dirs:
        for path in sorted(directory.rglob("*.md")):
            meta, body = parse_frontmatter(path.read_text(encoding="utf-8"), path)
            agents.append(
                ClaudeAgent(
                    name=str(meta.get("name") or path.stem),
                    description=_optional_str(meta.get("description")),
                    capabilities=_as_list(meta.get("capabilities")),
                    model=_optional_str(meta.get("model")),
                    body=body.strip(),
                    source_path=path,
                )
            )
    return agents


def load_commands(dirs: List[Path]) -> List[ClaudeCommand]:
    commands = []
    for directory in dirs:
        for path in sorted(directory.rglob("*.md")):
            meta, body = parse_frontmatter(path.read_text(encoding="utf-8"), path)
            default_name = ":".join(path.relative_to(directory).with_suffix("").parts)
            commands.append(
                ClaudeCommand(
                    name=str(meta.get("name") or default_name),
                    description=_optional_str(meta.get("description")),
                    argument_hint=_optional_str(meta.get("argument-hint")),
                    model=_optional_str(meta.get("model")),
                    allowed_tools=_as_list(meta.get("allowed-tools")),
                    disable_model_invocation=bool(meta.get("disable-model-invocation", False)),
                    body=body.strip(),
                    source_path=path,
                )
            )
    return commands


def load_skills(dirs: List[Path]) -> List[ClaudeSkill]:
    skills = []
    for directory in dirs:
        for skill_dir in sorted(p for p in directory.iterdir() if p.is_dir()):
            skill_file = skill_dir / "SKILL.md"
            if not skill_file.exists():
                continue
            meta, _ = parse_frontmatter(skill_file.read_text(encoding="utf-8"), skill_file)
            skills.append(
                ClaudeSkill(
                    name=str(meta.get("name") or skill_dir.name),
                    description=_optional_str(meta.get("description")),
                    source_dir=skill_dir,
                    skill_path=skill_file,
                )
            )
    return skills


def parse_hooks(data: Dict[str, Any]) -> ClaudeHooks:
    events = data.get("hooks", data)
    hooks: Dict[str, List[HookMatcher]] = {}
    for event, matchers in (events or {}).items():
        parsed = []
        for entry in matchers or []:
            commands = [
                HookCommand(
                    type=str(h.get("type", "command")),
                    command=str(h.get("command", "")),
                )
                for h in entry.get("hooks", [])
            ]
            parsed.append(HookMatcher(matcher=str(entry.get("matcher") or "*"), hooks=commands))
        hooks[event] = parsed
    return ClaudeHooks(hooks=hooks)


def parse_mcp_servers(data: Dict[str, Any]) -> Dict[str, ClaudeMcpServer]:
    servers = data.get("mcpServers", data)
    result = {}
    for name, server in (servers or {}).items():
        result[name] = ClaudeMcpServer(
            command=server.get("command"),
            args=[str(a) for a in server.get("args", [])],
            env=dict(server.get("env", {})),
            url=server.get("url"),
            headers=dict(server.get("headers", {})),
            type=server.get("type"),
        )
    return result


def _load_hooks(root: Path, manifest: Dict[str, Any]) -> Optional[ClaudeHooks]:
    declared = manifest.get("hooks")
    if isinstance(declared, dict):
        return parse_hooks(declared)
    path = _resolve_within(root, declared) if isinstance(declared, str) else root / "hooks" / "hooks.json"
    if not path.exists():
        return None
    return parse_hooks(read_json(path))


def _load_mcp(root: Path, manifest: Dict[str, Any]) -> Dict[str, ClaudeMcpServer]:
    declared = manifest.get("mcpServers")
    if isinstance(declared, dict):
        return parse_mcp_servers(declared)
    path = _resolve_within(root, declared) if isinstance(declared, str) else root / ".mcp.json"
    if not path.exists():
        return {}
    return parse_mcp_servers(read_json(path))


def load_claude_plugin(path: Path) -> ClaudePlugin:
    root = Path(path).expanduser().resolve()
    manifest_file = root / MANIFEST_PATH
    if not manifest_file.exists():
        raise FileNotFoundError(f"Could not find {MANIFEST_PATH} under {root}")

    raw = read_json(manifest_file)
    manifest = ClaudeManifest(
        name=str(raw.get("name") or root.name),
        version=str(raw.get("version", "0.0.0")),
        description=str(raw.get("description", "")),
        raw=raw,
    )

    return ClaudePlugin(
        root=root,
        manifest=manifest,
        agents=load_agents(_dirs(root, "agents", raw.get("agents"))),
        commands=load_commands(_dirs(root, "commands", raw.get("commands"))),
        skills=load_skills(_dirs(root, "skills", raw.get("skills"))),
        hooks=_load_hooks(root, raw),
        mcp_servers=_load_mcp(root, raw),
    )

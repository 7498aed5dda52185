"""Shared types and data structures for Plugin Bridge."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple


# =============================================================================
# SOURCE PLUGIN MODEL
# =============================================================================


@dataclass
class ClaudeManifest:
    name: str
    version: str = "0.0.0"
    description: str = ""
    raw: Dict[str, Any] = field(default_factory=dict)


@dataclass
class ClaudeAgent:
    name: str
    body: str
    source_path: Path
    description: Optional[str] = None
    capabilities: List[str] = field(default_factory=list)
    model: Optional[str] = None


@dataclass
class ClaudeCommand:
    name: str  # "plan" or namespaced "workflows:plan"
    body: str
    source_path: Path
    description: Optional[str] = None
    argument_hint: Optional[str] = None
    model: Optional[str] = None
    allowed_tools: List[str] = field(default_factory=list)
    disable_model_invocation: bool = False


@dataclass
class ClaudeSkill:
    name: str
    source_dir: Path
    skill_path: Path
    description: Optional[str] = None


REMOTE_MCP_TYPES = ("http", "sse")


@dataclass
class ClaudeMcpServer:
    command: Optional[str] = None
    args: List[str] = field(default_factory=list)
    env: Dict[str, str] = field(default_factory=dict)
    url: Optional[str] = None
    headers: Dict[str, str] = field(default_factory=dict)
    type: Optional[str] = None  # "stdio", "http" or "sse"; inferred when absent

    @property
    def is_remote(self) -> bool:
        if self.type:
            return self.type in REMOTE_MCP_TYPES
        return bool(self.url) and not self.command


@dataclass
class HookCommand:
    type: str
    command: str = ""


@dataclass
class HookMatcher:
    matcher: str = "*"
    hooks: List[HookCommand] = field(default_factory=list)


@dataclass
class ClaudeHooks:
    """Hook definitions keyed by Claude event name (PreToolUse, Stop, ...)."""
    hooks: Dict[str, List[HookMatcher]] = field(default_factory=dict)

    def __bool__(self) -> bool:
        return any(self.hooks.values())


@dataclass
class ClaudePlugin:
    root: Path
    manifest: ClaudeManifest
    agents: List[ClaudeAgent] = field(default_factory=list)
    commands: List[ClaudeCommand] = field(default_factory=list)
    skills: List[ClaudeSkill] = field(default_factory=list)
    hooks: Optional[ClaudeHooks] = None
    mcp_servers: Dict[str, ClaudeMcpServer] = field(default_factory=dict)


PERMISSION_MODES = ("none", "broad", "from-commands")
AGENT_MODES = ("primary", "subagent")


@dataclass
class ConvertOptions:
    agent_mode: str = "subagent"
    infer_temperature: bool = True
    permissions: str = "broad"


# =============================================================================
# TARGET BUNDLE MODEL
# =============================================================================


class AdvisoryKind(Enum):
    BACKUP_CREATED = "backup_created"
    CONFIG_REPLACED = "config_replaced"
    HOOKS_SKIPPED = "hooks_skipped"


@dataclass
class Advisory:
    """Side-channel note for the caller. Never changes control flow."""
    kind: AdvisoryKind
    message: str
    path: Optional[Path] = None

    @property
    def is_warning(self) -> bool:
        return self.kind != AdvisoryKind.BACKUP_CREATED


@dataclass
class TextArtifact:
    name: str
    content: str


@dataclass
class DirectoryArtifact:
    name: str
    source_dir: Path


@dataclass
class Bundle:
    """
    What a converter wants written for one target.

    `files` and `directories` are keyed by the artifact kind names declared
    in the target's layout. `servers` is merged into the layout's server key
    of the config object.
    """
    config: Optional[Dict[str, Any]] = None
    servers: Optional[Dict[str, Any]] = None
    files: Dict[str, List[TextArtifact]] = field(default_factory=dict)
    directories: Dict[str, List[DirectoryArtifact]] = field(default_factory=dict)
    advisories: List[Advisory] = field(default_factory=list)


class MergeStrategy(Enum):
    """Who wins a top-level config key present both on disk and in the plugin."""
    USER_WINS = "user_wins"
    PLUGIN_WINS = "plugin_wins"


@dataclass(frozen=True)
class FileKind:
    name: str
    subdir: str
    filename: str  # template, e.g. "{name}.md" or "{name}/SKILL.md"

    def relative_path(self, artifact_name: str) -> str:
        return self.filename.format(name=artifact_name)


@dataclass(frozen=True)
class DirectoryKind:
    name: str
    subdir: str


@dataclass(frozen=True)
class TargetLayout:
    """On-disk conventions of one target tool."""
    name: str
    dot_dir: str
    home_names: Tuple[str, ...]
    config_filename: str
    mergeable_keys: Tuple[str, ...] = ()
    server_key: Optional[str] = None
    config_strategy: MergeStrategy = MergeStrategy.USER_WINS
    config_at_output_root: bool = False
    file_kinds: Tuple[FileKind, ...] = ()
    directory_kinds: Tuple[DirectoryKind, ...] = ()

    @property
    def subdirs(self) -> List[str]:
        seen: List[str] = []
        for kind in (*self.file_kinds, *self.directory_kinds):
            if kind.subdir not in seen:
                seen.append(kind.subdir)
        return seen


@dataclass(frozen=True)
class TargetPaths:
    root: Path
    home: Path
    config_path: Path
    directories: Dict[str, Path]

    @property
    def is_home(self) -> bool:
        return self.root == self.home

    def directory(self, subdir: str) -> Path:
        return self.directories[subdir]


@dataclass
class WriteResult:
    root: Path
    home: Path
    config_path: Optional[Path] = None
    files_written: List[Path] = field(default_factory=list)
    directories_copied: List[Path] = field(default_factory=list)
    advisories: List[Advisory] = field(default_factory=list)

    @property
    def backups(self) -> List[Path]:
        return [a.path for a in self.advisories if a.kind == AdvisoryKind.BACKUP_CREATED and a.path]

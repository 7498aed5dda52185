"""Shared fixtures: a small Claude plugin on disk."""

import json
from pathlib import Path

import pytest

from plugin_bridge.core.types import ClaudeAgent, ClaudeCommand, ClaudeManifest, ClaudeMcpServer, ClaudePlugin, ClaudeSkill


def write_file(path: Path, content: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


@pytest.fixture
def plugin_dir(tmp_path) -> Path:
    """A Claude plugin with one agent, two commands, one skill, hooks and MCP servers."""
    root = tmp_path / "sample-plugin"
    write_file(
        root / ".claude-plugin" / "plugin.json",
        json.dumps({"name": "sample-plugin", "version": "1.2.0", "description": "Sample"}),
    )
    write_file(
        root / "agents" / "security-reviewer.md",
        "---\n"
        "name: Security Reviewer\n"
        "description: Security-focused agent\n"
        "capabilities:\n"
        "  - Threat modeling\n"
        "model: claude-sonnet-4-20250514\n"
        "---\n\n"
        "Read .claude/settings.json and focus on vulnerabilities.\n",
    )
    write_file(
        root / "commands" / "workflows" / "plan.md",
        "---\n"
        "description: Planning command\n"
        "argument-hint: \"[FOCUS]\"\n"
        "allowed-tools: Read, Bash(git diff:*)\n"
        "---\n\n"
        "Plan the work.\n",
    )
    write_file(root / "commands" / "review.md", "Review the change.\n")
    write_file(
        root / "skills" / "skill-one" / "SKILL.md",
        "---\nname: skill-one\ndescription: First skill\n---\n\nUse it.\n",
    )
    write_file(root / "skills" / "skill-one" / "reference" / "notes.md", "notes\n")
    write_file(
        root / "hooks" / "hooks.json",
        json.dumps(
            {
                "hooks": {
                    "PreToolUse": [
                        {"matcher": "Bash", "hooks": [{"type": "command", "command": "echo pre"}]}
                    ],
                    "Notification": [
                        {"hooks": [{"type": "command", "command": "notify-send hi"}]}
                    ],
                }
            }
        ),
    )
    write_file(
        root / ".mcp.json",
        json.dumps(
            {
                "mcpServers": {
                    "local": {"command": "echo", "args": ["hello"], "env": {"A": "1"}},
                    "remote": {"url": "https://mcp.example.com", "headers": {"X-Key": "k"}},
                }
            }
        ),
    )
    return root


@pytest.fixture
def fixture_plugin(tmp_path) -> ClaudePlugin:
    """In-memory plugin model for converter tests."""
    skill_dir = tmp_path / "plugin" / "skills" / "existing-skill"
    return ClaudePlugin(
        root=tmp_path / "plugin",
        manifest=ClaudeManifest(name="fixture", version="1.0.0"),
        agents=[
            ClaudeAgent(
                name="Security Reviewer",
                description="Security-focused agent",
                capabilities=["Threat modeling", "OWASP"],
                model="claude-sonnet-4-20250514",
                body="Focus on vulnerabilities.",
                source_path=tmp_path / "plugin" / "agents" / "security-reviewer.md",
            )
        ],
        commands=[
            ClaudeCommand(
                name="workflows:plan",
                description="Planning command",
                argument_hint="[FOCUS]",
                model="inherit",
                allowed_tools=["Read"],
                body="Plan the work.",
                source_path=tmp_path / "plugin" / "commands" / "workflows" / "plan.md",
            )
        ],
        skills=[
            ClaudeSkill(
                name="existing-skill",
                description="Existing skill",
                source_dir=skill_dir,
                skill_path=skill_dir / "SKILL.md",
            )
        ],
        mcp_servers={"local": ClaudeMcpServer(command="echo", args=["hello"])},
    )


@pytest.fixture
def skill_source(tmp_path) -> Path:
    """A pass-through skill directory."""
    skill_dir = tmp_path / "source-skills" / "skill-one"
    write_file(skill_dir / "SKILL.md", "---\nname: skill-one\n---\n\nSkill body.\n")
    write_file(skill_dir / "scripts" / "run.sh", "#!/bin/sh\necho run\n")
    return skill_dir

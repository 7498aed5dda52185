"""Tests for the Claude -> OpenCode converter."""

from dataclasses import replace
from pathlib import Path

import pytest

from plugin_bridge.core.frontmatter import parse_frontmatter
from plugin_bridge.core.types import (
    AdvisoryKind,
    ClaudeAgent,
    ClaudeCommand,
    ClaudeHooks,
    ClaudeMcpServer,
    ConvertOptions,
    HookCommand,
    HookMatcher,
)
from plugin_bridge.targets.opencode import (
    HOOKS_PLUGIN_NAME,
    OPENCODE_TOOLS,
    convert_claude_to_opencode,
    infer_temperature,
    normalize_model,
    parse_tool_spec,
)


def test_agent_frontmatter(fixture_plugin) -> None:
    bundle = convert_claude_to_opencode(fixture_plugin, ConvertOptions(agent_mode="primary"))

    agent = bundle.files["agents"][0]
    assert agent.name == "security-reviewer"
    data, body = parse_frontmatter(agent.content)
    assert data["description"] == "Security-focused agent"
    assert data["mode"] == "primary"
    assert data["model"] == "anthropic/claude-sonnet-4-20250514"
    assert data["temperature"] == 0.1
    assert "- OWASP" in body


def test_temperature_can_be_disabled(fixture_plugin) -> None:
    bundle = convert_claude_to_opencode(fixture_plugin, ConvertOptions(infer_temperature=False))
    data, _ = parse_frontmatter(bundle.files["agents"][0].content)
    assert "temperature" not in data


def test_agent_body_paths_are_rewritten(fixture_plugin) -> None:
    agent = ClaudeAgent(name="helper", body="See .claude/notes and ~/.claude/global.", source_path=Path("/tmp/h.md"))
    bundle = convert_claude_to_opencode(replace(fixture_plugin, agents=[agent]), ConvertOptions())
    _, body = parse_frontmatter(bundle.files["agents"][0].content)
    assert body == "See .opencode/notes and ~/.config/opencode/global."


@pytest.mark.parametrize(
    "model, expected",
    [
        (None, None),
        ("inherit", None),
        ("sonnet", "anthropic/claude-sonnet-4-5"),
        ("claude-3-opus", "anthropic/claude-3-opus"),
        ("gpt-4o", "openai/gpt-4o"),
        ("gemini-2.5-pro", "google/gemini-2.5-pro"),
        ("openrouter/some-model", "openrouter/some-model"),
    ],
)
def test_normalize_model(model, expected) -> None:
    assert normalize_model(model) == expected


def test_infer_temperature_buckets() -> None:
    def agent(name, description=None):
        return ClaudeAgent(name=name, description=description, body="", source_path=Path("/tmp/a.md"))

    assert infer_temperature(agent("code-reviewer")) == 0.1
    assert infer_temperature(agent("planner")) == 0.2
    assert infer_temperature(agent("docs-writer")) == 0.3
    assert infer_temperature(agent("ideas", "Brainstorm new features")) == 0.6
    assert infer_temperature(agent("helper")) == 0.3


def test_commands_are_flat_markdown_files(fixture_plugin) -> None:
    bundle = convert_claude_to_opencode(fixture_plugin, ConvertOptions())
    command = bundle.files["commands"][0]
    assert command.name == "workflows-plan"
    data, body = parse_frontmatter(command.content)
    assert data == {"description": "Planning command"}
    assert body == "Plan the work."


def test_broad_permissions(fixture_plugin) -> None:
    bundle = convert_claude_to_opencode(fixture_plugin, ConvertOptions(permissions="broad"))
    assert bundle.config["$schema"] == "https://opencode.ai/config.json"
    assert set(bundle.config["permission"].values()) == {"allow"}
    assert all(bundle.config["tools"].values())


def test_no_permissions(fixture_plugin) -> None:
    bundle = convert_claude_to_opencode(fixture_plugin, ConvertOptions(permissions="none"))
    assert bundle.config == {"$schema": "https://opencode.ai/config.json"}


def test_permissions_from_commands(fixture_plugin) -> None:
    commands = [
        replace(fixture_plugin.commands[0], allowed_tools=["Read", "Bash(git diff:*)", "Bash(npm test)", "Unknown"]),
    ]
    bundle = convert_claude_to_opencode(replace(fixture_plugin, commands=commands), ConvertOptions(permissions="from-commands"))

    permission = bundle.config["permission"]
    assert permission["read"] == "allow"
    assert permission["write"] == "deny"
    assert permission["bash"] == {"git diff *": "allow", "npm test": "allow", "*": "deny"}
    assert bundle.config["tools"]["bash"] is True
    assert bundle.config["tools"]["edit"] is False
    assert set(permission) == set(OPENCODE_TOOLS)


def test_parse_tool_spec() -> None:
    assert parse_tool_spec("Read") == ("read", None)
    assert parse_tool_spec("Bash(git status:*)") == ("bash", "git status *")
    assert parse_tool_spec("Mystery") == (None, None)


def test_mcp_servers(fixture_plugin) -> None:
    servers = {
        "local": ClaudeMcpServer(command="npx", args=["-y", "pkg"], env={"TOKEN": "x"}),
        "remote": ClaudeMcpServer(url="https://mcp.example.com", headers={"X-Key": "k"}),
    }
    bundle = convert_claude_to_opencode(replace(fixture_plugin, mcp_servers=servers), ConvertOptions())
    assert bundle.servers == {
        "local": {"type": "local", "command": ["npx", "-y", "pkg"], "environment": {"TOKEN": "x"}, "enabled": True},
        "remote": {"type": "remote", "url": "https://mcp.example.com", "headers": {"X-Key": "k"}, "enabled": True},
    }


def test_hooks_become_plugin_and_unmapped_are_reported(fixture_plugin) -> None:
    hooks = ClaudeHooks(
        hooks={
            "PreToolUse": [HookMatcher("Bash", [HookCommand("command", "echo pre")])],
            "Stop": [HookMatcher("*", [HookCommand("command", "echo done")])],
            "Notification": [HookMatcher("*", [HookCommand("command", "notify")])],
        }
    )
    bundle = convert_claude_to_opencode(replace(fixture_plugin, hooks=hooks), ConvertOptions())

    plugins = bundle.files["plugins"]
    assert [p.name for p in plugins] == [HOOKS_PLUGIN_NAME]
    content = plugins[0].content
    assert '"tool.execute.before": async (input) =>' in content
    assert 'matches(input.tool, "Bash")' in content
    assert 'sh -c ${"echo pre"}' in content
    assert '"session.idle": async () =>' in content

    assert [a.kind for a in bundle.advisories] == [AdvisoryKind.HOOKS_SKIPPED]
    assert "Notification" in bundle.advisories[0].message


def test_no_hooks_no_plugin(fixture_plugin) -> None:
    bundle = convert_claude_to_opencode(fixture_plugin, ConvertOptions())
    assert bundle.files["plugins"] == []
    assert bundle.advisories == []


def test_duplicate_command_names_are_suffixed(fixture_plugin) -> None:
    commands = [
        ClaudeCommand(name="review", body="a", source_path=Path("/tmp/a.md")),
        ClaudeCommand(name="Review", body="b", source_path=Path("/tmp/b.md")),
    ]
    bundle = convert_claude_to_opencode(replace(fixture_plugin, commands=commands), ConvertOptions())
    assert [c.name for c in bundle.files["commands"]] == ["review", "review-2"]


def test_mcp_server_type_overrides_command(fixture_plugin) -> None:
    servers = {
        "http": ClaudeMcpServer(type="http", command="proxy", url="https://mcp.example.com/mcp"),
        "stdio": ClaudeMcpServer(type="stdio", command="srv", url="https://unused"),
    }
    bundle = convert_claude_to_opencode(replace(fixture_plugin, mcp_servers=servers), ConvertOptions())
    assert bundle.servers["http"] == {"type": "remote", "url": "https://mcp.example.com/mcp", "enabled": True}
    assert bundle.servers["stdio"] == {"type": "local", "command": ["srv"], "enabled": True}

# tests/test_filesystem.py
import json

import pytest

from claude_cmd.exceptions import FileSystemError
from claude_cmd.filesystem import GLOBAL, LOCAL, ClaudeConfig
from claude_cmd.frontmatter import parse_front_matter


# ═══════════════════════════════════════════════════════════════════
# Commands
# ═══════════════════════════════════════════════════════════════════

def test_no_commands_when_directory_missing(fs):
    assert fs.list_installed_commands() == []


def test_save_and_list_commands(fs):
    fs.save_command("git-helper.md", "content")
    fs.save_command("frontend/component.md", "content")

    assert fs.list_installed_commands() == ["frontend/component.md", "git-helper.md"]
    assert (fs.commands_dir / "frontend" / "component.md").read_text() == "content"


def test_is_command_installed(fs):
    fs.save_command("git-helper.md", "x")
    fs.save_command("frontend/component.md", "x")

    assert fs.is_command_installed("git-helper")
    assert fs.is_command_installed("frontend")
    assert fs.is_command_installed("component")
    assert not fs.is_command_installed("git")


def test_delete_command(fs):
    fs.save_command("git-helper.md", "x")

    assert fs.delete_command("git-helper.md") is True
    assert fs.list_installed_commands() == []


def test_delete_missing_command_raises(fs):
    with pytest.raises(FileSystemError):
        fs.delete_command("nope.md")


def test_command_path_cannot_escape(fs):
    with pytest.raises(FileSystemError, match="escapes"):
        fs.save_command("../../evil.md", "x")


# ═══════════════════════════════════════════════════════════════════
# Settings
# ═══════════════════════════════════════════════════════════════════

def test_missing_config_gives_defaults(fs):
    config = fs.get_claude_config()

    assert config.allowedTools == []
    assert config.securityProfile == "moderate"
    assert config.version == "1.0.0"


def test_save_config_stamps_last_updated(fs):
    path = fs.save_claude_config(ClaudeConfig(allowedTools=["Edit"], securityProfile="strict"))

    data = json.loads(path.read_text())
    assert data["allowedTools"] == ["Edit"]
    assert data["securityProfile"] == "strict"
    assert data["lastUpdated"]


def test_unknown_config_keys_survive_a_save(fs):
    fs.claude_dir.mkdir(parents=True)
    fs.config_file.write_text(json.dumps({"theme": "dark", "securityProfile": "permissive"}))

    config = fs.get_claude_config()
    fs.save_claude_config(config)

    data = json.loads(fs.config_file.read_text())
    assert data["theme"] == "dark"
    assert data["securityProfile"] == "permissive"


def test_corrupt_config_raises(fs):
    fs.claude_dir.mkdir(parents=True)
    fs.config_file.write_text("{broken")

    with pytest.raises(FileSystemError):
        fs.get_claude_config()


# ═══════════════════════════════════════════════════════════════════
# Sub-agents
# ═══════════════════════════════════════════════════════════════════

def test_save_sub_agent_writes_front_matter(fs):
    path = fs.save_sub_agent(
        "reviewer",
        {"description": "Reviews code", "tools": ["Read", "Grep"]},
        "You review code.",
    )

    metadata, body = parse_front_matter(path.read_text())
    assert path == fs.agents_dir / "reviewer.md"
    assert metadata["name"] == "reviewer"
    assert metadata["tools"] == "Read, Grep"
    assert metadata["created_at"] and metadata["updated_at"]
    assert body.strip() == "You review code."


def test_resave_keeps_created_at(fs):
    fs.save_sub_agent("reviewer", {"description": "d", "created_at": "2024-01-01T00:00:00+00:00"}, "p")

    agent = fs.get_sub_agent("reviewer")

    assert agent.created_at == "2024-01-01T00:00:00+00:00"
    assert agent.updated_at != agent.created_at


def test_get_sub_agent_reads_back(fs):
    fs.save_sub_agent("reviewer", {"description": "Reviews code", "tools": "Read, Grep"}, "Prompt")

    agent = fs.get_sub_agent("reviewer")

    assert agent.description == "Reviews code"
    assert agent.tools == ["Read", "Grep"]
    assert agent.location == GLOBAL
    assert agent.system_prompt == "Prompt"


def test_project_sub_agent_wins_over_global(fs):
    fs.save_sub_agent("reviewer", {"description": "global"}, "p", GLOBAL)
    fs.save_sub_agent("reviewer", {"description": "project"}, "p", LOCAL)

    agent = fs.get_sub_agent("reviewer")

    assert agent.location == LOCAL
    assert agent.description == "project"
    assert fs.list_installed_sub_agents() == ["reviewer"]


def test_malformed_sub_agent_is_skipped(fs):
    fs.ensure_agents_directory()
    (fs.agents_dir / "bad.md").write_text("no front matter")

    assert fs.get_sub_agent("bad") is None
    assert fs.get_sub_agent("missing") is None


def test_delete_sub_agent(fs):
    fs.save_sub_agent("reviewer", {"description": "d"}, "p", LOCAL)

    assert fs.delete_sub_agent("reviewer", LOCAL) is True
    assert fs.delete_sub_agent("reviewer", LOCAL) is False


def test_unknown_location_raises(fs):
    with pytest.raises(ValueError):
        fs.agents_dir_for("elsewhere")


# ═══════════════════════════════════════════════════════════════════
# CLAUDE.md discovery
# ═══════════════════════════════════════════════════════════════════

def test_find_claude_md_files_walks_up_and_includes_home(fs, tmp_path):
    nested = fs.cwd / "pkg"
    nested.mkdir()
    (fs.cwd / "CLAUDE.md").write_text("# project")
    (nested / "CLAUDE.local.md").write_text("# local")
    fs.claude_dir.mkdir(parents=True)
    (fs.claude_dir / "CLAUDE.md").write_text("# home")

    found = fs.find_claude_md_files(nested)

    assert found[0] == (nested / "CLAUDE.local.md").resolve()
    assert (fs.cwd / "CLAUDE.md").resolve() in found
    assert found[-1] == fs.claude_dir / "CLAUDE.md"


def test_write_file_creates_parents(fs, tmp_path):
    target = tmp_path / "a" / "b" / "file.txt"

    assert fs.write_file(target, "hi") is True
    assert fs.read_file(target) == "hi"
    assert fs.file_exists(target)


def test_read_missing_file_raises(fs, tmp_path):
    with pytest.raises(FileSystemError):
        fs.read_file(tmp_path / "missing.txt")


def test_save_sub_agent_to_explicit_file(fs):
    path = fs.save_sub_agent("code-reviewer", {"description": "d"}, "p", file_stem="reviewer")

    agent = fs.get_sub_agent("reviewer")
    assert path == fs.agents_dir / "reviewer.md"
    assert agent.name == "code-reviewer"
    assert agent.file_stem == "reviewer"

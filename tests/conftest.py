# tests/conftest.py
import json
import os
import socket

import pytest
import sys
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

# Add the project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))


def _has_network() -> bool:
    """Check if we can reach the internet."""
    try:
        socket.create_connection(("8.8.8.8", 53), timeout=3)
        return True
    except OSError:
        return False


def pytest_configure(config):
    config.addinivalue_line("markers", "live: marks tests that hit the real catalog (deselect with '-m not live')")


def pytest_collection_modifyitems(config, items):
    # Skip live tests unless --run-live is passed or RUN_LIVE_TESTS=1
    run_live = config.getoption("--run-live", default=False) or os.environ.get("RUN_LIVE_TESTS") == "1"
    if not run_live or not _has_network():
        skip_live = pytest.mark.skip(reason="Live tests skipped. Use --run-live or RUN_LIVE_TESTS=1")
        for item in items:
            if "live" in item.keywords:
                item.add_marker(skip_live)


def pytest_addoption(parser):
    parser.addoption("--run-live", action="store_true", default=False, help="Run live tests against the public catalog")


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Keep CLAUDE_CMD_* settings from the developer's shell out of tests."""
    for name in ("CLAUDE_CMD_URL", "CLAUDE_CMD_TIMEOUT", "CLAUDE_CMD_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("CLAUDE_CMD_HOME", str(tmp_path / "home" / ".claude"))


@pytest.fixture
def claude_dir(tmp_path):
    return tmp_path / "home" / ".claude"


@pytest.fixture
def project_dir(tmp_path):
    path = tmp_path / "project"
    path.mkdir()
    return path


@pytest.fixture
def fs(claude_dir, project_dir):
    from claude_cmd.filesystem import FileSystemManager
    return FileSystemManager(claude_dir=claude_dir, cwd=project_dir)


@pytest.fixture
def navigator():
    from claude_cmd.navigation import MenuNavigator
    return MenuNavigator()


@pytest.fixture
def sample_catalog():
    return [
        {
            "id": "git-helper",
            "name": "Git Helper",
            "description": "Helps with everyday git tasks",
            "author": "alice",
            "tags": ["git", "vcs"],
            "filePath": "git-helper.md",
            "created_at": "2024-01-02T00:00:00Z",
            "updated_at": "2024-02-01T00:00:00Z",
        },
        {
            "id": "api-docs",
            "name": "API Docs",
            "description": "Generate API documentation",
            "author": "bob",
            "tags": ["docs", "api"],
            "filePath": "api-docs.md",
            "created_at": "2024-01-01T00:00:00Z",
            "updated_at": "2024-03-01T00:00:00Z",
        },
        {
            "id": "code-reviewer",
            "name": "Code Reviewer",
            "description": "Reviews pull requests",
            "author": "carol",
            "tags": ["review", "git"],
            "filePath": "agents/code-reviewer.md",
            "type": "agent",
            "created_at": "2024-01-03T00:00:00Z",
            "updated_at": "2024-01-03T00:00:00Z",
        },
        {
            "id": "broken",
            "name": "Broken",
            "description": "Entry without a file",
            "author": "dave",
            "tags": [],
        },
    ]


COMMAND_MARKDOWN = """---
name: Git Helper
description: Helps with everyday git tasks
allowed-tools: Bash(git status:*), Read, grep
---

Run git status and summarize: $ARGUMENTS
"""


@pytest.fixture
def local_catalog(tmp_path, sample_catalog):
    """A commands/commands.json with its markdown files on disk. Returns the JSON path."""
    commands_dir = tmp_path / "catalog" / "commands"
    (commands_dir / "agents").mkdir(parents=True)
    catalog_file = commands_dir / "commands.json"
    catalog_file.write_text(json.dumps(sample_catalog), encoding="utf-8")
    (commands_dir / "git-helper.md").write_text(COMMAND_MARKDOWN, encoding="utf-8")
    (commands_dir / "api-docs.md").write_text("---\nname: API Docs\n---\n\nDocument $ARGUMENTS\n", encoding="utf-8")
    (commands_dir / "agents" / "code-reviewer.md").write_text(
        "---\nname: Code Reviewer\nallowed-tools: Read, Grep\n---\n\nReview the diff.\n",
        encoding="utf-8",
    )
    return catalog_file


def prompt_mock(*answers):
    """An inquirer stand-in whose prompts answer with `answers` in order."""
    inquirer = MagicMock()
    execute = AsyncMock(side_effect=list(answers))
    for kind in ("select", "text", "confirm", "checkbox"):
        getattr(inquirer, kind).return_value.execute_async = execute
    return inquirer


@pytest.fixture
def prompts():
    return prompt_mock

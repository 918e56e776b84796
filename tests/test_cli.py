# tests/test_cli.py
import pytest
from typer.testing import CliRunner
from unittest.mock import AsyncMock, patch

from claude_cmd import app_name_with_version
from claude_cmd.__main__ import app
from claude_cmd.catalog import CatalogClient
from claude_cmd.cli import EXIT, ClaudeCommandCLI, is_exit
from claude_cmd.config import Settings
from claude_cmd.exceptions import FileSystemError
from claude_cmd.navigation import Cancelled, Selected

runner = CliRunner()


@pytest.fixture
def cli(fs, local_catalog, navigator):
    settings = Settings()
    return ClaudeCommandCLI(settings, fs=fs, api=CatalogClient(source=str(local_catalog)), navigator=navigator)


# ═══════════════════════════════════════════════════════════════════
# Top-level options
# ═══════════════════════════════════════════════════════════════════

def test_help_exits_zero():
    result = runner.invoke(app, ["--help"])

    assert result.exit_code == 0
    assert "install" in result.output
    assert "search" in result.output


def test_version_option():
    result = runner.invoke(app, ["--version"])

    assert result.exit_code == 0
    assert app_name_with_version() in result.output


def test_unknown_command_exits_one():
    result = runner.invoke(app, ["frobnicate"])

    assert result.exit_code == 1


def test_bad_option_exits_one():
    result = runner.invoke(app, ["--nope"])

    assert result.exit_code == 1


def test_local_without_catalog_file_exits_one(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    result = runner.invoke(app, ["--local", "list"])

    assert result.exit_code == 1
    assert "Local commands file not found" in result.output


def test_local_catalog_is_used_for_install(local_catalog, claude_dir, monkeypatch):
    monkeypatch.chdir(local_catalog.parent.parent)

    result = runner.invoke(app, ["--local", "install", "api-docs"])

    assert result.exit_code == 0
    assert (claude_dir / "commands" / "api-docs.md").exists()


# ═══════════════════════════════════════════════════════════════════
# Subcommands
# ═══════════════════════════════════════════════════════════════════

def test_list_with_nothing_installed():
    result = runner.invoke(app, ["list"])

    assert result.exit_code == 0
    assert "No commands installed yet" in result.output


def test_install_from_env_catalog(local_catalog, claude_dir):
    result = runner.invoke(app, ["install", "git-helper"], env={"CLAUDE_CMD_URL": str(local_catalog)})

    assert result.exit_code == 0
    assert "Successfully installed command 'git-helper'" in result.output
    assert (claude_dir / "commands" / "git-helper.md").exists()


def test_install_unknown_command_exits_one(local_catalog):
    result = runner.invoke(app, ["install", "nope"], env={"CLAUDE_CMD_URL": str(local_catalog)})

    assert result.exit_code == 1
    assert "not found" in result.output


def test_install_requires_a_name():
    result = runner.invoke(app, ["install"])

    assert result.exit_code == 1


def test_search_prints_matches(local_catalog):
    result = runner.invoke(app, ["search", "git"], env={"CLAUDE_CMD_URL": str(local_catalog)})

    assert result.exit_code == 0
    assert "Found 2 command(s):" in result.output
    assert "Git Helper" in result.output
    assert "Code Reviewer" in result.output


def test_search_joins_terms_and_limits(local_catalog):
    result = runner.invoke(
        app, ["search", "git", "helper", "--limit", "1"], env={"CLAUDE_CMD_URL": str(local_catalog)}
    )

    assert result.exit_code == 0
    assert "Found 1 command(s):" in result.output


def test_search_without_matches(local_catalog):
    result = runner.invoke(app, ["search", "zzz"], env={"CLAUDE_CMD_URL": str(local_catalog)})

    assert result.exit_code == 0
    assert "No commands found matching 'zzz'" in result.output


# ═══════════════════════════════════════════════════════════════════
# Interactive loop
# ═══════════════════════════════════════════════════════════════════

def test_is_exit():
    assert is_exit(Cancelled())
    assert is_exit(Selected(EXIT))
    assert not is_exit(Selected("list"))


def test_main_menu_has_every_action(cli):
    values = {choice["value"] for choice in cli.build_main_menu() if isinstance(choice, dict)}

    assert values == set(cli.actions) | {EXIT}


@pytest.mark.asyncio
async def test_main_menu_runs_action_then_exits(cli, prompts):
    mock = prompts("list", "", EXIT)
    with patch("claude_cmd.navigation.inquirer", mock), \
         patch("claude_cmd.cli.clear_screen_with_welcome") as mock_clear:
        await cli.main_menu()

    assert mock.select.call_count == 2
    assert mock_clear.call_count == 2


@pytest.mark.asyncio
async def test_search_does_not_pause_afterwards(cli, prompts):
    cli.actions["search"] = AsyncMock()
    mock = prompts()

    with patch("claude_cmd.navigation.inquirer", mock):
        await cli.run_action("search")

    cli.actions["search"].assert_awaited_once()
    assert mock.text.call_count == 0


@pytest.mark.asyncio
async def test_main_menu_exits_on_cancel(cli, prompts):
    with patch("claude_cmd.navigation.inquirer", prompts(None)):
        await cli.main_menu()


@pytest.mark.asyncio
async def test_run_action_reports_unexpected_errors(cli, prompts):
    cli.actions["list"] = AsyncMock(side_effect=RuntimeError("boom"))
    cli.navigator.enter_menu("Somewhere")

    with patch("claude_cmd.navigation.inquirer", prompts("")):
        await cli.run_action("list")

    assert cli.navigator.get_current_path() == []


@pytest.mark.asyncio
async def test_run_action_reports_domain_errors(cli):
    cli.actions["settings"] = AsyncMock(side_effect=FileSystemError("disk full"))

    await cli.run_action("settings")

    cli.actions["settings"].assert_awaited_once()


@pytest.mark.asyncio
async def test_run_action_keyboard_interrupt_resets_navigation(cli):
    cli.actions["mcp"] = AsyncMock(side_effect=KeyboardInterrupt)
    cli.navigator.enter_menu("MCP Servers")

    await cli.run_action("mcp")

    assert cli.navigator.get_current_path() == []

# claude_cmd/cli.py
"""Root interactive menu."""
import logging
from typing import Awaitable, Callable, Optional

from rich.console import Console

from claude_cmd import app_name_with_version
from claude_cmd.catalog import CatalogClient
from claude_cmd.config import Settings, settings as default_settings
from claude_cmd.exceptions import ClaudeCmdError
from claude_cmd.filesystem import FileSystemManager
from claude_cmd.menus import (
    ClaudeMdManager,
    CommandManager,
    HelpManager,
    McpManager,
    PermissionsManager,
    ProjectManager,
    SettingsManager,
    SubAgentManager,
    WorkflowManager,
)
from claude_cmd.navigation import (
    Cancelled,
    MenuBuilder,
    MenuConfig,
    MenuNavigator,
    SelectResult,
    clear_screen_with_welcome,
    enhanced_select,
)

logger = logging.getLogger(__name__)
console = Console()

EXIT = "exit"


class ClaudeCommandCLI:
    """Wires the feature managers to one navigator and runs the main loop."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        fs: Optional[FileSystemManager] = None,
        api: Optional[CatalogClient] = None,
        navigator: Optional[MenuNavigator] = None,
    ):
        self.settings = settings or default_settings
        self.fs = fs or FileSystemManager(claude_dir=self.settings.claude_dir)
        self.api = api or CatalogClient(
            source=self.settings.commands_url,
            cache_duration=self.settings.cache_duration_seconds,
            timeout=self.settings.request_timeout,
        )
        self.navigator = navigator or MenuNavigator(self.settings.navigation_history_size)

        self.command_manager = CommandManager(self.fs, self.api, self.navigator)
        self.sub_agent_manager = SubAgentManager(self.fs, self.api, self.navigator)
        self.claude_md_manager = ClaudeMdManager(self.fs, self.navigator)
        self.permissions_manager = PermissionsManager(self.fs, self.navigator)
        self.project_manager = ProjectManager(self.claude_md_manager, self.permissions_manager)
        self.mcp_manager = McpManager(self.fs, self.navigator)
        self.workflow_manager = WorkflowManager(self.navigator)
        self.settings_manager = SettingsManager(self.fs, self.settings, self.navigator)
        self.help_manager = HelpManager(self.navigator)

        self.actions: dict[str, Callable[[], Awaitable[object]]] = {
            "list": self.command_manager.list_installed_commands,
            "search": self.command_manager.search_and_install_commands,
            "install": self.command_manager.install_command,
            "delete": self.command_manager.delete_command,
            "subagents": self.sub_agent_manager.handle_sub_agent_menu,
            "claudemd": self.claude_md_manager.handle_claude_md_menu,
            "init": self.project_manager.initialize_project,
            "permissions": self.permissions_manager.handle_permissions,
            "mcp": self.mcp_manager.handle_mcp_menu,
            "workflows": self.workflow_manager.handle_workflows,
            "settings": self.settings_manager.handle_settings,
            "help": self.help_manager.show_help,
        }
        # Sub-menus pause inside their own loop; search returns straight to a redrawn menu
        self._pause_after = {"list", "install", "delete", "init"}

    def show_welcome(self) -> None:
        banner = f"""
╔═══════════════════════════════════════════════════════════════╗
║                     🤖 {app_name_with_version():<39}║
║      Manage Claude commands, sub-agents and configuration     ║
╚═══════════════════════════════════════════════════════════════╝
    """
        console.print(banner, style="bold blue")
        if self.settings.using_local_catalog:
            console.print(f"[dim]📍 Using local commands: {self.settings.commands_url}[/dim]")
        elif self.settings.url_overridden:
            console.print(f"[dim]📍 Using commands from: {self.settings.commands_url}[/dim]")

    def build_main_menu(self) -> list:
        return (
            MenuBuilder(MenuConfig(title="Main Menu"))
            .add_choice("List installed commands", "list", icon="📋")
            .add_choice("Search & install commands", "search", icon="🔍")
            .add_choice("Install specific command", "install", icon="📦")
            .add_choice("Delete command", "delete", icon="🗑️")
            .add_choice("Manage Sub-Agents", "subagents", icon="🤖")
            .add_separator("Configuration")
            .add_choice("CLAUDE.md Management", "claudemd", icon="📝")
            .add_choice("Project Initialization", "init", icon="🚀")
            .add_choice("Permissions & Security", "permissions", icon="🔒")
            .add_separator("Advanced")
            .add_choice("MCP Servers", "mcp", icon="☁️")
            .add_choice("Commands", "workflows", icon="⭐")
            .add_choice("Settings", "settings", icon="⚙️")
            .add_separator("Help")
            .add_choice("Help & Documentation", "help", icon="❓")
            .add_choice("Exit", EXIT, icon="👋")
            .get_choices()
        )

    async def run_action(self, action: str) -> None:
        """Run one menu action; errors are reported and never end the loop."""
        try:
            await self.actions[action]()
        except KeyboardInterrupt:
            console.print("\n[yellow]Cancelled.[/yellow]")
            self.navigator.reset_navigation()
            return
        except ClaudeCmdError as e:
            logger.warning("Action %s failed: %s", action, e)
            console.print(f"[red]Error: {e}[/red]")
        except Exception as e:
            logger.exception("Unexpected error in %s", action)
            console.print(f"[red]An error occurred: {e}[/red]")
        # A failed sub-menu can leave its path behind
        self.navigator.reset_navigation()

        if action in self._pause_after:
            await self.navigator.pause_for_user()

    async def main_menu(self) -> None:
        while True:
            clear_screen_with_welcome(self.show_welcome)
            self.navigator.reset_navigation()
            result = await enhanced_select(
                "What would you like to do?",
                self.build_main_menu(),
                page_size=20,
            )
            if is_exit(result):
                console.print(f"\n[green]👋 Thank you for using {app_name_with_version()}![/green]")
                return
            await self.run_action(result.value)


def is_exit(result: SelectResult) -> bool:
    """Exit on the Exit choice or when the root prompt is cancelled."""
    return isinstance(result, Cancelled) or result.value == EXIT

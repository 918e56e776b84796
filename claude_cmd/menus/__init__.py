"""Feature menus. Each manager shares the application's MenuNavigator."""
from claude_cmd.menus.claudemd import ClaudeMdManager
from claude_cmd.menus.command_manager import CommandManager
from claude_cmd.menus.guides import HelpManager, WorkflowManager
from claude_cmd.menus.mcp import McpManager
from claude_cmd.menus.permissions import PermissionsManager
from claude_cmd.menus.project import ProjectManager
from claude_cmd.menus.settings_menu import SettingsManager
from claude_cmd.menus.sub_agent_manager import SubAgentManager

__all__ = [
    "ClaudeMdManager",
    "CommandManager",
    "HelpManager",
    "McpManager",
    "PermissionsManager",
    "ProjectManager",
    "SettingsManager",
    "SubAgentManager",
    "WorkflowManager",
]

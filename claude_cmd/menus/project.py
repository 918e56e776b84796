# claude_cmd/menus/project.py
from InquirerPy import inquirer
from rich.console import Console

from claude_cmd.menus.claudemd import ClaudeMdManager
from claude_cmd.menus.permissions import PermissionsManager

console = Console()


class ProjectManager:
    """Sets up CLAUDE.md and a security profile for the current project."""

    def __init__(self, claude_md: ClaudeMdManager, permissions: PermissionsManager):
        self.claude_md = claude_md
        self.permissions = permissions

    async def initialize_project(self) -> list[str]:
        console.print("\n[bold magenta]🚀 Project Initialization[/bold magenta]")

        detected = self.claude_md.detect_project_type()
        console.print(f"[cyan]Detected project type: {detected}[/cyan]")

        try:
            actions = await inquirer.checkbox(
                message="What would you like to set up?",
                choices=[
                    {"name": "Create CLAUDE.md configuration", "value": "claudemd", "enabled": True},
                    {"name": "Set up basic permissions", "value": "permissions", "enabled": False},
                ],
            ).execute_async()
        except KeyboardInterrupt:
            return []
        actions = actions or []

        if "claudemd" in actions:
            await self.claude_md.create_claude_md(detected)
        if "permissions" in actions:
            await self.permissions.setup_basic_permissions()

        console.print("[green]🎉 Project initialization complete![/green]")
        console.print("[cyan]💡 Use the Commands menu to install or create custom commands[/cyan]")
        return actions

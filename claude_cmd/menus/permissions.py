# claude_cmd/menus/permissions.py
import logging
from typing import Optional

from rich.console import Console
from rich.panel import Panel

from claude_cmd.filesystem import ClaudeConfig, FileSystemManager
from claude_cmd.navigation import MenuNavigator, enhanced_select, is_back
from claude_cmd.templates import SECURITY_PROFILES

logger = logging.getLogger(__name__)
console = Console()

SECURITY_LEVEL_CHOICES = [
    {"name": "Strict - Manual approval for all actions", "value": "strict"},
    {"name": "Moderate - Allow safe operations", "value": "moderate"},
    {"name": "Permissive - Allow most operations", "value": "permissive"},
]

BEST_PRACTICES = """[bold]1. Use Security Profiles:[/bold]
   • Start with 'strict' for sensitive projects
   • Gradually allow more tools as needed

[bold]2. Regular Reviews:[/bold]
   • Audit allowed tools monthly
   • Remove unused permissions

[bold]3. Project Isolation:[/bold]
   • Use project-specific CLAUDE.md files
   • Separate personal and work configurations

[bold]4. Team Coordination:[/bold]
   • Share security configs with team
   • Document security decisions"""


def apply_security_profile(config: ClaudeConfig, level: str) -> ClaudeConfig:
    if level not in SECURITY_PROFILES:
        raise ValueError(f"Unknown security profile: {level}")
    config.securityProfile = level
    config.allowedTools = list(SECURITY_PROFILES[level])
    return config


class PermissionsManager:

    def __init__(self, fs: FileSystemManager, navigator: MenuNavigator):
        self.fs = fs
        self.navigator = navigator

    async def handle_permissions(self) -> None:
        self.navigator.enter_menu("Permissions & Security")
        try:
            while True:
                console.print("\n[bold magenta]🔒 Permissions & Security Management[/bold magenta]")
                result = await enhanced_select(
                    "What would you like to do?",
                    [
                        {"name": "⚙️ Current security status", "value": "status"},
                        {"name": "📖 Security best practices", "value": "practices"},
                        {"name": "🛡️ Set up basic permissions", "value": "setup"},
                        {"name": self.navigator.get_back_button_text(), "value": "back"},
                    ],
                    allow_esc_back=True,
                )
                if is_back(result):
                    return

                if result.value == "status":
                    self.show_status()
                elif result.value == "practices":
                    console.print(Panel(BEST_PRACTICES, title="📚 Security Best Practices", border_style="cyan"))
                elif result.value == "setup":
                    await self.setup_basic_permissions()
                await self.navigator.pause_for_user()
        finally:
            self.navigator.exit_menu()

    def show_status(self) -> ClaudeConfig:
        config = self.fs.get_claude_config()
        console.print("\n[bold magenta]🛡️ Current Security Status:[/bold magenta]")
        console.print(f"Security Profile: {config.securityProfile or '[yellow]Not configured[/yellow]'}")
        console.print(f"Allowed Tools: {len(config.allowedTools)} tools configured")
        console.print(f"Last Updated: {config.lastUpdated or 'Never'}")
        console.print("\n[cyan]💡 Run Project Initialization to set up basic security[/cyan]")
        return config

    async def setup_basic_permissions(self, level: Optional[str] = None) -> Optional[ClaudeConfig]:
        """Write the chosen security profile's allowed tools to settings.json."""
        console.print("\n[cyan]Setting up basic permissions...[/cyan]")

        if level is None:
            result = await enhanced_select("Choose security level:", SECURITY_LEVEL_CHOICES, allow_esc_back=True)
            if is_back(result):
                return None
            level = result.value

        config = apply_security_profile(self.fs.get_claude_config(), level)
        self.fs.save_claude_config(config)
        logger.debug("Security profile %s written to %s", level, self.fs.config_file)
        console.print(f"[green]Security profile set to: {level}[/green]")
        return config

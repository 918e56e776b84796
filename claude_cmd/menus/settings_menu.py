# claude_cmd/menus/settings_menu.py
from rich import box
from rich.console import Console
from rich.table import Table

from claude_cmd.config import DEFAULT_COMMANDS_URL, Settings
from claude_cmd.filesystem import FileSystemManager
from claude_cmd.navigation import MenuNavigator, enhanced_select, is_back

console = Console()


def describe_source(settings: Settings) -> str:
    if settings.using_local_catalog:
        return "📍 Using local commands file (--local)"
    if settings.url_overridden:
        return "📍 Using environment variable override"
    return "Using default catalog"


class SettingsManager:

    def __init__(self, fs: FileSystemManager, settings: Settings, navigator: MenuNavigator):
        self.fs = fs
        self.settings = settings
        self.navigator = navigator

    async def handle_settings(self) -> None:
        self.navigator.enter_menu("Settings")
        try:
            while True:
                console.print("\n[bold magenta]⚙️ Settings & Configuration[/bold magenta]")
                result = await enhanced_select(
                    "What would you like to do?",
                    [
                        {"name": "📋 View current settings", "value": "view"},
                        {"name": self.navigator.get_back_button_text(), "value": "back"},
                    ],
                    allow_esc_back=True,
                )
                if is_back(result):
                    return
                self.show_settings()
                await self.navigator.pause_for_user()
        finally:
            self.navigator.exit_menu()

    def build_settings_table(self) -> Table:
        config = self.fs.get_claude_config()
        timeout = self.settings.request_timeout

        table = Table(title="📋 Current Settings", box=box.ROUNDED, show_header=False)
        table.add_column("Setting", style="bold")
        table.add_column("Value")

        table.add_row("Version", config.version or "unknown")
        table.add_row("Last Updated", config.lastUpdated or "never")
        table.add_row("Security Profile", config.securityProfile or "[yellow]not set[/yellow]")
        table.add_section()
        table.add_row("Commands Source", self.settings.commands_url)
        table.add_row("", f"[cyan]{describe_source(self.settings)}[/cyan]")
        table.add_row("Default URL", f"[dim]{DEFAULT_COMMANDS_URL}[/dim]")
        table.add_row("Override with", "[dim]CLAUDE_CMD_URL environment variable or --local flag[/dim]")
        table.add_row("Request Timeout", f"{timeout:g}s" if timeout else "disabled")
        table.add_row("Cache Duration", f"{self.settings.cache_duration_seconds}s")
        table.add_section()
        table.add_row("Allowed Tools", f"{len(config.allowedTools)} configured")
        table.add_row("File System Access", config.fileSystemAccess or "default")
        table.add_row("Network Access", config.networkAccess or "default")
        table.add_section()
        table.add_row("Commands", str(self.fs.commands_dir))
        table.add_row("Sub-Agents", str(self.fs.agents_dir))
        table.add_row("Configuration", str(self.fs.config_file))
        return table

    def show_settings(self) -> None:
        console.print()
        console.print(self.build_settings_table())
        console.print("\n[bold]Manual Configuration:[/bold]")
        console.print(f"• Edit settings directly: {self.fs.config_file}")
        console.print(f"• Reset all settings: Delete {self.fs.config_file}")
        console.print(f"• Backup settings: Copy {self.fs.claude_dir}")

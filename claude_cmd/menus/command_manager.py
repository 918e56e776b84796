# claude_cmd/menus/command_manager.py
"""Install, search, list and delete commands from the catalog."""
import logging

from InquirerPy import inquirer
from rich.console import Console
from rich.tree import Tree

from claude_cmd.catalog import CatalogClient, Command
from claude_cmd.config import settings
from claude_cmd.exceptions import ClaudeCmdError, CommandNotFoundError
from claude_cmd.filesystem import FileSystemManager
from claude_cmd.menus.search import ask_query, paginated_search, print_result
from claude_cmd.navigation import (
    MenuNavigator,
    confirm_action,
    enhanced_select,
    is_back,
)

logger = logging.getLogger(__name__)
console = Console()

ROOT_GROUP = "_root"


def build_command_tree(files: list[str]) -> dict[str, list[str]]:
    """Group installed command files by their top-level folder."""
    tree: dict[str, list[str]] = {}
    for file in files:
        clean = file[:-3] if file.endswith(".md") else file
        if "/" in clean:
            parts = clean.split("/")
            tree.setdefault(parts[0], []).append(parts[-1])
        else:
            tree.setdefault(ROOT_GROUP, []).append(clean)
    return tree


class CommandManager:
    """Command-related actions of the root menu."""

    def __init__(self, fs: FileSystemManager, api: CatalogClient, navigator: MenuNavigator):
        self.fs = fs
        self.api = api
        self.navigator = navigator
        self.page_size = settings.search_page_size

    async def list_installed_commands(self) -> list[str]:
        console.print("\n[bold magenta]📋 Installed Commands[/bold magenta]")

        files = self.fs.list_installed_commands()
        if not files:
            console.print("[yellow]📭 No commands installed yet.[/yellow]")
            return files

        tree = build_command_tree(files)
        root = Tree(str(self.fs.commands_dir), guide_style="dim")
        counter = 1
        for command in sorted(tree.get(ROOT_GROUP, [])):
            root.add(f"[green]✓[/green] {counter}. {command}")
            counter += 1
        for folder in sorted(k for k in tree if k != ROOT_GROUP):
            branch = root.add(f"📁 {folder}/")
            for command in sorted(tree[folder]):
                branch.add(f"[green]✓[/green] {counter}. {command}")
                counter += 1
        console.print(root)

        console.print(f"\n[cyan]Total: {len(files)} commands installed[/cyan]")
        return files

    async def list_available_commands(self) -> list[Command]:
        console.print("\n[bold magenta]📋 Available Commands[/bold magenta]")

        page = await self.api.get_commands()
        if not page.data:
            console.print("[yellow]📭 No commands available.[/yellow]")
            return []

        console.print(f"\n[green]Found {page.pagination.total} command(s):[/green]")
        for index, command in enumerate(page.data, 1):
            print_result(command, index, self.fs.is_command_installed(command.id))

        console.print(f"\n[cyan]Showing {len(page.data)} of {page.pagination.total} commands[/cyan]")
        return page.data

    async def search_and_install_commands(self) -> None:
        query = await ask_query()
        if not query:
            return

        self.navigator.enter_menu("Search Commands")
        try:
            chosen_page = await paginated_search(
                query,
                fetch_page=self.api.get_commands,
                is_installed=self.fs.is_command_installed,
                navigator=self.navigator,
                page_size=self.page_size,
            )
            if chosen_page:
                await self.install_from_search_results(chosen_page)
        finally:
            self.navigator.exit_menu()

    async def install_from_search_results(self, commands: list[Command]) -> None:
        choices = [
            {"name": f"{cmd.name} - {cmd.description or 'No description'}", "value": cmd.id}
            for cmd in commands
        ]
        result = await enhanced_select("📦 Select a command to install:", choices, allow_esc_back=True)
        if not is_back(result):
            await self.install_specific_command(result.value)

    async def install_command(self) -> None:
        try:
            command_id = await inquirer.text(
                message="📦 Enter command name to install:",
                validate=lambda text: len(text.strip()) > 0,
                invalid_message="Please enter a command name",
            ).execute_async()
        except KeyboardInterrupt:
            return
        if command_id and command_id.strip():
            await self.install_specific_command(command_id.strip())

    async def install_specific_command(self, command_id: str) -> bool:
        """Install one catalog entry into the commands directory. Returns True on success."""
        console.print(f"\n[cyan]Installing command: {command_id}...[/cyan]")

        try:
            command = await self.api.get_command(command_id)
        except CommandNotFoundError:
            command = None
        if command is None or not command.file_path:
            console.print(f"[red]Command '{command_id}' not found or has no file path.[/red]")
            return False

        file_name = command.filename or f"{command_id}.md"
        if file_name in self.fs.list_installed_commands():
            overwrite = await confirm_action(
                f"Command '{command_id}' already exists. Overwrite?", default=False
            )
            if not overwrite:
                console.print("[cyan]Installation cancelled[/cyan]")
                return False

        content = await self.api.fetch_file_content(command.file_path)
        if not content:
            console.print(f"[red]Failed to fetch content for command '{command_id}'.[/red]")
            return False

        try:
            self.fs.save_command(file_name, content)
        except ClaudeCmdError as e:
            logger.warning("Install of %s failed: %s", command_id, e)
            console.print(f"[red]Failed to install command: {e}[/red]")
            return False

        console.print(f"[green]Successfully installed command '{command_id}'[/green]")
        if command.description:
            console.print(f"[cyan]Description: {command.description}[/cyan]")
        return True

    async def delete_command(self) -> bool:
        files = self.fs.list_installed_commands()
        if not files:
            console.print("[yellow]📭 No commands to delete.[/yellow]")
            return False

        choices = [{"name": file, "value": file} for file in files]
        choices.append(MenuNavigator.create_cancel_choice())

        result = await enhanced_select("🗑️  Select a command to delete:", choices)
        if is_back(result):
            return False
        selected = result.value

        if not await confirm_action(f"Are you sure you want to delete '{selected}'?", default=False):
            return False

        try:
            self.fs.delete_command(selected)
        except ClaudeCmdError as e:
            logger.warning("Delete of %s failed: %s", selected, e)
            console.print(f"[red]Failed to delete '{selected}': {e}[/red]")
            return False
        console.print(f"[green]Successfully deleted '{selected}'[/green]")
        return True

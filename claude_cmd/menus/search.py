# claude_cmd/menus/search.py
"""Paginated catalog search shared by the command and sub-agent menus."""
from typing import Awaitable, Callable, Optional

from InquirerPy import inquirer
from rich.console import Console

from claude_cmd.catalog import CatalogPage, Command, Pagination, SearchParams
from claude_cmd.navigation import BACK, MenuNavigator, enhanced_select, is_back

console = Console()

# Go-to-page is only offered once there are more results than this
GOTO_PAGE_THRESHOLD = 20


async def ask_query(message: str = "🔍 Enter search query:") -> Optional[str]:
    try:
        query = await inquirer.text(
            message=message,
            validate=lambda text: len(text.strip()) > 0,
            invalid_message="Please enter a search query",
        ).execute_async()
    except KeyboardInterrupt:
        return None
    return query.strip() if query else None


async def ask_page(total_pages: int) -> Optional[int]:
    """Prompt for a 1-based page number, return it 0-based."""
    def valid_page(text: str) -> bool:
        text = text.strip()
        return text.isdigit() and 1 <= int(text) <= total_pages

    try:
        page_input = await inquirer.text(
            message=f"Enter page number (1-{total_pages}):",
            validate=valid_page,
            invalid_message=f"Please enter a number between 1 and {total_pages}",
        ).execute_async()
    except KeyboardInterrupt:
        return None
    return int(page_input.strip()) - 1


def print_result(command: Command, number: int, installed: bool) -> None:
    status = "[green]✓[/green]" if installed else "[dim]○[/dim]"
    console.print(f"\n{status} [bold]{number}. {command.name}[/bold]")
    if command.description:
        console.print(f"   {command.description}")
    if command.author:
        console.print(f"   [dim]Author: {command.author}[/dim]")
    if command.tags:
        console.print(f"   [dim]Tags: {', '.join(command.tags)}[/dim]")
    if installed:
        console.print("   [green]Already installed[/green]")


def navigation_choices(pagination: Pagination, install_label: str, back_label: str) -> list[dict]:
    choices = [{"name": install_label, "value": "install"}]
    if pagination.has_previous:
        choices.append({"name": "⬅️ Previous page", "value": "previous"})
    if pagination.has_next:
        choices.append({"name": "➡️ Next page", "value": "next"})
    if pagination.total > GOTO_PAGE_THRESHOLD:
        choices.append({"name": "🔢 Go to specific page", "value": "goto"})
    choices.append({"name": "🔍 New search", "value": "new_search"})
    choices.append({"name": back_label, "value": BACK})
    return choices


async def paginated_search(
    query: str,
    fetch_page: Callable[[SearchParams], Awaitable[CatalogPage]],
    is_installed: Callable[[str], bool],
    navigator: MenuNavigator,
    page_size: int,
    noun: str = "command",
    install_label: str = "📦 Install a command from these results",
) -> Optional[list[Command]]:
    """Browse search results page by page.

    Returns the page the user chose to install from, or None when they leave.
    """
    page = 0
    while True:
        offset = page * page_size
        console.print(f'\n[cyan]Searching for: "{query}"...[/cyan]')

        results = await fetch_page(SearchParams(q=query, limit=page_size, offset=offset))
        if not results.data:
            if page == 0:
                console.print(f"[yellow]📭 No {noun}s found matching '{query}'.[/yellow]")
            else:
                console.print(f"[yellow]📭 No more {noun}s found.[/yellow]")
            return None

        pagination = results.pagination
        console.print(
            f"\n[green]✓ Found {pagination.total} {noun}(s) total | "
            f"Page {pagination.current_page} of {pagination.total_pages}:[/green]"
        )
        for index, command in enumerate(results.data):
            print_result(command, offset + index + 1, is_installed(command.id))

        choices = navigation_choices(pagination, install_label, navigator.get_back_button_text())
        result = await enhanced_select("What would you like to do?", choices, allow_esc_back=True)
        action = BACK if is_back(result) else result.value

        if action == "install":
            return results.data
        if action == "previous":
            page -= 1
        elif action == "next":
            page += 1
        elif action == "goto":
            target = await ask_page(pagination.total_pages)
            if target is not None:
                page = target
        elif action == "new_search":
            new_query = await ask_query()
            if not new_query:
                return None
            query, page = new_query, 0
        else:
            return None

# claude_cmd/__main__.py
import asyncio
import logging
import sys
from pathlib import Path
from typing import List, Optional

import click
import typer
from rich.console import Console
from typer.core import TyperGroup

from claude_cmd import app_name_with_version
from claude_cmd.catalog import CatalogClient, SearchParams
from claude_cmd.cli import ClaudeCommandCLI
from claude_cmd.config import Settings
from claude_cmd.exceptions import ClaudeCmdError
from claude_cmd.filesystem import FileSystemManager
from claude_cmd.menus import CommandManager
from claude_cmd.navigation import MenuNavigator


class UsageErrorGroup(TyperGroup):
    """Usage errors (unknown command, missing argument) exit with status 1."""

    def make_context(self, *args, **kwargs):
        try:
            return super().make_context(*args, **kwargs)
        except click.UsageError as e:
            e.exit_code = 1
            raise

    def invoke(self, ctx):
        try:
            return super().invoke(ctx)
        except click.UsageError as e:
            e.exit_code = 1
            raise


app = typer.Typer(
    cls=UsageErrorGroup,
    help="claude-cmd - A CLI tool to manage Claude commands",
    context_settings={"help_option_names": ["-h", "--help"]},
    add_completion=False,
)
console = Console()
logger = logging.getLogger("claude_cmd")


def _setup_logging(verbose: bool, level: str) -> None:
    """Log to stderr so prompts and rich output on stdout stay clean."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else getattr(logging, level, logging.WARNING),
        format="%(message)s" if not verbose else "%(levelname)s: %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _build(settings: Settings) -> tuple[FileSystemManager, CatalogClient]:
    fs = FileSystemManager(claude_dir=settings.claude_dir)
    api = CatalogClient(
        source=settings.commands_url,
        cache_duration=settings.cache_duration_seconds,
        timeout=settings.request_timeout,
    )
    return fs, api


def _version_callback(value: bool):
    if value:
        console.print(app_name_with_version())
        raise typer.Exit(0)


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    local: bool = typer.Option(
        False, "--local", help="Use local commands folder (./commands/commands.json)"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    version: Optional[bool] = typer.Option(
        None, "--version", callback=_version_callback, is_eager=True, help="Show version and exit"
    ),
):
    """Interactive CLI tool for managing Claude commands, sub-agents and configuration.

    Run without a command to enter interactive mode with full features.
    """
    settings = Settings()
    _setup_logging(verbose, settings.log_level)

    if local:
        local_path = settings.use_local_catalog(Path.cwd())
        if not local_path.exists():
            console.print(f"[red]Local commands file not found at: {local_path}[/red]")
            console.print("[cyan]Generate it from the markdown files in ./commands first.[/cyan]")
            raise typer.Exit(1)
        logger.debug("Using local catalog %s", local_path)

    ctx.obj = settings
    if ctx.invoked_subcommand is not None:
        return

    cli = ClaudeCommandCLI(settings)
    cli.navigator.register_interrupt_handler()
    try:
        asyncio.run(cli.main_menu())
    except ClaudeCmdError as e:
        console.print(f"[red]An error occurred: {e}[/red]")
        raise typer.Exit(1)


@app.command("list")
def list_commands(ctx: typer.Context):
    """List all installed Claude command files."""
    fs, api = _build(ctx.obj)
    manager = CommandManager(fs, api, MenuNavigator())
    try:
        asyncio.run(manager.list_installed_commands())
    except ClaudeCmdError as e:
        console.print(f"[red]An error occurred: {e}[/red]")
        raise typer.Exit(1)


@app.command()
def install(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Command id from the catalog"),
):
    """Install a command from the repository."""
    fs, api = _build(ctx.obj)
    manager = CommandManager(fs, api, MenuNavigator())
    try:
        installed = asyncio.run(manager.install_specific_command(name))
    except ClaudeCmdError as e:
        console.print(f"[red]An error occurred: {e}[/red]")
        raise typer.Exit(1)
    if not installed:
        raise typer.Exit(1)


@app.command()
def search(
    ctx: typer.Context,
    query: List[str] = typer.Argument(..., help="Search terms"),
    limit: int = typer.Option(10, "--limit", "-n", min=1, help="Maximum results to show"),
):
    """Search available commands in the repository."""
    text = " ".join(query)
    _, api = _build(ctx.obj)

    console.print(f"Searching for commands matching: {text}...")
    page = asyncio.run(api.get_commands(SearchParams(q=text, limit=limit)))
    if not page.data:
        console.print(f"[yellow]No commands found matching '{text}'.[/yellow]")
        return

    console.print(f"Found {page.pagination.total} command(s):")
    for command in page.data:
        console.print(f"\n- [bold]{command.name}[/bold] [dim]({command.id})[/dim]")
        if command.description:
            console.print(f"  {command.description}")
        if command.author:
            console.print(f"  Author: {command.author}")
        if command.tags:
            console.print(f"  Tags: {', '.join(command.tags)}")
    if page.pagination.has_next:
        console.print(f"\n[dim]Showing {len(page.data)} of {page.pagination.total}. Use --limit to see more.[/dim]")


def main():
    app()


if __name__ == "__main__":
    main()

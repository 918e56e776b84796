# claude_cmd/menus/mcp.py
"""Read-only view of MCP servers declared in the known .mcp.json locations."""
import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from rich.console import Console

from claude_cmd.filesystem import FileSystemManager
from claude_cmd.navigation import MenuNavigator, enhanced_select, is_back

logger = logging.getLogger(__name__)
console = Console()

SETTINGS_DOCS_URL = "https://docs.anthropic.com/en/docs/claude-code/settings"


@dataclass
class McpServer:
    name: str
    command: str = ""
    args: list[str] = field(default_factory=list)
    cwd: Optional[str] = None
    env: dict[str, str] = field(default_factory=dict)
    source: Optional[Path] = None


def mcp_config_paths(claude_dir: Path, cwd: Path, home: Optional[Path] = None) -> list[Path]:
    home = home or Path.home()
    return [
        claude_dir / ".mcp.json",
        home / ".mcp.json",
        cwd / ".mcp.json",
        home / "Library" / "Application Support" / "Claude Code" / "mcp.json",
        home / ".config" / "claude-code" / "mcp.json",
    ]


def load_mcp_servers(paths: list[Path]) -> list[McpServer]:
    """Collect servers from every readable config; unreadable files are skipped."""
    servers = []
    seen: set[Path] = set()
    for path in paths:
        if not path.exists() or path.resolve() in seen:
            continue
        seen.add(path.resolve())
        try:
            config = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Could not read MCP config %s: %s", path, e)
            console.print(f"[dim]Note: Could not read {path}[/dim]")
            continue

        entries = config.get("mcpServers") if isinstance(config, dict) else None
        for name, server in (entries or {}).items():
            if not isinstance(server, dict):
                continue
            servers.append(McpServer(
                name=name,
                command=server.get("command", ""),
                args=list(server.get("args") or []),
                cwd=server.get("cwd"),
                env=dict(server.get("env") or {}),
                source=path,
            ))
    return servers


class McpManager:

    def __init__(self, fs: FileSystemManager, navigator: MenuNavigator):
        self.fs = fs
        self.navigator = navigator

    async def handle_mcp_menu(self) -> None:
        self.navigator.enter_menu("MCP Servers")
        try:
            while True:
                console.print("\n[bold magenta]☁️ Local MCP Servers[/bold magenta]")
                result = await enhanced_select(
                    "What would you like to do?",
                    [
                        {"name": "📋 View MCP servers", "value": "view"},
                        {"name": self.navigator.get_back_button_text(), "value": "back"},
                    ],
                    allow_esc_back=True,
                )
                if is_back(result):
                    return
                self.show_mcp_servers()
                await self.navigator.pause_for_user()
        finally:
            self.navigator.exit_menu()

    def show_mcp_servers(self) -> list[McpServer]:
        servers = load_mcp_servers(mcp_config_paths(self.fs.claude_dir, self.fs.cwd))

        console.print("\n[bold magenta]📋 Installed MCP Servers:[/bold magenta]")
        if not servers:
            console.print("[yellow]No MCP servers configured locally.[/yellow]")
            console.print("\n[cyan]💡 To configure MCP servers:[/cyan]")
            console.print(f"   1. Create/edit: [dim]{self.fs.claude_dir / '.mcp.json'}[/dim]")
            console.print("   2. Or use Claude Code settings to configure MCP servers")
            console.print("   3. Restart Claude Code to load new configurations")
        for index, server in enumerate(servers, 1):
            console.print(f"\n[bold]{index}. {server.name}[/bold]")
            console.print(f"   [dim]Command: {server.command}[/dim]")
            if server.args:
                console.print(f"   [dim]Args: {' '.join(server.args)}[/dim]")
            if server.cwd:
                console.print(f"   [dim]Working Directory: {server.cwd}[/dim]")

        console.print(
            "\n[cyan]💡 MCP servers provide tools and resources for Claude "
            "through standardized protocols.[/cyan]"
        )
        console.print(f"[cyan]📖 Learn more: {SETTINGS_DOCS_URL}[/cyan]")
        return servers

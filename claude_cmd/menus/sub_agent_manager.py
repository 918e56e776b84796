# claude_cmd/menus/sub_agent_manager.py
"""Sub-agent menu: list, install from catalog, create, edit, delete, validate."""
import logging
import re
from typing import Any, Optional

import typer
from InquirerPy import inquirer
from rich.console import Console

from claude_cmd.catalog import CatalogClient, Command
from claude_cmd.config import settings
from claude_cmd.exceptions import ClaudeCmdError, CommandNotFoundError, FrontMatterError
from claude_cmd.filesystem import GLOBAL, LOCAL, FileSystemManager, SubAgent
from claude_cmd.frontmatter import normalize_tools, parse_front_matter
from claude_cmd.menus.search import ask_query, paginated_search
from claude_cmd.navigation import (
    MenuBuilder,
    MenuConfig,
    MenuNavigator,
    confirm_action,
    enhanced_select,
    is_back,
)
from claude_cmd.templates import (
    AVAILABLE_TOOLS,
    COMMAND_TOOL_MAPPINGS,
    CONVERTED_PROMPT_PREFIX,
    DEFAULT_SUB_AGENT_TOOLS,
    SCRATCH_SYSTEM_PROMPT,
    SUB_AGENT_NAME_PATTERN,
    SUB_AGENT_TEMPLATES,
    SubAgentTemplate,
)

logger = logging.getLogger(__name__)
console = Console()

LOCATION_ICONS = {GLOBAL: "🌍", LOCAL: "📂"}
INVALID_NAME_MESSAGE = "Name can only contain letters, numbers, hyphens, and underscores"


# ═══════════════════════════════════════════════════════════════════
# Pure helpers
# ═══════════════════════════════════════════════════════════════════

def is_valid_sub_agent_name(name: str) -> bool:
    return bool(re.match(SUB_AGENT_NAME_PATTERN, name.strip()))


def sub_agent_name_from_id(command_id: str) -> str:
    return command_id.split("/")[-1] or command_id


def map_command_tool(tool: str) -> str:
    """Map a command's allowed-tools entry onto a sub-agent tool name."""
    if tool in AVAILABLE_TOOLS:
        return tool
    if tool in COMMAND_TOOL_MAPPINGS:
        return COMMAND_TOOL_MAPPINGS[tool]
    # Bash(git status:*) style patterns
    if tool.startswith("Bash("):
        return "Bash"
    capitalized = tool[:1].upper() + tool[1:]
    if capitalized in AVAILABLE_TOOLS:
        return capitalized
    return "Read"


def extract_tools_from_command(metadata: dict[str, Any]) -> list[str]:
    allowed = metadata.get("allowed-tools")
    if not allowed:
        return list(DEFAULT_SUB_AGENT_TOOLS)

    tools: list[str] = []
    for tool in normalize_tools(allowed):
        mapped = map_command_tool(tool)
        if mapped in AVAILABLE_TOOLS and mapped not in tools:
            tools.append(mapped)
    return tools


def convert_command_to_sub_agent(content: str, command: Command) -> tuple[dict[str, Any], str]:
    """Turn a command document into (front_matter, system_prompt) for a sub-agent."""
    try:
        metadata, body = parse_front_matter(content)
    except FrontMatterError as e:
        raise FrontMatterError(f"Failed to convert command to sub-agent: {e}") from e

    front_matter = {
        "name": command.name,
        "description": command.description,
        "tools": extract_tools_from_command(metadata),
        "author": command.author or None,
        "version": command.version,
        "created_at": command.created_at or None,
        "updated_at": command.updated_at or None,
    }
    prefix = CONVERTED_PROMPT_PREFIX.format(name=command.name, description=command.description)
    return front_matter, prefix + body.strip()


def validate_sub_agent(agent: SubAgent) -> list[str]:
    """Return a list of problems; empty when the sub-agent is valid."""
    issues = []
    if not agent.name.strip():
        issues.append("Name is empty")
    if not agent.description.strip():
        issues.append("Description is empty")
    if not agent.system_prompt.strip():
        issues.append("System prompt is empty")
    if not re.match(SUB_AGENT_NAME_PATTERN, agent.name):
        issues.append(
            "Name contains invalid characters "
            "(only letters, numbers, hyphens, and underscores allowed)"
        )
    invalid_tools = [tool for tool in agent.tools if tool not in AVAILABLE_TOOLS]
    if invalid_tools:
        issues.append(f"Invalid tools: {', '.join(invalid_tools)}")
    return issues


def edit_text(text: str) -> str:
    """Open $EDITOR on text; unchanged or unsaved edits keep the original."""
    edited = typer.edit(text)
    return text if edited is None else edited.strip()


# ═══════════════════════════════════════════════════════════════════
# Menu
# ═══════════════════════════════════════════════════════════════════

class SubAgentManager:

    def __init__(self, fs: FileSystemManager, api: CatalogClient, navigator: MenuNavigator):
        self.fs = fs
        self.api = api
        self.navigator = navigator
        self.page_size = settings.search_page_size

    async def handle_sub_agent_menu(self) -> None:
        self.navigator.enter_menu("Manage Sub-Agents")
        try:
            while True:
                self.navigator.display_breadcrumb()
                choices = (
                    MenuBuilder(MenuConfig(title="Sub-Agents"))
                    .add_choice("List installed sub-agents", "list", icon="📋")
                    .add_choice("Search & install sub-agents", "search", icon="🔍")
                    .add_choice("Create new sub-agent", "create", icon="🛠️")
                    .add_choice("Edit sub-agent", "edit", icon="✏️")
                    .add_choice("Delete sub-agent", "delete", icon="🗑️")
                    .add_choice("Validate sub-agent", "validate", icon="✅")
                    .add_back_choice(self.navigator)
                    .get_choices()
                )
                result = await enhanced_select("🤖 Sub-Agent Management", choices, allow_esc_back=True)
                if is_back(result):
                    return

                actions = {
                    "list": self.list_installed_sub_agents,
                    "search": self.search_and_install_sub_agents,
                    "create": self.create_sub_agent,
                    "edit": self.edit_sub_agent,
                    "delete": self.delete_sub_agent,
                    "validate": self.validate_sub_agent,
                }
                await actions[result.value]()
                await self.navigator.pause_for_user()
        finally:
            self.navigator.exit_menu()

    def _installed_agents(self) -> list[SubAgent]:
        agents = []
        for name in self.fs.list_installed_sub_agents():
            agent = self.fs.get_sub_agent(name)
            if agent:
                agents.append(agent)
        return agents

    async def _choose_sub_agent(self, message: str, with_description: bool = True) -> Optional[SubAgent]:
        agents = self._installed_agents()
        if with_description:
            choices = [
                {
                    "name": f"{a.name} - {a.description or 'No description'} {LOCATION_ICONS[a.location]}",
                    "value": a.file_stem,
                }
                for a in agents
            ]
        else:
            choices = [{"name": a.name, "value": a.file_stem} for a in agents]
        choices.append(MenuNavigator.create_cancel_choice())

        result = await enhanced_select(message, choices)
        if is_back(result):
            return None
        return next(a for a in agents if a.file_stem == result.value)

    # -- List ────────────────────────────────────────────────────────

    async def list_installed_sub_agents(self) -> list[SubAgent]:
        console.print("\n[bold magenta]🤖 Installed Sub-Agents[/bold magenta]")

        agents = self._installed_agents()
        if not agents:
            console.print("[yellow]📭 No sub-agents installed yet.[/yellow]")
            console.print("[cyan]💡 Create your first sub-agent to get started![/cyan]")
            return agents

        console.print(f"\n[green]Found {len(agents)} sub-agent(s):[/green]")
        for index, agent in enumerate(agents, 1):
            console.print(
                f"\n[green]✓[/green] [bold]{index}. {agent.name}[/bold] {LOCATION_ICONS[agent.location]}"
            )
            console.print(f"   {agent.description}")
            if agent.tools:
                console.print(f"   [dim]Tools: {', '.join(agent.tools)}[/dim]")
            if agent.author:
                console.print(f"   [dim]Author: {agent.author}[/dim]")
            console.print(f"   [dim]Location: {agent.location}[/dim]")

        console.print(f"\n[cyan]Total: {len(agents)} sub-agents installed[/cyan]")
        return agents

    # -- Create ──────────────────────────────────────────────────────

    async def create_sub_agent(self) -> Optional[str]:
        console.print("\n[bold magenta]🛠️ Create New Sub-Agent[/bold magenta]")

        result = await enhanced_select(
            "How would you like to create the sub-agent?",
            [
                {"name": "📋 Use a template", "value": "template"},
                {"name": "✨ Create from scratch", "value": "scratch"},
            ],
            allow_esc_back=True,
        )
        if is_back(result):
            return None
        if result.value == "template":
            return await self.create_from_template()
        return await self.create_from_scratch()

    async def _ask_name(self, default: str = "") -> str:
        name = await inquirer.text(
            message="Sub-agent name:",
            default=default,
            validate=is_valid_sub_agent_name,
            invalid_message=INVALID_NAME_MESSAGE,
        ).execute_async()
        return name.strip()

    async def create_from_template(self) -> Optional[str]:
        choices = [
            {"name": f"{t.name} - {t.description}", "value": t.name}
            for t in SUB_AGENT_TEMPLATES
        ]
        result = await enhanced_select("📋 Select a template:", choices, allow_esc_back=True)
        if is_back(result):
            return None
        template = next(t for t in SUB_AGENT_TEMPLATES if t.name == result.value)
        return await self.create_agent_from_template(template)

    async def create_agent_from_template(self, template: SubAgentTemplate) -> Optional[str]:
        name = await self._ask_name(default=template.name)
        description = await inquirer.text(
            message="Description:", default=template.description
        ).execute_async()

        tools = list(template.default_tools)
        if await confirm_action("Customize available tools?", default=False):
            tools = await self.select_tools(template.default_tools)

        system_prompt = template.system_prompt
        if await confirm_action("Customize system prompt?", default=False):
            system_prompt = edit_text(template.system_prompt)

        location = await self.select_install_location()
        if location is None:
            return None
        return self._save_new_sub_agent(name, description, tools, system_prompt, location)

    async def create_from_scratch(self) -> Optional[str]:
        name = await self._ask_name()
        description = await inquirer.text(
            message="Description:",
            validate=lambda text: len(text.strip()) > 0,
            invalid_message="Description is required",
        ).execute_async()
        tools = await self.select_tools(DEFAULT_SUB_AGENT_TOOLS)
        system_prompt = edit_text(SCRATCH_SYSTEM_PROMPT.format(name=name))

        location = await self.select_install_location()
        if location is None:
            return None
        return self._save_new_sub_agent(name, description, tools, system_prompt, location)

    async def select_tools(self, default_tools: list[str]) -> list[str]:
        console.print("\n[cyan]Select tools for this sub-agent:[/cyan]")
        choices = [
            {"name": tool, "value": tool, "enabled": tool in default_tools}
            for tool in AVAILABLE_TOOLS
        ]
        try:
            selected = await inquirer.checkbox(
                message="Tools (space to toggle, enter to confirm):",
                choices=choices,
            ).execute_async()
        except KeyboardInterrupt:
            return list(default_tools)
        return list(selected or [])

    async def select_install_location(self) -> Optional[str]:
        result = await enhanced_select(
            "📁 Select installation location:",
            [
                {"name": f"🌍 Global ({self.fs.agents_dir})", "value": GLOBAL},
                {"name": "📂 Project local (./.claude/agents)", "value": LOCAL},
                MenuNavigator.create_back_choice(),
                MenuNavigator.create_cancel_choice(),
            ],
            allow_esc_back=True,
        )
        if is_back(result):
            return None
        return result.value

    def _save_new_sub_agent(
        self, name: str, description: str, tools: list[str], system_prompt: str, location: str
    ) -> Optional[str]:
        front_matter = {"name": name, "description": description, "tools": tools}
        try:
            path = self.fs.save_sub_agent(name, front_matter, system_prompt, location)
        except ClaudeCmdError as e:
            logger.warning("Saving sub-agent %s failed: %s", name, e)
            console.print(f"[red]❌ Failed to create sub-agent: {e}[/red]")
            return None

        location_text = "globally" if location == GLOBAL else "locally"
        console.print(f"\n[green]✅ Successfully created sub-agent '{name}' {location_text}[/green]")
        console.print(f"[cyan]📁 Saved to: {path}[/cyan]")
        console.print(f"[cyan]🛠️ Tools: {', '.join(tools)}[/cyan]")
        return name

    # -- Edit ────────────────────────────────────────────────────────

    async def edit_sub_agent(self) -> bool:
        if not self.fs.list_installed_sub_agents():
            console.print("[yellow]📭 No sub-agents to edit.[/yellow]")
            return False

        agent = await self._choose_sub_agent("✏️ Select a sub-agent to edit:")
        if agent is None:
            return False
        return await self.edit_specific_sub_agent(agent)

    async def edit_specific_sub_agent(self, agent: SubAgent) -> bool:
        console.print(f"\n[bold magenta]✏️ Editing Sub-Agent: {agent.name}[/bold magenta]")
        console.print(f"Location: {agent.location}")
        console.print(f"Description: {agent.description}")

        result = await enhanced_select(
            "What would you like to edit?",
            [
                {"name": "📝 Description only", "value": "description"},
                {"name": "🛠️ Tools only", "value": "tools"},
                {"name": "💭 System prompt only", "value": "prompt"},
                {"name": "🔄 Edit everything", "value": "all"},
                MenuNavigator.create_cancel_choice(),
            ],
        )
        if is_back(result):
            return False
        choice = result.value

        description, tools, system_prompt = agent.description, agent.tools, agent.system_prompt
        if choice in ("description", "all"):
            description = await inquirer.text(
                message="New description:",
                default=agent.description,
                validate=lambda text: len(text.strip()) > 0,
                invalid_message="Description is required",
            ).execute_async()
        if choice in ("tools", "all"):
            tools = await self.select_tools(agent.tools)
        if choice in ("prompt", "all"):
            system_prompt = edit_text(agent.system_prompt)

        if not await confirm_action("Save changes?", default=True):
            return False

        front_matter = agent.front_matter()
        front_matter.update(description=description, tools=tools)
        try:
            self.fs.save_sub_agent(
                agent.name, front_matter, system_prompt, agent.location, file_stem=agent.file_stem
            )
        except ClaudeCmdError as e:
            logger.warning("Updating sub-agent %s failed: %s", agent.name, e)
            console.print(f"[red]❌ Failed to update sub-agent: {e}[/red]")
            return False
        console.print(f"\n[green]✅ Successfully updated sub-agent '{agent.name}'[/green]")
        return True

    # -- Delete ──────────────────────────────────────────────────────

    async def delete_sub_agent(self) -> bool:
        if not self.fs.list_installed_sub_agents():
            console.print("[yellow]📭 No sub-agents to delete.[/yellow]")
            return False

        agent = await self._choose_sub_agent("🗑️ Select a sub-agent to delete:")
        if agent is None:
            return False

        confirmed = await confirm_action(
            f"Are you sure you want to delete '{agent.name}' ({agent.location})?", default=False
        )
        if not confirmed:
            return False

        try:
            deleted = self.fs.delete_sub_agent(agent.file_stem, agent.location)
        except ClaudeCmdError as e:
            logger.warning("Deleting sub-agent %s failed: %s", agent.name, e)
            console.print(f"[red]❌ Failed to delete '{agent.name}': {e}[/red]")
            return False

        if deleted:
            console.print(f"[green]✅ Successfully deleted '{agent.name}'[/green]")
        else:
            console.print(f"[yellow]⚠️ Sub-agent '{agent.name}' not found[/yellow]")
        return deleted

    # -- Validate ────────────────────────────────────────────────────

    async def validate_sub_agent(self) -> Optional[list[str]]:
        if not self.fs.list_installed_sub_agents():
            console.print("[yellow]📭 No sub-agents to validate.[/yellow]")
            return None

        agent = await self._choose_sub_agent("🔍 Select a sub-agent to validate:", with_description=False)
        if agent is None:
            return None

        console.print(f"\n[cyan]🔍 Validating sub-agent: {agent.name}[/cyan]")
        issues = validate_sub_agent(agent)
        if not issues:
            console.print(f"[green]✅ Sub-agent '{agent.name}' is valid[/green]")
            console.print(f"[cyan]📁 Location: {agent.location}[/cyan]")
            console.print(f"[cyan]🛠️ Tools: {', '.join(agent.tools) or 'None specified'}[/cyan]")
        else:
            console.print(f"[red]❌ Validation failed for '{agent.name}':[/red]")
            for issue in issues:
                console.print(f"[red]  • {issue}[/red]")
        return issues

    # -- Catalog search & install ────────────────────────────────────

    def is_sub_agent_installed(self, sub_agent_id: str) -> bool:
        return sub_agent_name_from_id(sub_agent_id) in self.fs.list_installed_sub_agents()

    async def search_and_install_sub_agents(self) -> None:
        query = await ask_query("🔍 Enter search query for sub-agents:")
        if not query:
            return

        self.navigator.enter_menu("Search Sub-Agents")
        try:
            chosen_page = await paginated_search(
                query,
                fetch_page=self.api.get_sub_agents,
                is_installed=self.is_sub_agent_installed,
                navigator=self.navigator,
                page_size=self.page_size,
                noun="sub-agent",
                install_label="🤖 Install a sub-agent from these results",
            )
            if chosen_page:
                await self.install_from_search_results(chosen_page)
        finally:
            self.navigator.exit_menu()

    async def install_from_search_results(self, sub_agents: list[Command]) -> None:
        choices = [
            {"name": f"{cmd.name} - {cmd.description or 'No description'}", "value": cmd.id}
            for cmd in sub_agents
        ]
        choices.append(MenuNavigator.create_back_choice())
        choices.append(MenuNavigator.create_cancel_choice())

        result = await enhanced_select("🤖 Select a sub-agent to install:", choices)
        if is_back(result):
            return
        location = await self.select_install_location()
        if location is not None:
            await self.install_specific_sub_agent(result.value, location)

    async def install_specific_sub_agent(self, sub_agent_id: str, location: str = GLOBAL) -> bool:
        console.print(f"\n[cyan]Installing sub-agent: {sub_agent_id}...[/cyan]")

        try:
            record = await self.api.get_sub_agent(sub_agent_id)
        except CommandNotFoundError:
            record = None
        if record is None or not record.file_path:
            console.print(f"[red]Sub-agent '{sub_agent_id}' not found or has no file path.[/red]")
            return False

        name = sub_agent_name_from_id(sub_agent_id)
        if name in self.fs.list_installed_sub_agents():
            overwrite = await confirm_action(
                f"Sub-agent '{name}' already exists. Overwrite?", default=False
            )
            if not overwrite:
                console.print("[cyan]Installation cancelled[/cyan]")
                return False

        content = await self.api.fetch_file_content(record.file_path)
        if not content:
            console.print(f"[red]Failed to fetch content for sub-agent '{sub_agent_id}'.[/red]")
            return False

        try:
            front_matter, system_prompt = convert_command_to_sub_agent(content, record)
            self.fs.save_sub_agent(name, front_matter, system_prompt, location)
        except ClaudeCmdError as e:
            logger.warning("Install of sub-agent %s failed: %s", sub_agent_id, e)
            console.print(f"[red]❌ Failed to install sub-agent: {e}[/red]")
            return False

        location_text = "globally" if location == GLOBAL else "locally"
        console.print(f"[green]✅ Successfully installed sub-agent '{name}' {location_text}[/green]")
        if record.description:
            console.print(f"[cyan]Description: {record.description}[/cyan]")
        return True

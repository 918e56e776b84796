# claude_cmd/menus/guides.py
"""Informational screens: command-authoring workflows and help pages."""
from rich.console import Console
from rich.panel import Panel

from claude_cmd import APP_NAME, __version__
from claude_cmd.navigation import MenuNavigator, enhanced_select, is_back

console = Console()

WORKFLOW_PAGES = {
    "templates": ("📋 Creating Custom Commands", """[bold]Command Structure:[/bold]
• Each command is a .md file in ~/.claude/commands/
• Use YAML frontmatter for metadata
• Commands become available via / menu in Claude

[bold]Using $ARGUMENTS:[/bold]
• Use $ARGUMENTS placeholder for parameter passing
• Example: "Analyze the following code: $ARGUMENTS"
• Claude will prompt for input when command is used

[bold]Example Command File:[/bold]
---
name: "Code Review"
description: "Perform systematic code review"
author: "Your Name"
tags: ["review", "quality"]
---

# Code Review Template

Please perform a comprehensive code review of: $ARGUMENTS

[bold]Common Workflow Commands:[/bold]
• Bug Investigation
• Feature Planning
• Code Review Checklist
• Testing Strategy
• Documentation Generation"""),
    "practices": ("📚 Command Creation Best Practices", """[bold]1. Clear Purpose:[/bold]
   • Give commands specific, focused purposes
   • Use descriptive names and descriptions
   • Add relevant tags for discoverability

[bold]2. Flexible Parameters:[/bold]
   • Use $ARGUMENTS for input flexibility
   • Provide clear instructions on what to pass

[bold]3. Organization:[/bold]
   • Create commands for repeated tasks
   • Share useful commands with your team

[bold]4. Documentation:[/bold]
   • Include usage examples in commands
   • Add author and version information"""),
}

HELP_PAGES = {
    "overview": (f"📖 {APP_NAME} v{__version__} Overview", """[bold]Purpose:[/bold]
Manage Claude commands, sub-agents, configurations, and development workflows.

[bold]Key Features:[/bold]
• Command Management - Install, search, and manage Claude commands
• Sub-Agents - Install, create, edit and validate sub-agents
• CLAUDE.md Files - Create and manage project configurations
• Project Init - Set up Claude environment for any project
• Security - Manage permissions and tool allowlists"""),
    "quickstart": ("🚀 Quick Start Guide", """[bold]Step 1: Initialize Your Project[/bold]
Run 'Project Initialization' from the main menu to:
• Detect your project type (Node.js, React, Python, etc.)
• Create appropriate CLAUDE.md file
• Set up basic security profile

[bold]Step 2: Customize Your Setup[/bold]
• Edit CLAUDE.md for project-specific instructions
• Install useful commands from the command repository
• Configure security settings

[bold]Step 3: Start Using Claude[/bold]
• Use custom commands via / menu in Claude conversations
• Reference your CLAUDE.md for context"""),
    "files": ("📁 File Locations & Structure", """[bold]Global Claude Directory: ~/.claude/[/bold]
• commands/           - All Claude commands (installed + custom)
• agents/             - Global sub-agents
• settings.json       - Global configuration

[bold]Project Files:[/bold]
• CLAUDE.md          - Main project instructions for Claude
• CLAUDE.local.md    - Local overrides (gitignored)
• .claude/agents/    - Project-specific sub-agents

Set CLAUDE_CMD_HOME to use a different global directory."""),
    "cli": ("⌨️ Command Line Usage", """[bold]Interactive Mode (Recommended):[/bold]
• claude-cmd                    - Launch full interactive interface
• claude-cmd --local            - Use ./commands/commands.json as the catalog

[bold]Direct Commands:[/bold]
• claude-cmd install <id>       - Install specific command by ID
• claude-cmd list               - List all installed commands
• claude-cmd search <query>     - Search available commands
• claude-cmd --help             - Show basic help

[bold]Environment:[/bold]
• CLAUDE_CMD_URL                - Catalog URL or file path
• CLAUDE_CMD_TIMEOUT            - Request timeout in seconds (0 disables)
• CLAUDE_CMD_LOG_LEVEL          - Logging level (default WARNING)"""),
}


async def show_pages(
    navigator: MenuNavigator,
    menu_name: str,
    title: str,
    pages: dict[str, tuple[str, str]],
    choice_labels: dict[str, str],
) -> None:
    """Loop over a set of static pages until the user goes back."""
    navigator.enter_menu(menu_name)
    try:
        while True:
            console.print(f"\n[bold magenta]{title}[/bold magenta]")
            choices = [{"name": label, "value": key} for key, label in choice_labels.items()]
            choices.append({"name": navigator.get_back_button_text(), "value": "back"})

            result = await enhanced_select("What would you like to learn about?", choices, allow_esc_back=True)
            if is_back(result):
                return

            page_title, body = pages[result.value]
            console.print(Panel(body, title=page_title, border_style="cyan"))
            await navigator.pause_for_user()
    finally:
        navigator.exit_menu()


class WorkflowManager:

    def __init__(self, navigator: MenuNavigator):
        self.navigator = navigator

    async def handle_workflows(self) -> None:
        await show_pages(
            self.navigator,
            "Command & Workflow Creation",
            "🔄 Command & Workflow Creation",
            WORKFLOW_PAGES,
            {"templates": "📋 Command creation guide", "practices": "📖 Best practices"},
        )


class HelpManager:

    def __init__(self, navigator: MenuNavigator):
        self.navigator = navigator

    async def show_help(self) -> None:
        await show_pages(
            self.navigator,
            "Help & Documentation",
            "📚 Help & Documentation",
            HELP_PAGES,
            {
                "overview": "📖 General Help & Overview",
                "quickstart": "🚀 Quick Start Guide",
                "files": "📁 File Locations & Structure",
                "cli": "⌨️ Command Line Usage",
            },
        )

# claude_cmd/menus/claudemd.py
"""CLAUDE.md management: create from a project template, edit, validate, list."""
import json
import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from claude_cmd.exceptions import ClaudeCmdError
from claude_cmd.filesystem import FileSystemManager
from claude_cmd.navigation import (
    MenuBuilder,
    MenuConfig,
    MenuNavigator,
    confirm_action,
    enhanced_select,
    is_back,
)
from claude_cmd.templates import PROJECT_TYPES, get_claude_md_template

logger = logging.getLogger(__name__)
console = Console()

CURRENT = "current"
LOCAL = "local"
HOME = "home"

SECTION_KEYWORDS = ("bash", "command", "style", "test", "workflow")
MIN_CONTENT_LENGTH = 100
MAX_CONTENT_LENGTH = 5000


def validate_content(content: str) -> list[str]:
    """Heuristic checks for a CLAUDE.md body. Returns human-readable issues."""
    issues = []
    if "#" not in content:
        issues.append("No headers found - consider adding sections with # headers")

    lowered = content.lower()
    if not any(section in lowered for section in SECTION_KEYWORDS):
        issues.append("Consider adding sections for commands, code style, testing, or workflow")

    if len(content) < MIN_CONTENT_LENGTH:
        issues.append("Content seems quite short - consider adding more detail")
    if len(content) > MAX_CONTENT_LENGTH:
        issues.append("Content is very long - consider being more concise for better Claude performance")

    if "TODO" in content or "FIXME" in content:
        issues.append("Contains TODO/FIXME placeholders that should be completed")
    return issues


def detect_project_type(cwd: Path) -> str:
    """Guess the project type from marker files in cwd."""
    package_json = cwd / "package.json"
    if package_json.exists():
        try:
            package = json.loads(package_json.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning("Could not read %s: %s", package_json, e)
            return "nodejs"
        if not isinstance(package, dict):
            return "nodejs"
        dependencies = {}
        for key in ("dependencies", "devDependencies"):
            if isinstance(package.get(key), dict):
                dependencies.update(package[key])
        if "react" in dependencies:
            return "react"
        if "vue" in dependencies:
            return "vue"
        return "nodejs"

    if (cwd / "requirements.txt").exists() or (cwd / "pyproject.toml").exists():
        return "python"
    if (cwd / "go.mod").exists():
        return "go"
    if (cwd / "Cargo.toml").exists():
        return "rust"
    if (cwd / "pom.xml").exists():
        return "java"
    if any(cwd.glob("*.csproj")):
        return "dotnet"
    return "generic"


class ClaudeMdManager:

    def __init__(self, fs: FileSystemManager, navigator: MenuNavigator):
        self.fs = fs
        self.navigator = navigator

    def detect_project_type(self) -> str:
        return detect_project_type(self.fs.cwd)

    def get_file_path(self, location: str) -> Path:
        if location == LOCAL:
            return self.fs.cwd / "CLAUDE.local.md"
        if location == HOME:
            return self.fs.claude_dir / "CLAUDE.md"
        return self.fs.cwd / "CLAUDE.md"

    def get_display_name(self, path: Path) -> str:
        path = Path(path)
        if path.is_relative_to(self.fs.cwd):
            return str(path.relative_to(self.fs.cwd))
        home = Path.home()
        if path.is_relative_to(home):
            return "~/" + str(path.relative_to(home))
        return str(path)

    async def handle_claude_md_menu(self) -> None:
        self.navigator.enter_menu("CLAUDE.md Management")
        try:
            while True:
                self.navigator.display_breadcrumb()
                choices = (
                    MenuBuilder(MenuConfig(title="CLAUDE.md Management"))
                    .add_choice("Create new CLAUDE.md", "create", icon="📄")
                    .add_choice("Edit existing CLAUDE.md", "edit", icon="✏️ ")
                    .add_choice("Validate CLAUDE.md files", "validate", icon="🔍")
                    .add_choice("List all CLAUDE.md files", "list", icon="📋")
                    .add_back_choice(self.navigator)
                    .get_choices()
                )
                result = await enhanced_select("CLAUDE.md Management:", choices, allow_esc_back=True)
                if is_back(result):
                    return

                if result.value == "create":
                    await self.create_claude_md()
                elif result.value == "edit":
                    await self.edit_claude_md()
                elif result.value == "validate":
                    self.validate_claude_md()
                elif result.value == "list":
                    self.list_claude_md_files()
                await self.navigator.pause_for_user()
        finally:
            self.navigator.exit_menu()

    async def create_claude_md(self, project_type: Optional[str] = None) -> Optional[Path]:
        console.print("\n[bold magenta]🎯 CLAUDE.md Configuration Setup[/bold magenta]")

        detected = project_type or self.detect_project_type()
        type_choices = [{"name": label, "value": key} for key, label in PROJECT_TYPES.items()]
        # Put the detected type first so Enter accepts it
        type_choices.sort(key=lambda choice: choice["value"] != detected)
        result = await enhanced_select("What type of project is this?", type_choices, allow_esc_back=True)
        if is_back(result):
            return None
        template = get_claude_md_template(result.value)

        result = await enhanced_select(
            "Where should the CLAUDE.md file be created?",
            [
                {"name": "Current directory (CLAUDE.md)", "value": CURRENT},
                {"name": "Current directory (CLAUDE.local.md - gitignored)", "value": LOCAL},
                {"name": f"Home directory ({self.get_display_name(self.get_file_path(HOME))})", "value": HOME},
            ],
            allow_esc_back=True,
        )
        if is_back(result):
            return None
        location = result.value
        path = self.get_file_path(location)

        if self.fs.file_exists(path):
            console.print(f"[yellow]⚠️  File already exists: {path}[/yellow]")
            if not await confirm_action("Do you want to overwrite the existing file?", default=False):
                console.print("[cyan]Operation cancelled.[/cyan]")
                return path

        content = template
        if await confirm_action("Would you like to add custom content to the template?", default=False):
            additional = typer.edit("\n# Custom Instructions\n\n")
            if additional:
                content += "\n" + additional

        try:
            self.fs.write_file(path, content)
        except ClaudeCmdError as e:
            logger.warning("Writing %s failed: %s", path, e)
            console.print(f"[red]Failed to create CLAUDE.md: {e}[/red]")
            return None

        console.print(f"[green]CLAUDE.md created at: {path}[/green]")
        if location == LOCAL:
            console.print("[cyan]Remember to add CLAUDE.local.md to your .gitignore file[/cyan]")
        return path

    async def edit_claude_md(self) -> Optional[Path]:
        files = self.fs.find_claude_md_files()
        if not files:
            console.print("[yellow]No CLAUDE.md files found[/yellow]")
            if await confirm_action("Would you like to create a new CLAUDE.md file?", default=True):
                return await self.create_claude_md()
            return None

        choices = [{"name": self.get_display_name(f), "value": str(f)} for f in files]
        result = await enhanced_select(
            "Which CLAUDE.md file would you like to edit?", choices, allow_esc_back=True
        )
        if is_back(result):
            return None
        path = Path(result.value)

        current = self.fs.read_file(path)
        edited = typer.edit(current, extension=".md")
        if edited is None:
            console.print("[cyan]No changes made.[/cyan]")
            return path
        self.fs.write_file(path, edited)
        console.print(f"[green]Updated {path}[/green]")
        return path

    def validate_claude_md(self) -> dict[Path, list[str]]:
        files = self.fs.find_claude_md_files()
        if not files:
            console.print("[yellow]No CLAUDE.md files found to validate[/yellow]")
            return {}

        console.print("\n[bold magenta]🔍 Validating CLAUDE.md files...[/bold magenta]")
        report = {}
        for path in files:
            console.print(f"\n[bold]{self.get_display_name(path)}[/bold]")
            issues = validate_content(self.fs.read_file(path))
            report[path] = issues
            if not issues:
                console.print("[green]No issues found[/green]")
            for issue in issues:
                console.print(f"[yellow]{issue}[/yellow]")
        return report

    def list_claude_md_files(self) -> list[Path]:
        files = self.fs.find_claude_md_files()
        if not files:
            console.print("[yellow]No CLAUDE.md files found[/yellow]")
            return files

        console.print("\n[bold magenta]📋 CLAUDE.md Files:[/bold magenta]")
        for index, path in enumerate(files, 1):
            console.print(f"[green]{index}.[/green] {self.get_display_name(path)}")
        return files

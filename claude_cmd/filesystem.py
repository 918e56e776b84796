# claude_cmd/filesystem.py
"""On-disk persistence for commands, sub-agents, settings.json and CLAUDE.md files."""
import json
import logging
from dataclasses import dataclass, field, asdict
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

from claude_cmd.config import settings
from claude_cmd.exceptions import FileSystemError, FrontMatterError
from claude_cmd.frontmatter import normalize_tools, parse_front_matter, render_front_matter

logger = logging.getLogger(__name__)

GLOBAL = "global"
LOCAL = "local"
SECURITY_PROFILE_NAMES = ("strict", "moderate", "permissive")


@dataclass
class ClaudeConfig:
    """Contents of ~/.claude/settings.json. Unknown keys round-trip via ``extra``."""
    allowedTools: list[str] = field(default_factory=list)
    securityProfile: str = "moderate"
    version: str = "1.0.0"
    lastUpdated: Optional[str] = None
    fileSystemAccess: Optional[str] = None
    networkAccess: Optional[str] = None
    workflowsEnabled: Optional[bool] = None
    extra: dict = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict) -> "ClaudeConfig":
        known = {k for k in cls.__dataclass_fields__ if k != "extra"}
        config = cls(**{k: v for k, v in data.items() if k in known})
        config.extra = {k: v for k, v in data.items() if k not in known}
        # null or a comma string in hand-edited files
        config.allowedTools = normalize_tools(config.allowedTools)
        return config

    def to_dict(self) -> dict:
        data = {k: v for k, v in asdict(self).items() if k != "extra" and v is not None}
        return {**self.extra, **data}


@dataclass
class SubAgent:
    name: str
    description: str
    system_prompt: str
    file_path: Path
    location: str
    tools: list[str] = field(default_factory=list)
    author: Optional[str] = None
    version: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @property
    def file_stem(self) -> str:
        """Name of the file on disk; it can differ from the front-matter name."""
        return self.file_path.stem

    def front_matter(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "tools": self.tools,
            "author": self.author,
            "version": self.version,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="seconds")


class FileSystemManager:
    """Reads and writes the user's Claude directory and the project's .claude folder."""

    def __init__(self, claude_dir: Optional[Path] = None, cwd: Optional[Path] = None):
        self.claude_dir = Path(claude_dir) if claude_dir else settings.claude_dir
        self.cwd = Path(cwd) if cwd else Path.cwd()
        self.commands_dir = self.claude_dir / "commands"
        self.agents_dir = self.claude_dir / "agents"
        self.config_file = self.claude_dir / "settings.json"
        self.project_claude_dir = self.cwd / ".claude"
        self.project_agents_dir = self.project_claude_dir / "agents"

    # -- Directories ─────────────────────────────────────────────────

    def _mkdirs(self, *directories: Path) -> None:
        for directory in directories:
            try:
                directory.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise FileSystemError(f"Failed to create directory: {e}", directory) from e

    def ensure_claude_directory(self) -> None:
        self._mkdirs(self.claude_dir, self.commands_dir)

    def ensure_agents_directory(self) -> None:
        self._mkdirs(self.claude_dir, self.agents_dir)

    def ensure_project_agents_directory(self) -> None:
        self._mkdirs(self.project_agents_dir)

    def agents_dir_for(self, location: str) -> Path:
        if location == GLOBAL:
            return self.agents_dir
        if location == LOCAL:
            return self.project_agents_dir
        raise ValueError(f"Unknown sub-agent location: {location}")

    # -- Settings ────────────────────────────────────────────────────

    def get_claude_config(self) -> ClaudeConfig:
        if not self.config_file.exists():
            return ClaudeConfig()
        try:
            data = json.loads(self.config_file.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            raise FileSystemError(f"Failed to read config: {e}", self.config_file) from e
        if not isinstance(data, dict):
            raise FileSystemError("Failed to read config: expected a JSON object", self.config_file)
        return ClaudeConfig.from_dict(data)

    def save_claude_config(self, config: ClaudeConfig) -> Path:
        self.ensure_claude_directory()
        config.lastUpdated = _now_iso()
        try:
            self.config_file.write_text(json.dumps(config.to_dict(), indent=2) + "\n", encoding="utf-8")
        except OSError as e:
            raise FileSystemError(f"Failed to save config: {e}", self.config_file) from e
        return self.config_file

    # -- Commands ────────────────────────────────────────────────────

    def list_installed_commands(self) -> list[str]:
        """Return installed command files as posix paths relative to the commands dir."""
        if not self.commands_dir.exists():
            return []
        try:
            return sorted(
                path.relative_to(self.commands_dir).as_posix()
                for path in self.commands_dir.rglob("*.md")
                if path.is_file()
            )
        except OSError as e:
            raise FileSystemError(f"Failed to list commands: {e}", self.commands_dir) from e

    def is_command_installed(self, command_id: str) -> bool:
        return any(
            file == f"{command_id}.md"
            or file.startswith(f"{command_id}/")
            or file.endswith(f"/{command_id}.md")
            for file in self.list_installed_commands()
        )

    def _command_path(self, file_name: str) -> Path:
        path = (self.commands_dir / file_name).resolve()
        if not path.is_relative_to(self.commands_dir.resolve()):
            raise FileSystemError("Command path escapes the commands directory", path)
        return path

    def save_command(self, file_name: str, content: str) -> Path:
        self.ensure_claude_directory()
        path = self._command_path(file_name)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        except OSError as e:
            raise FileSystemError(f"Failed to save command: {e}", path) from e
        logger.debug("Saved command %s", path)
        return path

    def delete_command(self, file_name: str) -> bool:
        path = self._command_path(file_name)
        try:
            path.unlink()
        except OSError as e:
            raise FileSystemError(f"Failed to delete command: {e}", path) from e
        return True

    # -- Sub-agents ──────────────────────────────────────────────────

    def _agent_files(self, location: str) -> list[Path]:
        directory = self.agents_dir_for(location)
        if not directory.exists():
            return []
        return sorted(p for p in directory.glob("*.md") if p.is_file())

    def list_installed_sub_agents(self) -> list[str]:
        """Names of all sub-agents, global and project-local, without duplicates."""
        names = {p.stem for p in self._agent_files(GLOBAL)}
        names.update(p.stem for p in self._agent_files(LOCAL))
        return sorted(names)

    def read_sub_agent(self, path: Path, location: str) -> SubAgent:
        metadata, body = parse_front_matter(self.read_file(path))
        return SubAgent(
            name=str(metadata.get("name") or path.stem),
            description=str(metadata.get("description") or ""),
            system_prompt=body.strip(),
            file_path=path,
            location=location,
            tools=normalize_tools(metadata.get("tools")),
            author=metadata.get("author"),
            version=None if metadata.get("version") is None else str(metadata.get("version")),
            created_at=None if metadata.get("created_at") is None else str(metadata.get("created_at")),
            updated_at=None if metadata.get("updated_at") is None else str(metadata.get("updated_at")),
        )

    def get_sub_agent(self, name: str) -> Optional[SubAgent]:
        """Load a sub-agent by name; the project copy wins over the global one."""
        for location in (LOCAL, GLOBAL):
            path = self.agents_dir_for(location) / f"{name}.md"
            if not path.exists():
                continue
            try:
                return self.read_sub_agent(path, location)
            except FrontMatterError as e:
                logger.warning("Skipping malformed sub-agent %s: %s", path, e)
        return None

    def save_sub_agent(
        self,
        name: str,
        front_matter: dict[str, Any],
        system_prompt: str,
        location: str = GLOBAL,
        file_stem: Optional[str] = None,
    ) -> Path:
        if location == GLOBAL:
            self.ensure_agents_directory()
        else:
            self.ensure_project_agents_directory()

        metadata = dict(front_matter)
        metadata["name"] = name
        tools = normalize_tools(metadata.get("tools"))
        metadata["tools"] = ", ".join(tools) if tools else None
        metadata.setdefault("created_at", None)
        if not metadata["created_at"]:
            metadata["created_at"] = _now_iso()
        metadata["updated_at"] = _now_iso()

        path = self.agents_dir_for(location) / f"{file_stem or name}.md"
        self.write_file(path, render_front_matter(metadata, system_prompt))
        return path

    def delete_sub_agent(self, name: str, location: str = GLOBAL) -> bool:
        path = self.agents_dir_for(location) / f"{name}.md"
        if not path.exists():
            return False
        try:
            path.unlink()
        except OSError as e:
            raise FileSystemError(f"Failed to delete sub-agent: {e}", path) from e
        return True

    # -- Generic files ───────────────────────────────────────────────

    def read_file(self, path: Path) -> str:
        try:
            return Path(path).read_text(encoding="utf-8")
        except OSError as e:
            raise FileSystemError(f"Failed to read file: {e}", Path(path)) from e

    def write_file(self, path: Path, content: str) -> bool:
        try:
            Path(path).parent.mkdir(parents=True, exist_ok=True)
            Path(path).write_text(content, encoding="utf-8")
        except OSError as e:
            raise FileSystemError(f"Failed to write file: {e}", Path(path)) from e
        return True

    def file_exists(self, path: Path) -> bool:
        return Path(path).exists()

    def find_claude_md_files(self, start_dir: Optional[Path] = None) -> list[Path]:
        """CLAUDE.md / CLAUDE.local.md from start_dir up to the filesystem root, then ~/.claude."""
        found: list[Path] = []
        current = Path(start_dir or self.cwd).resolve()
        for directory in [current, *current.parents]:
            for file_name in ("CLAUDE.md", "CLAUDE.local.md"):
                candidate = directory / file_name
                if candidate.exists():
                    found.append(candidate)

        home_claude = self.claude_dir / "CLAUDE.md"
        if home_claude.exists() and home_claude.resolve() not in {p.resolve() for p in found}:
            found.append(home_claude)
        return found

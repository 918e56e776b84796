"""Error types raised by claude-cmd."""
from pathlib import Path
from typing import Optional


class ClaudeCmdError(Exception):
    """Base exception for claude-cmd errors."""


class CatalogError(ClaudeCmdError):
    """Catalog could not be fetched or decoded."""

    def __init__(self, message: str, source: Optional[str] = None):
        super().__init__(message)
        self.source = source


class CommandNotFoundError(CatalogError):
    """No catalog entry with the requested id."""

    def __init__(self, command_id: str):
        super().__init__(f"Command {command_id} not found")
        self.command_id = command_id


class FrontMatterError(ClaudeCmdError):
    """Markdown file has a missing or unparsable YAML front matter block."""


class FileSystemError(ClaudeCmdError):
    """Reading or writing under the Claude directories failed."""

    def __init__(self, message: str, path: Optional[Path] = None):
        self.path = path
        super().__init__(message + (f" (at {path})" if path else ""))

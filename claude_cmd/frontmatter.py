"""YAML front matter for command and sub-agent markdown files.

Files look like::

    ---
    name: code-reviewer
    description: Reviews code
    tools: Read, Grep
    ---
    Body text...
"""
from typing import Any

import yaml

from claude_cmd.exceptions import FrontMatterError

DELIMITER = "---"


def split_front_matter(content: str) -> tuple[str, str]:
    """Split raw text into (yaml_text, body) without parsing the YAML."""
    text = content.lstrip("\ufeff")
    lines = text.splitlines()
    if not lines or lines[0].strip() != DELIMITER:
        raise FrontMatterError("Invalid format: missing YAML front matter")

    for i, line in enumerate(lines[1:], start=1):
        if line.strip() == DELIMITER:
            yaml_text = "\n".join(lines[1:i])
            body = "\n".join(lines[i + 1:])
            return yaml_text, body

    raise FrontMatterError("Invalid format: front matter block is not closed")


def parse_front_matter(content: str) -> tuple[dict[str, Any], str]:
    """Parse a markdown document into (metadata, body)."""
    yaml_text, body = split_front_matter(content)
    try:
        metadata = yaml.safe_load(yaml_text) if yaml_text.strip() else {}
    except yaml.YAMLError as e:
        raise FrontMatterError(f"Invalid YAML front matter: {e}") from e

    if not isinstance(metadata, dict):
        raise FrontMatterError("Front matter must be a mapping of keys to values")
    return metadata, body


def has_front_matter(content: str) -> bool:
    try:
        split_front_matter(content)
    except FrontMatterError:
        return False
    return True


def render_front_matter(metadata: dict[str, Any], body: str) -> str:
    """Serialize metadata and body back into a markdown document.

    Keys whose value is None are omitted.
    """
    clean = {k: v for k, v in metadata.items() if v is not None}
    yaml_text = yaml.safe_dump(
        clean,
        sort_keys=False,
        allow_unicode=True,
        default_flow_style=False,
        width=1000,
    )
    return f"{DELIMITER}\n{yaml_text}{DELIMITER}\n\n{body.strip()}\n"


def normalize_tools(value: Any) -> list[str]:
    """Accept ``"Read, Edit"`` or ``["Read", "Edit"]`` and return a clean list."""
    if value is None:
        return []
    if isinstance(value, str):
        items = value.split(",")
    elif isinstance(value, (list, tuple)):
        items = [str(v) for v in value]
    else:
        items = [str(value)]
    return [item.strip() for item in items if item.strip()]


def normalize_tags(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [t.strip() for t in value.split(",") if t.strip()]
    if not isinstance(value, (list, tuple)):
        raise TypeError(f"tags must be a string or a list, got {type(value).__name__}")
    return [str(t).strip() for t in value if str(t).strip()]

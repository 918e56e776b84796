"""claude-cmd - manage Claude commands, sub-agents and configuration."""

__version__ = "1.1.0"

APP_NAME = "Claude CMD"


def app_name_with_version() -> str:
    """Return the display name, e.g. ``Claude CMD v1.1.0``."""
    return f"{APP_NAME} v{__version__}"

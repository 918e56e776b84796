# claude_cmd/config.py
import os
from pathlib import Path
from dataclasses import dataclass, field
from typing import Optional
from dotenv import load_dotenv

load_dotenv()

DEFAULT_COMMANDS_URL = "https://raw.githubusercontent.com/kiliczsh/claude-cmd/main/commands/commands.json"
LOCAL_COMMANDS_PATH = Path("commands") / "commands.json"


@dataclass
class Settings:
    commands_url: str = DEFAULT_COMMANDS_URL
    url_overridden: bool = False
    using_local_catalog: bool = False
    claude_dir: Path = field(default_factory=lambda: Path.home() / ".claude")
    request_timeout: Optional[float] = 30.0
    cache_duration_seconds: int = 300  # 5 minutes
    search_page_size: int = 10
    navigation_history_size: int = 10
    log_level: str = "WARNING"

    def __post_init__(self):
        env_url = os.getenv("CLAUDE_CMD_URL", "").strip()
        if env_url:
            self.commands_url = env_url
            self.url_overridden = True

        env_home = os.getenv("CLAUDE_CMD_HOME", "").strip()
        if env_home:
            self.claude_dir = Path(env_home).expanduser()

        # 0 disables the timeout entirely
        env_timeout = os.getenv("CLAUDE_CMD_TIMEOUT", "").strip()
        if env_timeout:
            timeout = float(env_timeout)
            self.request_timeout = timeout if timeout > 0 else None

        self.log_level = os.getenv("CLAUDE_CMD_LOG_LEVEL", self.log_level).upper()

    @property
    def commands_dir(self) -> Path:
        return self.claude_dir / "commands"

    @property
    def agents_dir(self) -> Path:
        return self.claude_dir / "agents"

    @property
    def config_file(self) -> Path:
        return self.claude_dir / "settings.json"

    def use_local_catalog(self, cwd: Optional[Path] = None) -> Path:
        """Point the catalog source at ./commands/commands.json and return that path."""
        local_path = (cwd or Path.cwd()) / LOCAL_COMMANDS_PATH
        self.commands_url = str(local_path)
        self.url_overridden = True
        self.using_local_catalog = True
        return local_path


settings = Settings()

# claude_cmd/navigation.py
"""Menu navigation: breadcrumb tracking, back handling and the select wrapper."""
import logging
import signal
from collections import deque
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional, Union

import typer
from InquirerPy import inquirer
from InquirerPy.separator import Separator
from rich.console import Console

from claude_cmd import APP_NAME

logger = logging.getLogger(__name__)
console = Console()

DEFAULT_HISTORY_SIZE = 10

# Navigation choice values
BACK = "back"
CANCEL = "cancel"
MAIN_MENU = "main_menu"

# Navigation option labels
BACK_OPTION = "← Back"
CANCEL_OPTION = "← Cancel"
MAIN_MENU_OPTION = "← Back to Main Menu"

ROOT_BREADCRUMB = "Main Menu"
SELECT_HINT = "(Use arrow keys, Enter to select, Esc to go back)"


class NavigationStack:
    """Bounded history of menu paths for multi-level back navigation.

    Push/pop work on the newest entry; when the history is full the
    oldest entry is dropped.
    """

    def __init__(self, max_size: int = DEFAULT_HISTORY_SIZE):
        self.max_size = max_size
        self._stack: deque[list[str]] = deque()

    def push(self, path: list[str]) -> None:
        """Save a copy of path, evicting the oldest entry when over capacity."""
        self._stack.append(list(path))
        if len(self._stack) > self.max_size:
            self._stack.popleft()

    def pop(self) -> Optional[list[str]]:
        """Remove and return the most recent path, or None if empty."""
        if not self._stack:
            return None
        return self._stack.pop()

    def peek(self) -> Optional[list[str]]:
        """Return a copy of the most recent path without removing it."""
        if not self._stack:
            return None
        return list(self._stack[-1])

    def can_go_back(self) -> bool:
        return len(self._stack) > 0

    def clear(self) -> None:
        self._stack.clear()

    def size(self) -> int:
        return len(self._stack)

    def __len__(self) -> int:
        return len(self._stack)


class MenuNavigator:
    """Tracks the current menu path and supports back navigation.

    One navigator is created per interactive session and handed to every
    menu manager, so breadcrumbs reflect the real nesting across menus.
    """

    def __init__(self, history_size: int = DEFAULT_HISTORY_SIZE):
        self.navigation_stack = NavigationStack(max_size=history_size)
        self._current_path: list[str] = []
        self._should_exit = False

    # -- Interrupt handling ──────────────────────────────────────────

    def register_interrupt_handler(self) -> None:
        """Install the two-stage Ctrl+C handler for this process."""
        signal.signal(signal.SIGINT, self.handle_interrupt)

    def handle_interrupt(self, signum=None, frame=None) -> None:
        """First Ctrl+C inside a submenu only warns; at root or on repeat, exit."""
        if self._current_path and not self._should_exit:
            console.print(
                '\n\n[cyan]🔄 Use "← Back" option to navigate up, '
                "or press Ctrl+C again to exit[/cyan]"
            )
            self._should_exit = True
            return

        console.print(f"\n[green]👋 Thank you for using {APP_NAME}![/green]")
        raise typer.Exit(0)

    # -- Path transitions ────────────────────────────────────────────

    def enter_menu(self, menu_name: str) -> None:
        if self._current_path:
            self.navigation_stack.push(self._current_path)
        self._current_path.append(menu_name)
        self._should_exit = False

    def exit_menu(self) -> Optional[str]:
        """Leave the current menu.

        Returns the name of the menu restored from history, or None when
        there is no deeper history and the caller should return to its
        own parent loop.
        """
        if self._current_path:
            self._current_path.pop()

        previous_path = self.navigation_stack.pop()
        if previous_path:
            self._current_path = list(previous_path)
            return self._current_path[-1]
        return None

    def reset_navigation(self) -> None:
        self._current_path = []
        self.navigation_stack.clear()
        self._should_exit = False

    async def handle_back_action(self) -> bool:
        return self.exit_menu() is not None

    # -- Queries ─────────────────────────────────────────────────────

    def get_current_path(self) -> list[str]:
        return list(self._current_path)

    def get_breadcrumb(self) -> str:
        if not self._current_path:
            return ROOT_BREADCRUMB
        return " > ".join(self._current_path)

    def can_go_back(self) -> bool:
        return bool(self._current_path) or self.navigation_stack.can_go_back()

    def get_back_button_text(self) -> str:
        if len(self._current_path) <= 1:
            return MAIN_MENU_OPTION
        return f"← Back to {self._current_path[-2]}"

    def should_show_exit(self) -> bool:
        return self._should_exit

    def display_breadcrumb(self) -> None:
        console.print(f"\n[dim]📍 {self.get_breadcrumb()}[/dim]")

    async def pause_for_user(self, message: str = "Press Enter to continue...") -> None:
        """Block until the user acknowledges, so output can be read before redraw."""
        try:
            await inquirer.text(message=message).execute_async()
        except KeyboardInterrupt:
            pass

    # -- Choice helpers ──────────────────────────────────────────────

    @staticmethod
    def create_back_choice(custom_text: Optional[str] = None) -> dict:
        return {"name": custom_text or BACK_OPTION, "value": BACK}

    @staticmethod
    def create_cancel_choice(custom_text: Optional[str] = None) -> dict:
        return {"name": custom_text or CANCEL_OPTION, "value": CANCEL}

    @staticmethod
    def create_main_menu_choice() -> dict:
        return {"name": MAIN_MENU_OPTION, "value": MAIN_MENU}


# ═══════════════════════════════════════════════════════════════════
# Select wrapper
# ═══════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class Selected:
    """The user picked a choice."""
    value: Any


@dataclass(frozen=True)
class Cancelled:
    """The prompt was closed without a selection (Esc or Ctrl+C)."""


SelectResult = Union[Selected, Cancelled]


def is_back(result: SelectResult) -> bool:
    """True when the result means "leave this menu"."""
    if isinstance(result, Cancelled):
        return True
    return result.value in (BACK, CANCEL)


def _has_value(choices: list, value: Any) -> bool:
    return any(isinstance(c, dict) and c.get("value") == value for c in choices)


async def enhanced_select(
    message: str,
    choices: list,
    allow_esc_back: bool = False,
    page_size: Optional[int] = None,
) -> SelectResult:
    """Single-choice prompt with an optional synthesized back choice.

    Cancelling the prompt yields Cancelled instead of raising.
    """
    prompt_choices = list(choices)
    prompt_kwargs: dict[str, Any] = {}

    if allow_esc_back:
        if not _has_value(prompt_choices, BACK):
            prompt_choices.append(MenuNavigator.create_back_choice())
        prompt_kwargs["instruction"] = SELECT_HINT
        prompt_kwargs["mandatory"] = False
        prompt_kwargs["keybindings"] = {"skip": [{"key": "escape"}]}

    if page_size:
        prompt_kwargs["max_height"] = page_size

    try:
        value = await inquirer.select(
            message=message,
            choices=prompt_choices,
            **prompt_kwargs,
        ).execute_async()
    except KeyboardInterrupt:
        logger.debug("Prompt cancelled: %s", message)
        return Cancelled()

    if value is None:
        return Cancelled()
    return Selected(value)


def add_navigation_choices(choices: list, navigator: MenuNavigator) -> list:
    navigation_choices = list(choices)
    if navigator.can_go_back():
        navigation_choices.append({"name": navigator.get_back_button_text(), "value": BACK})
    return navigation_choices


async def handle_navigation_action(
    action: str,
    navigator: MenuNavigator,
    callback: Optional[Callable[[], Awaitable[None]]] = None,
) -> bool:
    """Apply a navigation value; returns True when navigation consumed it."""
    if action in (BACK, CANCEL):
        return await navigator.handle_back_action()
    if action == MAIN_MENU:
        navigator.reset_navigation()
        return True
    if callback:
        await callback()
    return False


async def confirm_action(message: str, default: bool = False) -> bool:
    try:
        return await inquirer.confirm(message=message, default=default).execute_async()
    except KeyboardInterrupt:
        return False


def display_menu_separator(title: str) -> None:
    console.print(f"\n[dim]─── {title} ───[/dim]")


def clear_screen_with_welcome(show_welcome: Callable[[], None]) -> None:
    console.clear()
    show_welcome()


@dataclass
class MenuConfig:
    title: str
    show_breadcrumb: bool = True
    show_separators: bool = True
    page_size: Optional[int] = None


class MenuBuilder:
    """Fluent builder for prompt choice lists."""

    def __init__(self, config: MenuConfig):
        self.config = config
        self._choices: list = []

    def add_choice(self, name: str, value: Any, icon: Optional[str] = None) -> "MenuBuilder":
        self._choices.append({"name": f"{icon} {name}" if icon else name, "value": value})
        return self

    def add_separator(self, title: str) -> "MenuBuilder":
        if self.config.show_separators:
            self._choices.append(Separator(f"--- {title} ---"))
        return self

    def add_back_choice(self, navigator: MenuNavigator) -> "MenuBuilder":
        if navigator.can_go_back():
            self._choices.append({"name": navigator.get_back_button_text(), "value": BACK})
        return self

    def add_cancel_choice(self) -> "MenuBuilder":
        self._choices.append(MenuNavigator.create_cancel_choice())
        return self

    def add_main_menu_choice(self) -> "MenuBuilder":
        self._choices.append(MenuNavigator.create_main_menu_choice())
        return self

    def get_choices(self) -> list:
        return list(self._choices)

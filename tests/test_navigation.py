# tests/test_navigation.py
import signal

import pytest
import typer
from unittest.mock import AsyncMock, MagicMock, patch
from InquirerPy.separator import Separator

from claude_cmd.navigation import (
    BACK,
    BACK_OPTION,
    CANCEL,
    CANCEL_OPTION,
    MAIN_MENU,
    MAIN_MENU_OPTION,
    Cancelled,
    MenuBuilder,
    MenuConfig,
    MenuNavigator,
    NavigationStack,
    Selected,
    add_navigation_choices,
    confirm_action,
    enhanced_select,
    handle_navigation_action,
    is_back,
)


# ═══════════════════════════════════════════════════════════════════
# NavigationStack
# ═══════════════════════════════════════════════════════════════════

def test_push_and_pop_return_paths_in_lifo_order():
    stack = NavigationStack()
    stack.push(["A"])
    stack.push(["A", "B"])

    assert stack.pop() == ["A", "B"]
    assert stack.pop() == ["A"]
    assert stack.pop() is None


def test_push_stores_a_copy():
    stack = NavigationStack()
    path = ["A"]
    stack.push(path)
    path.append("B")

    assert stack.peek() == ["A"]


def test_peek_does_not_remove():
    stack = NavigationStack()
    stack.push(["A"])

    assert stack.peek() == ["A"]
    assert stack.size() == 1


def test_eleven_pushes_evict_the_oldest():
    stack = NavigationStack(max_size=10)
    for i in range(11):
        stack.push([f"menu{i}"])

    assert stack.size() == 10
    popped = [stack.pop() for _ in range(10)]
    assert popped[-1] == ["menu1"]
    assert ["menu0"] not in popped


def test_clear_empties_stack():
    stack = NavigationStack()
    stack.push(["A"])
    stack.clear()

    assert not stack.can_go_back()
    assert len(stack) == 0


# ═══════════════════════════════════════════════════════════════════
# MenuNavigator
# ═══════════════════════════════════════════════════════════════════

def test_breadcrumb_at_root():
    assert MenuNavigator().get_breadcrumb() == "Main Menu"


def test_breadcrumb_after_two_enters(navigator):
    navigator.enter_menu("Settings")
    navigator.enter_menu("Advanced")

    assert navigator.get_breadcrumb() == "Settings > Advanced"


def test_path_length_matches_enters_minus_exits(navigator):
    navigator.enter_menu("A")
    navigator.enter_menu("B")
    navigator.enter_menu("C")
    navigator.exit_menu()

    assert navigator.get_current_path() == ["A", "B"]


def test_exit_menu_restores_previous_path(navigator):
    navigator.enter_menu("A")
    navigator.enter_menu("B")

    assert navigator.exit_menu() == "A"
    assert navigator.get_current_path() == ["A"]


def test_exit_menu_at_root_returns_none(navigator):
    assert navigator.exit_menu() is None
    assert navigator.get_current_path() == []


def test_exit_last_menu_returns_none(navigator):
    navigator.enter_menu("A")

    assert navigator.exit_menu() is None
    assert navigator.get_current_path() == []


def test_current_path_is_a_copy(navigator):
    navigator.enter_menu("A")
    navigator.get_current_path().append("X")

    assert navigator.get_current_path() == ["A"]


def test_back_button_text(navigator):
    navigator.enter_menu("A")
    assert navigator.get_back_button_text() == MAIN_MENU_OPTION

    navigator.enter_menu("B")
    assert navigator.get_back_button_text() == "← Back to A"


def test_reset_navigation(navigator):
    navigator.enter_menu("A")
    navigator.enter_menu("B")
    navigator.reset_navigation()

    assert navigator.get_current_path() == []
    assert not navigator.can_go_back()


@pytest.mark.asyncio
async def test_handle_back_action(navigator):
    navigator.enter_menu("A")
    navigator.enter_menu("B")

    assert await navigator.handle_back_action() is True
    assert await navigator.handle_back_action() is False


def test_choice_helpers():
    assert MenuNavigator.create_back_choice() == {"name": BACK_OPTION, "value": BACK}
    assert MenuNavigator.create_cancel_choice() == {"name": CANCEL_OPTION, "value": CANCEL}
    assert MenuNavigator.create_main_menu_choice() == {"name": MAIN_MENU_OPTION, "value": MAIN_MENU}
    assert MenuNavigator.create_back_choice("← Up")["name"] == "← Up"


# ═══════════════════════════════════════════════════════════════════
# Interrupt handling
# ═══════════════════════════════════════════════════════════════════

def test_interrupt_at_root_exits(navigator):
    with pytest.raises(typer.Exit):
        navigator.handle_interrupt(signal.SIGINT, None)


def test_first_interrupt_when_nested_only_warns(navigator):
    navigator.enter_menu("Settings")

    navigator.handle_interrupt(signal.SIGINT, None)

    assert navigator.should_show_exit()
    assert navigator.get_current_path() == ["Settings"]


def test_second_interrupt_when_nested_exits(navigator):
    navigator.enter_menu("Settings")
    navigator.handle_interrupt(signal.SIGINT, None)

    with pytest.raises(typer.Exit):
        navigator.handle_interrupt(signal.SIGINT, None)


def test_entering_a_menu_rearms_the_warning(navigator):
    navigator.enter_menu("A")
    navigator.handle_interrupt(signal.SIGINT, None)
    navigator.enter_menu("B")

    assert not navigator.should_show_exit()


def test_register_interrupt_handler_installs_sigint(navigator):
    with patch("claude_cmd.navigation.signal.signal") as mock_signal:
        navigator.register_interrupt_handler()

    mock_signal.assert_called_once_with(signal.SIGINT, navigator.handle_interrupt)


# ═══════════════════════════════════════════════════════════════════
# enhanced_select
# ═══════════════════════════════════════════════════════════════════

@pytest.mark.asyncio
async def test_enhanced_select_returns_selected(prompts):
    mock = prompts("b")
    with patch("claude_cmd.navigation.inquirer", mock):
        result = await enhanced_select("Pick", [{"name": "A", "value": "a"}, {"name": "B", "value": "b"}])

    assert result == Selected("b")
    assert not is_back(result)


@pytest.mark.asyncio
async def test_enhanced_select_adds_back_choice_once(prompts):
    mock = prompts("a")
    with patch("claude_cmd.navigation.inquirer", mock):
        await enhanced_select("Pick", [{"name": "A", "value": "a"}], allow_esc_back=True)

    choices = mock.select.call_args.kwargs["choices"]
    assert choices[-1] == {"name": BACK_OPTION, "value": BACK}
    assert sum(1 for c in choices if c["value"] == BACK) == 1
    assert mock.select.call_args.kwargs["mandatory"] is False


@pytest.mark.asyncio
async def test_enhanced_select_keeps_existing_back_choice(prompts):
    mock = prompts("a")
    choices = [{"name": "A", "value": "a"}, {"name": "← Back to X", "value": BACK}]
    with patch("claude_cmd.navigation.inquirer", mock):
        await enhanced_select("Pick", choices, allow_esc_back=True)

    assert mock.select.call_args.kwargs["choices"] == choices


@pytest.mark.asyncio
async def test_enhanced_select_escape_is_cancelled(prompts):
    mock = prompts(None)
    with patch("claude_cmd.navigation.inquirer", mock):
        result = await enhanced_select("Pick", [{"name": "A", "value": "a"}], allow_esc_back=True)

    assert isinstance(result, Cancelled)
    assert is_back(result)


@pytest.mark.asyncio
async def test_enhanced_select_ctrl_c_is_cancelled():
    mock = MagicMock()
    mock.select.return_value.execute_async = AsyncMock(side_effect=KeyboardInterrupt)
    with patch("claude_cmd.navigation.inquirer", mock):
        result = await enhanced_select("Pick", [{"name": "A", "value": "a"}])

    assert isinstance(result, Cancelled)


def test_is_back_for_navigation_values():
    assert is_back(Selected(BACK))
    assert is_back(Selected(CANCEL))
    assert not is_back(Selected(MAIN_MENU))


@pytest.mark.asyncio
async def test_confirm_action_ctrl_c_is_no():
    mock = MagicMock()
    mock.confirm.return_value.execute_async = AsyncMock(side_effect=KeyboardInterrupt)
    with patch("claude_cmd.navigation.inquirer", mock):
        assert await confirm_action("Sure?", default=True) is False


# ═══════════════════════════════════════════════════════════════════
# Helpers
# ═══════════════════════════════════════════════════════════════════

def test_add_navigation_choices_only_when_nested(navigator):
    base = [{"name": "A", "value": "a"}]
    assert add_navigation_choices(base, navigator) == base

    navigator.enter_menu("Settings")
    assert add_navigation_choices(base, navigator)[-1]["value"] == BACK


@pytest.mark.asyncio
async def test_handle_navigation_action(navigator):
    navigator.enter_menu("A")
    navigator.enter_menu("B")
    callback = AsyncMock()

    assert await handle_navigation_action(MAIN_MENU, navigator) is True
    assert navigator.get_current_path() == []

    assert await handle_navigation_action("other", navigator, callback) is False
    callback.assert_awaited_once()


def test_menu_builder(navigator):
    navigator.enter_menu("Settings")
    choices = (
        MenuBuilder(MenuConfig(title="Settings"))
        .add_choice("View", "view", icon="📋")
        .add_separator("More")
        .add_back_choice(navigator)
        .add_cancel_choice()
        .get_choices()
    )

    assert choices[0] == {"name": "📋 View", "value": "view"}
    assert isinstance(choices[1], Separator)
    assert choices[2]["value"] == BACK
    assert choices[3]["value"] == CANCEL


def test_menu_builder_without_separators():
    choices = MenuBuilder(MenuConfig(title="X", show_separators=False)).add_separator("More").get_choices()

    assert choices == []

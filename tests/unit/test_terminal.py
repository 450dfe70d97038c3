"""Unit tests for Textual key translation and the key queue."""

from unittest.mock import MagicMock

import pytest

from g1c.core.state import DashboardState
from g1c.tui.terminal import TextualTerminal, translate_key


@pytest.mark.parametrize(
    "key,character,expected",
    [
        ("up", None, "up"),
        ("down", None, "down"),
        ("enter", "\r", "enter"),
        ("escape", "\x1b", "escape"),
        ("backspace", "\x08", "backspace"),
        ("ctrl+h", "\x08", "backspace"),
        ("ctrl+c", "\x03", "ctrl+c"),
        ("question_mark", "?", "?"),
        ("slash", "/", "/"),
        ("S", "S", "S"),
        ("s", "s", "s"),
        ("R", "R", "R"),
        ("full_stop", ".", "."),
        ("space", " ", " "),
        ("f1", None, None),
        ("tab", "\t", None),
    ],
)
def test_translate_key(key, character, expected):
    assert translate_key(key, character) == expected


def test_poll_returns_keys_in_order():
    terminal = TextualTerminal()
    terminal.push_key("down")
    terminal.push_key("q")

    assert terminal.has_pending_keys() is True
    assert terminal.poll_key(0.1) == "down"
    assert terminal.poll_key(0.1) == "q"
    assert terminal.poll_key(0.1) is None
    assert terminal.has_pending_keys() is False


def test_render_without_app_is_noop():
    TextualTerminal().render(DashboardState())


def test_render_delegates_to_app():
    app = MagicMock()
    state = DashboardState()

    TextualTerminal(app).render(state)

    app.render_state.assert_called_once_with(state)

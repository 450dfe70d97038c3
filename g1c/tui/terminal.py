"""Adapter between Textual key events and the dashboard event loop."""

from __future__ import annotations

import logging
import queue
from typing import TYPE_CHECKING

from g1c.core import keys

if TYPE_CHECKING:
    from g1c.core.state import DashboardState
    from g1c.tui.app import DashboardApp

logger = logging.getLogger(__name__)

NAMED_KEYS = {
    "up": keys.UP,
    "down": keys.DOWN,
    "enter": keys.ENTER,
    "escape": keys.ESCAPE,
    "backspace": keys.BACKSPACE,
    "ctrl+h": keys.BACKSPACE,
    "ctrl+c": keys.INTERRUPT,
}


def translate_key(key: str, character: str | None) -> str | None:
    """Translate a Textual key event into a dashboard key name.

    Parameters
    ----------
    key : str
        Textual key name (e.g. ``up``, ``question_mark``, ``S``)
    character : str | None
        Printable character for the key, if any

    Returns
    -------
    str | None
        Dashboard key name, or None for keys the dashboard does not use
    """
    if key in NAMED_KEYS:
        return NAMED_KEYS[key]

    if character is not None and keys.is_printable(character):
        return character

    return None


class TextualTerminal:
    """Terminal implementation backed by a running Textual app.

    Key events are queued by the app's key handler and drained by the event
    loop. Polling never blocks: the app's timer already paces ticks.

    Parameters
    ----------
    app : DashboardApp | None
        App whose widgets receive rendered state
    """

    def __init__(self, app: DashboardApp | None = None) -> None:
        self.app = app
        self._keys: queue.Queue[str] = queue.Queue()

    def push_key(self, key: str) -> None:
        self._keys.put_nowait(key)

    def has_pending_keys(self) -> bool:
        return not self._keys.empty()

    def poll_key(self, timeout: float) -> str | None:
        try:
            return self._keys.get_nowait()
        except queue.Empty:
            return None

    def render(self, state: DashboardState) -> None:
        if self.app is None:
            return

        self.app.render_state(state)

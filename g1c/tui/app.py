"""Textual TUI application for g1c."""

from __future__ import annotations

import logging

from textual import events
from textual.app import App, ComposeResult
from textual.containers import Container
from textual.widgets import Static

from g1c.constants import EXIT_SUCCESS, MAX_KEYS_PER_TICK, TICK_INTERVAL_SECONDS, Mode
from g1c.core.loop import EventLoop
from g1c.core.state import DashboardState
from g1c.logging import TuiLogHandler, TuiLogMessage
from g1c.tui import views
from g1c.tui.styling import TUI_CSS
from g1c.tui.terminal import TextualTerminal, translate_key
from g1c.tui.widgets import WidgetID

logger = logging.getLogger(__name__)


class DashboardApp(App):
    """Textual front end for the instance dashboard.

    The app renders the dashboard state and feeds key presses to the event
    loop; a timer calls ``EventLoop.tick`` every ``TICK_INTERVAL_SECONDS``.
    The loop must already hold its first snapshot.

    Parameters
    ----------
    event_loop : EventLoop
        Loop whose terminal is a ``TextualTerminal``

    Attributes
    ----------
    event_loop : EventLoop
        Loop driving the dashboard
    terminal : TextualTerminal
        Key queue and render target bound to this app
    original_handlers : list[logging.Handler]
        Root logging handlers to restore on exit
    """

    CSS = TUI_CSS
    TITLE = "g1c"

    def __init__(self, event_loop: EventLoop) -> None:
        super().__init__()

        if not isinstance(event_loop.terminal, TextualTerminal):
            raise TypeError("DashboardApp requires an event loop with a TextualTerminal")

        self.event_loop = event_loop
        self.terminal = event_loop.terminal
        self.terminal.app = self
        self.original_handlers: list[logging.Handler] = []
        self._tui_handler: TuiLogHandler | None = None

    @property
    def state(self) -> DashboardState:
        return self.event_loop.state

    def compose(self) -> ComposeResult:
        """Compose the dashboard layout.

        Yields
        ------
        Static
            Title, filter bar, overview, instance list and status bar
        Container
            Overlay holding the help and details popups
        """
        yield Static(views.render_title(), id=WidgetID.TITLE.value)
        yield Static("", id=WidgetID.FILTER.value)
        yield Static("", id=WidgetID.OVERVIEW.value)
        yield Static("", id=WidgetID.INSTANCES.value)
        yield Static("", id=WidgetID.STATUS.value)

        with Container(id=WidgetID.POPUP_LAYER.value):
            yield Static(views.render_help(), id=WidgetID.HELP.value)
            yield Static("", id=WidgetID.DETAILS.value)

    def on_mount(self) -> None:
        """Route warnings to the status bar, draw, and start ticking."""
        root_logger = logging.getLogger()
        self.original_handlers = root_logger.handlers[:]
        self._tui_handler = TuiLogHandler(self)
        self._tui_handler.setFormatter(logging.Formatter("%(message)s"))
        root_logger.handlers = [
            handler
            for handler in self.original_handlers
            if not _is_console_handler(handler)
        ] + [self._tui_handler]

        self.render_state(self.state)
        self.set_interval(TICK_INTERVAL_SECONDS, self.run_tick, name="dashboard-tick")

    def on_unmount(self) -> None:
        """Restore logging handlers."""
        logging.getLogger().handlers = self.original_handlers

    def on_key(self, event: events.Key) -> None:
        """Queue key presses for the event loop.

        Parameters
        ----------
        event : events.Key
            Key event
        """
        key = translate_key(event.key, event.character)

        if key is None:
            return

        event.stop()
        event.prevent_default()
        self.terminal.push_key(key)

    def run_tick(self) -> None:
        """Advance the event loop, draining queued keys.

        Processes at most MAX_KEYS_PER_TICK ticks per timer callback so a
        burst of input cannot starve Textual's own message processing.
        """
        ticks = 0

        while ticks < MAX_KEYS_PER_TICK:
            keep_running = self.event_loop.tick()
            ticks += 1

            if not keep_running:
                self.exit(EXIT_SUCCESS)
                return

            if not self.terminal.has_pending_keys():
                break

    async def on_tui_log_message(self, message: TuiLogMessage) -> None:
        """Show log messages emitted from other threads."""
        self.show_log_message(message.text, message.levelno)

    def show_log_message(self, text: str, levelno: int) -> None:
        """Keep a log line on the status bar until the next key press."""
        self.state.show_log_message(text, levelno)
        self._update(WidgetID.STATUS, views.render_status_bar(self.state))

    def render_state(self, state: DashboardState) -> None:
        """Redraw every region from the dashboard state.

        Parameters
        ----------
        state : DashboardState
            State to draw
        """
        self._update(WidgetID.FILTER, views.render_filter_bar(state))
        self._update(WidgetID.OVERVIEW, views.render_overview(state))
        self._update(
            WidgetID.INSTANCES, views.render_instance_table(state, self._instance_rows())
        )
        self._update(WidgetID.STATUS, views.render_status_bar(state))

        selected = state.selected_instance
        show_help = state.mode is Mode.HELP_POPUP
        show_details = state.mode is Mode.DETAILS_POPUP and selected is not None

        if show_details:
            self._update(WidgetID.DETAILS, views.render_details(selected))

        try:
            self.query_one(f"#{WidgetID.HELP.value}").display = show_help
            self.query_one(f"#{WidgetID.DETAILS.value}").display = show_details
            self.query_one(f"#{WidgetID.POPUP_LAYER.value}").display = show_help or show_details
        except Exception as e:
            logger.debug("Failed to toggle popups: %s", e)

    def _instance_rows(self) -> int | None:
        """Return how many instance rows fit in the list panel.

        None before the first layout, when the widget has no size yet.
        """
        try:
            height = self.query_one(f"#{WidgetID.INSTANCES.value}").size.height
        except Exception as e:
            logger.debug("Failed to measure instance list: %s", e)
            return None

        if height <= 0:
            return None

        return max(height - views.TABLE_CHROME_ROWS, 1)

    def _update(self, widget_id: WidgetID, renderable) -> None:
        try:
            self.query_one(f"#{widget_id.value}", Static).update(renderable)
        except Exception as e:
            logger.debug("Failed to update %s widget: %s", widget_id.value, e)


def _is_console_handler(handler: logging.Handler) -> bool:
    return isinstance(handler, logging.StreamHandler) and not isinstance(
        handler, logging.FileHandler
    )

"""Dashboard state and key interpretation."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from g1c.constants import Action, InstanceStatus, Mode
from g1c.core import keys
from g1c.core.filtering import apply_filter, find_first_match
from g1c.models import Instance

logger = logging.getLogger(__name__)

ACTION_KEYS = {
    keys.START: Action.START,
    keys.STOP: Action.STOP,
    keys.RESTART: Action.RESTART,
}


@dataclass(frozen=True)
class Command:
    """Outbound request produced by interpreting one key.

    Attributes
    ----------
    action : Action
        Lifecycle action to run, ``Action.NONE`` for pure state changes
    instance_id : str | None
        Target instance for ``action``
    refresh : bool
        Whether the user asked for an immediate refresh
    """

    action: Action = Action.NONE
    instance_id: str | None = None
    refresh: bool = False


NO_COMMAND = Command()


def edit_buffer(text: str, key: str) -> str:
    """Return ``text`` after applying a backspace or printable character key."""
    if key == keys.BACKSPACE:
        return text[:-1]

    if keys.is_printable(key):
        return text + key

    return text


class DashboardState:
    """UI state owned by the event loop.

    ``instances`` holds what is displayed: the last fetched snapshot with
    the active filter applied. The unfiltered snapshot is kept separately so
    that every filter edit re-derives the display from scratch.

    Attributes
    ----------
    instances : list[Instance]
        Displayed instances in provider order
    selected_index : int
        Cursor into ``instances``; only meaningful when it is non-empty
    mode : Mode
        Active input/popup context
    filter_text : str
        Filter buffer, non-empty only in ``Mode.FILTER_INPUT``
    search_text : str
        Search buffer, non-empty only in ``Mode.SEARCH_INPUT``
    project_id : str
        Project shown in the overview
    region : str
        Region shown in the overview
    cli_version : str
        Provider tool version shown in the overview
    status_message : str
        Outcome of the last lifecycle action, cleared by the next key
    log_message : str
        Last warning or error logged while the dashboard is open, cleared
        by the next key
    log_level : int
        Logging level of ``log_message``
    last_error : str | None
        Last refresh error, cleared by a successful refresh
    should_quit : bool
        Set when the user asked to leave the dashboard
    """

    def __init__(self) -> None:
        self.instances: list[Instance] = []
        self._all_instances: list[Instance] = []
        self.selected_index = 0
        self.mode = Mode.NORMAL
        self.filter_text = ""
        self.search_text = ""
        self.project_id = ""
        self.region = ""
        self.cli_version = ""
        self.status_message = ""
        self.log_message = ""
        self.log_level = logging.WARNING
        self.last_error: str | None = None
        self.should_quit = False

    @property
    def all_instances(self) -> list[Instance]:
        """Unfiltered snapshot from the most recent successful refresh."""
        return list(self._all_instances)

    @property
    def selected_instance(self) -> Instance | None:
        """Instance under the cursor, or None when nothing is displayed."""
        if not self.instances:
            return None

        return self.instances[self.selected_index]

    @property
    def selected_instance_id(self) -> str | None:
        instance = self.selected_instance
        return instance.id if instance is not None else None

    def status_counts(self) -> tuple[int, int, int]:
        """Count displayed instances as (running, stopped, other)."""
        running = sum(1 for i in self.instances if i.status is InstanceStatus.RUNNING)
        stopped = sum(1 for i in self.instances if i.status is InstanceStatus.TERMINATED)
        return running, stopped, len(self.instances) - running - stopped

    def update_cloud_info(self, project_id: str, region: str, cli_version: str) -> None:
        """Set the project, region and CLI version shown in the overview."""
        self.project_id = project_id
        self.region = region
        self.cli_version = cli_version

    def update_instances(self, instances: Sequence[Instance]) -> None:
        """Replace the snapshot wholesale and re-derive the display.

        Parameters
        ----------
        instances : Sequence[Instance]
            Full, unfiltered provider listing
        """
        self._all_instances = list(instances)
        self._rederive()
        self.last_error = None

    def next_item(self) -> None:
        """Move the cursor down, wrapping from the last row to the first."""
        if self.instances:
            self.selected_index = (self.selected_index + 1) % len(self.instances)

    def previous_item(self) -> None:
        """Move the cursor up, wrapping from the first row to the last."""
        if self.instances:
            self.selected_index = (self.selected_index - 1) % len(self.instances)

    def show_log_message(self, message: str, levelno: int) -> None:
        """Keep a logged warning or error on the status bar until the next key."""
        self.log_message = message
        self.log_level = levelno

    def clear_messages(self) -> None:
        self.status_message = ""
        self.log_message = ""

    def set_mode(self, mode: Mode) -> None:
        """Switch to ``mode``, discarding the buffers of the mode being left.

        Leaving filter input restores the unfiltered list and re-clamps the
        cursor.
        """
        if self.mode is Mode.FILTER_INPUT and mode is not Mode.FILTER_INPUT:
            self.filter_text = ""
            self._rederive()

        if self.mode is Mode.SEARCH_INPUT and mode is not Mode.SEARCH_INPUT:
            self.search_text = ""

        logger.debug("Mode %s -> %s", self.mode.value, mode.value)
        self.mode = mode

    def close_popup(self) -> None:
        self.set_mode(Mode.NORMAL)

    def toggle_help(self) -> None:
        self.set_mode(Mode.NORMAL if self.mode is Mode.HELP_POPUP else Mode.HELP_POPUP)

    def toggle_filter_mode(self) -> None:
        self.set_mode(Mode.NORMAL if self.mode is Mode.FILTER_INPUT else Mode.FILTER_INPUT)

    def toggle_search_mode(self) -> None:
        self.set_mode(Mode.NORMAL if self.mode is Mode.SEARCH_INPUT else Mode.SEARCH_INPUT)

    def show_details(self) -> None:
        if self.instances:
            self.set_mode(Mode.DETAILS_POPUP)

    def handle_input(self, key: str) -> None:
        """Apply a character or backspace to the active input buffer.

        Parameters
        ----------
        key : str
            ``keys.BACKSPACE`` or a single printable character
        """
        if self.mode is Mode.FILTER_INPUT:
            self.filter_text = edit_buffer(self.filter_text, key)
            self._rederive()
        elif self.mode is Mode.SEARCH_INPUT:
            self.search_text = edit_buffer(self.search_text, key)
            match = find_first_match(self.instances, self.search_text)

            if match is not None:
                self.selected_index = match

    def handle_key(self, key: str) -> Command:
        """Interpret one key against the current mode.

        State changes are applied in place. Lifecycle keys produce a
        ``Command`` carrying the action and the selected instance id.
        Unknown keys are ignored. Any key dismisses the previous action
        outcome and logged message.

        Parameters
        ----------
        key : str
            Key name (see ``g1c.core.keys``)

        Returns
        -------
        Command
            Outbound request, ``NO_COMMAND`` when the key only changed state
        """
        self.clear_messages()

        if key == keys.INTERRUPT:
            self.should_quit = True
            return NO_COMMAND

        if self.mode is Mode.NORMAL:
            return self._handle_normal_key(key)

        if self.mode is Mode.FILTER_INPUT:
            return self._handle_input_key(key, keys.FILTER)

        if self.mode is Mode.SEARCH_INPUT:
            return self._handle_input_key(key, keys.SEARCH)

        if self.mode is Mode.HELP_POPUP:
            if key in (keys.ESCAPE, keys.HELP):
                self.close_popup()
            return NO_COMMAND

        if key == keys.ESCAPE:
            self.close_popup()
            return NO_COMMAND

        return self._action_command(key)

    def _handle_normal_key(self, key: str) -> Command:
        if key in keys.QUIT_KEYS:
            self.should_quit = True
        elif key == keys.HELP:
            self.toggle_help()
        elif key in keys.PREVIOUS_KEYS:
            self.previous_item()
        elif key in keys.NEXT_KEYS:
            self.next_item()
        elif key == keys.ENTER:
            self.show_details()
        elif key == keys.FILTER:
            self.toggle_filter_mode()
        elif key == keys.SEARCH:
            self.toggle_search_mode()
        elif key == keys.REFRESH:
            return Command(refresh=True)
        elif key in ACTION_KEYS:
            return self._action_command(key)

        return NO_COMMAND

    def _handle_input_key(self, key: str, toggle_key: str) -> Command:
        if key in (keys.ESCAPE, toggle_key):
            self.close_popup()
        elif key == keys.UP:
            self.previous_item()
        elif key == keys.DOWN:
            self.next_item()
        else:
            self.handle_input(key)

        return NO_COMMAND

    def _action_command(self, key: str) -> Command:
        action = ACTION_KEYS.get(key)
        instance_id = self.selected_instance_id

        if action is None or instance_id is None:
            return NO_COMMAND

        return Command(action=action, instance_id=instance_id)

    def _rederive(self) -> None:
        self.instances = apply_filter(self._all_instances, self.filter_text)
        self._clamp_selection()

    def _clamp_selection(self) -> None:
        if not self.instances:
            self.selected_index = 0
        elif self.selected_index >= len(self.instances):
            self.selected_index = len(self.instances) - 1
        elif self.selected_index < 0:
            self.selected_index = 0

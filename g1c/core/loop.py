"""Render/input/refresh cycle of the dashboard."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable

from g1c.constants import (
    DEFAULT_REFRESH_INTERVAL_SECONDS,
    TICK_INTERVAL_SECONDS,
    Action,
)
from g1c.core.interfaces import InstanceProvider, Terminal
from g1c.core.state import Command, DashboardState
from g1c.providers.exceptions import ProviderError

logger = logging.getLogger(__name__)

ACTION_VERBS = {
    Action.START: "Start",
    Action.STOP: "Stop",
    Action.RESTART: "Restart",
}


class EventLoop:
    """Single-threaded driver of the dashboard.

    Each tick renders, waits briefly for one key, applies it, and refreshes
    when the refresh interval has elapsed. Provider calls block the loop
    until they return.

    Parameters
    ----------
    state : DashboardState
        State owned exclusively by this loop
    provider : InstanceProvider
        Source of instance data and lifecycle actions
    terminal : Terminal
        Renderer and key source
    project_id : str
        Project whose instances are listed
    region : str
        Region shown in the overview
    refresh_interval : int
        Seconds between automatic refreshes
    cli_version_getter : Callable[[], str] | None
        Returns the provider tool version shown in the overview
    clock : Callable[[], float]
        Monotonic time source (default: time.monotonic)
    poll_timeout : float
        Seconds each tick waits for a key
    """

    def __init__(
        self,
        state: DashboardState,
        provider: InstanceProvider,
        terminal: Terminal,
        project_id: str,
        region: str,
        refresh_interval: int = DEFAULT_REFRESH_INTERVAL_SECONDS,
        cli_version_getter: Callable[[], str] | None = None,
        clock: Callable[[], float] = time.monotonic,
        poll_timeout: float = TICK_INTERVAL_SECONDS,
    ) -> None:
        self.state = state
        self.provider = provider
        self.terminal = terminal
        self.project_id = project_id
        self.region = region
        self.refresh_interval = refresh_interval
        self._cli_version_getter = cli_version_getter
        self._clock = clock
        self.poll_timeout = poll_timeout
        self.last_refresh: float | None = None

    def start(self) -> None:
        """Populate the state with the first snapshot.

        Raises
        ------
        ProviderError
            If the initial listing fails; the dashboard must not start
            without data
        """
        self.refresh(raise_on_error=True)

    def run(self) -> None:
        """Tick until the state signals quit."""
        if self.last_refresh is None:
            self.start()

        while self.tick():
            pass

    def tick(self) -> bool:
        """Run one render/input/refresh cycle.

        Returns
        -------
        bool
            False once the user has asked to quit
        """
        self.terminal.render(self.state)
        key = self.terminal.poll_key(self.poll_timeout)

        if key is not None:
            self.handle_key(key)

        if not self.state.should_quit and self.refresh_due():
            self.refresh()

        return not self.state.should_quit

    def handle_key(self, key: str) -> None:
        """Interpret a key and run whatever it requests."""
        command = self.state.handle_key(key)
        self.execute(command)

    def execute(self, command: Command) -> None:
        """Run a command's provider call, if any.

        Lifecycle actions are always followed by a refresh, whether or not
        the action succeeded.
        """
        if command.action is not Action.NONE and command.instance_id is not None:
            self.perform_action(command.action, command.instance_id)
        elif command.refresh:
            self.refresh()

    def perform_action(self, action: Action, instance_id: str) -> bool:
        """Run a lifecycle action, then refresh unconditionally.

        Parameters
        ----------
        action : Action
            Start, stop or restart
        instance_id : str
            Target instance id

        Returns
        -------
        bool
            True if the provider accepted the action
        """
        verb = ACTION_VERBS.get(action, action.value)
        logger.info("%s requested for instance %s", verb, instance_id)
        succeeded = True

        try:
            self.provider.perform_action(self.project_id, instance_id, action)
            self.state.status_message = f"{verb} completed for {instance_id}"
        except ProviderError as e:
            logger.error("%s failed for instance %s: %s", verb, instance_id, e)
            self.state.status_message = f"{verb} failed: {e}"
            succeeded = False

        self.refresh()
        return succeeded

    def refresh_due(self) -> bool:
        if self.last_refresh is None:
            return True

        return self._clock() - self.last_refresh >= self.refresh_interval

    def refresh(self, raise_on_error: bool = False) -> bool:
        """Fetch a new snapshot and reconcile the state with it.

        On failure the previous snapshot is kept and the error is reported
        on the state; the next attempt waits a full interval.

        Parameters
        ----------
        raise_on_error : bool
            Re-raise provider errors instead of reporting them

        Returns
        -------
        bool
            True if the snapshot was replaced

        Raises
        ------
        ProviderError
            If ``raise_on_error`` is set and the listing fails
        """
        logger.info("Refreshing instance data for project %s", self.project_id)

        try:
            instances = self.provider.list_instances(self.project_id)
        except ProviderError as e:
            self.last_refresh = self._clock()

            if raise_on_error:
                raise

            logger.error("Failed to refresh instances: %s", e)
            self.state.last_error = f"Refresh failed: {e}"
            return False

        self.state.update_instances(instances)
        self.state.update_cloud_info(self.project_id, self.region, self._cli_version())
        self.last_refresh = self._clock()

        logger.debug("Refreshed %d instances", len(instances))
        return True

    def _cli_version(self) -> str:
        if self._cli_version_getter is None:
            return self.state.cli_version

        return self._cli_version_getter()

"""Global constants for g1c.

Application-wide values shared by the dashboard core, the gcloud provider
and the terminal front end.
"""

from enum import Enum

DEFAULT_REGION = "us-central1"
"""Region displayed when none is configured.

Instances are listed project-wide regardless of this value; it is shown in
the overview panel only.
"""

DEFAULT_REFRESH_INTERVAL_SECONDS = 5
"""Seconds between automatic instance list refreshes.

Used when neither the config file nor the command line provides a positive
integer interval.
"""

TICK_INTERVAL_SECONDS = 0.1
"""Upper bound in seconds on how long one loop tick waits for a key event.

Short enough that the refresh-due check stays responsive when the user is
idle.
"""

GCLOUD_COMMAND_TIMEOUT_SECONDS = 120
"""Timeout in seconds for a single gcloud invocation.

Start/stop operations wait for the operation to finish, which can take
well over a minute on busy zones.
"""

GCLOUD_PROBE_TIMEOUT_SECONDS = 15
"""Timeout in seconds for lightweight gcloud probes (version, auth, config)."""

MAX_KEYS_PER_TICK = 10
"""Maximum number of queued key events processed by one TUI timer callback."""

CREDENTIALS_ENV_VAR = "CLOUDSDK_AUTH_CREDENTIAL_FILE_OVERRIDE"
"""Environment variable gcloud reads to override the active credential file."""

DEFAULT_NAME_COLUMN_WIDTH = 24
"""Width in characters of the name column in plain `list` output."""

EXIT_SUCCESS = 0
"""Exit code indicating successful program completion."""

EXIT_ERROR = 1
"""Exit code indicating a provider or runtime error."""

EXIT_CONFIG_ERROR = 2
"""Exit code indicating invalid configuration."""


class InstanceStatus(str, Enum):
    """Lifecycle states reported by Compute Engine.

    Any value not listed here maps to ``UNKNOWN`` so that new provider
    states never break parsing.
    """

    RUNNING = "RUNNING"
    TERMINATED = "TERMINATED"
    STOPPING = "STOPPING"
    PROVISIONING = "PROVISIONING"
    STAGING = "STAGING"
    SUSPENDED = "SUSPENDED"
    REPAIRING = "REPAIRING"
    PENDING = "PENDING"
    UNKNOWN = "UNKNOWN"

    @classmethod
    def parse(cls, value: str | None) -> "InstanceStatus":
        """Map a raw provider status string onto a known state.

        Parameters
        ----------
        value : str | None
            Raw status string, compared case-insensitively

        Returns
        -------
        InstanceStatus
            Matching state, or ``UNKNOWN`` for unrecognized or missing values
        """
        if not value:
            return cls.UNKNOWN

        try:
            return cls(value.strip().upper())
        except ValueError:
            return cls.UNKNOWN


class Action(str, Enum):
    """Lifecycle operations the dashboard can request on one instance."""

    NONE = "none"
    START = "start"
    STOP = "stop"
    RESTART = "restart"


class Mode(str, Enum):
    """Mutually exclusive input/popup contexts of the dashboard."""

    NORMAL = "normal"
    FILTER_INPUT = "filter_input"
    SEARCH_INPUT = "search_input"
    HELP_POPUP = "help_popup"
    DETAILS_POPUP = "details_popup"


STATUS_ICONS = {
    InstanceStatus.RUNNING: "🟢",
    InstanceStatus.TERMINATED: "🔴",
    InstanceStatus.STOPPING: "🟠",
    InstanceStatus.PROVISIONING: "🟡",
    InstanceStatus.STAGING: "🔄",
    InstanceStatus.SUSPENDED: "💤",
    InstanceStatus.REPAIRING: "🟡",
    InstanceStatus.PENDING: "🟡",
    InstanceStatus.UNKNOWN: "❓",
}

STATUS_STYLES = {
    InstanceStatus.RUNNING: "green",
    InstanceStatus.TERMINATED: "red",
    InstanceStatus.STOPPING: "yellow",
    InstanceStatus.PROVISIONING: "magenta",
    InstanceStatus.STAGING: "cyan",
    InstanceStatus.SUSPENDED: "grey50",
    InstanceStatus.REPAIRING: "yellow",
    InstanceStatus.PENDING: "yellow",
    InstanceStatus.UNKNOWN: "grey50",
}

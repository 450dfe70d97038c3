"""Helpers for invoking the gcloud CLI."""

from __future__ import annotations

import logging
import os
import subprocess
from collections.abc import Callable, Sequence
from typing import Any

from g1c.constants import CREDENTIALS_ENV_VAR, GCLOUD_COMMAND_TIMEOUT_SECONDS
from g1c.providers.exceptions import ProviderUnavailableError

logger = logging.getLogger(__name__)

GCLOUD_BINARY = "gcloud"

Runner = Callable[..., Any]


def build_env(credentials_path: str | None) -> dict[str, str] | None:
    """Build the subprocess environment for gcloud.

    Parameters
    ----------
    credentials_path : str | None
        Credential file to force, or None to inherit the caller's setup

    Returns
    -------
    dict[str, str] | None
        Environment with the credential override, or None to inherit
    """
    if not credentials_path:
        return None

    env = dict(os.environ)
    env[CREDENTIALS_ENV_VAR] = os.path.expanduser(credentials_path)
    return env


def run_gcloud(
    args: Sequence[str],
    runner: Runner = subprocess.run,
    env: dict[str, str] | None = None,
    timeout: float = GCLOUD_COMMAND_TIMEOUT_SECONDS,
) -> str:
    """Run one gcloud command and return its stdout.

    Parameters
    ----------
    args : Sequence[str]
        Arguments after the ``gcloud`` binary
    runner : Runner
        ``subprocess.run`` compatible callable
    env : dict[str, str] | None
        Environment override
    timeout : float
        Seconds before the call is abandoned

    Returns
    -------
    str
        Captured standard output

    Raises
    ------
    ProviderUnavailableError
        If gcloud is missing, times out, or exits non-zero
    """
    command = [GCLOUD_BINARY, *args]
    logger.debug("Running %s", " ".join(command))

    try:
        result = runner(
            command,
            capture_output=True,
            text=True,
            timeout=timeout,
            env=env,
            check=False,
        )
    except FileNotFoundError as e:
        raise ProviderUnavailableError(
            "gcloud CLI not found. Install the Google Cloud SDK: "
            "https://cloud.google.com/sdk/docs/install"
        ) from e
    except subprocess.TimeoutExpired as e:
        raise ProviderUnavailableError(
            f"gcloud {' '.join(args[:3])} timed out after {timeout:g}s"
        ) from e
    except OSError as e:
        raise ProviderUnavailableError(f"Failed to execute gcloud: {e}") from e

    if result.returncode != 0:
        stderr = (result.stderr or "").strip()
        raise ProviderUnavailableError(
            f"gcloud {' '.join(args[:3])} failed: {stderr or f'exit code {result.returncode}'}",
            stderr=stderr,
        )

    return result.stdout or ""


def last_path_segment(value: str | None, default: str = "unknown") -> str:
    """Return the final ``/`` separated segment of a resource URL."""
    if not value:
        return default

    return value.rstrip("/").split("/")[-1] or default

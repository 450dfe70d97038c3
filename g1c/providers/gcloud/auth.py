"""Startup checks against the local gcloud installation."""

from __future__ import annotations

import logging
import subprocess

from g1c.constants import GCLOUD_PROBE_TIMEOUT_SECONDS
from g1c.providers.exceptions import ProviderUnavailableError
from g1c.providers.gcloud.utils import Runner, run_gcloud

logger = logging.getLogger(__name__)

COMPUTE_API_URL = "https://console.cloud.google.com/apis/library/compute.googleapis.com"


def get_default_project(
    runner: Runner = subprocess.run, env: dict[str, str] | None = None
) -> str:
    """Read the default project from gcloud configuration.

    Raises
    ------
    ProviderUnavailableError
        If gcloud fails or no default project is set
    """
    output = run_gcloud(
        ["config", "get-value", "project"],
        runner=runner,
        env=env,
        timeout=GCLOUD_PROBE_TIMEOUT_SECONDS,
    )
    project_id = output.strip()

    if not project_id or project_id == "(unset)":
        raise ProviderUnavailableError(
            "No default project found. Set one with "
            "'gcloud config set project PROJECT_ID' or pass --project"
        )

    logger.debug("Default project: %s", project_id)
    return project_id


def check_gcloud(runner: Runner = subprocess.run, env: dict[str, str] | None = None) -> None:
    """Verify gcloud is installed and has an active account.

    Raises
    ------
    ProviderUnavailableError
        If gcloud is missing or no account is active
    """
    run_gcloud(["--version"], runner=runner, env=env, timeout=GCLOUD_PROBE_TIMEOUT_SECONDS)

    auth_output = run_gcloud(
        ["auth", "list"], runner=runner, env=env, timeout=GCLOUD_PROBE_TIMEOUT_SECONDS
    )

    if "*" not in auth_output:
        logger.warning("No active gcloud account found")
        raise ProviderUnavailableError(
            "No active gcloud account found. Run 'gcloud auth login' to authenticate"
        )

    logger.info("gcloud CLI is installed and authenticated")


def check_compute_api(
    project_id: str, runner: Runner = subprocess.run, env: dict[str, str] | None = None
) -> None:
    """Verify the Compute Engine API is enabled for a project.

    Raises
    ------
    ProviderUnavailableError
        If the check fails or the API is not enabled
    """
    output = run_gcloud(
        [
            "services",
            "list",
            "--project",
            project_id,
            "--filter",
            "name:compute.googleapis.com",
            "--format",
            "value(state)",
        ],
        runner=runner,
        env=env,
        timeout=GCLOUD_PROBE_TIMEOUT_SECONDS,
    )

    if output.strip() != "ENABLED":
        logger.warning("Compute Engine API is not enabled for project %s", project_id)
        raise ProviderUnavailableError(
            f"Compute Engine API is not enabled for project {project_id}. "
            f"Enable it at {COMPUTE_API_URL}"
        )

    logger.info("Compute Engine API is enabled for project %s", project_id)


def get_gcloud_version(runner: Runner = subprocess.run, env: dict[str, str] | None = None) -> str:
    """Return the first line of ``gcloud --version`` (e.g. ``Google Cloud SDK 470.0.0``)."""
    output = run_gcloud(
        ["--version"], runner=runner, env=env, timeout=GCLOUD_PROBE_TIMEOUT_SECONDS
    )
    lines = output.strip().splitlines()
    return lines[0].strip() if lines else "Unknown"

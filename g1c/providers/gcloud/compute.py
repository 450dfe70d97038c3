"""Compute Engine instance management through the gcloud CLI."""

from __future__ import annotations

import logging
import subprocess

from g1c.constants import Action
from g1c.models import Instance
from g1c.providers.exceptions import InstanceNotFoundError, ProviderError
from g1c.providers.gcloud import auth
from g1c.providers.gcloud.parsing import parse_instance_detail, parse_instance_list
from g1c.providers.gcloud.utils import Runner, build_env, run_gcloud

logger = logging.getLogger(__name__)

ACTION_SUBCOMMANDS = {
    Action.START: "start",
    Action.STOP: "stop",
    Action.RESTART: "reset",
}


class GcloudManager:
    """Manage Compute Engine instances by shelling out to gcloud.

    Parameters
    ----------
    credentials_path : str | None
        Credential file forced onto every gcloud call
    runner : Runner | None
        ``subprocess.run`` compatible callable. If None, uses subprocess.run
    """

    def __init__(self, credentials_path: str | None = None, runner: Runner | None = None) -> None:
        self.runner = runner or subprocess.run
        self.env = build_env(credentials_path)
        self._cli_version: str | None = None

    def _run(self, args: list[str]) -> str:
        return run_gcloud(args, runner=self.runner, env=self.env)

    def check_access(self, project_id: str) -> None:
        """Run the startup checks for one project.

        Raises
        ------
        ProviderUnavailableError
            If gcloud is missing, unauthenticated, or the API is disabled
        """
        auth.check_gcloud(runner=self.runner, env=self.env)
        auth.check_compute_api(project_id, runner=self.runner, env=self.env)

    def get_default_project(self) -> str:
        return auth.get_default_project(runner=self.runner, env=self.env)

    def get_cli_version(self) -> str:
        """Return the gcloud version, caching the first successful lookup.

        Returns
        -------
        str
            Version line, or "Unknown" if gcloud could not report it
        """
        if self._cli_version is not None:
            return self._cli_version

        try:
            self._cli_version = auth.get_gcloud_version(runner=self.runner, env=self.env)
        except ProviderError as e:
            logger.error("Failed to get gcloud version: %s", e)
            return "Unknown"

        return self._cli_version

    def list_instances(self, project_id: str) -> list[Instance]:
        """List all instances in a project.

        Raises
        ------
        ProviderUnavailableError
            If gcloud fails
        MalformedResponseError
            If the output cannot be parsed
        """
        logger.info("Listing instances for project: %s", project_id)
        output = self._run(
            ["compute", "instances", "list", "--project", project_id, "--format", "json"]
        )
        instances = parse_instance_list(output)
        logger.debug("Found %d instances", len(instances))
        return instances

    def find_instance(self, project_id: str, name_or_id: str) -> Instance:
        """Resolve an id or name to exactly one listed instance.

        Raises
        ------
        InstanceNotFoundError
            If nothing or more than one instance matches
        """
        instances = self.list_instances(project_id)
        matches = [i for i in instances if i.id == name_or_id]

        if not matches:
            matches = [i for i in instances if i.name == name_or_id]

        if len(matches) != 1:
            raise InstanceNotFoundError(name_or_id, matches=len(matches))

        return matches[0]

    def get_instance(self, project_id: str, name_or_id: str) -> Instance:
        """Fetch full details for one instance."""
        logger.info("Getting instance %s in project %s", name_or_id, project_id)
        instance = self.find_instance(project_id, name_or_id)
        output = self._run(
            [
                "compute",
                "instances",
                "describe",
                instance.name,
                "--zone",
                instance.zone,
                "--project",
                project_id,
                "--format",
                "json",
            ]
        )
        return parse_instance_detail(output)

    def perform_action(self, project_id: str, instance_id: str, action: Action) -> None:
        """Start, stop or reset one instance.

        Restart maps to ``gcloud compute instances reset``, a single power
        cycle rather than a stop followed by a start.

        Raises
        ------
        ValueError
            If ``action`` is not a lifecycle action
        InstanceNotFoundError
            If the id does not resolve to exactly one instance
        ProviderUnavailableError
            If gcloud rejects the operation
        """
        subcommand = ACTION_SUBCOMMANDS.get(action)

        if subcommand is None:
            raise ValueError(f"Unsupported instance action: {action}")

        instance = self.find_instance(project_id, instance_id)
        logger.info("Running %s on instance %s in %s", subcommand, instance.name, instance.zone)
        self._run(
            [
                "compute",
                "instances",
                subcommand,
                instance.name,
                "--zone",
                instance.zone,
                "--project",
                project_id,
                "--quiet",
            ]
        )
        logger.info("Successfully ran %s on instance %s", subcommand, instance.name)

from __future__ import annotations

import logging
from typing import Any

from g1c.constants import DEFAULT_NAME_COLUMN_WIDTH, Action, InstanceStatus
from g1c.models import Instance

logger = logging.getLogger(__name__)

STOPPED_STATES = (InstanceStatus.TERMINATED, InstanceStatus.SUSPENDED)


def fit_column(value: str, width: int) -> str:
    """Cut ``value`` to ``width`` characters, ending with an ellipsis when cut."""
    if len(value) <= width:
        return value

    return value[: width - 1] + "…"


class LifecycleManager:
    """One-shot instance commands (list, start, stop, restart, info).

    Parameters
    ----------
    provider : Any
        Instance provider exposing ``list_instances``, ``find_instance``,
        ``get_instance`` and ``perform_action``
    project_id : str
        Project to operate on
    name_width : int
        Width of the NAME column in list output; longer names are cut
        with an ellipsis
    """

    def __init__(
        self,
        provider: Any,
        project_id: str,
        name_width: int = DEFAULT_NAME_COLUMN_WIDTH,
    ) -> None:
        self.provider = provider
        self.project_id = project_id
        self.name_width = name_width

    def list(self) -> None:
        """Print every instance in the project as a table.

        Raises
        ------
        ProviderError
            If the listing fails
        """
        instances = self.provider.list_instances(self.project_id)

        if not instances:
            print(f"No instances found in project {self.project_id}")
            return

        print(f"Instances in {self.project_id}:")
        print(
            f"{'NAME':<{self.name_width}} {'INSTANCE-ID':<21} {'STATUS':<13} {'ZONE':<16} "
            f"{'TYPE':<16} {'INTERNAL-IP':<16} {'EXTERNAL-IP':<16}"
        )
        print("-" * (self.name_width + 104))

        for inst in instances:
            print(
                f"{fit_column(inst.name, self.name_width):<{self.name_width}} "
                f"{inst.id:<21} {inst.status.value:<13} "
                f"{fit_column(inst.zone, 16):<16} {fit_column(inst.machine_type, 16):<16} "
                f"{inst.internal_ip or '-':<16} {inst.external_ip or '-':<16}"
            )

        running = sum(1 for inst in instances if inst.status is InstanceStatus.RUNNING)
        print(f"\n{len(instances)} instances, {running} running")

    def start(self, name_or_id: str) -> None:
        """Start a stopped instance by name or ID.

        Raises
        ------
        InstanceNotFoundError
            If the identifier does not resolve to exactly one instance
        ProviderError
            If the start operation fails
        """
        target = self.provider.find_instance(self.project_id, name_or_id)

        if target.status is InstanceStatus.RUNNING:
            print(f"Instance {target.name} is already running")
            return

        self._run(Action.START, target, "Starting")

    def stop(self, name_or_id: str) -> None:
        """Stop a running instance by name or ID.

        Raises
        ------
        InstanceNotFoundError
            If the identifier does not resolve to exactly one instance
        ProviderError
            If the stop operation fails
        """
        target = self.provider.find_instance(self.project_id, name_or_id)

        if target.status in STOPPED_STATES:
            print(f"Instance {target.name} already stopped")
            return

        self._run(Action.STOP, target, "Stopping")

    def restart(self, name_or_id: str) -> None:
        """Power-cycle an instance by name or ID."""
        target = self.provider.find_instance(self.project_id, name_or_id)
        self._run(Action.RESTART, target, "Restarting")

    def info(self, name_or_id: str) -> None:
        """Print detailed information about one instance."""
        instance = self.provider.get_instance(self.project_id, name_or_id)

        rows = [
            ("Name", instance.name),
            ("Instance ID", instance.id),
            ("Status", instance.status.value),
            ("Machine Type", instance.machine_type),
            ("Zone", instance.zone),
            ("Internal IP", instance.internal_ip or "None"),
            ("External IP", instance.external_ip or "None"),
            ("Created", instance.creation_timestamp or "Unknown"),
            ("Description", instance.description or "None"),
            ("Tags", ", ".join(instance.tags) if instance.tags else "None"),
        ]

        for label, value in rows:
            print(f"{label + ':':<15}{value}")

        if instance.metadata:
            print("Metadata:")

            for key in sorted(instance.metadata):
                print(f"  {key}: {instance.metadata[key]}")

    def _run(self, action: Action, target: Instance, progress: str) -> None:
        print(f"{progress} instance {target.name} ({target.zone})...")
        self.provider.perform_action(self.project_id, target.id, action)
        logger.info("%s instance %s finished", progress, target.id)
        print("Done")

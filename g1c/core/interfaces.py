"""Protocols the dashboard core depends on."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from g1c.constants import Action
    from g1c.core.state import DashboardState
    from g1c.models import Instance


@runtime_checkable
class InstanceProvider(Protocol):
    """Source of truth for instance existence and state.

    Implementations raise subclasses of ``ProviderError``; the core never
    inspects anything else.
    """

    def list_instances(self, project_id: str) -> list[Instance]:
        """Return a full, unfiltered snapshot in provider order."""
        ...

    def perform_action(self, project_id: str, instance_id: str, action: Action) -> None:
        """Run one lifecycle action against exactly one instance."""
        ...


@runtime_checkable
class Terminal(Protocol):
    """Renderer and key source driven by the event loop."""

    def render(self, state: DashboardState) -> None:
        """Draw the current state."""
        ...

    def poll_key(self, timeout: float) -> str | None:
        """Wait at most ``timeout`` seconds for a key, returning its name."""
        ...

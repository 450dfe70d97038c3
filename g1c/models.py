"""Instance record shared by the provider layer and the dashboard."""

from __future__ import annotations

from dataclasses import dataclass, field

from g1c.constants import InstanceStatus


@dataclass
class Instance:
    """One virtual machine as reported by the provider.

    Records are replaced wholesale on every refresh and never mutated by the
    dashboard.

    Attributes
    ----------
    id : str
        Provider-assigned identifier, unique within a project
    name : str
        Human-chosen name, unique within one listing
    status : InstanceStatus
        Lifecycle state
    machine_type : str
        Short machine type name (e.g. ``e2-micro``)
    zone : str
        Short zone name (e.g. ``us-central1-a``)
    external_ip : str | None
        NAT address, absent for stopped or private instances
    internal_ip : str | None
        VPC address
    creation_timestamp : str | None
        RFC 3339 creation time as reported
    description : str | None
        Free-form description
    metadata : dict[str, str] | None
        Instance metadata items
    tags : list[str]
        Network tags in provider order
    """

    id: str
    name: str
    status: InstanceStatus
    machine_type: str
    zone: str
    external_ip: str | None = None
    internal_ip: str | None = None
    creation_timestamp: str | None = None
    description: str | None = None
    metadata: dict[str, str] | None = None
    tags: list[str] = field(default_factory=list)

    def searchable_fields(self) -> list[str]:
        """Return the fields the dashboard filter matches against."""
        fields = [self.name, self.status.value, self.machine_type, self.zone]

        if self.internal_ip:
            fields.append(self.internal_ip)

        return fields

"""Conversion of gcloud JSON output into Instance records."""

from __future__ import annotations

import json
import logging
from typing import Any

from g1c.constants import InstanceStatus
from g1c.models import Instance
from g1c.providers.exceptions import MalformedResponseError
from g1c.providers.gcloud.utils import last_path_segment

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("id", "name", "status")


def optional_field(raw: dict[str, Any], key: str, expected: type, context: str = "instance") -> Any:
    """Return ``raw[key]`` if it is absent, null or of the expected type.

    Raises
    ------
    MalformedResponseError
        If the value has any other type
    """
    value = raw.get(key)
    if value is not None and not isinstance(value, expected):
        raise MalformedResponseError(
            f"Expected {context} field '{key}' to be {expected.__name__}, "
            f"got {type(value).__name__}"
        )

    return value


def object_items(values: list[Any], context: str) -> list[dict[str, Any]]:
    """Check that every element of a nested list is a JSON object."""
    for value in values:
        if not isinstance(value, dict):
            raise MalformedResponseError(
                f"Expected {context} entries to be objects, got {type(value).__name__}"
            )

    return values


def extract_ips(network_interfaces: list[dict[str, Any]] | None) -> tuple[str | None, str | None]:
    """Pull internal and external addresses out of ``networkInterfaces``.

    The internal address comes from the last interface that has one; the
    external address is the first NAT address found.

    Parameters
    ----------
    network_interfaces : list[dict[str, Any]] | None
        Raw ``networkInterfaces`` list

    Returns
    -------
    tuple[str | None, str | None]
        (internal_ip, external_ip)

    Raises
    ------
    MalformedResponseError
        If the interfaces or their access configs are not lists of objects
    """
    if network_interfaces is None:
        return None, None

    if not isinstance(network_interfaces, list):
        raise MalformedResponseError(
            f"Expected networkInterfaces to be a list, got {type(network_interfaces).__name__}"
        )

    internal_ip = None
    external_ip = None

    for iface in object_items(network_interfaces, "networkInterfaces"):
        if iface.get("networkIP"):
            internal_ip = str(iface["networkIP"])

        access_configs = optional_field(iface, "accessConfigs", list, "networkInterfaces")
        if external_ip is None and access_configs:
            for access_config in object_items(access_configs, "accessConfigs"):
                if access_config.get("natIP"):
                    external_ip = str(access_config["natIP"])
                    break

    return internal_ip, external_ip


def extract_metadata(metadata: dict[str, Any] | None) -> dict[str, str] | None:
    """Flatten ``metadata.items`` into a mapping, skipping incomplete items."""
    if metadata is None:
        return None

    if not isinstance(metadata, dict):
        raise MalformedResponseError(
            f"Expected metadata to be an object, got {type(metadata).__name__}"
        )

    items = optional_field(metadata, "items", list, "metadata")
    if items is None:
        return None

    return {
        str(item["key"]): str(item["value"])
        for item in object_items(items, "metadata.items")
        if item.get("key") is not None and item.get("value") is not None
    }


def extract_tags(tags: dict[str, Any] | None) -> list[str]:
    """Return the network tag names from ``tags.items``."""
    if tags is None:
        return []

    if not isinstance(tags, dict):
        raise MalformedResponseError(f"Expected tags to be an object, got {type(tags).__name__}")

    return [str(tag) for tag in optional_field(tags, "items", list, "tags") or []]


def parse_instance(raw: dict[str, Any]) -> Instance:
    """Convert one gcloud instance resource into an Instance.

    Parameters
    ----------
    raw : dict[str, Any]
        One element of ``gcloud compute instances list --format json``

    Returns
    -------
    Instance
        Parsed record

    Raises
    ------
    MalformedResponseError
        If the resource is not a mapping, lacks id, name or status, or has
        nested fields of an unexpected shape
    """
    if not isinstance(raw, dict):
        raise MalformedResponseError(f"Expected instance object, got {type(raw).__name__}")

    missing = [field for field in REQUIRED_FIELDS if raw.get(field) in (None, "")]
    if missing:
        raise MalformedResponseError(f"Instance record missing fields: {', '.join(missing)}")

    internal_ip, external_ip = extract_ips(raw.get("networkInterfaces"))
    status = InstanceStatus.parse(str(raw["status"]))

    if status is InstanceStatus.UNKNOWN:
        logger.debug("Unrecognized status %r for instance %s", raw["status"], raw["name"])

    return Instance(
        id=str(raw["id"]),
        name=str(raw["name"]),
        status=status,
        machine_type=last_path_segment(optional_field(raw, "machineType", str)),
        zone=last_path_segment(optional_field(raw, "zone", str)),
        external_ip=external_ip,
        internal_ip=internal_ip,
        creation_timestamp=optional_field(raw, "creationTimestamp", str),
        description=optional_field(raw, "description", str),
        metadata=extract_metadata(raw.get("metadata")),
        tags=extract_tags(raw.get("tags")),
    )


def parse_instance_list(output: str) -> list[Instance]:
    """Parse the JSON output of ``gcloud compute instances list``.

    Parameters
    ----------
    output : str
        Raw standard output

    Returns
    -------
    list[Instance]
        Instances in listing order; empty output means no instances

    Raises
    ------
    MalformedResponseError
        If the output is not a JSON list of instance objects
    """
    if not output.strip():
        return []

    try:
        data = json.loads(output)
    except json.JSONDecodeError as e:
        raise MalformedResponseError(f"Failed to parse instance list JSON: {e}") from e

    if not isinstance(data, list):
        raise MalformedResponseError(
            f"Expected a JSON list of instances, got {type(data).__name__}"
        )

    return [parse_instance(raw) for raw in data]


def parse_instance_detail(output: str) -> Instance:
    """Parse the JSON output of ``gcloud compute instances describe``."""
    try:
        data = json.loads(output)
    except json.JSONDecodeError as e:
        raise MalformedResponseError(f"Failed to parse instance details JSON: {e}") from e

    return parse_instance(data)

"""Filter and search matching for the instance list."""

from __future__ import annotations

from collections.abc import Sequence

from g1c.models import Instance


def matches_filter(instance: Instance, query: str) -> bool:
    """Check whether an instance matches filter text.

    The query matches when it is a case-insensitive substring of any one of
    name, status, machine type, zone or internal IP.

    Parameters
    ----------
    instance : Instance
        Instance to test
    query : str
        Filter text; empty text matches everything

    Returns
    -------
    bool
        True if the instance should be displayed
    """
    if not query:
        return True

    needle = query.lower()
    return any(needle in value.lower() for value in instance.searchable_fields())


def apply_filter(instances: Sequence[Instance], query: str) -> list[Instance]:
    """Return the instances matching ``query``, preserving order."""
    return [instance for instance in instances if matches_filter(instance, query)]


def find_first_match(instances: Sequence[Instance], search: str) -> int | None:
    """Return the index of the first instance whose name contains ``search``.

    Parameters
    ----------
    instances : Sequence[Instance]
        Displayed instances
    search : str
        Search text, compared case-insensitively

    Returns
    -------
    int | None
        Index of the first match, or None when nothing matches or the
        search text is empty
    """
    if not search:
        return None

    needle = search.lower()

    for index, instance in enumerate(instances):
        if needle in instance.name.lower():
            return index

    return None

"""Provider registry and management.

Instance providers are registered by name so the dashboard can be pointed at
another backend (an API client, a mock) without touching the core.
"""

from __future__ import annotations

from collections.abc import Callable

from g1c.core.interfaces import InstanceProvider
from g1c.providers.exceptions import (
    InstanceNotFoundError,
    MalformedResponseError,
    ProviderError,
    ProviderUnavailableError,
)
from g1c.providers.gcloud import GcloudManager

DEFAULT_PROVIDER = "gcloud"

_PROVIDERS: dict[str, Callable[..., InstanceProvider]] = {}


def register_provider(name: str, factory: Callable[..., InstanceProvider]) -> None:
    """Register an instance provider implementation.

    Parameters
    ----------
    name : str
        Provider name (e.g. 'gcloud')
    factory : Callable[..., InstanceProvider]
        Callable accepting provider keyword options and returning a provider
    """
    _PROVIDERS[name] = factory


def get_provider(name: str) -> Callable[..., InstanceProvider]:
    """Get a registered provider factory by name.

    Raises
    ------
    ValueError
        If provider is not registered
    """
    if name not in _PROVIDERS:
        raise ValueError(f"Unknown provider: {name}. Available providers: {list_providers()}")
    return _PROVIDERS[name]


def list_providers() -> list[str]:
    return list(_PROVIDERS.keys())


__all__ = [
    "DEFAULT_PROVIDER",
    "register_provider",
    "get_provider",
    "list_providers",
    "ProviderError",
    "ProviderUnavailableError",
    "InstanceNotFoundError",
    "MalformedResponseError",
]

register_provider(DEFAULT_PROVIDER, GcloudManager)

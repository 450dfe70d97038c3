"""Provider-agnostic exception hierarchy."""

from __future__ import annotations


class ProviderError(Exception):
    """Base class for errors raised by an instance provider."""


class ProviderUnavailableError(ProviderError):
    """The provider could not be reached or refused to run the request.

    Parameters
    ----------
    message : str
        Human-readable description
    stderr : str | None
        Raw error output of the underlying tool, when available
    """

    def __init__(self, message: str, stderr: str | None = None) -> None:
        super().__init__(message)
        self.stderr = stderr


class InstanceNotFoundError(ProviderError):
    """An identifier did not resolve to exactly one instance.

    Parameters
    ----------
    name_or_id : str
        Identifier that failed to resolve
    matches : int
        Number of instances that matched (0 or more than 1)
    """

    def __init__(self, name_or_id: str, matches: int = 0) -> None:
        if matches > 1:
            message = f"Instance '{name_or_id}' is ambiguous ({matches} matches)"
        else:
            message = f"Instance not found: {name_or_id}"
        super().__init__(message)
        self.name_or_id = name_or_id
        self.matches = matches


class MalformedResponseError(ProviderError):
    """Provider output could not be interpreted as instance records."""

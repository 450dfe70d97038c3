"""CLI entry point for g1c."""

from __future__ import annotations

import os
import sys

import fire

from g1c.cli.commands import G1C
from g1c.constants import EXIT_CONFIG_ERROR, EXIT_ERROR
from g1c.core.config import InvalidConfigurationError
from g1c.providers import (
    InstanceNotFoundError,
    MalformedResponseError,
    ProviderError,
    ProviderUnavailableError,
)

DEFAULT_COMMAND = "dashboard"
DEBUG_ENV_VAR = "G1C_DEBUG"


def build_command(argv: list[str]) -> list[str]:
    """Prepend the default command when none is given.

    Parameters
    ----------
    argv : list[str]
        Arguments after the program name

    Returns
    -------
    list[str]
        Arguments for Fire, starting with a command name
    """
    if not argv or argv[0].startswith("-"):
        return [DEFAULT_COMMAND, *argv]

    return list(argv)


def handle_unavailable_error(error: ProviderUnavailableError, debug_mode: bool) -> None:
    """Handle gcloud being missing, unauthenticated or failing.

    Raises
    ------
    ProviderUnavailableError
        Re-raised if debug mode is enabled
    """
    if debug_mode:
        raise

    print(f"gcloud error: {error}\n", file=sys.stderr)

    if error.stderr:
        print(error.stderr.strip(), file=sys.stderr)
        print("", file=sys.stderr)

    print("This usually means:", file=sys.stderr)
    print("  - The Google Cloud SDK is not installed or not on PATH", file=sys.stderr)
    print("  - No account is logged in", file=sys.stderr)
    print("  - The Compute Engine API is disabled for the project\n", file=sys.stderr)
    print("Fix it:", file=sys.stderr)
    print("  gcloud auth login", file=sys.stderr)
    print("  gcloud config set project PROJECT_ID", file=sys.stderr)
    print("  gcloud services enable compute.googleapis.com", file=sys.stderr)
    sys.exit(EXIT_ERROR)


def handle_not_found_error(error: InstanceNotFoundError, debug_mode: bool) -> None:
    """Handle an instance identifier that did not resolve.

    Raises
    ------
    InstanceNotFoundError
        Re-raised if debug mode is enabled
    """
    if debug_mode:
        raise

    print(str(error), file=sys.stderr)

    if error.matches > 1:
        print("Use the instance ID instead of the name.", file=sys.stderr)
    else:
        print("List instances with: g1c list", file=sys.stderr)

    sys.exit(EXIT_ERROR)


def handle_provider_error(error: ProviderError, debug_mode: bool) -> None:
    """Handle any other provider failure, including unreadable output.

    Raises
    ------
    ProviderError
        Re-raised if debug mode is enabled
    """
    if debug_mode:
        raise

    if isinstance(error, MalformedResponseError):
        print(f"Unexpected gcloud output: {error}", file=sys.stderr)
    else:
        print(f"Provider error: {error}", file=sys.stderr)

    sys.exit(EXIT_ERROR)


def handle_value_error(error: ValueError, debug_mode: bool) -> None:
    """Handle configuration errors.

    Raises
    ------
    ValueError
        Re-raised if debug mode is enabled
    """
    if debug_mode:
        raise

    if isinstance(error, InvalidConfigurationError):
        print(f"Configuration error: {error}", file=sys.stderr)
    else:
        print(f"Invalid value: {error}", file=sys.stderr)

    sys.exit(EXIT_CONFIG_ERROR)


def handle_runtime_error(error: RuntimeError, debug_mode: bool) -> None:
    """Handle unexpected runtime error.

    Raises
    ------
    RuntimeError
        Re-raised if debug mode is enabled
    """
    if debug_mode:
        raise

    print(f"Unexpected error: {error}", file=sys.stderr)
    sys.exit(EXIT_ERROR)


def main(argv: list[str] | None = None) -> None:
    """Entry point for the Fire CLI with graceful error handling.

    With no command, or when the first argument is an option, the dashboard
    is opened. Set ``G1C_DEBUG=1`` to get tracebacks instead of the short
    error messages.

    Parameters
    ----------
    argv : list[str] | None
        Arguments after the program name (default: ``sys.argv[1:]``)
    """
    debug_mode = os.environ.get(DEBUG_ENV_VAR) == "1"
    command = build_command(sys.argv[1:] if argv is None else argv)

    try:
        fire.Fire(G1C(), command=command)
    except ProviderUnavailableError as e:
        handle_unavailable_error(e, debug_mode)
    except InstanceNotFoundError as e:
        handle_not_found_error(e, debug_mode)
    except ProviderError as e:
        handle_provider_error(e, debug_mode)
    except ValueError as e:
        handle_value_error(e, debug_mode)
    except RuntimeError as e:
        handle_runtime_error(e, debug_mode)

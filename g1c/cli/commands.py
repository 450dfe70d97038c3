"""Command surface exposed through Fire."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from g1c.core.config import ConfigLoader
from g1c.core.loop import EventLoop
from g1c.core.state import DashboardState
from g1c.lifecycle import LifecycleManager
from g1c.logging import setup_logging
from g1c.providers import get_provider

logger = logging.getLogger(__name__)


class G1C:
    """Terminal dashboard for Google Cloud Compute Engine instances.

    Parameters
    ----------
    provider_factory : Callable[..., Any] | None
        Optional factory for the instance provider. If None, the provider
        named in configuration is looked up in the registry
    app_factory : Callable[[EventLoop], Any] | None
        Optional factory for the dashboard app. If None, uses DashboardApp
    configure_logging : bool
        Whether commands reconfigure process logging (default: True)
    """

    def __init__(
        self,
        provider_factory: Callable[..., Any] | None = None,
        app_factory: Callable[[EventLoop], Any] | None = None,
        configure_logging: bool = True,
    ) -> None:
        self._config_loader = ConfigLoader()
        self._provider_factory = provider_factory
        self._app_factory = app_factory
        self._configure_logging = configure_logging

    def _prepare(
        self,
        project: str | None,
        region: str | None = None,
        refresh: Any = None,
        config: str | None = None,
        log_file: str | None = None,
        log_level: str | None = None,
        log_format: str | None = None,
    ) -> tuple[dict[str, Any], Any, str]:
        merged = self._config_loader.build_config(
            config,
            project=project,
            region=region,
            refresh=refresh,
            log_file=log_file,
            log_level=log_level,
            log_format=log_format,
        )

        if self._configure_logging:
            setup_logging(merged["log_file"], merged["log_level"], merged["log_format"])

        factory = self._provider_factory or get_provider(merged["provider"])
        provider = factory(credentials_path=merged["credentials_path"])

        project_id = merged["project"]
        if not project_id:
            logger.info("No project ID specified, trying to detect from gcloud config")
            project_id = provider.get_default_project()

        logger.debug("Using project=%s, region=%s", project_id, merged["region"])
        return merged, provider, project_id

    def dashboard(
        self,
        project: str | None = None,
        region: str | None = None,
        refresh: int | None = None,
        config: str | None = None,
        log_file: str | None = None,
        log_level: str | None = None,
        log_format: str | None = None,
    ) -> None:
        """Open the interactive instance dashboard.

        Parameters
        ----------
        project : str | None
            Project ID (default: gcloud's configured project)
        region : str | None
            Region shown in the overview (default: us-central1)
        refresh : int | None
            Auto-refresh interval in seconds (default: 5)
        config : str | None
            Path to a YAML config file
        log_file : str | None
            Write logs to this file
        log_level : str | None
            trace, debug, info, warn or error
        log_format : str | None
            text or json
        """
        merged, provider, project_id = self._prepare(
            project, region, refresh, config, log_file, log_level, log_format
        )
        provider.check_access(project_id)

        from g1c.tui import DashboardApp, TextualTerminal

        event_loop = EventLoop(
            state=DashboardState(),
            provider=provider,
            terminal=TextualTerminal(),
            project_id=project_id,
            region=merged["region"],
            refresh_interval=merged["refresh_interval"],
            cli_version_getter=provider.get_cli_version,
        )
        event_loop.start()

        app_factory = self._app_factory or DashboardApp
        app = app_factory(event_loop)
        app.run()
        logger.info("Dashboard closed")

    def list(self, project: str | None = None, config: str | None = None) -> None:
        """List instances in the project."""
        _, provider, project_id = self._prepare(project, config=config)
        LifecycleManager(provider, project_id).list()

    def start(self, name_or_id: str, project: str | None = None, config: str | None = None) -> None:
        """Start an instance by name or ID."""
        _, provider, project_id = self._prepare(project, config=config)
        LifecycleManager(provider, project_id).start(str(name_or_id))

    def stop(self, name_or_id: str, project: str | None = None, config: str | None = None) -> None:
        """Stop an instance by name or ID."""
        _, provider, project_id = self._prepare(project, config=config)
        LifecycleManager(provider, project_id).stop(str(name_or_id))

    def restart(
        self, name_or_id: str, project: str | None = None, config: str | None = None
    ) -> None:
        """Reset (power-cycle) an instance by name or ID."""
        _, provider, project_id = self._prepare(project, config=config)
        LifecycleManager(provider, project_id).restart(str(name_or_id))

    def info(self, name_or_id: str, project: str | None = None, config: str | None = None) -> None:
        """Show details for an instance by name or ID."""
        _, provider, project_id = self._prepare(project, config=config)
        LifecycleManager(provider, project_id).info(str(name_or_id))

import copy
import logging
import os
from pathlib import Path
from typing import Any

import yaml
from omegaconf import OmegaConf
from omegaconf.errors import OmegaConfBaseException

from g1c.constants import DEFAULT_REFRESH_INTERVAL_SECONDS, DEFAULT_REGION

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "G1C_CONFIG"
LOG_LEVELS = ("trace", "debug", "info", "warn", "warning", "error")
LOG_FORMATS = ("text", "json")


class InvalidConfigurationError(ValueError):
    """Configuration value has the wrong type or an unsupported value."""


def default_config_path() -> Path:
    """Return the per-user config file location (``~/.config/g1c/config.yaml``)."""
    config_home = os.environ.get("XDG_CONFIG_HOME") or str(Path.home() / ".config")
    return Path(config_home) / "g1c" / "config.yaml"


def resolve_refresh_interval(current: int, candidate: Any) -> int:
    """Accept ``candidate`` only if it is a positive whole number of seconds.

    Parameters
    ----------
    current : int
        Interval in effect
    candidate : Any
        Proposed interval

    Returns
    -------
    int
        ``candidate`` if valid, otherwise ``current``
    """
    if candidate is None:
        return current

    if isinstance(candidate, bool) or not isinstance(candidate, int) or candidate <= 0:
        logger.warning(
            "Invalid refresh interval provided: %r, keeping %d seconds", candidate, current
        )
        return current

    return candidate


class ConfigLoader:
    """Load and merge YAML configuration with defaults."""

    def __init__(self) -> None:
        self.BUILT_IN_DEFAULTS = {
            "provider": "gcloud",
            "project": None,
            "region": DEFAULT_REGION,
            "refresh_interval": DEFAULT_REFRESH_INTERVAL_SECONDS,
            "credentials_path": None,
            "log_file": None,
            "log_level": "info",
            "log_format": "text",
        }

    def load_config(self, config_path: str | None = None) -> dict[str, Any]:
        """Load configuration from a YAML file.

        Parameters
        ----------
        config_path : str | None
            Path to YAML config file. If None, checks G1C_CONFIG env var,
            then falls back to ~/.config/g1c/config.yaml

        Returns
        -------
        dict[str, Any]
            Parsed configuration with all variable interpolations resolved,
            or an empty dict if the file does not exist

        Raises
        ------
        InvalidConfigurationError
            If the file is not valid YAML, is not a mapping, or references
            undefined variables
        RuntimeError
            If the file exists but cannot be read
        """
        if config_path is None:
            config_path = os.environ.get(CONFIG_ENV_VAR) or str(default_config_path())

        config_file = Path(config_path).expanduser()

        if not config_file.exists():
            logger.info("No configuration file found at %s, using defaults", config_file)
            return {}

        try:
            cfg = OmegaConf.load(config_file)
        except yaml.YAMLError as e:
            logger.error("Failed to parse YAML config file %s: %s", config_file, e)
            raise InvalidConfigurationError(f"Invalid YAML in {config_file}: {e}") from e
        except OSError as e:
            logger.error("Failed to read config file %s: %s", config_file, e)
            raise RuntimeError(f"Failed to read config file {config_file}: {e}") from e

        if cfg is None:
            return {}

        if not OmegaConf.is_dict(cfg):
            raise InvalidConfigurationError(f"{config_file} must contain a mapping")

        try:
            config = OmegaConf.to_container(cfg, resolve=True, throw_on_missing=True)
        except OmegaConfBaseException as e:
            logger.error("Failed to resolve configuration variables: %s", e)
            raise InvalidConfigurationError(f"Configuration variable resolution error: {e}") from e

        logger.debug("Loaded configuration from %s", config_file)
        return config

    def merge_config(self, config: dict[str, Any]) -> dict[str, Any]:
        """Merge file values over built-in defaults.

        ``refresh_interval`` values that are not positive integers are
        dropped with a warning and the default is kept.

        Parameters
        ----------
        config : dict[str, Any]
            Configuration loaded from file

        Returns
        -------
        dict[str, Any]
            Merged configuration
        """
        merged = copy.deepcopy(self.BUILT_IN_DEFAULTS)

        for key, value in config.items():
            if key == "refresh_interval":
                merged[key] = resolve_refresh_interval(merged[key], value)
            elif value is not None:
                merged[key] = value

        return merged

    def apply_cli_overrides(
        self,
        config: dict[str, Any],
        project: str | None = None,
        region: str | None = None,
        refresh: Any = None,
        log_file: str | None = None,
        log_level: str | None = None,
        log_format: str | None = None,
    ) -> None:
        """Apply command line overrides to a merged configuration in place."""
        overrides = {
            "project": project,
            "region": region,
            "log_file": log_file,
            "log_level": log_level,
            "log_format": log_format,
        }

        for key, value in overrides.items():
            if value is not None:
                config[key] = value

        config["refresh_interval"] = resolve_refresh_interval(config["refresh_interval"], refresh)

    def validate_config(self, config: dict[str, Any]) -> None:
        """Validate configuration types and values.

        Parameters
        ----------
        config : dict[str, Any]
            Merged configuration

        Raises
        ------
        InvalidConfigurationError
            If any field is invalid
        """
        optional_strings = {
            "project": "project must be a string",
            "credentials_path": "credentials_path must be a string",
            "log_file": "log_file must be a string",
        }

        for field, message in optional_strings.items():
            if config.get(field) is not None and not isinstance(config[field], str):
                raise InvalidConfigurationError(message)

        if not isinstance(config.get("region"), str) or not config["region"]:
            raise InvalidConfigurationError("region must be a non-empty string")

        if not isinstance(config.get("provider"), str):
            raise InvalidConfigurationError("provider must be a string")

        interval = config.get("refresh_interval")
        if isinstance(interval, bool) or not isinstance(interval, int) or interval <= 0:
            raise InvalidConfigurationError("refresh_interval must be a positive integer")

        if str(config.get("log_level", "")).lower() not in LOG_LEVELS:
            raise InvalidConfigurationError(
                f"log_level must be one of {', '.join(LOG_LEVELS)}, got '{config.get('log_level')}'"
            )

        if str(config.get("log_format", "")).lower() not in LOG_FORMATS:
            raise InvalidConfigurationError(
                f"log_format must be 'text' or 'json', got '{config.get('log_format')}'"
            )

    def build_config(
        self,
        config_path: str | None = None,
        **overrides: Any,
    ) -> dict[str, Any]:
        """Load, merge, override and validate configuration in one step.

        A config file that cannot be loaded is logged and ignored so the
        dashboard still starts with defaults and command line values.

        Parameters
        ----------
        config_path : str | None
            Explicit config file path
        **overrides : Any
            Keyword arguments for ``apply_cli_overrides``

        Returns
        -------
        dict[str, Any]
            Validated configuration

        Raises
        ------
        InvalidConfigurationError
            If the final configuration is invalid
        """
        try:
            file_config = self.load_config(config_path)
        except (InvalidConfigurationError, RuntimeError) as e:
            logger.error("Failed to load configuration: %s", e)
            file_config = {}

        config = self.merge_config(file_config)
        self.apply_cli_overrides(config, **overrides)
        self.validate_config(config)
        return config

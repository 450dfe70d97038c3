"""Process-wide logging configuration."""

import logging
import sys
from pathlib import Path

from g1c.logging.formatters import build_formatter

LEVELS = {
    "trace": logging.DEBUG,
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}

QUIET_LOGGERS = ("asyncio", "textual", "markdown_it")


def parse_level(level: str | None) -> int:
    """Map a level name onto a logging level, defaulting to INFO."""
    return LEVELS.get((level or "info").lower(), logging.INFO)


def setup_logging(
    log_file: str | None = None,
    log_level: str | None = "info",
    log_format: str | None = "text",
) -> None:
    """Configure the root logger.

    The console only receives errors so that log output never scribbles over
    the dashboard. When ``log_file`` is given, records at ``log_level`` and
    above are also written there in text or JSON lines format.

    Parameters
    ----------
    log_file : str | None
        Path of the log file, parent directories are created
    log_level : str | None
        trace, debug, info, warn or error
    log_format : str | None
        text or json
    """
    level = parse_level(log_level)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.ERROR)
    console_handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))

    handlers: list[logging.Handler] = [console_handler]

    if log_file:
        path = Path(log_file).expanduser()
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path, mode="w", encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(build_formatter(log_format or "text"))
        handlers.append(file_handler)

    logging.basicConfig(level=min(level, logging.WARNING), handlers=handlers, force=True)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.getLogger(__name__).info("Logging initialized with level %s", log_level or "info")

"""Logging configuration, formatters and TUI handlers."""

from g1c.logging.formatters import JsonFormatter, build_formatter
from g1c.logging.handlers import TuiLogHandler, TuiLogMessage
from g1c.logging.setup import parse_level, setup_logging

__all__ = [
    "JsonFormatter",
    "TuiLogHandler",
    "TuiLogMessage",
    "build_formatter",
    "parse_level",
    "setup_logging",
]

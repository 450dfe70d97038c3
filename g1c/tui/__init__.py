"""Textual front end for the dashboard."""

from g1c.tui.app import DashboardApp
from g1c.tui.terminal import TextualTerminal, translate_key

__all__ = ["DashboardApp", "TextualTerminal", "translate_key"]

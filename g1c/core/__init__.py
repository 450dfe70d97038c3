"""Dashboard core: state machine, filtering and event loop."""

from __future__ import annotations

from g1c.core.interfaces import InstanceProvider, Terminal
from g1c.core.loop import EventLoop
from g1c.core.state import Command, DashboardState

__all__ = [
    "Command",
    "DashboardState",
    "EventLoop",
    "InstanceProvider",
    "Terminal",
]

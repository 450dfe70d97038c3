"""Command line interface."""

from __future__ import annotations

from g1c.cli.commands import G1C

__all__ = ["G1C"]

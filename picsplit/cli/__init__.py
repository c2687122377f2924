"""Command-line interface.

Provides commands for splitting a candidate pool into two balanced lists,
inspecting saved lists, and managing configuration.
"""

from __future__ import annotations

from picsplit.cli.main import cli

__all__ = ["cli"]

"""Async subprocess execution for delegated tools (npm, bun, uv, npx)."""

from __future__ import annotations

from mcp_setup.runners.command import CommandRunner
from mcp_setup.runners.models import CommandResult

__all__ = ["CommandRunner", "CommandResult"]

"""Shared Rich Console instances for mcp-setup output.

Rich Console styles output in terminals and emits plain text when piped.
"""

from __future__ import annotations

from rich.console import Console

__all__ = ["console", "err_console"]

console = Console(highlight=False)
err_console = Console(stderr=True, highlight=False)

"""CLI utilities for mcp-setup.

This module provides CLI-specific utilities including exit codes, the async
command bridge, output formatting and the API key prompt.
"""

from __future__ import annotations

from mcp_setup.cli.context import ExitCode, async_command
from mcp_setup.cli.prompts import prompt_api_key, resolve_api_key

__all__ = [
    "ExitCode",
    "async_command",
    "prompt_api_key",
    "resolve_api_key",
]

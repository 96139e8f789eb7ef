"""mcp-setup: bootstrap MCP servers and their companion repositories for a project."""

from __future__ import annotations

__version__ = "0.1.0"

__all__ = ["__version__"]

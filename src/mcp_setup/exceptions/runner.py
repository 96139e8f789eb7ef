from __future__ import annotations

from pathlib import Path

from mcp_setup.exceptions.base import SetupError


class RunnerError(SetupError):
    """Base exception for subprocess runner failures."""

    pass


class WorkingDirectoryError(RunnerError):
    """Working directory does not exist or is not accessible.

    Attributes:
        message: Human-readable error message.
        path: The path that was not found.
    """

    def __init__(self, message: str, path: Path | str | None = None) -> None:
        self.path = path
        super().__init__(message)

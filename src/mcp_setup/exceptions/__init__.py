"""mcp-setup exception hierarchy.

All exceptions can be imported from this package:
    from mcp_setup.exceptions import GitError, PrerequisiteError, RenderError
"""

from __future__ import annotations

# Base exception
from mcp_setup.exceptions.base import SetupError

# Configuration exceptions
from mcp_setup.exceptions.config import ConfigError

# Git-related exceptions
from mcp_setup.exceptions.git import GitError, GitNotFoundError, NotARepositoryError

# Runner-related exceptions
from mcp_setup.exceptions.runner import RunnerError, WorkingDirectoryError

# Setup workflow exceptions
from mcp_setup.exceptions.setup import (
    BrowserInstallError,
    ConfigDirectoryError,
    ConfigWriteError,
    DependencyInstallError,
    PrerequisiteError,
    RenderError,
    RepositoryCloneError,
    TemplateReadError,
    TemplateValidationError,
)

__all__ = [
    # Base
    "SetupError",
    # Config
    "ConfigError",
    # Git
    "GitError",
    "GitNotFoundError",
    "NotARepositoryError",
    # Runner
    "RunnerError",
    "WorkingDirectoryError",
    # Setup
    "BrowserInstallError",
    "ConfigDirectoryError",
    "ConfigWriteError",
    "DependencyInstallError",
    "PrerequisiteError",
    "RenderError",
    "RepositoryCloneError",
    "TemplateReadError",
    "TemplateValidationError",
]

from __future__ import annotations

from pathlib import Path

from mcp_setup.exceptions.base import SetupError


class GitError(SetupError):
    """Exception for git operation failures.

    Raised when a git command fails, such as ``submodule add``, ``clone`` or
    ``submodule update``.

    Attributes:
        message: Human-readable error message.
        operation: Git operation that failed (e.g., "clone", "submodule_add").
        stderr: Captured standard error from git, when available.
    """

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        stderr: str | None = None,
    ) -> None:
        self.operation = operation
        self.stderr = stderr
        super().__init__(message)


class GitNotFoundError(GitError):
    """Raised when the git executable is not installed or not on PATH."""

    def __init__(self, message: str = "Git CLI not found") -> None:
        super().__init__(message, operation="git_check")


class NotARepositoryError(GitError):
    """Raised when operating outside a git working tree.

    Attributes:
        message: Human-readable error message.
        path: Directory that is not a repository.
    """

    def __init__(
        self,
        message: str,
        path: Path | str | None = None,
    ) -> None:
        self.path = path
        super().__init__(message, operation="repo_check")

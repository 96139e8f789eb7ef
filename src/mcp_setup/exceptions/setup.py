"""Setup workflow exception hierarchy.

This module provides exception classes for the stages of the setup workflow:
the prerequisite gate, repository acquisition, dependency builds, the browser
install, and configuration rendering.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from mcp_setup.exceptions.base import SetupError

__all__ = [
    "PrerequisiteError",
    "RepositoryCloneError",
    "DependencyInstallError",
    "BrowserInstallError",
    "RenderError",
    "ConfigDirectoryError",
    "TemplateReadError",
    "TemplateValidationError",
    "ConfigWriteError",
]


class PrerequisiteError(SetupError):
    """One or more required tools are missing from PATH.

    Raised once by the prerequisite gate after every tool has been probed,
    so the message lists all missing tools rather than just the first.

    Attributes:
        missing: Names of the tools that could not be found, in check order.
        install_hints: Mapping of tool name to installation URL.

    Example:
        ```python
        if report.missing:
            raise PrerequisiteError(report.missing, install_hints=INSTALL_URLS)
        ```
    """

    def __init__(
        self,
        missing: Sequence[str],
        *,
        install_hints: dict[str, str] | None = None,
    ) -> None:
        """Initialize the PrerequisiteError.

        Args:
            missing: Names of the missing tools.
            install_hints: Optional installation URL per tool.
        """
        self.missing = tuple(missing)
        self.install_hints = dict(install_hints or {})
        super().__init__(
            "The following prerequisites are missing: " + ", ".join(self.missing)
        )


class RepositoryCloneError(SetupError):
    """A direct clone failed and no further fallback exists.

    Attributes:
        repository: Logical name of the repository descriptor.
        remote: Remote address that was being cloned.
        target: Directory the clone was targeting.
        stderr: Captured git output, when available.
    """

    def __init__(
        self,
        repository: str,
        remote: str,
        target: Path,
        *,
        stderr: str | None = None,
    ) -> None:
        self.repository = repository
        self.remote = remote
        self.target = target
        self.stderr = stderr
        super().__init__(f"Failed to clone {repository} from {remote} into {target}")


class DependencyInstallError(SetupError):
    """Installing or building a repository's dependencies failed.

    Attributes:
        repository: Directory name of the repository being built.
        command: The command that failed.
        stderr: Captured standard error.
        stdout: Captured standard output.
    """

    def __init__(
        self,
        repository: str,
        command: Sequence[str],
        *,
        stderr: str | None = None,
        stdout: str | None = None,
    ) -> None:
        self.repository = repository
        self.command = tuple(command)
        self.stderr = stderr
        self.stdout = stdout
        super().__init__(
            f"Command '{' '.join(self.command)}' failed for {repository}"
        )


class BrowserInstallError(SetupError):
    """The Playwright Chromium install failed.

    Attributes:
        stderr: Captured standard error from the installer, when available.
    """

    def __init__(self, message: str, *, stderr: str | None = None) -> None:
        self.stderr = stderr
        super().__init__(message)


class RenderError(SetupError):
    """Base exception for configuration rendering failures.

    Each rendering step raises its own subclass, so a caller can tell a
    missing template from invalid output or a permission problem.

    Attributes:
        path: The file or directory the failing step operated on.
    """

    def __init__(self, message: str, *, path: Path | None = None) -> None:
        self.path = path
        super().__init__(message)


class ConfigDirectoryError(RenderError):
    """The target directory for the rendered configuration could not be created."""


class TemplateReadError(RenderError):
    """The bundled configuration template could not be read."""


class TemplateValidationError(RenderError):
    """The substituted template text is not valid JSON.

    Attributes:
        detail: The underlying parser message.
    """

    def __init__(self, message: str, *, path: Path | None = None, detail: str) -> None:
        self.detail = detail
        super().__init__(message, path=path)


class ConfigWriteError(RenderError):
    """Writing the rendered configuration failed.

    Attributes:
        permission_denied: True when the failure was a permission error.
    """

    def __init__(
        self,
        message: str,
        *,
        path: Path | None = None,
        permission_denied: bool = False,
    ) -> None:
        self.permission_denied = permission_denied
        super().__init__(message, path=path)

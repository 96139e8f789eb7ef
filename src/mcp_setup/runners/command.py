"""Command runner for async subprocess execution.

This module provides the CommandRunner class used for every delegated tool
invocation (prerequisite probes, package managers, the Playwright installer).
"""

from __future__ import annotations

import asyncio
import os
import time
from pathlib import Path
from typing import TYPE_CHECKING

from mcp_setup.exceptions import WorkingDirectoryError
from mcp_setup.logging import get_logger
from mcp_setup.runners.models import CommandResult

if TYPE_CHECKING:
    from collections.abc import Sequence

__all__ = ["CommandRunner"]

logger = get_logger(__name__)


class CommandRunner:
    """Execute commands with working directory and environment control.

    Setup delegates long-running work (dependency installs, browser
    downloads) to external tools and waits for them without a timeout: a
    hung tool hangs the run, which mirrors running the same command by hand.

    Attributes:
        cwd: Working directory for command execution.
        env: Additional environment variables to merge with parent env.

    Example:
        ```python
        runner = CommandRunner(cwd=Path("/project"))
        result = await runner.run(["npm", "install"])
        if not result.success:
            print(result.stderr)
        ```
    """

    def __init__(
        self,
        cwd: Path | None = None,
        env: dict[str, str] | None = None,
    ) -> None:
        self._cwd = cwd
        self._extra_env = env or {}

    def _validate_cwd(self, cwd: Path | None) -> None:
        """Validate working directory exists.

        Raises:
            WorkingDirectoryError: If directory does not exist.
        """
        if cwd is not None and not cwd.is_dir():
            raise WorkingDirectoryError(
                f"Working directory does not exist: {cwd}",
                path=cwd,
            )

    def _build_env(self, extra_env: dict[str, str] | None = None) -> dict[str, str]:
        env = os.environ.copy()
        env.update(self._extra_env)
        if extra_env:
            env.update(extra_env)
        return env

    async def run(
        self,
        command: Sequence[str],
        *,
        cwd: Path | None = None,
        env: dict[str, str] | None = None,
    ) -> CommandResult:
        """Execute a command and return the result.

        A non-zero exit status is reported through the returned CommandResult,
        never raised; callers decide whether a failure is fatal.

        Args:
            command: Command and arguments as a sequence (no shell expansion).
            cwd: Override working directory for this command.
            env: Additional environment variables for this command.

        Returns:
            CommandResult with returncode, stdout, stderr and duration_ms.

        Raises:
            WorkingDirectoryError: If working directory does not exist.
        """
        effective_cwd = cwd if cwd is not None else self._cwd
        self._validate_cwd(effective_cwd)

        logger.debug("command_started", command=list(command), cwd=str(effective_cwd))

        start_time = time.monotonic()
        stdout_str = ""
        stderr_str = ""

        try:
            process = await asyncio.create_subprocess_exec(
                *command,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                cwd=effective_cwd,
                env=self._build_env(env),
            )
            stdout_bytes, stderr_bytes = await process.communicate()
            returncode = process.returncode or 0
            stdout_str = stdout_bytes.decode("utf-8", errors="replace")
            stderr_str = stderr_bytes.decode("utf-8", errors="replace")
        except FileNotFoundError:
            returncode = 127
            stderr_str = f"Command not found: {command[0]}"
        except PermissionError:
            returncode = 126
            stderr_str = f"Permission denied: {command[0]}"

        duration_ms = int((time.monotonic() - start_time) * 1000)
        logger.debug(
            "command_finished",
            command=list(command),
            returncode=returncode,
            duration_ms=duration_ms,
        )

        return CommandResult(
            returncode=returncode,
            stdout=stdout_str,
            stderr=stderr_str,
            duration_ms=duration_ms,
        )

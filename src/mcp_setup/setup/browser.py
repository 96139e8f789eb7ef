"""Playwright Chromium install and executable discovery.

The browser is downloaded into a project-local cache (``.browsers`` by
default) so the rendered configuration can point at a stable path.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from mcp_setup.constants import (
    BROWSERS_DIR,
    CHROME_EXTENSION_PATH_COMMAND,
    CHROME_PATH_DETECTION_FAILED,
    PLAYWRIGHT_INSTALL_COMMAND,
)
from mcp_setup.exceptions import BrowserInstallError
from mcp_setup.logging import get_logger
from mcp_setup.runners import CommandRunner

__all__ = [
    "EXECUTABLE_CANDIDATES",
    "find_chromium_executable",
    "get_chrome_extension_path",
    "install_chromium",
]

logger = get_logger(__name__)

#: Executable locations relative to a ``chromium-*`` directory, per platform
EXECUTABLE_CANDIDATES: dict[str, tuple[tuple[str, ...], ...]] = {
    "darwin": (
        ("chrome-mac", "Chromium.app", "Contents", "MacOS", "Chromium"),
        ("chrome-mac", "chrome"),
    ),
    "linux": (("chrome-linux", "chrome"),),
    "win32": (("chrome-win", "chrome.exe"),),
}


def find_chromium_executable(
    browsers_path: Path,
    platform: str | None = None,
) -> str:
    """Locate the Chromium executable inside a Playwright browser cache.

    Args:
        browsers_path: The ``PLAYWRIGHT_BROWSERS_PATH`` directory.
        platform: Platform identifier as in ``sys.platform``.

    Returns:
        Absolute path of the executable, or the detection-failed sentinel
        when it cannot be found.

    Raises:
        BrowserInstallError: On a platform without a known layout.
    """
    effective_platform = platform if platform is not None else sys.platform
    if effective_platform.startswith("linux"):
        effective_platform = "linux"
    candidates = EXECUTABLE_CANDIDATES.get(effective_platform)
    if candidates is None:
        raise BrowserInstallError(f"Unsupported platform: {effective_platform}")

    chromium_dirs = (
        sorted(
            entry
            for entry in browsers_path.iterdir()
            if entry.is_dir() and entry.name.startswith("chromium")
        )
        if browsers_path.is_dir()
        else []
    )
    if not chromium_dirs:
        logger.warning(
            "chromium_directory_not_found",
            path=str(browsers_path),
            message="Update the browser path in .roo/mcp.json manually",
        )
        return CHROME_PATH_DETECTION_FAILED

    base = chromium_dirs[0]
    for parts in candidates:
        executable = base.joinpath(*parts)
        if executable.exists():
            resolved = os.path.abspath(executable)
            logger.info("chromium_executable_found", path=resolved)
            return resolved

    logger.warning(
        "chromium_executable_not_found",
        looked_in=os.path.abspath(base),
        message="Update the browser path in .roo/mcp.json manually",
    )
    return CHROME_PATH_DETECTION_FAILED


async def install_chromium(
    project_dir: Path,
    *,
    browsers_dir: str = BROWSERS_DIR,
    runner: CommandRunner | None = None,
    platform: str | None = None,
) -> str:
    """Install Chromium through Playwright and return its executable path.

    Args:
        project_dir: Project root; the install runs there.
        browsers_dir: Browser cache directory relative to the project.
        runner: Command runner. Defaults to a new CommandRunner.
        platform: Platform override for executable discovery.

    Returns:
        Absolute executable path, or the detection-failed sentinel.

    Raises:
        BrowserInstallError: If the installer fails or the platform is
            unsupported.
    """
    effective_runner = runner if runner is not None else CommandRunner()
    logger.info(
        "chromium_install_started",
        browsers_path=str(project_dir / browsers_dir),
    )
    result = await effective_runner.run(
        PLAYWRIGHT_INSTALL_COMMAND,
        cwd=project_dir,
        env={"PLAYWRIGHT_BROWSERS_PATH": browsers_dir},
    )
    if not result.success:
        logger.error("chromium_install_failed", returncode=result.returncode)
        raise BrowserInstallError(
            "Playwright Chromium install failed",
            stderr=result.stderr or None,
        )
    logger.info("chromium_installed")

    return find_chromium_executable(project_dir / browsers_dir, platform)


async def get_chrome_extension_path(
    *,
    runner: CommandRunner | None = None,
) -> str | None:
    """Ask the browser-tools package where its Chrome extension lives.

    Returns:
        The extension directory, or None when the lookup fails.
    """
    effective_runner = runner if runner is not None else CommandRunner()
    result = await effective_runner.run(CHROME_EXTENSION_PATH_COMMAND)
    extension_dir = result.stdout.strip()
    if not result.success or not extension_dir:
        logger.warning(
            "chrome_extension_path_failed",
            returncode=result.returncode,
            stderr=result.stderr.strip(),
        )
        return None
    return extension_dir

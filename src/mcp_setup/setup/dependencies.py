"""Install and build the dependencies of acquired repositories.

The package manager is chosen from marker files in each repository:

- bun.lockb or bun.lock: bun install, then bun run build
- package.json: npm install, then npm run build when a build script exists
- pyproject.toml: uv sync

Every command runs with the repository as its working directory.
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from pathlib import Path

from mcp_setup.exceptions import DependencyInstallError
from mcp_setup.logging import get_logger
from mcp_setup.runners import CommandRunner

__all__ = [
    "build_plan",
    "install_dependencies",
    "install_repository",
]

logger = get_logger(__name__)

BUN_LOCKFILES: tuple[str, ...] = ("bun.lockb", "bun.lock")


def _declares_build_script(package_json: Path) -> bool:
    try:
        data = json.loads(package_json.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        logger.warning("package_json_unreadable", path=str(package_json), error=str(e))
        return False
    scripts = data.get("scripts") if isinstance(data, dict) else None
    return isinstance(scripts, dict) and "build" in scripts


def build_plan(repo_dir: Path) -> list[list[str]]:
    """Commands needed to install and build ``repo_dir``.

    Returns:
        Commands in execution order; empty when no marker file is found.
    """
    if any((repo_dir / lockfile).exists() for lockfile in BUN_LOCKFILES):
        return [["bun", "install"], ["bun", "run", "build"]]

    package_json = repo_dir / "package.json"
    if package_json.exists():
        plan = [["npm", "install"]]
        if _declares_build_script(package_json):
            plan.append(["npm", "run", "build"])
        return plan

    if (repo_dir / "pyproject.toml").exists():
        return [["uv", "sync"]]

    return []


async def install_repository(
    repo_dir: Path,
    *,
    runner: CommandRunner | None = None,
) -> bool:
    """Install and build one repository.

    Args:
        repo_dir: Repository directory.
        runner: Command runner. Defaults to a new CommandRunner.

    Returns:
        True when commands ran, False when the directory was skipped.

    Raises:
        DependencyInstallError: If any command exits non-zero.
    """
    plan = build_plan(repo_dir)
    if not plan:
        logger.warning(
            "dependencies_skipped",
            repository=repo_dir.name,
            message="No package.json, bun lockfile or pyproject.toml found",
        )
        return False

    effective_runner = runner if runner is not None else CommandRunner()
    for command in plan:
        logger.info(
            "dependency_command_started", repository=repo_dir.name, command=command
        )
        result = await effective_runner.run(command, cwd=repo_dir)
        if not result.success:
            logger.error(
                "dependency_command_failed",
                repository=repo_dir.name,
                command=command,
                returncode=result.returncode,
            )
            raise DependencyInstallError(
                repo_dir.name,
                command,
                stderr=result.stderr or None,
                stdout=result.stdout or None,
            )
    logger.info("dependencies_installed", repository=repo_dir.name)
    return True


async def install_dependencies(
    repo_dirs: Sequence[Path],
    *,
    runner: CommandRunner | None = None,
) -> tuple[Path, ...]:
    """Install and build every repository in order.

    Stops at the first failure.

    Returns:
        The directories that were built.

    Raises:
        DependencyInstallError: If any repository fails to build.
    """
    built: list[Path] = []
    for repo_dir in repo_dirs:
        if await install_repository(repo_dir, runner=runner):
            built.append(repo_dir)
    return tuple(built)

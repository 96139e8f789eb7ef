"""GitPython-based repository operations for mcp-setup.

This module wraps the handful of git operations repository acquisition needs:
working-tree introspection, submodule registration and update, and plain
clones. Synchronous GitPython calls are exposed asynchronously through
GitClient via ``asyncio.to_thread``.

Example:
    ```python
    from mcp_setup.git import GitClient

    git = GitClient()
    if await git.is_inside_work_tree(project_dir):
        await git.add_submodule(project_dir, remote, "submodules/mcp-browser-use")
    else:
        await git.clone(remote, project_dir / "submodules" / "mcp-browser-use")
    ```
"""

from __future__ import annotations

import asyncio
from pathlib import Path

from git import GitCommandError, InvalidGitRepositoryError, NoSuchPathError, Repo
from git.cmd import Git
from git.exc import GitCommandNotFound
from tenacity import (
    retry,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from mcp_setup.exceptions import GitError, GitNotFoundError, NotARepositoryError
from mcp_setup.logging import get_logger

logger = get_logger(__name__)

__all__ = [
    "GitClient",
    "GitRepository",
    "clone_repository",
    "is_inside_work_tree",
    "is_work_tree_root",
]

# =============================================================================
# Constants
# =============================================================================

#: Maximum attempts for network operations
MAX_NETWORK_RETRIES: int = 3

#: stderr fragments that mark a transient network failure
NETWORK_ERROR_PATTERNS: tuple[str, ...] = (
    "could not resolve host",
    "connection refused",
    "connection timed out",
    "network unreachable",
    "temporary failure",
    "early eof",
    "the remote end hung up unexpectedly",
)


# =============================================================================
# Helper Functions
# =============================================================================


def _convert_git_error(exc: GitCommandError, operation: str) -> GitError:
    """Convert a GitPython exception to a GitError.

    Args:
        exc: GitPython exception.
        operation: Name of the git operation that failed.

    Returns:
        GitError carrying the captured stderr.
    """
    stderr = str(exc.stderr or exc.stdout or "").strip()
    return GitError(str(exc), operation=operation, stderr=stderr or None)


def _is_network_error(exc: BaseException) -> bool:
    """Check if exception is a network-related error that should be retried."""
    if not isinstance(exc, GitCommandError):
        return False
    stderr = str(exc.stderr or "").lower()
    return any(pattern in stderr for pattern in NETWORK_ERROR_PATTERNS)


network_retry = retry(
    retry=retry_if_exception(_is_network_error),
    stop=stop_after_attempt(MAX_NETWORK_RETRIES),
    wait=wait_exponential(multiplier=1, min=1, max=10),
    reraise=True,
)


# =============================================================================
# Working tree introspection and clones
# =============================================================================


def is_inside_work_tree(path: Path) -> bool:
    """Report whether ``path`` lies inside a git working tree.

    Runs ``git rev-parse --is-inside-work-tree`` in ``path``.

    Args:
        path: Directory to inspect.

    Returns:
        True inside a working tree, False otherwise (including inside a
        ``.git`` directory or a bare repository).

    Raises:
        GitNotFoundError: If git is not installed.
    """
    try:
        output = Git(str(path)).rev_parse("--is-inside-work-tree")
    except GitCommandNotFound as e:
        raise GitNotFoundError("Git CLI not found. Please install git.") from e
    except GitCommandError:
        return False
    return str(output).strip() == "true"


def is_work_tree_root(path: Path) -> bool:
    """Report whether ``path`` is the top level of a git working tree.

    Compares ``git rev-parse --show-toplevel`` with ``path``. A directory
    nested inside another project's working tree is not a root, so
    submodules cannot be registered relative to it.

    Raises:
        GitNotFoundError: If git is not installed.
    """
    try:
        output = Git(str(path)).rev_parse("--show-toplevel")
    except GitCommandNotFound as e:
        raise GitNotFoundError("Git CLI not found. Please install git.") from e
    except GitCommandError:
        return False
    toplevel = str(output).strip()
    if not toplevel:
        return False
    return Path(toplevel).resolve() == Path(path).resolve()


@network_retry
def _clone_from(remote: str, target: Path) -> None:
    Repo.clone_from(remote, str(target))


def clone_repository(remote: str, target: Path) -> None:
    """Clone ``remote`` into ``target``.

    Transient network failures are retried with exponential backoff.

    Raises:
        GitNotFoundError: If git is not installed.
        GitError: If the clone fails.
    """
    try:
        _clone_from(remote, target)
    except GitCommandNotFound as e:
        raise GitNotFoundError("Git CLI not found. Please install git.") from e
    except GitCommandError as e:
        raise _convert_git_error(e, "clone") from e
    logger.debug("clone_completed", remote=remote, target=str(target))


# =============================================================================
# Main Class: GitRepository
# =============================================================================


class GitRepository:
    """Submodule operations on an existing working tree.

    Example:
        ```python
        repo = GitRepository("/path/to/project")
        repo.submodule_add("https://github.com/org/tool.git", "submodules/tool")
        repo.submodule_update()
        ```
    """

    def __init__(self, path: Path | str | None = None) -> None:
        """Initialize GitRepository.

        Args:
            path: Path to the working tree. Defaults to current directory.

        Raises:
            GitNotFoundError: If git is not installed.
            NotARepositoryError: If path is not a git repository.
        """
        resolved_path = Path.cwd() if path is None else Path(path)

        try:
            self._repo = Repo(resolved_path)
        except GitCommandNotFound as e:
            raise GitNotFoundError("Git CLI not found. Please install git.") from e
        except (InvalidGitRepositoryError, NoSuchPathError) as e:
            raise NotARepositoryError(
                f"Not a git repository: {resolved_path}",
                path=resolved_path,
            ) from e

    @network_retry
    def _submodule_add(self, remote: str, path: str) -> None:
        self._repo.git.submodule("add", remote, path)

    def submodule_add(self, remote: str, path: str) -> None:
        """Register ``remote`` as a submodule at ``path``.

        Args:
            remote: Address to fetch the submodule from.
            path: Target path relative to the working tree root.

        Raises:
            GitError: If git refuses or the fetch fails.
        """
        try:
            self._submodule_add(remote, path)
        except GitCommandError as e:
            raise _convert_git_error(e, "submodule_add") from e
        logger.debug("submodule_registered", remote=remote, path=path)

    def submodule_update(self, *, init: bool = True, recursive: bool = True) -> None:
        """Run ``git submodule update`` for every registered submodule.

        Raises:
            GitError: If the update fails.
        """
        args = ["update"]
        if init:
            args.append("--init")
        if recursive:
            args.append("--recursive")
        try:
            self._repo.git.submodule(*args)
        except GitCommandError as e:
            raise _convert_git_error(e, "submodule_update") from e


# =============================================================================
# Async facade
# =============================================================================


class GitClient:
    """Async facade over the git operations used by repository acquisition.

    Every call runs GitPython in a worker thread so the event loop only
    suspends while git is running. The client holds no state; the project
    directory is passed explicitly to each call.
    """

    async def is_inside_work_tree(self, path: Path) -> bool:
        """Async version of :func:`is_inside_work_tree`."""
        return await asyncio.to_thread(is_inside_work_tree, path)

    async def is_work_tree_root(self, path: Path) -> bool:
        """Async version of :func:`is_work_tree_root`."""
        return await asyncio.to_thread(is_work_tree_root, path)

    async def add_submodule(self, project_dir: Path, remote: str, path: str) -> None:
        """Register ``remote`` as a submodule of ``project_dir`` at ``path``."""

        def _add() -> None:
            GitRepository(project_dir).submodule_add(remote, path)

        await asyncio.to_thread(_add)

    async def update_submodules(self, project_dir: Path) -> None:
        """Initialize and update all registered submodules recursively."""

        def _update() -> None:
            GitRepository(project_dir).submodule_update()

        await asyncio.to_thread(_update)

    async def clone(self, remote: str, target: Path) -> None:
        """Async version of :func:`clone_repository`."""
        await asyncio.to_thread(clone_repository, remote, target)

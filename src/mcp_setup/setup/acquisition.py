"""Repository acquisition: submodules when possible, direct clones otherwise.

The strategy selector tries to register every repository as a git submodule
of the project. When the project is not the top level of a working tree
(including a package nested inside a larger repository), when the manifest
cannot be prepared, when any descriptor needed a fallback clone or failed,
or when the final submodule update fails, the direct clone loop runs as the
second-chance convergence step. Clone failures there are fatal.

Both loops are idempotent: a repository whose target directory already
exists is skipped without touching the network.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Protocol

from mcp_setup.constants import SUBMODULES_DIR
from mcp_setup.exceptions import GitError, RepositoryCloneError, SetupError
from mcp_setup.logging import get_logger
from mcp_setup.setup.manifest import ensure_manifest, read_manifest
from mcp_setup.setup.models import (
    AcquisitionMode,
    AcquisitionOutcome,
    AcquisitionReport,
    CloneLoopResult,
    DescriptorResult,
    RepositoryDescriptor,
    SubmoduleLoopResult,
)

__all__ = [
    "GitOperations",
    "acquire_repositories",
    "add_submodules",
    "clone_repositories",
]

logger = get_logger(__name__)

#: Appended to every failed acquisition so the user knows where to look
CLONE_FAILURE_HINT = "Check your network connection, SSH keys and git credentials."


class GitOperations(Protocol):
    """Git operations repository acquisition depends on.

    Satisfied by :class:`mcp_setup.git.GitClient`; tests substitute fakes.
    """

    async def is_inside_work_tree(self, path: Path) -> bool: ...

    async def is_work_tree_root(self, path: Path) -> bool: ...

    async def add_submodule(
        self, project_dir: Path, remote: str, path: str
    ) -> None: ...

    async def update_submodules(self, project_dir: Path) -> None: ...

    async def clone(self, remote: str, target: Path) -> None: ...


def _describe(exc: BaseException) -> str:
    if isinstance(exc, GitError) and exc.stderr:
        return f"{exc.message}: {exc.stderr}"
    if isinstance(exc, SetupError):
        return exc.message
    return str(exc)


# =============================================================================
# Submodule Acquisition Loop
# =============================================================================


async def _acquire_one_submodule(
    project_dir: Path,
    descriptor: RepositoryDescriptor,
    git: GitOperations,
) -> DescriptorResult:
    target = project_dir / descriptor.submodule_path
    submodule_path = descriptor.submodule_path

    # Re-read each time; git rewrites .gitmodules on every successful add
    manifest = read_manifest(project_dir)

    if target.exists():
        if manifest.is_registered(submodule_path):
            logger.info("submodule_already_registered", path=submodule_path)
            return DescriptorResult(
                descriptor=descriptor,
                outcome=AcquisitionOutcome.ALREADY_REGISTERED,
                target_path=target,
            )
        logger.warning(
            "submodule_path_unregistered",
            path=submodule_path,
            message="Directory exists but is not listed in .gitmodules; skipping",
        )
        return DescriptorResult(
            descriptor=descriptor,
            outcome=AcquisitionOutcome.PRESENT_BUT_UNREGISTERED,
            target_path=target,
        )

    logger.info("submodule_adding", remote=descriptor.remote, path=submodule_path)
    try:
        await git.add_submodule(project_dir, descriptor.remote, submodule_path)
    except GitError as e:
        add_error = _describe(e)
        logger.warning(
            "submodule_add_failed",
            path=submodule_path,
            error=add_error,
            message="Falling back to a direct clone into the same path",
        )
    else:
        logger.info("submodule_added", path=submodule_path)
        return DescriptorResult(
            descriptor=descriptor,
            outcome=AcquisitionOutcome.REGISTERED,
            target_path=target,
        )

    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        await git.clone(descriptor.remote, target)
    except (GitError, OSError) as e:
        clone_error = _describe(e)
        logger.error(
            "submodule_fallback_clone_failed",
            path=submodule_path,
            error=clone_error,
            hint=CLONE_FAILURE_HINT,
        )
        return DescriptorResult(
            descriptor=descriptor,
            outcome=AcquisitionOutcome.FAILED,
            target_path=target,
            error=clone_error,
        )

    logger.warning(
        "submodule_fallback_clone_succeeded",
        path=submodule_path,
        message="Cloned without registering as a submodule",
    )
    return DescriptorResult(
        descriptor=descriptor,
        outcome=AcquisitionOutcome.REGISTERED_VIA_FALLBACK_CLONE,
        target_path=target,
        error=add_error,
    )


async def add_submodules(
    project_dir: Path,
    descriptors: Sequence[RepositoryDescriptor],
    *,
    git: GitOperations,
) -> SubmoduleLoopResult:
    """Register each descriptor as a submodule, with a per-descriptor clone fallback.

    A failure on one descriptor never stops the loop; it is recorded and
    reflected in :attr:`SubmoduleLoopResult.all_succeeded`.

    Args:
        project_dir: Root of the project working tree.
        descriptors: Repositories to acquire, in order.
        git: Git operations.

    Returns:
        SubmoduleLoopResult with one result per descriptor.
    """
    results = [
        await _acquire_one_submodule(project_dir, descriptor, git)
        for descriptor in descriptors
    ]
    loop_result = SubmoduleLoopResult(results=tuple(results))
    logger.debug(
        "submodule_loop_completed",
        all_succeeded=loop_result.all_succeeded,
        outcomes=[r.outcome.value for r in results],
    )
    return loop_result


# =============================================================================
# Direct Clone Loop
# =============================================================================


async def clone_repositories(
    project_dir: Path,
    descriptors: Sequence[RepositoryDescriptor],
    *,
    git: GitOperations,
    submodules_dir: str = SUBMODULES_DIR,
) -> CloneLoopResult:
    """Clone each descriptor into ``<submodules_dir>/<name>`` unless present.

    Existing target paths are skipped without verifying their contents.

    Args:
        project_dir: Project root.
        descriptors: Repositories to clone, in order.
        git: Git operations.
        submodules_dir: Directory under the project receiving the clones.

    Returns:
        CloneLoopResult listing cloned and skipped target paths.

    Raises:
        RepositoryCloneError: On the first clone that fails.
    """
    root = project_dir / submodules_dir
    try:
        root.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise SetupError(f"Cannot create {root}: {e}") from e

    cloned: list[Path] = []
    skipped: list[Path] = []
    for descriptor in descriptors:
        target = descriptor.clone_target(project_dir, submodules_dir)
        if target.exists():
            logger.info(
                "clone_skipped_existing", name=descriptor.name, path=str(target)
            )
            skipped.append(target)
            continue

        logger.info(
            "cloning_repository", name=descriptor.name, remote=descriptor.remote
        )
        try:
            await git.clone(descriptor.remote, target)
        except GitError as e:
            logger.error(
                "clone_failed",
                name=descriptor.name,
                error=_describe(e),
                hint=CLONE_FAILURE_HINT,
            )
            raise RepositoryCloneError(
                descriptor.name,
                descriptor.remote,
                target,
                stderr=e.stderr,
            ) from e
        cloned.append(target)

    return CloneLoopResult(cloned=tuple(cloned), skipped=tuple(skipped))


# =============================================================================
# Acquisition Strategy Selector
# =============================================================================


async def _try_submodules(
    project_dir: Path,
    descriptors: Sequence[RepositoryDescriptor],
    git: GitOperations,
) -> tuple[SubmoduleLoopResult | None, str | None]:
    """Attempt submodule acquisition.

    Returns:
        ``(loop_result, None)`` when submodules converged, otherwise the loop
        result (None if the loop never ran) and the reason a direct clone
        pass is needed.
    """
    try:
        inside = await git.is_inside_work_tree(project_dir)
    except GitError as e:
        logger.warning("work_tree_check_failed", error=_describe(e))
        return None, f"Could not determine whether {project_dir} is a git repository"
    if not inside:
        logger.info(
            "not_a_git_repository",
            path=str(project_dir),
            message="Cloning repositories directly",
        )
        return None, "Project is not inside a git working tree"

    try:
        at_root = await git.is_work_tree_root(project_dir)
    except GitError as e:
        logger.warning("work_tree_root_check_failed", error=_describe(e))
        return None, f"Could not determine the git top level for {project_dir}"
    if not at_root:
        logger.info(
            "nested_in_work_tree",
            path=str(project_dir),
            message="Project is not the repository top level; cloning directly",
        )
        return None, "Project is a subdirectory of a git working tree"

    try:
        ensure_manifest(project_dir)
    except OSError as e:
        logger.warning("gitmodules_create_failed", error=str(e))
        return None, "Could not create .gitmodules"

    loop_result = await add_submodules(project_dir, descriptors, git=git)
    if not loop_result.all_succeeded:
        logger.warning(
            "submodule_loop_incomplete",
            message="Some repositories were not registered as submodules",
        )
        return loop_result, "One or more submodules needed a fallback or failed"

    try:
        await git.update_submodules(project_dir)
    except GitError as e:
        logger.warning("submodule_update_failed", error=_describe(e))
        return loop_result, "git submodule update failed"

    logger.info("submodules_updated")
    return loop_result, None


async def acquire_repositories(
    project_dir: Path,
    descriptors: Sequence[RepositoryDescriptor],
    *,
    git: GitOperations,
    submodules_dir: str = SUBMODULES_DIR,
) -> AcquisitionReport:
    """Acquire every repository, preferring submodules.

    Args:
        project_dir: Project root.
        descriptors: Repositories to acquire, in order.
        git: Git operations.
        submodules_dir: Directory receiving direct clones.

    Returns:
        AcquisitionReport describing which strategies ran.

    Raises:
        RepositoryCloneError: If the direct clone loop fails.
    """
    loop_result, fallback_reason = await _try_submodules(project_dir, descriptors, git)

    if loop_result is None:
        clone_result = await clone_repositories(
            project_dir, descriptors, git=git, submodules_dir=submodules_dir
        )
        return AcquisitionReport(
            mode=AcquisitionMode.DIRECT_CLONE,
            clone_loop=clone_result,
            fallback_reason=fallback_reason,
        )

    if fallback_reason is None:
        return AcquisitionReport(
            mode=AcquisitionMode.SUBMODULE,
            submodule_loop=loop_result,
        )

    logger.warning("falling_back_to_direct_clone", reason=fallback_reason)
    clone_result = await clone_repositories(
        project_dir, descriptors, git=git, submodules_dir=submodules_dir
    )
    return AcquisitionReport(
        mode=AcquisitionMode.SUBMODULE,
        submodule_loop=loop_result,
        clone_loop=clone_result,
        fallback_reason=fallback_reason,
    )

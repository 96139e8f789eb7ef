"""The mcp-setup workflow.

This package provides the setup pipeline: prerequisite gate, repository
acquisition, dependency builds, the Chromium install and configuration
rendering.

Public API:
    - run_setup: Main entry point for the setup workflow
    - acquire_repositories: Submodule-or-clone acquisition of companion repos
    - render_mcp_config: Template substitution and validation

Models are re-exported from mcp_setup.setup.models.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from pathlib import Path

from mcp_setup.config import SetupConfig
from mcp_setup.constants import CHROME_PATH_DETECTION_FAILED, CONFIG_FILENAME
from mcp_setup.exceptions import ConfigDirectoryError
from mcp_setup.git import GitClient
from mcp_setup.logging import bind_context, clear_context, get_logger
from mcp_setup.runners import CommandRunner
from mcp_setup.setup.acquisition import (
    GitOperations,
    acquire_repositories,
    add_submodules,
    clone_repositories,
)
from mcp_setup.setup.browser import get_chrome_extension_path, install_chromium
from mcp_setup.setup.dependencies import install_dependencies
from mcp_setup.setup.gitignore import gitignore_entries, update_gitignore
from mcp_setup.setup.models import (
    AcquisitionMode,
    AcquisitionOutcome,
    AcquisitionReport,
    CloneLoopResult,
    DescriptorResult,
    PlaceholderBindings,
    PrerequisiteCheck,
    PrerequisiteReport,
    RepositoryDescriptor,
    SetupResult,
    SubmoduleLoopResult,
)
from mcp_setup.setup.prereqs import Probe, verify_prerequisites
from mcp_setup.setup.renderer import render_mcp_config
from mcp_setup.setup.repositories import REPOSITORIES, validate_descriptors

__all__ = [
    # Functions
    "run_setup",
    "acquire_repositories",
    "add_submodules",
    "clone_repositories",
    "render_mcp_config",
    "gitignore_entries",
    "update_gitignore",
    "validate_descriptors",
    # Constants
    "REPOSITORIES",
    # Enums
    "AcquisitionMode",
    "AcquisitionOutcome",
    # Dataclasses
    "RepositoryDescriptor",
    "DescriptorResult",
    "SubmoduleLoopResult",
    "CloneLoopResult",
    "AcquisitionReport",
    "PrerequisiteCheck",
    "PrerequisiteReport",
    "PlaceholderBindings",
    "SetupResult",
]

logger = get_logger(__name__)


def _ensure_config_dir(project_dir: Path, config_dir: str) -> Path:
    target = project_dir / config_dir
    try:
        target.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise ConfigDirectoryError(
            f"Cannot create directory {target}: {e}",
            path=target,
        ) from e
    logger.debug("config_directory_ready", path=str(target))
    return target


async def run_setup(
    *,
    get_api_key: Callable[[], str],
    project_dir: Path | None = None,
    config: SetupConfig | None = None,
    descriptors: Sequence[RepositoryDescriptor] = REPOSITORIES,
    git: GitOperations | None = None,
    runner: CommandRunner | None = None,
    probe: Probe | None = None,
) -> SetupResult:
    """Execute the setup workflow.

    Stages, in order:
    1. Verify prerequisites (nothing is touched if any tool is missing)
    2. Ensure the configuration directory exists
    3. Acquire companion repositories
    4. Install and build their dependencies
    5. Add generated paths to .gitignore
    6. Install Chromium and locate its executable
    7. Obtain the API key and render the configuration
    8. Look up the browser-tools Chrome extension directory

    Args:
        get_api_key: Called once, after the browser install, for the key.
        project_dir: Project root. Defaults to cwd.
        config: Settings. Defaults to ``SetupConfig()``.
        descriptors: Repositories to acquire.
        git: Git operations. Defaults to :class:`GitClient`.
        runner: Command runner for delegated tools.
        probe: Prerequisite probe override.

    Returns:
        SetupResult describing the run.

    Raises:
        PrerequisiteError: If required tools are missing.
        ConfigDirectoryError: If the configuration directory cannot be made.
        RepositoryCloneError: If the direct clone loop fails.
        DependencyInstallError: If a repository fails to build.
        BrowserInstallError: If the Chromium install fails.
        RenderError: If the configuration cannot be rendered.
    """
    effective_path = (project_dir if project_dir is not None else Path.cwd()).resolve()
    settings = config if config is not None else SetupConfig()
    effective_runner = runner if runner is not None else CommandRunner()

    bind_context(project_dir=str(effective_path))
    try:
        logger.info("setup_started")

        # Step 1: Prerequisite gate
        prerequisites = await verify_prerequisites(probe=probe)

        # Step 2: Configuration directory
        _ensure_config_dir(effective_path, settings.config_dir)

        # Step 3 & 4: Repositories and their dependencies
        acquisition: AcquisitionReport | None = None
        built: tuple[Path, ...] = ()
        if settings.skip_repositories:
            logger.info("repositories_skipped")
        else:
            acquisition = await acquire_repositories(
                effective_path,
                descriptors,
                git=git if git is not None else GitClient(),
                submodules_dir=settings.submodules_dir,
            )
            if settings.skip_dependencies:
                logger.info("dependencies_skipped_by_config")
            else:
                repo_dirs = acquisition.repository_paths(
                    effective_path, tuple(descriptors), settings.submodules_dir
                )
                built = await install_dependencies(repo_dirs, runner=effective_runner)

        # Step 5: Ignore list
        gitignore_added = update_gitignore(
            effective_path,
            gitignore_entries(
                browsers_dir=settings.browsers_dir, config_dir=settings.config_dir
            ),
        )

        # Step 6: Browser
        if settings.skip_browser:
            logger.info("browser_install_skipped")
            chrome_path = CHROME_PATH_DETECTION_FAILED
        else:
            chrome_path = await install_chromium(
                effective_path,
                browsers_dir=settings.browsers_dir,
                runner=effective_runner,
            )

        # Step 7: Render configuration
        api_key = get_api_key()
        config_path = render_mcp_config(
            effective_path,
            chrome_path,
            api_key,
            target_path=effective_path / settings.config_dir / CONFIG_FILENAME,
        )

        # Step 8: Extension lookup (informational)
        extension_dir = await get_chrome_extension_path(runner=effective_runner)

        logger.info("setup_completed", config_path=str(config_path))
        return SetupResult(
            project_dir=effective_path,
            prerequisites=prerequisites,
            config_path=config_path,
            chrome_path=chrome_path,
            acquisition=acquisition,
            built_repositories=built,
            gitignore_added=gitignore_added,
            extension_dir=extension_dir,
        )
    finally:
        clear_context()

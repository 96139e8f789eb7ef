"""Tests for the run_setup workflow with faked git and subprocesses."""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

from mcp_setup.config import SetupConfig
from mcp_setup.constants import CHROME_PATH_DETECTION_FAILED
from mcp_setup.exceptions import (
    BrowserInstallError,
    DependencyInstallError,
    PrerequisiteError,
)
from mcp_setup.setup import run_setup
from mcp_setup.setup.models import AcquisitionMode, RepositoryDescriptor
from tests.fixtures.git import FakeGit
from tests.fixtures.runners import _make_result

DESCRIPTORS = (
    RepositoryDescriptor(
        remote="https://example.com/mcp-browser-use.git",
        name="mcp-browser-use",
        relative_path="mcp-browser-use",
    ),
    RepositoryDescriptor(
        remote="https://example.com/codebase-mcp.git",
        name="codebase-mcp",
        relative_path="codebase",
    ),
)


@pytest.fixture
def all_present() -> AsyncMock:
    return AsyncMock(return_value=True)


async def test_missing_prerequisite_touches_nothing(
    project_dir: Path,
    fake_git: FakeGit,
    mock_command_runner: MagicMock,
) -> None:
    get_api_key = MagicMock(return_value="AIzaSyTestKey0123456789")
    probe = AsyncMock(side_effect=lambda tool: tool != "bun")

    with pytest.raises(PrerequisiteError) as exc_info:
        await run_setup(
            project_dir=project_dir,
            get_api_key=get_api_key,
            descriptors=DESCRIPTORS,
            git=fake_git,
            runner=mock_command_runner,
            probe=probe,
        )

    assert exc_info.value.missing == ("bun",)
    assert list(project_dir.iterdir()) == []
    assert fake_git.calls == []
    mock_command_runner.run.assert_not_awaited()
    get_api_key.assert_not_called()


async def test_full_run_in_git_project(
    project_dir: Path,
    fake_git: FakeGit,
    mock_command_runner: MagicMock,
    all_present: AsyncMock,
    api_key: str,
) -> None:
    result = await run_setup(
        project_dir=project_dir,
        get_api_key=lambda: api_key,
        descriptors=DESCRIPTORS,
        git=fake_git,
        runner=mock_command_runner,
        probe=all_present,
    )

    assert result.project_dir == project_dir.resolve()
    assert result.prerequisites.success
    assert result.acquisition is not None
    assert result.acquisition.mode == AcquisitionMode.SUBMODULE
    assert result.acquisition.fell_back is False
    assert result.chrome_path == CHROME_PATH_DETECTION_FAILED
    assert result.chrome_detected is False
    assert result.extension_dir is None
    assert ".roo/mcp.json" in result.gitignore_added

    config = json.loads(result.config_path.read_text())
    env = config["mcpServers"]["codebase"]["env"]
    assert env["GOOGLE_API_KEY"] == api_key
    assert result.config_path == project_dir.resolve() / ".roo" / "mcp.json"


async def test_dependencies_built_for_acquired_repositories(
    project_dir: Path,
    fake_git: FakeGit,
    mock_command_runner: MagicMock,
    all_present: AsyncMock,
    api_key: str,
) -> None:
    repo = project_dir / "submodules" / "codebase"
    repo.mkdir(parents=True)
    (repo / "pyproject.toml").write_text("")
    (project_dir / ".gitmodules").write_text(
        '[submodule "submodules/codebase"]\n\tpath = submodules/codebase\n'
    )

    result = await run_setup(
        project_dir=project_dir,
        get_api_key=lambda: api_key,
        descriptors=DESCRIPTORS,
        git=fake_git,
        runner=mock_command_runner,
        probe=all_present,
    )

    assert result.built_repositories == (repo.resolve(),)
    mock_command_runner.run.assert_any_await(["uv", "sync"], cwd=repo.resolve())


async def test_direct_clone_outside_git(
    project_dir: Path,
    fake_git: FakeGit,
    mock_command_runner: MagicMock,
    all_present: AsyncMock,
    api_key: str,
) -> None:
    fake_git.inside_work_tree = False

    result = await run_setup(
        project_dir=project_dir,
        get_api_key=lambda: api_key,
        descriptors=DESCRIPTORS,
        git=fake_git,
        runner=mock_command_runner,
        probe=all_present,
    )

    assert result.acquisition is not None
    assert result.acquisition.mode == AcquisitionMode.DIRECT_CLONE
    assert (project_dir / "submodules" / "codebase-mcp").is_dir()


async def test_skip_toggles(
    project_dir: Path,
    fake_git: FakeGit,
    mock_command_runner: MagicMock,
    all_present: AsyncMock,
    api_key: str,
) -> None:
    config = SetupConfig(skip_repositories=True, skip_browser=True)

    result = await run_setup(
        project_dir=project_dir,
        config=config,
        get_api_key=lambda: api_key,
        descriptors=DESCRIPTORS,
        git=fake_git,
        runner=mock_command_runner,
        probe=all_present,
    )

    assert result.acquisition is None
    assert fake_git.calls == []
    assert result.chrome_path == CHROME_PATH_DETECTION_FAILED
    # Only the extension lookup ran
    assert mock_command_runner.run.await_count == 1
    assert result.config_path.exists()


async def test_custom_layout_is_ignored(
    project_dir: Path,
    fake_git: FakeGit,
    mock_command_runner: MagicMock,
    all_present: AsyncMock,
    api_key: str,
) -> None:
    config = SetupConfig(
        skip_repositories=True,
        skip_browser=True,
        browsers_dir="cache/playwright",
        config_dir=".ide",
    )

    result = await run_setup(
        project_dir=project_dir,
        config=config,
        get_api_key=lambda: api_key,
        descriptors=DESCRIPTORS,
        git=fake_git,
        runner=mock_command_runner,
        probe=all_present,
    )

    lines = (project_dir / ".gitignore").read_text().splitlines()
    assert "cache/playwright/" in lines
    assert ".ide/mcp.json" in lines
    assert ".browsers/" not in lines
    assert ".roo/mcp.json" not in lines
    assert result.config_path == project_dir.resolve() / ".ide" / "mcp.json"


async def test_browser_failure_aborts_before_render(
    project_dir: Path,
    fake_git: FakeGit,
    mock_command_runner: MagicMock,
    all_present: AsyncMock,
) -> None:
    mock_command_runner.run.return_value = _make_result(returncode=1)
    get_api_key = MagicMock(return_value="AIzaSyTestKey0123456789")

    with pytest.raises(BrowserInstallError):
        await run_setup(
            project_dir=project_dir,
            get_api_key=get_api_key,
            descriptors=DESCRIPTORS,
            git=fake_git,
            runner=mock_command_runner,
            probe=all_present,
        )

    get_api_key.assert_not_called()
    assert not (project_dir / ".roo" / "mcp.json").exists()


async def test_dependency_failure_propagates(
    project_dir: Path,
    fake_git: FakeGit,
    mock_command_runner: MagicMock,
    all_present: AsyncMock,
    api_key: str,
) -> None:
    fake_git.inside_work_tree = False
    clone_dir = project_dir / "submodules" / "mcp-browser-use"
    clone_dir.mkdir(parents=True)
    (clone_dir / "bun.lock").write_text("")
    mock_command_runner.run.return_value = _make_result(returncode=1)

    with pytest.raises(DependencyInstallError):
        await run_setup(
            project_dir=project_dir,
            get_api_key=lambda: api_key,
            descriptors=DESCRIPTORS,
            git=fake_git,
            runner=mock_command_runner,
            probe=all_present,
        )

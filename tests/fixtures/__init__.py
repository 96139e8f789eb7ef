"""Shared test fixtures for the mcp-setup test suite.

Available Fixtures
==================

Git fakes (from tests/fixtures/git.py)
--------------------------------------

Classes:
    FakeGit: In-memory stand-in for GitClient. Submodule adds and clones
        create the target directory; individual remotes can be made to fail.

Fixtures:
    fake_git: Provides a fresh FakeGit for each test.

Runner Mocks (from tests/fixtures/runners.py)
---------------------------------------------

Fixtures:
    command_result: Factory for CommandResult instances.
    mock_command_runner: MagicMock with an AsyncMock ``run`` returning a
        successful CommandResult by default.

Example:
    >>> async def test_fallback(fake_git, tmp_path):
    ...     fake_git.fail_submodule_add.add(REMOTE)
    ...     result = await add_submodules(tmp_path, [descriptor], git=fake_git)
    ...     assert not result.all_succeeded
"""

from __future__ import annotations

from tests.fixtures.git import FakeGit, fake_git
from tests.fixtures.runners import command_result, mock_command_runner

__all__ = [
    # Git fakes
    "FakeGit",
    "fake_git",
    # Runner mocks
    "command_result",
    "mock_command_runner",
]

"""Unit tests for cli_error_handler context manager."""

from __future__ import annotations

from pathlib import Path

import click
import pytest

from mcp_setup.cli.common import cli_error_handler
from mcp_setup.cli.context import ExitCode
from mcp_setup.exceptions import (
    ConfigWriteError,
    DependencyInstallError,
    GitError,
    PrerequisiteError,
    RepositoryCloneError,
    SetupError,
    TemplateValidationError,
)


def test_keyboard_interrupt(capfd: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as exc_info, cli_error_handler():
        raise KeyboardInterrupt()

    assert exc_info.value.code == ExitCode.INTERRUPTED
    assert "Interrupted by user" in capfd.readouterr().err


def test_aborted_prompt_counts_as_interrupt() -> None:
    with pytest.raises(SystemExit) as exc_info, cli_error_handler():
        raise click.Abort()

    assert exc_info.value.code == ExitCode.INTERRUPTED


def test_prerequisite_error_lists_install_urls(
    capfd: pytest.CaptureFixture[str],
) -> None:
    error = PrerequisiteError(
        ["uv", "bun"],
        install_hints={
            "uv": "https://github.com/astral-sh/uv",
            "bun": "https://bun.sh/",
        },
    )

    with pytest.raises(SystemExit) as exc_info, cli_error_handler():
        raise error

    assert exc_info.value.code == ExitCode.FAILURE
    err = capfd.readouterr().err
    assert "The following prerequisites are missing: uv, bun" in err
    assert "- bun: https://bun.sh/" in err
    assert "Please install the missing tools" in err


def test_clone_error_shows_stderr_and_suggestion(
    capfd: pytest.CaptureFixture[str],
) -> None:
    error = RepositoryCloneError(
        "codebase-mcp",
        "https://example.com/codebase-mcp.git",
        Path("submodules/codebase-mcp"),
        stderr="fatal: repository not found",
    )

    with pytest.raises(SystemExit), cli_error_handler():
        raise error

    err = capfd.readouterr().err
    assert "Failed to clone codebase-mcp" in err
    assert "Stderr: fatal: repository not found" in err
    assert "SSH keys" in err


def test_git_error_shows_operation(capfd: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit), cli_error_handler():
        raise GitError("submodule update failed", operation="submodule_update")

    assert "Operation: submodule_update" in capfd.readouterr().err


def test_dependency_error_shows_output(capfd: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit), cli_error_handler():
        raise DependencyInstallError(
            "codebase", ["uv", "sync"], stderr="no solution", stdout="Resolving"
        )

    err = capfd.readouterr().err
    assert "Command 'uv sync' failed for codebase" in err
    assert "Stderr: no solution" in err
    assert "Stdout: Resolving" in err


def test_validation_error_shows_parser_detail(
    capfd: pytest.CaptureFixture[str],
) -> None:
    with pytest.raises(SystemExit), cli_error_handler():
        raise TemplateValidationError(
            "The generated content is not valid JSON after replacements",
            detail="Expecting ',' delimiter: line 3 column 5",
        )

    assert "Expecting ',' delimiter" in capfd.readouterr().err


def test_permission_denied_suggestion(capfd: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit), cli_error_handler():
        raise ConfigWriteError("Permission denied", permission_denied=True)

    assert "Check write permissions" in capfd.readouterr().err


def test_generic_setup_error(capfd: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as exc_info, cli_error_handler():
        raise SetupError("Something went wrong")

    assert exc_info.value.code == ExitCode.FAILURE
    assert "Error: Something went wrong" in capfd.readouterr().err


def test_click_exceptions_pass_through() -> None:
    with pytest.raises(click.BadParameter), cli_error_handler():
        raise click.BadParameter("bad key")


def test_unexpected_exception(capfd: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as exc_info, cli_error_handler():
        raise RuntimeError("kaboom")

    assert exc_info.value.code == ExitCode.FAILURE
    assert "Error: kaboom" in capfd.readouterr().err


def test_success_passes_through() -> None:
    with cli_error_handler():
        value = 42

    assert value == 42

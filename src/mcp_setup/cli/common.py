from __future__ import annotations

import contextlib
from collections.abc import Generator

import click

from mcp_setup.cli.context import ExitCode
from mcp_setup.cli.output import format_error
from mcp_setup.exceptions import (
    BrowserInstallError,
    ConfigWriteError,
    DependencyInstallError,
    GitError,
    PrerequisiteError,
    RepositoryCloneError,
    SetupError,
    TemplateValidationError,
)
from mcp_setup.logging import get_logger

#: Shown with every repository acquisition failure
CLONE_SUGGESTION = "Check your network connection, SSH keys and git credentials."


def _output_details(stderr: str | None, stdout: str | None = None) -> list[str]:
    details: list[str] = []
    if stderr and stderr.strip():
        details.append(f"Stderr: {stderr.strip()}")
    if stdout and stdout.strip():
        details.append(f"Stdout: {stdout.strip()}")
    return details


def _describe_error(e: SetupError) -> str:
    """Format a SetupError with whatever context its type carries."""
    if isinstance(e, PrerequisiteError):
        details = [
            f"- {name}: {e.install_hints[name]}"
            if name in e.install_hints
            else f"- {name}"
            for name in e.missing
        ]
        return format_error(
            e.message,
            details=details,
            suggestion="Please install the missing tools and try again.",
        )
    if isinstance(e, RepositoryCloneError):
        return format_error(
            e.message,
            details=_output_details(e.stderr),
            suggestion=CLONE_SUGGESTION,
        )
    if isinstance(e, GitError):
        details = [f"Operation: {e.operation}"] if e.operation else []
        details.extend(_output_details(e.stderr))
        return format_error(e.message, details=details or None)
    if isinstance(e, DependencyInstallError):
        return format_error(
            e.message,
            details=_output_details(e.stderr, e.stdout) or None,
        )
    if isinstance(e, BrowserInstallError):
        return format_error(e.message, details=_output_details(e.stderr) or None)
    if isinstance(e, TemplateValidationError):
        return format_error(e.message, details=[e.detail])
    if isinstance(e, ConfigWriteError) and e.permission_denied:
        return format_error(
            e.message,
            suggestion="Check write permissions for the configuration directory.",
        )
    return format_error(e.message)


@contextlib.contextmanager
def cli_error_handler() -> Generator[None, None, None]:
    """Context manager for CLI error handling.

    Handles common error patterns:
    - KeyboardInterrupt or an aborted prompt: Exit with code 130
    - SetupError: Format error with captured tool output, exit 1
    - Generic exceptions: Log with traceback, exit 1

    Example:
        >>> with cli_error_handler():
        >>>     result = await run_setup(get_api_key=prompt_api_key)
    """
    logger = get_logger(__name__)

    try:
        yield
    except (KeyboardInterrupt, click.Abort):
        click.echo("\n\nInterrupted by user.", err=True)
        raise SystemExit(ExitCode.INTERRUPTED) from None
    except SetupError as e:
        click.echo(_describe_error(e), err=True)
        raise SystemExit(ExitCode.FAILURE) from e
    except click.ClickException:
        raise
    except Exception as e:
        logger.exception("unexpected_error")
        click.echo(f"Error: {e!s}", err=True)
        raise SystemExit(ExitCode.FAILURE) from e

"""CLI context utilities for mcp-setup.

This module provides exit codes and the bridge from Click's synchronous
interface to the async setup workflow.
"""

from __future__ import annotations

import asyncio
import functools
from collections.abc import Callable
from enum import IntEnum
from typing import Any, TypeVar

__all__ = [
    "ExitCode",
    "async_command",
]


class ExitCode(IntEnum):
    """Exit codes for the mcp-setup CLI.

    - 0 for success
    - 1 for any failure, including missing prerequisites
    - 130 for keyboard interrupt (128 + SIGINT=2)
    """

    SUCCESS = 0
    FAILURE = 1
    INTERRUPTED = 130


F = TypeVar("F", bound=Callable[..., Any])


def async_command(f: F) -> F:
    """Decorator to run async Click commands with asyncio.run().

    Args:
        f: Async function to wrap.

    Returns:
        Wrapped synchronous function suitable for Click commands.

    Example:
        >>> @click.command()
        >>> @async_command
        >>> async def cli(project_dir: Path) -> None:
        >>>     await run_setup(project_dir=project_dir, get_api_key=...)
    """

    @functools.wraps(f)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        return asyncio.run(f(*args, **kwargs))

    return wrapper  # type: ignore[return-value]

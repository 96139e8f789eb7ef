"""Prerequisite checks for mcp-setup.

Every required tool is probed on PATH before setup mutates anything. All
tools are checked even after a miss so the user sees the full list at once.
"""

from __future__ import annotations

import sys
from collections.abc import Awaitable, Callable, Sequence

from mcp_setup.constants import INSTALL_URLS, PREREQUISITE_TOOLS
from mcp_setup.exceptions import PrerequisiteError
from mcp_setup.logging import get_logger
from mcp_setup.runners import CommandRunner
from mcp_setup.setup.models import PrerequisiteCheck, PrerequisiteReport

__all__ = [
    "Probe",
    "check_prerequisites",
    "lookup_command",
    "make_path_probe",
    "verify_prerequisites",
]

logger = get_logger(__name__)

#: Async callable answering "is this tool on PATH?"
Probe = Callable[[str], Awaitable[bool]]


def lookup_command(platform: str) -> str:
    """Name of the PATH lookup command for ``platform``.

    Example:
        >>> lookup_command("win32")
        'where'
        >>> lookup_command("linux")
        'which'
    """
    return "where" if platform == "win32" else "which"


def make_path_probe(
    platform: str | None = None,
    runner: CommandRunner | None = None,
) -> Probe:
    """Build a probe that runs ``where``/``which`` for a tool.

    Args:
        platform: Platform identifier as in ``sys.platform``. Defaults to
            the running platform.
        runner: Runner to execute the lookup with.

    Returns:
        Probe reporting True when the lookup exits with status 0.
    """
    lookup = lookup_command(platform if platform is not None else sys.platform)
    effective_runner = runner if runner is not None else CommandRunner()

    async def probe(tool: str) -> bool:
        result = await effective_runner.run([lookup, tool])
        return result.success

    return probe


async def check_prerequisites(
    tools: Sequence[str] = PREREQUISITE_TOOLS,
    *,
    probe: Probe | None = None,
    platform: str | None = None,
) -> PrerequisiteReport:
    """Probe every tool and collect the results.

    Args:
        tools: Tool names, in check order.
        probe: Presence probe. Defaults to a ``where``/``which`` lookup.
        platform: Platform used to pick the default probe's lookup command.

    Returns:
        PrerequisiteReport with one check per tool.
    """
    effective_probe = probe if probe is not None else make_path_probe(platform)

    checks: list[PrerequisiteCheck] = []
    for tool in tools:
        found = await effective_probe(tool)
        if found:
            logger.debug("prerequisite_found", tool=tool)
        else:
            logger.warning("prerequisite_missing", tool=tool)
        checks.append(
            PrerequisiteCheck(
                name=tool,
                found=found,
                install_url=INSTALL_URLS.get(tool),
            )
        )
    return PrerequisiteReport(checks=tuple(checks))


async def verify_prerequisites(
    tools: Sequence[str] = PREREQUISITE_TOOLS,
    *,
    probe: Probe | None = None,
    platform: str | None = None,
) -> PrerequisiteReport:
    """Check prerequisites and fail if any tool is missing.

    Returns:
        The report when every tool was found.

    Raises:
        PrerequisiteError: Listing every missing tool with install hints.
    """
    report = await check_prerequisites(tools, probe=probe, platform=platform)
    if not report.success:
        hints = {
            check.name: check.install_url
            for check in report.checks
            if not check.found and check.install_url
        }
        raise PrerequisiteError(report.missing, install_hints=hints)

    logger.info("prerequisites_passed", tools=list(tools))
    return report

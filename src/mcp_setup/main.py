"""CLI entry point for mcp-setup.

This module defines the Click-based command-line interface.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

import click
from dotenv import load_dotenv

from mcp_setup import __version__
from mcp_setup.cli.common import cli_error_handler
from mcp_setup.cli.console import console
from mcp_setup.cli.context import ExitCode, async_command
from mcp_setup.cli.output import format_next_steps, format_summary
from mcp_setup.cli.prompts import resolve_api_key
from mcp_setup.config import load_config
from mcp_setup.exceptions import ConfigError
from mcp_setup.logging import configure_logging, get_logger
from mcp_setup.setup import run_setup

#: Environment variable consulted when --api-key is not given
API_KEY_ENV_VAR = "GEMINI_API_KEY"

VERBOSITY_LEVELS = {
    "error": logging.ERROR,
    "warning": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
}


def _print_lines(lines: list[str], style: str | None = None) -> None:
    for line in lines:
        console.print(line, style=style, markup=False)


@click.command()
@click.version_option(version=__version__, prog_name="mcp-setup")
@click.option(
    "--project-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Project root to set up (default: current directory).",
)
@click.option(
    "--skip-repos",
    is_flag=True,
    default=False,
    help="Skip repository acquisition and dependency builds.",
)
@click.option(
    "--skip-deps",
    is_flag=True,
    default=False,
    help="Skip installing and building repository dependencies.",
)
@click.option(
    "--skip-browser",
    is_flag=True,
    default=False,
    help="Skip the Playwright Chromium install.",
)
@click.option(
    "--api-key",
    type=str,
    default=None,
    help=f"Google Gemini API key (default: ${API_KEY_ENV_VAR}, else prompt).",
)
@click.option(
    "-v",
    "--verbose",
    count=True,
    help="Show debug output.",
)
@click.option(
    "-q",
    "--quiet",
    is_flag=True,
    default=False,
    help="Suppress non-essential output (ERROR level only).",
)
@click.pass_context
@async_command
async def cli(
    ctx: click.Context,
    project_dir: Path | None,
    skip_repos: bool,
    skip_deps: bool,
    skip_browser: bool,
    api_key: str | None,
    verbose: int,
    quiet: bool,
) -> None:
    """Set up MCP servers for the current project.

    Checks prerequisites, adds the companion repositories as git submodules
    (or clones them), installs their dependencies, installs Chromium and
    writes .roo/mcp.json.

    Examples:

        mcp-setup

        mcp-setup --skip-repos --api-key "$GEMINI_API_KEY"

        mcp-setup --project-dir ../my-project -v
    """
    effective_dir = (project_dir or Path.cwd()).resolve()

    # .env may provide the API key
    load_dotenv(dotenv_path=effective_dir / ".env", override=False)

    try:
        config = load_config(
            effective_dir,
            skip_repositories=True if skip_repos else None,
            skip_dependencies=True if skip_deps else None,
            skip_browser=True if skip_browser else None,
        )
    except ConfigError as e:
        error_parts = [f"Error: {e.message}"]
        if e.field:
            error_parts.append(f"  Field: {e.field}")
        if e.value is not None:
            error_parts.append(f"  Value: {e.value}")
        click.echo("\n".join(error_parts), err=True)
        ctx.exit(ExitCode.FAILURE)

    # Priority: quiet > verbose > config
    if quiet:
        level = logging.ERROR
    elif verbose > 0:
        level = logging.DEBUG
    else:
        level = VERBOSITY_LEVELS.get(config.verbosity, logging.INFO)
    configure_logging(level=level)

    logger = get_logger(__name__)
    logger.debug("config_loaded", config=config.model_dump())

    supplied_key = api_key if api_key is not None else os.environ.get(API_KEY_ENV_VAR)
    if supplied_key is not None:
        # Reject a bad key before the project is touched
        supplied_key = resolve_api_key(supplied_key)

    if not quiet:
        console.print("MCP Setup", style="bold cyan")
        console.print("=========", style="cyan")
        console.print("")

    with cli_error_handler():
        result = await run_setup(
            project_dir=effective_dir,
            config=config,
            get_api_key=lambda: resolve_api_key(supplied_key),
        )

        _print_lines(format_summary(result))
        console.print("")
        console.print("MCP setup completed successfully!", style="bold green")
        _print_lines(format_next_steps(result.extension_dir), style="yellow")


if __name__ == "__main__":
    cli()

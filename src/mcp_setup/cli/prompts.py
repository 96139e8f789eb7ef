"""Interactive input for the setup workflow."""

from __future__ import annotations

import click

from mcp_setup.cli.console import console, err_console
from mcp_setup.cli.output import format_api_key_hint
from mcp_setup.logging import get_logger
from mcp_setup.utils import redact_api_key, validate_api_key

__all__ = [
    "prompt_api_key",
    "resolve_api_key",
]

logger = get_logger(__name__)


def prompt_api_key() -> str:
    """Ask for the Google Gemini API key without echoing it.

    Re-prompts until the key passes validation.
    """
    console.print(format_api_key_hint(), style="yellow")
    while True:
        key: str = click.prompt(
            "Please enter your Google Gemini API Key",
            hide_input=True,
            default="",
            show_default=False,
        )
        problem = validate_api_key(key)
        if problem is None:
            break
        # click hides value_proc messages for hidden input, so report here
        err_console.print(problem, style="red", markup=False)
    logger.debug("api_key_entered", api_key=redact_api_key(key))
    return key


def resolve_api_key(supplied: str | None) -> str:
    """Return a validated API key, prompting only when none was supplied.

    Args:
        supplied: Key passed via ``--api-key`` or ``GEMINI_API_KEY``.

    Raises:
        click.BadParameter: If the supplied key fails validation.
    """
    if supplied is None:
        return prompt_api_key()
    problem = validate_api_key(supplied)
    if problem is not None:
        raise click.BadParameter(problem, param_hint="'--api-key'")
    return supplied

"""Render .roo/mcp.json from the bundled template.

Rendering is a plain text substitution followed by a JSON validation gate:

1. ensure the configuration directory exists,
2. read the template shipped with this package,
3. replace every placeholder token with its runtime value,
4. parse the result as JSON (validation only; nothing is re-serialized),
5. write the substituted text atomically.

Nothing is written unless step 4 passes, so a previous configuration survives
a failed render untouched.
"""

from __future__ import annotations

import json
import os
from pathlib import Path

from mcp_setup.constants import (
    CHROME_PATH_DETECTION_FAILED,
    CONFIG_DIR,
    CONFIG_FILENAME,
    TEMPLATE_FILENAME,
)
from mcp_setup.exceptions import (
    ConfigDirectoryError,
    ConfigWriteError,
    TemplateReadError,
    TemplateValidationError,
)
from mcp_setup.logging import get_logger
from mcp_setup.setup.models import PlaceholderBindings
from mcp_setup.utils import atomic_write_text, redact_api_key

__all__ = [
    "DEFAULT_TEMPLATE_PATH",
    "render_mcp_config",
    "substitute_placeholders",
]

logger = get_logger(__name__)

#: Template shipped inside the package, independent of the project directory
DEFAULT_TEMPLATE_PATH = (
    Path(__file__).resolve().parent.parent / "templates" / TEMPLATE_FILENAME
)


def substitute_placeholders(template: str, bindings: PlaceholderBindings) -> str:
    """Replace every occurrence of each placeholder token in ``template``.

    Tokens are replaced literally; no regex or format syntax is interpreted.

    Example:
        >>> bindings = PlaceholderBindings("/p", "/c", "k" * 10)
        >>> substitute_placeholders('{"dir": "__PWD__"}', bindings)
        '{"dir": "/p"}'
    """
    rendered = template
    for token, value in bindings.as_replacements().items():
        rendered = rendered.replace(token, value)
    return rendered


def _resolve_chrome_path(chrome_path: str) -> str:
    if chrome_path == CHROME_PATH_DETECTION_FAILED:
        return chrome_path
    return os.path.abspath(chrome_path)


def render_mcp_config(
    project_dir: Path,
    chrome_path: str,
    api_key: str,
    *,
    template_path: Path | None = None,
    target_path: Path | None = None,
) -> Path:
    """Render the MCP configuration for ``project_dir``.

    Args:
        project_dir: Project root, substituted for ``__PWD__``.
        chrome_path: Browser executable path, or the detection-failed
            sentinel which is embedded verbatim.
        api_key: Key substituted into both API key placeholders.
        template_path: Template override. Defaults to the bundled template.
        target_path: Output override. Defaults to ``<project>/.roo/mcp.json``.

    Returns:
        Path of the written configuration.

    Raises:
        ConfigDirectoryError: If the target directory cannot be created.
        TemplateReadError: If the template cannot be read.
        TemplateValidationError: If the substituted text is not valid JSON.
        ConfigWriteError: If the configuration cannot be written.
    """
    source = template_path if template_path is not None else DEFAULT_TEMPLATE_PATH
    target = (
        target_path
        if target_path is not None
        else project_dir / CONFIG_DIR / CONFIG_FILENAME
    )
    target_dir = target.parent

    logger.debug("render_started", template=str(source), target=str(target))

    try:
        target_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise ConfigDirectoryError(
            f"Cannot create configuration directory {target_dir}: {e}",
            path=target_dir,
        ) from e

    try:
        template = source.read_text(encoding="utf-8")
    except OSError as e:
        raise TemplateReadError(
            f"Failed to read template file: {source}",
            path=source,
        ) from e

    bindings = PlaceholderBindings(
        project_dir=str(project_dir),
        chrome_path=_resolve_chrome_path(chrome_path),
        api_key=api_key,
    )
    rendered = substitute_placeholders(template, bindings)
    logger.debug(
        "placeholders_substituted",
        project_dir=bindings.project_dir,
        chrome_path=bindings.chrome_path,
        api_key=redact_api_key(api_key),
    )

    try:
        json.loads(rendered)
    except json.JSONDecodeError as e:
        raise TemplateValidationError(
            "The generated content is not valid JSON after replacements",
            path=source,
            detail=str(e),
        ) from e

    try:
        atomic_write_text(target, rendered, mkdir=False)
    except PermissionError as e:
        raise ConfigWriteError(
            f"Permission denied writing {target}. "
            f"Check write permissions for {target_dir}",
            path=target,
            permission_denied=True,
        ) from e
    except OSError as e:
        raise ConfigWriteError(
            f"Failed to write configuration file {target}: {e}",
            path=target,
        ) from e

    logger.info("config_written", path=str(target))
    return target

"""Keep generated artifacts out of version control."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path, PurePath, PurePosixPath

from mcp_setup.constants import (
    BROWSERS_DIR,
    CONFIG_DIR,
    CONFIG_FILENAME,
    GITIGNORE_FILE,
    SERVER_STATE_IGNORES,
)
from mcp_setup.logging import get_logger
from mcp_setup.utils import atomic_write_text

__all__ = ["gitignore_entries", "update_gitignore"]

logger = get_logger(__name__)


def _as_pattern(relative: str) -> str:
    return PurePosixPath(*PurePath(relative).parts).as_posix()


def gitignore_entries(
    *,
    browsers_dir: str = BROWSERS_DIR,
    config_dir: str = CONFIG_DIR,
) -> tuple[str, ...]:
    """Ignore patterns for the artifacts of a run with the given layout.

    Example:
        >>> gitignore_entries(browsers_dir="cache/browsers", config_dir=".cfg")
        ('cache/browsers/', '.browser-use/', '.codebase/', '.cfg/mcp.json')
    """
    return (
        f"{_as_pattern(browsers_dir)}/",
        *SERVER_STATE_IGNORES,
        f"{_as_pattern(config_dir)}/{CONFIG_FILENAME}",
    )


def update_gitignore(
    project_dir: Path,
    entries: Sequence[str] | None = None,
) -> tuple[str, ...]:
    """Append any missing ``entries`` to the project's .gitignore.

    Existing content is preserved. A line counts as present when it matches
    an entry exactly after stripping whitespace. Running twice adds nothing
    the second time.

    This step is best-effort: I/O failures are logged and the run continues.

    Args:
        project_dir: Project root.
        entries: Ignore patterns to ensure, in order. Defaults to the
            entries for the default layout.

    Returns:
        The entries appended during this call.
    """
    if entries is None:
        entries = gitignore_entries()
    gitignore_path = project_dir / GITIGNORE_FILE
    try:
        existing = (
            gitignore_path.read_text(encoding="utf-8")
            if gitignore_path.exists()
            else ""
        )
    except OSError as e:
        logger.warning("gitignore_read_failed", path=str(gitignore_path), error=str(e))
        return ()

    present = {line.strip() for line in existing.splitlines()}
    to_add: list[str] = []
    for entry in entries:
        if entry not in present and entry not in to_add:
            to_add.append(entry)

    if not to_add:
        logger.debug("gitignore_up_to_date", path=str(gitignore_path))
        return ()

    separator = "\n" if existing and not existing.endswith("\n") else ""
    content = existing + separator + "\n".join(to_add) + "\n"
    try:
        atomic_write_text(gitignore_path, content, mkdir=False)
    except OSError as e:
        logger.warning("gitignore_write_failed", path=str(gitignore_path), error=str(e))
        return ()

    logger.info("gitignore_updated", path=str(gitignore_path), added=to_add)
    return tuple(to_add)

"""Atomic file write utilities.

Atomic writes ensure a file is either completely written or not modified at
all, so an interrupted run never leaves a half-written configuration behind.
"""

from __future__ import annotations

from pathlib import Path

from atomicwrites import atomic_write  # type: ignore[import-untyped]

__all__ = ["atomic_write_text"]


def atomic_write_text(
    path: Path | str,
    content: str,
    *,
    encoding: str = "utf-8",
    mkdir: bool = True,
) -> None:
    """Write text content to a file atomically.

    Writes to a temporary file first, then atomically renames it to the target
    path. An existing file is overwritten.

    Args:
        path: Destination file path (Path or str).
        content: Text content to write.
        encoding: Character encoding to use. Defaults to "utf-8".
        mkdir: If True, create parent directories if they don't exist.

    Raises:
        OSError: If the write or rename operation fails.

    Example:
        >>> atomic_write_text(Path(".roo/mcp.json"), '{"mcpServers": {}}')
    """
    file_path = Path(path)

    if mkdir:
        file_path.parent.mkdir(parents=True, exist_ok=True)

    with atomic_write(str(file_path), mode="w", encoding=encoding, overwrite=True) as f:
        f.write(content)

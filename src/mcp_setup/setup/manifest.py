"""Reader for the project's submodule manifest (.gitmodules).

The manifest is git-config formatted; only the ``path`` and ``url`` keys of
``[submodule "..."]`` sections matter here. Callers read it fresh before
every decision because git rewrites it as submodules are registered.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path

from mcp_setup.constants import GITMODULES_FILE
from mcp_setup.logging import get_logger

__all__ = [
    "SubmoduleManifest",
    "ensure_manifest",
    "parse_manifest",
    "read_manifest",
]

logger = get_logger(__name__)

SECTION_PATTERN = re.compile(r'^\s*\[submodule\s+"(?P<name>[^"]*)"\s*\]\s*$')
KEY_PATTERN = re.compile(r"^\s*(?P<key>path|url)\s*=\s*(?P<value>.*?)\s*$")


@dataclass(frozen=True, slots=True)
class SubmoduleManifest:
    """Parsed submodule registrations.

    Attributes:
        entries: Mapping of registered submodule path to its remote URL
            (empty string when the section declares no url).
    """

    entries: dict[str, str] = field(default_factory=dict)

    def is_registered(self, path: str) -> bool:
        """Check whether ``path`` (POSIX, project-relative) is registered."""
        return _normalize(path) in self.entries

    @property
    def paths(self) -> tuple[str, ...]:
        return tuple(self.entries)


def _normalize(path: str) -> str:
    return path.strip().replace("\\", "/").strip("/")


def parse_manifest(text: str) -> SubmoduleManifest:
    """Parse .gitmodules text into a SubmoduleManifest.

    Comments and keys other than ``path``/``url`` are ignored. A section
    without a ``path`` key does not register anything.
    """
    entries: dict[str, str] = {}
    current_path: str | None = None
    current_url = ""

    def flush() -> None:
        if current_path:
            entries[_normalize(current_path)] = current_url

    for line in text.splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith(("#", ";")):
            continue
        if SECTION_PATTERN.match(line):
            flush()
            current_path, current_url = None, ""
            continue
        match = KEY_PATTERN.match(line)
        if match is None:
            continue
        if match.group("key") == "path":
            current_path = match.group("value")
        else:
            current_url = match.group("value")
    flush()

    return SubmoduleManifest(entries=entries)


def read_manifest(project_dir: Path) -> SubmoduleManifest:
    """Read ``<project_dir>/.gitmodules``.

    A missing file is an empty manifest.

    Raises:
        OSError: If the file exists but cannot be read.
    """
    manifest_path = project_dir / GITMODULES_FILE
    if not manifest_path.exists():
        return SubmoduleManifest()
    return parse_manifest(manifest_path.read_text(encoding="utf-8"))


def ensure_manifest(project_dir: Path) -> Path:
    """Create an empty .gitmodules in ``project_dir`` if none exists.

    Returns:
        Path to the manifest file.

    Raises:
        OSError: If the file cannot be created.
    """
    manifest_path = project_dir / GITMODULES_FILE
    if not manifest_path.exists():
        manifest_path.touch()
        logger.info("gitmodules_created", path=str(manifest_path))
    return manifest_path

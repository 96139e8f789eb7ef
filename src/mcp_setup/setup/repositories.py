"""Companion repositories provisioned by setup."""

from __future__ import annotations

from collections.abc import Iterable

from mcp_setup.setup.models import RepositoryDescriptor

__all__ = [
    "REPOSITORIES",
    "validate_descriptors",
]

#: Fixed repository set, in acquisition order
REPOSITORIES: tuple[RepositoryDescriptor, ...] = (
    RepositoryDescriptor(
        remote="https://github.com/Saik0s/mcp-browser-use.git",
        name="mcp-browser-use",
        relative_path="mcp-browser-use",
    ),
    RepositoryDescriptor(
        remote="https://github.com/AgentDeskAI/browser-tools-mcp.git",
        name="browser-tools-mcp",
        relative_path="browser-tools-mcp",
    ),
    RepositoryDescriptor(
        remote="https://github.com/danyQe/codebase-mcp.git",
        name="codebase-mcp",
        relative_path="codebase",
    ),
)


def validate_descriptors(
    descriptors: Iterable[RepositoryDescriptor],
) -> tuple[RepositoryDescriptor, ...]:
    """Check that no two descriptors share a submodule path or clone directory.

    Args:
        descriptors: Descriptors to validate.

    Returns:
        The descriptors as a tuple, unchanged.

    Raises:
        ValueError: On a duplicate ``relative_path`` or ``name``.
    """
    result = tuple(descriptors)
    seen_paths: set[str] = set()
    seen_names: set[str] = set()
    for descriptor in result:
        if descriptor.relative_path in seen_paths:
            raise ValueError(
                f"Duplicate repository path: {descriptor.relative_path!r}"
            )
        if descriptor.name in seen_names:
            raise ValueError(f"Duplicate repository name: {descriptor.name!r}")
        seen_paths.add(descriptor.relative_path)
        seen_names.add(descriptor.name)
    return result


validate_descriptors(REPOSITORIES)

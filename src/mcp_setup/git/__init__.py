"""Git operations package using GitPython.

Provides working-tree introspection, submodule registration/update and plain
clones, with an async facade (GitClient) for the setup workflow.

Usage:
    ```python
    from mcp_setup.git import GitClient

    git = GitClient()
    await git.clone("https://github.com/org/tool.git", Path("submodules/tool"))
    ```
"""

from __future__ import annotations

import os

# A missing git is reported by the prerequisite gate, not by GitPython at import
os.environ.setdefault("GIT_PYTHON_REFRESH", "quiet")

from mcp_setup.git.repository import (  # noqa: E402
    GitClient,
    GitRepository,
    clone_repository,
    is_inside_work_tree,
    is_work_tree_root,
)

__all__ = [
    "GitClient",
    "GitRepository",
    "clone_repository",
    "is_inside_work_tree",
    "is_work_tree_root",
]

"""Constants shared across the setup workflow."""

from __future__ import annotations

# =============================================================================
# Prerequisites
# =============================================================================

#: Tools that must be on PATH before anything else runs, in check order
PREREQUISITE_TOOLS: tuple[str, ...] = ("node", "npm", "git", "python", "uv", "bun")

#: Where to get each prerequisite
INSTALL_URLS: dict[str, str] = {
    "node": "https://nodejs.org/",
    "npm": "https://nodejs.org/",
    "git": "https://git-scm.com/",
    "python": "https://www.python.org/",
    "uv": "https://github.com/astral-sh/uv",
    "bun": "https://bun.sh/",
}

# =============================================================================
# Project layout (relative to the project root)
# =============================================================================

SUBMODULES_DIR = "submodules"
GITMODULES_FILE = ".gitmodules"
GITIGNORE_FILE = ".gitignore"
CONFIG_DIR = ".roo"
CONFIG_FILENAME = "mcp.json"
BROWSERS_DIR = ".browsers"

#: Runtime directories of the MCP servers, ignored regardless of layout
SERVER_STATE_IGNORES: tuple[str, ...] = (
    ".browser-use/",
    ".codebase/",
)

# =============================================================================
# Configuration template
# =============================================================================

TEMPLATE_FILENAME = "mcp.template.json"

PROJECT_DIR_PLACEHOLDER = "__PWD__"
CHROME_PATH_PLACEHOLDER = "__CHROME_PATH__"
BROWSER_USE_API_KEY_PLACEHOLDER = "__BROWSER_USE_GOOGLE_API_KEY__"
CODEBASE_API_KEY_PLACEHOLDER = "__CODEBASE_GOOGLE_API_KEY__"

#: Written in place of the browser path when it cannot be found
CHROME_PATH_DETECTION_FAILED = "__CHROME_PATH_DETECTION_FAILED__"

# =============================================================================
# Browser tooling
# =============================================================================

PLAYWRIGHT_INSTALL_COMMAND: tuple[str, ...] = (
    "npx",
    "--yes",
    "playwright",
    "install",
    "--with-deps",
    "chromium",
)

CHROME_EXTENSION_PATH_COMMAND: tuple[str, ...] = (
    "npx",
    "--yes",
    "@inkr/browser-tools-mcp@latest",
    "chrome-extension-path",
)

GEMINI_API_KEY_URL = "https://aistudio.google.com/"

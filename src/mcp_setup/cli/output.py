"""Output formatting utilities for the mcp-setup CLI.

Formatters return plain strings; callers decide where and how to print them.
"""

from __future__ import annotations

from mcp_setup.constants import CHROME_PATH_DETECTION_FAILED, GEMINI_API_KEY_URL
from mcp_setup.setup.models import (
    AcquisitionMode,
    AcquisitionOutcome,
    AcquisitionReport,
    PrerequisiteReport,
    SetupResult,
)

__all__ = [
    "format_error",
    "format_success",
    "format_warning",
    "format_info",
    "format_prerequisites",
    "format_acquisition",
    "format_summary",
    "format_next_steps",
    "format_api_key_hint",
]


def format_error(
    message: str, details: list[str] | None = None, suggestion: str | None = None
) -> str:
    """Format an error message with optional details and suggestion.

    Args:
        message: Primary error message.
        details: Optional list of detail lines to include.
        suggestion: Optional suggestion for resolving the error.

    Returns:
        Formatted error string with details and suggestion if provided.

    Example:
        >>> print(format_error(
        ...     "Failed to clone codebase-mcp",
        ...     details=["fatal: repository not found"],
        ...     suggestion="Check your network connection",
        ... ))
        Error: Failed to clone codebase-mcp
          fatal: repository not found
        Suggestion: Check your network connection
    """
    lines = [f"Error: {message}"]

    if details:
        for detail in details:
            lines.append(f"  {detail}")

    if suggestion:
        lines.append(f"Suggestion: {suggestion}")

    return "\n".join(lines)


def format_success(message: str) -> str:
    """Format a success message.

    Example:
        >>> format_success("Configuration written")
        'Success: Configuration written'
    """
    return f"Success: {message}"


def format_warning(message: str) -> str:
    """Format a warning message.

    Example:
        >>> format_warning("Chromium executable not found")
        'Warning: Chromium executable not found'
    """
    return f"Warning: {message}"


def format_info(message: str) -> str:
    return f"Info: {message}"


def format_prerequisites(report: PrerequisiteReport) -> list[str]:
    """Format prerequisite results, one ✓/✗ line per tool."""
    lines = ["Prerequisites"]
    for check in report.checks:
        symbol = "✓" if check.found else "✗"
        lines.append(f"  {symbol} {check.name}")
    lines.append("")
    return lines


_OUTCOME_LABELS: dict[AcquisitionOutcome, str] = {
    AcquisitionOutcome.ALREADY_REGISTERED: "already registered",
    AcquisitionOutcome.PRESENT_BUT_UNREGISTERED: "exists but unregistered, skipped",
    AcquisitionOutcome.REGISTERED: "added as submodule",
    AcquisitionOutcome.REGISTERED_VIA_FALLBACK_CLONE: "cloned (submodule add failed)",
    AcquisitionOutcome.FAILED: "failed",
}


def format_acquisition(report: AcquisitionReport) -> list[str]:
    """Format the repository acquisition summary."""
    lines = ["Repositories"]

    if report.submodule_loop is not None:
        for result in report.submodule_loop.results:
            symbol = "✓" if result.outcome != AcquisitionOutcome.FAILED else "✗"
            label = _OUTCOME_LABELS[result.outcome]
            lines.append(f"  {symbol} {result.descriptor.submodule_path}: {label}")

    if report.mode == AcquisitionMode.DIRECT_CLONE or report.fell_back:
        if report.fallback_reason:
            lines.append(f"  Direct clone: {report.fallback_reason}")
    if report.clone_loop is not None:
        for path in report.clone_loop.cloned:
            lines.append(f"  ✓ {path.name}: cloned")
        for path in report.clone_loop.skipped:
            lines.append(f"  ○ {path.name}: already present")

    lines.append("")
    return lines


def format_summary(result: SetupResult) -> list[str]:
    """Format the end-of-run summary."""
    lines: list[str] = []
    lines.extend(format_prerequisites(result.prerequisites))
    if result.acquisition is not None:
        lines.extend(format_acquisition(result.acquisition))
    if result.built_repositories:
        lines.append("Dependencies")
        for repo_dir in result.built_repositories:
            lines.append(f"  ✓ {repo_dir.name}")
        lines.append("")
    if result.chrome_path == CHROME_PATH_DETECTION_FAILED:
        lines.append(
            format_warning(
                "Chromium path could not be determined. "
                f"Edit {result.config_path} and set the browser path manually."
            )
        )
    else:
        lines.append(f"✓ Chromium: {result.chrome_path}")
    lines.append(f"✓ Configuration written to {result.config_path}")
    return lines


def format_next_steps(extension_dir: str | None) -> list[str]:
    """Format the browser extension instructions shown after setup."""
    lines = [
        "",
        "--- Important Next Steps for Browser Tools ---",
        "1. Install the Chrome Extension:",
        "   - Open Chrome/Chromium and go to: chrome://extensions/",
        '   - Enable "Developer mode" (usually a toggle in the top right).',
        '   - Click "Load unpacked".',
    ]
    if extension_dir:
        lines.append("   - Select the following directory:")
        lines.append(f"     {extension_dir}")
    else:
        lines.append(
            "   - Run 'npx --yes @inkr/browser-tools-mcp@latest "
            "chrome-extension-path' to find the directory to select."
        )
    lines.append("----------------------------------------------")
    lines.append(
        "You may need to restart your IDE or relevant processes "
        "for MCP server changes to take effect."
    )
    return lines


def format_api_key_hint() -> str:
    return f"You can obtain a Gemini API Key from: {GEMINI_API_KEY_URL}"

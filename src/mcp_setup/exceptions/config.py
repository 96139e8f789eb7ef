from __future__ import annotations

from typing import Any

from mcp_setup.exceptions.base import SetupError


class ConfigError(SetupError):
    """Exception for configuration loading, parsing, and validation errors.

    Raised when `.mcp-setup.yaml` cannot be parsed or a setting (from the file
    or an ``MCP_SETUP_*`` environment variable) fails validation.

    Attributes:
        message: Human-readable error message describing the configuration issue.
        field: Optional field name that caused the error (e.g., "browsers_dir").
        value: Optional value that failed validation (for debugging).
    """

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: Any = None,
    ) -> None:
        self.field = field
        self.value = value
        super().__init__(message)

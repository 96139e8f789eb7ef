"""Shared utilities for mcp-setup."""

from __future__ import annotations

from mcp_setup.utils.atomic import atomic_write_text
from mcp_setup.utils.secrets import (
    MIN_API_KEY_LENGTH,
    redact_api_key,
    validate_api_key,
)

__all__ = [
    "MIN_API_KEY_LENGTH",
    "atomic_write_text",
    "redact_api_key",
    "validate_api_key",
]

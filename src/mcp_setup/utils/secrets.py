"""API key helpers: validation rule and redaction for log output."""

from __future__ import annotations

__all__ = [
    "MIN_API_KEY_LENGTH",
    "validate_api_key",
    "redact_api_key",
]

#: Shortest key accepted; real Gemini keys are far longer
MIN_API_KEY_LENGTH = 10


def validate_api_key(value: str) -> str | None:
    """Check an API key against the sanity rules.

    Args:
        value: The key as entered by the user.

    Returns:
        None when the key is acceptable, otherwise the message to show.

    Example:
        >>> validate_api_key("")
        'API Key cannot be empty.'
        >>> validate_api_key("short")
        'API Key seems too short.'
        >>> validate_api_key("abcdefghij") is None
        True
    """
    if not value:
        return "API Key cannot be empty."
    if len(value) < MIN_API_KEY_LENGTH:
        return "API Key seems too short."
    return None


def redact_api_key(key: str) -> str:
    """Redact an API key, showing only its last 4 characters.

    Example:
        >>> redact_api_key("AIzaSyExampleKey1234")
        '...1234'
        >>> redact_api_key("")
        ''
    """
    if not key:
        return ""
    return f"...{key[-4:]}"

"""Unit tests for API key validation and redaction."""

from __future__ import annotations

import pytest

from mcp_setup.utils.secrets import (
    MIN_API_KEY_LENGTH,
    redact_api_key,
    validate_api_key,
)


class TestValidateApiKey:
    def test_empty_key(self) -> None:
        assert validate_api_key("") == "API Key cannot be empty."

    @pytest.mark.parametrize("key", ["a", "AIza", "x" * (MIN_API_KEY_LENGTH - 1)])
    def test_short_key(self, key: str) -> None:
        assert validate_api_key(key) == "API Key seems too short."

    def test_minimum_length_accepted(self) -> None:
        assert validate_api_key("x" * MIN_API_KEY_LENGTH) is None

    def test_no_format_check(self) -> None:
        """Only length is checked; the provider's key format is not enforced."""
        assert validate_api_key("not-a-real-gemini-key") is None


class TestRedactApiKey:
    def test_shows_last_four(self) -> None:
        assert redact_api_key("AIzaSyExampleKey1234") == "...1234"

    def test_empty(self) -> None:
        assert redact_api_key("") == ""

    def test_short_key_not_padded(self) -> None:
        assert redact_api_key("abc") == "...abc"

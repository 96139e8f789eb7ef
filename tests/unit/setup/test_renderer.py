"""Unit tests for rendering .roo/mcp.json."""

from __future__ import annotations

import json
import os
from pathlib import Path

import pytest

from mcp_setup.constants import CHROME_PATH_DETECTION_FAILED
from mcp_setup.exceptions import (
    ConfigWriteError,
    TemplateReadError,
    TemplateValidationError,
)
from mcp_setup.setup.models import PlaceholderBindings
from mcp_setup.setup.renderer import (
    DEFAULT_TEMPLATE_PATH,
    render_mcp_config,
    substitute_placeholders,
)

TEMPLATE = """{
  "mcpServers": {
    "browser": {
      "cwd": "__PWD__/submodules/mcp-browser-use",
      "env": {
        "CHROME_PATH": "__CHROME_PATH__",
        "GOOGLE_API_KEY": "__BROWSER_USE_GOOGLE_API_KEY__"
      }
    },
    "codebase": {
      "env": {"GOOGLE_API_KEY": "__CODEBASE_GOOGLE_API_KEY__"}
    }
  }
}
"""


@pytest.fixture
def template_file(tmp_path: Path) -> Path:
    path = tmp_path / "mcp.template.json"
    path.write_text(TEMPLATE)
    return path


# =============================================================================
# Substitution
# =============================================================================


class TestSubstitutePlaceholders:
    def test_replaces_every_occurrence(self) -> None:
        bindings = PlaceholderBindings("/work/proj", "/bin/chrome", "AIzaKey123456")

        rendered = substitute_placeholders("__PWD__ and __PWD__/x", bindings)

        assert rendered == "/work/proj and /work/proj/x"

    def test_api_key_fills_both_placeholders(self) -> None:
        bindings = PlaceholderBindings("/p", "/c", "AIzaKey123456")

        rendered = substitute_placeholders(TEMPLATE, bindings)

        data = json.loads(rendered)
        servers = data["mcpServers"]
        assert servers["browser"]["env"]["GOOGLE_API_KEY"] == "AIzaKey123456"
        assert servers["codebase"]["env"]["GOOGLE_API_KEY"] == "AIzaKey123456"
        assert "__" not in rendered

    def test_windows_paths_stay_valid_json(self) -> None:
        bindings = PlaceholderBindings(
            "C:\\Users\\dev\\proj",
            "C:\\browsers\\chrome.exe",
            "AIzaKey123456",
        )

        data = json.loads(substitute_placeholders(TEMPLATE, bindings))

        browser = data["mcpServers"]["browser"]
        assert browser["cwd"] == "C:\\Users\\dev\\proj/submodules/mcp-browser-use"
        assert browser["env"]["CHROME_PATH"] == "C:\\browsers\\chrome.exe"

    def test_text_without_placeholders_unchanged(self) -> None:
        bindings = PlaceholderBindings("/p", "/c", "AIzaKey123456")

        assert substitute_placeholders('{"a": 1}', bindings) == '{"a": 1}'


# =============================================================================
# Rendering
# =============================================================================


class TestRenderMcpConfig:
    def test_writes_default_target(
        self, project_dir: Path, template_file: Path, api_key: str
    ) -> None:
        target = render_mcp_config(
            project_dir, "/opt/chrome", api_key, template_path=template_file
        )

        assert target == project_dir / ".roo" / "mcp.json"
        data = json.loads(target.read_text())
        assert data["mcpServers"]["browser"]["cwd"] == (
            f"{project_dir}/submodules/mcp-browser-use"
        )

    def test_chrome_path_made_absolute(
        self, project_dir: Path, template_file: Path, api_key: str
    ) -> None:
        target = render_mcp_config(
            project_dir, "relative/chrome", api_key, template_path=template_file
        )

        env = json.loads(target.read_text())["mcpServers"]["browser"]["env"]
        assert env["CHROME_PATH"] == os.path.abspath("relative/chrome")

    def test_sentinel_embedded_verbatim(
        self, project_dir: Path, template_file: Path, api_key: str
    ) -> None:
        target = render_mcp_config(
            project_dir,
            CHROME_PATH_DETECTION_FAILED,
            api_key,
            template_path=template_file,
        )

        env = json.loads(target.read_text())["mcpServers"]["browser"]["env"]
        assert env["CHROME_PATH"] == CHROME_PATH_DETECTION_FAILED

    def test_overwrites_existing_config(
        self, project_dir: Path, template_file: Path, api_key: str
    ) -> None:
        existing = project_dir / ".roo" / "mcp.json"
        existing.parent.mkdir()
        existing.write_text('{"old": true}')

        render_mcp_config(project_dir, "/c", api_key, template_path=template_file)

        assert "old" not in json.loads(existing.read_text())

    def test_invalid_json_writes_nothing(
        self, project_dir: Path, tmp_path: Path, api_key: str
    ) -> None:
        broken = tmp_path / "broken.json"
        broken.write_text('{"dir": "__PWD__",}')
        existing = project_dir / ".roo" / "mcp.json"
        existing.parent.mkdir()
        existing.write_text('{"old": true}')

        with pytest.raises(TemplateValidationError) as exc_info:
            render_mcp_config(project_dir, "/c", api_key, template_path=broken)

        assert exc_info.value.detail
        assert existing.read_text() == '{"old": true}'

    def test_quote_in_value_fails_validation(
        self, project_dir: Path, template_file: Path
    ) -> None:
        """Values are not JSON-escaped, so a quote breaks the document."""
        with pytest.raises(TemplateValidationError):
            render_mcp_config(
                project_dir, "/c", 'AIza"broken', template_path=template_file
            )

        assert not (project_dir / ".roo" / "mcp.json").exists()

    def test_missing_template(
        self, project_dir: Path, tmp_path: Path, api_key: str
    ) -> None:
        missing = tmp_path / "nope.json"

        with pytest.raises(TemplateReadError, match="Failed to read template file"):
            render_mcp_config(project_dir, "/c", api_key, template_path=missing)

    def test_custom_target_path(
        self, project_dir: Path, template_file: Path, api_key: str
    ) -> None:
        custom = project_dir / "cfg" / "servers.json"

        target = render_mcp_config(
            project_dir,
            "/c",
            api_key,
            template_path=template_file,
            target_path=custom,
        )

        assert target == custom
        assert custom.exists()

    @pytest.mark.skipif(
        hasattr(os, "geteuid") and os.geteuid() == 0,
        reason="root ignores directory permissions",
    )
    def test_read_only_directory(
        self, project_dir: Path, template_file: Path, api_key: str
    ) -> None:
        config_dir = project_dir / ".roo"
        config_dir.mkdir()
        config_dir.chmod(0o500)
        try:
            with pytest.raises(ConfigWriteError):
                render_mcp_config(
                    project_dir, "/c", api_key, template_path=template_file
                )
        finally:
            config_dir.chmod(0o700)


def test_bundled_template_renders(project_dir: Path, api_key: str) -> None:
    assert DEFAULT_TEMPLATE_PATH.is_file()

    target = render_mcp_config(project_dir, "/opt/chrome", api_key)

    data = json.loads(target.read_text())
    assert set(data["mcpServers"]) == {"browser-use", "browser-tools", "codebase"}
    assert "__" not in target.read_text()

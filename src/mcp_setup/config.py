from __future__ import annotations

from pathlib import Path
from typing import Any, ClassVar, Literal

import yaml
from pydantic import ValidationError, field_validator
from pydantic.fields import FieldInfo
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from mcp_setup.constants import BROWSERS_DIR, CONFIG_DIR, SUBMODULES_DIR
from mcp_setup.exceptions import ConfigError
from mcp_setup.logging import get_logger

__all__ = [
    "CONFIG_FILENAME",
    "SetupConfig",
    "load_config",
]

logger = get_logger(__name__)

#: Optional per-project settings file
CONFIG_FILENAME = ".mcp-setup.yaml"


class YamlConfigSource(PydanticBaseSettingsSource):
    """Custom settings source that loads from a YAML file."""

    def __init__(
        self,
        settings_cls: type[BaseSettings],
        yaml_file: Path | None = None,
    ):
        super().__init__(settings_cls)
        self.yaml_file = yaml_file
        self._config_data: dict[str, Any] = {}
        if yaml_file and yaml_file.exists():
            try:
                with open(yaml_file) as f:
                    loaded = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ConfigError(
                    message=f"Invalid YAML in {yaml_file}: {e}",
                ) from e
            if loaded is None:
                logger.warning("config_file_empty", path=str(yaml_file))
            elif not isinstance(loaded, dict):
                raise ConfigError(
                    message=f"Expected a mapping at the top of {yaml_file}",
                    value=loaded,
                )
            else:
                self._config_data = loaded

    def get_field_value(
        self, field: FieldInfo, field_name: str
    ) -> tuple[Any, str, bool]:
        """Get value for a specific field from the YAML config."""
        if field_name in self._config_data:
            return self._config_data[field_name], field_name, False
        return None, field_name, False

    def __call__(self) -> dict[str, Any]:
        """Return the complete config data."""
        return self._config_data


class SetupConfig(BaseSettings):
    """Settings for a setup run.

    Only stage toggles and directory names are configurable; the repository
    set and the template placeholders are fixed.

    Attributes:
        skip_repositories: Skip repository acquisition and dependency builds.
        skip_dependencies: Skip dependency install/build for acquired repositories.
        skip_browser: Skip the Playwright Chromium install.
        submodules_dir: Directory (relative to the project) holding repositories.
        browsers_dir: Playwright browser cache (relative to the project).
        config_dir: Directory receiving the rendered mcp.json.
        verbosity: Default log level when no -v/-q flag is given.
    """

    model_config = SettingsConfigDict(
        env_prefix="MCP_SETUP_",
        extra="ignore",
    )

    skip_repositories: bool = False
    skip_dependencies: bool = False
    skip_browser: bool = False
    submodules_dir: str = SUBMODULES_DIR
    browsers_dir: str = BROWSERS_DIR
    config_dir: str = CONFIG_DIR
    verbosity: Literal["error", "warning", "info", "debug"] = "info"

    # Set by load_config() for the duration of one load
    _yaml_file: ClassVar[Path | None] = None

    @field_validator("submodules_dir", "browsers_dir", "config_dir")
    @classmethod
    def check_relative(cls, v: str) -> str:
        """Directories must stay inside the project."""
        path = Path(v)
        if not v or path.is_absolute() or ".." in path.parts:
            raise ValueError(f"must be a relative path inside the project: {v!r}")
        return v

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Customize the order of settings sources.

        Priority (highest to lowest):
        1. Init settings (explicit keyword arguments, e.g. CLI flags)
        2. Environment variables (MCP_SETUP_*)
        3. Project YAML config (./.mcp-setup.yaml)
        4. Field defaults
        """
        return (
            init_settings,
            env_settings,
            YamlConfigSource(settings_cls, cls._yaml_file),
        )


def load_config(
    project_dir: Path | None = None,
    **overrides: Any,
) -> SetupConfig:
    """Load configuration with hierarchy: defaults -> project file -> env -> overrides.

    Args:
        project_dir: Project root holding the optional `.mcp-setup.yaml`.
            Defaults to the current directory.
        **overrides: Explicit values (typically CLI flags) with top priority.
            ``None`` values are ignored.

    Returns:
        SetupConfig instance with merged configuration.

    Raises:
        ConfigError: If configuration is invalid.
    """
    root = project_dir if project_dir is not None else Path.cwd()
    config_path = root / CONFIG_FILENAME

    if not config_path.exists():
        logger.debug("project_config_not_found", path=str(config_path))

    explicit = {key: value for key, value in overrides.items() if value is not None}

    SetupConfig._yaml_file = config_path
    try:
        return SetupConfig(**explicit)
    except ValidationError as e:
        first_error = e.errors()[0]
        field = ".".join(str(loc) for loc in first_error["loc"])
        raise ConfigError(
            message=f"Invalid configuration: {first_error['msg']}",
            field=field,
            value=first_error.get("input"),
        ) from e
    finally:
        SetupConfig._yaml_file = None

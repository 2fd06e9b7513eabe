"""Configuration management using pydantic-settings.

Not a singleton: each call to ``get_app_config()`` re-reads the sources.

Priority order (highest first):

1. Init arguments (CLI flags)
2. Environment variables (``TALKQL_`` prefix, ``__`` for nesting)
3. ``.env`` dotenv file
4. YAML file (``configs/config.yaml`` or the path in ``TALKQL_CONFIG_FILE``)
5. Field defaults
"""

import os
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

from .system import LoggingConfig, ServiceConfig, SessionConfig, TracingConfig

# ---------------------------------------------------------------------------
# Path constants
# ---------------------------------------------------------------------------

CONFIG_PY_PATH = Path(__file__).resolve()
PROJECT_ROOT = CONFIG_PY_PATH.parent.parent.parent.parent
CONFIG_DIR = PROJECT_ROOT / "configs"

STATIC_CONFIG_FILE = CONFIG_DIR / "config.yaml"

_override_env = os.environ.get("TALKQL_CONFIG_FILE")
OVERRIDE_CONFIG_FILE: Optional[Path] = Path(_override_env) if _override_env else None

DOTENV_FILE_PATH = PROJECT_ROOT / ".env"
ENV_DELIMITER = "__"
ENV_PREFIX = "TALKQL_"

DEFAULT_ENCODING = "utf-8"


class AppConfig(BaseSettings):
    """Application configuration."""

    model_config = SettingsConfigDict(
        env_file=DOTENV_FILE_PATH,
        env_file_encoding=DEFAULT_ENCODING,
        env_nested_delimiter=ENV_DELIMITER,
        env_prefix=ENV_PREFIX,
        case_sensitive=False,
        extra="ignore",
        yaml_file=STATIC_CONFIG_FILE,
        yaml_file_encoding=DEFAULT_ENCODING,
    )

    service: ServiceConfig = Field(
        default_factory=ServiceConfig,
        description="Remote query service settings",
    )

    session: SessionConfig = Field(
        default_factory=SessionConfig,
        description="Transcript texts and defaults",
    )

    logging: LoggingConfig = Field(
        default_factory=LoggingConfig,
        description="Logging settings",
    )

    tracing: TracingConfig = Field(
        default_factory=TracingConfig,
        description="OpenTelemetry span settings",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        sources: list[PydanticBaseSettingsSource] = [
            init_settings,
            env_settings,
            dotenv_settings,
        ]

        if OVERRIDE_CONFIG_FILE is not None and OVERRIDE_CONFIG_FILE.is_file():
            sources.append(
                YamlConfigSettingsSource(settings_cls, yaml_file=OVERRIDE_CONFIG_FILE)
            )
        sources.append(YamlConfigSettingsSource(settings_cls))

        sources.append(file_secret_settings)
        return tuple(sources)


def get_app_config(**overrides) -> AppConfig:
    """Build the application configuration, re-reading every source."""
    return AppConfig(**overrides)

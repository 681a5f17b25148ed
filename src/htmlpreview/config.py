"""Configuration loading.

Settings are loaded in priority order (highest first):
  1. Environment variables  (HTMLPREVIEW__SERVER__PORT=9090)
  2. htmlpreview.yaml       (searched in cwd, then platform config dir)
  3. Hardcoded defaults

The config file is optional. Per-request options (theme, cache_time, ...)
come from the query string, not from here.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import platformdirs
from pydantic import BaseModel
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

from htmlpreview.models.params import DEFAULT_CORS_PROXY


def _find_config_file() -> str | None:
    """Return the path of the first htmlpreview.yaml found, or None."""
    candidates = [
        Path("htmlpreview.yaml"),
        Path(platformdirs.user_config_dir("htmlpreview")) / "htmlpreview.yaml",
    ]
    for path in candidates:
        if path.exists():
            return str(path)
    return None


class ServerSettings(BaseModel):
    host: str = "127.0.0.1"
    port: int = 8080


class FetcherSettings(BaseModel):
    # None means no timeout: a hung relay hangs the request.
    timeout_seconds: float | None = None
    follow_redirects: bool = True
    user_agent: str = "htmlpreview/1.0"


class PreviewSettings(BaseModel):
    # Relay used when the request does not pass cors_proxy
    cors_proxy: str = DEFAULT_CORS_PROXY


class LoggingSettings(BaseModel):
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    format: Literal["json", "text"] = "json"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        # Double-underscore separates nesting: HTMLPREVIEW__SERVER__PORT=9090
        env_prefix="HTMLPREVIEW__",
        env_nested_delimiter="__",
        yaml_file=_find_config_file(),
        yaml_file_encoding="utf-8",
    )

    server: ServerSettings = ServerSettings()
    fetcher: FetcherSettings = FetcherSettings()
    preview: PreviewSettings = PreviewSettings()
    logging: LoggingSettings = LoggingSettings()

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
        **kwargs: Any,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,  # Constructor args (highest priority)
            env_settings,  # Environment variables
            YamlConfigSettingsSource(settings_cls),  # YAML file
        )

"""Configuration loading.

Settings are loaded in priority order (highest first):
  1. Environment variables  (SCPBROWSER__SOURCE__MAX_SERIES=5)
  2. scpbrowser.yaml        (searched in cwd, then the platform config dir)
  3. Hardcoded defaults

The config file is optional: all fields have sensible defaults.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import platformdirs
from pydantic import BaseModel, ConfigDict, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

_CONFIG_FILENAME = "scpbrowser.yaml"
_DEFAULT_CONFIG_DIR = platformdirs.user_config_dir("scpbrowser")
_DEFAULT_CACHE_PATH = "cache_o.data"


def _find_config_file() -> str | None:
    """Return the path of the first scpbrowser.yaml found, or None."""
    candidates = [
        Path(_CONFIG_FILENAME),
        Path(_DEFAULT_CONFIG_DIR) / _CONFIG_FILENAME,
    ]
    for path in candidates:
        if path.exists():
            return str(path)
    return None


class SourceSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    series_url: str = "https://scpfoundation.net/scp-series"
    detail_url: str = "https://scpfoundation.net/api/articles/scp-"
    # Exclusive upper bound: series 1..max_series-1 are fetched.
    max_series: int = 9
    detail_format: Literal["json", "html"] = "json"

    @field_validator("max_series")
    @classmethod
    def validate_max_series(cls, v: int) -> int:
        if v < 2:
            raise ValueError("max_series must be >= 2")
        return v


class FetcherSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    timeout_seconds: float = 30.0
    user_agent: str = "scpbrowser"
    parallel_series: bool = False


class CacheSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    # Relative paths resolve against the working directory at use time.
    path: str = _DEFAULT_CACHE_PATH


class LoggingSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"
    format: Literal["json", "text"] = "text"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        # Double-underscore separates nesting: SCPBROWSER__CACHE__PATH=/tmp/c.data
        env_prefix="SCPBROWSER__",
        env_nested_delimiter="__",
        yaml_file=_find_config_file(),
        yaml_file_encoding="utf-8",
    )

    source: SourceSettings = SourceSettings()
    fetcher: FetcherSettings = FetcherSettings()
    cache: CacheSettings = CacheSettings()
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
            # dotenv and file secrets intentionally excluded
        )

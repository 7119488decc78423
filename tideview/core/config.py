"""
Configuration management for tideview.

Uses Pydantic for validation and supports YAML configuration files
with environment variable expansion.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings


# Forced onto every engine invocation so its text stays single-byte
NEUTRAL_LOCALE = {"LANG": "C", "LC_ALL": "C", "LC_CTYPE": "C"}


def expand_env_vars(value: Any) -> Any:
    """Recursively expand environment variables in strings."""
    if isinstance(value, str):
        return os.path.expandvars(value)
    elif isinstance(value, dict):
        return {k: expand_env_vars(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [expand_env_vars(v) for v in value]
    return value


class EngineConfig(BaseModel):
    """Tide prediction engine configuration."""

    binary: str = "tide"
    text_width: int = Field(default=79, gt=0)
    graph_width: int = Field(default=960, gt=0)
    directory_width: int = Field(default=110, gt=0)
    image_format: str = "png"
    encoding: str = "iso-8859-1"
    locale: dict[str, str] = Field(default_factory=lambda: dict(NEUTRAL_LOCALE))
    timeout: float | None = None


class SessionConfig(BaseModel):
    """Session defaults."""

    default_station: str | None = None
    step_hours: float = Field(default=6.0, gt=0)
    home_latitude: float | None = Field(default=None, ge=-90.0, le=90.0)
    home_longitude: float | None = Field(default=None, ge=-180.0, le=180.0)

    @field_validator("default_station", mode="before")
    @classmethod
    def _clean_station(cls, value: Any) -> Any:
        """Trim untrusted input; blank means unset."""
        if isinstance(value, str):
            value = value.strip()
            return value or None
        return value

    @property
    def home(self) -> tuple[float, float] | None:
        """Home location as (lat, lon) in degrees, if both are set."""
        if self.home_latitude is None or self.home_longitude is None:
            return None
        return self.home_latitude, self.home_longitude


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "WARNING"
    log_dir: Path = Field(default=Path("logs"))
    log_to_file: bool = False
    log_to_console: bool = True
    json_format: bool = False


class Settings(BaseSettings):
    """Main settings container."""

    engine: EngineConfig = Field(default_factory=EngineConfig)
    session: SessionConfig = Field(default_factory=SessionConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    class Config:
        env_prefix = "TIDEVIEW_"
        env_nested_delimiter = "__"


def load_settings(config_path: Path | str | None = None) -> Settings:
    """Load settings from YAML file.

    Args:
        config_path: Path to YAML configuration file.
                    If None, tries default locations.

    Returns:
        Settings instance.
    """
    search_paths = []

    if config_path:
        search_paths.append(Path(config_path))
    else:
        search_paths.extend([
            Path("config/settings.local.yaml"),
            Path("config/settings.yaml"),
            Path.home() / ".tideview" / "settings.yaml",
        ])

    config_data: dict[str, Any] = {}

    for path in search_paths:
        if path.exists():
            with open(path) as f:
                raw_data = yaml.safe_load(f)
                if raw_data:
                    config_data = expand_env_vars(raw_data)
            break

    return Settings(**config_data)

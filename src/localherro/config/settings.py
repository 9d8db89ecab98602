# src/localherro/config/settings.py
"""
Application settings (Pydantic).

Settings are loaded from `src/localherro/config/defaults.yaml`, then optionally overridden by:
- an external YAML file via `LOCALHERRO_CONFIG_PATH` (replaces the packaged defaults)
- environment variables (e.g., `PORT`, `LOCALHERRO_LOG_LEVEL`)

Design rule:
- Retention windows and size caps live in YAML, not hard-coded in the registries.
"""

from __future__ import annotations

import os
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field

from localherro.core.env import load_dotenv_if_present, resolve_project_path


def _read_package_yaml(filename: str) -> dict[str, Any]:
    """Read a YAML file packaged inside `localherro.config`."""
    text = resources.files("localherro.config").joinpath(filename).read_text(encoding="utf-8")
    data = yaml.safe_load(text) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Invalid YAML root object for {filename}; expected a mapping.")
    return data


def _read_yaml_file(path: str | Path) -> dict[str, Any]:
    """Read a YAML file from disk and return its mapping root."""
    data = yaml.safe_load(Path(path).read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Invalid YAML root object for {path}; expected a mapping.")
    return data


class AppSettings(BaseModel):
    name: str = "Local Herro"
    log_level: str = "INFO"


class ServerSettings(BaseModel):
    host: str = "0.0.0.0"
    port: int = Field(4000, ge=1, le=65535)


class CorsSettings(BaseModel):
    allow_origins: list[str] = Field(default_factory=lambda: ["*"])


class LimitsSettings(BaseModel):
    presence_stale_seconds: int = Field(2 * 60, gt=0)
    message_max_age_seconds: int = Field(30 * 60, gt=0)
    message_max_count: int = Field(200, ge=1)
    alert_max_age_seconds: int = Field(60 * 60, gt=0)
    direct_message_max_age_seconds: int = Field(60 * 60, gt=0)
    text_max_length: int = Field(500, ge=1)
    default_radius_km: float = 5.0


class Settings(BaseModel):
    app: AppSettings = Field(default_factory=AppSettings)
    server: ServerSettings = Field(default_factory=ServerSettings)
    cors: CorsSettings = Field(default_factory=CorsSettings)
    limits: LimitsSettings = Field(default_factory=LimitsSettings)


def _apply_env_overrides(data: dict[str, Any]) -> dict[str, Any]:
    """Overlay selected environment variables onto raw settings payload.

    Note: the whitelist is kept small; retention windows are only tunable through YAML.
    """
    load_dotenv_if_present()
    data = dict(data)

    port = os.getenv("PORT")
    if port and port.strip():
        data.setdefault("server", {})["port"] = port.strip()

    host = os.getenv("HOST")
    if host and host.strip():
        data.setdefault("server", {})["host"] = host.strip()

    log_level = os.getenv("LOCALHERRO_LOG_LEVEL")
    if log_level:
        data.setdefault("app", {})["log_level"] = log_level

    origins = os.getenv("LOCALHERRO_CORS_ORIGINS")
    if origins:
        data.setdefault("cors", {})["allow_origins"] = [s.strip() for s in origins.split(",") if s.strip()]

    return data


@lru_cache
def get_settings() -> Settings:
    """Load and validate settings (cached)."""
    load_dotenv_if_present()
    config_path = os.getenv("LOCALHERRO_CONFIG_PATH")
    raw = _read_yaml_file(resolve_project_path(config_path)) if config_path else _read_package_yaml("defaults.yaml")
    raw = _apply_env_overrides(raw)
    return Settings.model_validate(raw)


@lru_cache
def get_logging_config() -> dict[str, Any]:
    """Load logging configuration (cached)."""
    return _read_package_yaml("logging.yaml")

"""Application configuration loaded from config.yaml + environment variables."""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path

import yaml
from pydantic_settings import BaseSettings, SettingsConfigDict

_CONFIG_PATH = Path(__file__).resolve().parent.parent / "config.yaml"

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def _load_yaml() -> dict:
    if _CONFIG_PATH.exists():
        with open(_CONFIG_PATH) as f:
            return yaml.safe_load(f) or {}
    return {}


class Settings(BaseSettings):
    database_url: str = "sqlite+aiosqlite:///data/jobdispatch.db"
    session_cookie_name: str = "session_token"
    log_level: str = "INFO"
    sql_echo: bool = False

    model_config = SettingsConfigDict(
        env_prefix="JOBDISPATCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    """Build Settings from YAML defaults; environment variables win."""
    y = _load_yaml()
    defaults = {}
    if "database" in y:
        defaults["database_url"] = y["database"].get("url", "sqlite+aiosqlite:///data/jobdispatch.db")
        defaults["sql_echo"] = y["database"].get("echo", False)
    if "logging" in y:
        defaults["log_level"] = y["logging"].get("level", "INFO")
    if "session" in y:
        defaults["session_cookie_name"] = y["session"].get("cookie_name", "session_token")

    settings = Settings()
    # Explicitly-set env values take precedence over the YAML file
    for key, value in defaults.items():
        if key not in settings.model_fields_set:
            setattr(settings, key, value)
    return settings


def configure_logging(level: str | None = None) -> None:
    logging.basicConfig(
        level=(level or get_settings().log_level).upper(),
        format=LOG_FORMAT,
    )

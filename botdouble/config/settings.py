"""Configuration settings and loading."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_API_URL = "https://api.telegram.org"
FAKE_TOKEN = "123456:FAKE-TOKEN"


class BotConfig(BaseSettings):
    """Configuration for a bot and its fake transport."""

    model_config = SettingsConfigDict(
        env_prefix="BOTDOUBLE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    token: str = FAKE_TOKEN
    api_url: str = DEFAULT_API_URL
    bot_username: str | None = None
    timeout: float = Field(default=5.0, gt=0)
    fake_seed: int | None = None
    log_level: str = "WARNING"

    @field_validator("api_url")
    @classmethod
    def validate_api_url(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError("api_url must be an http(s) URL")
        return v.rstrip("/")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        valid = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        level = v.upper()
        if level not in valid:
            raise ValueError(f"Invalid log level: {v}. Valid: {sorted(valid)}")
        return level


def load_config(config_path: str | Path | None = None) -> BotConfig:
    """Load configuration from file and environment.

    Priority: env vars > config file > defaults
    """
    config_data: dict[str, Any] = {}

    if config_path is not None:
        config_path = Path(config_path)
        if config_path.exists():
            with open(config_path) as f:
                config_data = yaml.safe_load(f) or {}

    config_data.update(_get_env_overrides())

    return BotConfig(**config_data)


def _get_env_overrides() -> dict[str, Any]:
    """Get configuration overrides from environment variables."""
    overrides: dict[str, Any] = {}

    env_mappings = {
        "BOTDOUBLE_TOKEN": "token",
        "BOTDOUBLE_API_URL": "api_url",
        "BOTDOUBLE_BOT_USERNAME": "bot_username",
        "BOTDOUBLE_TIMEOUT": ("timeout", float),
        "BOTDOUBLE_FAKE_SEED": ("fake_seed", int),
        "BOTDOUBLE_LOG_LEVEL": "log_level",
    }

    for env_key, config_key in env_mappings.items():
        value = os.environ.get(env_key)
        if value is not None:
            if isinstance(config_key, tuple):
                key, converter = config_key
                overrides[key] = converter(value)
            else:
                overrides[config_key] = value

    return overrides

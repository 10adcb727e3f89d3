"""Configuration management for botdouble."""

from botdouble.config.settings import DEFAULT_API_URL, FAKE_TOKEN, BotConfig, load_config

__all__ = [
    "BotConfig",
    "load_config",
    "DEFAULT_API_URL",
    "FAKE_TOKEN",
]

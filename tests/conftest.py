"""Pytest fixtures for botdouble tests."""

from __future__ import annotations

import io
from typing import Any

import pytest
from rich.console import Console

from botdouble.config import BotConfig
from botdouble.testing import FakeBot, TypeFaker


@pytest.fixture
def config() -> BotConfig:
    return BotConfig(token="123456:TEST", fake_seed=1234, bot_username="test_bot")


@pytest.fixture
def bot(config: BotConfig) -> FakeBot:
    return FakeBot.instance(config=config)


@pytest.fixture
def type_faker() -> TypeFaker:
    return TypeFaker(seed=42)


@pytest.fixture
def console() -> Console:
    return Console(file=io.StringIO(), width=120, color_system=None, force_terminal=False)


@pytest.fixture
def message_payload() -> dict[str, Any]:
    return {
        "message_id": 7,
        "date": 1700000000,
        "chat": {"id": 42, "type": "private", "first_name": "Ada"},
        "from": {"id": 42, "is_bot": False, "first_name": "Ada"},
        "text": "canned",
    }

"""Files, webhooks and bot commands."""

from __future__ import annotations

from botdouble.types.base import TelegramObject


class File(TelegramObject):
    file_id: str
    file_unique_id: str
    file_size: int | None = None
    file_path: str | None = None


class WebhookInfo(TelegramObject):
    url: str
    has_custom_certificate: bool
    pending_update_count: int
    last_error_date: int | None = None
    last_error_message: str | None = None
    max_connections: int | None = None


class BotCommand(TelegramObject):
    command: str
    description: str

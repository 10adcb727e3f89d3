"""Users, chats and chat members."""

from __future__ import annotations

from typing import Literal

from botdouble.types.base import TelegramObject


class User(TelegramObject):
    id: int
    is_bot: bool
    first_name: str
    last_name: str | None = None
    username: str | None = None
    language_code: str | None = None
    is_premium: bool | None = None

    @property
    def full_name(self) -> str:
        if self.last_name:
            return f"{self.first_name} {self.last_name}"
        return self.first_name


class Chat(TelegramObject):
    id: int
    type: Literal["private", "group", "supergroup", "channel"]
    title: str | None = None
    username: str | None = None
    first_name: str | None = None
    last_name: str | None = None


class ChatMember(TelegramObject):
    status: Literal["creator", "administrator", "member", "restricted", "left", "kicked"]
    user: User

"""Incoming updates."""

from __future__ import annotations

from pydantic import Field

from botdouble.types.base import TelegramObject
from botdouble.types.chat import Chat, User
from botdouble.types.message import Message


class CallbackQuery(TelegramObject):
    id: str
    from_user: User = Field(alias="from")
    chat_instance: str
    message: Message | None = None
    data: str | None = None


class Update(TelegramObject):
    update_id: int
    message: Message | None = None
    edited_message: Message | None = None
    channel_post: Message | None = None
    edited_channel_post: Message | None = None
    callback_query: CallbackQuery | None = None

    @classmethod
    def payload_types(cls) -> dict[str, type[TelegramObject]]:
        """Map each update type name to the model it carries."""
        return {
            "message": Message,
            "edited_message": Message,
            "channel_post": Message,
            "edited_channel_post": Message,
            "callback_query": CallbackQuery,
        }

    def update_type(self) -> str | None:
        for name in self.payload_types():
            if getattr(self, name) is not None:
                return name
        return None

    def get_message(self) -> Message | None:
        if self.callback_query is not None:
            return self.callback_query.message
        return self.message or self.edited_message or self.channel_post or self.edited_channel_post

    def get_user(self) -> User | None:
        if self.callback_query is not None:
            return self.callback_query.from_user
        message = self.get_message()
        return message.from_user if message is not None else None

    def get_chat(self) -> Chat | None:
        message = self.get_message()
        return message.chat if message is not None else None

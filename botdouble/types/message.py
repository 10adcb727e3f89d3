"""Messages and the objects they carry."""

from __future__ import annotations

from pydantic import Field

from botdouble.types.base import TelegramObject
from botdouble.types.chat import Chat, User


class MessageEntity(TelegramObject):
    type: str
    offset: int
    length: int
    url: str | None = None


class PhotoSize(TelegramObject):
    file_id: str
    file_unique_id: str
    width: int
    height: int
    file_size: int | None = None


class Document(TelegramObject):
    file_id: str
    file_unique_id: str
    file_name: str | None = None
    mime_type: str | None = None
    file_size: int | None = None


class Location(TelegramObject):
    latitude: float
    longitude: float


class InlineKeyboardButton(TelegramObject):
    text: str
    callback_data: str | None = None
    url: str | None = None


class InlineKeyboardMarkup(TelegramObject):
    inline_keyboard: list[list[InlineKeyboardButton]]


class Message(TelegramObject):
    message_id: int
    date: int
    chat: Chat
    from_user: User | None = Field(default=None, alias="from")
    text: str | None = None
    entities: list[MessageEntity] | None = None
    caption: str | None = None
    photo: list[PhotoSize] | None = None
    document: Document | None = None
    location: Location | None = None
    reply_to_message: Message | None = None
    reply_markup: InlineKeyboardMarkup | None = None

    def command(self) -> str | None:
        """Return the bot command the message starts with, without the slash."""
        if not self.text or not self.text.startswith("/"):
            return None
        return self.text[1:].split(maxsplit=1)[0].split("@", 1)[0]


class MessageId(TelegramObject):
    message_id: int


Message.model_rebuild()

"""Bot API object models."""

from botdouble.types.base import TelegramObject
from botdouble.types.chat import Chat, ChatMember, User
from botdouble.types.input_file import InputFile
from botdouble.types.message import (
    Document,
    InlineKeyboardButton,
    InlineKeyboardMarkup,
    Location,
    Message,
    MessageEntity,
    MessageId,
    PhotoSize,
)
from botdouble.types.misc import BotCommand, File, WebhookInfo
from botdouble.types.update import CallbackQuery, Update

__all__ = [
    "TelegramObject",
    "User",
    "Chat",
    "ChatMember",
    "InputFile",
    "Document",
    "InlineKeyboardButton",
    "InlineKeyboardMarkup",
    "Location",
    "Message",
    "MessageEntity",
    "MessageId",
    "PhotoSize",
    "BotCommand",
    "File",
    "WebhookInfo",
    "CallbackQuery",
    "Update",
]

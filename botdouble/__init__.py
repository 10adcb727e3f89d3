"""botdouble - a Bot API client and the test double that fakes it.

botdouble ships a small Telegram-style bot runtime (a typed Bot API client
over httpx, handlers, middleware and conversations) together with FakeBot,
which intercepts every outgoing request, answers with canned or faked Bot API
responses and records the requests for assertions.

Example:
    >>> from botdouble import Bot
    >>> from botdouble.testing import FakeBot
    >>>
    >>> def register(bot: Bot) -> None:
    ...     @bot.on_command("start")
    ...     def start(bot):
    ...         bot.send_message("Welcome!")
    >>>
    >>> bot = FakeBot.instance()
    >>> register(bot)
    >>> bot.hear_text("/start").reply().assert_reply_text("Welcome!")
"""

from botdouble.bot import Bot, FakeRunningMode, Handler, RunningMode
from botdouble.client import BotApi
from botdouble.config import BotConfig, load_config
from botdouble.errors import (
    BotDoubleError,
    BotError,
    EmptyResponseQueueError,
    ErrorCode,
    ResponseEncodeError,
    TelegramError,
    UnsupportedContentTypeError,
)

__version__ = "0.1.0"

__all__ = [
    "Bot",
    "BotApi",
    "BotConfig",
    "load_config",
    "FakeRunningMode",
    "Handler",
    "RunningMode",
    "BotDoubleError",
    "BotError",
    "EmptyResponseQueueError",
    "ErrorCode",
    "ResponseEncodeError",
    "TelegramError",
    "UnsupportedContentTypeError",
]

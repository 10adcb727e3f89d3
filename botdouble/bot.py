"""Minimal bot runtime: handlers, middleware, conversations and running modes.

Example:
    >>> bot = Bot(config=BotConfig(token="123:abc"))
    >>>
    >>> @bot.on_command("start")
    ... def start(bot):
    ...     bot.send_message("Welcome!")
    >>>
    >>> @bot.on_text("my name is {name}")
    ... def greet(bot, name):
    ...     bot.send_message(f"Hi {name}")
    >>>
    >>> bot.set_running_mode(FakeRunningMode(update))
    >>> bot.run()
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import Any, Protocol

import httpx

from botdouble.cache import MemoryCache
from botdouble.client import BotApi
from botdouble.config import BotConfig
from botdouble.errors import BotError, ErrorCode
from botdouble.types import CallbackQuery, Chat, Message, Update, User

logger = logging.getLogger(__name__)

HandlerCallback = Callable[..., Any]
Middleware = Callable[["Bot", Callable[["Bot"], Any]], Any]
ExceptionHandler = Callable[["Bot", Exception], Any]

_PLACEHOLDER = re.compile(r"\{(\w+)\}")


def compile_pattern(pattern: str) -> str:
    """Turn ``"buy {qty} {item}"`` into a regex with one group per placeholder."""
    parts = []
    position = 0
    for match in _PLACEHOLDER.finditer(pattern):
        parts.append(re.escape(pattern[position : match.start()]))
        parts.append(r"(.*)")
        position = match.end()
    parts.append(re.escape(pattern[position:]))
    return "".join(parts)


@dataclass
class Handler:
    """A callback bound to an update type and an optional pattern.

    Attributes:
        callback: Called as ``callback(bot, *params)``
        update_type: Update type it listens to (``"*"`` for all)
        regex: Compiled pattern matched against the message text or callback data
    """

    callback: HandlerCallback
    update_type: str
    regex: re.Pattern[str] | None = None
    name: str = field(default="")

    def __post_init__(self) -> None:
        if not self.name:
            self.name = getattr(self.callback, "__name__", repr(self.callback))

    def match(self, update: Update) -> list[str] | None:
        """Return the captured parameters if this handler accepts the update."""
        update_type = update.update_type()
        if self.update_type != "*" and self.update_type != update_type:
            return None
        if self.regex is None:
            return []

        if update_type == "callback_query":
            value = update.callback_query.data if update.callback_query else None
        else:
            message = update.get_message()
            value = message.text if message is not None else None
        if value is None:
            return None

        found = self.regex.fullmatch(value)
        if found is None:
            return None
        return [group.strip() if group else group for group in found.groups()]


class RunningMode(Protocol):
    """Decides where updates come from."""

    def process(self, bot: Bot) -> None: ...


class FakeRunningMode:
    """Processes the updates it was given, once, without any network."""

    def __init__(self, update: Update | dict[str, Any] | Iterable[Update | dict[str, Any]] | None = None) -> None:
        if update is None:
            self.updates: list[Update | dict[str, Any]] = []
        elif isinstance(update, (Update, dict)):
            self.updates = [update]
        else:
            self.updates = list(update)

    def process(self, bot: Bot) -> None:
        for update in self.updates:
            bot.process_update(update)


class Bot(BotApi):
    """A bot: Bot API client plus handler dispatch.

    Args:
        token: Overrides ``config.token``.
        config: Bot configuration (defaults are read from the environment).
        transport: Optional httpx transport.
    """

    def __init__(
        self,
        token: str | None = None,
        config: BotConfig | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.config = config or BotConfig()
        super().__init__(
            token or self.config.token,
            api_url=self.config.api_url,
            transport=transport,
            timeout=self.config.timeout,
        )
        self.cache = MemoryCache()
        self.handlers: list[Handler] = []
        self.fallbacks: list[Handler] = []
        self.global_middlewares: list[Middleware] = []
        self.update: Update | None = None
        self._exception_handler: ExceptionHandler | None = None
        self._running_mode: RunningMode | None = None

    # Registration

    def _register(
        self,
        target: list[Handler],
        update_type: str,
        regex: str | None,
        callback: HandlerCallback | None,
    ) -> Any:
        compiled = re.compile(regex, re.IGNORECASE | re.DOTALL) if regex is not None else None

        def decorator(fn: HandlerCallback) -> HandlerCallback:
            target.append(Handler(callback=fn, update_type=update_type, regex=compiled))
            return fn

        if callback is not None:
            return decorator(callback)
        return decorator

    def on_message(self, callback: HandlerCallback | None = None) -> Any:
        return self._register(self.handlers, "message", None, callback)

    def on_text(self, pattern: str, callback: HandlerCallback | None = None) -> Any:
        return self._register(self.handlers, "message", compile_pattern(pattern), callback)

    def on_command(self, command: str, callback: HandlerCallback | None = None) -> Any:
        """Listen to ``/command``, ``/command@botname`` and their arguments.

        Placeholders after the command name become parameters:
        ``on_command("buy {item}")`` matches ``/buy apples``.
        """
        name, _, arguments = command.lstrip("/").partition(" ")
        mention = re.escape(self.config.bot_username) if self.config.bot_username else r"\w+"
        regex = "/" + re.escape(name) + f"(?:@{mention})?"
        if arguments:
            regex += r"\s+" + compile_pattern(arguments)
        else:
            regex += r"(?:\s+.*)?"
        return self._register(self.handlers, "message", regex, callback)

    def on_callback_query(self, callback: HandlerCallback | None = None) -> Any:
        return self._register(self.handlers, "callback_query", None, callback)

    def on_callback_query_data(self, pattern: str, callback: HandlerCallback | None = None) -> Any:
        return self._register(self.handlers, "callback_query", compile_pattern(pattern), callback)

    def on_update_type(self, update_type: str, callback: HandlerCallback | None = None) -> Any:
        return self._register(self.handlers, update_type, None, callback)

    def fallback(self, callback: HandlerCallback | None = None) -> Any:
        """Run when no other handler matched the update."""
        return self._register(self.fallbacks, "*", None, callback)

    def on_exception(self, handler: ExceptionHandler) -> ExceptionHandler:
        self._exception_handler = handler
        return handler

    def middleware(self, middleware: Middleware) -> Middleware:
        """Append a global middleware, called as ``middleware(bot, next_)``."""
        self.global_middlewares.append(middleware)
        return middleware

    # Update context

    def message(self) -> Message | None:
        return self.update.get_message() if self.update is not None else None

    def callback_query(self) -> CallbackQuery | None:
        return self.update.callback_query if self.update is not None else None

    def user(self) -> User | None:
        return self.update.get_user() if self.update is not None else None

    def chat(self) -> Chat | None:
        return self.update.get_chat() if self.update is not None else None

    def user_id(self) -> int | None:
        user = self.user()
        return user.id if user is not None else None

    def chat_id(self) -> int | None:
        chat = self.chat()
        return chat.id if chat is not None else None

    def _default_chat_id(self) -> int | None:
        return self.chat_id()

    def _default_callback_query_id(self) -> str | None:
        query = self.callback_query()
        return query.id if query is not None else None

    # Conversations

    @staticmethod
    def conversation_key(user_id: int | None, chat_id: int | None) -> str:
        return f"conversation:{user_id}:{chat_id}"

    def _conversation_ids(self, user_id: int | None, chat_id: int | None) -> tuple[int | None, int | None]:
        user_id = user_id if user_id is not None else self.user_id()
        chat_id = chat_id if chat_id is not None else self.chat_id()
        if user_id is None and chat_id is None:
            raise BotError(
                "A conversation needs a user or a chat",
                error_code=ErrorCode.HANDLER_FAILED,
            )
        return user_id, chat_id

    def step_conversation(
        self,
        step: HandlerCallback,
        user_id: int | None = None,
        chat_id: int | None = None,
    ) -> None:
        """Run ``step`` on the next update of this user in this chat."""
        user_id, chat_id = self._conversation_ids(user_id, chat_id)
        self.cache.set(self.conversation_key(user_id, chat_id), step)
        logger.debug(f"Conversation step for {user_id}/{chat_id}: {getattr(step, '__name__', step)}")

    def end_conversation(self, user_id: int | None = None, chat_id: int | None = None) -> None:
        user_id, chat_id = self._conversation_ids(user_id, chat_id)
        self.cache.delete(self.conversation_key(user_id, chat_id))

    def current_conversation(self, user_id: int | None, chat_id: int | None) -> HandlerCallback | None:
        return self.cache.get(self.conversation_key(user_id, chat_id))

    # Running

    def set_running_mode(self, mode: RunningMode) -> None:
        self._running_mode = mode

    def run(self) -> None:
        if self._running_mode is None:
            raise BotError("No running mode set, call set_running_mode() first")
        self._running_mode.process(self)

    def resolve_handlers(self, update: Update) -> list[tuple[HandlerCallback, list[str]]]:
        """Pick what runs for ``update``: a pending conversation step, the matching handlers, or the fallbacks."""
        step = self.current_conversation(update_user_id(update), update_chat_id(update))
        if step is not None:
            return [(step, [])]

        resolved = []
        for handler in self.handlers:
            params = handler.match(update)
            if params is not None:
                resolved.append((handler.callback, params))
        if resolved:
            return resolved
        return [(handler.callback, []) for handler in self.fallbacks]

    def process_update(self, update: Update | dict[str, Any]) -> None:
        if isinstance(update, dict):
            update = Update.model_validate(update)
        self.update = update

        resolved = self.resolve_handlers(update)
        if not resolved:
            logger.debug(f"No handler for update {update.update_id} ({update.update_type()})")
            return

        for callback, params in resolved:
            logger.debug(f"Dispatching update {update.update_id} to {getattr(callback, '__name__', callback)}")
            try:
                self._through_middleware(callback, params)
            except Exception as e:
                if self._exception_handler is None:
                    raise
                self._exception_handler(self, e)

    def _through_middleware(self, callback: HandlerCallback, params: list[str]) -> Any:
        def core(bot: Bot) -> Any:
            return callback(bot, *params)

        def wrap(middleware: Middleware, next_: Callable[[Bot], Any]) -> Callable[[Bot], Any]:
            return lambda bot: middleware(bot, next_)

        chain: Callable[[Bot], Any] = core
        for middleware in reversed(self.global_middlewares):
            chain = wrap(middleware, chain)
        return chain(self)


def update_user_id(update: Update) -> int | None:
    user = update.get_user()
    return user.id if user is not None else None


def update_chat_id(update: Update) -> int | None:
    chat = update.get_chat()
    return chat.id if chat is not None else None

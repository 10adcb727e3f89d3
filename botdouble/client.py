"""Typed Bot API client over httpx.

Every Bot API method is a regular Python method whose return annotation is
the shape of the ``result`` field the API answers with. Those annotations are
read back by reflection (``api_methods``), both to validate real responses
and to let the testing fakes build plausible ones.

Example:
    >>> api = BotApi(token="123:abc")
    >>> me = api.get_me()
    >>> api.send_message("hello", chat_id=me.id)
"""

from __future__ import annotations

import functools
import inspect
import json
import logging
import types
from collections.abc import Callable
from typing import Any, TypeVar, Union, get_args, get_origin, get_type_hints

import httpx
from pydantic import TypeAdapter
from pydantic_core import to_jsonable_python

from botdouble.config import DEFAULT_API_URL
from botdouble.errors import TelegramError
from botdouble.types import (
    BotCommand,
    Chat,
    ChatMember,
    File,
    InlineKeyboardMarkup,
    InputFile,
    Message,
    MessageId,
    Update,
    User,
    WebhookInfo,
)

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])

ApiErrorHandler = Callable[[Any, TelegramError], Any]


def to_camel(name: str) -> str:
    """``send_message`` -> ``sendMessage``."""
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


def api_method(fn: F) -> F:
    """Mark a method as a Bot API endpoint named after it in camelCase."""
    fn.__bot_api_endpoint__ = to_camel(fn.__name__)  # type: ignore[attr-defined]
    return fn


def union_members(tp: Any) -> tuple[Any, ...]:
    """Members of a union annotation, or a 1-tuple with the type itself."""
    if get_origin(tp) in (Union, types.UnionType):
        return get_args(tp)
    return (tp,)


@functools.cache
def _reflect_api_methods(cls: type) -> tuple[tuple[str, str, Any], ...]:
    """``(method name, endpoint, return annotation)`` for every endpoint of ``cls``, computed once per class."""
    found = []
    for name, member in inspect.getmembers(cls, predicate=inspect.isfunction):
        endpoint = getattr(member, "__bot_api_endpoint__", None)
        if endpoint is not None:
            found.append((name, endpoint, get_type_hints(member).get("return", Any)))
    return tuple(found)


def _form_value(value: Any) -> str:
    if isinstance(value, str):
        return value
    return json.dumps(to_jsonable_python(value, by_alias=True, exclude_none=True))


class BotApi:
    """HTTP client for the Bot API.

    Args:
        token: Bot token, used in the URL path.
        api_url: Bot API server root.
        transport: Optional httpx transport (the testing fakes plug in here).
        timeout: Request timeout in seconds.
    """

    def __init__(
        self,
        token: str,
        api_url: str = DEFAULT_API_URL,
        transport: httpx.BaseTransport | None = None,
        timeout: float = 5.0,
    ) -> None:
        self.token = token
        self.api_url = api_url.rstrip("/")
        self._http = httpx.Client(
            base_url=f"{self.api_url}/bot{token}/",
            transport=transport,
            timeout=timeout,
        )
        self._api_error_handler: ApiErrorHandler | None = None

    # Reflection

    @classmethod
    def api_methods(cls) -> dict[str, Any]:
        """Map every endpoint name to the return annotation of its method."""
        return {endpoint: return_type for _, endpoint, return_type in _reflect_api_methods(cls)}

    @classmethod
    def methods_returning(cls, tp: Any) -> list[str]:
        """Names of the methods whose return annotation is, or includes, ``tp``."""
        return [name for name, _, return_type in _reflect_api_methods(cls) if tp in union_members(return_type)]

    # Transport

    def on_api_error(self, handler: ApiErrorHandler) -> ApiErrorHandler:
        """Handle ``ok: false`` answers instead of raising TelegramError."""
        self._api_error_handler = handler
        return handler

    def _default_chat_id(self) -> int | None:
        return None

    def _default_callback_query_id(self) -> str | None:
        return None

    def _call(self, endpoint: str, **params: Any) -> Any:
        return_type = self.api_methods().get(endpoint, Any)
        payload = {key: value for key, value in params.items() if value is not None}
        files = {key: value for key, value in payload.items() if isinstance(value, InputFile)}

        logger.debug(f"Calling {endpoint} with {sorted(payload)}")
        if files:
            data = {key: _form_value(value) for key, value in payload.items() if key not in files}
            response = self._http.post(
                endpoint,
                data=data,
                files={key: value.as_httpx_file() for key, value in files.items()},
            )
        else:
            response = self._http.post(
                endpoint,
                json=to_jsonable_python(payload, by_alias=True, exclude_none=True),
            )
        return self._decode(endpoint, response, return_type)

    def _decode(self, endpoint: str, response: httpx.Response, return_type: Any) -> Any:
        try:
            body = response.json()
        except ValueError as e:
            raise TelegramError(
                f"Invalid JSON answer from {endpoint}",
                code=response.status_code,
                endpoint=endpoint,
            ) from e

        if not body.get("ok", False):
            error = TelegramError(
                body.get("description"),
                code=body.get("error_code", response.status_code),
                parameters=body.get("parameters"),
                endpoint=endpoint,
            )
            if self._api_error_handler is not None:
                logger.info(f"{endpoint} failed, delegating to API error handler: {error}")
                self._api_error_handler(self, error)
                return None
            raise error

        result = body.get("result")
        if result is None:
            return None
        return TypeAdapter(return_type).validate_python(result)

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> BotApi:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()

    # Bot API methods

    @api_method
    def get_me(self) -> User:
        return self._call("getMe")

    @api_method
    def get_updates(
        self,
        offset: int | None = None,
        limit: int | None = None,
        timeout: int | None = None,
    ) -> list[Update]:
        return self._call("getUpdates", offset=offset, limit=limit, timeout=timeout)

    @api_method
    def set_webhook(self, url: str, drop_pending_updates: bool | None = None) -> bool:
        return self._call("setWebhook", url=url, drop_pending_updates=drop_pending_updates)

    @api_method
    def delete_webhook(self, drop_pending_updates: bool | None = None) -> bool:
        return self._call("deleteWebhook", drop_pending_updates=drop_pending_updates)

    @api_method
    def get_webhook_info(self) -> WebhookInfo:
        return self._call("getWebhookInfo")

    @api_method
    def send_message(
        self,
        text: str,
        chat_id: int | str | None = None,
        parse_mode: str | None = None,
        reply_to_message_id: int | None = None,
        reply_markup: InlineKeyboardMarkup | None = None,
    ) -> Message:
        return self._call(
            "sendMessage",
            chat_id=chat_id if chat_id is not None else self._default_chat_id(),
            text=text,
            parse_mode=parse_mode,
            reply_to_message_id=reply_to_message_id,
            reply_markup=reply_markup,
        )

    @api_method
    def forward_message(self, chat_id: int | str, from_chat_id: int | str, message_id: int) -> Message:
        return self._call(
            "forwardMessage",
            chat_id=chat_id,
            from_chat_id=from_chat_id,
            message_id=message_id,
        )

    @api_method
    def copy_message(self, chat_id: int | str, from_chat_id: int | str, message_id: int) -> MessageId:
        return self._call(
            "copyMessage",
            chat_id=chat_id,
            from_chat_id=from_chat_id,
            message_id=message_id,
        )

    @api_method
    def send_photo(
        self,
        photo: InputFile | str,
        chat_id: int | str | None = None,
        caption: str | None = None,
        reply_markup: InlineKeyboardMarkup | None = None,
    ) -> Message:
        return self._call(
            "sendPhoto",
            chat_id=chat_id if chat_id is not None else self._default_chat_id(),
            photo=photo,
            caption=caption,
            reply_markup=reply_markup,
        )

    @api_method
    def send_document(
        self,
        document: InputFile | str,
        chat_id: int | str | None = None,
        caption: str | None = None,
        reply_markup: InlineKeyboardMarkup | None = None,
    ) -> Message:
        return self._call(
            "sendDocument",
            chat_id=chat_id if chat_id is not None else self._default_chat_id(),
            document=document,
            caption=caption,
            reply_markup=reply_markup,
        )

    @api_method
    def send_location(
        self,
        latitude: float,
        longitude: float,
        chat_id: int | str | None = None,
    ) -> Message:
        return self._call(
            "sendLocation",
            chat_id=chat_id if chat_id is not None else self._default_chat_id(),
            latitude=latitude,
            longitude=longitude,
        )

    @api_method
    def send_chat_action(self, action: str, chat_id: int | str | None = None) -> bool:
        return self._call(
            "sendChatAction",
            chat_id=chat_id if chat_id is not None else self._default_chat_id(),
            action=action,
        )

    @api_method
    def edit_message_text(
        self,
        text: str,
        chat_id: int | str | None = None,
        message_id: int | None = None,
        inline_message_id: str | None = None,
        reply_markup: InlineKeyboardMarkup | None = None,
    ) -> Message | bool:
        if inline_message_id is None and chat_id is None:
            chat_id = self._default_chat_id()
        return self._call(
            "editMessageText",
            chat_id=chat_id,
            message_id=message_id,
            inline_message_id=inline_message_id,
            text=text,
            reply_markup=reply_markup,
        )

    @api_method
    def edit_message_reply_markup(
        self,
        chat_id: int | str | None = None,
        message_id: int | None = None,
        inline_message_id: str | None = None,
        reply_markup: InlineKeyboardMarkup | None = None,
    ) -> Message | bool:
        if inline_message_id is None and chat_id is None:
            chat_id = self._default_chat_id()
        return self._call(
            "editMessageReplyMarkup",
            chat_id=chat_id,
            message_id=message_id,
            inline_message_id=inline_message_id,
            reply_markup=reply_markup,
        )

    @api_method
    def delete_message(self, message_id: int, chat_id: int | str | None = None) -> bool:
        return self._call(
            "deleteMessage",
            chat_id=chat_id if chat_id is not None else self._default_chat_id(),
            message_id=message_id,
        )

    @api_method
    def answer_callback_query(
        self,
        callback_query_id: str | None = None,
        text: str | None = None,
        show_alert: bool | None = None,
    ) -> bool:
        if callback_query_id is None:
            callback_query_id = self._default_callback_query_id()
        return self._call(
            "answerCallbackQuery",
            callback_query_id=callback_query_id,
            text=text,
            show_alert=show_alert,
        )

    @api_method
    def get_chat(self, chat_id: int | str | None = None) -> Chat:
        return self._call("getChat", chat_id=chat_id if chat_id is not None else self._default_chat_id())

    @api_method
    def get_chat_member(self, user_id: int, chat_id: int | str | None = None) -> ChatMember:
        return self._call(
            "getChatMember",
            chat_id=chat_id if chat_id is not None else self._default_chat_id(),
            user_id=user_id,
        )

    @api_method
    def pin_chat_message(self, message_id: int, chat_id: int | str | None = None) -> bool:
        return self._call(
            "pinChatMessage",
            chat_id=chat_id if chat_id is not None else self._default_chat_id(),
            message_id=message_id,
        )

    @api_method
    def get_file(self, file_id: str) -> File:
        return self._call("getFile", file_id=file_id)

    @api_method
    def set_my_commands(self, commands: list[BotCommand]) -> bool:
        return self._call("setMyCommands", commands=commands)

    @api_method
    def get_my_commands(self) -> list[BotCommand]:
        return self._call("getMyCommands")

"""Tests for the typed Bot API client."""

from __future__ import annotations

import json

import httpx
import pytest

from botdouble import client as client_module
from botdouble.client import BotApi, to_camel, union_members
from botdouble.errors import TelegramError
from botdouble.testing import FakeBot, QueueTransport, encode_json_response
from botdouble.types import (
    BotCommand,
    InlineKeyboardButton,
    InlineKeyboardMarkup,
    InputFile,
    Message,
    Update,
    User,
)


def make_api(*payloads: dict, status: int = 200) -> tuple[BotApi, QueueTransport]:
    transport = QueueTransport([encode_json_response(payload, status=status) for payload in payloads])
    return BotApi(token="123:abc", transport=transport), transport


def sent_json(transport: QueueTransport, index: int = 0) -> dict:
    return json.loads(transport.history[index].request.content)


class TestReflection:
    """Tests for api_methods and methods_returning."""

    def test_to_camel(self) -> None:
        assert to_camel("send_message") == "sendMessage"
        assert to_camel("get_me") == "getMe"
        assert to_camel("edit_message_reply_markup") == "editMessageReplyMarkup"

    def test_union_members(self) -> None:
        assert union_members(Message | bool) == (Message, bool)
        assert union_members(User) == (User,)

    def test_api_methods_maps_endpoints_to_return_types(self) -> None:
        registry = BotApi.api_methods()
        assert registry["sendMessage"] is Message
        assert registry["getMe"] is User
        assert registry["deleteMessage"] is bool
        assert registry["getUpdates"] == list[Update]
        assert union_members(registry["editMessageText"]) == (Message, bool)

    def test_helpers_are_not_endpoints(self) -> None:
        registry = BotApi.api_methods()
        assert "close" not in registry
        assert "apiMethods" not in registry

    def test_subclasses_inherit_endpoints(self) -> None:
        assert FakeBot.api_methods() == BotApi.api_methods()

    def test_reflection_runs_once_per_class(self, monkeypatch: pytest.MonkeyPatch) -> None:
        BotApi.api_methods()
        monkeypatch.setattr(client_module, "get_type_hints", lambda member: pytest.fail("reflected again"))

        api, _ = make_api({"ok": True, "result": True})

        assert api.delete_message(1, chat_id=1) is True
        assert BotApi.api_methods()["getMe"] is User
        assert "delete_message" in BotApi.methods_returning(bool)

    def test_api_methods_returns_a_fresh_dict(self) -> None:
        BotApi.api_methods().clear()
        assert "sendMessage" in BotApi.api_methods()

    def test_methods_returning(self) -> None:
        returning_message = BotApi.methods_returning(Message)
        assert "send_message" in returning_message
        assert "edit_message_text" in returning_message
        assert "get_me" not in returning_message

        returning_bool = BotApi.methods_returning(bool)
        assert "delete_message" in returning_bool
        assert "edit_message_text" in returning_bool


class TestRequests:
    """Tests for how parameters are sent."""

    def test_json_request_drops_none(self) -> None:
        api, transport = make_api({"ok": True, "result": {"message_id": 1, "date": 0, "chat": {"id": 9, "type": "private"}}})

        api.send_message("hello", chat_id=9)

        request = transport.history[0].request
        assert request.url.path.endswith("/sendMessage")
        assert request.headers["content-type"] == "application/json"
        assert sent_json(transport) == {"chat_id": 9, "text": "hello"}

    def test_models_are_serialized(self) -> None:
        api, transport = make_api({"ok": True, "result": True})
        markup = InlineKeyboardMarkup(inline_keyboard=[[InlineKeyboardButton(text="Go", callback_data="go")]])

        api.edit_message_reply_markup(chat_id=1, message_id=2, reply_markup=markup)

        assert sent_json(transport)["reply_markup"] == {
            "inline_keyboard": [[{"text": "Go", "callback_data": "go"}]]
        }

    def test_list_of_models_is_serialized(self) -> None:
        api, transport = make_api({"ok": True, "result": True})

        api.set_my_commands([BotCommand(command="start", description="Start")])

        assert sent_json(transport) == {"commands": [{"command": "start", "description": "Start"}]}

    def test_input_file_switches_to_multipart(self) -> None:
        api, transport = make_api({"ok": True, "result": {"message_id": 1, "date": 0, "chat": {"id": 9, "type": "private"}}})

        api.send_document(InputFile(b"data", "notes.txt"), chat_id=9, caption="notes")

        request = transport.history[0].request
        assert request.headers["content-type"].startswith("multipart/form-data")
        form = FakeBot.get_actual_data(request)
        assert form["chat_id"] == "9"
        assert form["caption"] == "notes"
        assert form["document"].filename == "notes.txt"
        assert form["document"].content_type == "text/plain"
        assert form["document"].content == b"data"

    def test_input_file_from_path(self, tmp_path) -> None:
        path = tmp_path / "photo.png"
        path.write_bytes(b"png")
        input_file = InputFile.from_path(path)
        assert input_file.filename == "photo.png"
        assert input_file.content_type == "image/png"
        assert input_file.as_httpx_file() == ("photo.png", b"png", "image/png")


class TestResponses:
    """Tests for response decoding."""

    def test_result_is_validated_into_return_type(self) -> None:
        api, _ = make_api({"ok": True, "result": {"id": 1, "is_bot": True, "first_name": "Bot"}})
        me = api.get_me()
        assert isinstance(me, User)
        assert me.is_bot is True

    def test_union_result(self) -> None:
        api, _ = make_api({"ok": True, "result": True})
        assert api.edit_message_text("x", chat_id=1, message_id=1) is True

    def test_list_result(self) -> None:
        api, _ = make_api({"ok": True, "result": [{"update_id": 1}, {"update_id": 2}]})
        updates = api.get_updates()
        assert [update.update_id for update in updates] == [1, 2]

    def test_null_result(self) -> None:
        api, _ = make_api({"ok": True})
        assert api.get_me() is None

    def test_not_ok_raises(self) -> None:
        api, _ = make_api(
            {"ok": False, "error_code": 403, "description": "Forbidden: bot was blocked by the user"},
            status=403,
        )

        with pytest.raises(TelegramError) as exc_info:
            api.send_message("hi", chat_id=1)

        error = exc_info.value
        assert error.code == 403
        assert error.description == "Forbidden: bot was blocked by the user"
        assert error.endpoint == "sendMessage"

    def test_not_ok_goes_to_api_error_handler(self) -> None:
        api, _ = make_api({"ok": False, "error_code": 429, "description": "Too Many Requests", "parameters": {"retry_after": 3}})
        seen: list[TelegramError] = []

        @api.on_api_error
        def handler(bot: BotApi, error: TelegramError) -> None:
            seen.append(error)

        assert api.send_message("hi", chat_id=1) is None
        assert seen[0].parameters == {"retry_after": 3}

    def test_invalid_json_raises(self) -> None:
        transport = QueueTransport([httpx.Response(502, content=b"<html>Bad Gateway</html>")])
        api = BotApi(token="123:abc", transport=transport)

        with pytest.raises(TelegramError) as exc_info:
            api.get_me()

        assert exc_info.value.code == 502

    def test_context_manager_closes(self) -> None:
        api, _ = make_api()
        with api as entered:
            assert entered is api
        assert api._http.is_closed

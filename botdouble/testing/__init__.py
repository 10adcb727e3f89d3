"""Testing helpers: a Bot double with canned and faked API responses.

Example:
    >>> from botdouble.testing import FakeBot
    >>>
    >>> bot = FakeBot.instance()
    >>> bot.on_text("ping", lambda bot: bot.send_message("pong"))
    >>> bot.hear_text("ping").reply().assert_reply_text("pong")
"""

from botdouble.testing.fake_bot import FakeBot
from botdouble.testing.form_data import FormData, FormDataParser, UploadedFile
from botdouble.testing.transport import (
    HistoryEntry,
    QueueTransport,
    encode_json_response,
    endpoint_of,
)
from botdouble.testing.type_faker import TypeFaker

__all__ = [
    "FakeBot",
    "FormData",
    "FormDataParser",
    "UploadedFile",
    "HistoryEntry",
    "QueueTransport",
    "encode_json_response",
    "endpoint_of",
    "TypeFaker",
]

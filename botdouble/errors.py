"""Exception hierarchy for botdouble.

Every botdouble error inherits from BotDoubleError and carries:
- error_code: an ErrorCode enum for programmatic handling
- context: a dict with request/endpoint details useful when debugging

Example:
    try:
        bot.send_message("hello")
    except TelegramError as e:
        print(f"[{e.error_code.value}] {e.description}")
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorCode(Enum):
    """Error codes, grouped by category.

    - E1xx: Bot API errors
    - E2xx: Fake transport errors
    - E3xx: Request inspection errors
    - E4xx: Bot runtime errors
    - E9xx: Unknown/internal errors
    """

    API_ERROR = "E101"

    EMPTY_RESPONSE_QUEUE = "E201"
    RESPONSE_ENCODE_FAILED = "E202"

    UNSUPPORTED_CONTENT_TYPE = "E301"

    RUNNING_MODE_MISSING = "E401"
    HANDLER_FAILED = "E402"

    UNKNOWN = "E999"

    @property
    def category(self) -> str:
        """Get the error category name."""
        code_num = int(self.value[1:])
        if code_num < 200:
            return "api"
        elif code_num < 300:
            return "transport"
        elif code_num < 400:
            return "request"
        elif code_num < 500:
            return "runtime"
        else:
            return "unknown"


class BotDoubleError(Exception):
    """Base exception for all botdouble errors.

    Attributes:
        error_code: Unique ErrorCode for this error type
        message: Human-readable error description
        context: Extra details (endpoint, request, response...)
        cause: The underlying exception (if any)
    """

    error_code: ErrorCode = ErrorCode.UNKNOWN
    default_message: str = "An unexpected error occurred"

    def __init__(
        self,
        message: str | None = None,
        error_code: ErrorCode | None = None,
        cause: Exception | None = None,
        **context: Any,
    ) -> None:
        self.message = message or self.default_message
        self.error_code = error_code or self.error_code
        self.cause = cause
        self.context: dict[str, Any] = dict(context)
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"[{self.error_code.value}] {self.message}"

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for serialization."""
        result: dict[str, Any] = {
            "error_code": self.error_code.value,
            "category": self.error_code.category,
            "message": self.message,
            "context": self.context,
        }
        if self.cause is not None:
            result["cause"] = repr(self.cause)
        return result


class BotError(BotDoubleError):
    """Raised when the bot runtime is misused (no running mode, bad handler...)."""

    error_code = ErrorCode.RUNNING_MODE_MISSING
    default_message = "Bot runtime error"


class TelegramError(BotDoubleError):
    """Raised when the Bot API answers with ``ok: false``.

    Attributes:
        description: The ``description`` field of the API response
        code: The ``error_code`` field of the API response (HTTP-like)
        parameters: The ``parameters`` field, if any (retry_after, ...)
    """

    error_code = ErrorCode.API_ERROR
    default_message = "Bot API request failed"

    def __init__(
        self,
        description: str | None = None,
        code: int | None = None,
        parameters: dict[str, Any] | None = None,
        endpoint: str | None = None,
    ) -> None:
        self.description = description or self.default_message
        self.code = code
        self.parameters = parameters or {}
        self.endpoint = endpoint
        message = self.description if code is None else f"{self.description} (code {code})"
        super().__init__(message, endpoint=endpoint)


class UnsupportedContentTypeError(BotDoubleError, ValueError):
    """Raised when a recorded request body cannot be decoded."""

    error_code = ErrorCode.UNSUPPORTED_CONTENT_TYPE
    default_message = "Content-Type not supported"

    def __init__(self, content_type: str) -> None:
        self.content_type = content_type
        super().__init__(f"Content-Type '{content_type}' not supported", content_type=content_type)


class ResponseEncodeError(BotDoubleError):
    """Raised when a canned response cannot be encoded as JSON."""

    error_code = ErrorCode.RESPONSE_ENCODE_FAILED
    default_message = "Could not encode response as JSON"


class EmptyResponseQueueError(BotDoubleError):
    """Raised when a request reaches the fake transport and nothing is queued."""

    error_code = ErrorCode.EMPTY_RESPONSE_QUEUE
    default_message = "No queued response left for this request"

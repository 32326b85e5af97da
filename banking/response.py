"""Uniform JSON response envelopes for the HTTP API."""

from __future__ import annotations

from collections.abc import Mapping
from decimal import Decimal
from enum import Enum, IntEnum
from typing import Any

Reply = tuple[dict[str, Any], int]


class ResponseCode(IntEnum):
    SUCCESS = 200
    INVALID_PARAMS = 400
    UNAUTHORIZED = 401
    FORBIDDEN = 403
    NOT_FOUND = 404
    SERVER_ERROR = 500
    UNKNOWN_ERROR = 1000
    INSUFFICIENT_BALANCE = 1001
    ACCOUNT_NOT_FOUND = 1002
    INVALID_AMOUNT = 1003


_MESSAGES: dict[int, str] = {
    ResponseCode.SUCCESS: "success",
    ResponseCode.INVALID_PARAMS: "invalid parameters",
    ResponseCode.UNAUTHORIZED: "unauthorized",
    ResponseCode.FORBIDDEN: "forbidden",
    ResponseCode.NOT_FOUND: "not found",
    ResponseCode.SERVER_ERROR: "server error",
    ResponseCode.UNKNOWN_ERROR: "unknown error",
    ResponseCode.INSUFFICIENT_BALANCE: "insufficient balance",
    ResponseCode.ACCOUNT_NOT_FOUND: "account not found",
    ResponseCode.INVALID_AMOUNT: "invalid amount",
}


def get_msg(code: int) -> str:
    """Return the standard message for ``code``, or the unknown-error message."""
    return _MESSAGES.get(code, _MESSAGES[ResponseCode.UNKNOWN_ERROR])


def _jsonable(data: Any) -> Any:
    to_dict = getattr(data, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    if isinstance(data, Mapping):
        return {key: _jsonable(value) for key, value in data.items()}
    if isinstance(data, (list, tuple)):
        return [_jsonable(item) for item in data]
    if isinstance(data, Decimal):
        return str(data)
    if isinstance(data, Enum):
        return data.value
    return data


def _envelope(code: int, message: str, data: Any = None) -> dict[str, Any]:
    body: dict[str, Any] = {"code": int(code), "message": message}
    if data is not None:
        body["data"] = _jsonable(data)
    return body


def result(http_code: int, code: int, data: Any) -> Reply:
    """Build a body carrying ``code`` with its standard message, and the HTTP status."""
    return _envelope(code, get_msg(code), data), int(http_code)


def success(data: Any) -> Reply:
    return result(200, ResponseCode.SUCCESS, data)


def bad_request(message: str) -> Reply:
    return _envelope(ResponseCode.INVALID_PARAMS, message), 400


def internal_error(message: str) -> Reply:
    return _envelope(ResponseCode.SERVER_ERROR, message), 500
"""HTTP handlers for the account API."""

from __future__ import annotations

import json
import re
from decimal import Decimal
from typing import Any

from flask import Blueprint, request

from banking import response
from banking.response import Reply
from banking.service import AccountService
from banking.storage import StorageError

_MAX_UINT64 = 2**64 - 1
_DIGITS = re.compile(r"[0-9]+")
_DECIMAL_TEXT = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


class _BindError(ValueError):
    """The request body could not be bound to the expected fields."""


def _parse_id(text: str) -> int | None:
    if not _DIGITS.fullmatch(text):
        return None
    value = int(text)
    return value if value <= _MAX_UINT64 else None


def _reject_constant(name: str) -> Any:
    raise ValueError(f"invalid JSON value {name}")


def _body() -> dict[str, Any]:
    raw = request.get_data(cache=True)
    if not raw.strip():
        raise _BindError("EOF")
    try:
        data = json.loads(raw, parse_float=Decimal, parse_constant=_reject_constant)
    except ValueError as exc:
        raise _BindError(str(exc)) from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise _BindError("request body must be a JSON object")
    return data


def _required(struct: str, field: str) -> _BindError:
    return _BindError(
        f"Key: '{struct}.{field}' Error:Field validation for '{field}' failed on the 'required' tag"
    )


def _text(data: dict[str, Any], key: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise _BindError(f"{key}: expected a string")
    return value


def _amount(data: dict[str, Any], key: str) -> Decimal:
    value = data.get(key)
    if value is None:
        return Decimal(0)
    if isinstance(value, (int, Decimal)) and not isinstance(value, bool):
        return Decimal(value)
    if isinstance(value, str) and _DECIMAL_TEXT.fullmatch(value):
        return Decimal(value)
    raise _BindError(f"{key}: can't convert {value!r} to decimal")


def _uint(data: dict[str, Any], key: str) -> int:
    value = data.get(key)
    if value is None:
        return 0
    if isinstance(value, int) and not isinstance(value, bool) and 0 <= value <= _MAX_UINT64:
        return value
    raise _BindError(f"{key}: cannot use {value!r} as an unsigned 64-bit integer")


def _plain(amount: Decimal) -> str:
    return format(amount.normalize(), "f")


class AccountHandler:
    """Flask views for creating accounts and moving money."""

    def __init__(self, service: AccountService) -> None:
        self._service = service

    def blueprint(self) -> Blueprint:
        """Return a blueprint mounting the account routes under ``/v1/account``."""
        bp = Blueprint("account", __name__, url_prefix="/v1/account")
        bp.add_url_rule("", "create_account", self.create_account, methods=["POST"])
        bp.add_url_rule("/<account_id>", "get_account", self.get_account, methods=["GET"])
        bp.add_url_rule("/<account_id>/deposit", "deposit", self.deposit, methods=["POST"])
        bp.add_url_rule("/<account_id>/withdraw", "withdraw", self.withdraw, methods=["POST"])
        bp.add_url_rule("/<account_id>/transfer", "transfer", self.transfer, methods=["POST"])
        bp.add_url_rule(
            "/<account_id>/transactions",
            "get_transactions",
            self.get_transactions,
            methods=["GET"],
        )
        return bp

    def create_account(self) -> Reply:
        try:
            data = _body()
            name = _text(data, "name")
            initial_balance = _amount(data, "initial_balance")
            if not name:
                raise _required("CreateAccountRequest", "Name")
        except _BindError as exc:
            return response.bad_request(str(exc))

        try:
            account = self._service.create_account(name, initial_balance)
        except StorageError as exc:
            return response.internal_error(str(exc))
        return response.success(account)

    def get_account(self, account_id: str) -> Reply:
        parsed = _parse_id(account_id)
        if parsed is None:
            return response.bad_request("invalid id")
        try:
            account = self._service.get_account(parsed)
        except StorageError as exc:
            return response.bad_request(str(exc))
        return response.success(account)

    def _positive_amount(self) -> Decimal:
        amount = _amount(_body(), "amount")
        return amount

    def deposit(self, account_id: str) -> Reply:
        parsed = _parse_id(account_id)
        if parsed is None:
            return response.bad_request("invalid id")
        try:
            amount = self._positive_amount()
        except _BindError as exc:
            return response.bad_request(str(exc))
        if amount <= 0:
            return response.bad_request("amount must be greater than 0")
        try:
            self._service.deposit(parsed, amount)
        except StorageError as exc:
            return response.internal_error(str(exc))
        return response.success({"message": "deposit successful"})

    def withdraw(self, account_id: str) -> Reply:
        parsed = _parse_id(account_id)
        if parsed is None:
            return response.bad_request("invalid id")
        try:
            amount = self._positive_amount()
        except _BindError as exc:
            return response.bad_request(str(exc))
        if amount <= 0:
            return response.bad_request("amount must be greater than 0")
        try:
            self._service.withdraw(parsed, amount)
        except StorageError as exc:
            return response.internal_error(str(exc))
        return response.success({"message": "withdraw successful"})

    def transfer(self, account_id: str) -> Reply:
        from_id = _parse_id(account_id)
        if from_id is None:
            return response.bad_request("invalid from account id")
        try:
            data = _body()
            to_id = _uint(data, "to_account_id")
            amount = _amount(data, "amount")
            if to_id == 0:
                raise _required("TransferRequest", "ToAccountID")
        except _BindError as exc:
            return response.bad_request(str(exc))
        if amount <= 0:
            return response.bad_request("amount must be greater than 0")
        if from_id == to_id:
            return response.bad_request("cannot transfer to the same account")
        try:
            self._service.transfer(from_id, to_id, amount)
        except StorageError as exc:
            return response.internal_error(str(exc))
        return response.success(
            {
                "message": "transfer successful",
                "from_account": from_id,
                "to_account": to_id,
                "amount": _plain(amount),
            }
        )

    def get_transactions(self, account_id: str) -> Reply:
        parsed = _parse_id(account_id)
        if parsed is None:
            return response.bad_request("invalid account id")
        try:
            transactions = self._service.get_transactions(parsed)
        except StorageError as exc:
            return response.internal_error(str(exc))
        return response.success(transactions)
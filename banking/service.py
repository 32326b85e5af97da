"""Account operations that record transactions and log their outcome."""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from banking import logger
from banking.models import Account, Transaction, new_deposit, new_transfer, new_withdraw
from banking.storage import MemoryStorage, StorageError
from banking.trace import get_trace_id


def _decimal(value: Decimal | int | str | float) -> Decimal:
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


class AccountService:
    """Business operations on accounts backed by a storage."""

    def __init__(self, storage: MemoryStorage) -> None:
        self._storage = storage

    def _record(self, transaction: Transaction, failure: str, **fields: Any) -> None:
        try:
            self._storage.add_transaction(transaction)
        except StorageError as exc:
            logger.with_trace_id().error(failure, error=str(exc), **fields)

    def create_account(
        self, name: str, initial_balance: Decimal | int | str = Decimal(0)
    ) -> Account:
        account = Account(name=name, balance=_decimal(initial_balance))
        log = logger.with_trace_id()
        try:
            self._storage.create_account(account)
        except StorageError as exc:
            log.error("failed to create account", error=str(exc), name=name)
            raise
        log.info(
            "account created successfully",
            accountId=account.id,
            name=account.name,
            initialBalance=str(account.balance),
        )
        return account

    def get_account(self, account_id: int) -> Account:
        return self._storage.get_account_by_id(account_id)

    def deposit(self, account_id: int, amount: Decimal | int | str) -> None:
        amount = _decimal(amount)
        log = logger.with_trace_id()
        try:
            self._storage.deposit(account_id, amount)
        except StorageError as exc:
            log.error("failed to deposit", error=str(exc), accountId=account_id, amount=str(amount))
            raise
        self._record(
            new_deposit(account_id, amount, get_trace_id()),
            "failed to add deposit transaction",
            accountId=account_id,
            amount=str(amount),
        )
        log.info("deposit successful", accountId=account_id, amount=str(amount))

    def withdraw(self, account_id: int, amount: Decimal | int | str) -> None:
        amount = _decimal(amount)
        log = logger.with_trace_id()
        try:
            self._storage.withdraw(account_id, amount)
        except StorageError as exc:
            log.error("failed to withdraw", error=str(exc), accountId=account_id, amount=str(amount))
            raise
        self._record(
            new_withdraw(account_id, amount, get_trace_id()),
            "failed to add withdraw transaction",
            accountId=account_id,
            amount=str(amount),
        )
        log.info("withdraw successful", accountId=account_id, amount=str(amount))

    def transfer(
        self, from_account_id: int, to_account_id: int, amount: Decimal | int | str
    ) -> None:
        amount = _decimal(amount)
        fields = {
            "fromAccountId": from_account_id,
            "toAccountId": to_account_id,
            "amount": str(amount),
        }
        log = logger.with_trace_id()
        try:
            self._storage.transfer(from_account_id, to_account_id, amount)
        except StorageError as exc:
            log.error("failed to transfer", error=str(exc), **fields)
            raise
        self._record(
            new_transfer(from_account_id, to_account_id, amount, get_trace_id()),
            "failed to add transfer transaction",
            **fields,
        )
        log.info("transfer successful", **fields)

    def get_transactions(self, account_id: int) -> list[Transaction]:
        log = logger.with_trace_id()
        try:
            transactions = self._storage.get_transactions_by_account_id(account_id)
        except StorageError as exc:
            log.error("failed to get transactions", error=str(exc), accountId=account_id)
            raise
        log.info(
            "transactions retrieved successfully",
            accountId=account_id,
            transactionCount=len(transactions),
        )
        return transactions
"""Thread-safe in-memory store for accounts and transactions."""

from __future__ import annotations

import threading
from dataclasses import replace
from datetime import datetime
from decimal import Decimal

from banking.models import Account, Transaction


class StorageError(Exception):
    """Raised when a storage operation cannot be carried out."""


def _as_decimal(amount: Decimal | int | str | float) -> Decimal:
    if isinstance(amount, Decimal):
        return amount
    if isinstance(amount, float):
        return Decimal(str(amount))
    if isinstance(amount, (int, str)):
        return Decimal(amount)
    raise TypeError(f"unsupported amount type: {type(amount).__name__}")


def _now() -> datetime:
    return datetime.now().astimezone()


class MemoryStorage:
    """Keeps accounts and transactions in memory with per-account locking."""

    def __init__(self) -> None:
        self._accounts: dict[int, Account] = {}
        self._transactions: dict[int, Transaction] = {}
        self._last_account_id = 0
        self._last_transaction_id = 0
        self._accounts_lock = threading.Lock()
        self._account_locks: dict[int, threading.Lock] = {}
        self._account_locks_guard = threading.Lock()
        self._transactions_lock = threading.Lock()

    def _account_lock(self, account_id: int) -> threading.Lock:
        with self._account_locks_guard:
            lock = self._account_locks.get(account_id)
            if lock is None:
                lock = self._account_locks[account_id] = threading.Lock()
            return lock

    def _lookup(self, account_id: int) -> Account | None:
        with self._accounts_lock:
            return self._accounts.get(account_id)

    def create_account(self, account: Account) -> Account:
        """Store ``account``, assigning it the next id and fresh timestamps."""
        with self._accounts_lock:
            self._last_account_id += 1
            account.id = self._last_account_id
            account.created_at = _now()
            account.updated_at = _now()
            self._accounts[account.id] = account
        return account

    def get_account_by_id(self, account_id: int) -> Account:
        """Return a copy of the account with the given id."""
        with self._account_lock(account_id):
            account = self._lookup(account_id)
            if account is None:
                raise StorageError("account not found")
            return replace(account)

    def deposit(self, account_id: int, amount: Decimal | int | str) -> None:
        amount = _as_decimal(amount)
        if amount <= 0:
            raise StorageError("deposit amount cannot be negative")
        with self._account_lock(account_id):
            account = self._lookup(account_id)
            if account is None:
                raise StorageError("account not found")
            account.balance += amount
            account.updated_at = _now()

    def withdraw(self, account_id: int, amount: Decimal | int | str) -> None:
        amount = _as_decimal(amount)
        if amount <= 0:
            raise StorageError("withdraw amount cannot be negative")
        with self._account_lock(account_id):
            account = self._lookup(account_id)
            if account is None:
                raise StorageError("account not found")
            if account.balance < amount:
                raise StorageError("insufficient balance")
            account.balance -= amount
            account.updated_at = _now()

    def transfer(self, from_id: int, to_id: int, amount: Decimal | int | str) -> None:
        """Move ``amount`` between two accounts, locking them in id order."""
        amount = _as_decimal(amount)
        if amount <= 0:
            raise StorageError("transfer amount must be positive")
        if from_id == to_id:
            raise StorageError("cannot transfer to the same account")

        first_id, second_id = sorted((from_id, to_id))
        with self._account_lock(first_id), self._account_lock(second_id):
            with self._accounts_lock:
                source = self._accounts.get(from_id)
                destination = self._accounts.get(to_id)
            if source is None:
                raise StorageError("source account not found")
            if destination is None:
                raise StorageError("destination account not found")
            if source.balance < amount:
                raise StorageError("insufficient balance")
            source.balance -= amount
            source.updated_at = _now()
            destination.balance += amount
            destination.updated_at = _now()

    def add_transaction(self, transaction: Transaction) -> Transaction:
        """Store ``transaction``, assigning it the next id."""
        with self._transactions_lock:
            self._last_transaction_id += 1
            transaction.id = self._last_transaction_id
            self._transactions[transaction.id] = transaction
        return transaction

    def get_transactions_by_account_id(self, account_id: int) -> list[Transaction]:
        """Return copies of every transaction that touches the account."""
        with self._transactions_lock:
            return [
                replace(tx)
                for tx in self._transactions.values()
                if tx.to_account_id == account_id or tx.from_account_id == account_id
            ]

    def get_all_transactions(self) -> list[Transaction]:
        with self._transactions_lock:
            return [replace(tx) for tx in self._transactions.values()]
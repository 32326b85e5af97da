from decimal import Decimal

import pytest

from banking.models import TransactionType
from banking.service import AccountService
from banking.storage import MemoryStorage, StorageError
from banking.trace import with_trace_id


@pytest.fixture
def service():
    return AccountService(MemoryStorage())


def test_create_and_get_account(service):
    account = service.create_account("test user", Decimal("250.75"))
    assert account.id == 1
    fetched = service.get_account(account.id)
    assert fetched.name == "test user"
    assert fetched.balance == Decimal("250.75")


def test_create_account_defaults_to_zero_balance(service):
    account = service.create_account("empty")
    assert service.get_account(account.id).balance == 0


def test_get_missing_account_raises(service):
    with pytest.raises(StorageError, match="account not found"):
        service.get_account(9999)


def test_deposit_records_transaction_with_trace(service):
    account = service.create_account("A", "1000.00")
    with with_trace_id("trace-1"):
        service.deposit(account.id, "200.00")
    assert service.get_account(account.id).balance == Decimal("1200.00")
    (tx,) = service.get_transactions(account.id)
    assert tx.type is TransactionType.DEPOSIT
    assert tx.trace_id == "trace-1"
    assert tx.amount == Decimal("200.00")


def test_withdraw_without_trace_has_empty_trace_id(service):
    account = service.create_account("B", "500.00")
    service.withdraw(account.id, "100.00")
    assert service.get_account(account.id).balance == Decimal("400.00")
    (tx,) = service.get_transactions(account.id)
    assert tx.type is TransactionType.WITHDRAW
    assert tx.trace_id == ""


def test_failed_withdraw_records_nothing(service):
    account = service.create_account("Withdraw Test User", "100.00")
    with pytest.raises(StorageError, match="insufficient balance"):
        service.withdraw(account.id, "200.00")
    assert service.get_account(account.id).balance == Decimal("100.00")
    assert service.get_transactions(account.id) == []


def test_non_positive_deposit_raises(service):
    account = service.create_account("test", "100")
    with pytest.raises(StorageError, match="deposit amount cannot be negative"):
        service.deposit(account.id, 0)
    assert service.get_transactions(account.id) == []


def test_transfer_visible_to_both_accounts(service):
    source = service.create_account("A", "1200.00")
    target = service.create_account("C", "0.00")
    service.transfer(source.id, target.id, "300.00")
    assert service.get_account(source.id).balance == Decimal("900.00")
    assert service.get_account(target.id).balance == Decimal("300.00")
    (from_tx,) = service.get_transactions(source.id)
    (to_tx,) = service.get_transactions(target.id)
    assert from_tx.id == to_tx.id
    assert from_tx.type is TransactionType.TRANSFER
    assert from_tx.from_account_id == source.id
    assert from_tx.to_account_id == target.id


def test_transfer_to_same_account_raises(service):
    account = service.create_account("From User", "200.00")
    with pytest.raises(StorageError, match="cannot transfer to the same account"):
        service.transfer(account.id, account.id, "10.00")


def test_transfer_total_is_conserved(service):
    first = service.create_account("User 1", "100")
    second = service.create_account("User 2", "100")
    service.transfer(first.id, second.id, "10")
    service.transfer(second.id, first.id, "5")
    total = service.get_account(first.id).balance + service.get_account(second.id).balance
    assert total == Decimal("200")


def test_get_transactions_for_unknown_account_is_empty(service):
    assert service.get_transactions(42) == []
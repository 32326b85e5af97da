"""Account and transaction records."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal, localcontext
from enum import Enum
from typing import Any

_CENTS = Decimal("0.01")


def _fixed2(value: Decimal) -> str:
    """Format a decimal with exactly two fractional digits, rounding half away from zero."""
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, value.adjusted() + 4)
        return format(value.quantize(_CENTS, rounding=ROUND_HALF_UP), "f")


def _timestamp(moment: datetime | None) -> str | None:
    return moment.isoformat() if moment is not None else None


def _now() -> datetime:
    return datetime.now().astimezone()


@dataclass
class Account:
    """A bank account; ``id`` and timestamps are assigned by storage."""

    name: str
    balance: Decimal = Decimal(0)
    id: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-ready mapping with the balance fixed to two decimals."""
        return {
            "id": self.id,
            "name": self.name,
            "balance": _fixed2(self.balance),
            "created_at": _timestamp(self.created_at),
            "updated_at": _timestamp(self.updated_at),
        }


class TransactionType(str, Enum):
    DEPOSIT = "deposit"
    WITHDRAW = "withdraw"
    TRANSFER = "transfer"


@dataclass
class Transaction:
    """A record of money moving into, out of or between accounts."""

    type: TransactionType
    to_account_id: int
    amount: Decimal
    description: str = ""
    from_account_id: int | None = None
    id: int = 0
    created_at: datetime = field(default_factory=_now)
    trace_id: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-ready mapping with the amount fixed to two decimals."""
        return {
            "id": self.id,
            "type": self.type.value,
            "from_account_id": self.from_account_id,
            "to_account_id": self.to_account_id,
            "amount": _fixed2(self.amount),
            "description": self.description,
            "created_at": _timestamp(self.created_at),
            "trace_id": self.trace_id,
        }


def new_deposit(account_id: int, amount: Decimal, trace_id: str) -> Transaction:
    return Transaction(
        type=TransactionType.DEPOSIT,
        to_account_id=account_id,
        amount=amount,
        description="Deposit to account",
        trace_id=trace_id,
    )


def new_withdraw(account_id: int, amount: Decimal, trace_id: str) -> Transaction:
    return Transaction(
        type=TransactionType.WITHDRAW,
        to_account_id=account_id,
        amount=amount,
        description="Withdraw from account",
        trace_id=trace_id,
    )


def new_transfer(
    from_account_id: int, to_account_id: int, amount: Decimal, trace_id: str
) -> Transaction:
    return Transaction(
        type=TransactionType.TRANSFER,
        from_account_id=from_account_id,
        to_account_id=to_account_id,
        amount=amount,
        description="Transfer between accounts",
        trace_id=trace_id,
    )
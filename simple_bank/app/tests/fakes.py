"""In-memory stand-ins for the SQL unit of work, used to test the engine alone."""
from __future__ import annotations

import copy
import threading
from datetime import UTC, datetime
from types import SimpleNamespace
from typing import Optional

from ..core.errors import AccountNotFoundError, InsufficientFundsError


class FakeLedger:
    """Shared state. One unit of work at a time holds ``lock``."""

    def __init__(self) -> None:
        self.lock = threading.Lock()
        self.accounts: dict[int, SimpleNamespace] = {}
        self.entries: list[SimpleNamespace] = []
        self.transfers: list[SimpleNamespace] = []
        self.delta_calls: list[int] = []
        self.commits = 0
        self.rollbacks = 0

    def add_account(self, balance: int, currency: str = "USD") -> SimpleNamespace:
        account = SimpleNamespace(
            id=len(self.accounts) + 1,
            owner="owner",
            balance=balance,
            currency=currency,
            created_at=datetime.now(UTC),
        )
        self.accounts[account.id] = account
        return account


class _FakeAccounts:
    def __init__(self, uow: "FakeUnitOfWork") -> None:
        self.uow = uow

    def currencies(self, account_ids: list[int]) -> dict[int, str]:
        return {
            account_id: self.uow.accounts_state[account_id].currency
            for account_id in account_ids
            if account_id in self.uow.accounts_state
        }

    def apply_delta(self, account_id: int, delta: int) -> SimpleNamespace:
        self.uow.ledger.delta_calls.append(account_id)
        if self.uow.on_apply_delta is not None:
            self.uow.on_apply_delta(account_id)
        account = self.uow.accounts_state.get(account_id)
        if account is None:
            raise AccountNotFoundError(account_id)
        account.balance += delta
        if delta < 0 and account.balance < 0:
            raise InsufficientFundsError(account_id, account.balance - delta, -delta)
        return copy.copy(account)


class _FakeEntries:
    def __init__(self, uow: "FakeUnitOfWork") -> None:
        self.uow = uow

    def create(self, account_id: int, amount: int) -> SimpleNamespace:
        entry = SimpleNamespace(
            id=len(self.uow.entries_state) + 1,
            account_id=account_id,
            amount=amount,
            created_at=datetime.now(UTC),
        )
        self.uow.entries_state.append(entry)
        return entry


class _FakeTransfers:
    def __init__(self, uow: "FakeUnitOfWork") -> None:
        self.uow = uow

    def create(self, from_account_id: int, to_account_id: int, amount: int) -> SimpleNamespace:
        transfer = SimpleNamespace(
            id=len(self.uow.transfers_state) + 1,
            from_account_id=from_account_id,
            to_account_id=to_account_id,
            amount=amount,
            created_at=datetime.now(UTC),
        )
        self.uow.transfers_state.append(transfer)
        return transfer


class FakeUnitOfWork:
    def __init__(self, ledger: FakeLedger, on_apply_delta=None) -> None:
        self.ledger = ledger
        self.on_apply_delta = on_apply_delta
        self.accounts = _FakeAccounts(self)
        self.entries = _FakeEntries(self)
        self.transfers = _FakeTransfers(self)
        self.done: Optional[str] = None

    def __enter__(self) -> "FakeUnitOfWork":
        self.ledger.lock.acquire()
        self.accounts_state = copy.deepcopy(self.ledger.accounts)
        self.entries_state = list(self.ledger.entries)
        self.transfers_state = list(self.ledger.transfers)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            if self.done is None:
                self.rollback()
        finally:
            self.ledger.lock.release()

    def commit(self) -> None:
        self.ledger.accounts = self.accounts_state
        self.ledger.entries = self.entries_state
        self.ledger.transfers = self.transfers_state
        self.ledger.commits += 1
        self.done = "committed"

    def rollback(self) -> None:
        self.ledger.rollbacks += 1
        self.done = "rolled_back"

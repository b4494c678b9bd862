"""Capabilities the transfer engine needs from storage.

The engine only talks to these protocols, so a unit of work backed by
something other than SQL (the in-memory fake used in tests, for one) can be
swapped in without touching engine logic.
"""
from __future__ import annotations

from typing import Optional, Protocol

from ..models import AccountModel, EntryModel, TransferModel


class AccountStore(Protocol):
    def currencies(self, account_ids: list[int]) -> dict[int, str]:
        """Map each existing id to its currency; missing ids are left out."""
        ...

    def apply_delta(self, account_id: int, delta: int) -> AccountModel: ...


class EntryStore(Protocol):
    def create(self, account_id: int, amount: int) -> EntryModel: ...


class TransferStore(Protocol):
    def create(self, from_account_id: int, to_account_id: int, amount: int) -> TransferModel: ...


class TransferUnitOfWork(Protocol):
    accounts: AccountStore
    entries: EntryStore
    transfers: TransferStore

    def __enter__(self) -> "TransferUnitOfWork": ...

    def __exit__(self, exc_type, exc, tb) -> Optional[bool]: ...

    def commit(self) -> None: ...

    def rollback(self) -> None: ...

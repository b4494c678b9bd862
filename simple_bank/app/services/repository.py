from __future__ import annotations

from typing import Optional

from sqlalchemy import or_, update
from sqlmodel import Session, col, select

from ..core.errors import (
    AccountNotFoundError,
    EntryNotFoundError,
    InsufficientFundsError,
    TransferNotFoundError,
)
from ..models import AccountModel, EntryModel, TransferModel


class AccountRepository:
    """Thin data access layer for the accounts table."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def create(self, owner: str, balance: int, currency: str) -> AccountModel:
        account = AccountModel(owner=owner, balance=balance, currency=currency)
        self.session.add(account)
        self.session.flush()
        self.session.refresh(account)
        return account

    def get(self, account_id: int) -> AccountModel:
        account = self.session.get(AccountModel, account_id)
        if account is None:
            raise AccountNotFoundError(account_id)
        return account

    def update(self, account_id: int, balance: int) -> AccountModel:
        account = self.get(account_id)
        account.balance = balance
        self.session.add(account)
        self.session.flush()
        self.session.refresh(account)
        return account

    def delete(self, account_id: int) -> None:
        account = self.get(account_id)
        self.session.delete(account)
        self.session.flush()

    def list(self, limit: int, offset: int) -> list[AccountModel]:
        stmt = select(AccountModel).order_by(AccountModel.id).offset(offset).limit(limit)
        return list(self.session.exec(stmt))

    def currencies(self, account_ids: list[int]) -> dict[int, str]:
        stmt = select(AccountModel.id, AccountModel.currency).where(
            col(AccountModel.id).in_(account_ids)
        )
        return {account_id: currency for account_id, currency in self.session.exec(stmt)}

    def apply_delta(self, account_id: int, delta: int) -> AccountModel:
        """Add ``delta`` to the stored balance in a single UPDATE ... RETURNING.

        The addition happens in the database, under the row lock the UPDATE
        takes, so concurrent callers never overwrite each other. A debit that
        leaves the balance negative raises and relies on the caller's unit of
        work to roll the statement back.
        """
        stmt = (
            update(AccountModel)
            .where(col(AccountModel.id) == account_id)
            .values(balance=col(AccountModel.balance) + delta)
            .returning(AccountModel)
        )
        account = self.session.exec(stmt).scalar_one_or_none()  # type: ignore[call-overload]
        if account is None:
            raise AccountNotFoundError(account_id)
        if delta < 0 and account.balance < 0:
            raise InsufficientFundsError(
                account_id, balance=account.balance - delta, amount=-delta
            )
        return account


class EntryRepository:
    """Append-only access to the entries table."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def create(self, account_id: int, amount: int) -> EntryModel:
        entry = EntryModel(account_id=account_id, amount=amount)
        self.session.add(entry)
        self.session.flush()
        self.session.refresh(entry)
        return entry

    def get(self, entry_id: int) -> EntryModel:
        entry = self.session.get(EntryModel, entry_id)
        if entry is None:
            raise EntryNotFoundError(entry_id)
        return entry

    def list(self, account_id: int, limit: int, offset: int) -> list[EntryModel]:
        stmt = (
            select(EntryModel)
            .where(EntryModel.account_id == account_id)
            .order_by(EntryModel.id)
            .offset(offset)
            .limit(limit)
        )
        return list(self.session.exec(stmt))


class TransferRepository:
    """Append-only access to the transfers table."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def create(self, from_account_id: int, to_account_id: int, amount: int) -> TransferModel:
        transfer = TransferModel(
            from_account_id=from_account_id,
            to_account_id=to_account_id,
            amount=amount,
        )
        self.session.add(transfer)
        self.session.flush()
        self.session.refresh(transfer)
        return transfer

    def get(self, transfer_id: int) -> TransferModel:
        transfer = self.session.get(TransferModel, transfer_id)
        if transfer is None:
            raise TransferNotFoundError(transfer_id)
        return transfer

    def list(
        self,
        *,
        from_account_id: Optional[int] = None,
        to_account_id: Optional[int] = None,
        limit: int,
        offset: int,
    ) -> list[TransferModel]:
        # A transfer matches when either side matches one of the given ids.
        conditions = []
        if from_account_id is not None:
            conditions.append(TransferModel.from_account_id == from_account_id)
        if to_account_id is not None:
            conditions.append(TransferModel.to_account_id == to_account_id)

        stmt = select(TransferModel)
        if conditions:
            stmt = stmt.where(or_(*conditions))
        stmt = stmt.order_by(TransferModel.id).offset(offset).limit(limit)
        return list(self.session.exec(stmt))

from __future__ import annotations

import logging
import threading
from typing import Callable, Optional

from sqlmodel import Session

from ..core.errors import LedgerValidationError
from ..models import (
    AccountCreate,
    AccountResponse,
    AccountUpdate,
    EntryResponse,
    TransferFilters,
    TransferRequest,
    TransferResponse,
    TransferResult,
)
from .transfer import TransferEngine
from .unit_of_work import UnitOfWork


logger = logging.getLogger(__name__)


class LedgerService:
    def __init__(
        self,
        session_factory: Callable[[], Session],
        transfer_timeout: Optional[float] = None,
        default_page_size: int = 10,
    ) -> None:
        self.session_factory = session_factory
        self.default_page_size = default_page_size
        self.engine = TransferEngine(self.unit_of_work, default_timeout=transfer_timeout)

    def unit_of_work(self) -> UnitOfWork:
        return UnitOfWork(self.session_factory)

    def read_unit_of_work(self) -> UnitOfWork:
        return UnitOfWork(self.session_factory, read_only=True)

    # ------------------------------------------------------------------
    # Helper utilities
    # ------------------------------------------------------------------
    def _page_limit(self, limit: Optional[int], offset: int) -> int:
        if limit is None:
            limit = self.default_page_size
        if limit < 1:
            raise LedgerValidationError("limit must be at least 1")
        if offset < 0:
            raise LedgerValidationError("offset must not be negative")
        return limit

    # ------------------------------------------------------------------
    # Accounts
    # ------------------------------------------------------------------
    def create_account(self, payload: AccountCreate) -> AccountResponse:
        with self.unit_of_work() as uow:
            account = uow.accounts.create(payload.owner, payload.balance, payload.currency)
            response = AccountResponse.model_validate(account)
            uow.commit()
        logger.info(
            "account.created",
            extra={"account_id": response.id, "owner": response.owner},
        )
        return response

    def get_account(self, account_id: int) -> AccountResponse:
        with self.read_unit_of_work() as uow:
            return AccountResponse.model_validate(uow.accounts.get(account_id))

    def update_account(self, account_id: int, payload: AccountUpdate) -> AccountResponse:
        with self.unit_of_work() as uow:
            account = uow.accounts.update(account_id, payload.balance)
            response = AccountResponse.model_validate(account)
            uow.commit()
        logger.info(
            "account.updated",
            extra={"account_id": account_id, "balance": response.balance},
        )
        return response

    def delete_account(self, account_id: int) -> None:
        with self.unit_of_work() as uow:
            uow.accounts.delete(account_id)
            uow.commit()
        logger.info("account.deleted", extra={"account_id": account_id})

    def list_accounts(
        self, limit: Optional[int] = None, offset: int = 0
    ) -> list[AccountResponse]:
        limit = self._page_limit(limit, offset)
        with self.read_unit_of_work() as uow:
            return [
                AccountResponse.model_validate(account)
                for account in uow.accounts.list(limit, offset)
            ]

    # ------------------------------------------------------------------
    # Entries
    # ------------------------------------------------------------------
    def get_entry(self, entry_id: int) -> EntryResponse:
        with self.read_unit_of_work() as uow:
            return EntryResponse.model_validate(uow.entries.get(entry_id))

    def list_entries(
        self, account_id: int, limit: Optional[int] = None, offset: int = 0
    ) -> list[EntryResponse]:
        limit = self._page_limit(limit, offset)
        with self.read_unit_of_work() as uow:
            return [
                EntryResponse.model_validate(entry)
                for entry in uow.entries.list(account_id, limit, offset)
            ]

    # ------------------------------------------------------------------
    # Transfers
    # ------------------------------------------------------------------
    def get_transfer(self, transfer_id: int) -> TransferResponse:
        with self.read_unit_of_work() as uow:
            return TransferResponse.model_validate(uow.transfers.get(transfer_id))

    def list_transfers(
        self,
        filters: Optional[TransferFilters] = None,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> list[TransferResponse]:
        limit = self._page_limit(limit, offset)
        filters = filters or TransferFilters()
        with self.read_unit_of_work() as uow:
            transfers = uow.transfers.list(
                from_account_id=filters.from_account_id,
                to_account_id=filters.to_account_id,
                limit=limit,
                offset=offset,
            )
            return [TransferResponse.model_validate(transfer) for transfer in transfers]

    def transfer(
        self,
        payload: TransferRequest,
        *,
        timeout: Optional[float] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> TransferResult:
        return self.engine.transfer(payload, timeout=timeout, cancel_event=cancel_event)

from __future__ import annotations

import logging
import threading
import time
from typing import Callable, Optional

from sqlalchemy.exc import SQLAlchemyError

from ..core.errors import (
    LedgerError,
    LedgerValidationError,
    TransactionError,
    TransferCancelledError,
)
from ..models import (
    AccountModel,
    AccountResponse,
    EntryResponse,
    TransferRequest,
    TransferResponse,
    TransferResult,
)
from .interfaces import TransferUnitOfWork


logger = logging.getLogger(__name__)


class TransferEngine:
    """Moves money between two accounts inside one unit of work.

    The engine keeps no locks of its own. Row locks are taken by the
    database when balances are updated, and the engine's only job there is
    to always update the account with the smaller id first. Two transfers in
    opposite directions over the same pair then queue on the same row
    instead of each holding the row the other needs.
    """

    def __init__(
        self,
        uow_factory: Callable[[], TransferUnitOfWork],
        default_timeout: Optional[float] = None,
    ) -> None:
        self.uow_factory = uow_factory
        self.default_timeout = default_timeout

    def transfer(
        self,
        request: TransferRequest,
        *,
        timeout: Optional[float] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> TransferResult:
        self._validate_request(request)

        if timeout is None:
            timeout = self.default_timeout
        deadline = time.monotonic() + timeout if timeout is not None else None
        log_extra = {
            "from_account_id": request.from_account_id,
            "to_account_id": request.to_account_id,
            "amount": request.amount,
        }

        try:
            with self.uow_factory() as uow:
                self._check_cancelled(deadline, cancel_event)
                self._validate_accounts(uow, request)

                transfer = uow.transfers.create(
                    request.from_account_id, request.to_account_id, request.amount
                )
                from_entry = uow.entries.create(request.from_account_id, -request.amount)
                to_entry = uow.entries.create(request.to_account_id, request.amount)
                from_account, to_account = self._apply_balances(uow, request)

                # Snapshot before commit expires the ORM instances.
                result = TransferResult(
                    transfer=TransferResponse.model_validate(transfer),
                    from_entry=EntryResponse.model_validate(from_entry),
                    to_entry=EntryResponse.model_validate(to_entry),
                    from_account=AccountResponse.model_validate(from_account),
                    to_account=AccountResponse.model_validate(to_account),
                )

                self._check_cancelled(deadline, cancel_event)
                uow.commit()
        except SQLAlchemyError as exc:
            logger.warning("transfer.rolled_back", extra={**log_extra, "error": repr(exc)})
            raise TransactionError("Transfer could not be applied", cause=exc) from exc
        except LedgerError as exc:
            logger.info(
                "transfer.rolled_back",
                extra={**log_extra, "error": type(exc).__name__},
            )
            raise

        logger.info(
            "transfer.committed",
            extra={**log_extra, "transfer_id": result.transfer.id},
        )
        return result

    # ------------------------------------------------------------------
    # Helper utilities
    # ------------------------------------------------------------------
    def _validate_request(self, request: TransferRequest) -> None:
        if request.amount <= 0:
            raise LedgerValidationError("Transfer amount must be positive")
        if request.from_account_id == request.to_account_id:
            raise LedgerValidationError("Cannot transfer to the same account")

    def _validate_accounts(self, uow: TransferUnitOfWork, request: TransferRequest) -> None:
        currencies = uow.accounts.currencies(
            [request.from_account_id, request.to_account_id]
        )
        for account_id in (request.from_account_id, request.to_account_id):
            if account_id not in currencies:
                raise LedgerValidationError(f"Account {account_id} does not exist")
        if currencies[request.from_account_id] != currencies[request.to_account_id]:
            raise LedgerValidationError("Accounts hold different currencies")

    def _apply_balances(
        self, uow: TransferUnitOfWork, request: TransferRequest
    ) -> tuple[AccountModel, AccountModel]:
        deltas = {
            request.from_account_id: -request.amount,
            request.to_account_id: request.amount,
        }
        updated: dict[int, AccountModel] = {}
        for account_id in sorted(deltas):
            updated[account_id] = uow.accounts.apply_delta(account_id, deltas[account_id])
        return updated[request.from_account_id], updated[request.to_account_id]

    def _check_cancelled(
        self,
        deadline: Optional[float],
        cancel_event: Optional[threading.Event],
    ) -> None:
        if cancel_event is not None and cancel_event.is_set():
            raise TransferCancelledError("Transfer cancelled before commit")
        if deadline is not None and time.monotonic() >= deadline:
            raise TransferCancelledError("Transfer timed out before commit")

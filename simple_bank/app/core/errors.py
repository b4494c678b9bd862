from __future__ import annotations

from typing import Any, Optional

ERR_NO_ROWS = "no rows in result set"


class LedgerError(Exception):
    """Base class for every error raised by the ledger."""


class LedgerValidationError(LedgerError, ValueError):
    """Raised when a request is rejected before anything is written."""


class NotFoundError(LedgerError, LookupError):
    """Raised on a lookup miss.

    ``str()`` is always :data:`ERR_NO_ROWS` so callers can compare against the
    sentinel whatever the backing database is. The missing resource is kept on
    the instance.
    """

    resource = "row"

    def __init__(self, resource_id: Any = None) -> None:
        super().__init__(ERR_NO_ROWS)
        self.resource_id = resource_id

    @property
    def detail(self) -> str:
        return f"{self.resource.capitalize()} {self.resource_id} not found"


class AccountNotFoundError(NotFoundError):
    """Raised when an account id is missing from the store."""

    resource = "account"


class EntryNotFoundError(NotFoundError):
    resource = "entry"


class TransferNotFoundError(NotFoundError):
    resource = "transfer"


class InsufficientFundsError(LedgerError):
    """Raised when a transfer would drop the source balance below zero."""

    def __init__(self, account_id: int, balance: int, amount: int) -> None:
        super().__init__(f"Insufficient funds in account {account_id}")
        self.account_id = account_id
        self.balance = balance
        self.amount = amount


class TransactionError(LedgerError):
    """Raised when a unit of work cannot be committed or rolled back."""

    def __init__(self, message: str, cause: Optional[BaseException] = None) -> None:
        super().__init__(message)
        self.cause = cause


class TransferCancelledError(TransactionError):
    """Raised when a transfer's deadline or cancel event fires before commit."""

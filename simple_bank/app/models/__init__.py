from .db import Account as AccountModel
from .db import Entry as EntryModel
from .db import Transfer as TransferModel
from .schemas import (
    SUPPORTED_CURRENCIES,
    AccountCreate,
    AccountResponse,
    AccountUpdate,
    EntryResponse,
    TransferFilters,
    TransferRequest,
    TransferResponse,
    TransferResult,
)

__all__ = [
    "SUPPORTED_CURRENCIES",
    "AccountCreate",
    "AccountResponse",
    "AccountUpdate",
    "EntryResponse",
    "TransferFilters",
    "TransferRequest",
    "TransferResponse",
    "TransferResult",
    "AccountModel",
    "EntryModel",
    "TransferModel",
]

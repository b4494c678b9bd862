from .ledger import LedgerService
from .repository import AccountRepository, EntryRepository, TransferRepository
from .transfer import TransferEngine
from .unit_of_work import UnitOfWork, UnitOfWorkState

__all__ = [
    "AccountRepository",
    "EntryRepository",
    "LedgerService",
    "TransferEngine",
    "TransferRepository",
    "UnitOfWork",
    "UnitOfWorkState",
]

from ..services import LedgerService
from .config import get_settings
from .db import new_session

def get_ledger_service() -> LedgerService:
    settings = get_settings()
    return LedgerService(
        new_session,
        transfer_timeout=settings.transfer_timeout,
        default_page_size=settings.default_page_size,
    )

from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status

from ..core.dependencies import get_ledger_service
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
from ..services import LedgerService


router = APIRouter(prefix="/accounts", tags=["accounts"])

@router.post("", response_model=AccountResponse, status_code=status.HTTP_201_CREATED)
def create_account(
    payload: AccountCreate,
    service: LedgerService = Depends(get_ledger_service),
) -> AccountResponse:
    return service.create_account(payload)

@router.get("", response_model=list[AccountResponse])
def list_accounts(
    limit: Optional[int] = Query(None, ge=1, le=100),
    offset: int = Query(0, ge=0),
    service: LedgerService = Depends(get_ledger_service),
) -> list[AccountResponse]:
    return service.list_accounts(limit=limit, offset=offset)

@router.get("/{account_id}", response_model=AccountResponse)
def get_account(
    account_id: int,
    service: LedgerService = Depends(get_ledger_service),
) -> AccountResponse:
    return service.get_account(account_id)

@router.patch("/{account_id}", response_model=AccountResponse)
def update_account(
    account_id: int,
    payload: AccountUpdate,
    service: LedgerService = Depends(get_ledger_service),
) -> AccountResponse:
    return service.update_account(account_id, payload)

@router.delete("/{account_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_account(
    account_id: int,
    service: LedgerService = Depends(get_ledger_service),
) -> Response:
    service.delete_account(account_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

@router.get("/{account_id}/entries", response_model=list[EntryResponse])
def list_entries(
    account_id: int,
    limit: Optional[int] = Query(None, ge=1, le=100),
    offset: int = Query(0, ge=0),
    service: LedgerService = Depends(get_ledger_service),
) -> list[EntryResponse]:
    return service.list_entries(account_id, limit=limit, offset=offset)

entry_router = APIRouter(prefix="/entries", tags=["entries"])

@entry_router.get("/{entry_id}", response_model=EntryResponse)
def get_entry(
    entry_id: int,
    service: LedgerService = Depends(get_ledger_service),
) -> EntryResponse:
    return service.get_entry(entry_id)

transfer_router = APIRouter(prefix="/transfers", tags=["transfers"])

@transfer_router.post("", response_model=TransferResult, status_code=status.HTTP_201_CREATED)
def create_transfer(
    payload: TransferRequest,
    service: LedgerService = Depends(get_ledger_service),
) -> TransferResult:
    return service.transfer(payload)

@transfer_router.get("", response_model=list[TransferResponse])
def list_transfers(
    from_account_id: Optional[int] = None,
    to_account_id: Optional[int] = None,
    limit: Optional[int] = Query(None, ge=1, le=100),
    offset: int = Query(0, ge=0),
    service: LedgerService = Depends(get_ledger_service),
) -> list[TransferResponse]:
    filters = TransferFilters(from_account_id=from_account_id, to_account_id=to_account_id)
    return service.list_transfers(filters, limit=limit, offset=offset)

@transfer_router.get("/{transfer_id}", response_model=TransferResponse)
def get_transfer(
    transfer_id: int,
    service: LedgerService = Depends(get_ledger_service),
) -> TransferResponse:
    return service.get_transfer(transfer_id)

__all__ = ["router", "entry_router", "transfer_router"]

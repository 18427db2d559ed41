from fastapi import APIRouter, Depends, Query, status

from ..core.config import get_settings
from ..core.dependencies import get_current_owner, get_ledger_service
from ..models import (
    AccountCreate,
    AccountListResponse,
    AccountResponse,
    EntryListResponse,
    TransferListResponse,
    TransferRequest,
    TransferResultResponse,
)
from ..services import LedgerService


LIMIT_MAX = get_settings().list_limit_max

router = APIRouter(prefix="/accounts", tags=["accounts"])

@router.post("", response_model=AccountResponse, status_code=status.HTTP_201_CREATED)
def create_account(
    payload: AccountCreate,
    owner: str = Depends(get_current_owner),
    service: LedgerService = Depends(get_ledger_service),
) -> AccountResponse:
    return service.create_account(owner, payload)

@router.get("", response_model=AccountListResponse)
def list_accounts(
    limit: int = Query(50, ge=1, le=LIMIT_MAX),
    owner: str = Depends(get_current_owner),
    service: LedgerService = Depends(get_ledger_service),
) -> AccountListResponse:
    return service.list_accounts(owner, limit)

@router.get("/{account_id}", response_model=AccountResponse)
def get_account(
    account_id: int,
    owner: str = Depends(get_current_owner),
    service: LedgerService = Depends(get_ledger_service),
) -> AccountResponse:
    return service.get_account(owner, account_id)

@router.delete("/{account_id}", response_model=AccountResponse)
def delete_account(
    account_id: int,
    owner: str = Depends(get_current_owner),
    service: LedgerService = Depends(get_ledger_service),
) -> AccountResponse:
    return service.delete_account(owner, account_id)

@router.get("/{account_id}/entries", response_model=EntryListResponse)
def list_entries(
    account_id: int,
    limit: int = Query(50, ge=1, le=LIMIT_MAX),
    owner: str = Depends(get_current_owner),
    service: LedgerService = Depends(get_ledger_service),
) -> EntryListResponse:
    return service.list_entries(owner, account_id, limit)

transfer_router = APIRouter(prefix="/transfers", tags=["transfers"])

@transfer_router.post(
    "", response_model=TransferResultResponse, status_code=status.HTTP_201_CREATED
)
def create_transfer(
    payload: TransferRequest,
    owner: str = Depends(get_current_owner),
    service: LedgerService = Depends(get_ledger_service),
) -> TransferResultResponse:
    return service.transfer(owner, payload)

@transfer_router.get("", response_model=TransferListResponse)
def list_transfers(
    account_id: int = Query(..., ge=1),
    limit: int = Query(50, ge=1, le=LIMIT_MAX),
    owner: str = Depends(get_current_owner),
    service: LedgerService = Depends(get_ledger_service),
) -> TransferListResponse:
    return service.list_transfers(owner, account_id, limit)

__all__ = ["router", "transfer_router"]

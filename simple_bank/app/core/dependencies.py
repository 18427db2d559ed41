from fastapi import Depends, Header

from ..services import LedgerService, TransactionExecutor
from .db import get_engine

def get_transaction_executor() -> TransactionExecutor:
    return TransactionExecutor(get_engine())

def get_ledger_service(
    executor: TransactionExecutor = Depends(get_transaction_executor),
) -> LedgerService:
    return LedgerService(executor)

def get_current_owner(
    owner: str = Header(..., convert_underscores=False, alias="X-Account-Owner", min_length=1),
) -> str:
    # The upstream auth layer asserts the caller identity in this header.
    return owner

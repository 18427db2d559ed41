from .db import Account as AccountModel
from .db import Entry as EntryModel
from .db import Transfer as TransferModel
from .schemas import (
    AccountCreate,
    AccountListResponse,
    AccountResponse,
    EntryListResponse,
    EntryResponse,
    ErrorResponse,
    TransferListResponse,
    TransferRequest,
    TransferResponse,
    TransferResultResponse,
)

__all__ = [
    "AccountCreate",
    "AccountListResponse",
    "AccountResponse",
    "EntryListResponse",
    "EntryResponse",
    "ErrorResponse",
    "TransferListResponse",
    "TransferRequest",
    "TransferResponse",
    "TransferResultResponse",
    "AccountModel",
    "EntryModel",
    "TransferModel",
]

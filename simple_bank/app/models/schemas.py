from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

Currency = Literal["USD", "EUR", "CNY"]

class AccountCreate(BaseModel):
    currency: Currency = Field(..., description="ISO-style currency code of the account")

class AccountResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    owner: str
    balance: int = Field(..., description="Balance in minor units (e.g. cents)")
    currency: str
    created_at: datetime

class AccountListResponse(BaseModel):
    items: list[AccountResponse]

class EntryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    account_id: int
    amount: int = Field(..., description="Positive for credits, negative for debits")
    created_at: datetime

class EntryListResponse(BaseModel):
    items: list[EntryResponse]

class TransferRequest(BaseModel):
    from_account_id: int = Field(..., ge=1)
    to_account_id: int = Field(..., ge=1)
    amount: int = Field(..., gt=0, description="Amount in minor units (must be > 0)")
    currency: Currency

class TransferResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    from_account_id: int
    to_account_id: int
    amount: int
    created_at: datetime

class TransferListResponse(BaseModel):
    items: list[TransferResponse]

class TransferResultResponse(BaseModel):
    transfer: TransferResponse
    from_account: AccountResponse
    to_account: AccountResponse
    from_entry: EntryResponse
    to_entry: EntryResponse

class ErrorResponse(BaseModel):
    code: str
    detail: str

from __future__ import annotations
from datetime import datetime, UTC
from typing import Optional
from sqlalchemy import CheckConstraint, UniqueConstraint
from sqlmodel import Field, SQLModel


def _utcnow() -> datetime:
    return datetime.now(UTC)


class Account(SQLModel, table=True):
    __table_args__ = (UniqueConstraint("owner", "currency", name="uq_account_owner_currency"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    owner: str = Field(index=True, max_length=255)
    balance: int = Field(default=0)
    currency: str = Field(max_length=3)
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)
    deleted_at: Optional[datetime] = Field(default=None, index=True)

class Entry(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    account_id: int = Field(foreign_key="account.id", index=True)
    amount: int
    created_at: datetime = Field(default_factory=_utcnow, index=True)

    @property
    def is_credit(self) -> bool:
        return self.amount > 0

    @property
    def is_debit(self) -> bool:
        return self.amount < 0

class Transfer(SQLModel, table=True):
    __table_args__ = (CheckConstraint("amount > 0", name="chk_transfer_amount_positive"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    from_account_id: int = Field(foreign_key="account.id", index=True)
    to_account_id: int = Field(foreign_key="account.id", index=True)
    amount: int
    created_at: datetime = Field(default_factory=_utcnow)

from __future__ import annotations

from datetime import UTC, datetime
from typing import Optional, Tuple

from sqlalchemy import func, or_, update
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, col, select

from ..core.errors import (
    AccountAlreadyExistsError,
    AccountNotEmptyError,
    AccountNotFoundError,
    InvalidAmountError,
)
from ..models import AccountModel, EntryModel, TransferModel


class LedgerRepository:
    """Thin data access layer around the SQLModel session.

    The repository never begins or commits a transaction: it only flushes,
    so every call joins whatever unit of work owns the session.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    # Account operations -------------------------------------------------
    def add_account(self, owner: str, currency: str) -> AccountModel:
        account = AccountModel(owner=owner, currency=currency)
        self.session.add(account)
        try:
            self.session.flush()
        except IntegrityError as exc:
            raise AccountAlreadyExistsError(
                f"Account with currency {currency} already exists"
            ) from exc
        self.session.refresh(account)
        return account

    def get_account(self, account_id: int) -> Optional[AccountModel]:
        account = self.session.get(AccountModel, account_id)
        if account is None or account.deleted_at is not None:
            return None
        return account

    def require_account(self, account_id: int) -> AccountModel:
        account = self.get_account(account_id)
        if account is None:
            raise AccountNotFoundError(f"Account {account_id} not found")
        return account

    def get_account_by_owner_and_currency(
        self, owner: str, currency: str
    ) -> Optional[AccountModel]:
        stmt = (
            select(AccountModel)
            .where(AccountModel.owner == owner)
            .where(AccountModel.currency == currency)
            .where(col(AccountModel.deleted_at).is_(None))
        )
        return self.session.exec(stmt).first()

    def list_accounts(self, owner: str, limit: int) -> list[AccountModel]:
        stmt = (
            select(AccountModel)
            .where(AccountModel.owner == owner)
            .where(col(AccountModel.deleted_at).is_(None))
            .order_by(col(AccountModel.id).desc())
            .limit(limit)
        )
        return list(self.session.exec(stmt))

    def soft_delete_account(self, account_id: int) -> AccountModel:
        # The zero-balance condition lives in the UPDATE itself so a credit
        # committed after any earlier read cannot be hidden by the delete.
        stmt = (
            update(AccountModel)
            .where(col(AccountModel.id) == account_id)
            .where(col(AccountModel.deleted_at).is_(None))
            .where(col(AccountModel.balance) == 0)
            .values(deleted_at=datetime.now(UTC), updated_at=datetime.now(UTC))
            .execution_options(synchronize_session=False)
        )
        result = self.session.exec(stmt)
        account = self.session.get(AccountModel, account_id, populate_existing=True)
        if account is None or (result.rowcount == 0 and account.deleted_at is not None):
            raise AccountNotFoundError(f"Account {account_id} not found")
        if result.rowcount == 0:
            raise AccountNotEmptyError(
                f"Account {account_id} still holds a balance of {account.balance}"
            )
        return account

    def update_balance(self, account_id: int, delta: int) -> AccountModel:
        # Single arithmetic UPDATE evaluated by the database; concurrent
        # writers to the same row serialize on it instead of losing updates.
        stmt = (
            update(AccountModel)
            .where(col(AccountModel.id) == account_id)
            .where(col(AccountModel.deleted_at).is_(None))
            .values(
                balance=col(AccountModel.balance) + delta,
                updated_at=datetime.now(UTC),
            )
            .execution_options(synchronize_session=False)
        )
        result = self.session.exec(stmt)
        if result.rowcount == 0:
            raise AccountNotFoundError(f"Account {account_id} not found")
        account = self.session.get(AccountModel, account_id, populate_existing=True)
        if account is None:
            raise AccountNotFoundError(f"Account {account_id} not found")
        return account

    # Transfers ------------------------------------------------------------
    def add_transfer(
        self,
        *,
        from_account_id: int,
        to_account_id: int,
        amount: int,
    ) -> TransferModel:
        transfer = TransferModel(
            from_account_id=from_account_id,
            to_account_id=to_account_id,
            amount=amount,
        )
        self.session.add(transfer)
        self.session.flush()
        self.session.refresh(transfer)
        return transfer

    def get_transfer(self, transfer_id: int) -> Optional[TransferModel]:
        return self.session.get(TransferModel, transfer_id)

    def list_transfers(self, account_id: int, limit: int) -> list[TransferModel]:
        stmt = (
            select(TransferModel)
            .where(
                or_(
                    TransferModel.from_account_id == account_id,
                    TransferModel.to_account_id == account_id,
                )
            )
            .order_by(col(TransferModel.id).desc())
            .limit(limit)
        )
        return list(self.session.exec(stmt))

    def count_transfers(self) -> int:
        return self.session.exec(select(func.count(col(TransferModel.id)))).one()

    # Ledger entries -----------------------------------------------------
    def add_entry(self, *, account_id: int, amount: int) -> EntryModel:
        entry = EntryModel(account_id=account_id, amount=amount)
        self.session.add(entry)
        self.session.flush()
        self.session.refresh(entry)
        return entry

    def list_entries(self, account_id: int, limit: int) -> list[EntryModel]:
        stmt = (
            select(EntryModel)
            .where(EntryModel.account_id == account_id)
            .order_by(col(EntryModel.id).desc())
            .limit(limit)
        )
        return list(self.session.exec(stmt))

    def count_entries(self) -> int:
        return self.session.exec(select(func.count(col(EntryModel.id)))).one()

    def entries_total(self, account_id: int) -> int:
        stmt = select(func.coalesce(func.sum(EntryModel.amount), 0)).where(
            EntryModel.account_id == account_id
        )
        return self.session.exec(stmt).one()

    def record_deposit(
        self, account_id: int, amount: int
    ) -> Tuple[AccountModel, EntryModel]:
        """Credit funds from outside the ledger, keeping entries and balance in step."""
        if amount <= 0:
            raise InvalidAmountError("Deposit amount must be positive")
        self.require_account(account_id)
        entry = self.add_entry(account_id=account_id, amount=amount)
        account = self.update_balance(account_id, amount)
        return account, entry

from __future__ import annotations

import logging
from typing import Optional

from ..core.errors import (
    AccountAlreadyExistsError,
    AccountOwnershipError,
    CurrencyMismatchError,
    InsufficientBalanceError,
    SameAccountError,
)
from ..models import (
    AccountCreate,
    AccountListResponse,
    AccountModel,
    AccountResponse,
    EntryListResponse,
    EntryResponse,
    TransferListResponse,
    TransferRequest,
    TransferResponse,
    TransferResultResponse,
)
from .engine import TransferEngine, TransferResult
from .repository import LedgerRepository
from .transactions import TransactionExecutor


logger = logging.getLogger(__name__)


class LedgerService:
    def __init__(
        self,
        executor: TransactionExecutor,
        engine: Optional[TransferEngine] = None,
    ) -> None:
        self.executor = executor
        self.engine = engine or TransferEngine(executor)

    # ------------------------------------------------------------------
    # Helper utilities
    # ------------------------------------------------------------------
    def _owned_account(
        self, repository: LedgerRepository, owner: str, account_id: int
    ) -> AccountModel:
        account = repository.require_account(account_id)
        if account.owner != owner:
            raise AccountOwnershipError(
                f"Account {account_id} does not belong to the caller"
            )
        return account

    def _account_to_response(self, account: AccountModel) -> AccountResponse:
        return AccountResponse.model_validate(account)

    def _result_to_response(self, result: TransferResult) -> TransferResultResponse:
        return TransferResultResponse(
            transfer=TransferResponse.model_validate(result.transfer),
            from_account=self._account_to_response(result.from_account),
            to_account=self._account_to_response(result.to_account),
            from_entry=EntryResponse.model_validate(result.from_entry),
            to_entry=EntryResponse.model_validate(result.to_entry),
        )

    def _check_transfer(
        self, repository: LedgerRepository, owner: str, payload: TransferRequest
    ) -> None:
        source = self._owned_account(repository, owner, payload.from_account_id)
        dest = repository.require_account(payload.to_account_id)

        for account in (source, dest):
            if account.currency != payload.currency:
                raise CurrencyMismatchError(
                    f"Account {account.id} currency mismatch: "
                    f"{account.currency} vs {payload.currency}"
                )

        if source.balance < payload.amount:
            raise InsufficientBalanceError("Insufficient balance for transfer")

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def create_account(self, owner: str, payload: AccountCreate) -> AccountResponse:
        def _create(repository: LedgerRepository) -> AccountModel:
            existing = repository.get_account_by_owner_and_currency(owner, payload.currency)
            if existing is not None:
                raise AccountAlreadyExistsError(
                    f"Account with currency {payload.currency} already exists"
                )
            return repository.add_account(owner, payload.currency)

        account = self.executor.run(_create)
        logger.info(
            "account.created",
            extra={"account_id": account.id, "owner": owner, "currency": account.currency},
        )
        return self._account_to_response(account)

    def get_account(self, owner: str, account_id: int) -> AccountResponse:
        account = self.executor.run(
            lambda repository: self._owned_account(repository, owner, account_id)
        )
        return self._account_to_response(account)

    def list_accounts(self, owner: str, limit: int) -> AccountListResponse:
        accounts = self.executor.run(
            lambda repository: repository.list_accounts(owner, limit)
        )
        return AccountListResponse(
            items=[self._account_to_response(account) for account in accounts]
        )

    def delete_account(self, owner: str, account_id: int) -> AccountResponse:
        def _delete(repository: LedgerRepository) -> AccountModel:
            self._owned_account(repository, owner, account_id)
            return repository.soft_delete_account(account_id)

        account = self.executor.run(_delete)
        logger.info("account.deleted", extra={"account_id": account_id, "owner": owner})
        return self._account_to_response(account)

    def list_entries(self, owner: str, account_id: int, limit: int) -> EntryListResponse:
        def _list(repository: LedgerRepository):
            self._owned_account(repository, owner, account_id)
            return repository.list_entries(account_id, limit)

        entries = self.executor.run(_list)
        return EntryListResponse(
            items=[EntryResponse.model_validate(entry) for entry in entries]
        )

    def list_transfers(
        self, owner: str, account_id: int, limit: int
    ) -> TransferListResponse:
        def _list(repository: LedgerRepository):
            self._owned_account(repository, owner, account_id)
            return repository.list_transfers(account_id, limit)

        transfers = self.executor.run(_list)
        return TransferListResponse(
            items=[TransferResponse.model_validate(transfer) for transfer in transfers]
        )

    def transfer(self, owner: str, payload: TransferRequest) -> TransferResultResponse:
        if payload.from_account_id == payload.to_account_id:
            raise SameAccountError("Cannot transfer to the same account")

        # Cheap checks first; the engine re-validates the balance at the
        # atomic update since another transfer may drain the source meanwhile.
        self.executor.run(
            lambda repository: self._check_transfer(repository, owner, payload)
        )
        result = self.engine.execute_transfer(
            payload.from_account_id,
            payload.to_account_id,
            payload.amount,
        )
        return self._result_to_response(result)

from __future__ import annotations

import logging
from dataclasses import dataclass

from ..core.errors import InsufficientBalanceError, InvalidAmountError, SameAccountError
from ..models import AccountModel, EntryModel, TransferModel
from .repository import LedgerRepository
from .transactions import TransactionExecutor


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TransferResult:
    transfer: TransferModel
    from_account: AccountModel
    to_account: AccountModel
    from_entry: EntryModel
    to_entry: EntryModel


class TransferEngine:
    """Moves funds between two accounts as a single atomic unit of work.

    The engine keeps no state of its own. Every write goes through the
    repository handed out by the executor, so nothing read in one
    transaction is reused in another.
    """

    def __init__(self, executor: TransactionExecutor) -> None:
        self.executor = executor

    def execute_transfer(
        self,
        from_account_id: int,
        to_account_id: int,
        amount: int,
    ) -> TransferResult:
        if from_account_id == to_account_id:
            raise SameAccountError("Cannot transfer to the same account")
        if amount <= 0:
            raise InvalidAmountError("Transfer amount must be positive")

        result = self.executor.run(
            lambda repository: self._transfer(
                repository, from_account_id, to_account_id, amount
            )
        )
        logger.info(
            "transfer.executed",
            extra={
                "transfer_id": result.transfer.id,
                "from_account_id": from_account_id,
                "to_account_id": to_account_id,
                "amount": amount,
            },
        )
        return result

    def _transfer(
        self,
        repository: LedgerRepository,
        from_account_id: int,
        to_account_id: int,
        amount: int,
    ) -> TransferResult:
        repository.require_account(from_account_id)
        repository.require_account(to_account_id)

        transfer = repository.add_transfer(
            from_account_id=from_account_id,
            to_account_id=to_account_id,
            amount=amount,
        )
        from_entry = repository.add_entry(account_id=from_account_id, amount=-amount)
        to_entry = repository.add_entry(account_id=to_account_id, amount=amount)

        # Always touch the lower account id first. Two transfers over the same
        # pair then lock rows in the same order whatever their direction.
        if from_account_id < to_account_id:
            from_account, to_account = self._add_money(
                repository, from_account_id, -amount, to_account_id, amount
            )
        else:
            to_account, from_account = self._add_money(
                repository, to_account_id, amount, from_account_id, -amount
            )

        if from_account.balance < 0:
            logger.warning(
                "transfer.rejected",
                extra={
                    "from_account_id": from_account_id,
                    "to_account_id": to_account_id,
                    "amount": amount,
                },
            )
            raise InsufficientBalanceError("Insufficient balance for transfer")

        return TransferResult(
            transfer=transfer,
            from_account=from_account,
            to_account=to_account,
            from_entry=from_entry,
            to_entry=to_entry,
        )

    @staticmethod
    def _add_money(
        repository: LedgerRepository,
        first_account_id: int,
        first_delta: int,
        second_account_id: int,
        second_delta: int,
    ) -> tuple[AccountModel, AccountModel]:
        first = repository.update_balance(first_account_id, first_delta)
        second = repository.update_balance(second_account_id, second_delta)
        return first, second

import pytest
from sqlalchemy import text
from sqlalchemy.exc import OperationalError

from ..core.errors import (
    AccountAlreadyExistsError,
    AccountNotEmptyError,
    AccountNotFoundError,
    InvalidAmountError,
    StorageError,
)


class Cancelled(BaseException):
    """Stand-in for a caller-side cancellation signal."""


def test_run_commits_and_returns_result(executor) -> None:
    account_id = executor.run(lambda repository: repository.add_account("alice", "USD").id)

    account = executor.run(lambda repository: repository.require_account(account_id))
    assert account.owner == "alice"
    assert account.balance == 0


def test_run_rolls_back_and_reraises_original_error(executor, row_counts) -> None:
    def _work(repository):
        account = repository.add_account("alice", "USD")
        repository.record_deposit(account.id, 100)
        raise ValueError("boom")

    with pytest.raises(ValueError, match="boom"):
        executor.run(_work)

    assert executor.run(lambda r: r.get_account_by_owner_and_currency("alice", "USD")) is None
    assert row_counts() == (0, 0)


def test_cancellation_rolls_back(executor, row_counts) -> None:
    def _work(repository):
        repository.add_account("alice", "USD")
        raise Cancelled()

    with pytest.raises(Cancelled):
        executor.run(_work)

    assert executor.run(lambda r: r.list_accounts("alice", 10)) == []


def test_database_errors_become_storage_errors(executor) -> None:
    with pytest.raises(StorageError) as excinfo:
        executor.run(lambda repository: repository.session.exec(text("SELECT * FROM nope")))

    assert isinstance(excinfo.value.__cause__, OperationalError)


def test_duplicate_owner_currency_is_rejected(executor) -> None:
    executor.run(lambda repository: repository.add_account("alice", "USD"))

    with pytest.raises(AccountAlreadyExistsError):
        executor.run(lambda repository: repository.add_account("alice", "USD"))

    executor.run(lambda repository: repository.add_account("alice", "EUR"))


def test_update_balance_is_relative(executor, open_account) -> None:
    account_id = open_account("alice", balance=100)

    account = executor.run(lambda repository: repository.update_balance(account_id, -30))
    assert account.balance == 70

    account = executor.run(lambda repository: repository.update_balance(account_id, 5))
    assert account.balance == 75


def test_update_balance_on_missing_account(executor) -> None:
    with pytest.raises(AccountNotFoundError):
        executor.run(lambda repository: repository.update_balance(42, 10))


def test_deposit_keeps_ledger_in_step(executor, open_account) -> None:
    account_id = open_account("alice")

    account, entry = executor.run(lambda repository: repository.record_deposit(account_id, 250))

    assert account.balance == 250
    assert entry.amount == 250
    assert executor.run(lambda repository: repository.entries_total(account_id)) == 250


@pytest.mark.parametrize("amount", [0, -500])
def test_deposit_rejects_non_positive_amount(executor, open_account, balance_of, row_counts, amount) -> None:
    account_id = open_account("alice")

    with pytest.raises(InvalidAmountError):
        executor.run(lambda repository: repository.record_deposit(account_id, amount))

    assert balance_of(account_id) == 0
    assert row_counts() == (0, 0)


def test_store_refuses_non_positive_transfer_row(executor, open_account, row_counts) -> None:
    a = open_account("alice", balance=100)
    b = open_account("bob")

    with pytest.raises(StorageError):
        executor.run(
            lambda repository: repository.add_transfer(
                from_account_id=a, to_account_id=b, amount=-5
            )
        )

    assert row_counts()[0] == 0


def test_soft_delete_requires_zero_balance(executor, open_account) -> None:
    funded = open_account("alice", "USD", balance=10)
    empty = open_account("alice", "EUR")

    with pytest.raises(AccountNotEmptyError):
        executor.run(lambda repository: repository.soft_delete_account(funded))
    assert executor.run(lambda repository: repository.get_account(funded)) is not None

    deleted = executor.run(lambda repository: repository.soft_delete_account(empty))
    assert deleted.deleted_at is not None
    assert executor.run(lambda repository: repository.get_account(empty)) is None

    with pytest.raises(AccountNotFoundError):
        executor.run(lambda repository: repository.soft_delete_account(empty))
    with pytest.raises(AccountNotFoundError):
        executor.run(lambda repository: repository.soft_delete_account(4242))

from collections.abc import Callable, Iterator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import Engine
from sqlmodel import SQLModel

from ..core.db import create_engine_for_url, get_engine, set_engine
from ..core.dependencies import get_transaction_executor
from ..main import app
from ..services import TransactionExecutor, TransferEngine


@pytest.fixture
def engine(tmp_path) -> Iterator[Engine]:
    test_engine = create_engine_for_url(f"sqlite:///{tmp_path / 'test.db'}")
    SQLModel.metadata.create_all(test_engine)
    yield test_engine
    test_engine.dispose()


@pytest.fixture
def executor(engine: Engine) -> TransactionExecutor:
    return TransactionExecutor(engine)


@pytest.fixture
def transfer_engine(executor: TransactionExecutor) -> TransferEngine:
    return TransferEngine(executor)


@pytest.fixture
def open_account(executor: TransactionExecutor) -> Callable[..., int]:
    """Create an account and fund it through the ledger; returns the account id."""

    def _open(owner: str, currency: str = "USD", balance: int = 0) -> int:
        def _create(repository) -> int:
            account = repository.add_account(owner, currency)
            if balance:
                repository.record_deposit(account.id, balance)
            return account.id

        return executor.run(_create)

    return _open


@pytest.fixture
def balance_of(executor: TransactionExecutor) -> Callable[[int], int]:
    def _balance(account_id: int) -> int:
        return executor.run(lambda repository: repository.require_account(account_id)).balance

    return _balance


@pytest.fixture
def row_counts(executor: TransactionExecutor) -> Callable[[], tuple[int, int]]:
    def _counts() -> tuple[int, int]:
        return executor.run(
            lambda repository: (repository.count_transfers(), repository.count_entries())
        )

    return _counts


@pytest.fixture
def client(engine: Engine) -> Iterator[TestClient]:
    original_engine = get_engine()
    set_engine(engine)
    app.dependency_overrides[get_transaction_executor] = lambda: TransactionExecutor(engine)

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
    set_engine(original_engine)

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TypeVar

from sqlalchemy import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from ..core.errors import StorageError
from .repository import LedgerRepository


logger = logging.getLogger(__name__)

T = TypeVar("T")


class TransactionExecutor:
    """Runs a unit of work inside one all-or-nothing database transaction."""

    def __init__(self, engine: Engine) -> None:
        self.engine = engine

    def run(self, fn: Callable[[LedgerRepository], T]) -> T:
        """Call ``fn`` with a repository bound to a fresh transaction.

        The transaction commits only if ``fn`` returns. Any exception, including
        ``BaseException`` subclasses used for cancellation, rolls back every
        write ``fn`` made. Ledger errors propagate unchanged; database errors
        are re-raised as :class:`StorageError` chained to the original.
        """
        try:
            with Session(self.engine, expire_on_commit=False) as session:
                with session.begin():
                    return fn(LedgerRepository(session))
        except SQLAlchemyError as exc:
            logger.error("transaction.failed", extra={"error": str(exc)})
            raise StorageError("Database transaction failed") from exc

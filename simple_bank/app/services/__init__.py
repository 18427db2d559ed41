from .engine import TransferEngine, TransferResult
from .ledger import LedgerService
from .repository import LedgerRepository
from .transactions import TransactionExecutor

__all__ = [
    "LedgerRepository",
    "LedgerService",
    "TransactionExecutor",
    "TransferEngine",
    "TransferResult",
]

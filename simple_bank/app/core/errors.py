from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    ACCOUNT_NOT_FOUND = "ACCOUNT_NOT_FOUND"
    INSUFFICIENT_BALANCE = "INSUFFICIENT_BALANCE"
    CURRENCY_MISMATCH = "CURRENCY_MISMATCH"
    SAME_ACCOUNT = "SAME_ACCOUNT"
    INVALID_AMOUNT = "INVALID_AMOUNT"
    UNAUTHORIZED = "UNAUTHORIZED"
    ALREADY_EXISTS = "ALREADY_EXISTS"
    ACCOUNT_NOT_EMPTY = "ACCOUNT_NOT_EMPTY"
    STORAGE = "STORAGE"


class LedgerError(Exception):
    """Base class for every error the ledger core raises on purpose."""

    kind: ErrorKind = ErrorKind.STORAGE


class AccountNotFoundError(LedgerError):
    """Raised when an account id is missing from the store."""

    kind = ErrorKind.ACCOUNT_NOT_FOUND


class InsufficientBalanceError(LedgerError):
    """Raised when a transfer would drop the source balance below zero."""

    kind = ErrorKind.INSUFFICIENT_BALANCE


class CurrencyMismatchError(LedgerError):
    """Raised when the accounts of a transfer hold different currencies."""

    kind = ErrorKind.CURRENCY_MISMATCH


class SameAccountError(LedgerError):
    """Raised when source and destination of a transfer are the same account."""

    kind = ErrorKind.SAME_ACCOUNT


class InvalidAmountError(LedgerError):
    kind = ErrorKind.INVALID_AMOUNT


class AccountOwnershipError(LedgerError):
    """Raised when the caller does not own the account it acts on."""

    kind = ErrorKind.UNAUTHORIZED


class AccountAlreadyExistsError(LedgerError):
    """Raised when the owner already holds an account in that currency."""

    kind = ErrorKind.ALREADY_EXISTS


class AccountNotEmptyError(LedgerError):
    kind = ErrorKind.ACCOUNT_NOT_EMPTY


class StorageError(LedgerError):
    """Wraps a database failure; the surrounding transaction is rolled back."""

    kind = ErrorKind.STORAGE

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from ..core.errors import ErrorKind, LedgerError


logger = logging.getLogger(__name__)

STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.ACCOUNT_NOT_FOUND: 404,
    ErrorKind.INSUFFICIENT_BALANCE: 422,
    ErrorKind.CURRENCY_MISMATCH: 422,
    ErrorKind.SAME_ACCOUNT: 422,
    ErrorKind.ACCOUNT_NOT_EMPTY: 422,
    ErrorKind.INVALID_AMOUNT: 400,
    ErrorKind.UNAUTHORIZED: 401,
    ErrorKind.ALREADY_EXISTS: 409,
    ErrorKind.STORAGE: 500,
}


def status_for(kind: ErrorKind) -> int:
    return STATUS_BY_KIND.get(kind, 500)


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(LedgerError)
    async def ledger_error_handler(request: Request, exc: LedgerError) -> JSONResponse:
        status_code = status_for(exc.kind)
        if status_code >= 500:
            logger.error("request.failed", extra={"path": request.url.path, "kind": exc.kind.value})
            detail = "Internal server error"
        else:
            detail = str(exc)
        return JSONResponse(
            status_code=status_code,
            content={"code": exc.kind.value, "detail": detail},
        )

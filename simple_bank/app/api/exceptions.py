from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from ..core.errors import (
    InsufficientFundsError,
    LedgerValidationError,
    NotFoundError,
    TransactionError,
)


logger = logging.getLogger(__name__)


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": exc.detail})

    @app.exception_handler(LedgerValidationError)
    async def validation_error_handler(
        request: Request, exc: LedgerValidationError
    ) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(InsufficientFundsError)
    async def insufficient_funds_handler(
        request: Request, exc: InsufficientFundsError
    ) -> JSONResponse:
        return JSONResponse(status_code=409, content={"detail": str(exc)})

    @app.exception_handler(TransactionError)
    async def transaction_error_handler(
        request: Request, exc: TransactionError
    ) -> JSONResponse:
        logger.error(
            "transaction.failed",
            extra={"path": request.url.path, "cause": repr(exc.cause)},
        )
        return JSONResponse(status_code=503, content={"detail": str(exc)})

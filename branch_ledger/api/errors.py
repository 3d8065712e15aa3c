"""Centralized API exception definitions and handlers."""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from branch_ledger.config import get_settings

logger = logging.getLogger(__name__)


class AppError(Exception):
    """Base domain/application error."""

    def __init__(self, message: str, status_code: int = 400) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class NotFoundError(AppError):
    """Raised when required resource does not exist."""

    def __init__(self, message: str) -> None:
        super().__init__(message=message, status_code=404)


class ValidationError(AppError):
    """Raised when domain-level validation fails."""

    def __init__(self, message: str, field: Optional[str] = None) -> None:
        super().__init__(message=message, status_code=422)
        self.field = field


class StoreError(AppError):
    """Raised when the record store fails (network, auth, constraint)."""

    def __init__(self, message: str, status_code: int = 503) -> None:
        super().__init__(message=message, status_code=status_code)


class StoreUnavailableError(StoreError):
    """Raised when ledgers cannot be loaded from the record store."""


class RecordNotFoundError(StoreError):
    """Raised by the record store when an id does not exist."""

    def __init__(self, kind: str, record_id: int) -> None:
        super().__init__(message=f"{kind} record {record_id} not found", status_code=404)
        self.kind = kind
        self.record_id = record_id


async def app_error_handler(_request: Request, exc: AppError) -> JSONResponse:
    """Render typed application exceptions as JSON responses."""

    content: dict[str, object] = {"detail": exc.message}
    if isinstance(exc, ValidationError) and exc.field:
        content["field"] = exc.field
    return JSONResponse(status_code=exc.status_code, content=content)


async def store_error_handler(_request: Request, exc: StoreError) -> JSONResponse:
    """Hide store failure details behind one generic retry notice."""

    if isinstance(exc, RecordNotFoundError):
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})
    logger.warning("Store failure: %s", exc.message)
    return JSONResponse(status_code=exc.status_code, content={"detail": get_settings().generic_error_message})


async def unhandled_error_handler(_request: Request, exc: Exception) -> JSONResponse:
    """Catch-all exception handler for non-domain errors."""

    logger.exception("Unhandled error", exc_info=exc)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


def register_exception_handlers(app: FastAPI) -> None:
    """Attach API exception handlers once during startup."""

    app.add_exception_handler(StoreError, store_error_handler)
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

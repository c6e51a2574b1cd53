"""
Domain error → HTTP response mapping.

Registered once on the app so routers stay free of try/except blocks.
"""

import logging
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from chatcore.domain.exceptions import (
    AccessDeniedError,
    ConflictError,
    DomainError,
    EntityNotFoundError,
    InvalidOperationError,
    UnauthenticatedError,
)

logger = logging.getLogger(__name__)

STATUS_BY_ERROR: dict[type[DomainError], int] = {
    UnauthenticatedError: status.HTTP_401_UNAUTHORIZED,
    EntityNotFoundError: status.HTTP_404_NOT_FOUND,
    AccessDeniedError: status.HTTP_403_FORBIDDEN,
    ConflictError: status.HTTP_409_CONFLICT,
    InvalidOperationError: 422,
}


def status_for(exc: DomainError) -> int:
    for error_type in type(exc).__mro__:
        if error_type in STATUS_BY_ERROR:
            return STATUS_BY_ERROR[error_type]
    return status.HTTP_400_BAD_REQUEST


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(DomainError)
    async def domain_error_handler(request: Request, exc: DomainError):
        status_code = status_for(exc)
        logger.warning(
            f"[{request.method} {request.url.path}] {type(exc).__name__}: {exc.message}"
        )
        return JSONResponse(status_code=status_code, content={"error": exc.message})

    # Malformed identifiers rejected by value objects
    @app.exception_handler(ValueError)
    async def value_error_handler(request: Request, exc: ValueError):
        logger.warning(f"[{request.method} {request.url.path}] Bad request: {exc}")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST, content={"error": str(exc)}
        )

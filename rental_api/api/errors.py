"""Maps domain errors to HTTP responses with a stable {"detail", "code"} body."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from rental_api.domain.errors import (
    AvailabilityError,
    BookingAlreadyExistsError,
    BookingNotFoundError,
    DomainError,
    IdempotencyConflictError,
    InvalidBookingStatusError,
    OptimisticLockError,
    ResourceInUseError,
    ResourceNotAvailableError,
    ResourceNotFoundError,
)

logger = logging.getLogger(__name__)

_NOT_FOUND = (ResourceNotFoundError, BookingNotFoundError)
_CONFLICT = (
    ResourceNotAvailableError,
    BookingAlreadyExistsError,
    IdempotencyConflictError,
    InvalidBookingStatusError,
    OptimisticLockError,
    ResourceInUseError,
)


def status_for(error: DomainError) -> int:
    if isinstance(error, _NOT_FOUND):
        return status.HTTP_404_NOT_FOUND
    if isinstance(error, _CONFLICT):
        return status.HTTP_409_CONFLICT
    return status.HTTP_400_BAD_REQUEST


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    status_code = status_for(exc)
    log = logger.warning if isinstance(exc, AvailabilityError) else logger.info
    log(
        "Request rejected",
        extra={
            "code": exc.code,
            "status_code": status_code,
            "path": request.url.path,
            "method": request.method,
        },
    )
    return JSONResponse(
        status_code=status_code,
        content={"detail": exc.message, "code": exc.code},
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DomainError, domain_error_handler)

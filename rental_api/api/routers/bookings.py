from fastapi import APIRouter, Depends, Header, HTTPException, status

from rental_api.api.dependencies import get_use_cases
from rental_api.api.schemas.bookings import (
    BookingResponse,
    CreateBookingRequest,
    ErrorResponse,
    QuoteResponse,
)
from rental_api.application.use_cases.change_booking_status import BookingTransition
from rental_api.config import Settings, get_settings
from rental_api.infrastructure.db.retry import retry_on_deadlock

router = APIRouter()

_ERRORS = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    409: {"model": ErrorResponse},
}


@router.post(
    "/bookings",
    response_model=BookingResponse,
    status_code=status.HTTP_201_CREATED,
    responses=_ERRORS,
)
async def create_booking(
    payload: CreateBookingRequest,
    idem_key: str = Header(default=None, convert_underscores=False, alias="Idempotency-Key"),
    use_cases=Depends(get_use_cases),
    settings: Settings = Depends(get_settings),
) -> BookingResponse:
    if not idem_key:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Idempotency-Key header is required",
        )

    async def create() -> BookingResponse:
        return await use_cases["create_booking"].execute(request=payload, idem_key=idem_key)

    return await retry_on_deadlock(
        create,
        max_attempts=settings.deadlock_retry_attempts,
        base_delay=settings.deadlock_retry_base_delay,
    )


@router.post(
    "/bookings/quote",
    response_model=QuoteResponse,
    status_code=status.HTTP_200_OK,
    responses=_ERRORS,
)
async def quote_booking(
    payload: CreateBookingRequest,
    use_cases=Depends(get_use_cases),
) -> QuoteResponse:
    return await use_cases["quote_booking"].execute(request=payload)


@router.get("/bookings", response_model=list[BookingResponse])
async def list_bookings(
    user_id: str | None = None,
    use_cases=Depends(get_use_cases),
) -> list[BookingResponse]:
    return await use_cases["list_bookings"].execute(user_id=user_id)


@router.get("/bookings/{booking_id}", response_model=BookingResponse, responses=_ERRORS)
async def get_booking(
    booking_id: str,
    use_cases=Depends(get_use_cases),
) -> BookingResponse:
    return await use_cases["get_booking"].execute(booking_id=booking_id)


@router.post(
    "/bookings/{booking_id}/{transition}",
    response_model=BookingResponse,
    responses=_ERRORS,
)
async def change_booking_status(
    booking_id: str,
    transition: BookingTransition,
    use_cases=Depends(get_use_cases),
) -> BookingResponse:
    return await use_cases["change_booking_status"].execute(
        booking_id=booking_id, transition=transition
    )

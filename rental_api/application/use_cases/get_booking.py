from rental_api.api.schemas.bookings import BookingResponse
from rental_api.application.interfaces.booking_repo import BookingRepo
from rental_api.domain.errors import BookingNotFoundError
from rental_api.domain.rules.booking_code import is_booking_code


class GetBookingUseCase:
    def __init__(self, booking_repo: BookingRepo) -> None:
        self._booking_repo = booking_repo

    async def execute(self, booking_id: str) -> BookingResponse:
        booking = await self._booking_repo.get_by_id(booking_id)
        if booking is None and is_booking_code(booking_id.upper()):
            booking = await self._booking_repo.get_by_code(booking_id.upper())
        if booking is None:
            raise BookingNotFoundError(booking_id=booking_id)
        return BookingResponse.from_entity(booking)


class ListBookingsUseCase:
    def __init__(self, booking_repo: BookingRepo) -> None:
        self._booking_repo = booking_repo

    async def execute(self, user_id: str | None = None) -> list[BookingResponse]:
        bookings = await self._booking_repo.list_bookings(user_id=user_id)
        return [BookingResponse.from_entity(b) for b in bookings]

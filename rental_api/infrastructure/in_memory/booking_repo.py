"""Implementación in-memory del repositorio de reservas."""

from dataclasses import replace
from datetime import datetime

from rental_api.application.interfaces.booking_repo import BookingRepo
from rental_api.domain.entities.booking import Booking, BookingStatus
from rental_api.domain.errors import (
    BookingAlreadyExistsError,
    BookingNotFoundError,
    OptimisticLockError,
)


class InMemoryBookingRepo(BookingRepo):
    """Guarda copias para que las entidades devueltas no alteren el estado interno."""

    def __init__(self) -> None:
        self.bookings: dict[str, Booking] = {}
        self._by_code: dict[str, str] = {}

    async def create_booking(self, booking: Booking) -> Booking:
        if booking.id in self.bookings or booking.booking_code in self._by_code:
            raise BookingAlreadyExistsError(booking_id=booking.id, booking_code=booking.booking_code)
        self.bookings[booking.id] = replace(booking)
        self._by_code[booking.booking_code] = booking.id
        return booking

    async def get_by_id(self, booking_id: str) -> Booking | None:
        booking = self.bookings.get(booking_id)
        return replace(booking) if booking else None

    async def get_by_code(self, booking_code: str) -> Booking | None:
        booking_id = self._by_code.get(booking_code)
        return await self.get_by_id(booking_id) if booking_id else None

    async def list_bookings(self, user_id: str | None = None) -> list[Booking]:
        bookings = [
            replace(b)
            for b in self.bookings.values()
            if user_id is None or b.user_id == user_id
        ]
        return sorted(bookings, key=lambda b: b.start_date)

    async def update_status(
        self,
        booking_id: str,
        status: BookingStatus,
        expected_lock_version: int | None = None,
        updated_at: datetime | None = None,
    ) -> None:
        if booking_id not in self.bookings:
            raise BookingNotFoundError(booking_id=booking_id)
        stored = self.bookings[booking_id]
        if expected_lock_version is not None and stored.lock_version != expected_lock_version:
            raise OptimisticLockError(booking_id=booking_id, expected_version=expected_lock_version)
        stored.lock_version += 1
        stored.status = status
        if updated_at is not None:
            stored.updated_at = updated_at

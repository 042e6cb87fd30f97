from datetime import datetime

from rental_api.domain.entities.booking import Booking, BookingStatus


class BookingRepo:
    async def create_booking(self, booking: Booking) -> Booking:
        raise NotImplementedError

    async def get_by_id(self, booking_id: str) -> Booking | None:
        raise NotImplementedError

    async def get_by_code(self, booking_code: str) -> Booking | None:
        raise NotImplementedError

    async def list_bookings(self, user_id: str | None = None) -> list[Booking]:
        raise NotImplementedError

    async def update_status(
        self,
        booking_id: str,
        status: BookingStatus,
        expected_lock_version: int | None = None,
        updated_at: datetime | None = None,
    ) -> None:
        """
        Actualiza el estado incrementando lock_version.

        Raises:
            OptimisticLockError: si expected_lock_version no coincide.
        """
        raise NotImplementedError

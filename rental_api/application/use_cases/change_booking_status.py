import logging
from enum import Enum

from rental_api.api.schemas.bookings import BookingResponse
from rental_api.application.interfaces.booking_repo import BookingRepo
from rental_api.application.interfaces.clock import Clock
from rental_api.application.interfaces.transaction_manager import TransactionManager
from rental_api.domain.errors import BookingNotFoundError

logger = logging.getLogger(__name__)


class BookingTransition(str, Enum):
    CONFIRM = "confirm"
    COMPLETE = "complete"
    CANCEL = "cancel"


class ChangeBookingStatusUseCase:
    """
    Aplica la máquina de estados de la reserva.

    PENDING --confirm--> CONFIRMED --complete--> COMPLETED
    PENDING | CONFIRMED --cancel--> CANCELLED
    """

    def __init__(
        self,
        booking_repo: BookingRepo,
        transaction_manager: TransactionManager,
        clock: Clock,
    ) -> None:
        self._booking_repo = booking_repo
        self._transaction_manager = transaction_manager
        self._clock = clock

    async def execute(self, booking_id: str, transition: BookingTransition) -> BookingResponse:
        async with self._transaction_manager.start():
            booking = await self._booking_repo.get_by_id(booking_id)
            if booking is None:
                raise BookingNotFoundError(booking_id=booking_id)

            previous_status = booking.status
            expected_version = booking.lock_version
            if transition == BookingTransition.CONFIRM:
                booking.confirm()
            elif transition == BookingTransition.COMPLETE:
                booking.complete()
            else:
                booking.cancel()
            booking.updated_at = self._clock.now()

            await self._booking_repo.update_status(
                booking_id=booking.id,
                status=booking.status,
                expected_lock_version=expected_version,
                updated_at=booking.updated_at,
            )

        logger.info(
            "Booking status changed",
            extra={
                "booking_id": booking.id,
                "from_status": previous_status.value,
                "to_status": booking.status.value,
            },
        )
        return BookingResponse.from_entity(booking)

import logging
from collections.abc import Iterable
from datetime import datetime

from rental_api.application.interfaces.booking_store import BookingStore
from rental_api.application.interfaces.clock import Clock
from rental_api.domain.constants import ACTIVE_BOOKING_STATUSES
from rental_api.domain.entities.resource import ExistingBooking, ServiceKind
from rental_api.domain.errors import (
    EndBeforeStartError,
    OfferNotCurrentlyValidError,
    ResourceNotAvailableError,
    ResourceNotFoundError,
    ResourceUnavailableError,
)
from rental_api.domain.value_objects.datetime_range import DatetimeRange

logger = logging.getLogger(__name__)


def find_conflict(
    requested: DatetimeRange, bookings: Iterable[ExistingBooking]
) -> ExistingBooking | None:
    """
    Retorna la primera reserva activa que se superpone con el rango pedido.

    Superposición semiabierta: start < e and s < end. Las reservas que se
    tocan en un extremo (end == s o e == start) no entran en conflicto.
    """
    for booking in bookings:
        if booking.status not in ACTIVE_BOOKING_STATUSES:
            continue
        if requested.overlaps_with(booking.datetime_range):
            return booking
    return None


class AvailabilityChecker:
    def __init__(self, store: BookingStore, clock: Clock) -> None:
        self._store = store
        self._clock = clock

    async def check_availability(
        self,
        kind: ServiceKind,
        resource_id: str,
        start: datetime,
        end: datetime,
        now: datetime | None = None,
    ) -> None:
        """
        Verifica que el recurso exista, esté activo y libre en [start, end).

        Para OFFER valida además la ventana de la oferta y la disponibilidad
        de la residencia y el vehículo que agrupa.
        """
        if start >= end:
            raise EndBeforeStartError(start=start, end=end)
        requested = DatetimeRange(start=start, end=end)
        if kind == ServiceKind.OFFER:
            await self._check_offer(resource_id, requested, now or self._clock.now())
            return

        resource = await self._store.get_resource(kind, resource_id)
        if resource is None:
            raise ResourceNotFoundError(kind=kind.value, resource_id=resource_id)
        if not resource.is_active:
            raise ResourceUnavailableError(kind=kind.value, resource_id=resource_id)

        bookings = await self._store.list_active_bookings_for_resource(kind, resource_id)
        conflict = find_conflict(requested, bookings)
        if conflict is not None:
            logger.info(
                "Booking conflict detected",
                extra={
                    "resource_kind": kind.value,
                    "resource_id": resource_id,
                    "requested": str(requested),
                    "conflicting_booking_id": conflict.booking_id,
                },
            )
            raise ResourceNotAvailableError(
                kind=kind.value,
                resource_id=resource_id,
                conflicting_booking_id=conflict.booking_id,
            )

    async def _check_offer(self, offer_id: str, requested: DatetimeRange, now: datetime) -> None:
        offer = await self._store.get_offer(offer_id)
        if offer is None:
            raise ResourceNotFoundError(kind=ServiceKind.OFFER.value, resource_id=offer_id)
        if not offer.is_active:
            raise ResourceUnavailableError(kind=ServiceKind.OFFER.value, resource_id=offer_id)
        if not offer.is_valid_at(now):
            raise OfferNotCurrentlyValidError(
                offer_id=offer_id,
                valid_from=offer.valid_from.isoformat(),
                valid_to=offer.valid_to.isoformat(),
            )

        await self.check_availability(
            ServiceKind.RESIDENCE, offer.residence_id, requested.start, requested.end, now
        )
        await self.check_availability(
            ServiceKind.VEHICLE, offer.vehicle_id, requested.start, requested.end, now
        )

"""Vista de lectura del motor de validación sobre los repos in-memory."""

from rental_api.application.interfaces.booking_store import BookingStore
from rental_api.domain.entities.booking import Booking
from rental_api.domain.entities.resource import (
    ExistingBooking,
    OfferRecord,
    ResourceRecord,
    ServiceKind,
)
from rental_api.infrastructure.in_memory.booking_repo import InMemoryBookingRepo
from rental_api.infrastructure.in_memory.catalog_repo import InMemoryCatalogRepo


def _to_existing(booking: Booking) -> ExistingBooking:
    kind = booking.service_kind
    resource_id = booking.residence_id or booking.vehicle_id or booking.offer_id
    return ExistingBooking(
        booking_id=booking.id,
        resource_id=resource_id,
        resource_kind=kind,
        start_date=booking.start_date,
        end_date=booking.end_date,
        status=booking.status.value,
    )


class InMemoryBookingStore(BookingStore):
    def __init__(
        self,
        catalog_repo: InMemoryCatalogRepo,
        booking_repo: InMemoryBookingRepo,
    ) -> None:
        self._catalog_repo = catalog_repo
        self._booking_repo = booking_repo

    async def get_resource(self, kind: ServiceKind, resource_id: str) -> ResourceRecord | None:
        if kind == ServiceKind.RESIDENCE:
            residence = self._catalog_repo.residences.get(resource_id)
            return residence.to_record() if residence else None
        if kind == ServiceKind.VEHICLE:
            vehicle = self._catalog_repo.vehicles.get(resource_id)
            return vehicle.to_record() if vehicle else None
        if kind == ServiceKind.OFFER:
            offer = self._catalog_repo.offers.get(resource_id)
            return offer.to_resource_record() if offer else None
        return None

    async def list_active_bookings_for_resource(
        self, kind: ServiceKind, resource_id: str
    ) -> list[ExistingBooking]:
        offer_ids = self._offers_bundling(kind, resource_id)
        result = []
        for booking in self._booking_repo.bookings.values():
            if not booking.occupies_capacity:
                continue
            direct = (
                (kind == ServiceKind.RESIDENCE and booking.residence_id == resource_id)
                or (kind == ServiceKind.VEHICLE and booking.vehicle_id == resource_id)
                or (kind == ServiceKind.OFFER and booking.offer_id == resource_id)
            )
            if direct or (booking.offer_id is not None and booking.offer_id in offer_ids):
                result.append(_to_existing(booking))
        return result

    async def get_offer(self, offer_id: str) -> OfferRecord | None:
        offer = self._catalog_repo.offers.get(offer_id)
        return offer.to_record() if offer else None

    def _offers_bundling(self, kind: ServiceKind, resource_id: str) -> set[str]:
        if kind == ServiceKind.RESIDENCE:
            return {o.id for o in self._catalog_repo.offers.values() if o.residence_id == resource_id}
        if kind == ServiceKind.VEHICLE:
            return {o.id for o in self._catalog_repo.offers.values() if o.vehicle_id == resource_id}
        return set()

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from rental_api.application.interfaces.booking_store import BookingStore
from rental_api.domain.constants import ACTIVE_BOOKING_STATUSES
from rental_api.domain.entities.resource import (
    ExistingBooking,
    OfferRecord,
    ResourceRecord,
    ServiceKind,
)
from rental_api.infrastructure.db.tables import bookings, offers, residences, vehicles
from rental_api.infrastructure.db.utc import from_db


class BookingStoreSQL(BookingStore):
    """Read side of the booking engine over the catalog and bookings tables."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_resource(self, kind: ServiceKind, resource_id: str) -> ResourceRecord | None:
        if kind == ServiceKind.RESIDENCE:
            stmt = select(residences.c.id, residences.c.is_active, residences.c.price_per_day)
            stmt = stmt.where(residences.c.id == resource_id)
        elif kind == ServiceKind.VEHICLE:
            stmt = select(vehicles.c.id, vehicles.c.is_active, vehicles.c.price_per_day)
            stmt = stmt.where(vehicles.c.id == resource_id)
        elif kind == ServiceKind.OFFER:
            stmt = select(offers.c.id, offers.c.is_active, offers.c.price)
            stmt = stmt.where(offers.c.id == resource_id)
        else:
            return None

        row = (await self._session.execute(stmt.limit(1))).first()
        if not row:
            return None
        if kind == ServiceKind.OFFER:
            return ResourceRecord(id=row[0], kind=kind, is_active=bool(row[1]), fixed_price=row[2])
        return ResourceRecord(id=row[0], kind=kind, is_active=bool(row[1]), per_day_rate=row[2])

    async def list_active_bookings_for_resource(
        self, kind: ServiceKind, resource_id: str
    ) -> list[ExistingBooking]:
        if kind == ServiceKind.RESIDENCE:
            bundling = select(offers.c.id).where(offers.c.residence_id == resource_id)
            occupies = or_(
                bookings.c.residence_id == resource_id,
                bookings.c.offer_id.in_(bundling),
            )
        elif kind == ServiceKind.VEHICLE:
            bundling = select(offers.c.id).where(offers.c.vehicle_id == resource_id)
            occupies = or_(
                bookings.c.vehicle_id == resource_id,
                bookings.c.offer_id.in_(bundling),
            )
        else:
            occupies = bookings.c.offer_id == resource_id

        stmt = select(bookings).where(
            occupies,
            bookings.c.status.in_(sorted(ACTIVE_BOOKING_STATUSES)),
        )
        result = await self._session.execute(stmt)
        existing = []
        for row in result.mappings().all():
            if row["residence_id"]:
                booked_kind, booked_id = ServiceKind.RESIDENCE, row["residence_id"]
            elif row["vehicle_id"]:
                booked_kind, booked_id = ServiceKind.VEHICLE, row["vehicle_id"]
            else:
                booked_kind, booked_id = ServiceKind.OFFER, row["offer_id"]
            existing.append(
                ExistingBooking(
                    booking_id=row["id"],
                    resource_id=booked_id,
                    resource_kind=booked_kind,
                    start_date=from_db(row["start_date"]),
                    end_date=from_db(row["end_date"]),
                    status=row["status"],
                )
            )
        return existing

    async def get_offer(self, offer_id: str) -> OfferRecord | None:
        stmt = select(offers).where(offers.c.id == offer_id).limit(1)
        row = (await self._session.execute(stmt)).mappings().first()
        if not row:
            return None
        return OfferRecord(
            id=row["id"],
            residence_id=row["residence_id"],
            vehicle_id=row["vehicle_id"],
            price=row["price"],
            valid_from=from_db(row["valid_from"]),
            valid_to=from_db(row["valid_to"]),
            is_active=bool(row["is_active"]),
        )

from datetime import datetime

from sqlalchemy import insert, select, update
from sqlalchemy.engine import RowMapping
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from rental_api.application.interfaces.booking_repo import BookingRepo
from rental_api.domain.entities.booking import Booking, BookingStatus
from rental_api.domain.errors import (
    BookingAlreadyExistsError,
    BookingNotFoundError,
    OptimisticLockError,
)
from rental_api.infrastructure.db.tables import bookings
from rental_api.infrastructure.db.utc import from_db, to_db


def _row_to_booking(row: RowMapping) -> Booking:
    return Booking(
        id=row["id"],
        booking_code=row["booking_code"],
        user_id=row["user_id"],
        residence_id=row["residence_id"],
        vehicle_id=row["vehicle_id"],
        offer_id=row["offer_id"],
        start_date=from_db(row["start_date"]),
        end_date=from_db(row["end_date"]),
        total_price=row["total_price"],
        currency_code=row["currency_code"],
        status=BookingStatus(row["status"]),
        notes=row["notes"],
        lock_version=row["lock_version"] or 0,
        created_at=from_db(row["created_at"]),
        updated_at=from_db(row["updated_at"]),
    )


class BookingRepoSQL(BookingRepo):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create_booking(self, booking: Booking) -> Booking:
        stmt = insert(bookings).values(
            id=booking.id,
            booking_code=booking.booking_code,
            user_id=booking.user_id,
            residence_id=booking.residence_id,
            vehicle_id=booking.vehicle_id,
            offer_id=booking.offer_id,
            start_date=to_db(booking.start_date),
            end_date=to_db(booking.end_date),
            total_price=booking.total_price,
            currency_code=booking.currency_code,
            status=booking.status.value,
            notes=booking.notes,
            lock_version=booking.lock_version,
            created_at=to_db(booking.created_at),
            updated_at=to_db(booking.updated_at),
        )
        try:
            await self._session.execute(stmt)
        except IntegrityError as exc:
            raise BookingAlreadyExistsError(
                booking_id=booking.id, booking_code=booking.booking_code
            ) from exc
        return booking

    async def get_by_id(self, booking_id: str) -> Booking | None:
        stmt = select(bookings).where(bookings.c.id == booking_id).limit(1)
        result = await self._session.execute(stmt)
        row = result.mappings().first()
        return _row_to_booking(row) if row else None

    async def get_by_code(self, booking_code: str) -> Booking | None:
        stmt = select(bookings).where(bookings.c.booking_code == booking_code).limit(1)
        result = await self._session.execute(stmt)
        row = result.mappings().first()
        return _row_to_booking(row) if row else None

    async def list_bookings(self, user_id: str | None = None) -> list[Booking]:
        stmt = select(bookings).order_by(bookings.c.start_date)
        if user_id is not None:
            stmt = stmt.where(bookings.c.user_id == user_id)
        result = await self._session.execute(stmt)
        return [_row_to_booking(row) for row in result.mappings().all()]

    async def update_status(
        self,
        booking_id: str,
        status: BookingStatus,
        expected_lock_version: int | None = None,
        updated_at: datetime | None = None,
    ) -> None:
        where_clause = [bookings.c.id == booking_id]
        if expected_lock_version is not None:
            where_clause.append(bookings.c.lock_version == expected_lock_version)
        values = {
            "status": status.value,
            "lock_version": bookings.c.lock_version + 1,
        }
        if updated_at is not None:
            values["updated_at"] = to_db(updated_at)
        stmt = update(bookings).where(*where_clause).values(**values)
        result = await self._session.execute(stmt)
        if result.rowcount == 0:
            if await self.get_by_id(booking_id) is None:
                raise BookingNotFoundError(booking_id=booking_id)
            raise OptimisticLockError(booking_id=booking_id, expected_version=expected_lock_version)

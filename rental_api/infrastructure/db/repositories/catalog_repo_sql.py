from sqlalchemy import insert, select, update
from sqlalchemy.engine import RowMapping
from sqlalchemy.ext.asyncio import AsyncSession

from rental_api.application.interfaces.catalog_repo import CatalogRepo
from rental_api.domain.entities.catalog import Offer, Residence, Vehicle
from rental_api.infrastructure.db.tables import offers, residences, vehicles
from rental_api.infrastructure.db.utc import from_db, to_db


def _row_to_residence(row: RowMapping) -> Residence:
    return Residence(
        id=row["id"],
        title=row["title"],
        city=row["city"],
        price_per_day=row["price_per_day"],
        is_active=bool(row["is_active"]),
    )


def _row_to_vehicle(row: RowMapping) -> Vehicle:
    return Vehicle(
        id=row["id"],
        brand=row["brand"],
        model=row["model"],
        price_per_day=row["price_per_day"],
        is_active=bool(row["is_active"]),
    )


def _row_to_offer(row: RowMapping) -> Offer:
    return Offer(
        id=row["id"],
        title=row["title"],
        residence_id=row["residence_id"],
        vehicle_id=row["vehicle_id"],
        price=row["price"],
        valid_from=from_db(row["valid_from"]),
        valid_to=from_db(row["valid_to"]),
        is_active=bool(row["is_active"]),
    )


class CatalogRepoSQL(CatalogRepo):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def add_residence(self, residence: Residence) -> None:
        stmt = insert(residences).values(
            id=residence.id,
            title=residence.title,
            city=residence.city,
            price_per_day=residence.price_per_day,
            is_active=residence.is_active,
        )
        await self._session.execute(stmt)

    async def get_residence(self, residence_id: str) -> Residence | None:
        stmt = select(residences).where(residences.c.id == residence_id).limit(1)
        row = (await self._session.execute(stmt)).mappings().first()
        return _row_to_residence(row) if row else None

    async def list_residences(self, only_active: bool = True) -> list[Residence]:
        stmt = select(residences).order_by(residences.c.id)
        if only_active:
            stmt = stmt.where(residences.c.is_active.is_(True))
        result = await self._session.execute(stmt)
        return [_row_to_residence(row) for row in result.mappings().all()]

    async def update_residence(self, residence: Residence) -> None:
        stmt = (
            update(residences)
            .where(residences.c.id == residence.id)
            .values(
                title=residence.title,
                city=residence.city,
                price_per_day=residence.price_per_day,
                is_active=residence.is_active,
            )
        )
        await self._session.execute(stmt)

    async def add_vehicle(self, vehicle: Vehicle) -> None:
        stmt = insert(vehicles).values(
            id=vehicle.id,
            brand=vehicle.brand,
            model=vehicle.model,
            price_per_day=vehicle.price_per_day,
            is_active=vehicle.is_active,
        )
        await self._session.execute(stmt)

    async def get_vehicle(self, vehicle_id: str) -> Vehicle | None:
        stmt = select(vehicles).where(vehicles.c.id == vehicle_id).limit(1)
        row = (await self._session.execute(stmt)).mappings().first()
        return _row_to_vehicle(row) if row else None

    async def list_vehicles(self, only_active: bool = True) -> list[Vehicle]:
        stmt = select(vehicles).order_by(vehicles.c.id)
        if only_active:
            stmt = stmt.where(vehicles.c.is_active.is_(True))
        result = await self._session.execute(stmt)
        return [_row_to_vehicle(row) for row in result.mappings().all()]

    async def update_vehicle(self, vehicle: Vehicle) -> None:
        stmt = (
            update(vehicles)
            .where(vehicles.c.id == vehicle.id)
            .values(
                brand=vehicle.brand,
                model=vehicle.model,
                price_per_day=vehicle.price_per_day,
                is_active=vehicle.is_active,
            )
        )
        await self._session.execute(stmt)

    async def add_offer(self, offer: Offer) -> None:
        stmt = insert(offers).values(
            id=offer.id,
            title=offer.title,
            residence_id=offer.residence_id,
            vehicle_id=offer.vehicle_id,
            price=offer.price,
            valid_from=to_db(offer.valid_from),
            valid_to=to_db(offer.valid_to),
            is_active=offer.is_active,
        )
        await self._session.execute(stmt)

    async def get_offer(self, offer_id: str) -> Offer | None:
        stmt = select(offers).where(offers.c.id == offer_id).limit(1)
        row = (await self._session.execute(stmt)).mappings().first()
        return _row_to_offer(row) if row else None

    async def list_offers(self, only_active: bool = True) -> list[Offer]:
        stmt = select(offers).order_by(offers.c.id)
        if only_active:
            stmt = stmt.where(offers.c.is_active.is_(True))
        result = await self._session.execute(stmt)
        return [_row_to_offer(row) for row in result.mappings().all()]

    async def update_offer(self, offer: Offer) -> None:
        stmt = (
            update(offers)
            .where(offers.c.id == offer.id)
            .values(
                title=offer.title,
                price=offer.price,
                valid_from=to_db(offer.valid_from),
                valid_to=to_db(offer.valid_to),
                is_active=offer.is_active,
            )
        )
        await self._session.execute(stmt)

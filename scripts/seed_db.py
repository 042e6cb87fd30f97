import asyncio
import sys
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from pathlib import Path

# Add project root to sys.path
project_root = Path(__file__).resolve().parent.parent
sys.path.append(str(project_root))

from sqlalchemy.ext.asyncio import AsyncEngine  # noqa: E402

from rental_api.domain.entities.catalog import Offer, Residence, Vehicle  # noqa: E402
from rental_api.infrastructure.db.engine import build_sessionmaker  # noqa: E402
from rental_api.infrastructure.db.repositories.catalog_repo_sql import CatalogRepoSQL  # noqa: E402
from rental_api.infrastructure.db.tables import metadata  # noqa: E402


def demo_catalog(now: datetime) -> tuple[list[Residence], list[Vehicle], list[Offer]]:
    residences = [
        Residence(id="R1", title="Casa Azul", city="Valencia", price_per_day=Decimal("250.00")),
        Residence(id="R2", title="Loft Centro", city="Madrid", price_per_day=Decimal("100.00")),
    ]
    vehicles = [
        Vehicle(id="V1", brand="Seat", model="Ibiza", price_per_day=Decimal("40.00")),
        Vehicle(id="V2", brand="Fiat", model="500", price_per_day=Decimal("35.00")),
    ]
    offers = [
        Offer(
            id="O1",
            title="Loft + Fiat 500",
            residence_id="R2",
            vehicle_id="V2",
            price=Decimal("300.00"),
            valid_from=now,
            valid_to=now + timedelta(days=180),
        )
    ]
    return residences, vehicles, offers


async def seed(engine: AsyncEngine) -> None:
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)
    print("Created all tables.")

    residences, vehicles, offers = demo_catalog(datetime.now(timezone.utc))
    async with build_sessionmaker(engine)() as session:
        async with session.begin():
            catalog = CatalogRepoSQL(session)
            for residence in residences:
                await catalog.add_residence(residence)
            for vehicle in vehicles:
                await catalog.add_vehicle(vehicle)
            for offer in offers:
                await catalog.add_offer(offer)

    print(f"Seeded {len(residences)} residences, {len(vehicles)} vehicles, {len(offers)} offers.")


async def main() -> None:
    from rental_api.api.deps import get_engine

    engine = get_engine()
    try:
        await seed(engine)
    finally:
        await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())

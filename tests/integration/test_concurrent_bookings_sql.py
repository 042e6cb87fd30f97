"""
Reservas concurrentes sobre SQLite en fichero.

Dos sesiones independientes intentan reservar el mismo recurso en las mismas
fechas: solo una transacción puede persistir la reserva.
"""

import asyncio
from datetime import datetime, timezone
from decimal import Decimal

import pytest
import pytest_asyncio

from rental_api.api.schemas.bookings import CreateBookingRequest
from rental_api.application.interfaces.clock import FakeClock
from rental_api.application.interfaces.id_generator import RealIdGenerator
from rental_api.application.services.booking_orchestrator import BookingOrchestrator
from rental_api.application.use_cases.create_booking import CreateBookingUseCase
from rental_api.config import Settings
from rental_api.domain.entities.catalog import Offer, Residence, Vehicle
from rental_api.domain.errors import ResourceNotAvailableError
from rental_api.infrastructure.db.engine import build_engine, build_sessionmaker
from rental_api.infrastructure.db.repositories.booking_repo_sql import BookingRepoSQL
from rental_api.infrastructure.db.repositories.booking_store_sql import BookingStoreSQL
from rental_api.infrastructure.db.repositories.catalog_repo_sql import CatalogRepoSQL
from rental_api.infrastructure.db.repositories.idempotency_repo_sql import IdempotencyRepoSQL
from rental_api.infrastructure.db.tables import metadata
from rental_api.infrastructure.db.transaction_manager import (
    SQLAlchemyTransactionManager,
    SQLResourceLocker,
)


def utc(*args: int) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


@pytest_asyncio.fixture
async def file_engine(tmp_path):
    settings = Settings(database_url=f"sqlite+aiosqlite:///{tmp_path / 'bookings.db'}", use_in_memory=False)
    engine = build_engine(settings)
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)

    async with build_sessionmaker(engine)() as session:
        async with session.begin():
            catalog = CatalogRepoSQL(session)
            await catalog.add_residence(Residence(id="R1", title="Casa", price_per_day=Decimal("250.00")))
            await catalog.add_vehicle(Vehicle(id="V1", brand="Seat", model="Ibiza", price_per_day=Decimal("40.00")))
            await catalog.add_offer(
                Offer(
                    id="O1",
                    title="Pack",
                    residence_id="R1",
                    vehicle_id="V1",
                    price=Decimal("300.00"),
                    valid_from=utc(2024, 5, 1),
                    valid_to=utc(2024, 12, 31),
                )
            )

    yield engine

    await engine.dispose()


def _create_booking(session) -> CreateBookingUseCase:
    clock = FakeClock(utc(2024, 5, 15, 12))
    store = BookingStoreSQL(session)
    return CreateBookingUseCase(
        orchestrator=BookingOrchestrator(store=store, clock=clock),
        booking_repo=BookingRepoSQL(session),
        booking_store=store,
        idempotency_repo=IdempotencyRepoSQL(session),
        transaction_manager=SQLAlchemyTransactionManager(session),
        resource_locker=SQLResourceLocker(session),
        id_generator=RealIdGenerator(),
        clock=clock,
    )


async def _race(engine, first: CreateBookingRequest, second: CreateBookingRequest) -> list:
    session_maker = build_sessionmaker(engine)
    async with session_maker() as session_a, session_maker() as session_b:
        return await asyncio.gather(
            _create_booking(session_a).execute(first, idem_key="k1"),
            _create_booking(session_b).execute(second, idem_key="k2"),
            return_exceptions=True,
        )


async def _stored_bookings(engine):
    async with build_sessionmaker(engine)() as session:
        return await BookingRepoSQL(session).list_bookings()


class TestConcurrentCreateOverSQL:
    @pytest.mark.asyncio
    async def test_same_residence_same_dates_only_one_persisted(self, file_engine):
        request = CreateBookingRequest(start_date="2024-07-01", end_date="2024-07-04", residence_id="R1")

        results = await _race(file_engine, request, request)

        assert sum(isinstance(r, ResourceNotAvailableError) for r in results) == 1
        assert sum(not isinstance(r, Exception) for r in results) == 1
        assert len(await _stored_bookings(file_engine)) == 1

    @pytest.mark.asyncio
    async def test_offer_and_bundled_vehicle_only_one_persisted(self, file_engine):
        offer = CreateBookingRequest(start_date="2024-07-01", end_date="2024-07-04", offer_id="O1")
        vehicle = CreateBookingRequest(start_date="2024-07-02", end_date="2024-07-05", vehicle_id="V1")

        results = await _race(file_engine, offer, vehicle)

        assert sum(isinstance(r, ResourceNotAvailableError) for r in results) == 1
        assert len(await _stored_bookings(file_engine)) == 1

    @pytest.mark.asyncio
    async def test_disjoint_dates_both_persisted(self, file_engine):
        first = CreateBookingRequest(start_date="2024-07-01", end_date="2024-07-04", residence_id="R1")
        second = CreateBookingRequest(start_date="2024-07-04", end_date="2024-07-06", residence_id="R1")

        results = await _race(file_engine, first, second)

        assert not any(isinstance(r, Exception) for r in results)
        assert len(await _stored_bookings(file_engine)) == 2

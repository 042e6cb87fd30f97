"""Adaptadores SQL contra SQLite in-memory (aiosqlite)."""

from dataclasses import replace
from datetime import datetime, timezone
from decimal import Decimal

import pytest
import pytest_asyncio

from rental_api.api.schemas.bookings import CreateBookingRequest
from rental_api.api.schemas.catalog import UpdateOfferRequest, UpdateVehicleRequest
from rental_api.application.interfaces.clock import FakeClock
from rental_api.application.interfaces.id_generator import FakeIdGenerator
from rental_api.application.interfaces.idempotency_repo import IdempotencyRecord
from rental_api.application.services.booking_orchestrator import BookingOrchestrator
from rental_api.application.use_cases.create_booking import CreateBookingUseCase
from rental_api.application.use_cases.manage_catalog import UpdateCatalogUseCase
from rental_api.domain.entities.booking import Booking, BookingStatus
from rental_api.domain.entities.catalog import Offer, Residence, Vehicle
from rental_api.domain.entities.resource import ServiceKind
from rental_api.domain.errors import (
    BookingAlreadyExistsError,
    BookingNotFoundError,
    IdempotencyConflictError,
    OptimisticLockError,
    ResourceInUseError,
    ResourceNotAvailableError,
    ValidationError,
)
from rental_api.infrastructure.db.repositories.booking_repo_sql import BookingRepoSQL
from rental_api.infrastructure.db.repositories.booking_store_sql import BookingStoreSQL
from rental_api.infrastructure.db.repositories.catalog_repo_sql import CatalogRepoSQL
from rental_api.infrastructure.db.repositories.idempotency_repo_sql import IdempotencyRepoSQL
from rental_api.infrastructure.db.transaction_manager import (
    SQLAlchemyTransactionManager,
    SQLResourceLocker,
)


def utc(*args: int) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


@pytest_asyncio.fixture
async def seeded_session(db_session):
    catalog = CatalogRepoSQL(db_session)
    async with db_session.begin():
        await catalog.add_residence(Residence(id="R1", title="Casa", price_per_day=Decimal("250.00")))
        await catalog.add_residence(
            Residence(id="R2", title="Cerrada", price_per_day=Decimal("90.00"), is_active=False)
        )
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
    return db_session


def _booking(booking_id: str, start: datetime, end: datetime, **kwargs) -> Booking:
    defaults = {
        "id": booking_id,
        "booking_code": f"BKG-{booking_id.upper()}",
        "start_date": start,
        "end_date": end,
        "total_price": Decimal("100.00"),
        "status": BookingStatus.CONFIRMED,
        "created_at": utc(2024, 5, 15),
        "updated_at": utc(2024, 5, 15),
    }
    defaults.update(kwargs)
    return Booking(**defaults)


class TestCatalogRepoSQL:
    @pytest.mark.asyncio
    async def test_get_and_list(self, seeded_session):
        catalog = CatalogRepoSQL(seeded_session)
        residence = await catalog.get_residence("R1")
        assert residence.price_per_day == Decimal("250.00")
        assert [r.id for r in await catalog.list_residences()] == ["R1"]
        assert {r.id for r in await catalog.list_residences(only_active=False)} == {"R1", "R2"}
        assert await catalog.get_vehicle("missing") is None

    @pytest.mark.asyncio
    async def test_offer_window_roundtrips_as_utc(self, seeded_session):
        offer = await CatalogRepoSQL(seeded_session).get_offer("O1")
        assert offer.valid_from == utc(2024, 5, 1)
        assert offer.valid_from.tzinfo is not None


    @pytest.mark.asyncio
    async def test_updates_overwrite_mutable_columns(self, seeded_session):
        catalog = CatalogRepoSQL(seeded_session)
        async with seeded_session.begin():
            residence = await catalog.get_residence("R1")
            await catalog.update_residence(replace(residence, city="Madrid", price_per_day=Decimal("200.00")))
            vehicle = await catalog.get_vehicle("V1")
            await catalog.update_vehicle(replace(vehicle, is_active=False))
            offer = await catalog.get_offer("O1")
            await catalog.update_offer(replace(offer, valid_to=utc(2024, 9, 30), residence_id="R2"))

        residence = await catalog.get_residence("R1")
        assert (residence.city, residence.price_per_day) == ("Madrid", Decimal("200.00"))
        assert not (await catalog.get_vehicle("V1")).is_active
        offer = await catalog.get_offer("O1")
        assert offer.valid_to == utc(2024, 9, 30)
        assert offer.residence_id == "R1"


class TestBookingStoreSQL:
    @pytest.mark.asyncio
    async def test_get_resource(self, seeded_session):
        store = BookingStoreSQL(seeded_session)
        residence = await store.get_resource(ServiceKind.RESIDENCE, "R1")
        assert residence.per_day_rate == Decimal("250.00")
        assert residence.is_active

        inactive = await store.get_resource(ServiceKind.RESIDENCE, "R2")
        assert not inactive.is_active

        offer = await store.get_resource(ServiceKind.OFFER, "O1")
        assert offer.fixed_price == Decimal("300.00")
        assert await store.get_resource(ServiceKind.VEHICLE, "nope") is None

    @pytest.mark.asyncio
    async def test_active_bookings_include_bundling_offers(self, seeded_session):
        repo = BookingRepoSQL(seeded_session)
        async with seeded_session.begin():
            await repo.create_booking(_booking("b1", utc(2024, 6, 1), utc(2024, 6, 7), residence_id="R1"))
            await repo.create_booking(_booking("b2", utc(2024, 7, 1), utc(2024, 7, 3), offer_id="O1"))
            await repo.create_booking(
                _booking("b3", utc(2024, 8, 1), utc(2024, 8, 3), residence_id="R1", status=BookingStatus.CANCELLED)
            )

        store = BookingStoreSQL(seeded_session)
        residence_bookings = await store.list_active_bookings_for_resource(ServiceKind.RESIDENCE, "R1")
        assert {b.booking_id for b in residence_bookings} == {"b1", "b2"}

        vehicle_bookings = await store.list_active_bookings_for_resource(ServiceKind.VEHICLE, "V1")
        assert [b.booking_id for b in vehicle_bookings] == ["b2"]
        assert vehicle_bookings[0].resource_kind == ServiceKind.OFFER
        assert vehicle_bookings[0].start_date == utc(2024, 7, 1)

    @pytest.mark.asyncio
    async def test_get_offer(self, seeded_session):
        offer = await BookingStoreSQL(seeded_session).get_offer("O1")
        assert offer.residence_id == "R1"

        assert offer.is_valid_at(utc(2024, 6, 1))


class TestBookingRepoSQL:
    @pytest.mark.asyncio
    async def test_create_and_read_back(self, seeded_session):
        repo = BookingRepoSQL(seeded_session)
        async with seeded_session.begin():
            await repo.create_booking(_booking("b1", utc(2024, 6, 1), utc(2024, 6, 7), residence_id="R1", user_id="u1"))

        by_id = await repo.get_by_id("b1")
        assert by_id.start_date == utc(2024, 6, 1)
        assert by_id.status == BookingStatus.CONFIRMED
        assert (await repo.get_by_code("BKG-B1")).id == "b1"
        assert [b.id for b in await repo.list_bookings(user_id="u1")] == ["b1"]
        assert await repo.list_bookings(user_id="u2") == []

    @pytest.mark.asyncio
    async def test_update_status_checks_lock_version(self, seeded_session):
        repo = BookingRepoSQL(seeded_session)
        async with seeded_session.begin():
            await repo.create_booking(_booking("b1", utc(2024, 6, 1), utc(2024, 6, 7), residence_id="R1"))

        async with seeded_session.begin():
            await repo.update_status("b1", BookingStatus.CANCELLED, expected_lock_version=0, updated_at=utc(2024, 5, 20))

        stored = await repo.get_by_id("b1")
        assert stored.status == BookingStatus.CANCELLED
        assert stored.lock_version == 1
        assert stored.updated_at == utc(2024, 5, 20)

        with pytest.raises(OptimisticLockError):
            await repo.update_status("b1", BookingStatus.CONFIRMED, expected_lock_version=0)
        with pytest.raises(BookingNotFoundError):
            await repo.update_status("missing", BookingStatus.CONFIRMED)

    @pytest.mark.asyncio
    async def test_duplicate_booking_code_rejected(self, seeded_session):
        repo = BookingRepoSQL(seeded_session)
        async with seeded_session.begin():
            await repo.create_booking(_booking("b1", utc(2024, 6, 1), utc(2024, 6, 7), residence_id="R1"))

        with pytest.raises(BookingAlreadyExistsError):
            async with seeded_session.begin():
                await repo.create_booking(
                    _booking("b2", utc(2024, 8, 1), utc(2024, 8, 3), residence_id="R1", booking_code="BKG-B1")
                )

        assert [b.id for b in await repo.list_bookings()] == ["b1"]


class TestIdempotencyRepoSQL:
    @pytest.mark.asyncio
    async def test_save_and_get(self, db_session):
        repo = IdempotencyRepoSQL(db_session)
        async with db_session.begin():
            await repo.save(
                IdempotencyRecord(
                    scope="BOOKING_CREATE",
                    idem_key="k1",
                    request_hash="abc",
                    response_json={"id": "b1"},
                    http_status=201,
                    reference_booking_code="BKG-1",
                )
            )
        record = await repo.get("BOOKING_CREATE", "k1")
        assert record.response_json == {"id": "b1"}
        assert record.reference_booking_code == "BKG-1"
        assert await repo.get("BOOKING_CREATE", "other") is None

    @pytest.mark.asyncio
    async def test_duplicate_key_is_conflict(self, db_session):
        repo = IdempotencyRepoSQL(db_session)
        record = IdempotencyRecord(
            scope="BOOKING_CREATE",
            idem_key="k1",
            request_hash="abc",
            response_json={},
            http_status=201,
        )
        async with db_session.begin():
            await repo.save(record)

        with pytest.raises(IdempotencyConflictError):
            async with db_session.begin():
                await repo.save(record)


class TestCreateBookingOverSQL:
    @pytest.mark.asyncio
    async def test_full_flow(self, seeded_session):
        clock = FakeClock(utc(2024, 5, 15, 12))
        store = BookingStoreSQL(seeded_session)
        use_case = CreateBookingUseCase(
            orchestrator=BookingOrchestrator(store=store, clock=clock),
            booking_repo=BookingRepoSQL(seeded_session),
            booking_store=store,
            idempotency_repo=IdempotencyRepoSQL(seeded_session),
            transaction_manager=SQLAlchemyTransactionManager(seeded_session),
            resource_locker=SQLResourceLocker(seeded_session),
            id_generator=FakeIdGenerator(),
            clock=clock,
        )
        request = CreateBookingRequest(start_date="2024-07-01", end_date="2024-07-04", residence_id="R1")

        created = await use_case.execute(request, idem_key="k1")
        assert created.total_price == Decimal("750.00")

        replay = await use_case.execute(request, idem_key="k1")
        assert replay.id == created.id

        with pytest.raises(ResourceNotAvailableError):
            await use_case.execute(
                CreateBookingRequest(start_date="2024-07-02", end_date="2024-07-03", offer_id="O1"),
                idem_key="k2",
            )


class TestUpdateCatalogOverSQL:
    @pytest.mark.asyncio
    async def test_bundled_vehicle_in_use_cannot_be_deactivated(self, seeded_session):
        async with seeded_session.begin():
            await BookingRepoSQL(seeded_session).create_booking(
                _booking("b1", utc(2024, 7, 1), utc(2024, 7, 3), offer_id="O1")
            )
        use_case = UpdateCatalogUseCase(
            catalog_repo=CatalogRepoSQL(seeded_session),
            booking_store=BookingStoreSQL(seeded_session),
            transaction_manager=SQLAlchemyTransactionManager(seeded_session),
            resource_locker=SQLResourceLocker(seeded_session),
        )

        with pytest.raises(ResourceInUseError):
            await use_case.deactivate_vehicle("V1")

        updated = await use_case.update_vehicle("V1", UpdateVehicleRequest(price_per_day="45.00"))
        assert updated.price_per_day == Decimal("45.00")
        assert updated.is_active

        with pytest.raises(ValidationError):
            await use_case.update_offer("O1", UpdateOfferRequest(valid_from=utc(2025, 1, 1)))
        assert (await CatalogRepoSQL(seeded_session).get_offer("O1")).valid_from == utc(2024, 5, 1)


class TestSeedScript:
    @pytest.mark.asyncio
    async def test_seed_populates_catalog(self, test_engine, db_session):
        from scripts.seed_db import seed

        await seed(test_engine)

        catalog = CatalogRepoSQL(db_session)
        assert {r.id for r in await catalog.list_residences()} == {"R1", "R2"}
        offer = await catalog.get_offer("O1")
        assert offer.residence_id == "R2"

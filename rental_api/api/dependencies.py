from functools import lru_cache
from typing import Any

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from rental_api.api.deps import get_sessionmaker
from rental_api.application.interfaces.clock import Clock, SystemClock
from rental_api.application.interfaces.id_generator import IdGenerator, RealIdGenerator
from rental_api.application.services.booking_orchestrator import BookingOrchestrator
from rental_api.application.use_cases.change_booking_status import ChangeBookingStatusUseCase
from rental_api.application.use_cases.create_booking import CreateBookingUseCase
from rental_api.application.use_cases.get_booking import GetBookingUseCase, ListBookingsUseCase
from rental_api.application.use_cases.manage_catalog import (
    CatalogQueryUseCase,
    RegisterOfferUseCase,
    RegisterResidenceUseCase,
    RegisterVehicleUseCase,
    UpdateCatalogUseCase,
)
from rental_api.application.use_cases.quote_booking import QuoteBookingUseCase
from rental_api.config import Settings, get_settings
from rental_api.infrastructure.db.repositories.booking_repo_sql import BookingRepoSQL
from rental_api.infrastructure.db.repositories.booking_store_sql import BookingStoreSQL
from rental_api.infrastructure.db.repositories.catalog_repo_sql import CatalogRepoSQL
from rental_api.infrastructure.db.repositories.idempotency_repo_sql import IdempotencyRepoSQL
from rental_api.infrastructure.db.transaction_manager import (
    SQLAlchemyTransactionManager,
    SQLResourceLocker,
)
from rental_api.infrastructure.in_memory.booking_repo import InMemoryBookingRepo
from rental_api.infrastructure.in_memory.booking_store import InMemoryBookingStore
from rental_api.infrastructure.in_memory.catalog_repo import InMemoryCatalogRepo
from rental_api.infrastructure.in_memory.idempotency_repo import InMemoryIdempotencyRepo
from rental_api.infrastructure.in_memory.transaction_manager import (
    InMemoryResourceLocker,
    NoopTransactionManager,
)


async def get_session(settings: Settings = Depends(get_settings)) -> AsyncSession | None:
    if settings.use_in_memory:
        yield None
        return
    async with get_sessionmaker()() as session:
        yield session


@lru_cache(maxsize=1)
def get_clock() -> Clock:
    return SystemClock()


@lru_cache(maxsize=1)
def get_id_generator() -> IdGenerator:
    return RealIdGenerator()


@lru_cache(maxsize=1)
def _in_memory_bundle() -> dict[str, Any]:
    catalog_repo = InMemoryCatalogRepo()
    booking_repo = InMemoryBookingRepo()
    return {
        "catalog_repo": catalog_repo,
        "booking_repo": booking_repo,
        "booking_store": InMemoryBookingStore(catalog_repo=catalog_repo, booking_repo=booking_repo),
        "idempotency_repo": InMemoryIdempotencyRepo(),
        "tx_manager": NoopTransactionManager(),
        "resource_locker": InMemoryResourceLocker(),
    }


def _sql_bundle(session: AsyncSession) -> dict[str, Any]:
    return {
        "catalog_repo": CatalogRepoSQL(session),
        "booking_repo": BookingRepoSQL(session),
        "booking_store": BookingStoreSQL(session),
        "idempotency_repo": IdempotencyRepoSQL(session),
        "tx_manager": SQLAlchemyTransactionManager(session),
        "resource_locker": SQLResourceLocker(session),
    }


def get_use_cases(
    settings: Settings = Depends(get_settings),
    session: AsyncSession | None = Depends(get_session),
    clock: Clock = Depends(get_clock),
    id_generator: IdGenerator = Depends(get_id_generator),
):
    if settings.use_in_memory:
        bundle = _in_memory_bundle()
    else:
        if not session:
            raise RuntimeError("DB session not available")
        bundle = _sql_bundle(session)

    orchestrator = BookingOrchestrator(
        store=bundle["booking_store"],
        clock=clock,
        max_booking_days=settings.max_booking_days,
        currency_code=settings.currency_code,
    )

    return {
        "create_booking": CreateBookingUseCase(
            orchestrator=orchestrator,
            booking_repo=bundle["booking_repo"],
            booking_store=bundle["booking_store"],
            idempotency_repo=bundle["idempotency_repo"],
            transaction_manager=bundle["tx_manager"],
            resource_locker=bundle["resource_locker"],
            id_generator=id_generator,
            clock=clock,
            currency_code=settings.currency_code,
        ),
        "quote_booking": QuoteBookingUseCase(orchestrator=orchestrator),
        "get_booking": GetBookingUseCase(booking_repo=bundle["booking_repo"]),
        "list_bookings": ListBookingsUseCase(booking_repo=bundle["booking_repo"]),
        "change_booking_status": ChangeBookingStatusUseCase(
            booking_repo=bundle["booking_repo"],
            transaction_manager=bundle["tx_manager"],
            clock=clock,
        ),
        "register_residence": RegisterResidenceUseCase(
            catalog_repo=bundle["catalog_repo"],
            transaction_manager=bundle["tx_manager"],
            id_generator=id_generator,
        ),
        "register_vehicle": RegisterVehicleUseCase(
            catalog_repo=bundle["catalog_repo"],
            transaction_manager=bundle["tx_manager"],
            id_generator=id_generator,
        ),
        "register_offer": RegisterOfferUseCase(
            catalog_repo=bundle["catalog_repo"],
            transaction_manager=bundle["tx_manager"],
            id_generator=id_generator,
        ),
        "catalog_query": CatalogQueryUseCase(catalog_repo=bundle["catalog_repo"]),
        "update_catalog": UpdateCatalogUseCase(
            catalog_repo=bundle["catalog_repo"],
            booking_store=bundle["booking_store"],
            transaction_manager=bundle["tx_manager"],
            resource_locker=bundle["resource_locker"],
        ),
    }

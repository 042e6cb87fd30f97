"""
Pytest configuration and shared fixtures.

Este módulo provee fixtures reutilizables para:
- Reloj fijo y generador de ids deterministas
- Catálogo in-memory con recursos de ejemplo
- Cliente HTTP de prueba (FastAPI TestClient) sobre el bundle in-memory
- Sesión SQLite in-memory para los adaptadores SQL
"""

import uuid
from datetime import datetime, timezone
from decimal import Decimal
from typing import AsyncGenerator, Generator

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from rental_api.api.dependencies import _in_memory_bundle, get_clock, get_id_generator
from rental_api.application.interfaces.clock import FakeClock
from rental_api.application.interfaces.id_generator import FakeIdGenerator
from rental_api.config import get_settings
from rental_api.domain.entities.catalog import Offer, Residence, Vehicle
from rental_api.infrastructure.db.tables import metadata
from rental_api.infrastructure.in_memory import (
    InMemoryBookingRepo,
    InMemoryBookingStore,
    InMemoryCatalogRepo,
)
from rental_api.main import app

# Todas las fechas de ejemplo (junio/julio 2024) quedan en el futuro
NOW = datetime(2024, 5, 15, 12, 0, tzinfo=timezone.utc)

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


def utc(*args: int) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


def seed_catalog(catalog_repo: InMemoryCatalogRepo) -> None:
    """Recursos de ejemplo usados por los tests del motor y de la API."""
    catalog_repo.residences["R1"] = Residence(id="R1", title="Casa Azul", price_per_day=Decimal("250.00"))
    catalog_repo.residences["R100"] = Residence(id="R100", title="Loft", price_per_day=Decimal("100.00"))
    catalog_repo.residences["R-OFF"] = Residence(
        id="R-OFF", title="Cerrada", price_per_day=Decimal("80.00"), is_active=False
    )
    catalog_repo.vehicles["V1"] = Vehicle(id="V1", brand="Seat", model="Ibiza", price_per_day=Decimal("40.00"))
    catalog_repo.vehicles["V2"] = Vehicle(id="V2", brand="Fiat", model="500", price_per_day=Decimal("35.00"))
    catalog_repo.offers["O1"] = Offer(
        id="O1",
        title="Casa + coche",
        residence_id="R100",
        vehicle_id="V2",
        price=Decimal("300.00"),
        valid_from=utc(2024, 5, 1),
        valid_to=utc(2024, 12, 31),
    )


# ============================================================================
# FIXTURES DEL MOTOR (in-memory)
# ============================================================================

@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(NOW)


@pytest.fixture
def catalog_repo() -> InMemoryCatalogRepo:
    repo = InMemoryCatalogRepo()
    seed_catalog(repo)
    return repo


@pytest.fixture
def booking_repo() -> InMemoryBookingRepo:
    return InMemoryBookingRepo()


@pytest.fixture
def store(catalog_repo, booking_repo) -> InMemoryBookingStore:
    return InMemoryBookingStore(catalog_repo=catalog_repo, booking_repo=booking_repo)


# ============================================================================
# FIXTURES DE CLIENTE HTTP
# ============================================================================

@pytest.fixture
def bundle():
    """Bundle in-memory limpio y sembrado para cada test."""
    get_settings.cache_clear()
    _in_memory_bundle.cache_clear()
    current = _in_memory_bundle()
    seed_catalog(current["catalog_repo"])
    yield current
    _in_memory_bundle.cache_clear()


@pytest.fixture
def client(bundle, clock) -> Generator[TestClient, None, None]:
    """
    FastAPI TestClient sobre el bundle in-memory.
    Reloj e ids deterministas vía dependency_overrides.
    """
    app.dependency_overrides[get_clock] = lambda: clock
    id_generator = FakeIdGenerator(prefix="bkg")
    app.dependency_overrides[get_id_generator] = lambda: id_generator

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def unique_idem_key():
    """Generador de idempotency keys únicas para cada test."""
    return f"test_{uuid.uuid4().hex[:16]}"


# ============================================================================
# FIXTURES DE BASE DE DATOS
# ============================================================================

@pytest_asyncio.fixture
async def test_engine():
    engine = create_async_engine(TEST_DATABASE_URL, echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    session_maker = async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)
    async with session_maker() as session:
        yield session

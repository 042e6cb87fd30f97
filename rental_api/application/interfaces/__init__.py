"""Interfaces (Puertos) de la capa de aplicación."""

from rental_api.application.interfaces.booking_repo import BookingRepo
from rental_api.application.interfaces.booking_store import BookingStore
from rental_api.application.interfaces.catalog_repo import CatalogRepo
from rental_api.application.interfaces.clock import Clock, FakeClock, SystemClock
from rental_api.application.interfaces.id_generator import (
    FakeIdGenerator,
    IdGenerator,
    RealIdGenerator,
)
from rental_api.application.interfaces.idempotency_repo import IdempotencyRecord, IdempotencyRepo
from rental_api.application.interfaces.transaction_manager import (
    ResourceKey,
    ResourceLocker,
    TransactionManager,
)

__all__ = [
    # Repositories
    "BookingRepo",
    "BookingStore",
    "CatalogRepo",
    "IdempotencyRecord",
    "IdempotencyRepo",
    # Infrastructure
    "TransactionManager",
    "ResourceLocker",
    "ResourceKey",
    # Utilities
    "Clock",
    "SystemClock",
    "FakeClock",
    "IdGenerator",
    "RealIdGenerator",
    "FakeIdGenerator",
]

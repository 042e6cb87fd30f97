"""Implementaciones in-memory para testing y modo demo."""

from rental_api.infrastructure.in_memory.booking_repo import InMemoryBookingRepo
from rental_api.infrastructure.in_memory.booking_store import InMemoryBookingStore
from rental_api.infrastructure.in_memory.catalog_repo import InMemoryCatalogRepo
from rental_api.infrastructure.in_memory.idempotency_repo import InMemoryIdempotencyRepo
from rental_api.infrastructure.in_memory.transaction_manager import (
    InMemoryResourceLocker,
    NoopTransactionManager as InMemoryTransactionManager,
)

__all__ = [
    # Repositories
    "InMemoryBookingRepo",
    "InMemoryCatalogRepo",
    "InMemoryIdempotencyRepo",
    # Read model
    "InMemoryBookingStore",
    # Infrastructure
    "InMemoryTransactionManager",
    "InMemoryResourceLocker",
]

"""
Capa de Infraestructura - Sistema de Reservas.

Esta capa contiene las implementaciones concretas de los puertos (interfaces).

Estructura:
- db/: Tablas, repositorios SQL, locks de fila y reintentos ante deadlocks
- in_memory/: Implementaciones in-memory para testing y modo demo
"""

# Database
from rental_api.infrastructure.db.repositories.booking_repo_sql import BookingRepoSQL
from rental_api.infrastructure.db.repositories.booking_store_sql import BookingStoreSQL
from rental_api.infrastructure.db.repositories.catalog_repo_sql import CatalogRepoSQL
from rental_api.infrastructure.db.repositories.idempotency_repo_sql import IdempotencyRepoSQL
from rental_api.infrastructure.db.transaction_manager import (
    SQLAlchemyTransactionManager,
    SQLResourceLocker,
)

# In-Memory (for testing)
from rental_api.infrastructure.in_memory import (
    InMemoryBookingRepo,
    InMemoryBookingStore,
    InMemoryCatalogRepo,
    InMemoryIdempotencyRepo,
    InMemoryResourceLocker,
    InMemoryTransactionManager,
)

__all__ = [
    # Database - Repositories SQL
    "BookingRepoSQL",
    "BookingStoreSQL",
    "CatalogRepoSQL",
    "IdempotencyRepoSQL",
    "SQLAlchemyTransactionManager",
    "SQLResourceLocker",
    # In-Memory Implementations
    "InMemoryBookingRepo",
    "InMemoryBookingStore",
    "InMemoryCatalogRepo",
    "InMemoryIdempotencyRepo",
    "InMemoryResourceLocker",
    "InMemoryTransactionManager",
]

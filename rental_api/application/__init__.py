"""
Capa de Aplicación - Sistema de Reservas.

Esta capa contiene el motor de validación, los casos de uso e interfaces (puertos).
Orquesta la lógica de negocio y define los contratos con la infraestructura.

Estructura:
- services/: Motor de validación (fechas, disponibilidad, precio, orquestador)
- use_cases/: Casos de uso del sistema
- interfaces/: Puertos (contratos para adaptadores)
"""

from rental_api.application.interfaces import (
    BookingRepo,
    BookingStore,
    CatalogRepo,
    Clock,
    FakeClock,
    FakeIdGenerator,
    IdempotencyRecord,
    IdempotencyRepo,
    IdGenerator,
    RealIdGenerator,
    ResourceLocker,
    SystemClock,
    TransactionManager,
)
from rental_api.application.services import (
    AvailabilityChecker,
    BookingOrchestrator,
    PriceCalculator,
)

__all__ = [
    # Engine
    "AvailabilityChecker",
    "BookingOrchestrator",
    "PriceCalculator",
    # Interfaces - Repositories
    "BookingRepo",
    "BookingStore",
    "CatalogRepo",
    "IdempotencyRecord",
    "IdempotencyRepo",
    # Interfaces - Infrastructure
    "TransactionManager",
    "ResourceLocker",
    # Interfaces - Utilities
    "Clock",
    "SystemClock",
    "FakeClock",
    "IdGenerator",
    "RealIdGenerator",
    "FakeIdGenerator",
]

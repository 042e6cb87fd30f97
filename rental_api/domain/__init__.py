"""
Capa de Dominio - Sistema de Reservas.

Esta capa contiene la lógica de negocio pura, sin dependencias de frameworks.
Incluye entidades, value objects, reglas y excepciones de dominio.

Estructura:
- entities/: Entidades del dominio (Booking, Residence, Offer, etc.)
- value_objects/: Objetos de valor inmutables (DatetimeRange, Money)
- rules/: Reglas puras (validación de fechas, selección de servicio, códigos de reserva)
- errors.py: Excepciones específicas del dominio
- constants.py: Constantes del dominio
"""

from rental_api.domain.constants import (
    ACTIVE_BOOKING_STATUSES,
    BOOKING_STATUS_CANCELLED,
    BOOKING_STATUS_COMPLETED,
    BOOKING_STATUS_CONFIRMED,
    BOOKING_STATUS_PENDING,
    MAX_BOOKING_DAYS,
)
from rental_api.domain.entities import (
    Booking,
    BookingQuote,
    BookingRequest,
    BookingStatus,
    ExistingBooking,
    Offer,
    OfferRecord,
    PriceSource,
    Residence,
    ResourceRecord,
    ServiceKind,
    ServiceSelection,
    Vehicle,
)
from rental_api.domain.errors import (
    AvailabilityError,
    BookingError,
    BookingAlreadyExistsError,
    BookingNotFoundError,
    DateRangeError,
    DomainError,
    EndBeforeStartError,
    IdempotencyConflictError,
    InvalidBookingStatusError,
    InvalidFormatError,
    MultipleServicesSpecifiedError,
    NoServiceSpecifiedError,
    OfferNotCurrentlyValidError,
    OptimisticLockError,
    PriceError,
    PriceUnresolvableError,
    ResourceInUseError,
    ResourceNotAvailableError,
    ResourceNotFoundError,
    ResourceUnavailableError,
    ServiceSelectionError,
    SpanTooLongError,
    StartNotInFutureError,
    ValidationError,
)
from rental_api.domain.value_objects import DatetimeRange, Money

__all__ = [
    # Constants
    "ACTIVE_BOOKING_STATUSES",
    "BOOKING_STATUS_CANCELLED",
    "BOOKING_STATUS_COMPLETED",
    "BOOKING_STATUS_CONFIRMED",
    "BOOKING_STATUS_PENDING",
    "MAX_BOOKING_DAYS",
    # Entities
    "Booking",
    "BookingStatus",
    "BookingRequest",
    "BookingQuote",
    "PriceSource",
    "ServiceSelection",
    "ServiceKind",
    "ResourceRecord",
    "OfferRecord",
    "ExistingBooking",
    "Residence",
    "Vehicle",
    "Offer",
    # Value Objects
    "DatetimeRange",
    "Money",
    # Errors
    "DomainError",
    "BookingError",
    "BookingAlreadyExistsError",
    "DateRangeError",
    "InvalidFormatError",
    "StartNotInFutureError",
    "EndBeforeStartError",
    "SpanTooLongError",
    "ServiceSelectionError",
    "NoServiceSpecifiedError",
    "MultipleServicesSpecifiedError",
    "AvailabilityError",
    "ResourceNotFoundError",
    "ResourceUnavailableError",
    "ResourceInUseError",
    "ResourceNotAvailableError",
    "OfferNotCurrentlyValidError",
    "PriceError",
    "PriceUnresolvableError",
    "BookingNotFoundError",
    "InvalidBookingStatusError",
    "OptimisticLockError",
    "IdempotencyConflictError",
    "ValidationError",
]

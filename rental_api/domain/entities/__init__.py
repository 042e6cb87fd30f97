"""Entidades del dominio de reservas."""

from rental_api.domain.entities.booking import Booking, BookingStatus
from rental_api.domain.entities.booking_request import (
    BookingQuote,
    BookingRequest,
    PriceSource,
    ServiceSelection,
)
from rental_api.domain.entities.catalog import Offer, Residence, Vehicle
from rental_api.domain.entities.resource import (
    ExistingBooking,
    OfferRecord,
    ResourceRecord,
    ServiceKind,
)

__all__ = [
    # Booking
    "Booking",
    "BookingStatus",
    # Motor de validación
    "BookingRequest",
    "BookingQuote",
    "PriceSource",
    "ServiceSelection",
    # Vistas del store
    "ServiceKind",
    "ResourceRecord",
    "OfferRecord",
    "ExistingBooking",
    # Catálogo
    "Residence",
    "Vehicle",
    "Offer",
]

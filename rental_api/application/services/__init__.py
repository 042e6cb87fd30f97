"""Motor de validación y disponibilidad de reservas."""

from rental_api.application.services.availability_checker import AvailabilityChecker, find_conflict
from rental_api.application.services.booking_orchestrator import BookingOrchestrator
from rental_api.application.services.price_calculator import PriceCalculator

__all__ = [
    "AvailabilityChecker",
    "BookingOrchestrator",
    "PriceCalculator",
    "find_conflict",
]

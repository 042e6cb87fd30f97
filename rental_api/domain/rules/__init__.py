"""Reglas puras del motor de validación de reservas."""

from rental_api.domain.rules.booking_code import is_booking_code, new_booking_code
from rental_api.domain.rules.date_range import day_count, parse_instant, validate_dates
from rental_api.domain.rules.service_selection import select_service

__all__ = [
    "day_count",
    "is_booking_code",
    "new_booking_code",
    "parse_instant",
    "select_service",
    "validate_dates",
]

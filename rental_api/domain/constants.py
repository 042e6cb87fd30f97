"""Constantes del dominio de reservas."""

BOOKING_STATUS_PENDING = "PENDING"
BOOKING_STATUS_CONFIRMED = "CONFIRMED"
BOOKING_STATUS_CANCELLED = "CANCELLED"
BOOKING_STATUS_COMPLETED = "COMPLETED"

# Solo estos estados ocupan capacidad del recurso
ACTIVE_BOOKING_STATUSES = frozenset({BOOKING_STATUS_PENDING, BOOKING_STATUS_CONFIRMED})

MAX_BOOKING_DAYS = 30

SECONDS_PER_DAY = 86400

BOOKING_CODE_PREFIX = "BKG-"

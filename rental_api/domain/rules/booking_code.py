"""Códigos públicos de reserva: prefijo BKG- y 8 caracteres [A-Z0-9]."""

import re
import secrets
import string

from rental_api.domain.constants import BOOKING_CODE_PREFIX

BOOKING_CODE_LENGTH = 8

_ALPHABET = string.ascii_uppercase + string.digits
_PATTERN = re.compile(rf"{re.escape(BOOKING_CODE_PREFIX)}[A-Z0-9]{{{BOOKING_CODE_LENGTH}}}")


def new_booking_code() -> str:
    suffix = "".join(secrets.choice(_ALPHABET) for _ in range(BOOKING_CODE_LENGTH))
    return f"{BOOKING_CODE_PREFIX}{suffix}"


def is_booking_code(value: str) -> bool:
    """True si ``value`` tiene la forma de un código público (BKG-XXXXXXXX)."""
    return _PATTERN.fullmatch(value) is not None

"""Interface IdGenerator - Puerto para generación de identificadores."""

import uuid
from abc import ABC, abstractmethod

from rental_api.domain.constants import BOOKING_CODE_PREFIX
from rental_api.domain.rules.booking_code import new_booking_code


class IdGenerator(ABC):
    """
    Puerto para generación de identificadores únicos.

    Permite inyectar implementaciones fake para testing determinista.
    """

    @abstractmethod
    def generate_id(self) -> str:
        """Genera un identificador interno (UUID v4)."""
        raise NotImplementedError

    @abstractmethod
    def generate_booking_code(self) -> str:
        """Genera un código público de reserva (BKG-XXXXXXXX)."""
        raise NotImplementedError


class RealIdGenerator(IdGenerator):
    def generate_id(self) -> str:
        return str(uuid.uuid4())

    def generate_booking_code(self) -> str:
        return new_booking_code()


class FakeIdGenerator(IdGenerator):
    """Genera valores predecibles basados en contadores."""

    def __init__(self, prefix: str = "test") -> None:
        self._prefix = prefix
        self._id_counter = 0
        self._code_counter = 0

    def generate_id(self) -> str:
        self._id_counter += 1
        return f"{self._prefix}-{self._id_counter:04d}"

    def generate_booking_code(self) -> str:
        self._code_counter += 1
        return f"{BOOKING_CODE_PREFIX}{self._code_counter:08d}"

    def reset(self) -> None:
        self._id_counter = 0
        self._code_counter = 0

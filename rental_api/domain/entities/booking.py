"""Entidad Booking - Agregado raíz del dominio."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum

from rental_api.domain.entities.resource import ServiceKind
from rental_api.domain.errors import InvalidBookingStatusError


class BookingStatus(str, Enum):
    """Estados posibles de una reserva."""

    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    CANCELLED = "CANCELLED"
    COMPLETED = "COMPLETED"


@dataclass
class Booking:
    """
    Entidad principal del dominio - Agregado Raíz.

    Representa la reserva persistida de una residencia, un vehículo
    o una oferta combinada.
    """

    # Identificadores
    id: str | None = None
    booking_code: str | None = None
    user_id: str | None = None

    # Servicio reservado (exactamente uno)
    residence_id: str | None = None
    vehicle_id: str | None = None
    offer_id: str | None = None

    # Fechas
    start_date: datetime | None = None
    end_date: datetime | None = None

    # Financieros
    total_price: Decimal = Decimal("0")
    currency_code: str = "EUR"

    status: BookingStatus = BookingStatus.PENDING
    notes: str | None = None

    # Control de concurrencia
    lock_version: int = 0

    # Timestamps
    created_at: datetime | None = None
    updated_at: datetime | None = None

    # === Propiedades calculadas ===

    @property
    def service_kind(self) -> ServiceKind | None:
        if self.residence_id:
            return ServiceKind.RESIDENCE
        if self.vehicle_id:
            return ServiceKind.VEHICLE
        if self.offer_id:
            return ServiceKind.OFFER
        return None

    @property
    def occupies_capacity(self) -> bool:
        """Solo las reservas PENDING o CONFIRMED bloquean el recurso."""
        return self.status in (BookingStatus.PENDING, BookingStatus.CONFIRMED)

    # === Máquina de estados ===

    def confirm(self) -> None:
        """PENDING -> CONFIRMED."""
        self._require(BookingStatus.PENDING, "confirmar")
        self.status = BookingStatus.CONFIRMED
        self.lock_version += 1

    def complete(self) -> None:
        """CONFIRMED -> COMPLETED."""
        self._require(BookingStatus.CONFIRMED, "completar")
        self.status = BookingStatus.COMPLETED
        self.lock_version += 1

    def cancel(self) -> None:
        """PENDING | CONFIRMED -> CANCELLED."""
        self._require([BookingStatus.PENDING, BookingStatus.CONFIRMED], "cancelar")
        self.status = BookingStatus.CANCELLED
        self.lock_version += 1

    def _require(self, expected: BookingStatus | list[BookingStatus], operation: str) -> None:
        allowed = expected if isinstance(expected, list) else [expected]
        if self.status not in allowed:
            raise InvalidBookingStatusError(
                current_status=self.status.value,
                expected_status=[s.value for s in allowed],
                operation=operation,
            )

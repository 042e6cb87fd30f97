"""Vistas de solo lectura que el motor de validación consume del store."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum

from rental_api.domain.value_objects.datetime_range import DatetimeRange


class ServiceKind(str, Enum):
    """Tipos de recurso reservable."""

    RESIDENCE = "RESIDENCE"
    VEHICLE = "VEHICLE"
    OFFER = "OFFER"


@dataclass(frozen=True)
class ResourceRecord:
    """
    Recurso reservable tal como lo expone el store.

    Residencias y vehículos traen per_day_rate; las ofertas traen fixed_price.
    """

    id: str
    kind: ServiceKind
    is_active: bool
    per_day_rate: Decimal | None = None
    fixed_price: Decimal | None = None


@dataclass(frozen=True)
class OfferRecord:
    """Oferta combinada: una residencia + un vehículo a precio de paquete."""

    id: str
    residence_id: str
    vehicle_id: str
    price: Decimal
    valid_from: datetime
    valid_to: datetime
    is_active: bool

    def is_valid_at(self, now: datetime) -> bool:
        """Ventana de validez cerrada: valid_from <= now <= valid_to."""
        return self.valid_from <= now <= self.valid_to


@dataclass(frozen=True)
class ExistingBooking:
    """Reserva existente que ocupa (o no) un recurso."""

    booking_id: str
    resource_id: str
    resource_kind: ServiceKind
    start_date: datetime
    end_date: datetime
    status: str

    @property
    def datetime_range(self) -> DatetimeRange:
        return DatetimeRange(start=self.start_date, end=self.end_date)

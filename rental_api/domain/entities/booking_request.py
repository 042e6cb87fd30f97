"""Entrada y salida del motor de validación de reservas."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum

from rental_api.domain.entities.resource import ServiceKind


@dataclass(frozen=True)
class BookingRequest:
    """
    Solicitud de reserva transitoria, construida por request y nunca mutada.

    Las fechas pueden llegar como texto ISO-8601 o como datetime; el validador
    de fechas se encarga de interpretarlas.
    """

    start_date: datetime | str
    end_date: datetime | str
    residence_id: str | None = None
    vehicle_id: str | None = None
    offer_id: str | None = None
    total_price: Decimal | None = None


@dataclass(frozen=True)
class ServiceSelection:
    kind: ServiceKind
    resource_id: str


class PriceSource(str, Enum):
    EXPLICIT = "EXPLICIT"
    PER_DAY = "PER_DAY"
    PACKAGE = "PACKAGE"


@dataclass(frozen=True)
class BookingQuote:
    """Resultado exitoso de validate_and_price."""

    total_price: Decimal
    service_kind: ServiceKind
    resource_id: str
    start_date: datetime
    end_date: datetime
    days: int
    price_source: PriceSource

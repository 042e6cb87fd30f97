"""Entidades del catálogo: residencias, vehículos y ofertas combinadas."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from rental_api.domain.entities.resource import OfferRecord, ResourceRecord, ServiceKind


@dataclass
class Residence:
    id: str
    title: str
    price_per_day: Decimal
    city: str | None = None
    is_active: bool = True

    def to_record(self) -> ResourceRecord:
        return ResourceRecord(
            id=self.id,
            kind=ServiceKind.RESIDENCE,
            is_active=self.is_active,
            per_day_rate=self.price_per_day,
        )


@dataclass
class Vehicle:
    id: str
    brand: str
    model: str
    price_per_day: Decimal
    is_active: bool = True

    def to_record(self) -> ResourceRecord:
        return ResourceRecord(
            id=self.id,
            kind=ServiceKind.VEHICLE,
            is_active=self.is_active,
            per_day_rate=self.price_per_day,
        )


@dataclass
class Offer:
    """Oferta combinada (residencia + vehículo) con precio de paquete."""

    id: str
    title: str
    residence_id: str
    vehicle_id: str
    price: Decimal
    valid_from: datetime
    valid_to: datetime
    is_active: bool = True

    def to_record(self) -> OfferRecord:
        return OfferRecord(
            id=self.id,
            residence_id=self.residence_id,
            vehicle_id=self.vehicle_id,
            price=self.price,
            valid_from=self.valid_from,
            valid_to=self.valid_to,
            is_active=self.is_active,
        )

    def to_resource_record(self) -> ResourceRecord:
        return ResourceRecord(
            id=self.id,
            kind=ServiceKind.OFFER,
            is_active=self.is_active,
            fixed_price=self.price,
        )

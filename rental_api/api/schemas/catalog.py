from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, constr, field_validator

from rental_api.api.schemas.bookings import Money
from rental_api.domain.entities.catalog import Offer, Residence, Vehicle


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _changes(request: BaseModel, nullable: frozenset[str] = frozenset()) -> dict[str, Any]:
    # Fields sent as null only clear columns that are nullable
    return {
        field: value
        for field, value in request.model_dump(exclude_unset=True).items()
        if value is not None or field in nullable
    }


class CreateResidenceRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    title: constr(strip_whitespace=True, min_length=1, max_length=255)
    city: constr(strip_whitespace=True, max_length=120) | None = None
    price_per_day: Money
    is_active: bool = True


class UpdateResidenceRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    title: constr(strip_whitespace=True, min_length=1, max_length=255) | None = None
    city: constr(strip_whitespace=True, max_length=120) | None = None
    price_per_day: Money | None = None
    is_active: bool | None = None

    def changes(self) -> dict[str, Any]:
        return _changes(self, nullable=frozenset({"city"}))


class ResidenceResponse(BaseModel):
    id: str
    title: str
    city: str | None = None
    price_per_day: Money
    is_active: bool

    @classmethod
    def from_entity(cls, residence: Residence) -> "ResidenceResponse":
        return cls(
            id=residence.id,
            title=residence.title,
            city=residence.city,
            price_per_day=residence.price_per_day,
            is_active=residence.is_active,
        )


class CreateVehicleRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    brand: constr(strip_whitespace=True, min_length=1, max_length=100)
    model: constr(strip_whitespace=True, min_length=1, max_length=100)
    price_per_day: Money
    is_active: bool = True


class UpdateVehicleRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    brand: constr(strip_whitespace=True, min_length=1, max_length=100) | None = None
    model: constr(strip_whitespace=True, min_length=1, max_length=100) | None = None
    price_per_day: Money | None = None
    is_active: bool | None = None

    def changes(self) -> dict[str, Any]:
        return _changes(self)


class VehicleResponse(BaseModel):
    id: str
    brand: str
    model: str
    price_per_day: Money
    is_active: bool

    @classmethod
    def from_entity(cls, vehicle: Vehicle) -> "VehicleResponse":
        return cls(
            id=vehicle.id,
            brand=vehicle.brand,
            model=vehicle.model,
            price_per_day=vehicle.price_per_day,
            is_active=vehicle.is_active,
        )


class CreateOfferRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    title: constr(strip_whitespace=True, min_length=1, max_length=255)
    residence_id: str
    vehicle_id: str
    price: Money
    valid_from: datetime
    valid_to: datetime
    is_active: bool = True

    @field_validator("valid_from")
    @classmethod
    def normalize_valid_from(cls, value: datetime) -> datetime:
        return _as_utc(value)

    @field_validator("valid_to")
    @classmethod
    def validate_window(cls, value: datetime, info: Any) -> datetime:
        value = _as_utc(value)
        valid_from = info.data.get("valid_from")
        if valid_from and value <= valid_from:
            raise ValueError("valid_to must be after valid_from")
        return value


class UpdateOfferRequest(BaseModel):
    """The bundled residence and vehicle are fixed once the offer exists."""

    model_config = ConfigDict(extra="forbid")

    title: constr(strip_whitespace=True, min_length=1, max_length=255) | None = None
    price: Money | None = None
    valid_from: datetime | None = None
    valid_to: datetime | None = None
    is_active: bool | None = None

    @field_validator("valid_from", "valid_to")
    @classmethod
    def normalize_window(cls, value: datetime | None) -> datetime | None:
        return _as_utc(value) if value is not None else None

    def changes(self) -> dict[str, Any]:
        return _changes(self)


class OfferResponse(BaseModel):
    id: str
    title: str
    residence_id: str
    vehicle_id: str
    price: Money
    valid_from: datetime
    valid_to: datetime
    is_active: bool

    @classmethod
    def from_entity(cls, offer: Offer) -> "OfferResponse":
        return cls(
            id=offer.id,
            title=offer.title,
            residence_id=offer.residence_id,
            vehicle_id=offer.vehicle_id,
            price=offer.price,
            valid_from=offer.valid_from,
            valid_to=offer.valid_to,
            is_active=offer.is_active,
        )

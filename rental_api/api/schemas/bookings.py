from datetime import datetime
from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer, constr

from rental_api.domain.entities.booking import Booking
from rental_api.domain.entities.booking_request import BookingQuote, BookingRequest

Money = Annotated[
    Decimal,
    Field(max_digits=12, decimal_places=2, ge=0),
    PlainSerializer(lambda v: format(v, ".2f"), return_type=str, when_used="json"),
]


class CreateBookingRequest(BaseModel):
    """
    Dates are accepted as ISO-8601 text and parsed by the booking engine so
    malformed values surface as INVALID_FORMAT instead of a schema error.
    """

    model_config = ConfigDict(extra="forbid")

    start_date: str
    end_date: str
    residence_id: str | None = None
    vehicle_id: str | None = None
    offer_id: str | None = None
    total_price: Money | None = None
    user_id: str | None = None
    notes: constr(strip_whitespace=True, max_length=500) | None = None

    def to_booking_request(self) -> BookingRequest:
        return BookingRequest(
            start_date=self.start_date,
            end_date=self.end_date,
            residence_id=self.residence_id,
            vehicle_id=self.vehicle_id,
            offer_id=self.offer_id,
            total_price=self.total_price,
        )


class QuoteResponse(BaseModel):
    total_price: Money
    service_kind: str
    resource_id: str
    start_date: datetime
    end_date: datetime
    days: int
    price_source: str

    @classmethod
    def from_quote(cls, quote: BookingQuote) -> "QuoteResponse":
        return cls(
            total_price=quote.total_price,
            service_kind=quote.service_kind.value,
            resource_id=quote.resource_id,
            start_date=quote.start_date,
            end_date=quote.end_date,
            days=quote.days,
            price_source=quote.price_source.value,
        )


class BookingResponse(BaseModel):
    id: str
    booking_code: str
    user_id: str | None = None
    residence_id: str | None = None
    vehicle_id: str | None = None
    offer_id: str | None = None
    start_date: datetime
    end_date: datetime
    total_price: Money
    currency_code: constr(min_length=3, max_length=3)
    status: str
    notes: str | None = None
    lock_version: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_entity(cls, booking: Booking) -> "BookingResponse":
        return cls(
            id=booking.id,
            booking_code=booking.booking_code,
            user_id=booking.user_id,
            residence_id=booking.residence_id,
            vehicle_id=booking.vehicle_id,
            offer_id=booking.offer_id,
            start_date=booking.start_date,
            end_date=booking.end_date,
            total_price=booking.total_price,
            currency_code=booking.currency_code,
            status=booking.status.value,
            notes=booking.notes,
            lock_version=booking.lock_version,
            created_at=booking.created_at,
            updated_at=booking.updated_at,
        )


class ErrorResponse(BaseModel):
    detail: str
    code: str

import logging

from rental_api.application.interfaces.booking_store import BookingStore
from rental_api.application.interfaces.clock import Clock
from rental_api.application.services.availability_checker import AvailabilityChecker
from rental_api.application.services.price_calculator import PriceCalculator
from rental_api.domain.constants import MAX_BOOKING_DAYS
from rental_api.domain.entities.booking_request import BookingQuote, BookingRequest, PriceSource
from rental_api.domain.entities.resource import ServiceKind
from rental_api.domain.rules.date_range import validate_dates
from rental_api.domain.rules.service_selection import select_service

logger = logging.getLogger(__name__)


class BookingOrchestrator:
    """
    Núcleo de decisión previo a crear una reserva.

    Orden: fechas -> selección de servicio -> disponibilidad -> precio.
    El primer error corta el flujo; no escribe nada en el store.
    """

    def __init__(
        self,
        store: BookingStore,
        clock: Clock,
        max_booking_days: int = MAX_BOOKING_DAYS,
        currency_code: str = "EUR",
    ) -> None:
        self._clock = clock
        self._max_booking_days = max_booking_days
        self._availability = AvailabilityChecker(store=store, clock=clock)
        self._pricing = PriceCalculator(store=store, currency_code=currency_code)

    async def validate_and_price(self, request: BookingRequest) -> BookingQuote:
        now = self._clock.now()
        period = validate_dates(
            request.start_date, request.end_date, now, max_days=self._max_booking_days
        )
        selection = select_service(
            residence_id=request.residence_id,
            vehicle_id=request.vehicle_id,
            offer_id=request.offer_id,
        )

        await self._availability.check_availability(
            selection.kind, selection.resource_id, period.start, period.end, now
        )

        days = period.days
        if request.total_price is not None:
            total_price = request.total_price
            source = PriceSource.EXPLICIT
        else:
            total_price = await self._pricing.calculate_price(
                selection.kind, selection.resource_id, days
            )
            source = PriceSource.PACKAGE if selection.kind == ServiceKind.OFFER else PriceSource.PER_DAY

        logger.debug(
            "Booking request validated",
            extra={
                "resource_kind": selection.kind.value,
                "resource_id": selection.resource_id,
                "days": days,
                "total_price": str(total_price),
                "price_source": source.value,
            },
        )
        return BookingQuote(
            total_price=total_price,
            service_kind=selection.kind,
            resource_id=selection.resource_id,
            start_date=period.start,
            end_date=period.end,
            days=days,
            price_source=source,
        )

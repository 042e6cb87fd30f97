from decimal import Decimal

from rental_api.application.interfaces.booking_store import BookingStore
from rental_api.domain.entities.resource import ServiceKind
from rental_api.domain.errors import PriceUnresolvableError, ResourceNotFoundError
from rental_api.domain.value_objects.money import Money


class PriceCalculator:
    """
    Deriva el precio total cuando el cliente no lo envía.

    - RESIDENCE / VEHICLE: tarifa diaria * días.
    - OFFER: precio fijo del paquete, sin multiplicar por días.
    """

    def __init__(self, store: BookingStore, currency_code: str = "EUR") -> None:
        self._store = store
        self._currency_code = currency_code

    async def calculate_price(self, kind: ServiceKind, resource_id: str, days: int) -> Decimal:
        if not isinstance(kind, ServiceKind):
            raise PriceUnresolvableError(reason=f"tipo de servicio desconocido: {kind!r}")

        resource = await self._store.get_resource(kind, resource_id)
        if resource is None:
            raise ResourceNotFoundError(kind=kind.value, resource_id=resource_id)

        if kind == ServiceKind.OFFER:
            if resource.fixed_price is None:
                raise PriceUnresolvableError(reason=f"la oferta {resource_id} no tiene precio")
            return Money(amount=resource.fixed_price, currency_code=self._currency_code).amount

        if resource.per_day_rate is None:
            raise PriceUnresolvableError(reason=f"{kind.value} {resource_id} no tiene tarifa diaria")
        rate = Money(amount=resource.per_day_rate, currency_code=self._currency_code)
        return rate.times(days).amount

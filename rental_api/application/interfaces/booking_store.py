"""
Interface BookingStore - Puerto de lectura que consume el motor de validación.

El motor solo necesita tres consultas; cualquier tecnología de persistencia
que las implemente puede usarse (SQL, in-memory, servicio remoto).
"""

from rental_api.domain.entities.resource import (
    ExistingBooking,
    OfferRecord,
    ResourceRecord,
    ServiceKind,
)


class BookingStore:
    async def get_resource(self, kind: ServiceKind, resource_id: str) -> ResourceRecord | None:
        """
        Retorna el recurso reservable o None si no existe.

        Para OFFER retorna el precio del paquete en fixed_price.
        """
        raise NotImplementedError

    async def list_active_bookings_for_resource(
        self, kind: ServiceKind, resource_id: str
    ) -> list[ExistingBooking]:
        """
        Retorna las reservas PENDING/CONFIRMED que ocupan el recurso.

        Para residencias y vehículos incluye también las reservas de ofertas
        que agrupan ese recurso.
        """
        raise NotImplementedError

    async def get_offer(self, offer_id: str) -> OfferRecord | None:
        raise NotImplementedError

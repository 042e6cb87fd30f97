"""Selector de servicio: una reserva referencia exactamente un recurso."""

from rental_api.domain.entities.booking_request import ServiceSelection
from rental_api.domain.entities.resource import ServiceKind
from rental_api.domain.errors import MultipleServicesSpecifiedError, NoServiceSpecifiedError


def select_service(
    residence_id: str | None = None,
    vehicle_id: str | None = None,
    offer_id: str | None = None,
) -> ServiceSelection:
    """
    Determina qué tipo de servicio referencia la reserva.

    Los identificadores vacíos cuentan como ausentes.

    Raises:
        NoServiceSpecifiedError: ninguna referencia.
        MultipleServicesSpecifiedError: más de una referencia.
    """
    candidates = [
        (ServiceKind.RESIDENCE, residence_id),
        (ServiceKind.VEHICLE, vehicle_id),
        (ServiceKind.OFFER, offer_id),
    ]
    present = [(kind, rid) for kind, rid in candidates if rid]

    if not present:
        raise NoServiceSpecifiedError()
    if len(present) > 1:
        raise MultipleServicesSpecifiedError(kinds=[kind.value for kind, _ in present])

    kind, resource_id = present[0]
    return ServiceSelection(kind=kind, resource_id=resource_id)

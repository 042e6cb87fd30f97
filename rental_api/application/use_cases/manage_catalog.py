import logging
from dataclasses import replace
from typing import Any

from rental_api.api.schemas.catalog import (
    CreateOfferRequest,
    CreateResidenceRequest,
    CreateVehicleRequest,
    OfferResponse,
    ResidenceResponse,
    UpdateOfferRequest,
    UpdateResidenceRequest,
    UpdateVehicleRequest,
    VehicleResponse,
)
from rental_api.application.interfaces.booking_store import BookingStore
from rental_api.application.interfaces.catalog_repo import CatalogRepo
from rental_api.application.interfaces.id_generator import IdGenerator
from rental_api.application.interfaces.transaction_manager import (
    ResourceKey,
    ResourceLocker,
    TransactionManager,
)
from rental_api.domain.entities.catalog import Offer, Residence, Vehicle
from rental_api.domain.entities.resource import ServiceKind
from rental_api.domain.errors import ResourceInUseError, ResourceNotFoundError, ValidationError

logger = logging.getLogger(__name__)


class RegisterResidenceUseCase:
    def __init__(
        self,
        catalog_repo: CatalogRepo,
        transaction_manager: TransactionManager,
        id_generator: IdGenerator,
    ) -> None:
        self._catalog_repo = catalog_repo
        self._transaction_manager = transaction_manager
        self._id_generator = id_generator

    async def execute(self, request: CreateResidenceRequest) -> ResidenceResponse:
        residence = Residence(
            id=self._id_generator.generate_id(),
            title=request.title,
            city=request.city,
            price_per_day=request.price_per_day,
            is_active=request.is_active,
        )
        async with self._transaction_manager.start():
            await self._catalog_repo.add_residence(residence)
        logger.info("Residence registered", extra={"residence_id": residence.id})
        return ResidenceResponse.from_entity(residence)


class RegisterVehicleUseCase:
    def __init__(
        self,
        catalog_repo: CatalogRepo,
        transaction_manager: TransactionManager,
        id_generator: IdGenerator,
    ) -> None:
        self._catalog_repo = catalog_repo
        self._transaction_manager = transaction_manager
        self._id_generator = id_generator

    async def execute(self, request: CreateVehicleRequest) -> VehicleResponse:
        vehicle = Vehicle(
            id=self._id_generator.generate_id(),
            brand=request.brand,
            model=request.model,
            price_per_day=request.price_per_day,
            is_active=request.is_active,
        )
        async with self._transaction_manager.start():
            await self._catalog_repo.add_vehicle(vehicle)
        logger.info("Vehicle registered", extra={"vehicle_id": vehicle.id})
        return VehicleResponse.from_entity(vehicle)


class RegisterOfferUseCase:
    """Registra una oferta combinada; ambos recursos deben existir."""

    def __init__(
        self,
        catalog_repo: CatalogRepo,
        transaction_manager: TransactionManager,
        id_generator: IdGenerator,
    ) -> None:
        self._catalog_repo = catalog_repo
        self._transaction_manager = transaction_manager
        self._id_generator = id_generator

    async def execute(self, request: CreateOfferRequest) -> OfferResponse:
        if request.valid_to <= request.valid_from:
            raise ValidationError(field="valid_to", message="debe ser posterior a valid_from")

        async with self._transaction_manager.start():
            if await self._catalog_repo.get_residence(request.residence_id) is None:
                raise ResourceNotFoundError(
                    kind=ServiceKind.RESIDENCE.value, resource_id=request.residence_id
                )
            if await self._catalog_repo.get_vehicle(request.vehicle_id) is None:
                raise ResourceNotFoundError(
                    kind=ServiceKind.VEHICLE.value, resource_id=request.vehicle_id
                )

            offer = Offer(
                id=self._id_generator.generate_id(),
                title=request.title,
                residence_id=request.residence_id,
                vehicle_id=request.vehicle_id,
                price=request.price,
                valid_from=request.valid_from,
                valid_to=request.valid_to,
                is_active=request.is_active,
            )
            await self._catalog_repo.add_offer(offer)

        logger.info("Offer registered", extra={"offer_id": offer.id})
        return OfferResponse.from_entity(offer)


class CatalogQueryUseCase:
    def __init__(self, catalog_repo: CatalogRepo) -> None:
        self._catalog_repo = catalog_repo

    async def get_residence(self, residence_id: str) -> ResidenceResponse:
        residence = await self._catalog_repo.get_residence(residence_id)
        if residence is None:
            raise ResourceNotFoundError(kind=ServiceKind.RESIDENCE.value, resource_id=residence_id)
        return ResidenceResponse.from_entity(residence)

    async def list_residences(self, only_active: bool = True) -> list[ResidenceResponse]:
        residences = await self._catalog_repo.list_residences(only_active=only_active)
        return [ResidenceResponse.from_entity(r) for r in residences]

    async def get_vehicle(self, vehicle_id: str) -> VehicleResponse:
        vehicle = await self._catalog_repo.get_vehicle(vehicle_id)
        if vehicle is None:
            raise ResourceNotFoundError(kind=ServiceKind.VEHICLE.value, resource_id=vehicle_id)
        return VehicleResponse.from_entity(vehicle)

    async def list_vehicles(self, only_active: bool = True) -> list[VehicleResponse]:
        vehicles = await self._catalog_repo.list_vehicles(only_active=only_active)
        return [VehicleResponse.from_entity(v) for v in vehicles]

    async def get_offer(self, offer_id: str) -> OfferResponse:
        offer = await self._catalog_repo.get_offer(offer_id)
        if offer is None:
            raise ResourceNotFoundError(kind=ServiceKind.OFFER.value, resource_id=offer_id)
        return OfferResponse.from_entity(offer)

    async def list_offers(self, only_active: bool = True) -> list[OfferResponse]:
        offers = await self._catalog_repo.list_offers(only_active=only_active)
        return [OfferResponse.from_entity(o) for o in offers]


class UpdateCatalogUseCase:
    """
    Modifica o da de baja residencias, vehículos y ofertas.

    Los cambios se escriben con los mismos locks de recurso que toma la
    creación de reservas. La baja es lógica (is_active=False); una residencia
    o un vehículo con reservas PENDING/CONFIRMED no puede darse de baja.
    """

    def __init__(
        self,
        catalog_repo: CatalogRepo,
        booking_store: BookingStore,
        transaction_manager: TransactionManager,
        resource_locker: ResourceLocker,
    ) -> None:
        self._catalog_repo = catalog_repo
        self._booking_store = booking_store
        self._transaction_manager = transaction_manager
        self._resource_locker = resource_locker

    async def update_residence(self, residence_id: str, request: UpdateResidenceRequest) -> ResidenceResponse:
        residence = await self._apply(ServiceKind.RESIDENCE, residence_id, request.changes())
        return ResidenceResponse.from_entity(residence)

    async def deactivate_residence(self, residence_id: str) -> ResidenceResponse:
        residence = await self._apply(
            ServiceKind.RESIDENCE, residence_id, {"is_active": False}, require_free=True
        )
        return ResidenceResponse.from_entity(residence)

    async def update_vehicle(self, vehicle_id: str, request: UpdateVehicleRequest) -> VehicleResponse:
        vehicle = await self._apply(ServiceKind.VEHICLE, vehicle_id, request.changes())
        return VehicleResponse.from_entity(vehicle)

    async def deactivate_vehicle(self, vehicle_id: str) -> VehicleResponse:
        vehicle = await self._apply(
            ServiceKind.VEHICLE, vehicle_id, {"is_active": False}, require_free=True
        )
        return VehicleResponse.from_entity(vehicle)

    async def update_offer(self, offer_id: str, request: UpdateOfferRequest) -> OfferResponse:
        offer = await self._apply(ServiceKind.OFFER, offer_id, request.changes())
        return OfferResponse.from_entity(offer)

    async def deactivate_offer(self, offer_id: str) -> OfferResponse:
        offer = await self._apply(ServiceKind.OFFER, offer_id, {"is_active": False})
        return OfferResponse.from_entity(offer)

    async def _apply(
        self,
        kind: ServiceKind,
        resource_id: str,
        changes: dict[str, Any],
        require_free: bool = False,
    ):
        async with self._transaction_manager.start():
            lock_keys = await self._lock_keys(kind, resource_id)
            async with self._resource_locker.hold(lock_keys):
                current = await self._get(kind, resource_id)
                if current is None:
                    raise ResourceNotFoundError(kind=kind.value, resource_id=resource_id)

                updated = replace(current, **changes)
                if kind == ServiceKind.OFFER and updated.valid_to <= updated.valid_from:
                    raise ValidationError(field="valid_to", message="debe ser posterior a valid_from")
                if require_free:
                    active = await self._booking_store.list_active_bookings_for_resource(kind, resource_id)
                    if active:
                        raise ResourceInUseError(
                            kind=kind.value, resource_id=resource_id, active_bookings=len(active)
                        )

                await self._save(kind, updated)

        logger.info(
            "Catalog entry updated",
            extra={"resource_kind": kind.value, "resource_id": resource_id, "fields": sorted(changes)},
        )
        return updated

    async def _lock_keys(self, kind: ServiceKind, resource_id: str) -> list[ResourceKey]:
        # Una oferta se bloquea a través de la residencia y el vehículo que agrupa
        if kind != ServiceKind.OFFER:
            return [(kind, resource_id)]
        offer = await self._catalog_repo.get_offer(resource_id)
        if offer is None:
            return [(kind, resource_id)]
        return [(ServiceKind.RESIDENCE, offer.residence_id), (ServiceKind.VEHICLE, offer.vehicle_id)]

    async def _get(self, kind: ServiceKind, resource_id: str):
        if kind == ServiceKind.RESIDENCE:
            return await self._catalog_repo.get_residence(resource_id)
        if kind == ServiceKind.VEHICLE:
            return await self._catalog_repo.get_vehicle(resource_id)
        return await self._catalog_repo.get_offer(resource_id)

    async def _save(self, kind: ServiceKind, entity) -> None:
        if kind == ServiceKind.RESIDENCE:
            await self._catalog_repo.update_residence(entity)
        elif kind == ServiceKind.VEHICLE:
            await self._catalog_repo.update_vehicle(entity)
        else:
            await self._catalog_repo.update_offer(entity)

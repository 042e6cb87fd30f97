"""Implementación in-memory del catálogo (residencias, vehículos, ofertas)."""

from dataclasses import replace

from rental_api.application.interfaces.catalog_repo import CatalogRepo
from rental_api.domain.entities.catalog import Offer, Residence, Vehicle


class InMemoryCatalogRepo(CatalogRepo):
    def __init__(self) -> None:
        self.residences: dict[str, Residence] = {}
        self.vehicles: dict[str, Vehicle] = {}
        self.offers: dict[str, Offer] = {}

    async def add_residence(self, residence: Residence) -> None:
        self.residences[residence.id] = replace(residence)

    async def get_residence(self, residence_id: str) -> Residence | None:
        residence = self.residences.get(residence_id)
        return replace(residence) if residence else None

    async def list_residences(self, only_active: bool = True) -> list[Residence]:
        return [replace(r) for r in self.residences.values() if r.is_active or not only_active]

    async def update_residence(self, residence: Residence) -> None:
        self.residences[residence.id] = replace(residence)

    async def add_vehicle(self, vehicle: Vehicle) -> None:
        self.vehicles[vehicle.id] = replace(vehicle)

    async def get_vehicle(self, vehicle_id: str) -> Vehicle | None:
        vehicle = self.vehicles.get(vehicle_id)
        return replace(vehicle) if vehicle else None

    async def list_vehicles(self, only_active: bool = True) -> list[Vehicle]:
        return [replace(v) for v in self.vehicles.values() if v.is_active or not only_active]

    async def update_vehicle(self, vehicle: Vehicle) -> None:
        self.vehicles[vehicle.id] = replace(vehicle)

    async def add_offer(self, offer: Offer) -> None:
        self.offers[offer.id] = replace(offer)

    async def get_offer(self, offer_id: str) -> Offer | None:
        offer = self.offers.get(offer_id)
        return replace(offer) if offer else None

    async def list_offers(self, only_active: bool = True) -> list[Offer]:
        return [replace(o) for o in self.offers.values() if o.is_active or not only_active]

    async def update_offer(self, offer: Offer) -> None:
        self.offers[offer.id] = replace(offer)

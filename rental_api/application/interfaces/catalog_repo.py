from rental_api.domain.entities.catalog import Offer, Residence, Vehicle


class CatalogRepo:
    async def add_residence(self, residence: Residence) -> None:
        raise NotImplementedError

    async def get_residence(self, residence_id: str) -> Residence | None:
        raise NotImplementedError

    async def list_residences(self, only_active: bool = True) -> list[Residence]:
        raise NotImplementedError

    async def update_residence(self, residence: Residence) -> None:
        raise NotImplementedError

    async def add_vehicle(self, vehicle: Vehicle) -> None:
        raise NotImplementedError

    async def get_vehicle(self, vehicle_id: str) -> Vehicle | None:
        raise NotImplementedError

    async def list_vehicles(self, only_active: bool = True) -> list[Vehicle]:
        raise NotImplementedError

    async def update_vehicle(self, vehicle: Vehicle) -> None:
        raise NotImplementedError

    async def add_offer(self, offer: Offer) -> None:
        raise NotImplementedError

    async def get_offer(self, offer_id: str) -> Offer | None:
        raise NotImplementedError

    async def list_offers(self, only_active: bool = True) -> list[Offer]:
        raise NotImplementedError

    async def update_offer(self, offer: Offer) -> None:
        raise NotImplementedError

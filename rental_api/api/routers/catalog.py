from fastapi import APIRouter, Depends, status

from rental_api.api.dependencies import get_use_cases
from rental_api.api.schemas.bookings import ErrorResponse
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

router = APIRouter()

_ERRORS = {400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}}
_WRITE_ERRORS = {**_ERRORS, 409: {"model": ErrorResponse}}


@router.post("/residences", response_model=ResidenceResponse, status_code=status.HTTP_201_CREATED)
async def register_residence(
    payload: CreateResidenceRequest,
    use_cases=Depends(get_use_cases),
) -> ResidenceResponse:
    return await use_cases["register_residence"].execute(request=payload)


@router.get("/residences", response_model=list[ResidenceResponse])
async def list_residences(
    only_active: bool = True,
    use_cases=Depends(get_use_cases),
) -> list[ResidenceResponse]:
    return await use_cases["catalog_query"].list_residences(only_active=only_active)


@router.get("/residences/{residence_id}", response_model=ResidenceResponse, responses=_ERRORS)
async def get_residence(residence_id: str, use_cases=Depends(get_use_cases)) -> ResidenceResponse:
    return await use_cases["catalog_query"].get_residence(residence_id)


@router.patch("/residences/{residence_id}", response_model=ResidenceResponse, responses=_WRITE_ERRORS)
async def update_residence(
    residence_id: str,
    payload: UpdateResidenceRequest,
    use_cases=Depends(get_use_cases),
) -> ResidenceResponse:
    return await use_cases["update_catalog"].update_residence(residence_id, payload)


@router.delete("/residences/{residence_id}", response_model=ResidenceResponse, responses=_WRITE_ERRORS)
async def deactivate_residence(residence_id: str, use_cases=Depends(get_use_cases)) -> ResidenceResponse:
    return await use_cases["update_catalog"].deactivate_residence(residence_id)


@router.post("/vehicles", response_model=VehicleResponse, status_code=status.HTTP_201_CREATED)
async def register_vehicle(
    payload: CreateVehicleRequest,
    use_cases=Depends(get_use_cases),
) -> VehicleResponse:
    return await use_cases["register_vehicle"].execute(request=payload)


@router.get("/vehicles", response_model=list[VehicleResponse])
async def list_vehicles(
    only_active: bool = True,
    use_cases=Depends(get_use_cases),
) -> list[VehicleResponse]:
    return await use_cases["catalog_query"].list_vehicles(only_active=only_active)


@router.get("/vehicles/{vehicle_id}", response_model=VehicleResponse, responses=_ERRORS)
async def get_vehicle(vehicle_id: str, use_cases=Depends(get_use_cases)) -> VehicleResponse:
    return await use_cases["catalog_query"].get_vehicle(vehicle_id)


@router.patch("/vehicles/{vehicle_id}", response_model=VehicleResponse, responses=_WRITE_ERRORS)
async def update_vehicle(
    vehicle_id: str,
    payload: UpdateVehicleRequest,
    use_cases=Depends(get_use_cases),
) -> VehicleResponse:
    return await use_cases["update_catalog"].update_vehicle(vehicle_id, payload)


@router.delete("/vehicles/{vehicle_id}", response_model=VehicleResponse, responses=_WRITE_ERRORS)
async def deactivate_vehicle(vehicle_id: str, use_cases=Depends(get_use_cases)) -> VehicleResponse:
    return await use_cases["update_catalog"].deactivate_vehicle(vehicle_id)


@router.post(
    "/offers",
    response_model=OfferResponse,
    status_code=status.HTTP_201_CREATED,
    responses=_ERRORS,
)
async def register_offer(
    payload: CreateOfferRequest,
    use_cases=Depends(get_use_cases),
) -> OfferResponse:
    return await use_cases["register_offer"].execute(request=payload)


@router.get("/offers", response_model=list[OfferResponse])
async def list_offers(
    only_active: bool = True,
    use_cases=Depends(get_use_cases),
) -> list[OfferResponse]:
    return await use_cases["catalog_query"].list_offers(only_active=only_active)


@router.get("/offers/{offer_id}", response_model=OfferResponse, responses=_ERRORS)
async def get_offer(offer_id: str, use_cases=Depends(get_use_cases)) -> OfferResponse:
    return await use_cases["catalog_query"].get_offer(offer_id)


@router.patch("/offers/{offer_id}", response_model=OfferResponse, responses=_WRITE_ERRORS)
async def update_offer(
    offer_id: str,
    payload: UpdateOfferRequest,
    use_cases=Depends(get_use_cases),
) -> OfferResponse:
    return await use_cases["update_catalog"].update_offer(offer_id, payload)


@router.delete("/offers/{offer_id}", response_model=OfferResponse, responses=_WRITE_ERRORS)
async def deactivate_offer(offer_id: str, use_cases=Depends(get_use_cases)) -> OfferResponse:
    return await use_cases["update_catalog"].deactivate_offer(offer_id)

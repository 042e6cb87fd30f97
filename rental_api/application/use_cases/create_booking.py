import hashlib
import json
import logging
from typing import Any

from fastapi import status

from rental_api.api.schemas.bookings import BookingResponse, CreateBookingRequest
from rental_api.application.interfaces.booking_repo import BookingRepo
from rental_api.application.interfaces.booking_store import BookingStore
from rental_api.application.interfaces.clock import Clock
from rental_api.application.interfaces.id_generator import IdGenerator
from rental_api.application.interfaces.idempotency_repo import (
    IdempotencyRecord,
    IdempotencyRepo,
)
from rental_api.application.interfaces.transaction_manager import (
    ResourceKey,
    ResourceLocker,
    TransactionManager,
)
from rental_api.application.services.booking_orchestrator import BookingOrchestrator
from rental_api.domain.entities.booking import Booking, BookingStatus
from rental_api.domain.entities.booking_request import BookingRequest
from rental_api.domain.entities.resource import ServiceKind
from rental_api.domain.errors import IdempotencyConflictError

logger = logging.getLogger(__name__)

SCOPE = "BOOKING_CREATE"


def _hash_request(payload: dict[str, Any]) -> str:
    normalized = json.dumps(
        payload, sort_keys=True, default=str, separators=(",", ":")
    )
    return hashlib.sha256(normalized.encode()).hexdigest()


class CreateBookingUseCase:
    def __init__(
        self,
        orchestrator: BookingOrchestrator,
        booking_repo: BookingRepo,
        booking_store: BookingStore,
        idempotency_repo: IdempotencyRepo,
        transaction_manager: TransactionManager,
        resource_locker: ResourceLocker,
        id_generator: IdGenerator,
        clock: Clock,
        currency_code: str = "EUR",
    ) -> None:
        self._orchestrator = orchestrator
        self._booking_repo = booking_repo
        self._booking_store = booking_store
        self._idempotency_repo = idempotency_repo
        self._transaction_manager = transaction_manager
        self._resource_locker = resource_locker
        self._id_generator = id_generator
        self._clock = clock
        self._currency_code = currency_code

    async def execute(
        self,
        request: CreateBookingRequest,
        idem_key: str,
    ) -> BookingResponse:
        request_hash = _hash_request(request.model_dump())

        booking_request = request.to_booking_request()

        async with self._transaction_manager.start():
            lock_keys = await self._lock_keys(booking_request)

            # Locks first: every read below must see writes committed by the previous holder.
            async with self._resource_locker.hold(lock_keys):
                replay = await self._replay(idem_key, request_hash)
                if replay is not None:
                    return replay

                quote = await self._orchestrator.validate_and_price(booking_request)

                now = self._clock.now()
                booking = Booking(
                    id=self._id_generator.generate_id(),
                    booking_code=self._id_generator.generate_booking_code(),
                    user_id=request.user_id,
                    residence_id=quote.resource_id if quote.service_kind == ServiceKind.RESIDENCE else None,
                    vehicle_id=quote.resource_id if quote.service_kind == ServiceKind.VEHICLE else None,
                    offer_id=quote.resource_id if quote.service_kind == ServiceKind.OFFER else None,
                    start_date=quote.start_date,
                    end_date=quote.end_date,
                    total_price=quote.total_price,
                    currency_code=self._currency_code,
                    status=BookingStatus.PENDING,
                    notes=request.notes,
                    lock_version=0,
                    created_at=now,
                    updated_at=now,
                )
                await self._booking_repo.create_booking(booking)

                response = BookingResponse.from_entity(booking)
                await self._idempotency_repo.save(
                    IdempotencyRecord(
                        scope=SCOPE,
                        idem_key=idem_key,
                        request_hash=request_hash,
                        response_json=json.loads(response.model_dump_json()),
                        http_status=status.HTTP_201_CREATED,
                        reference_booking_code=booking.booking_code,
                    )
                )

        logger.info(
            "Booking created",
            extra={
                "booking_code": booking.booking_code,
                "resource_kind": quote.service_kind.value,
                "resource_id": quote.resource_id,
                "total_price": str(quote.total_price),
            },
        )
        return response

    async def _replay(self, idem_key: str, request_hash: str) -> BookingResponse | None:
        existing = await self._idempotency_repo.get(scope=SCOPE, idem_key=idem_key)
        if existing is None:
            return None
        if existing.request_hash != request_hash:
            raise IdempotencyConflictError(idem_key=idem_key, scope=SCOPE)
        return BookingResponse.model_validate(existing.response_json)

    async def _lock_keys(self, request: BookingRequest) -> list[ResourceKey]:
        """
        Recursos a bloquear antes de decidir.

        Una oferta bloquea la residencia y el vehículo que agrupa.
        """
        keys: set[ResourceKey] = set()
        if request.residence_id:
            keys.add((ServiceKind.RESIDENCE, request.residence_id))
        if request.vehicle_id:
            keys.add((ServiceKind.VEHICLE, request.vehicle_id))
        if request.offer_id:
            offer = await self._booking_store.get_offer(request.offer_id)
            if offer is None:
                keys.add((ServiceKind.OFFER, request.offer_id))
            else:
                keys.add((ServiceKind.RESIDENCE, offer.residence_id))
                keys.add((ServiceKind.VEHICLE, offer.vehicle_id))
        return sorted(keys, key=lambda key: (key[0].value, key[1]))

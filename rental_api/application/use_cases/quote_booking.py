from rental_api.api.schemas.bookings import CreateBookingRequest, QuoteResponse
from rental_api.application.services.booking_orchestrator import BookingOrchestrator


class QuoteBookingUseCase:
    """Valida y cotiza una reserva sin persistir nada."""

    def __init__(self, orchestrator: BookingOrchestrator) -> None:
        self._orchestrator = orchestrator

    async def execute(self, request: CreateBookingRequest) -> QuoteResponse:
        quote = await self._orchestrator.validate_and_price(request.to_booking_request())
        return QuoteResponse.from_quote(quote)

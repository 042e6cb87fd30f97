"""Flujo completo de reserva con httpx.AsyncClient sobre la app ASGI."""

import pytest
from httpx import ASGITransport, AsyncClient

from rental_api.api.dependencies import get_clock, get_id_generator
from rental_api.application.interfaces.id_generator import FakeIdGenerator
from rental_api.main import app


@pytest.fixture
def async_app(bundle, clock):
    id_generator = FakeIdGenerator(prefix="flow")
    app.dependency_overrides[get_clock] = lambda: clock
    app.dependency_overrides[get_id_generator] = lambda: id_generator
    yield app
    app.dependency_overrides.clear()


@pytest.mark.asyncio
async def test_booking_end_to_end(async_app, clock):
    async with AsyncClient(transport=ASGITransport(app=async_app), base_url="http://test") as ac:
        # 1. Cotizar sin persistir
        quote = await ac.post(
            "/api/v1/bookings/quote",
            json={"start_date": "2024-07-01", "end_date": "2024-07-04", "residence_id": "R1"},
        )
        assert quote.status_code == 200
        assert quote.json()["total_price"] == "750.00"

        # 2. Crear la reserva
        created = await ac.post(
            "/api/v1/bookings",
            json={"start_date": "2024-07-01", "end_date": "2024-07-04", "residence_id": "R1"},
            headers={"Idempotency-Key": "flow-1"},
        )
        assert created.status_code == 201
        booking = created.json()
        assert booking["id"] == "flow-0001"

        # 3. Confirmar
        confirmed = await ac.post(f"/api/v1/bookings/{booking['id']}/confirm")
        assert confirmed.json()["status"] == "CONFIRMED"

        # 4. Una vez pasada la fecha de inicio ya no se puede reservar ese rango
        clock.set_time(clock.now().replace(year=2024, month=7, day=2))
        late = await ac.post(
            "/api/v1/bookings",
            json={"start_date": "2024-07-01", "end_date": "2024-07-04", "residence_id": "R100"},
            headers={"Idempotency-Key": "flow-2"},
        )
        assert late.status_code == 400
        assert late.json()["code"] == "START_NOT_IN_FUTURE"

        # 5. Completar
        completed = await ac.post(f"/api/v1/bookings/{booking['id']}/complete")
        assert completed.json()["status"] == "COMPLETED"
        assert completed.json()["lock_version"] == 2

def _payload(**overrides):
    payload = {
        "start_date": "2024-07-01T00:00:00Z",
        "end_date": "2024-07-04T00:00:00Z",
        "residence_id": "R1",
        "user_id": "user-1",
    }
    payload.update(overrides)
    return payload


def _create(client, payload, key):
    return client.post("/api/v1/bookings", json=payload, headers={"Idempotency-Key": key})


def test_create_booking_success(client, unique_idem_key):
    res = _create(client, _payload(), unique_idem_key)
    assert res.status_code == 201
    body = res.json()
    assert body["status"] == "PENDING"
    assert body["total_price"] == "750.00"
    assert body["currency_code"] == "EUR"
    assert body["booking_code"].startswith("BKG-")
    assert body["lock_version"] == 0


def test_create_booking_requires_idempotency_key(client):
    res = client.post("/api/v1/bookings", json=_payload())
    assert res.status_code == 400
    assert "Idempotency-Key" in res.json()["detail"]


def test_create_booking_idempotent_replay(client):
    first = _create(client, _payload(), "k-replay")
    replay = _create(client, _payload(), "k-replay")
    assert first.status_code == replay.status_code == 201
    assert first.json() == replay.json()
    assert len(client.get("/api/v1/bookings").json()) == 1


def test_create_booking_idempotency_conflict(client):
    assert _create(client, _payload(), "k-conflict").status_code == 201
    res = _create(client, _payload(total_price="10.00"), "k-conflict")
    assert res.status_code == 409
    assert res.json()["code"] == "IDEMPOTENCY_CONFLICT"


def test_explicit_price_wins(client, unique_idem_key):
    res = _create(client, _payload(total_price="500.00"), unique_idem_key)
    assert res.status_code == 201
    assert res.json()["total_price"] == "500.00"


def test_invalid_date_format_is_400(client, unique_idem_key):
    res = _create(client, _payload(start_date="01/07/2024"), unique_idem_key)
    assert res.status_code == 400
    assert res.json()["code"] == "INVALID_FORMAT"


def test_past_start_is_400(client, unique_idem_key):
    res = _create(client, _payload(start_date="2024-01-01", end_date="2024-01-02"), unique_idem_key)
    assert res.status_code == 400
    assert res.json()["code"] == "START_NOT_IN_FUTURE"


def test_span_too_long_is_400(client, unique_idem_key):
    res = _create(client, _payload(end_date="2024-08-15T00:00:00Z"), unique_idem_key)
    assert res.status_code == 400
    assert res.json()["code"] == "SPAN_TOO_LONG"


def test_multiple_services_is_400(client, unique_idem_key):
    res = _create(client, _payload(vehicle_id="V1"), unique_idem_key)
    assert res.status_code == 400
    assert res.json()["code"] == "MULTIPLE_SERVICES_SPECIFIED"


def test_no_service_is_400(client, unique_idem_key):
    res = _create(client, _payload(residence_id=None), unique_idem_key)
    assert res.status_code == 400
    assert res.json()["code"] == "NO_SERVICE_SPECIFIED"


def test_unknown_resource_is_404(client, unique_idem_key):
    res = _create(client, _payload(residence_id="missing"), unique_idem_key)
    assert res.status_code == 404
    assert res.json()["code"] == "RESOURCE_NOT_FOUND"


def test_inactive_resource_is_400(client, unique_idem_key):
    res = _create(client, _payload(residence_id="R-OFF"), unique_idem_key)
    assert res.status_code == 400
    assert res.json()["code"] == "RESOURCE_UNAVAILABLE"


def test_overlap_is_409(client):
    assert _create(client, _payload(residence_id=None, vehicle_id="V1", start_date="2024-07-01", end_date="2024-07-05"), "a").status_code == 201
    res = _create(client, _payload(residence_id=None, vehicle_id="V1", start_date="2024-07-03", end_date="2024-07-06"), "b")
    assert res.status_code == 409
    assert res.json()["code"] == "RESOURCE_NOT_AVAILABLE"


def test_unknown_field_is_422(client, unique_idem_key):
    res = _create(client, _payload(pickup_office_id=1), unique_idem_key)
    assert res.status_code == 422


def test_quote_does_not_persist(client):
    res = client.post("/api/v1/bookings/quote", json=_payload(residence_id="R100", start_date="2024-06-01", end_date="2024-06-07"))
    assert res.status_code == 200
    body = res.json()
    assert body["total_price"] == "600.00"
    assert body["days"] == 6
    assert body["price_source"] == "PER_DAY"
    assert client.get("/api/v1/bookings").json() == []


def test_quote_offer(client):
    res = client.post("/api/v1/bookings/quote", json=_payload(residence_id=None, offer_id="O1"))
    assert res.status_code == 200
    assert res.json()["total_price"] == "300.00"
    assert res.json()["price_source"] == "PACKAGE"


def test_get_and_list_bookings(client):
    created = _create(client, _payload(), "k-get").json()

    by_id = client.get(f"/api/v1/bookings/{created['id']}")
    assert by_id.status_code == 200
    by_code = client.get(f"/api/v1/bookings/{created['booking_code']}")
    assert by_code.json()["id"] == created["id"]

    assert len(client.get("/api/v1/bookings", params={"user_id": "user-1"}).json()) == 1
    assert client.get("/api/v1/bookings", params={"user_id": "someone-else"}).json() == []


def test_get_missing_booking_is_404(client):
    res = client.get("/api/v1/bookings/does-not-exist")
    assert res.status_code == 404
    assert res.json()["code"] == "BOOKING_NOT_FOUND"


def test_status_transitions(client):
    created = _create(client, _payload(), "k-status").json()

    confirmed = client.post(f"/api/v1/bookings/{created['id']}/confirm")
    assert confirmed.status_code == 200
    assert confirmed.json()["status"] == "CONFIRMED"
    assert confirmed.json()["lock_version"] == 1

    illegal = client.post(f"/api/v1/bookings/{created['id']}/confirm")
    assert illegal.status_code == 409
    assert illegal.json()["code"] == "INVALID_BOOKING_STATUS"

    completed = client.post(f"/api/v1/bookings/{created['id']}/complete")
    assert completed.json()["status"] == "COMPLETED"


def test_cancel_frees_resource(client):
    created = _create(client, _payload(), "k-cancel-1").json()
    assert _create(client, _payload(), "k-cancel-2").status_code == 409

    cancelled = client.post(f"/api/v1/bookings/{created['id']}/cancel")
    assert cancelled.json()["status"] == "CANCELLED"
    assert _create(client, _payload(), "k-cancel-3").status_code == 201


def test_unknown_transition_is_422(client):
    created = _create(client, _payload(), "k-bad-transition").json()
    assert client.post(f"/api/v1/bookings/{created['id']}/archive").status_code == 422


def test_offer_booking_blocks_bundled_vehicle(client):
    assert _create(client, _payload(residence_id=None, offer_id="O1"), "k-offer").status_code == 201
    res = _create(client, _payload(residence_id=None, vehicle_id="V2"), "k-vehicle")
    assert res.status_code == 409

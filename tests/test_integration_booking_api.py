"""
End-to-end booking flow over the JSON API: sign in, book, cancel/return.
"""
from datetime import timedelta

from conftest import login, make_vehicle


def _book(client, vehicle_id, start, end):
    return client.post("/api/v1/bookings", json={
        "vehicleId": vehicle_id, "rentStartDate": start, "rentEndDate": end,
    })


def test_customer_books_and_vehicle_becomes_booked(client, customer, vehicle):
    assert login(client, customer.email).status_code == 200

    r = _book(client, vehicle.id, "2024-01-01", "2024-01-03")
    assert r.status_code == 201
    data = r.get_json()["data"]
    assert data["totalPrice"] == 150
    assert data["status"] == "active"
    assert data["customerId"] == customer.id

    v = client.get(f"/api/v1/vehicles/{vehicle.id}").get_json()["data"]
    assert v["availabilityStatus"] == "booked"


def test_customer_id_in_body_is_ignored(client, customer, other_customer, vehicle):
    login(client, customer.email)
    r = client.post("/api/v1/bookings", json={
        "vehicleId": vehicle.id, "rentStartDate": "2030-07-01", "rentEndDate": "2030-07-01",
        "customerId": other_customer.id,
    })
    assert r.get_json()["data"]["customerId"] == customer.id


def test_second_booking_on_booked_vehicle_rejected(client, customer, other_customer, vehicle):
    login(client, customer.email)
    assert _book(client, vehicle.id, "2030-07-01", "2030-07-03").status_code == 201

    login(client, other_customer.email)
    r = _book(client, vehicle.id, "2030-08-01", "2030-08-02")
    assert r.status_code == 400
    body = r.get_json()
    assert body["success"] is False
    assert body["error"] == "vehicle_unavailable"


def test_booking_validation(client, customer, vehicle):
    login(client, customer.email)
    assert _book(client, vehicle.id, "2030-07-03", "2030-07-01").status_code == 400
    assert _book(client, vehicle.id, "07/01/2030", "2030-07-03").status_code == 400
    assert _book(client, None, "2030-07-01", "2030-07-03").status_code == 400
    r = _book(client, 999, "2030-07-01", "2030-07-03")
    assert r.status_code == 400
    assert r.get_json()["error"] == "vehicle_unavailable"


def test_customer_cancels_before_start(client, store, customer, vehicle, fixed_today):
    login(client, customer.email)
    start = (fixed_today + timedelta(days=1)).isoformat()
    bid = _book(client, vehicle.id, start, start).get_json()["data"]["id"]

    r = client.put(f"/api/v1/bookings/{bid}", json={"status": "cancelled"})
    assert r.status_code == 200
    assert r.get_json()["data"]["status"] == "cancelled"
    assert store.vehicles[vehicle.id]["availability_status"] == "available"


def test_customer_cannot_cancel_on_start_day(client, store, customer, vehicle, fixed_today):
    login(client, customer.email)
    start = fixed_today.isoformat()
    bid = _book(client, vehicle.id, start, start).get_json()["data"]["id"]

    r = client.put(f"/api/v1/bookings/{bid}", json={"status": "cancelled"})
    assert r.status_code == 400
    assert r.get_json()["error"] == "cancellation_window_closed"
    assert store.bookings[bid]["status"] == "active"
    assert store.vehicles[vehicle.id]["availability_status"] == "booked"


def test_admin_cancels_past_booking(client, store, admin, customer, vehicle, fixed_today):
    login(client, customer.email)
    start = (fixed_today - timedelta(days=10)).isoformat()
    bid = _book(client, vehicle.id, start, start).get_json()["data"]["id"]

    login(client, admin.email)
    r = client.put(f"/api/v1/bookings/{bid}", json={"status": "cancelled"})
    assert r.status_code == 200
    assert store.vehicles[vehicle.id]["availability_status"] == "available"


def test_admin_returns_and_second_return_conflicts(client, admin, customer, vehicle):
    login(client, customer.email)
    bid = _book(client, vehicle.id, "2030-07-01", "2030-07-03").get_json()["data"]["id"]

    login(client, admin.email)
    assert client.put(f"/api/v1/bookings/{bid}", json={"status": "returned"}).status_code == 200
    r = client.put(f"/api/v1/bookings/{bid}", json={"status": "returned"})
    assert r.status_code == 409
    assert r.get_json()["error"] == "invalid_transition"


def test_customer_cannot_return(client, customer, vehicle):
    login(client, customer.email)
    bid = _book(client, vehicle.id, "2030-07-01", "2030-07-03").get_json()["data"]["id"]
    r = client.put(f"/api/v1/bookings/{bid}", json={"status": "returned"})
    assert r.status_code == 403


def test_unknown_status_and_booking(client, admin):
    login(client, admin.email)
    assert client.put("/api/v1/bookings/1", json={"status": "lost"}).status_code == 400
    assert client.put("/api/v1/bookings/1", json={"status": "returned"}).status_code == 404


def test_list_bookings_scoped_to_actor(client, store, admin, customer, other_customer, vehicle):
    v2 = make_vehicle(store, reg="XYZ-5678", price=45)
    login(client, customer.email)
    _book(client, vehicle.id, "2030-07-01", "2030-07-03")
    login(client, other_customer.email)
    _book(client, v2.id, "2030-07-01", "2030-07-02")

    mine = client.get("/api/v1/bookings").get_json()["data"]
    assert len(mine) == 1 and mine[0]["totalPrice"] == 90

    login(client, admin.email)
    assert len(client.get("/api/v1/bookings").get_json()["data"]) == 2

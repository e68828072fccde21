# backend/tests/test_bookings_api.py

import pytest

from conftest import FailingNotifier, booking_payload
from centre.services.notifications import get_notifier

START = "2099-06-01T10:00:00Z"
END = "2099-06-01T12:00:00Z"


def _create(client, facility_id, start=START, end=END, **kw):
    return client.post("/api/bookings", json=booking_payload(facility_id, start, end, **kw))


def test_booking_scenarios(client, admin_headers, main_hall):
    # A: priced pending booking
    r = _create(client, main_hall.id)
    assert r.status_code == 201, r.text
    first = r.json()
    assert first["status"] == "pending"
    assert first["total_hours"] == 2
    assert first["total_cost"] == 100.0
    assert first["start_date_time"] == "2099-06-01T10:00:00+00:00"
    assert first["facility"]["name"] == "Main Hall"

    # B: overlapping request is refused
    r = _create(client, main_hall.id, "2099-06-01T11:00:00Z", "2099-06-01T13:00:00Z")
    assert r.status_code == 409
    assert r.json() == {"error": "Time slot not available"}

    # D (before C): 10:00 and 11:00 booked, 12:00 free
    r = client.get("/api/bookings/availability", params={"facilityId": main_hall.id, "date": "2099-06-01"})
    assert r.status_code == 200
    slots = {s["start_time_display"]: s for s in r.json()["time_slots"]}
    assert slots["10:00"]["reason"] == "booked"
    assert slots["11:00"]["reason"] == "booked"
    assert slots["12:00"]["available"] is True

    # C: abutting booking accepted
    r = _create(client, main_hall.id, "2099-06-01T12:00:00Z", "2099-06-01T13:00:00Z")
    assert r.status_code == 201

    r = client.get("/api/bookings/availability", params={"facilityId": main_hall.id, "date": "2099-06-01"})
    slots = {s["start_time_display"]: s for s in r.json()["time_slots"]}
    assert slots["12:00"]["reason"] == "booked"

    # E: cancelling A frees its interval
    r = client.put(f"/api/bookings/{first['id']}", json={"status": "cancelled"}, headers=admin_headers)
    assert r.status_code == 200
    assert r.json()["status"] == "cancelled"

    r = _create(client, main_hall.id, "2099-06-01T10:00:00Z", "2099-06-01T11:00:00Z")
    assert r.status_code == 201


def test_create_without_rate_has_null_cost(client, small_hall):
    r = _create(client, small_hall.id)
    assert r.status_code == 201
    assert r.json()["total_cost"] is None
    assert r.json()["hourly_rate"] is None


def test_create_validation_errors(client, main_hall):
    r = client.post("/api/bookings", json={})
    assert r.status_code == 400
    assert r.json()["error"] == "Missing required fields"
    assert r.json()["details"]

    r = _create(client, main_hall.id, customer_email="not-an-email")
    assert r.status_code == 400

    r = _create(client, main_hall.id, START, START)
    assert r.status_code == 400
    assert r.json() == {"error": "End time must be after start time"}


@pytest.mark.parametrize("email", ["a@b..c", "a@-x.com", "\"<x>\"@y.z", "jane@"])
def test_create_rejects_malformed_email(client, main_hall, email):
    r = _create(client, main_hall.id, customer_email=email)
    assert r.status_code == 400
    assert r.json()["details"][0]["loc"] == ["body", "customer_email"]


def test_update_rejects_malformed_email(client, admin_headers, main_hall):
    booking_id = _create(client, main_hall.id).json()["id"]
    r = client.put(f"/api/bookings/{booking_id}", json={"customer_email": "a@b..c"}, headers=admin_headers)
    assert r.status_code == 400


def test_create_unknown_facility(client):
    r = _create(client, 999)
    assert r.status_code == 404


def test_create_survives_notifier_failure(app, client, main_hall):
    app.dependency_overrides[get_notifier] = lambda: FailingNotifier()

    r = _create(client, main_hall.id)
    assert r.status_code == 201
    assert client.get(f"/api/bookings/{r.json()['id']}").status_code == 200


def test_create_sends_notifications(client, notifier, main_hall):
    _create(client, main_hall.id)
    assert notifier.kinds() == ["customer", "admin_new"]


def test_booking_disabled(client, admin_headers, main_hall):
    r = client.put("/api/settings", json={"booking_enabled": False}, headers=admin_headers)
    assert r.status_code == 200

    r = _create(client, main_hall.id)
    assert r.status_code == 400
    assert r.json() == {"error": "Online booking is currently disabled"}


def test_get_booking(client, main_hall):
    booking_id = _create(client, main_hall.id).json()["id"]

    assert client.get(f"/api/bookings/{booking_id}").json()["id"] == booking_id
    assert client.get("/api/bookings/999").status_code == 404

    r = client.get("/api/bookings/abc")
    assert r.status_code == 400
    assert r.json()["error"] == "Invalid id"


def test_admin_routes_require_auth(client, main_hall):
    booking_id = _create(client, main_hall.id).json()["id"]

    assert client.get("/api/bookings").status_code == 401
    assert client.delete(f"/api/bookings/{booking_id}").status_code == 401

    # auth is checked before the body is validated
    r = client.put(f"/api/bookings/{booking_id}", json={"status": "bogus"})
    assert r.status_code == 401
    assert r.json() == {"error": "Unauthorized"}

    r = client.put(
        f"/api/bookings/{booking_id}",
        json={"status": "confirmed"},
        headers={"Authorization": "Bearer admin.1.forged"},
    )
    assert r.status_code == 401


def test_admin_list_filters(client, admin_headers, main_hall, small_hall):
    a = _create(client, main_hall.id).json()
    _create(client, small_hall.id).json()
    _create(client, main_hall.id, "2099-07-01T10:00:00Z", "2099-07-01T11:00:00Z")
    client.put(f"/api/bookings/{a['id']}", json={"status": "confirmed"}, headers=admin_headers)

    r = client.get("/api/bookings", headers=admin_headers)
    assert r.status_code == 200
    assert len(r.json()) == 3

    r = client.get("/api/bookings", params={"facilityId": main_hall.id}, headers=admin_headers)
    assert len(r.json()) == 2

    r = client.get("/api/bookings", params={"status": "confirmed"}, headers=admin_headers)
    assert [b["id"] for b in r.json()] == [a["id"]]

    r = client.get(
        "/api/bookings",
        params={"startDate": "2099-06-15T00:00:00Z", "endDate": "2099-07-31T00:00:00Z"},
        headers=admin_headers,
    )
    assert [b["start_date_time"] for b in r.json()] == ["2099-07-01T10:00:00+00:00"]


def test_update_rejects_bad_payloads(client, admin_headers, main_hall):
    booking_id = _create(client, main_hall.id).json()["id"]

    r = client.put(f"/api/bookings/{booking_id}", json={"status": "approved"}, headers=admin_headers)
    assert r.status_code == 400

    r = client.put(f"/api/bookings/{booking_id}", json={"facility_id": 2}, headers=admin_headers)
    assert r.status_code == 400

    client.put(f"/api/bookings/{booking_id}", json={"status": "rejected"}, headers=admin_headers)
    r = client.put(f"/api/bookings/{booking_id}", json={"status": "confirmed"}, headers=admin_headers)
    assert r.status_code == 400
    assert r.json() == {"error": "Cannot change status from rejected to confirmed"}


def test_reschedule_via_api(client, admin_headers, main_hall):
    booking_id = _create(client, main_hall.id).json()["id"]

    r = client.put(
        f"/api/bookings/{booking_id}",
        json={"start_date_time": "2099-06-01T14:00:00Z", "end_date_time": "2099-06-01T17:30:00Z"},
        headers=admin_headers,
    )
    assert r.status_code == 200
    assert r.json()["total_hours"] == 3.5
    assert r.json()["total_cost"] == 175.0


def test_cancel_is_idempotent(client, admin_headers, notifier, main_hall):
    booking_id = _create(client, main_hall.id).json()["id"]
    notifier.sent.clear()

    r = client.delete(f"/api/bookings/{booking_id}", headers=admin_headers)
    assert r.status_code == 200
    assert r.json() == {"message": "Booking cancelled successfully"}
    assert notifier.kinds() == ["admin_status", "customer"]

    notifier.sent.clear()
    r = client.delete(f"/api/bookings/{booking_id}", headers=admin_headers)
    assert r.status_code == 200
    assert notifier.sent == []
    assert client.get(f"/api/bookings/{booking_id}").json()["status"] == "cancelled"


def test_availability_errors(client, main_hall):
    r = client.get("/api/bookings/availability", params={"facilityId": 999, "date": "2099-06-01"})
    assert r.status_code == 404

    r = client.get("/api/bookings/availability", params={"facilityId": main_hall.id})
    assert r.status_code == 400

    r = client.get("/api/bookings/availability", params={"facilityId": main_hall.id, "date": "June 1st"})
    assert r.status_code == 400

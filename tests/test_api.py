"""HTTP-level tests for routing, status codes and error bodies."""

from datetime import timedelta

import pytest


def appointment_body(doctor_id: int, day, at: str = "10:00", pin: int = 1234) -> dict:
    return {
        "customer_pin": pin,
        "doctor_id": doctor_id,
        "note": "vaccination",
        "date": day.isoformat(),
        "time": at,
    }


class TestBrowsing:
    def test_root_and_health(self, client):
        assert client.get("/").status_code == 200
        assert client.get("/health").json() == {"status": "healthy"}

    def test_cache_health(self, client):
        response = client.get("/health/cache")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
        assert response.json()["cache"]["backend"] == "memory"

    def test_list_customers_hides_pin(self, client, customer):
        response = client.get("/customers")

        assert response.status_code == 200
        body = response.json()
        assert body["total_elements"] == 1
        assert body["content"] == [{"id": customer.id, "name": "CUSTOMER1", "surname": "SURNAME1"}]

    def test_get_customer(self, client, customer):
        response = client.get(f"/customers/{customer.id}")

        assert response.status_code == 200
        assert "pin" not in response.json()

    def test_get_unknown_customer(self, client):
        response = client.get("/customers/404")

        assert response.status_code == 404
        assert response.json() == {"detail": "Customer with id '404' not found."}

    def test_list_doctors(self, client, doctor):
        response = client.get("/doctors", params={"page": 0, "size": 5})

        assert response.status_code == 200
        body = response.json()
        assert body["first"] is True
        assert body["last"] is True
        assert body["content"][0]["name"] == "DOCTOR1"

    def test_get_unknown_doctor(self, client):
        assert client.get("/doctors/77").status_code == 404

    def test_unknown_doctor_schedule(self, client):
        assert client.get("/doctors/77/appointments").status_code == 404

    @pytest.mark.parametrize("params", [{"size": 0}, {"page": -1}, {"sort": "pin"}, {"sort": "name,sideways"}])
    def test_bad_page_parameters(self, client, params):
        assert client.get("/customers", params=params).status_code == 400


class TestBooking:
    def test_book_appointment(self, client, customer, doctor, tomorrow):
        response = client.post(f"/customers/{customer.id}/appointments", json=appointment_body(doctor.id, tomorrow))

        assert response.status_code == 201
        body = response.json()
        assert body["scheduled_date"] == tomorrow.isoformat()
        assert body["scheduled_time"] == "10:00:00"
        assert body["person_name"] == "DOCTOR1"
        assert body["person_surname"] == "SURNAME1"

    def test_malformed_pin(self, client, customer, doctor, tomorrow):
        response = client.post(
            f"/customers/{customer.id}/appointments", json=appointment_body(doctor.id, tomorrow, pin=12)
        )

        assert response.status_code == 400

    def test_missing_field(self, client, customer, tomorrow):
        body = appointment_body(1, tomorrow)
        del body["doctor_id"]

        assert client.post(f"/customers/{customer.id}/appointments", json=body).status_code == 400

    def test_wrong_pin(self, client, customer, doctor, tomorrow):
        response = client.post(
            f"/customers/{customer.id}/appointments", json=appointment_body(doctor.id, tomorrow, pin=4321)
        )

        assert response.status_code == 400
        assert response.json() == {"detail": "Given pin is invalid."}

    def test_unknown_customer(self, client, doctor, tomorrow):
        response = client.post("/customers/404/appointments", json=appointment_body(doctor.id, tomorrow))

        assert response.status_code == 404

    def test_taken_slot(self, client, customer, doctor, tomorrow):
        url = f"/customers/{customer.id}/appointments"
        client.post(url, json=appointment_body(doctor.id, tomorrow))

        response = client.post(url, json=appointment_body(doctor.id, tomorrow, at="10:15"))

        assert response.status_code == 409
        assert "already taken" in response.json()["detail"]

    def test_past_date(self, client, customer, doctor, tomorrow):
        response = client.post(
            f"/customers/{customer.id}/appointments",
            json=appointment_body(doctor.id, tomorrow - timedelta(days=2)),
        )

        assert response.status_code == 409

    def test_customer_sees_own_appointments(self, client, customer, doctor, tomorrow):
        client.post(f"/customers/{customer.id}/appointments", json=appointment_body(doctor.id, tomorrow))

        response = client.get(f"/customers/{customer.id}/appointments")

        assert response.status_code == 200
        assert [a["person_name"] for a in response.json()] == ["DOCTOR1"]


class TestScheduleAndCancellation:
    def test_schedule_follows_booking_and_cancellation(self, client, customer, doctor, tomorrow):
        schedule_url = f"/doctors/{doctor.id}/appointments"
        booking_url = f"/customers/{customer.id}/appointments"
        assert client.get(schedule_url).json()["empty"] is True

        client.post(booking_url, json=appointment_body(doctor.id, tomorrow))
        schedule = client.get(schedule_url).json()
        assert schedule["total_elements"] == 1
        assert schedule["content"][0]["person_name"] == "CUSTOMER1"

        response = client.request("DELETE", booking_url, json=appointment_body(doctor.id, tomorrow))
        assert response.status_code == 204
        assert client.get(schedule_url).json()["empty"] is True

    def test_schedule_for_date(self, client, customer, doctor, tomorrow):
        booking_url = f"/customers/{customer.id}/appointments"
        client.post(booking_url, json=appointment_body(doctor.id, tomorrow, at="09:00"))
        client.post(booking_url, json=appointment_body(doctor.id, tomorrow + timedelta(days=1), at="09:00"))

        response = client.get(f"/doctors/{doctor.id}/appointments", params={"date": tomorrow.isoformat()})

        assert response.status_code == 200
        body = response.json()
        assert body["total_elements"] == 1
        assert body["content"][0]["scheduled_date"] == tomorrow.isoformat()

    def test_cancel_with_wrong_pin(self, client, customer, doctor, tomorrow):
        response = client.request(
            "DELETE",
            f"/customers/{customer.id}/appointments",
            json=appointment_body(doctor.id, tomorrow, pin=4321),
        )

        assert response.status_code == 400

    def test_cancel_missing_appointment_is_no_content(self, client, customer, doctor, tomorrow):
        response = client.request(
            "DELETE", f"/customers/{customer.id}/appointments", json=appointment_body(doctor.id, tomorrow)
        )

        assert response.status_code == 204

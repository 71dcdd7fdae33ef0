"""Tests for API endpoints."""

from triage_desk import __version__


def setup_clinic(client):
    client.post("/doctors", json={"id": 1, "name": "Rao", "specialization": "General"})
    client.post("/doctors/1/slots", json={"slot_id": 1, "start": "10:00", "end": "10:30"})
    client.post("/doctors/1/slots", json={"slot_id": 2, "start": "10:30", "end": "11:00"})
    for patient_id, name in [(1, "Alice"), (2, "Bob"), (3, "Charlie")]:
        client.post("/patients", json={"id": patient_id, "name": name, "age": 30})


class TestHealthEndpoint:
    """Tests for the health check endpoint."""

    def test_health_check(self, client):
        """Test that health check returns status and version."""
        response = client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["version"] == __version__


class TestPatientEndpoints:
    """Tests for patient endpoints."""

    def test_register_get_update_delete(self, client):
        """Test the patient lifecycle over HTTP."""
        response = client.post("/patients", json={"id": 1, "name": "Alice", "age": 30, "severity": 2})
        assert response.status_code == 201
        assert response.json()["visits"] == 0

        response = client.patch("/patients/1", json={"age": 31})
        assert response.status_code == 200
        assert response.json()["age"] == 31
        assert response.json()["name"] == "Alice"

        assert client.delete("/patients/1").status_code == 204
        assert client.get("/patients/1").status_code == 404

    def test_missing_patient(self, client):
        """Test not-found mapping."""
        assert client.patch("/patients/9", json={"age": 1}).status_code == 404
        assert client.delete("/patients/9").status_code == 404

    def test_validation_error(self, client):
        """Test that a malformed body is rejected."""
        response = client.post("/patients", json={"id": 1, "name": "Alice"})
        assert response.status_code == 422


class TestDoctorEndpoints:
    """Tests for doctor and slot endpoints."""

    def test_duplicate_doctor(self, client):
        """Test that a duplicate doctor id conflicts."""
        setup_clinic(client)
        response = client.post("/doctors", json={"id": 1, "name": "X", "specialization": "Y"})
        assert response.status_code == 409

    def test_slots_and_cancel(self, client):
        """Test slot listing and cancellation."""
        setup_clinic(client)
        slots = client.get("/doctors/1/slots").json()
        assert [slot["slot_id"] for slot in slots] == [2, 1]

        assert client.delete("/doctors/1/slots/2").json() == {"cancelled": True}
        assert client.delete("/doctors/1/slots/2").json() == {"cancelled": False}
        assert client.delete("/doctors/9/slots/1").status_code == 404

    def test_slot_for_unknown_doctor(self, client):
        """Test that adding a slot needs a doctor."""
        response = client.post("/doctors/5/slots", json={"slot_id": 1, "start": "a", "end": "b"})
        assert response.status_code == 404


class TestQueueEndpoints:
    """Tests for booking, triage, serve and undo."""

    def test_outpatient_day(self, client):
        """Test the serve order across triage and routine queues."""
        setup_clinic(client)
        booking = client.post("/bookings", json={"patient_id": 1, "doctor_id": 1})
        assert booking.status_code == 201
        assert booking.json()["slot_id"] == 1
        client.post("/triage", json={"patient_id": 2, "severity": 1})
        client.post("/triage", json={"patient_id": 3, "severity": 5})

        served = [client.post("/serve").json() for _ in range(4)]
        assert [result["patient_id"] for result in served[:3]] == [2, 3, 1]
        assert [result["kind"] for result in served[:3]] == ["EMERGENCY", "EMERGENCY", "ROUTINE"]
        assert served[3]["status"] == "nothing_to_serve"

        next_free = client.get("/reports/doctors").json()[0]["next_free_slot"]
        assert next_free["slot_id"] == 1

    def test_booking_unknown_doctor(self, client):
        """Test not-found mapping for bookings."""
        response = client.post("/bookings", json={"patient_id": 1, "doctor_id": 9})
        assert response.status_code == 404

    def test_queue_full_conflict(self, client):
        """Test capacity mapping for bookings."""
        client.post("/doctors", json={"id": 1, "name": "Rao", "specialization": "General", "queue_capacity": 1})
        client.post("/bookings", json={"patient_id": 1, "doctor_id": 1})
        response = client.post("/bookings", json={"patient_id": 2, "doctor_id": 1})
        assert response.status_code == 409
        assert len(client.get("/tokens").json()) == 1

    def test_undo_serve(self, client):
        """Test that undoing a routine serve returns a new token at the queue head."""
        setup_clinic(client)
        client.post("/bookings", json={"patient_id": 1, "doctor_id": 1})
        client.post("/bookings", json={"patient_id": 2, "doctor_id": 1})
        client.post("/serve")

        response = client.post("/undo")
        data = response.json()
        assert data["status"] == "undone"
        assert data["action"] == "SERVE_ROUTINE"
        queue = client.get("/doctors/1/queue").json()
        assert queue[0]["token_id"] == data["token"]["token_id"]
        assert queue[0]["patient_id"] == 1

    def test_undo_outcomes(self, client):
        """Test the nothing-to-undo and unsupported outcomes."""
        assert client.post("/undo").json()["status"] == "nothing_to_undo"

        client.post("/patients", json={"id": 1, "name": "Alice", "age": 30})
        client.delete("/patients/1")
        data = client.post("/undo").json()
        assert data["status"] == "unsupported"
        assert data["action"] == "DELETE_PATIENT"


class TestReportEndpoints:
    """Tests for report endpoints."""

    def test_summary_and_top_patients(self, client):
        """Test summary totals and visit ranking."""
        setup_clinic(client)
        client.post("/triage", json={"patient_id": 2, "severity": 1})
        client.post("/serve")
        client.post("/bookings", json={"patient_id": 1, "doctor_id": 1})

        summary = client.get("/reports/summary").json()
        assert summary == {"total_served": 1, "total_pending": 1, "emergency_queued": 0}

        top = client.get("/reports/top-patients", params={"k": 1}).json()
        assert [patient["id"] for patient in top] == [2]
        assert client.get("/reports/top-patients", params={"k": 0}).status_code == 422

    def test_tokens_listing(self, client):
        """Test the active token listing."""
        setup_clinic(client)
        client.post("/bookings", json={"patient_id": 1, "doctor_id": 1})
        tokens = client.get("/tokens").json()
        assert tokens == [{"token_id": 1, "patient_id": 1, "doctor_id": 1, "slot_id": 1, "kind": "ROUTINE"}]

"""Integration tests for the sessions API.

Run with: pytest tests/test_api.py -v
"""

import pytest
from rest_framework.test import APIClient


def create_session(api_client: APIClient, payload: dict, **overrides) -> dict:
    response = api_client.post("/api/sessions", {**payload, **overrides}, format="json")
    assert response.status_code == 201, response.data
    return response.data


def book(api_client: APIClient, session_id: str, name: str, email: str = ""):
    return api_client.post(
        f"/api/sessions/{session_id}/slots",
        {"playerName": name, "email": email},
        format="json",
    )


@pytest.mark.django_db
class TestSessionList:
    """Tests for GET/POST /api/sessions"""

    def test_create_returns_document_shape(self, api_client, session_payload):
        data = create_session(api_client, session_payload)
        assert data["status"] == "open"
        assert data["startTime"] == "18:00"
        assert data["maxSlots"] == 4
        assert data["isFull"] is False
        assert data["slots"] == []
        assert data["totalAmount"] == "0.00"
        assert data["isPaid"] is False
        assert data["individualCosts"] is None
        assert data["paymentInfo"]["bankName"] == "Commonwealth Bank (CBA)"

    def test_create_reports_first_missing_field(self, api_client, session_payload):
        payload = {**session_payload, "paymentInfo": {"bank": "CBA"}}
        response = api_client.post("/api/sessions", payload, format="json")
        assert response.status_code == 400
        assert response.data["code"] == "INVALID_INPUT"
        assert response.data["field"] == "account_name"

    def test_create_rejects_bad_format(self, api_client, session_payload):
        response = api_client.post(
            "/api/sessions", {**session_payload, "date": "next tuesday"}, format="json"
        )
        assert response.status_code == 400
        assert "date" in response.data["errors"]

    def test_list_ordered_by_date(self, api_client, session_payload):
        create_session(api_client, session_payload, date="2026-12-01")
        create_session(api_client, session_payload, date="2026-11-01")
        response = api_client.get("/api/sessions")
        assert [item["date"] for item in response.data] == ["2026-11-01", "2026-12-01"]

    def test_list_upcoming_and_past(self, api_client, session_payload):
        create_session(api_client, session_payload, date="2000-01-01")
        create_session(api_client, session_payload, date="2999-01-01")
        upcoming = api_client.get("/api/sessions?when=upcoming").data
        past = api_client.get("/api/sessions?when=past").data
        assert [item["date"] for item in upcoming] == ["2999-01-01"]
        assert [item["date"] for item in past] == ["2000-01-01"]

    def test_list_rejects_unknown_filter(self, api_client):
        assert api_client.get("/api/sessions?when=soon").status_code == 400


@pytest.mark.django_db
class TestSessionDetail:
    """Tests for GET/DELETE /api/sessions/{id}"""

    def test_get_session(self, api_client, session_payload):
        created = create_session(api_client, session_payload)
        response = api_client.get(f"/api/sessions/{created['id']}")
        assert response.status_code == 200
        assert response.data["id"] == created["id"]

    def test_get_session_not_found(self, api_client):
        response = api_client.get("/api/sessions/6f1c1f9e-0000-4000-8000-000000000000")
        assert response.status_code == 404
        assert response.data == {"code": "SESSION_NOT_FOUND", "message": "Session not found"}

    def test_get_session_malformed_id(self, api_client):
        assert api_client.get("/api/sessions/not-a-uuid").status_code == 404

    def test_delete_session(self, api_client, session_payload):
        created = create_session(api_client, session_payload)
        assert api_client.delete(f"/api/sessions/{created['id']}").status_code == 204
        assert api_client.get(f"/api/sessions/{created['id']}").status_code == 404

    def test_share_link(self, api_client, session_payload, settings):
        settings.BOOKINGS_SHARE_BASE_URL = "https://courts.example.com/"
        created = create_session(api_client, session_payload)
        response = api_client.get(f"/api/sessions/{created['id']}/share")
        assert response.data["url"] == f"https://courts.example.com/?session={created['id']}"


@pytest.mark.django_db
class TestSlots:
    """Tests for booking and cancelling slots."""

    def test_capacity_scenario(self, api_client, session_payload):
        session_id = create_session(api_client, session_payload, maxSlots=2)["id"]
        assert book(api_client, session_id, "Alice").status_code == 201
        full = book(api_client, session_id, "Bob")
        assert full.status_code == 201
        assert full.data["isFull"] is True

        response = book(api_client, session_id, "Carol")
        assert response.status_code == 409
        assert response.data["code"] == "CAPACITY_EXCEEDED"

        slots = api_client.get(f"/api/sessions/{session_id}").data["slots"]
        assert [slot["playerName"] for slot in slots] == ["Alice", "Bob"]

    def test_book_requires_player_name(self, api_client, session_payload):
        session_id = create_session(api_client, session_payload)["id"]
        response = book(api_client, session_id, "")
        assert response.status_code == 400
        assert response.data["field"] == "player_name"

    def test_cancel_is_idempotent(self, api_client, session_payload):
        session_id = create_session(api_client, session_payload)["id"]
        slot_id = book(api_client, session_id, "Alice").data["slots"][0]["id"]
        url = f"/api/sessions/{session_id}/slots/{slot_id}"
        first = api_client.delete(url)
        second = api_client.delete(url)
        assert first.status_code == second.status_code == 200
        assert first.data["slots"] == second.data["slots"] == []


@pytest.mark.django_db
class TestFinalize:
    """Tests for POST /api/sessions/{id}/finalize and /allocation"""

    def booked_session(self, api_client, payload, players):
        session_id = create_session(api_client, payload)["id"]
        slot_ids = []
        for player in players:
            response = book(api_client, session_id, player, f"{player.lower()}@example.com")
            slot_ids.append(response.data["slots"][-1]["id"])
        return session_id, slot_ids

    def test_even_split(self, api_client, session_payload):
        session_id, _ = self.booked_session(api_client, session_payload, ["A", "B", "C", "D"])
        response = api_client.post(
            f"/api/sessions/{session_id}/finalize", {"totalAmount": "20.00"}, format="json"
        )
        assert response.status_code == 200
        assert response.data["status"] == "finalized"
        assert response.data["costPerPerson"] == "5.00"
        assert set(response.data["individualCosts"].values()) == {"5.00"}

    def test_manual_split(self, api_client, session_payload):
        session_id, (a, b) = self.booked_session(api_client, session_payload, ["A", "B"])
        response = api_client.post(
            f"/api/sessions/{session_id}/finalize",
            {"totalAmount": "20.00", "individualCosts": {str(a): "12.00", str(b): "8.00"}},
            format="json",
        )
        assert response.status_code == 200
        assert response.data["individualCosts"] == {str(a): "12.00", str(b): "8.00"}
        assert response.data["costPerPerson"] == "10.00"

    def test_manual_split_mismatch(self, api_client, session_payload):
        session_id, (a, b) = self.booked_session(api_client, session_payload, ["A", "B"])
        response = api_client.post(
            f"/api/sessions/{session_id}/finalize",
            {"totalAmount": "20.00", "individualCosts": {str(a): "12.00", str(b): "7.00"}},
            format="json",
        )
        assert response.status_code == 422
        assert response.data["code"] == "ALLOCATION_MISMATCH"
        assert api_client.get(f"/api/sessions/{session_id}").data["isPaid"] is False

    def test_manual_split_bad_keys(self, api_client, session_payload):
        session_id, _ = self.booked_session(api_client, session_payload, ["A"])
        response = api_client.post(
            f"/api/sessions/{session_id}/finalize",
            {"totalAmount": "20.00", "individualCosts": {"slot-a": "20.00"}},
            format="json",
        )
        assert response.status_code == 400

    def test_allocation_check(self, api_client, session_payload):
        session_id, (a, b) = self.booked_session(api_client, session_payload, ["A", "B"])
        response = api_client.post(
            f"/api/sessions/{session_id}/allocation",
            {"totalAmount": "20.00", "individualCosts": {str(a): "12.00", str(b): "7.00"}},
            format="json",
        )
        assert response.status_code == 200
        assert response.data == {
            "matches": False,
            "total": "20.00",
            "allocated": "19.00",
            "difference": "-1.00",
        }

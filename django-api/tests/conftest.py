"""Pytest configuration and shared fixtures."""

import itertools
from dataclasses import replace
from datetime import date, time

import pytest
from rest_framework.test import APIClient

from bookings.domain import Bank, PaymentInfo, Session, SessionId, SlotInput, Venue
from bookings.domain import lifecycle
from bookings.domain.errors import SessionNotFoundError
from bookings.services.booking_service import BookingService
from bookings.stores.interfaces import SessionStore


class FakeSessionStore(SessionStore):
    """In-memory store that behaves like the persistence collaborator."""

    def __init__(self) -> None:
        self.sessions: dict[SessionId, Session] = {}
        self.updates: list[tuple[SessionId, dict]] = []
        self._ids = itertools.count(1)

    def list_sessions(self) -> list[Session]:
        return sorted(self.sessions.values(), key=lambda session: session.date)

    def get_session(self, session_id: SessionId) -> Session | None:
        return self.sessions.get(session_id)

    def create_session(self, session: Session) -> SessionId:
        session_id = SessionId(f"session-{next(self._ids)}")
        self.sessions[session_id] = replace(session, id=session_id)
        return session_id

    def update_session(self, session_id: SessionId, fields) -> None:
        if session_id not in self.sessions:
            raise SessionNotFoundError(session_id.value)
        self.updates.append((session_id, dict(fields)))
        self.sessions[session_id] = replace(self.sessions[session_id], **fields)

    def delete_session(self, session_id: SessionId) -> None:
        if session_id not in self.sessions:
            raise SessionNotFoundError(session_id.value)
        del self.sessions[session_id]


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture(autouse=True)
def clear_cache():
    from django.core.cache import cache
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def slot_ids():
    """Deterministic slot id source: 101, 102, 103, ..."""
    return itertools.count(101).__next__


@pytest.fixture
def make_session():
    """Build an Open session; pass ``players`` to pre-book slots."""

    def build(players=(), session_id="session-1", max_slots=4, **overrides) -> Session:
        session = Session(
            id=SessionId(session_id) if session_id else None,
            date=overrides.pop("date", date(2026, 11, 7)),
            start_time=time(18, 0),
            end_time=time(20, 0),
            courts=2,
            location=Venue.GRANVILLE,
            max_slots=max_slots,
            payment_info=PaymentInfo(
                account_name="Sam Lee",
                account_number="062-000 1234 5678",
                bank=Bank.CBA,
            ),
        )
        ids = itertools.count(1).__next__
        for player in players:
            session = lifecycle.book_slot(session, SlotInput(player_name=player), ids)
        return replace(session, **overrides)

    return build


@pytest.fixture
def store() -> FakeSessionStore:
    return FakeSessionStore()


@pytest.fixture
def service(store, slot_ids) -> BookingService:
    return BookingService(store, id_generator=slot_ids)


@pytest.fixture
def session_payload() -> dict:
    return {
        "date": "2026-11-07",
        "startTime": "18:00",
        "endTime": "20:00",
        "courts": 2,
        "maxSlots": 4,
        "location": "NBC Granville",
        "paymentInfo": {
            "accountName": "Sam Lee",
            "accountNumber": "062-000 1234 5678",
            "bank": "CBA",
        },
    }
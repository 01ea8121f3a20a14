"""Integration tests for DjangoSessionStore.

Run with: pytest tests/test_store.py -v
"""

from datetime import date
from decimal import Decimal

import pytest

from bookings import models
from bookings.domain import SessionId, SlotId, SlotInput
from bookings.domain import lifecycle
from bookings.domain.errors import SessionNotFoundError
from bookings.stores.django_store import DjangoSessionStore


@pytest.fixture
def django_store() -> DjangoSessionStore:
    return DjangoSessionStore()


@pytest.mark.django_db
class TestDjangoSessionStore:
    """Round trips through the ORM."""

    def test_create_assigns_id_and_round_trips(self, django_store, make_session):
        draft = make_session(session_id=None, players=["Alice", "Bob"])
        session_id = django_store.create_session(draft)

        loaded = django_store.get_session(session_id)
        assert loaded.id == session_id
        assert loaded.location == draft.location
        assert loaded.payment_info == draft.payment_info
        assert [slot.player_name for slot in loaded.slots] == ["Alice", "Bob"]
        assert [slot.id for slot in loaded.slots] == [SlotId(1), SlotId(2)]
        assert loaded.total_amount == 0
        assert loaded.individual_costs is None

    def test_list_orders_by_date(self, django_store, make_session):
        django_store.create_session(make_session(session_id=None, date=date(2026, 12, 1)))
        django_store.create_session(make_session(session_id=None, date=date(2026, 11, 1)))
        dates = [session.date for session in django_store.list_sessions()]
        assert dates == [date(2026, 11, 1), date(2026, 12, 1)]

    def test_get_unknown_or_malformed_id(self, django_store):
        assert django_store.get_session(SessionId("not-a-uuid")) is None
        assert django_store.get_session(SessionId("6f1c1f9e-0000-4000-8000-000000000000")) is None

    def test_update_replaces_slots_in_order(self, django_store, make_session):
        session_id = django_store.create_session(make_session(session_id=None, players=["A", "B"]))
        session = django_store.get_session(session_id)
        session = lifecycle.cancel_slot(session, SlotId(1))
        session = lifecycle.book_slot(session, SlotInput(player_name="C"), lambda: 3)

        django_store.update_session(session_id, {"slots": session.slots})

        loaded = django_store.get_session(session_id)
        assert [slot.player_name for slot in loaded.slots] == ["B", "C"]
        assert models.Slot.objects.filter(session_id=session_id.value).count() == 2

    def test_update_payment_fields(self, django_store, make_session):
        session_id = django_store.create_session(make_session(session_id=None, players=["A", "B"]))
        paid = lifecycle.finalize(
            django_store.get_session(session_id),
            Decimal("20.00"),
            {SlotId(1): Decimal("12.50"), SlotId(2): Decimal("7.50")},
        )
        django_store.update_session(
            session_id,
            {
                "total_amount": paid.total_amount,
                "individual_costs": paid.individual_costs,
                "cost_per_person": paid.cost_per_person,
                "is_paid": paid.is_paid,
            },
        )

        loaded = django_store.get_session(session_id)
        assert loaded.is_paid is True
        assert loaded.total_amount == Decimal("20.00")
        assert loaded.individual_costs == {SlotId(1): Decimal("12.50"), SlotId(2): Decimal("7.50")}
        assert loaded.cost_per_person == Decimal("10.00")

    def test_cost_per_person_is_stored_in_cents(self, django_store, make_session):
        session_id = django_store.create_session(make_session(session_id=None, players=["A", "B", "C"]))
        django_store.update_session(session_id, {"cost_per_person": Decimal("20") / 3})
        assert django_store.get_session(session_id).cost_per_person == Decimal("6.67")

    def test_update_unknown_field(self, django_store, make_session):
        session_id = django_store.create_session(make_session(session_id=None))
        with pytest.raises(ValueError):
            django_store.update_session(session_id, {"colour": "blue"})

    def test_delete(self, django_store, make_session):
        session_id = django_store.create_session(make_session(session_id=None, players=["A"]))
        django_store.delete_session(session_id)
        assert django_store.get_session(session_id) is None
        assert models.Slot.objects.count() == 0

    def test_delete_missing(self, django_store):
        with pytest.raises(SessionNotFoundError):
            django_store.delete_session(SessionId("6f1c1f9e-0000-4000-8000-000000000000"))

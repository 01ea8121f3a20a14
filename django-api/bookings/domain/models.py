"""Domain models representing persisted state.

These are pure domain objects with no API input rules.
Django ORM models are in bookings/models.py (persistence layer).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, time
from decimal import Decimal
from enum import Enum

from bookings.domain.value_objects import ZERO, PaymentInfo, SessionId, SlotId, Venue


class SessionStatus(Enum):
    """Where a session is in its lifecycle."""

    DRAFT = "draft"
    OPEN = "open"
    FINALIZED = "finalized"


@dataclass(frozen=True)
class Slot:
    """Domain representation of one participant's booking."""

    id: SlotId
    player_name: str
    email: str
    start_time: time
    end_time: time


@dataclass(frozen=True)
class Session:
    """Domain representation of a Session."""

    id: SessionId | None
    date: date
    start_time: time
    end_time: time
    courts: int
    location: Venue
    max_slots: int
    payment_info: PaymentInfo
    slots: tuple[Slot, ...] = ()
    total_amount: Decimal = ZERO
    is_paid: bool = False
    individual_costs: dict[SlotId, Decimal] | None = field(default=None, hash=False)
    cost_per_person: Decimal | None = None

    @property
    def status(self) -> SessionStatus:
        if self.id is None:
            return SessionStatus.DRAFT
        if self.is_paid:
            return SessionStatus.FINALIZED
        return SessionStatus.OPEN

    @property
    def slots_remaining(self) -> int:
        return max(self.max_slots - len(self.slots), 0)

    @property
    def is_full(self) -> bool:
        return len(self.slots) >= self.max_slots

    def find_slot(self, slot_id: SlotId) -> Slot | None:
        for slot in self.slots:
            if slot.id == slot_id:
                return slot
        return None


@dataclass(frozen=True)
class SessionInput:
    """Raw fields for a new session, validated by ``create_session``."""

    date: date | None = None
    start_time: time | None = None
    end_time: time | None = None
    courts: int | None = 1
    max_slots: int | None = 4
    location: Venue | str | None = None
    account_name: str | None = None
    account_number: str | None = None
    bank: str | None = None
    custom_bank: str | None = None


@dataclass(frozen=True)
class SlotInput:
    """Fields a participant supplies when claiming a slot.

    Times left as None default to the session's own window.
    """

    player_name: str
    email: str = ""
    start_time: time | None = None
    end_time: time | None = None


@dataclass(frozen=True)
class PaymentNotice:
    """What one participant owes once a session is finalized."""

    player_name: str
    email: str
    amount: Decimal

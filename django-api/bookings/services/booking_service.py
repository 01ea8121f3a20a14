"""Booking service - all business logic lives here.

Services:
- Depend only on interfaces (stores)
- Run lifecycle operations against a fetched session
- Persist only the fields an operation changed
- Return domain models or raise domain errors

Each call reads the full record, changes it in memory and writes it back.
Nothing guards against two callers doing that at once; the later write wins.
"""

import logging
import time
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from bookings.domain import SessionId, SessionInput, SlotId, SlotInput
from bookings.domain import lifecycle
from bookings.domain.allocation import allocation_difference, manual_matches
from bookings.domain.errors import DomainError, SessionNotFoundError
from bookings.domain.models import Session
from bookings.signals import session_finalized
from bookings.stores.interfaces import SessionStore

logger = logging.getLogger(__name__)


def timestamp_slot_id() -> int:
    """Milliseconds since the epoch, used as the default slot id."""
    return time.time_ns() // 1_000_000


@dataclass(frozen=True)
class AllocationCheck:
    """Result of polling a manual split while it is being edited."""

    matches: bool
    total: Decimal
    allocated: Decimal
    difference: Decimal


class BookingService:
    """Service for session booking operations."""

    def __init__(
        self,
        store: SessionStore,
        id_generator: Callable[[], int] = timestamp_slot_id,
    ) -> None:
        self._store = store
        self._id_generator = id_generator

    def _slot_id_source(self, session: Session) -> Callable[[], int]:
        # Two bookings inside the same millisecond must still get distinct ids.
        taken = max((slot.id.value for slot in session.slots), default=0)
        return lambda: max(self._id_generator(), taken + 1)

    def list_sessions(self) -> list[Session]:
        """Return all sessions, earliest date first."""
        return self._store.list_sessions()

    def list_upcoming(self, today: date) -> list[Session]:
        """Return sessions on or after ``today``."""
        return [session for session in self._store.list_sessions() if session.date >= today]

    def list_past(self, today: date) -> list[Session]:
        """Return sessions before ``today``."""
        return [session for session in self._store.list_sessions() if session.date < today]

    def get_session(self, session_id: str) -> Session:
        """Return a session by ID.

        Raises:
            SessionNotFoundError: If the session does not exist.
        """
        try:
            key = SessionId.from_string(session_id)
        except ValueError:
            raise SessionNotFoundError(session_id) from None
        session = self._store.get_session(key)
        if session is None:
            raise SessionNotFoundError(session_id)
        return session

    def create_session(self, data: SessionInput) -> Session:
        """Validate and store a new session.

        Raises:
            InvalidInputError: For the first missing or invalid field.
        """
        try:
            draft = lifecycle.create_session(data)
        except DomainError as exc:
            logger.warning("Rejected new session: %s", exc)
            raise
        session_id = self._store.create_session(draft)
        logger.info("Created session %s on %s", session_id, draft.date)
        return self.get_session(session_id.value)

    def book_slot(self, session_id: str, slot_input: SlotInput) -> Session:
        """Book a slot in a session.

        Raises:
            SessionNotFoundError: If the session does not exist.
            CapacityExceededError: If the session is full.
            InvalidInputError: If the player name is missing.
        """
        session = self.get_session(session_id)
        try:
            updated = lifecycle.book_slot(session, slot_input, self._slot_id_source(session))
        except DomainError as exc:
            logger.warning("Rejected booking for session %s: %s", session_id, exc)
            raise
        self._store.update_session(session.id, {"slots": updated.slots})
        logger.info(
            "Booked slot %s for %s in session %s (%d/%d)",
            updated.slots[-1].id,
            updated.slots[-1].player_name,
            session_id,
            len(updated.slots),
            updated.max_slots,
        )
        return updated

    def cancel_slot(self, session_id: str, slot_id: SlotId) -> Session:
        """Cancel a booking; cancelling an unknown slot changes nothing.

        Raises:
            SessionNotFoundError: If the session does not exist.
        """
        session = self.get_session(session_id)
        updated = lifecycle.cancel_slot(session, slot_id)
        if updated == session:
            logger.info("Slot %s not in session %s, nothing to cancel", slot_id, session_id)
            return session
        self._store.update_session(
            session.id,
            {"slots": updated.slots, "individual_costs": updated.individual_costs},
        )
        logger.info("Cancelled slot %s in session %s", slot_id, session_id)
        return updated

    def check_allocation(
        self,
        session_id: str,
        total_amount: Decimal,
        individual_costs: Mapping[SlotId, Decimal],
    ) -> AllocationCheck:
        """Report whether a manual split adds up, without changing anything."""
        self.get_session(session_id)
        allocated = sum(individual_costs.values(), Decimal("0"))
        return AllocationCheck(
            matches=manual_matches(individual_costs, total_amount),
            total=Decimal(total_amount),
            allocated=allocated,
            difference=allocation_difference(individual_costs, total_amount),
        )

    def finalize(
        self,
        session_id: str,
        total_amount: Decimal,
        individual_costs: Mapping[SlotId, Decimal] | None = None,
    ) -> Session:
        """Commit the court fee and its split, then send payment notices.

        Finalizing a session that is already paid overwrites its payment fields.

        Raises:
            SessionNotFoundError: If the session does not exist.
            AllocationMismatchError: If a manual split does not add up.
        """
        session = self.get_session(session_id)
        if session.is_paid:
            logger.info("Session %s is already finalized, overwriting payment", session_id)
        try:
            updated = lifecycle.finalize(session, total_amount, individual_costs)
        except DomainError as exc:
            logger.warning("Rejected finalize for session %s: %s", session_id, exc)
            raise
        self._store.update_session(
            session.id,
            {
                "total_amount": updated.total_amount,
                "individual_costs": updated.individual_costs,
                "cost_per_person": updated.cost_per_person,
                "is_paid": updated.is_paid,
            },
        )
        logger.info(
            "Finalized session %s: total %.2f across %d players",
            session_id,
            updated.total_amount,
            len(updated.slots),
        )
        session_finalized.send(
            sender=self.__class__,
            session=updated,
            notices=lifecycle.payment_notices(updated),
        )
        return updated

    def delete_session(self, session_id: str) -> None:
        """Delete a session.

        Raises:
            SessionNotFoundError: If the session does not exist.
        """
        session = self.get_session(session_id)
        target = lifecycle.delete_session(session)
        self._store.delete_session(target)
        logger.info("Deleted session %s", session_id)

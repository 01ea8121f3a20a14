from bookings.domain.models import (
    PaymentNotice,
    Session,
    SessionInput,
    SessionStatus,
    Slot,
    SlotInput,
)
from bookings.domain.value_objects import (
    Bank,
    Money,
    PaymentInfo,
    SessionId,
    SlotId,
    Venue,
)

__all__ = [
    "Session",
    "SessionInput",
    "SessionStatus",
    "Slot",
    "SlotInput",
    "PaymentNotice",
    "SessionId",
    "SlotId",
    "Money",
    "PaymentInfo",
    "Bank",
    "Venue",
]

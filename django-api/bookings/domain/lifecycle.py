"""Session lifecycle: create, book, cancel, finalize and delete.

Draft -> Open -> Finalized, with Open and Finalized both able to go to
Deleted. Finalizing again overwrites the payment fields; there is no way
back from Finalized to Open.

Every operation takes a Session and returns a new one. Nothing here does
I/O or keeps state between calls; the caller persists the result. Two
callers working from the same stored record will overwrite each other's
changes (last write wins).
"""

from collections.abc import Callable, Mapping
from dataclasses import replace
from decimal import Decimal, InvalidOperation

from bookings.domain.allocation import amount_for, even_split, mean_cost, validate_manual
from bookings.domain.errors import AllocationMismatchError, InvalidInputError
from bookings.domain.models import PaymentNotice, Session, SessionInput, SlotInput
from bookings.domain.slots import add_slot, remove_slot
from bookings.domain.value_objects import (
    ZERO,
    Bank,
    Money,
    PaymentInfo,
    SessionId,
    SlotId,
    Venue,
    split_evenly,
)

MAX_COURTS = 10


def _required_text(value: str | None, field: str) -> str:
    text = (value or "").strip()
    if not text:
        raise InvalidInputError(field)
    return text


def _positive_int(value: int | None, field: str, upper: int | None = None) -> int:
    if value is None:
        raise InvalidInputError(field)
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise InvalidInputError(field, "must be a positive whole number")
    if upper is not None and value > upper:
        raise InvalidInputError(field, f"must be at most {upper}")
    return value


def _venue(value: Venue | str | None) -> Venue:
    if value is None or value == "":
        raise InvalidInputError("location")
    try:
        return Venue(value)
    except ValueError:
        raise InvalidInputError("location", "is not a known venue") from None


def _bank(value: Bank | str | None) -> Bank:
    if value is None or value == "":
        raise InvalidInputError("bank")
    try:
        return Bank(value)
    except ValueError:
        raise InvalidInputError("bank", "is not a supported bank") from None


def _amount(value: Decimal | int | str, field: str) -> Decimal:
    try:
        amount = Decimal(value)
    except (InvalidOperation, TypeError, ValueError):
        raise InvalidInputError(field, "must be a number") from None
    if not amount.is_finite():
        raise InvalidInputError(field, "must be a number")
    try:
        return Money(amount).amount
    except ValueError:
        raise InvalidInputError(field, "must be zero or more") from None


def create_session(data: SessionInput) -> Session:
    """Build a new Draft session from ``data``.

    Fields are checked in form order and the first bad one is reported.

    Raises:
        InvalidInputError: For the first missing or invalid field.
    """
    if data.date is None:
        raise InvalidInputError("date")
    if data.start_time is None:
        raise InvalidInputError("start_time")
    if data.end_time is None:
        raise InvalidInputError("end_time")
    courts = _positive_int(data.courts, "courts", upper=MAX_COURTS)
    max_slots = _positive_int(data.max_slots, "max_slots")
    location = _venue(data.location)
    account_name = _required_text(data.account_name, "account_name")
    account_number = _required_text(data.account_number, "account_number")
    bank = _bank(data.bank)
    custom_bank = ""
    if bank is Bank.CUSTOM:
        custom_bank = _required_text(data.custom_bank, "custom_bank")

    return Session(
        id=None,
        date=data.date,
        start_time=data.start_time,
        end_time=data.end_time,
        courts=courts,
        location=location,
        max_slots=max_slots,
        payment_info=PaymentInfo(
            account_name=account_name,
            account_number=account_number,
            bank=bank,
            custom_bank=custom_bank,
        ),
    )


def book_slot(
    session: Session,
    slot_input: SlotInput,
    id_generator: Callable[[], int],
) -> Session:
    """Append a booking; slot times default to the session window.

    Raises:
        CapacityExceededError: If the session is already full.
        InvalidInputError: If the player name is blank or the id is taken.
    """
    slot_input = replace(
        slot_input,
        start_time=slot_input.start_time or session.start_time,
        end_time=slot_input.end_time or session.end_time,
    )
    slots = add_slot(session.slots, slot_input, id_generator, session.max_slots)
    return replace(session, slots=slots)


def cancel_slot(session: Session, slot_id: SlotId) -> Session:
    """Remove a booking along with any manual cost recorded for it."""
    if session.find_slot(slot_id) is None:
        return session
    slots = remove_slot(session.slots, slot_id)
    costs = session.individual_costs
    if costs is not None and slot_id in costs:
        costs = {key: value for key, value in costs.items() if key != slot_id}
    return replace(session, slots=slots, individual_costs=costs)


def finalize(
    session: Session,
    total_amount: Decimal,
    individual_costs: Mapping[SlotId, Decimal] | None = None,
) -> Session:
    """Commit the total and its split, marking the session paid.

    Without ``individual_costs`` the total is split evenly between the booked
    slots. With them, every entry must belong to a booked slot and the entries
    must add up to the total within one cent.

    Raises:
        InvalidInputError: If an amount is negative or not a number.
        AllocationMismatchError: If a manual split is for unknown slots or
            does not add up.
    """
    total = _amount(total_amount, "total_amount")

    if individual_costs is None:
        costs = even_split(total, session.slots)
        per_person = split_evenly(total, len(session.slots))
    else:
        costs = {key: _amount(value, "individual_costs") for key, value in individual_costs.items()}
        booked = {slot.id for slot in session.slots}
        unknown = sorted(key.value for key in costs if key not in booked)
        if unknown:
            raise AllocationMismatchError(
                f"Cost entries for slots not in this session: {', '.join(map(str, unknown))}"
            )
        validate_manual(costs, total)
        per_person = mean_cost(costs)

    return replace(
        session,
        total_amount=total,
        individual_costs=costs,
        cost_per_person=per_person,
        is_paid=True,
    )


def delete_session(session: Session) -> SessionId | None:
    """Id the store must remove; None for a Draft that was never stored."""
    return session.id


def payment_notices(session: Session) -> list[PaymentNotice]:
    """Who to tell what they owe, for slots that left an email address.

    Amounts come from the committed split; a slot without an entry owes
    nothing. Only a session with no split stored falls back to
    ``cost_per_person``.
    """
    notices = []
    for slot in session.slots:
        if not slot.email:
            continue
        if session.individual_costs is not None:
            amount = amount_for(session.individual_costs, slot.id)
        else:
            amount = session.cost_per_person or ZERO
        notices.append(PaymentNotice(player_name=slot.player_name, email=slot.email, amount=amount))
    return notices

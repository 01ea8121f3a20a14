"""Slot registry: append and remove bookings within a session.

Slots are kept in booking order. Both operations return a new tuple and
leave the input untouched.
"""

from collections.abc import Callable, Sequence

from bookings.domain.errors import CapacityExceededError, InvalidInputError
from bookings.domain.models import Slot, SlotInput
from bookings.domain.value_objects import SlotId


def add_slot(
    slots: Sequence[Slot],
    new_slot: SlotInput,
    id_generator: Callable[[], int],
    max_slots: int,
) -> tuple[Slot, ...]:
    """Append ``new_slot`` with an id drawn from ``id_generator``.

    Raises:
        CapacityExceededError: If ``slots`` already holds ``max_slots`` entries.
        InvalidInputError: If the player name is blank, the slot has no times,
            or the generated id is already taken.
    """
    if len(slots) >= max_slots:
        raise CapacityExceededError(max_slots)
    player_name = (new_slot.player_name or "").strip()
    if not player_name:
        raise InvalidInputError("player_name")
    if new_slot.start_time is None:
        raise InvalidInputError("start_time")
    if new_slot.end_time is None:
        raise InvalidInputError("end_time")

    slot_id = SlotId(id_generator())
    if any(slot.id == slot_id for slot in slots):
        raise InvalidInputError("slot_id", f"{slot_id} is already booked")

    slot = Slot(
        id=slot_id,
        player_name=player_name,
        email=(new_slot.email or "").strip(),
        start_time=new_slot.start_time,
        end_time=new_slot.end_time,
    )
    return (*slots, slot)


def remove_slot(slots: Sequence[Slot], slot_id: SlotId) -> tuple[Slot, ...]:
    """Drop the slot with ``slot_id``; unknown ids leave ``slots`` unchanged."""
    return tuple(slot for slot in slots if slot.id != slot_id)

"""Cost allocation: how a session's total is shared between its slots."""

from collections.abc import Mapping, Sequence
from decimal import Decimal

from bookings.domain.errors import AllocationMismatchError
from bookings.domain.models import Session, Slot
from bookings.domain.value_objects import ZERO, SlotId, split_evenly, sums_match


def even_split(total: Decimal, slots: Sequence[Slot]) -> dict[SlotId, Decimal]:
    """Give every slot the same share of ``total``."""
    share = split_evenly(total, len(slots))
    return {slot.id: share for slot in slots}


def amount_for(costs: Mapping[SlotId, Decimal] | None, slot_id: SlotId) -> Decimal:
    """Cost recorded for ``slot_id``; a slot with no entry owes nothing."""
    if costs is None or slot_id not in costs:
        return ZERO
    return costs[slot_id]


def allocation_difference(costs: Mapping[SlotId, Decimal], total: Decimal) -> Decimal:
    """How far the manual costs are over (positive) or under (negative) the total."""
    return sum(costs.values(), ZERO) - Decimal(total)


def manual_matches(costs: Mapping[SlotId, Decimal], total: Decimal) -> bool:
    """Whether a manual allocation may be committed as it stands.

    Callers re-check this after every edit to a single entry.
    """
    return sums_match(sum(costs.values(), ZERO), total)


def validate_manual(costs: Mapping[SlotId, Decimal], total: Decimal) -> None:
    """Raise AllocationMismatchError unless ``costs`` add up to ``total``."""
    if not manual_matches(costs, total):
        difference = allocation_difference(costs, total)
        direction = "Over" if difference > 0 else "Under"
        raise AllocationMismatchError(
            f"Individual costs must add up to the total amount "
            f"({direction} by {abs(difference):.2f})"
        )


def mean_cost(costs: Mapping[SlotId, Decimal]) -> Decimal:
    return split_evenly(sum(costs.values(), ZERO), len(costs))


def cost_per_person(session: Session, live_total: Decimal | None = None) -> Decimal:
    """Per-person cost to show for ``session``.

    A finalized session reports what was committed. An unpaid one previews the
    even split of ``live_total`` (the amount being typed in) or, failing that,
    of the session's stored total.
    """
    if session.is_paid:
        if session.cost_per_person is not None:
            return session.cost_per_person
        return mean_cost(session.individual_costs or {})

    total = session.total_amount if live_total is None else live_total
    if not total:
        return ZERO
    return split_evenly(total, len(session.slots))

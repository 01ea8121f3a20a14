"""Django ORM implementation of the SessionStore."""

import logging
from collections.abc import Mapping
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from django.core.exceptions import ValidationError
from django.db import transaction

from bookings import models
from bookings.domain import Bank, PaymentInfo, Session, SessionId, Slot, SlotId, Venue
from bookings.domain.errors import SessionNotFoundError
from bookings.stores.interfaces import SessionStore

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")

_SCALAR_FIELDS = ("date", "start_time", "end_time", "courts", "max_slots", "is_paid")


def _cents(amount: Decimal | None) -> Decimal | None:
    if amount is None:
        return None
    return Decimal(amount).quantize(CENT, rounding=ROUND_HALF_UP)


def costs_to_json(costs: Mapping[SlotId, Decimal] | None) -> dict[str, str] | None:
    if costs is None:
        return None
    return {str(slot_id.value): str(amount) for slot_id, amount in costs.items()}


def costs_from_json(data: Mapping[str, Any] | None) -> dict[SlotId, Decimal] | None:
    if data is None:
        return None
    return {SlotId(int(key)): Decimal(str(value)) for key, value in data.items()}


def to_domain(row: models.Session) -> Session:
    slots = tuple(
        Slot(
            id=SlotId(slot.slot_id),
            player_name=slot.player_name,
            email=slot.email,
            start_time=slot.start_time,
            end_time=slot.end_time,
        )
        for slot in row.slots.all()
    )
    return Session(
        id=SessionId(str(row.id)),
        date=row.date,
        start_time=row.start_time,
        end_time=row.end_time,
        courts=row.courts,
        location=Venue(row.location),
        max_slots=row.max_slots,
        payment_info=PaymentInfo(
            account_name=row.account_name,
            account_number=row.account_number,
            bank=Bank(row.bank),
            custom_bank=row.custom_bank,
        ),
        slots=slots,
        total_amount=Decimal(row.total_amount),
        is_paid=row.is_paid,
        individual_costs=costs_from_json(row.individual_costs),
        cost_per_person=row.cost_per_person,
    )


class DjangoSessionStore(SessionStore):
    """Relational session store using Django ORM."""

    def _queryset(self):
        return models.Session.objects.prefetch_related("slots")

    def _row(self, session_id: SessionId) -> models.Session:
        try:
            return models.Session.objects.get(pk=session_id.value)
        # Malformed UUIDs are as missing as well-formed unknown ones.
        except (models.Session.DoesNotExist, ValidationError):
            raise SessionNotFoundError(session_id.value) from None

    def list_sessions(self) -> list[Session]:
        return [to_domain(row) for row in self._queryset().order_by("date", "start_time")]

    def get_session(self, session_id: SessionId) -> Session | None:
        try:
            row = self._queryset().get(pk=session_id.value)
        except (models.Session.DoesNotExist, ValidationError):
            return None
        return to_domain(row)

    @transaction.atomic
    def create_session(self, session: Session) -> SessionId:
        row = models.Session(
            date=session.date,
            start_time=session.start_time,
            end_time=session.end_time,
            courts=session.courts,
            location=session.location.value,
            max_slots=session.max_slots,
            account_name=session.payment_info.account_name,
            account_number=session.payment_info.account_number,
            bank=session.payment_info.bank.value,
            custom_bank=session.payment_info.custom_bank,
            total_amount=_cents(session.total_amount),
            is_paid=session.is_paid,
            individual_costs=costs_to_json(session.individual_costs),
            cost_per_person=_cents(session.cost_per_person),
        )
        row.save()
        self._write_slots(row, session.slots)
        logger.debug("Stored session %s", row.id)
        return SessionId(str(row.id))

    @transaction.atomic
    def update_session(self, session_id: SessionId, fields: Mapping[str, Any]) -> None:
        row = self._row(session_id)
        for name, value in fields.items():
            if name in _SCALAR_FIELDS:
                setattr(row, name, value)
            elif name == "location":
                row.location = Venue(value).value
            elif name == "payment_info":
                row.account_name = value.account_name
                row.account_number = value.account_number
                row.bank = value.bank.value
                row.custom_bank = value.custom_bank
            elif name == "total_amount":
                row.total_amount = _cents(value)
            elif name == "cost_per_person":
                row.cost_per_person = _cents(value)
            elif name == "individual_costs":
                row.individual_costs = costs_to_json(value)
            elif name == "slots":
                self._write_slots(row, value)
            else:
                raise ValueError(f"Unknown session field: {name}")
        row.save()

    @transaction.atomic
    def delete_session(self, session_id: SessionId) -> None:
        self._row(session_id).delete()

    def _write_slots(self, row: models.Session, slots: tuple[Slot, ...]) -> None:
        row.slots.all().delete()
        models.Slot.objects.bulk_create(
            models.Slot(
                session=row,
                slot_id=slot.id.value,
                position=position,
                player_name=slot.player_name,
                email=slot.email,
                start_time=slot.start_time,
                end_time=slot.end_time,
            )
            for position, slot in enumerate(slots)
        )

"""Serializers for transforming domain models to API responses and back.

Output keys follow the session document shape (camelCase) that existing
clients read and write.
"""

from decimal import Decimal

from rest_framework import serializers

from bookings.domain import Session, SessionInput, SlotId, SlotInput, Venue
from bookings.domain.allocation import cost_per_person
from bookings.domain.value_objects import Bank, Money

AMOUNT_DIGITS = 12


def format_amount(amount: Decimal) -> str:
    return str(Money(amount))


class PaymentInfoSerializer(serializers.Serializer):
    """Serializer for PaymentInfo value object."""

    accountName = serializers.CharField(source="account_name")
    accountNumber = serializers.CharField(source="account_number")
    bank = serializers.CharField(source="bank.value")
    customBank = serializers.CharField(source="custom_bank")
    bankName = serializers.CharField(source="bank_name")


class SlotSerializer(serializers.Serializer):
    """Serializer for Slot domain model."""

    id = serializers.IntegerField(source="id.value")
    playerName = serializers.CharField(source="player_name")
    email = serializers.CharField()
    startTime = serializers.TimeField(source="start_time", format="%H:%M")
    endTime = serializers.TimeField(source="end_time", format="%H:%M")


class SessionSerializer(serializers.Serializer):
    """Serializer for Session domain model."""

    id = serializers.CharField(source="id.value")
    status = serializers.CharField(source="status.value")
    date = serializers.DateField()
    startTime = serializers.TimeField(source="start_time", format="%H:%M")
    endTime = serializers.TimeField(source="end_time", format="%H:%M")
    courts = serializers.IntegerField()
    location = serializers.CharField(source="location.value")
    locationLabel = serializers.CharField(source="location.label")
    maxSlots = serializers.IntegerField(source="max_slots")
    slotsRemaining = serializers.IntegerField(source="slots_remaining")
    isFull = serializers.BooleanField(source="is_full")
    paymentInfo = PaymentInfoSerializer(source="payment_info")
    slots = SlotSerializer(many=True)
    totalAmount = serializers.DecimalField(
        source="total_amount", max_digits=AMOUNT_DIGITS, decimal_places=2
    )
    isPaid = serializers.BooleanField(source="is_paid")
    individualCosts = serializers.SerializerMethodField()
    costPerPerson = serializers.SerializerMethodField()

    def get_individualCosts(self, session: Session) -> dict[str, str] | None:
        if session.individual_costs is None:
            return None
        return {
            str(slot_id.value): format_amount(amount)
            for slot_id, amount in session.individual_costs.items()
        }

    def get_costPerPerson(self, session: Session) -> str:
        return format_amount(cost_per_person(session))


class PaymentInfoInputSerializer(serializers.Serializer):
    accountName = serializers.CharField(source="account_name", allow_blank=True, default="")
    accountNumber = serializers.CharField(source="account_number", allow_blank=True, default="")
    bank = serializers.CharField(allow_blank=True, default=Bank.CBA.value)
    customBank = serializers.CharField(source="custom_bank", allow_blank=True, default="")


class SessionInputSerializer(serializers.Serializer):
    """Parses the create-session form.

    Only formats are checked here; which fields are required is decided by
    the lifecycle so every caller gets the same rules.
    """

    date = serializers.DateField(allow_null=True, default=None)
    startTime = serializers.TimeField(source="start_time", allow_null=True, default=None)
    endTime = serializers.TimeField(source="end_time", allow_null=True, default=None)
    courts = serializers.IntegerField(allow_null=True, default=1)
    maxSlots = serializers.IntegerField(source="max_slots", allow_null=True, default=4)
    location = serializers.CharField(allow_blank=True, default=Venue.GRANVILLE.value)
    paymentInfo = PaymentInfoInputSerializer(source="payment_info", required=False)

    def to_input(self) -> SessionInput:
        data = self.validated_data
        payment = data.get("payment_info", {})
        return SessionInput(
            date=data["date"],
            start_time=data["start_time"],
            end_time=data["end_time"],
            courts=data["courts"],
            max_slots=data["max_slots"],
            location=data["location"],
            account_name=payment.get("account_name"),
            account_number=payment.get("account_number"),
            bank=payment.get("bank", Bank.CBA.value),
            custom_bank=payment.get("custom_bank"),
        )


class SlotInputSerializer(serializers.Serializer):
    playerName = serializers.CharField(source="player_name", allow_blank=True, default="")
    email = serializers.EmailField(allow_blank=True, default="")
    startTime = serializers.TimeField(source="start_time", allow_null=True, default=None)
    endTime = serializers.TimeField(source="end_time", allow_null=True, default=None)

    def to_input(self) -> SlotInput:
        return SlotInput(**self.validated_data)


def _amount_field(**kwargs) -> serializers.DecimalField:
    return serializers.DecimalField(
        max_digits=AMOUNT_DIGITS, decimal_places=2, min_value=Decimal("0"), **kwargs
    )


class CostsInputMixin:
    """Turns the ``individualCosts`` object into a mapping keyed by SlotId."""

    def validate(self, attrs):
        costs = attrs.get("individual_costs")
        if costs is not None:
            try:
                attrs["individual_costs"] = {SlotId.from_string(key): value for key, value in costs.items()}
            except ValueError:
                raise serializers.ValidationError(
                    {"individualCosts": "Keys must be slot ids."}
                ) from None
        return attrs


class FinalizeSerializer(CostsInputMixin, serializers.Serializer):
    totalAmount = _amount_field(source="total_amount")
    individualCosts = serializers.DictField(
        source="individual_costs", child=_amount_field(), required=False, allow_null=True
    )


class AllocationCheckSerializer(CostsInputMixin, serializers.Serializer):
    totalAmount = _amount_field(source="total_amount")
    individualCosts = serializers.DictField(source="individual_costs", child=_amount_field())


class AllocationResultSerializer(serializers.Serializer):
    matches = serializers.BooleanField()
    total = serializers.DecimalField(max_digits=AMOUNT_DIGITS, decimal_places=2)
    allocated = serializers.DecimalField(max_digits=AMOUNT_DIGITS, decimal_places=2)
    difference = serializers.DecimalField(max_digits=AMOUNT_DIGITS, decimal_places=2)

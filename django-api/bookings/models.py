"""Django ORM models (persistence layer).

These models handle database concerns. Domain logic lives in domain/.
"""

import uuid

from django.db import models

from bookings.domain.value_objects import Bank, Venue


class Session(models.Model):
    """Persistence model for booking sessions."""

    VENUE_CHOICES = [(venue.value, venue.label) for venue in Venue]
    BANK_CHOICES = [(bank.value, bank.label) for bank in Bank]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    date = models.DateField()
    start_time = models.TimeField()
    end_time = models.TimeField()
    courts = models.PositiveSmallIntegerField(default=1)
    location = models.CharField(max_length=64, choices=VENUE_CHOICES, default=Venue.GRANVILLE.value)
    max_slots = models.PositiveIntegerField(default=4)
    account_name = models.CharField(max_length=255)
    account_number = models.CharField(max_length=64)
    bank = models.CharField(max_length=32, choices=BANK_CHOICES, default=Bank.CBA.value)
    custom_bank = models.CharField(max_length=255, blank=True, default="")
    total_amount = models.DecimalField(max_digits=10, decimal_places=2, default=0)
    is_paid = models.BooleanField(default=False)
    # {str(slot_id): str(amount)}; null until a split is committed.
    individual_costs = models.JSONField(blank=True, null=True)
    cost_per_person = models.DecimalField(max_digits=10, decimal_places=2, blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["date", "start_time"]
        indexes = [
            models.Index(fields=["date"], name="bookings_se_date_0c4d5b_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.location} - {self.date} {self.start_time}"


class Slot(models.Model):
    """Persistence model for a booked slot."""

    session = models.ForeignKey(Session, on_delete=models.CASCADE, related_name="slots")
    slot_id = models.BigIntegerField()
    position = models.PositiveIntegerField()
    player_name = models.CharField(max_length=255)
    email = models.EmailField(blank=True, default="")
    start_time = models.TimeField()
    end_time = models.TimeField()
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["position"]
        constraints = [
            models.UniqueConstraint(fields=["session", "slot_id"], name="unique_slot_per_session"),
        ]
        indexes = [
            models.Index(fields=["session", "position"], name="bookings_sl_session_3e1f0a_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.player_name} - {self.session}"

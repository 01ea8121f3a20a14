import uuid

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Session",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4, editable=False, primary_key=True, serialize=False
                    ),
                ),
                ("date", models.DateField()),
                ("start_time", models.TimeField()),
                ("end_time", models.TimeField()),
                ("courts", models.PositiveSmallIntegerField(default=1)),
                (
                    "location",
                    models.CharField(
                        choices=[
                            ("NBC Granville", "NBC Granville"),
                            ("NBC Yennora", "Badminton Worx Yennora"),
                        ],
                        default="NBC Granville",
                        max_length=64,
                    ),
                ),
                ("max_slots", models.PositiveIntegerField(default=4)),
                ("account_name", models.CharField(max_length=255)),
                ("account_number", models.CharField(max_length=64)),
                (
                    "bank",
                    models.CharField(
                        choices=[
                            ("CBA", "Commonwealth Bank (CBA)"),
                            ("Westpac", "Westpac"),
                            ("Custom", "Other (Custom)"),
                        ],
                        default="CBA",
                        max_length=32,
                    ),
                ),
                ("custom_bank", models.CharField(blank=True, default="", max_length=255)),
                (
                    "total_amount",
                    models.DecimalField(decimal_places=2, default=0, max_digits=10),
                ),
                ("is_paid", models.BooleanField(default=False)),
                ("individual_costs", models.JSONField(blank=True, null=True)),
                (
                    "cost_per_person",
                    models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["date", "start_time"],
                "indexes": [models.Index(fields=["date"], name="bookings_se_date_0c4d5b_idx")],
            },
        ),
        migrations.CreateModel(
            name="Slot",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True, primary_key=True, serialize=False, verbose_name="ID"
                    ),
                ),
                ("slot_id", models.BigIntegerField()),
                ("position", models.PositiveIntegerField()),
                ("player_name", models.CharField(max_length=255)),
                ("email", models.EmailField(blank=True, default="", max_length=254)),
                ("start_time", models.TimeField()),
                ("end_time", models.TimeField()),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "session",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="slots",
                        to="bookings.session",
                    ),
                ),
            ],
            options={
                "ordering": ["position"],
                "indexes": [
                    models.Index(fields=["session", "position"], name="bookings_sl_session_3e1f0a_idx")
                ],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("session", "slot_id"), name="unique_slot_per_session"
                    )
                ],
            },
        ),
    ]

import uuid

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Show",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("title", models.CharField(max_length=255)),
                ("starts_at", models.DateTimeField()),
                ("rows", models.PositiveSmallIntegerField()),
                ("cols", models.PositiveSmallIntegerField()),
                ("price", models.DecimalField(decimal_places=2, max_digits=12)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "db_table": "shows",
                "ordering": ["starts_at"],
                "indexes": [models.Index(fields=["starts_at"], name="shows_starts_at_idx")],
            },
        ),
        migrations.CreateModel(
            name="Seat",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("code", models.CharField(max_length=8)),
                (
                    "status",
                    models.CharField(
                        choices=[("available", "Available"), ("held", "Held"), ("sold", "Sold")],
                        default="available",
                        max_length=16,
                    ),
                ),
                ("held_by", models.CharField(blank=True, max_length=64, null=True)),
                ("hold_until", models.DateTimeField(blank=True, null=True)),
                ("buyer_id", models.CharField(blank=True, max_length=64, null=True)),
                (
                    "show",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="seats",
                        to="boxoffice.show",
                    ),
                ),
            ],
            options={
                "db_table": "seats",
                "indexes": [
                    models.Index(fields=["show", "status"], name="seats_show_status_idx"),
                    models.Index(fields=["show", "held_by"], name="seats_show_holder_idx"),
                ],
                "constraints": [
                    models.UniqueConstraint(fields=("show", "code"), name="unique_seat_per_show"),
                    models.CheckConstraint(
                        condition=models.Q(
                            models.Q(
                                ("status", "available"),
                                ("held_by__isnull", True),
                                ("hold_until__isnull", True),
                                ("buyer_id__isnull", True),
                            ),
                            models.Q(
                                ("status", "held"),
                                ("held_by__isnull", False),
                                ("buyer_id__isnull", True),
                            ),
                            models.Q(
                                ("status", "sold"),
                                ("held_by__isnull", True),
                                ("hold_until__isnull", True),
                                ("buyer_id__isnull", False),
                            ),
                            _connector="OR",
                        ),
                        name="seat_status_matches_owner",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="Order",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("user_id", models.CharField(max_length=64)),
                ("seats", models.JSONField(default=list)),
                ("amount", models.DecimalField(decimal_places=2, max_digits=12)),
                (
                    "receipt_kind",
                    models.CharField(choices=[("image", "Image"), ("text", "Text")], max_length=16),
                ),
                ("receipt_value", models.TextField()),
                (
                    "status",
                    models.CharField(
                        choices=[("pending", "Pending"), ("approved", "Approved"), ("rejected", "Rejected")],
                        default="pending",
                        max_length=16,
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("paid_at", models.DateTimeField(blank=True, null=True)),
                ("approver_id", models.CharField(blank=True, max_length=64, null=True)),
                (
                    "show",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="orders",
                        to="boxoffice.show",
                    ),
                ),
            ],
            options={
                "db_table": "orders",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["status", "-created_at"], name="orders_status_created_idx"),
                    models.Index(fields=["user_id"], name="orders_user_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="BuyerSession",
            fields=[
                ("user_id", models.CharField(max_length=64, primary_key=True, serialize=False)),
                (
                    "state",
                    models.CharField(
                        choices=[
                            ("picking_show", "Picking Show"),
                            ("picking_seats", "Picking Seats"),
                            ("waiting_receipt", "Waiting Receipt"),
                        ],
                        max_length=32,
                    ),
                ),
                ("seats", models.JSONField(default=list)),
                ("total", models.DecimalField(blank=True, decimal_places=2, max_digits=12, null=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "show",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="+",
                        to="boxoffice.show",
                    ),
                ),
            ],
            options={
                "db_table": "buyer_sessions",
            },
        ),
    ]

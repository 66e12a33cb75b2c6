"""Django ORM models (persistence layer).

These models handle database concerns. Domain logic lives in domain/models.py.
"""

import uuid

from django.db import models
from django.db.models import Q

from boxoffice.domain.value_objects import (
    OrderStatus,
    ReceiptKind,
    SeatStatus,
    SessionState,
)


def _choices(enum_cls) -> list[tuple[str, str]]:
    return [(member.value, member.name.replace("_", " ").title()) for member in enum_cls]


class Show(models.Model):
    """Persistence model for shows."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    title = models.CharField(max_length=255)
    starts_at = models.DateTimeField()
    rows = models.PositiveSmallIntegerField()
    cols = models.PositiveSmallIntegerField()
    price = models.DecimalField(max_digits=12, decimal_places=2)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "shows"
        ordering = ["starts_at"]
        indexes = [
            models.Index(fields=["starts_at"], name="shows_starts_at_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.title} - {self.starts_at}"


class Seat(models.Model):
    """Persistence model for seats.

    The check constraint mirrors the domain invariant: exactly one of
    free, held (holder, no buyer) or sold (buyer, no holder) at a time.
    """

    show = models.ForeignKey(Show, on_delete=models.CASCADE, related_name="seats")
    code = models.CharField(max_length=8)
    status = models.CharField(
        max_length=16,
        choices=_choices(SeatStatus),
        default=SeatStatus.AVAILABLE.value,
    )
    held_by = models.CharField(max_length=64, null=True, blank=True)
    hold_until = models.DateTimeField(null=True, blank=True)
    buyer_id = models.CharField(max_length=64, null=True, blank=True)

    class Meta:
        db_table = "seats"
        constraints = [
            models.UniqueConstraint(fields=["show", "code"], name="unique_seat_per_show"),
            models.CheckConstraint(
                condition=(
                    Q(
                        status=SeatStatus.AVAILABLE.value,
                        held_by__isnull=True,
                        hold_until__isnull=True,
                        buyer_id__isnull=True,
                    )
                    | Q(
                        status=SeatStatus.HELD.value,
                        held_by__isnull=False,
                        buyer_id__isnull=True,
                    )
                    | Q(
                        status=SeatStatus.SOLD.value,
                        held_by__isnull=True,
                        hold_until__isnull=True,
                        buyer_id__isnull=False,
                    )
                ),
                name="seat_status_matches_owner",
            ),
        ]
        indexes = [
            models.Index(fields=["show", "status"], name="seats_show_status_idx"),
            models.Index(fields=["show", "held_by"], name="seats_show_holder_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.code} ({self.status})"


class Order(models.Model):
    """Persistence model for orders. ``seats`` is an ordered JSON array of seat codes."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user_id = models.CharField(max_length=64)
    show = models.ForeignKey(Show, on_delete=models.CASCADE, related_name="orders")
    seats = models.JSONField(default=list)
    amount = models.DecimalField(max_digits=12, decimal_places=2)
    receipt_kind = models.CharField(max_length=16, choices=_choices(ReceiptKind))
    receipt_value = models.TextField()
    status = models.CharField(
        max_length=16,
        choices=_choices(OrderStatus),
        default=OrderStatus.PENDING.value,
    )
    created_at = models.DateTimeField(auto_now_add=True)
    paid_at = models.DateTimeField(null=True, blank=True)
    approver_id = models.CharField(max_length=64, null=True, blank=True)

    class Meta:
        db_table = "orders"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["status", "-created_at"], name="orders_status_created_idx"),
            models.Index(fields=["user_id"], name="orders_user_idx"),
        ]

    def __str__(self) -> str:
        return f"Order {self.id} ({self.status})"


class BuyerSession(models.Model):
    """Persistence model for per-buyer conversation state, one row per user."""

    user_id = models.CharField(max_length=64, primary_key=True)
    state = models.CharField(max_length=32, choices=_choices(SessionState))
    show = models.ForeignKey(
        Show,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="+",
    )
    seats = models.JSONField(default=list)
    total = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "buyer_sessions"

    def __str__(self) -> str:
        return f"{self.user_id}: {self.state}"

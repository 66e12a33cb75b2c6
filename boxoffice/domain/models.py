"""Domain models representing persisted state.

These are pure domain objects with no API input rules.
Django ORM models are in boxoffice/models.py (persistence layer).
"""

from dataclasses import dataclass
from datetime import datetime

from boxoffice.domain.value_objects import (
    Money,
    OrderId,
    OrderStatus,
    Receipt,
    SeatGrid,
    SeatStatus,
    SessionState,
    ShowId,
)


@dataclass(frozen=True)
class Show:
    """Domain representation of a Show."""

    id: ShowId
    title: str
    starts_at: datetime
    grid: SeatGrid
    price: Money
    created_at: datetime


@dataclass(frozen=True)
class Seat:
    """Domain representation of one seat of a show.

    ``held_by`` is set iff the seat is held, ``buyer_id`` iff it is sold.
    ``hold_until`` is None for a frozen hold.
    """

    show_id: ShowId
    code: str
    status: SeatStatus
    held_by: str | None = None
    hold_until: datetime | None = None
    buyer_id: str | None = None

    @property
    def is_frozen(self) -> bool:
        return self.status is SeatStatus.HELD and self.hold_until is None

    def is_expired(self, now: datetime) -> bool:
        return (
            self.status is SeatStatus.HELD
            and self.hold_until is not None
            and self.hold_until < now
        )


@dataclass(frozen=True)
class SeatCounts:
    """Seat totals per status for one show."""

    available: int = 0
    held: int = 0
    sold: int = 0

    @property
    def total(self) -> int:
        return self.available + self.held + self.sold


@dataclass(frozen=True)
class Order:
    """Domain representation of an Order."""

    id: OrderId
    user_id: str
    show_id: ShowId
    seats: tuple[str, ...]
    amount: Money
    receipt: Receipt
    status: OrderStatus
    created_at: datetime
    paid_at: datetime | None = None
    approver_id: str | None = None

    @property
    def is_pending(self) -> bool:
        return self.status is OrderStatus.PENDING


@dataclass(frozen=True)
class Settlement:
    """Result of an approve/reject call.

    ``applied`` is False when the order had already been settled; ``order``
    then carries the existing terminal status unchanged.
    """

    order: Order
    applied: bool


@dataclass(frozen=True)
class BuyerSession:
    """Per-buyer conversation state. Advisory only; seats are authoritative."""

    user_id: str
    state: SessionState
    show_id: ShowId | None = None
    seats: tuple[str, ...] = ()
    total: Money | None = None


@dataclass(frozen=True)
class Quote:
    """Frozen selection priced at the show's current unit price."""

    show: Show
    seats: tuple[str, ...]
    total: Money

"""Store interfaces (repository pattern).

Stores must be swappable and return domain models. Multi-step mutations run
inside ``UnitOfWork.atomic()``; row-locking reads (``lock_*``) are only valid
inside such a block.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from contextlib import AbstractContextManager
from datetime import datetime

from boxoffice.domain import (
    BuyerSession,
    Money,
    Order,
    OrderId,
    OrderStatus,
    Receipt,
    Seat,
    SeatCounts,
    SeatGrid,
    Show,
    ShowId,
)


class UnitOfWork(ABC):
    """Transaction boundary shared by every store."""

    @abstractmethod
    def atomic(self) -> AbstractContextManager[None]:
        """Open a transactional scope.

        Commits when the block exits normally and rolls back on any exception.
        Storage errors surface as StorageFailureError.
        """
        ...


class InventoryStore(ABC):
    """Interface for show and seat persistence operations."""

    @abstractmethod
    def list_shows(self) -> list[Show]:
        """Return all shows ordered by starts_at ascending."""
        ...

    @abstractmethod
    def get_show(self, show_id: ShowId) -> Show | None:
        """Return a show by ID, or None if not found."""
        ...

    @abstractmethod
    def create_show(
        self, title: str, starts_at: datetime, grid: SeatGrid, price: Money
    ) -> Show:
        """Insert a show and one available seat per grid cell."""
        ...

    @abstractmethod
    def update_price(self, show_id: ShowId, price: Money) -> Show | None:
        """Set the unit price. Returns None if the show does not exist."""
        ...

    @abstractmethod
    def list_seats(self, show_id: ShowId) -> list[Seat]:
        """Return every seat of a show in grid order."""
        ...

    @abstractmethod
    def count_seats(self, show_id: ShowId) -> SeatCounts:
        ...

    @abstractmethod
    def release_expired(
        self, show_id: ShowId, now: datetime, seat_code: str | None = None
    ) -> int:
        """Reset held seats whose expiry is before ``now`` to available.

        Frozen holds (no expiry) are left alone. Restricted to one seat when
        ``seat_code`` is given. Returns the number of seats released.
        """
        ...

    @abstractmethod
    def lock_seat(self, show_id: ShowId, seat_code: str) -> Seat | None:
        """Read a seat under an exclusive row lock, or None if absent."""
        ...

    @abstractmethod
    def hold_seat(
        self, show_id: ShowId, seat_code: str, user_id: str, until: datetime
    ) -> None:
        ...

    @abstractmethod
    def release_seat(self, show_id: ShowId, seat_code: str) -> None:
        ...

    @abstractmethod
    def held_seat_codes(self, show_id: ShowId, user_id: str) -> list[str]:
        """Return codes of seats held by ``user_id`` for a show, in grid order."""
        ...

    @abstractmethod
    def freeze_holds(self, show_id: ShowId, user_id: str) -> int:
        """Clear the expiry of every seat the user holds for a show."""
        ...

    @abstractmethod
    def lock_held_seats(
        self, show_id: ShowId, user_id: str, seat_codes: Sequence[str]
    ) -> list[Seat]:
        """Lock and return those of ``seat_codes`` still held by ``user_id``."""
        ...

    @abstractmethod
    def mark_sold(self, show_id: ShowId, seat_codes: Sequence[str], buyer_id: str) -> int:
        """Sell seats held by ``buyer_id``. Seats held by others or sold are untouched."""
        ...

    @abstractmethod
    def mark_available(
        self, show_id: ShowId, seat_codes: Sequence[str], holder_id: str
    ) -> int:
        """Release seats held by ``holder_id``. Seats held by others or sold are untouched."""
        ...


class OrderStore(ABC):
    """Interface for order persistence operations."""

    @abstractmethod
    def create_order(
        self,
        user_id: str,
        show_id: ShowId,
        seats: Sequence[str],
        amount: Money,
        receipt: Receipt,
    ) -> Order:
        """Insert a pending order."""
        ...

    @abstractmethod
    def get_order(self, order_id: OrderId) -> Order | None:
        ...

    @abstractmethod
    def lock_order(self, order_id: OrderId) -> Order | None:
        """Read an order under an exclusive row lock, or None if absent."""
        ...

    @abstractmethod
    def list_orders(self, status: OrderStatus | None, limit: int) -> list[Order]:
        """Return the most recent orders first, optionally filtered by status."""
        ...

    @abstractmethod
    def settle(
        self,
        order_id: OrderId,
        status: OrderStatus,
        approver_id: str,
        paid_at: datetime | None,
    ) -> Order:
        """Write the terminal status and settlement stamps of an order."""
        ...


class SessionStore(ABC):
    """Interface for buyer session persistence operations."""

    @abstractmethod
    def get_session(self, user_id: str) -> BuyerSession | None:
        ...

    @abstractmethod
    def save_session(self, session: BuyerSession) -> BuyerSession:
        """Insert or overwrite the single session row of ``session.user_id``."""
        ...

    @abstractmethod
    def delete_session(self, user_id: str) -> bool:
        """Delete a session. Returns True if a row was removed."""
        ...

"""Inventory service - shows and seat read paths, operator show management.

Services:
- Depend only on interfaces (stores)
- Validate domain invariants
- Perform orchestration and error mapping
- Return domain models or domain errors
"""

import logging
from datetime import datetime
from decimal import Decimal

from boxoffice.domain import Money, Seat, SeatCounts, SeatGrid, Show, ShowId
from boxoffice.domain.errors import InvalidShowInputError, ShowNotFoundError
from boxoffice.services.hold_service import HoldService
from boxoffice.services.parsing import (
    parse_datetime,
    parse_money,
    parse_positive_int,
    parse_show_id,
    parse_user_id,
)
from boxoffice.stores.interfaces import InventoryStore, UnitOfWork

logger = logging.getLogger(__name__)

MAX_TITLE_LENGTH = 255


class InventoryService:
    """Service for show catalog and seat inventory operations."""

    def __init__(self, store: InventoryStore, uow: UnitOfWork, holds: HoldService) -> None:
        self._store = store
        self._uow = uow
        self._holds = holds

    def list_shows(self) -> list[Show]:
        """Return all shows, soonest first."""
        return self._store.list_shows()

    def get_show(self, show_id: ShowId | str) -> Show:
        """Return a show by ID.

        Raises:
            InvalidShowIdError: If the show_id is not a valid UUID.
            ShowNotFoundError: If the show does not exist.
        """
        parsed = parse_show_id(show_id)
        show = self._store.get_show(parsed)
        if show is None:
            raise ShowNotFoundError(str(parsed))
        return show

    def seat_status_map(self, show_id: ShowId | str) -> dict[str, Seat]:
        """Return every seat of a show keyed by seat code, after releasing lapsed holds.

        Raises:
            InvalidShowIdError: If the show_id is not a valid UUID.
            ShowNotFoundError: If the show does not exist.
        """
        show = self.get_show(show_id)
        self._holds.reconcile_expired(show.id)
        return {seat.code: seat for seat in self._store.list_seats(show.id)}

    def seat_counts(self, show_id: ShowId | str) -> SeatCounts:
        """Return available/held/sold totals, after releasing lapsed holds."""
        show = self.get_show(show_id)
        self._holds.reconcile_expired(show.id)
        return self._store.count_seats(show.id)

    def held_seats(self, show_id: ShowId | str, user_id: str) -> list[str]:
        """Return the codes of seats a user currently holds for a show."""
        show = self.get_show(show_id)
        user = parse_user_id(user_id)
        self._holds.reconcile_expired(show.id)
        return self._store.held_seat_codes(show.id, user)

    def create_show(
        self,
        title: str,
        starts_at: datetime | str,
        rows: int | str,
        cols: int | str,
        price: Decimal | int | str,
    ) -> Show:
        """Create a show and seed one available seat per grid cell.

        Seats are named ``<RowLetter><ColumnNumber>`` with rows lettered from A.

        Raises:
            InvalidShowInputError: If any field is malformed. Nothing is written.
        """
        clean_title = title.strip() if isinstance(title, str) else ""
        if not clean_title:
            raise InvalidShowInputError("title", "must not be empty")
        if len(clean_title) > MAX_TITLE_LENGTH:
            raise InvalidShowInputError("title", f"at most {MAX_TITLE_LENGTH} characters")
        when = parse_datetime("starts_at", starts_at)
        row_count = parse_positive_int("rows", rows)
        col_count = parse_positive_int("cols", cols)
        try:
            grid = SeatGrid(rows=row_count, cols=col_count)
        except ValueError as exc:
            raise InvalidShowInputError("grid", str(exc)) from exc
        unit_price = parse_money("price", price)

        with self._uow.atomic():
            show = self._store.create_show(clean_title, when, grid, unit_price)

        logger.info(
            "Show created",
            extra={"show_id": str(show.id), "seats": grid.capacity},
        )
        return show

    def update_price(self, show_id: ShowId | str, price: Money | Decimal | int | str) -> Show:
        """Change a show's unit price. Existing orders keep their amounts.

        Raises:
            InvalidShowIdError: If the show_id is not a valid UUID.
            InvalidShowInputError: If the price is malformed or negative.
            ShowNotFoundError: If the show does not exist.
        """
        parsed = parse_show_id(show_id)
        unit_price = parse_money("price", price)
        with self._uow.atomic():
            show = self._store.update_price(parsed, unit_price)
        if show is None:
            raise ShowNotFoundError(str(parsed))
        logger.info("Show price updated", extra={"show_id": str(parsed), "price": str(unit_price)})
        return show

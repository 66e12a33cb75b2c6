"""Seat toggle engine: the per-seat available/held/sold state machine.

One toggle is one unit of work: reconcile the seat's lapsed hold, lock the
seat row, branch on its status, write. Two concurrent toggles on the same
seat serialise on the row lock, so at most one of them acquires it.
"""

import logging

from boxoffice.domain import Seat, SeatStatus, ShowId, ToggleResult
from boxoffice.domain.errors import (
    InvalidShowInputError,
    SeatNotFoundError,
    ShowNotFoundError,
)
from boxoffice.services.hold_service import HoldService
from boxoffice.services.parsing import parse_seat_code, parse_show_id, parse_user_id
from boxoffice.stores.interfaces import InventoryStore, UnitOfWork

logger = logging.getLogger(__name__)


class SeatService:
    """Service for selecting and deselecting seats."""

    def __init__(
        self,
        store: InventoryStore,
        uow: UnitOfWork,
        holds: HoldService,
        hold_minutes: int,
    ) -> None:
        self._store = store
        self._uow = uow
        self._holds = holds
        self._hold_minutes = hold_minutes

    def toggle(
        self,
        show_id: ShowId | str,
        seat_code: str,
        user_id: str,
        hold_minutes: int | None = None,
    ) -> ToggleResult:
        """Select or deselect a seat for a user.

        Returns SOLD or HELD_BY_OTHER without mutating when the seat is not
        the user's to take, AVAILABLE when the user's own hold was released,
        HELD when the seat was acquired.

        Raises:
            InvalidShowIdError: If the show_id is not a valid UUID.
            InvalidSeatCodeError: If the seat code is malformed.
            InvalidUserIdError: If the user_id is empty.
            InvalidShowInputError: If hold_minutes is below one.
            ShowNotFoundError: If the show does not exist.
            SeatNotFoundError: If the show has no such seat.
        """
        show = parse_show_id(show_id)
        code = parse_seat_code(seat_code)
        user = parse_user_id(user_id)
        minutes = self._hold_minutes if hold_minutes is None else hold_minutes
        if minutes < 1:
            raise InvalidShowInputError("hold_minutes", "must be at least 1")

        with self._uow.atomic():
            self._holds.reconcile_seat(show, code)
            seat = self._store.lock_seat(show, code)
            if seat is None:
                if self._store.get_show(show) is None:
                    raise ShowNotFoundError(str(show))
                raise SeatNotFoundError(str(show), code)
            result = self._apply(seat, user, minutes)

        logger.info(
            "Seat toggled",
            extra={
                "show_id": str(show),
                "seat_code": code,
                "user_id": user,
                "result": result.value,
            },
        )
        return result

    def _apply(self, seat: Seat, user_id: str, hold_minutes: int) -> ToggleResult:
        if seat.status is SeatStatus.SOLD:
            return ToggleResult.SOLD
        if seat.status is SeatStatus.HELD and seat.held_by != user_id:
            return ToggleResult.HELD_BY_OTHER
        if seat.status is SeatStatus.HELD:
            self._store.release_seat(seat.show_id, seat.code)
            return ToggleResult.AVAILABLE
        self._store.hold_seat(
            seat.show_id, seat.code, user_id, self._holds.expiry_for(hold_minutes)
        )
        return ToggleResult.HELD

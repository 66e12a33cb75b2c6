"""Session tracker - per-buyer conversation state.

A session is advisory: it mirrors where the buyer is in the flow so a front-end
can resume, but seat rows stay authoritative. Sessions never expire on their
own; settlement and restarts delete them.
"""

import logging
from collections.abc import Sequence
from decimal import Decimal

from boxoffice.domain import BuyerSession, Money, SessionState, ShowId
from boxoffice.domain.errors import InvalidSessionError, ShowNotFoundError
from boxoffice.services.parsing import (
    parse_money,
    parse_seat_codes,
    parse_show_id,
    parse_user_id,
)
from boxoffice.stores.interfaces import InventoryStore, SessionStore, UnitOfWork

logger = logging.getLogger(__name__)


class SessionService:
    """Service for buyer session get/set/clear."""

    def __init__(self, store: SessionStore, inventory: InventoryStore, uow: UnitOfWork) -> None:
        self._store = store
        self._inventory = inventory
        self._uow = uow

    def get(self, user_id: str) -> BuyerSession | None:
        return self._store.get_session(parse_user_id(user_id))

    def set(
        self,
        user_id: str,
        state: SessionState | str,
        show_id: ShowId | str | None = None,
        seats: Sequence[str] = (),
        total: Money | Decimal | int | str | None = None,
    ) -> BuyerSession:
        """Upsert the buyer's session.

        Raises:
            InvalidSessionError: If the state is unknown.
            InvalidShowIdError: If the show_id is not a valid UUID.
            ShowNotFoundError: If the show does not exist.
        """
        user = parse_user_id(user_id)
        try:
            parsed_state = SessionState(state)
        except ValueError as exc:
            raise InvalidSessionError(f"unknown state {state!r}") from exc
        show = parse_show_id(show_id) if show_id is not None else None
        codes = parse_seat_codes(seats)
        amount = parse_money("total", total) if total is not None else None

        with self._uow.atomic():
            if show is not None and self._inventory.get_show(show) is None:
                raise ShowNotFoundError(str(show))
            session = self._store.save_session(
                BuyerSession(
                    user_id=user,
                    state=parsed_state,
                    show_id=show,
                    seats=codes,
                    total=amount,
                )
            )
        logger.info(
            "Session saved",
            extra={"user_id": user, "state": parsed_state.value},
        )
        return session

    def clear(self, user_id: str) -> bool:
        """Delete the buyer's session. Returns True if one existed."""
        user = parse_user_id(user_id)
        with self._uow.atomic():
            return self._store.delete_session(user)

    def start_browsing(self, user_id: str) -> BuyerSession:
        return self.set(user_id, SessionState.PICKING_SHOW)

    def pick_show(self, user_id: str, show_id: ShowId | str) -> BuyerSession:
        return self.set(user_id, SessionState.PICKING_SEATS, show_id=show_id)

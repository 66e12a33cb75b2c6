"""Hold manager: decides when a seat hold has lapsed and reverts it.

There is no background sweeper. Every seat read and every toggle reconciles
first, so a stale hold is never observed past the caller's own latency.
Frozen holds (held with no expiry) are never reverted here.
"""

import logging
from collections.abc import Callable
from datetime import datetime, timedelta, timezone

from boxoffice.domain import ShowId
from boxoffice.services.parsing import parse_show_id
from boxoffice.stores.interfaces import InventoryStore, UnitOfWork

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class HoldService:
    """Service for seat hold expiry."""

    def __init__(
        self, store: InventoryStore, uow: UnitOfWork, clock: Clock = utc_now
    ) -> None:
        self._store = store
        self._uow = uow
        self._clock = clock

    def now(self) -> datetime:
        return self._clock()

    def expiry_for(self, hold_minutes: int) -> datetime:
        """Return the expiry timestamp of a hold taken now."""
        return self._clock() + timedelta(minutes=hold_minutes)

    def reconcile_expired(self, show_id: ShowId | str) -> int:
        """Release every lapsed hold of a show. Idempotent.

        Raises:
            InvalidShowIdError: If the show_id is not a valid UUID.
        """
        show = parse_show_id(show_id)
        with self._uow.atomic():
            released = self._store.release_expired(show, self._clock())
        if released:
            logger.info(
                "Released expired holds",
                extra={"show_id": str(show), "released": released},
            )
        return released

    def reconcile_seat(self, show_id: ShowId, seat_code: str) -> int:
        """Release one seat's lapsed hold.

        Must run inside the caller's unit of work so the release and the
        caller's subsequent lock form one atomic step.
        """
        released = self._store.release_expired(show_id, self._clock(), seat_code=seat_code)
        if released:
            logger.info(
                "Released expired hold",
                extra={"show_id": str(show_id), "seat_code": seat_code},
            )
        return released

"""Order lifecycle: freeze a selection, open a pending order, settle it.

Settlement is exactly-once. approve/reject lock the order row, re-read its
status and only a pending order is transitioned; seats, order status and the
buyer session are written in the same unit of work so a failure at any step
leaves the order pending and the seats untouched. Settlement only ever
writes seats still held by the order's buyer, so a stale order cannot sell
or release a seat that changed hands.
"""

import logging
from collections.abc import Sequence
from decimal import Decimal

from boxoffice.domain import (
    BuyerSession,
    Money,
    Order,
    OrderId,
    OrderStatus,
    Quote,
    Receipt,
    SessionState,
    Settlement,
    Show,
    ShowId,
)
from boxoffice.domain.errors import (
    InvalidReceiptError,
    InvalidShowInputError,
    NoPendingSelectionError,
    NoSeatsHeldError,
    OrderNotFoundError,
    SeatsNotHeldError,
    ShowNotFoundError,
)
from boxoffice.services.hold_service import HoldService
from boxoffice.services.parsing import (
    parse_money,
    parse_order_id,
    parse_seat_codes,
    parse_show_id,
    parse_user_id,
)
from boxoffice.stores.interfaces import (
    InventoryStore,
    OrderStore,
    SessionStore,
    UnitOfWork,
)

logger = logging.getLogger(__name__)

DEFAULT_ORDER_LIMIT = 50


class OrderService:
    """Service for order creation and settlement."""

    def __init__(
        self,
        inventory: InventoryStore,
        orders: OrderStore,
        sessions: SessionStore,
        uow: UnitOfWork,
        holds: HoldService,
    ) -> None:
        self._inventory = inventory
        self._orders = orders
        self._sessions = sessions
        self._uow = uow
        self._holds = holds

    def freeze(self, show_id: ShowId | str, user_id: str) -> int:
        """Stop the user's holds on a show from expiring. Status stays held.

        Returns the number of seats frozen.
        """
        show = parse_show_id(show_id)
        user = parse_user_id(user_id)
        with self._uow.atomic():
            frozen = self._inventory.freeze_holds(show, user)
        logger.info(
            "Holds frozen",
            extra={"show_id": str(show), "user_id": user, "seats": frozen},
        )
        return frozen

    def confirm_selection(self, show_id: ShowId | str, user_id: str) -> Quote:
        """Freeze the user's held seats and quote them at the current price.

        The buyer session moves to waiting_receipt with the seats and total.

        Raises:
            InvalidShowIdError: If the show_id is not a valid UUID.
            ShowNotFoundError: If the show does not exist.
            NoSeatsHeldError: If the user holds no seat for the show.
            InvalidShowInputError: If the quoted total exceeds the largest storable amount.
        """
        parsed = parse_show_id(show_id)
        user = parse_user_id(user_id)
        self._holds.reconcile_expired(parsed)

        with self._uow.atomic():
            show = self._require_show(parsed)
            seats = tuple(self._inventory.held_seat_codes(show.id, user))
            if not seats:
                raise NoSeatsHeldError(user)
            total = parse_money("total", show.price.times(len(seats)).amount)
            self._inventory.freeze_holds(show.id, user)
            self._sessions.save_session(
                BuyerSession(
                    user_id=user,
                    state=SessionState.WAITING_RECEIPT,
                    show_id=show.id,
                    seats=seats,
                    total=total,
                )
            )

        logger.info(
            "Selection confirmed",
            extra={"show_id": str(show.id), "user_id": user, "seats": list(seats), "total": str(total)},
        )
        return Quote(show=show, seats=seats, total=total)

    def create_order(
        self,
        user_id: str,
        show_id: ShowId | str,
        seats: Sequence[str],
        amount: Money | Decimal | int | str,
        receipt: Receipt,
    ) -> Order:
        """Open a pending order. Seat rows are not touched.

        The caller is responsible for ``seats`` being held and frozen by
        ``user_id``.

        Raises:
            InvalidShowIdError: If the show_id is not a valid UUID.
            InvalidSeatCodeError: If a seat code is malformed.
            InvalidShowInputError: If the seat list is empty or the amount is malformed.
            InvalidReceiptError: If no receipt is given.
            ShowNotFoundError: If the show does not exist.
        """
        user = parse_user_id(user_id)
        show = parse_show_id(show_id)
        codes = parse_seat_codes(seats)
        if not codes:
            raise InvalidShowInputError("seats", "at least one seat is required")
        total = parse_money("amount", amount)
        if not isinstance(receipt, Receipt):
            raise InvalidReceiptError("missing receipt")

        with self._uow.atomic():
            self._require_show(show)
            order = self._orders.create_order(user, show, codes, total, receipt)

        logger.info(
            "Order created",
            extra={
                "order_id": str(order.id),
                "user_id": user,
                "show_id": str(show),
                "seats": list(codes),
                "amount": str(total),
            },
        )
        return order

    def submit_receipt(self, user_id: str, receipt: Receipt) -> Order:
        """Turn the user's confirmed selection into a pending order.

        Every seat of the selection must still be held and frozen by the user;
        the seats are locked while the order is written. The session is cleared
        in the same unit of work, so a repeated receipt cannot open a second order.

        Raises:
            NoPendingSelectionError: If the user has no selection waiting for a receipt,
                or a seat of it is no longer frozen for the user.
        """
        user = parse_user_id(user_id)
        with self._uow.atomic():
            session = self._sessions.get_session(user)
            if (
                session is None
                or session.state is not SessionState.WAITING_RECEIPT
                or session.show_id is None
                or not session.seats
                or session.total is None
            ):
                raise NoPendingSelectionError(user)
            frozen = {
                seat.code
                for seat in self._inventory.lock_held_seats(session.show_id, user, session.seats)
                if seat.is_frozen
            }
            if any(code not in frozen for code in session.seats):
                raise NoPendingSelectionError(user)
            order = self.create_order(user, session.show_id, session.seats, session.total, receipt)
            self._sessions.delete_session(user)
        return order

    def approve(self, order_id: OrderId | str, approver_id: str) -> Settlement:
        """Approve a pending order: its seats become sold to the buyer.

        Raises:
            InvalidOrderIdError: If the order_id is not a valid UUID.
            OrderNotFoundError: If the order does not exist.
            SeatsNotHeldError: If the buyer no longer holds every seat of the order.
        """
        return self._settle(order_id, approver_id, OrderStatus.APPROVED)

    def reject(self, order_id: OrderId | str, approver_id: str) -> Settlement:
        """Reject a pending order: seats the buyer still holds return to available.

        Raises:
            InvalidOrderIdError: If the order_id is not a valid UUID.
            OrderNotFoundError: If the order does not exist.
        """
        return self._settle(order_id, approver_id, OrderStatus.REJECTED)

    def get_order(self, order_id: OrderId | str) -> Order:
        """Return an order by ID.

        Raises:
            InvalidOrderIdError: If the order_id is not a valid UUID.
            OrderNotFoundError: If the order does not exist.
        """
        parsed = parse_order_id(order_id)
        order = self._orders.get_order(parsed)
        if order is None:
            raise OrderNotFoundError(str(parsed))
        return order

    def list_orders(
        self, status: OrderStatus | None = None, limit: int = DEFAULT_ORDER_LIMIT
    ) -> list[Order]:
        """Return the most recent orders, optionally only those with ``status``."""
        return self._orders.list_orders(status, max(1, limit))

    def _settle(
        self, order_id: OrderId | str, approver_id: str, outcome: OrderStatus
    ) -> Settlement:
        parsed = parse_order_id(order_id)
        approver = parse_user_id(approver_id)

        with self._uow.atomic():
            order = self._orders.lock_order(parsed)
            if order is None:
                raise OrderNotFoundError(str(parsed))
            if not order.is_pending:
                logger.info(
                    "Order already settled",
                    extra={"order_id": str(parsed), "status": order.status.value},
                )
                return Settlement(order=order, applied=False)

            held = self._inventory.lock_held_seats(order.show_id, order.user_id, order.seats)
            if outcome is OrderStatus.APPROVED:
                paid_at = self._holds.now()
                owned = {seat.code for seat in held if not seat.is_expired(paid_at)}
                missing = [code for code in order.seats if code not in owned]
                if missing:
                    raise SeatsNotHeldError(str(parsed), missing)
                self._inventory.mark_sold(order.show_id, order.seats, order.user_id)
            else:
                self._inventory.mark_available(
                    order.show_id, [seat.code for seat in held], order.user_id
                )
                paid_at = None
            settled = self._orders.settle(parsed, outcome, approver, paid_at)
            self._sessions.delete_session(order.user_id)

        logger.info(
            "Order settled",
            extra={
                "order_id": str(parsed),
                "status": settled.status.value,
                "approver_id": approver,
                "seats": list(settled.seats),
            },
        )
        return Settlement(order=settled, applied=True)

    def _require_show(self, show_id: ShowId) -> Show:
        show = self._inventory.get_show(show_id)
        if show is None:
            raise ShowNotFoundError(str(show_id))
        return show

"""Unit tests for the services against mocked stores.

These test validation and domain error mapping without a database.
Run with: pytest tests/test_services.py -v
"""

from contextlib import nullcontext
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from unittest.mock import MagicMock, Mock
from uuid import uuid4

import pytest

from boxoffice.domain import (
    BuyerSession,
    Money,
    Order,
    OrderId,
    OrderStatus,
    Receipt,
    Seat,
    SeatGrid,
    SeatStatus,
    SessionState,
    Show,
    ShowId,
    ToggleResult,
)
from boxoffice.domain.errors import (
    InvalidSeatCodeError,
    InvalidShowIdError,
    InvalidShowInputError,
    InvalidUserIdError,
    NoPendingSelectionError,
    NoSeatsHeldError,
    OrderNotFoundError,
    SeatNotFoundError,
    SeatsNotHeldError,
    ShowNotFoundError,
)
from boxoffice.services.hold_service import HoldService
from boxoffice.services.inventory_service import InventoryService
from boxoffice.services.order_service import OrderService
from boxoffice.services.seat_service import SeatService
from boxoffice.stores.interfaces import (
    InventoryStore,
    OrderStore,
    SessionStore,
    UnitOfWork,
)

NOW = datetime(2026, 3, 1, 20, 0, tzinfo=timezone.utc)
SHOW_ID = ShowId(uuid4())


def _show() -> Show:
    return Show(
        id=SHOW_ID,
        title="Hamlet",
        starts_at=NOW + timedelta(days=1),
        grid=SeatGrid(rows=2, cols=2),
        price=Money("12.50"),
        created_at=NOW,
    )


def _frozen(code: str, user_id: str = "u1") -> Seat:
    return Seat(show_id=SHOW_ID, code=code, status=SeatStatus.HELD, held_by=user_id)


def _order(status: OrderStatus) -> Order:
    return Order(
        id=OrderId(uuid4()),
        user_id="u1",
        show_id=SHOW_ID,
        seats=("A1", "A2"),
        amount=Money("25.00"),
        receipt=Receipt.text("paid"),
        status=status,
        created_at=NOW,
    )


@pytest.fixture
def inventory_store():
    return MagicMock(spec=InventoryStore)


@pytest.fixture
def order_store():
    return MagicMock(spec=OrderStore)


@pytest.fixture
def session_store():
    return MagicMock(spec=SessionStore)


@pytest.fixture
def uow():
    unit = MagicMock(spec=UnitOfWork)
    unit.atomic.return_value = nullcontext()
    return unit


@pytest.fixture
def holds(inventory_store, uow):
    inventory_store.release_expired.return_value = 0
    return HoldService(inventory_store, uow, clock=lambda: NOW)


class TestInventoryService:
    """Tests for InventoryService."""

    def test_get_show_invalid_id_raises_error(self, inventory_store, uow, holds):
        """get_show raises InvalidShowIdError for malformed UUID."""
        service = InventoryService(inventory_store, uow, holds)
        with pytest.raises(InvalidShowIdError):
            service.get_show("not-a-uuid")
        inventory_store.get_show.assert_not_called()

    def test_get_show_not_found_raises_error(self, inventory_store, uow, holds):
        """get_show raises ShowNotFoundError when store returns None."""
        inventory_store.get_show.return_value = None
        service = InventoryService(inventory_store, uow, holds)
        with pytest.raises(ShowNotFoundError):
            service.get_show(str(SHOW_ID))

    @pytest.mark.parametrize(
        "overrides",
        [
            {"title": "  "},
            {"rows": 27},
            {"rows": 0},
            {"cols": "x"},
            {"price": "-1"},
            {"price": "1.005"},
            {"starts_at": "tomorrow"},
        ],
    )
    def test_create_show_rejects_invalid_input(self, inventory_store, uow, holds, overrides):
        """create_show validates every field before writing anything."""
        fields = {
            "title": "Hamlet",
            "starts_at": "2026-03-02T19:30:00",
            "rows": 2,
            "cols": 2,
            "price": "12.50",
        }
        fields.update(overrides)
        service = InventoryService(inventory_store, uow, holds)
        with pytest.raises(InvalidShowInputError):
            service.create_show(**fields)
        inventory_store.create_show.assert_not_called()

    def test_create_show_naive_start_is_utc(self, inventory_store, uow, holds):
        """A start time without offset is stored as UTC."""
        inventory_store.create_show.return_value = _show()
        service = InventoryService(inventory_store, uow, holds)
        service.create_show("Hamlet", "2026-03-02T19:30:00", "2", "2", "12.50")
        title, starts_at, grid, price = inventory_store.create_show.call_args.args
        assert title == "Hamlet"
        assert starts_at == datetime(2026, 3, 2, 19, 30, tzinfo=timezone.utc)
        assert grid == SeatGrid(rows=2, cols=2)
        assert price == Money(Decimal("12.50"))

    def test_update_price_not_found_raises_error(self, inventory_store, uow, holds):
        """update_price raises ShowNotFoundError when no row was updated."""
        inventory_store.update_price.return_value = None
        service = InventoryService(inventory_store, uow, holds)
        with pytest.raises(ShowNotFoundError):
            service.update_price(str(SHOW_ID), "9.00")


class TestSeatService:
    """Tests for SeatService state machine branches."""

    @pytest.fixture
    def service(self, inventory_store, uow, holds):
        return SeatService(inventory_store, uow, holds, hold_minutes=10)

    def _seat(self, status, held_by=None, buyer_id=None):
        return Seat(
            show_id=SHOW_ID,
            code="A1",
            status=status,
            held_by=held_by,
            hold_until=NOW + timedelta(minutes=5) if held_by else None,
            buyer_id=buyer_id,
        )

    def test_sold_seat_is_not_mutated(self, service, inventory_store):
        """Toggling a sold seat returns SOLD and writes nothing."""
        inventory_store.lock_seat.return_value = self._seat(SeatStatus.SOLD, buyer_id="u9")
        assert service.toggle(SHOW_ID, "A1", "u1") is ToggleResult.SOLD
        inventory_store.hold_seat.assert_not_called()
        inventory_store.release_seat.assert_not_called()

    def test_seat_held_by_other_is_not_mutated(self, service, inventory_store):
        """Toggling another user's hold returns HELD_BY_OTHER and writes nothing."""
        inventory_store.lock_seat.return_value = self._seat(SeatStatus.HELD, held_by="u2")
        assert service.toggle(SHOW_ID, "A1", "u1") is ToggleResult.HELD_BY_OTHER
        inventory_store.hold_seat.assert_not_called()
        inventory_store.release_seat.assert_not_called()

    def test_own_hold_is_released(self, service, inventory_store):
        """Toggling the user's own hold releases it."""
        inventory_store.lock_seat.return_value = self._seat(SeatStatus.HELD, held_by="u1")
        assert service.toggle(SHOW_ID, "a1", "u1") is ToggleResult.AVAILABLE
        inventory_store.release_seat.assert_called_once_with(SHOW_ID, "A1")

    def test_available_seat_is_held_until_expiry(self, service, inventory_store):
        """Toggling an available seat holds it for hold_minutes from now."""
        inventory_store.lock_seat.return_value = self._seat(SeatStatus.AVAILABLE)
        assert service.toggle(SHOW_ID, "A1", "u1", hold_minutes=3) is ToggleResult.HELD
        inventory_store.hold_seat.assert_called_once_with(
            SHOW_ID, "A1", "u1", NOW + timedelta(minutes=3)
        )

    def test_toggle_reconciles_seat_before_locking(self, service, inventory_store):
        """Toggle releases the seat's lapsed hold before reading it."""
        inventory_store.lock_seat.return_value = self._seat(SeatStatus.AVAILABLE)
        service.toggle(SHOW_ID, "A1", "u1")
        inventory_store.release_expired.assert_called_once_with(SHOW_ID, NOW, seat_code="A1")

    def test_toggle_locks_seat_before_holding(self, service, inventory_store):
        """The seat row is locked before the hold is written."""
        inventory_store.lock_seat.return_value = self._seat(SeatStatus.AVAILABLE)
        calls = Mock()
        calls.attach_mock(inventory_store, "inventory")
        service.toggle(SHOW_ID, "A1", "u1")
        names = [call[0] for call in calls.mock_calls]
        assert names == [
            "inventory.release_expired",
            "inventory.lock_seat",
            "inventory.hold_seat",
        ]

    def test_unknown_seat_raises_seat_not_found(self, service, inventory_store):
        """A missing seat on an existing show raises SeatNotFoundError."""
        inventory_store.lock_seat.return_value = None
        inventory_store.get_show.return_value = _show()
        with pytest.raises(SeatNotFoundError):
            service.toggle(SHOW_ID, "Z9", "u1")

    def test_unknown_show_raises_show_not_found(self, service, inventory_store):
        """A missing show raises ShowNotFoundError."""
        inventory_store.lock_seat.return_value = None
        inventory_store.get_show.return_value = None
        with pytest.raises(ShowNotFoundError):
            service.toggle(SHOW_ID, "A1", "u1")

    def test_malformed_seat_code_touches_nothing(self, service, inventory_store, uow):
        """A malformed seat code is rejected before the unit of work opens."""
        with pytest.raises(InvalidSeatCodeError):
            service.toggle(SHOW_ID, "1A", "u1")
        uow.atomic.assert_not_called()

    def test_blank_user_rejected(self, service, uow):
        """An empty user id is rejected."""
        with pytest.raises(InvalidUserIdError):
            service.toggle(SHOW_ID, "A1", "  ")
        uow.atomic.assert_not_called()

    def test_non_positive_hold_minutes_rejected(self, service, uow):
        """hold_minutes below one is a validation error."""
        with pytest.raises(InvalidShowInputError):
            service.toggle(SHOW_ID, "A1", "u1", hold_minutes=0)
        uow.atomic.assert_not_called()


class TestOrderService:
    """Tests for OrderService."""

    @pytest.fixture
    def service(self, inventory_store, order_store, session_store, uow, holds):
        return OrderService(inventory_store, order_store, session_store, uow, holds)

    def test_approve_not_found_raises_error(self, service, order_store):
        """approve raises OrderNotFoundError when the order does not exist."""
        order_store.lock_order.return_value = None
        with pytest.raises(OrderNotFoundError):
            service.approve(str(uuid4()), "op")

    def test_settled_order_is_returned_unchanged(
        self, service, order_store, inventory_store, session_store
    ):
        """A second settlement reports applied=False and writes nothing."""
        approved = _order(OrderStatus.APPROVED)
        order_store.lock_order.return_value = approved
        settlement = service.reject(approved.id, "op")
        assert settlement.applied is False
        assert settlement.order is approved
        inventory_store.mark_available.assert_not_called()
        order_store.settle.assert_not_called()
        session_store.delete_session.assert_not_called()

    def test_approve_stamps_paid_at_from_clock(
        self, service, order_store, inventory_store, session_store
    ):
        """Approve sells the seats and stamps the settlement time."""
        pending = _order(OrderStatus.PENDING)
        order_store.lock_order.return_value = pending
        order_store.settle.return_value = pending
        inventory_store.lock_held_seats.return_value = [_frozen("A1"), _frozen("A2")]
        settlement = service.approve(pending.id, "op")
        assert settlement.applied is True
        inventory_store.mark_sold.assert_called_once_with(SHOW_ID, ("A1", "A2"), "u1")
        order_store.settle.assert_called_once_with(pending.id, OrderStatus.APPROVED, "op", NOW)
        session_store.delete_session.assert_called_once_with("u1")

    def test_confirm_without_holds_raises_error(self, service, inventory_store, session_store):
        """confirm_selection raises NoSeatsHeldError and freezes nothing."""
        inventory_store.get_show.return_value = _show()
        inventory_store.held_seat_codes.return_value = []
        with pytest.raises(NoSeatsHeldError):
            service.confirm_selection(SHOW_ID, "u1")
        inventory_store.freeze_holds.assert_not_called()
        session_store.save_session.assert_not_called()

    def test_create_order_requires_seats(self, service, order_store):
        """create_order rejects an empty seat list."""
        with pytest.raises(InvalidShowInputError):
            service.create_order("u1", SHOW_ID, [], "10.00", Receipt.text("paid"))
        order_store.create_order.assert_not_called()

    def test_settle_locks_order_before_any_write(
        self, service, order_store, inventory_store, session_store
    ):
        """The order row is locked before seats, status or session are written."""
        pending = _order(OrderStatus.PENDING)
        order_store.lock_order.return_value = pending
        order_store.settle.return_value = pending
        inventory_store.lock_held_seats.return_value = [_frozen("A1"), _frozen("A2")]
        calls = Mock()
        calls.attach_mock(order_store, "orders")
        calls.attach_mock(inventory_store, "inventory")
        calls.attach_mock(session_store, "sessions")

        service.approve(pending.id, "op")

        names = [call[0] for call in calls.mock_calls]
        assert names == [
            "orders.lock_order",
            "inventory.lock_held_seats",
            "inventory.mark_sold",
            "orders.settle",
            "sessions.delete_session",
        ]

    def test_second_approver_writes_nothing(
        self, service, order_store, inventory_store, session_store
    ):
        """A caller that locks an already approved order makes no writes."""
        order_store.lock_order.return_value = _order(OrderStatus.APPROVED)
        settlement = service.approve(uuid4(), "op2")
        assert settlement.applied is False
        inventory_store.lock_held_seats.assert_not_called()
        inventory_store.mark_sold.assert_not_called()
        inventory_store.mark_available.assert_not_called()
        order_store.settle.assert_not_called()
        session_store.delete_session.assert_not_called()

    def test_approve_with_lost_seat_raises_error(self, service, order_store, inventory_store):
        """Approve refuses an order whose buyer no longer holds a seat."""
        order_store.lock_order.return_value = _order(OrderStatus.PENDING)
        inventory_store.lock_held_seats.return_value = [_frozen("A1")]
        with pytest.raises(SeatsNotHeldError) as excinfo:
            service.approve(uuid4(), "op")
        assert excinfo.value.seat_codes == ["A2"]
        inventory_store.mark_sold.assert_not_called()
        order_store.settle.assert_not_called()

    def test_reject_releases_only_seats_still_held(self, service, order_store, inventory_store):
        """Reject frees the buyer's remaining holds and nothing else."""
        pending = _order(OrderStatus.PENDING)
        order_store.lock_order.return_value = pending
        order_store.settle.return_value = pending
        inventory_store.lock_held_seats.return_value = [_frozen("A2")]
        service.reject(pending.id, "op")
        inventory_store.mark_available.assert_called_once_with(SHOW_ID, ["A2"], "u1")

    def test_confirm_total_above_limit_raises_error(self, service, inventory_store, session_store):
        """A quote whose total cannot be stored is refused before freezing."""
        expensive = Show(
            id=SHOW_ID,
            title="Gala",
            starts_at=NOW,
            grid=SeatGrid(rows=1, cols=2),
            price=Money("9999999999.99"),
            created_at=NOW,
        )
        inventory_store.get_show.return_value = expensive
        inventory_store.held_seat_codes.return_value = ["A1", "A2"]
        with pytest.raises(InvalidShowInputError):
            service.confirm_selection(SHOW_ID, "u1")
        inventory_store.freeze_holds.assert_not_called()
        session_store.save_session.assert_not_called()

    def test_receipt_for_unfrozen_seat_is_rejected(
        self, service, inventory_store, order_store, session_store
    ):
        """submit_receipt refuses a selection whose seats are no longer frozen for the buyer."""
        session_store.get_session.return_value = BuyerSession(
            user_id="u1",
            state=SessionState.WAITING_RECEIPT,
            show_id=SHOW_ID,
            seats=("A1", "A2"),
            total=Money("25.00"),
        )
        inventory_store.lock_held_seats.return_value = [_frozen("A1")]
        with pytest.raises(NoPendingSelectionError):
            service.submit_receipt("u1", Receipt.text("paid"))
        order_store.create_order.assert_not_called()
        session_store.delete_session.assert_not_called()

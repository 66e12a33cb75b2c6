"""Django ORM implementation of the box office stores."""

import logging
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from datetime import datetime

from django.db import DatabaseError, transaction
from django.db.models import Count

from boxoffice import models as orm
from boxoffice.domain import (
    BuyerSession,
    Money,
    Order,
    OrderId,
    OrderStatus,
    Receipt,
    ReceiptKind,
    Seat,
    SeatCounts,
    SeatGrid,
    SeatStatus,
    SessionState,
    Show,
    ShowId,
)
from boxoffice.domain.errors import StorageFailureError
from boxoffice.domain.value_objects import seat_sort_key
from boxoffice.stores.interfaces import (
    InventoryStore,
    OrderStore,
    SessionStore,
    UnitOfWork,
)

logger = logging.getLogger(__name__)

_FREE = {"status": SeatStatus.AVAILABLE.value, "held_by": None, "hold_until": None}


def _to_show(row: orm.Show) -> Show:
    return Show(
        id=ShowId(row.id),
        title=row.title,
        starts_at=row.starts_at,
        grid=SeatGrid(rows=row.rows, cols=row.cols),
        price=Money(row.price),
        created_at=row.created_at,
    )


def _to_seat(row: orm.Seat) -> Seat:
    return Seat(
        show_id=ShowId(row.show_id),
        code=row.code,
        status=SeatStatus(row.status),
        held_by=row.held_by,
        hold_until=row.hold_until,
        buyer_id=row.buyer_id,
    )


def _to_order(row: orm.Order) -> Order:
    return Order(
        id=OrderId(row.id),
        user_id=row.user_id,
        show_id=ShowId(row.show_id),
        seats=tuple(row.seats),
        amount=Money(row.amount),
        receipt=Receipt(kind=ReceiptKind(row.receipt_kind), value=row.receipt_value),
        status=OrderStatus(row.status),
        created_at=row.created_at,
        paid_at=row.paid_at,
        approver_id=row.approver_id,
    )


def _to_session(row: orm.BuyerSession) -> BuyerSession:
    return BuyerSession(
        user_id=row.user_id,
        state=SessionState(row.state),
        show_id=ShowId(row.show_id) if row.show_id else None,
        seats=tuple(row.seats or ()),
        total=Money(row.total) if row.total is not None else None,
    )


class DjangoUnitOfWork(UnitOfWork):
    """Unit of work over ``transaction.atomic`` on the default database."""

    @contextmanager
    def atomic(self) -> Iterator[None]:
        try:
            with transaction.atomic():
                yield
        except DatabaseError as exc:
            logger.exception("Unit of work rolled back after storage error")
            raise StorageFailureError() from exc


class DjangoInventoryStore(InventoryStore):
    """Show and seat store backed by the Django ORM."""

    def list_shows(self) -> list[Show]:
        return [_to_show(row) for row in orm.Show.objects.order_by("starts_at")]

    def get_show(self, show_id: ShowId) -> Show | None:
        row = orm.Show.objects.filter(pk=show_id.value).first()
        return _to_show(row) if row else None

    def create_show(
        self, title: str, starts_at: datetime, grid: SeatGrid, price: Money
    ) -> Show:
        row = orm.Show.objects.create(
            title=title,
            starts_at=starts_at,
            rows=grid.rows,
            cols=grid.cols,
            price=price.amount,
        )
        orm.Seat.objects.bulk_create(
            [orm.Seat(show=row, code=str(code)) for code in grid.seat_codes()]
        )
        return _to_show(row)

    def update_price(self, show_id: ShowId, price: Money) -> Show | None:
        updated = orm.Show.objects.filter(pk=show_id.value).update(price=price.amount)
        if not updated:
            return None
        return self.get_show(show_id)

    def list_seats(self, show_id: ShowId) -> list[Seat]:
        rows = orm.Seat.objects.filter(show_id=show_id.value)
        return sorted((_to_seat(row) for row in rows), key=lambda s: seat_sort_key(s.code))

    def count_seats(self, show_id: ShowId) -> SeatCounts:
        totals = {
            item["status"]: item["n"]
            for item in orm.Seat.objects.filter(show_id=show_id.value)
            .order_by()
            .values("status")
            .annotate(n=Count("id"))
        }
        return SeatCounts(
            available=totals.get(SeatStatus.AVAILABLE.value, 0),
            held=totals.get(SeatStatus.HELD.value, 0),
            sold=totals.get(SeatStatus.SOLD.value, 0),
        )

    def release_expired(
        self, show_id: ShowId, now: datetime, seat_code: str | None = None
    ) -> int:
        expired = orm.Seat.objects.filter(
            show_id=show_id.value,
            status=SeatStatus.HELD.value,
            hold_until__isnull=False,
            hold_until__lt=now,
        )
        if seat_code is not None:
            expired = expired.filter(code=seat_code)
        return expired.update(**_FREE)

    def lock_seat(self, show_id: ShowId, seat_code: str) -> Seat | None:
        try:
            row = orm.Seat.objects.select_for_update().get(
                show_id=show_id.value, code=seat_code
            )
        except orm.Seat.DoesNotExist:
            return None
        return _to_seat(row)

    def hold_seat(
        self, show_id: ShowId, seat_code: str, user_id: str, until: datetime
    ) -> None:
        orm.Seat.objects.filter(show_id=show_id.value, code=seat_code).update(
            status=SeatStatus.HELD.value,
            held_by=user_id,
            hold_until=until,
        )

    def release_seat(self, show_id: ShowId, seat_code: str) -> None:
        orm.Seat.objects.filter(show_id=show_id.value, code=seat_code).update(**_FREE)

    def held_seat_codes(self, show_id: ShowId, user_id: str) -> list[str]:
        codes = orm.Seat.objects.filter(
            show_id=show_id.value,
            held_by=user_id,
            status=SeatStatus.HELD.value,
        ).values_list("code", flat=True)
        return sorted(codes, key=seat_sort_key)

    def freeze_holds(self, show_id: ShowId, user_id: str) -> int:
        return orm.Seat.objects.filter(
            show_id=show_id.value,
            held_by=user_id,
            status=SeatStatus.HELD.value,
        ).update(hold_until=None)

    def _held_by(self, show_id: ShowId, seat_codes: Sequence[str], user_id: str):
        return orm.Seat.objects.filter(
            show_id=show_id.value,
            code__in=list(seat_codes),
            status=SeatStatus.HELD.value,
            held_by=user_id,
        )

    def lock_held_seats(
        self, show_id: ShowId, user_id: str, seat_codes: Sequence[str]
    ) -> list[Seat]:
        if not seat_codes:
            return []
        rows = self._held_by(show_id, seat_codes, user_id).select_for_update().order_by("code")
        return sorted((_to_seat(row) for row in rows), key=lambda s: seat_sort_key(s.code))

    def mark_sold(self, show_id: ShowId, seat_codes: Sequence[str], buyer_id: str) -> int:
        if not seat_codes:
            return 0
        return self._held_by(show_id, seat_codes, buyer_id).update(
            status=SeatStatus.SOLD.value,
            held_by=None,
            hold_until=None,
            buyer_id=buyer_id,
        )

    def mark_available(
        self, show_id: ShowId, seat_codes: Sequence[str], holder_id: str
    ) -> int:
        if not seat_codes:
            return 0
        return self._held_by(show_id, seat_codes, holder_id).update(**_FREE)


class DjangoOrderStore(OrderStore):
    """Order store backed by the Django ORM."""

    def create_order(
        self,
        user_id: str,
        show_id: ShowId,
        seats: Sequence[str],
        amount: Money,
        receipt: Receipt,
    ) -> Order:
        row = orm.Order.objects.create(
            user_id=user_id,
            show_id=show_id.value,
            seats=list(seats),
            amount=amount.amount,
            receipt_kind=receipt.kind.value,
            receipt_value=receipt.value,
        )
        return _to_order(row)

    def get_order(self, order_id: OrderId) -> Order | None:
        row = orm.Order.objects.filter(pk=order_id.value).first()
        return _to_order(row) if row else None

    def lock_order(self, order_id: OrderId) -> Order | None:
        try:
            row = orm.Order.objects.select_for_update().get(pk=order_id.value)
        except orm.Order.DoesNotExist:
            return None
        return _to_order(row)

    def list_orders(self, status: OrderStatus | None, limit: int) -> list[Order]:
        rows = orm.Order.objects.order_by("-created_at")
        if status is not None:
            rows = rows.filter(status=status.value)
        return [_to_order(row) for row in rows[:limit]]

    def settle(
        self,
        order_id: OrderId,
        status: OrderStatus,
        approver_id: str,
        paid_at: datetime | None,
    ) -> Order:
        orm.Order.objects.filter(pk=order_id.value).update(
            status=status.value,
            approver_id=approver_id,
            paid_at=paid_at,
        )
        return _to_order(orm.Order.objects.get(pk=order_id.value))


class DjangoSessionStore(SessionStore):
    """Buyer session store backed by the Django ORM."""

    def get_session(self, user_id: str) -> BuyerSession | None:
        row = orm.BuyerSession.objects.filter(pk=user_id).first()
        return _to_session(row) if row else None

    def save_session(self, session: BuyerSession) -> BuyerSession:
        row, _ = orm.BuyerSession.objects.update_or_create(
            user_id=session.user_id,
            defaults={
                "state": session.state.value,
                "show_id": session.show_id.value if session.show_id else None,
                "seats": list(session.seats),
                "total": session.total.amount if session.total is not None else None,
            },
        )
        return _to_session(row)

    def delete_session(self, user_id: str) -> bool:
        deleted, _ = orm.BuyerSession.objects.filter(pk=user_id).delete()
        return deleted > 0

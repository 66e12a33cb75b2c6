"""Composition root: Django stores plugged into the services."""

from dataclasses import dataclass

from django.conf import settings

from boxoffice.services.hold_service import Clock, HoldService, utc_now
from boxoffice.services.inventory_service import InventoryService
from boxoffice.services.order_service import OrderService
from boxoffice.services.seat_service import SeatService
from boxoffice.services.session_service import SessionService
from boxoffice.stores.django_store import (
    DjangoInventoryStore,
    DjangoOrderStore,
    DjangoSessionStore,
    DjangoUnitOfWork,
)


@dataclass(frozen=True)
class BoxOffice:
    holds: HoldService
    inventory: InventoryService
    seats: SeatService
    orders: OrderService
    sessions: SessionService


def build_box_office(hold_minutes: int | None = None, clock: Clock = utc_now) -> BoxOffice:
    """Build the services over the Django ORM stores.

    ``hold_minutes`` defaults to ``settings.HOLD_MINUTES``.
    """
    uow = DjangoUnitOfWork()
    inventory_store = DjangoInventoryStore()
    order_store = DjangoOrderStore()
    session_store = DjangoSessionStore()

    holds = HoldService(inventory_store, uow, clock=clock)
    return BoxOffice(
        holds=holds,
        inventory=InventoryService(inventory_store, uow, holds),
        seats=SeatService(
            inventory_store,
            uow,
            holds,
            hold_minutes if hold_minutes is not None else settings.HOLD_MINUTES,
        ),
        orders=OrderService(inventory_store, order_store, session_store, uow, holds),
        sessions=SessionService(session_store, inventory_store, uow),
    )

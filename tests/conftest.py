"""Pytest configuration and shared fixtures."""

from datetime import datetime, timedelta

import pytest
from rest_framework.test import APIClient

from boxoffice.domain import SeatStatus, Show
from boxoffice.services.hold_service import utc_now
from boxoffice.wiring import BoxOffice, build_box_office


class FakeClock:
    """Controllable clock for hold expiry."""

    def __init__(self, start: datetime) -> None:
        self.current = start

    def __call__(self) -> datetime:
        return self.current

    def advance(self, **kwargs) -> None:
        self.current += timedelta(**kwargs)


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(utc_now())


@pytest.fixture
def box_office(clock: FakeClock) -> BoxOffice:
    return build_box_office(hold_minutes=10, clock=clock)


@pytest.fixture
def show(db, box_office: BoxOffice) -> Show:
    """A 2x2 show (A1, A2, B1, B2) at 12.50 per seat."""
    return box_office.inventory.create_show(
        title="Hamlet",
        starts_at=utc_now() + timedelta(days=1),
        rows=2,
        cols=2,
        price="12.50",
    )


@pytest.fixture
def assert_seat_invariant():
    """Check every seat row of a show is exactly one of available, held or sold."""
    from boxoffice.models import Seat as SeatRow

    def check(show: Show) -> None:
        for row in SeatRow.objects.filter(show_id=show.id.value):
            if row.status == SeatStatus.AVAILABLE.value:
                assert row.held_by is None, row.code
                assert row.hold_until is None, row.code
                assert row.buyer_id is None, row.code
            elif row.status == SeatStatus.HELD.value:
                assert row.held_by is not None, row.code
                assert row.buyer_id is None, row.code
            else:
                assert row.status == SeatStatus.SOLD.value, row.code
                assert row.buyer_id is not None, row.code
                assert row.held_by is None, row.code
                assert row.hold_until is None, row.code

    return check

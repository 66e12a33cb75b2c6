"""Unit tests for domain primitives.

These test invariants that must hold at construction time.
Run with: pytest tests/test_domain.py -v
"""

from datetime import timedelta
from decimal import Decimal
from uuid import uuid4

import pytest

from boxoffice.domain import (
    Money,
    Receipt,
    ReceiptKind,
    Seat,
    SeatCode,
    SeatGrid,
    SeatStatus,
    ShowId,
)
from boxoffice.domain.errors import ErrorCode, ShowNotFoundError
from boxoffice.domain.value_objects import seat_sort_key
from boxoffice.services.hold_service import utc_now


class TestMoney:
    """Tests for Money value object."""

    def test_money_accepts_positive_amount(self):
        """Money can be created with positive amount."""
        assert Money(Decimal("12.50")).amount == Decimal("12.50")

    def test_money_accepts_zero(self):
        """Money can be created with zero."""
        assert Money(Decimal("0")).amount == Decimal("0")

    def test_money_rejects_negative_amount(self):
        """Money raises ValueError for negative amount."""
        with pytest.raises(ValueError):
            Money(Decimal("-1"))

    def test_money_rejects_non_numeric(self):
        """Money raises ValueError for text that is not a number."""
        with pytest.raises(ValueError):
            Money("abc")

    def test_money_str_format(self):
        """Money string representation is formatted to 2 decimal places."""
        assert str(Money(Decimal("7.5"))) == "7.50"

    def test_money_times(self):
        """Money.times multiplies the amount by a seat count."""
        assert Money("12.50").times(3) == Money(Decimal("37.50"))


class TestSeatCode:
    """Tests for SeatCode value object."""

    def test_parse_normalises_case(self):
        """SeatCode.parse accepts lower case and surrounding spaces."""
        code = SeatCode.parse(" b7 ")
        assert (code.row, code.column) == ("B", 7)
        assert str(code) == "B7"

    @pytest.mark.parametrize("raw", ["", "A0", "AA1", "7B", "A-1", "A01"])
    def test_parse_rejects_malformed(self, raw):
        """SeatCode.parse raises ValueError for malformed codes."""
        with pytest.raises(ValueError):
            SeatCode.parse(raw)

    def test_sort_key_orders_columns_numerically(self):
        """Grid order compares columns as numbers, not strings."""
        assert sorted(["B1", "A10", "A2"], key=seat_sort_key) == ["A2", "A10", "B1"]


class TestSeatGrid:
    """Tests for SeatGrid value object."""

    def test_seat_codes_row_major(self):
        """A 2x2 grid yields A1, A2, B1, B2."""
        grid = SeatGrid(rows=2, cols=2)
        assert [str(code) for code in grid.seat_codes()] == ["A1", "A2", "B1", "B2"]
        assert grid.capacity == 4

    @pytest.mark.parametrize("rows,cols", [(0, 5), (27, 5), (3, 0)])
    def test_grid_rejects_out_of_range(self, rows, cols):
        """Rows must be 1-26 and columns at least 1."""
        with pytest.raises(ValueError):
            SeatGrid(rows=rows, cols=cols)

    def test_grid_allows_full_alphabet(self):
        """A 26-row grid ends at row Z."""
        codes = list(SeatGrid(rows=26, cols=1).seat_codes())
        assert str(codes[-1]) == "Z1"


class TestShowId:
    """Tests for ShowId value object."""

    def test_from_string_valid_uuid(self):
        """ShowId.from_string parses valid UUID."""
        raw = uuid4()
        assert ShowId.from_string(str(raw)).value == raw

    def test_from_string_invalid_uuid(self):
        """ShowId.from_string raises ValueError for invalid UUID."""
        with pytest.raises(ValueError):
            ShowId.from_string("not-a-uuid")


class TestReceipt:
    """Tests for Receipt value object."""

    def test_image_receipt(self):
        """Receipt.image builds an image receipt."""
        receipt = Receipt.image("file-123")
        assert receipt.kind is ReceiptKind.IMAGE
        assert receipt.value == "file-123"

    def test_receipt_rejects_blank_value(self):
        """Receipt raises ValueError when the value is blank."""
        with pytest.raises(ValueError):
            Receipt.text("   ")


class TestSeat:
    """Tests for Seat domain model."""

    def test_held_seat_past_expiry_is_expired(self):
        """A held seat whose expiry is in the past is expired."""
        now = utc_now()
        seat = Seat(
            show_id=ShowId(uuid4()),
            code="A1",
            status=SeatStatus.HELD,
            held_by="u1",
            hold_until=now - timedelta(seconds=1),
        )
        assert seat.is_expired(now)
        assert not seat.is_frozen

    def test_frozen_seat_never_expires(self):
        """A held seat with no expiry is frozen and never expired."""
        seat = Seat(show_id=ShowId(uuid4()), code="A1", status=SeatStatus.HELD, held_by="u1")
        assert seat.is_frozen
        assert not seat.is_expired(utc_now() + timedelta(days=365))


class TestDomainError:
    """Tests for DomainError."""

    def test_str_includes_code(self):
        """DomainError renders as CODE: message."""
        error = ShowNotFoundError("abc")
        assert error.code is ErrorCode.SHOW_NOT_FOUND
        assert str(error) == "SHOW_NOT_FOUND: Show not found"
        assert error.show_id == "abc"

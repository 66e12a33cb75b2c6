"""Domain primitives that enforce validity at creation time."""

import re
import string
from collections.abc import Iterator
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Self
from uuid import UUID

ROW_LETTERS = string.ascii_uppercase

_SEAT_CODE_RE = re.compile(r"^([A-Z])([1-9][0-9]*)$")


class SeatStatus(Enum):
    AVAILABLE = "available"
    HELD = "held"
    SOLD = "sold"


class OrderStatus(Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class ReceiptKind(Enum):
    IMAGE = "image"
    TEXT = "text"


class SessionState(Enum):
    """Where a buyer is in the conversation."""

    PICKING_SHOW = "picking_show"
    PICKING_SEATS = "picking_seats"
    WAITING_RECEIPT = "waiting_receipt"


class ToggleResult(Enum):
    """Outcome of toggling a single seat for a single user."""

    SOLD = "sold"
    HELD = "held"
    AVAILABLE = "available"
    HELD_BY_OTHER = "held-by-other"


@dataclass(frozen=True)
class ShowId:
    """Unique identifier for a Show."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(str(value)))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class OrderId:
    """Unique identifier for an Order."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(str(value)))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class Money:
    """Price representation with validation."""

    amount: Decimal

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            try:
                object.__setattr__(self, "amount", Decimal(str(self.amount)))
            except InvalidOperation as exc:
                raise ValueError(f"Invalid money amount: {self.amount!r}") from exc
        if not self.amount.is_finite():
            raise ValueError("Money amount must be a finite number")
        if self.amount < 0:
            raise ValueError("Money amount cannot be negative")

    def times(self, count: int) -> "Money":
        return Money(self.amount * count)

    def __str__(self) -> str:
        return f"{self.amount:.2f}"


@dataclass(frozen=True, order=True)
class SeatCode:
    """Row letter plus 1-based column number, e.g. ``B7``.

    Ordering follows the grid: row first, then column numerically.
    """

    row: str
    column: int

    def __post_init__(self) -> None:
        if len(self.row) != 1 or self.row not in ROW_LETTERS:
            raise ValueError("Seat row must be a single letter A-Z")
        if self.column < 1:
            raise ValueError("Seat column must be positive")

    @classmethod
    def parse(cls, value: str) -> Self:
        match = _SEAT_CODE_RE.match(value.strip().upper()) if isinstance(value, str) else None
        if match is None:
            raise ValueError(f"Malformed seat code: {value!r}")
        return cls(row=match.group(1), column=int(match.group(2)))

    def __str__(self) -> str:
        return f"{self.row}{self.column}"


def seat_sort_key(code: str) -> tuple[str, int]:
    """Grid-order sort key for a raw seat code string."""
    parsed = SeatCode.parse(code)
    return parsed.row, parsed.column


@dataclass(frozen=True)
class SeatGrid:
    """Rows x columns seating layout; rows are lettered from A."""

    rows: int
    cols: int

    def __post_init__(self) -> None:
        if not 1 <= self.rows <= len(ROW_LETTERS):
            raise ValueError(f"Rows must be between 1 and {len(ROW_LETTERS)}")
        if self.cols < 1:
            raise ValueError("Columns must be at least 1")

    def seat_codes(self) -> Iterator[SeatCode]:
        for letter in ROW_LETTERS[: self.rows]:
            for column in range(1, self.cols + 1):
                yield SeatCode(row=letter, column=column)

    @property
    def capacity(self) -> int:
        return self.rows * self.cols


@dataclass(frozen=True)
class Receipt:
    """Payment evidence submitted by a buyer: an image reference or free text."""

    kind: ReceiptKind
    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.kind, ReceiptKind):
            raise ValueError("Receipt kind must be image or text")
        if not self.value or not self.value.strip():
            raise ValueError("Receipt value cannot be empty")

    @classmethod
    def image(cls, reference: str) -> Self:
        return cls(kind=ReceiptKind.IMAGE, value=reference)

    @classmethod
    def text(cls, body: str) -> Self:
        return cls(kind=ReceiptKind.TEXT, value=body)

"""Domain error codes for the box office module."""

from dataclasses import dataclass
from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    SHOW_NOT_FOUND = "SHOW_NOT_FOUND"
    SEAT_NOT_FOUND = "SEAT_NOT_FOUND"
    ORDER_NOT_FOUND = "ORDER_NOT_FOUND"
    INVALID_SHOW_ID = "INVALID_SHOW_ID"
    INVALID_ORDER_ID = "INVALID_ORDER_ID"
    INVALID_SEAT_CODE = "INVALID_SEAT_CODE"
    INVALID_SHOW_INPUT = "INVALID_SHOW_INPUT"
    INVALID_RECEIPT = "INVALID_RECEIPT"
    INVALID_SESSION = "INVALID_SESSION"
    INVALID_USER_ID = "INVALID_USER_ID"
    NO_SEATS_HELD = "NO_SEATS_HELD"
    NO_PENDING_SELECTION = "NO_PENDING_SELECTION"
    SEATS_NOT_HELD = "SEATS_NOT_HELD"
    STORAGE_FAILURE = "STORAGE_FAILURE"


@dataclass(eq=False)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class ShowNotFoundError(DomainError):
    """Raised when a show is not found."""

    def __init__(self, show_id: str) -> None:
        super().__init__(
            code=ErrorCode.SHOW_NOT_FOUND,
            message="Show not found",
        )
        self.show_id = show_id


class SeatNotFoundError(DomainError):
    """Raised when a seat code does not exist for a show."""

    def __init__(self, show_id: str, seat_code: str) -> None:
        super().__init__(
            code=ErrorCode.SEAT_NOT_FOUND,
            message=f"Seat {seat_code} not found",
        )
        self.show_id = show_id
        self.seat_code = seat_code


class OrderNotFoundError(DomainError):
    """Raised when an order is not found."""

    def __init__(self, order_id: str) -> None:
        super().__init__(
            code=ErrorCode.ORDER_NOT_FOUND,
            message="Order not found",
        )
        self.order_id = order_id


class InvalidShowIdError(DomainError):
    """Raised when a show ID is invalid."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_SHOW_ID,
            message="Invalid show ID format",
        )


class InvalidOrderIdError(DomainError):
    """Raised when an order ID is invalid."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_ORDER_ID,
            message="Invalid order ID format",
        )


class InvalidSeatCodeError(DomainError):
    def __init__(self, seat_code: str) -> None:
        super().__init__(
            code=ErrorCode.INVALID_SEAT_CODE,
            message="Invalid seat code format",
        )
        self.seat_code = seat_code


class InvalidShowInputError(DomainError):
    """Raised when show creation or price update input is malformed."""

    def __init__(self, field: str, reason: str) -> None:
        super().__init__(
            code=ErrorCode.INVALID_SHOW_INPUT,
            message=f"Invalid {field}: {reason}",
        )
        self.field = field


class InvalidReceiptError(DomainError):
    def __init__(self, reason: str) -> None:
        super().__init__(
            code=ErrorCode.INVALID_RECEIPT,
            message=f"Invalid receipt: {reason}",
        )


class InvalidSessionError(DomainError):
    def __init__(self, reason: str) -> None:
        super().__init__(
            code=ErrorCode.INVALID_SESSION,
            message=f"Invalid session: {reason}",
        )


class InvalidUserIdError(DomainError):
    """Raised when a buyer or operator identifier is missing or too long."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_USER_ID,
            message="Invalid user ID",
        )


class NoSeatsHeldError(DomainError):
    """Raised when a buyer confirms a selection without holding any seat."""

    def __init__(self, user_id: str) -> None:
        super().__init__(
            code=ErrorCode.NO_SEATS_HELD,
            message="No seats selected",
        )
        self.user_id = user_id


class NoPendingSelectionError(DomainError):
    """Raised when a receipt arrives without a confirmed selection."""

    def __init__(self, user_id: str) -> None:
        super().__init__(
            code=ErrorCode.NO_PENDING_SELECTION,
            message="No confirmed selection is waiting for a receipt",
        )
        self.user_id = user_id


class SeatsNotHeldError(DomainError):
    """Raised when an order is approved but its buyer no longer holds every seat."""

    def __init__(self, order_id: str, seat_codes: list[str]) -> None:
        super().__init__(
            code=ErrorCode.SEATS_NOT_HELD,
            message="Order seats are no longer held by the buyer: " + ", ".join(seat_codes),
        )
        self.order_id = order_id
        self.seat_codes = seat_codes


class StorageFailureError(DomainError):
    """Raised when a unit of work could not be committed and was rolled back."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.STORAGE_FAILURE,
            message="Temporary storage failure, please retry",
        )

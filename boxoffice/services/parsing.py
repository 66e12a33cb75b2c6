"""Input normalisation shared by the services.

Every helper turns a raw caller value into a domain primitive or raises the
matching validation DomainError before any row is touched.
"""

from collections.abc import Iterable
from datetime import datetime, timezone
from decimal import Decimal

from boxoffice.domain import Money, OrderId, Receipt, ReceiptKind, SeatCode, ShowId
from boxoffice.domain.errors import (
    InvalidOrderIdError,
    InvalidReceiptError,
    InvalidSeatCodeError,
    InvalidShowIdError,
    InvalidShowInputError,
    InvalidUserIdError,
)

MAX_USER_ID_LENGTH = 64
MAX_PRICE = Decimal("9999999999.99")


def parse_show_id(value: ShowId | str) -> ShowId:
    if isinstance(value, ShowId):
        return value
    try:
        return ShowId.from_string(value)
    except (ValueError, TypeError, AttributeError) as exc:
        raise InvalidShowIdError() from exc


def parse_order_id(value: OrderId | str) -> OrderId:
    if isinstance(value, OrderId):
        return value
    try:
        return OrderId.from_string(value)
    except (ValueError, TypeError, AttributeError) as exc:
        raise InvalidOrderIdError() from exc


def parse_user_id(value: str) -> str:
    if not isinstance(value, (str, int)) or isinstance(value, bool):
        raise InvalidUserIdError()
    user_id = str(value).strip()
    if not user_id or len(user_id) > MAX_USER_ID_LENGTH:
        raise InvalidUserIdError()
    return user_id


def parse_seat_code(value: str) -> str:
    try:
        return str(SeatCode.parse(value))
    except ValueError as exc:
        raise InvalidSeatCodeError(str(value)) from exc


def parse_seat_codes(values: Iterable[str]) -> tuple[str, ...]:
    """Normalise an ordered seat list, keeping caller order and dropping repeats."""
    codes: list[str] = []
    for value in values:
        code = parse_seat_code(value)
        if code not in codes:
            codes.append(code)
    return tuple(codes)


def parse_money(field: str, value: Money | Decimal | int | str) -> Money:
    if isinstance(value, Money):
        return value
    if isinstance(value, bool):
        raise InvalidShowInputError(field, "expected a number")
    try:
        money = Money(value)
    except ValueError as exc:
        raise InvalidShowInputError(field, str(exc)) from exc
    if money.amount.as_tuple().exponent < -2:
        raise InvalidShowInputError(field, "at most two decimal places")
    if money.amount > MAX_PRICE:
        raise InvalidShowInputError(field, "amount too large")
    return money


def parse_positive_int(field: str, value: int | str) -> int:
    if isinstance(value, bool):
        raise InvalidShowInputError(field, "expected a whole number")
    if isinstance(value, float):
        if not value.is_integer():
            raise InvalidShowInputError(field, "expected a whole number")
        value = int(value)
    if isinstance(value, str):
        try:
            value = int(value.strip())
        except ValueError as exc:
            raise InvalidShowInputError(field, "expected a whole number") from exc
    if not isinstance(value, int):
        raise InvalidShowInputError(field, "expected a whole number")
    if value < 1:
        raise InvalidShowInputError(field, "must be at least 1")
    return value


def parse_datetime(field: str, value: datetime | str) -> datetime:
    """Parse an ISO-8601 timestamp. Naive values are taken as UTC."""
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.strip())
        except ValueError as exc:
            raise InvalidShowInputError(field, "expected an ISO-8601 date and time") from exc
    if not isinstance(value, datetime):
        raise InvalidShowInputError(field, "expected an ISO-8601 date and time")
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


def parse_receipt(kind: ReceiptKind | str, value: str) -> Receipt:
    try:
        return Receipt(kind=ReceiptKind(kind), value=value)
    except (ValueError, TypeError, AttributeError) as exc:
        raise InvalidReceiptError("expected kind image or text with a non-empty value") from exc

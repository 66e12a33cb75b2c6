from boxoffice.domain.models import (
    BuyerSession,
    Order,
    Quote,
    Seat,
    SeatCounts,
    Settlement,
    Show,
)
from boxoffice.domain.value_objects import (
    Money,
    OrderId,
    OrderStatus,
    Receipt,
    ReceiptKind,
    SeatCode,
    SeatGrid,
    SeatStatus,
    SessionState,
    ShowId,
    ToggleResult,
)

__all__ = [
    "BuyerSession",
    "Order",
    "Quote",
    "Seat",
    "SeatCounts",
    "Settlement",
    "Show",
    "Money",
    "OrderId",
    "OrderStatus",
    "Receipt",
    "ReceiptKind",
    "SeatCode",
    "SeatGrid",
    "SeatStatus",
    "SessionState",
    "ShowId",
    "ToggleResult",
]

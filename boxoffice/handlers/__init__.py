from boxoffice.handlers.views import (
    ConfirmSelectionView,
    OrderApproveView,
    OrderDetailView,
    OrderListView,
    OrderRejectView,
    SeatCountsView,
    SeatMapView,
    SeatToggleView,
    SessionDetailView,
    SessionReceiptView,
    ShowDetailView,
    ShowListView,
    ShowPriceView,
)

__all__ = [
    "ConfirmSelectionView",
    "OrderApproveView",
    "OrderDetailView",
    "OrderListView",
    "OrderRejectView",
    "SeatCountsView",
    "SeatMapView",
    "SeatToggleView",
    "SessionDetailView",
    "SessionReceiptView",
    "ShowDetailView",
    "ShowListView",
    "ShowPriceView",
]

from django.urls import path

from boxoffice.handlers import (
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

urlpatterns = [
    path("shows", ShowListView.as_view(), name="show-list"),
    path("shows/<str:show_id>", ShowDetailView.as_view(), name="show-detail"),
    path("shows/<str:show_id>/price", ShowPriceView.as_view(), name="show-price"),
    path("shows/<str:show_id>/seats", SeatMapView.as_view(), name="seat-map"),
    path(
        "shows/<str:show_id>/seat-counts",
        SeatCountsView.as_view(),
        name="seat-counts",
    ),
    path(
        "shows/<str:show_id>/seats/<str:seat_code>/toggle",
        SeatToggleView.as_view(),
        name="seat-toggle",
    ),
    path(
        "shows/<str:show_id>/confirm",
        ConfirmSelectionView.as_view(),
        name="confirm-selection",
    ),
    path("orders", OrderListView.as_view(), name="order-list"),
    path("orders/<str:order_id>", OrderDetailView.as_view(), name="order-detail"),
    path(
        "orders/<str:order_id>/approve",
        OrderApproveView.as_view(),
        name="order-approve",
    ),
    path(
        "orders/<str:order_id>/reject",
        OrderRejectView.as_view(),
        name="order-reject",
    ),
    path("sessions/<str:user_id>", SessionDetailView.as_view(), name="session-detail"),
    path(
        "sessions/<str:user_id>/receipt",
        SessionReceiptView.as_view(),
        name="session-receipt",
    ),
]

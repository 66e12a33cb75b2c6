"""HTTP handlers (views) - handle HTTP concerns only.

Handlers:
- Parse requests and validate input format
- Call services for business logic
- Map domain errors to HTTP responses
- Never contain business logic
- Never expose internal error details
"""

from rest_framework import status
from rest_framework.exceptions import ParseError, ValidationError
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from boxoffice.domain import OrderStatus, Receipt, ReceiptKind
from boxoffice.domain.errors import DomainError
from boxoffice.handlers.errors import (
    INVALID_REQUEST,
    domain_error_response,
    error_response,
    validation_error_response,
)
from boxoffice.handlers.serializers import (
    ApproverSerializer,
    BuyerSessionSerializer,
    OrderCreateSerializer,
    OrderQuerySerializer,
    OrderSerializer,
    PriceUpdateSerializer,
    QuoteSerializer,
    ReceiptSerializer,
    SeatCountsSerializer,
    SeatSerializer,
    SessionUpdateSerializer,
    ShowCreateSerializer,
    ShowSerializer,
    ToggleSerializer,
    UserSerializer,
)
from boxoffice.services.order_service import DEFAULT_ORDER_LIMIT
from boxoffice.wiring import BoxOffice, build_box_office


def _validated(serializer_class, data) -> dict:
    serializer = serializer_class(data=data)
    serializer.is_valid(raise_exception=True)
    return serializer.validated_data


class BoxOfficeView(APIView):
    """Base handler: builds the services and renders domain errors."""

    def get_box_office(self) -> BoxOffice:
        return build_box_office()

    def handle_exception(self, exc):
        if isinstance(exc, DomainError):
            return domain_error_response(exc)
        if isinstance(exc, ValidationError):
            return validation_error_response(exc)
        if isinstance(exc, ParseError):
            return error_response(status.HTTP_400_BAD_REQUEST, INVALID_REQUEST, "Malformed request body")
        return super().handle_exception(exc)


class ShowListView(BoxOfficeView):
    """Handler for GET/POST /api/shows"""

    def get(self, request: Request) -> Response:
        shows = self.get_box_office().inventory.list_shows()
        return Response(ShowSerializer(shows, many=True).data)

    def post(self, request: Request) -> Response:
        data = _validated(ShowCreateSerializer, request.data)
        show = self.get_box_office().inventory.create_show(
            title=data["title"],
            starts_at=data["starts_at"],
            rows=data["rows"],
            cols=data["cols"],
            price=data["price"],
        )
        return Response(ShowSerializer(show).data, status=status.HTTP_201_CREATED)


class ShowDetailView(BoxOfficeView):
    """Handler for GET /api/shows/{show_id}"""

    def get(self, request: Request, show_id: str) -> Response:
        show = self.get_box_office().inventory.get_show(show_id)
        return Response(ShowSerializer(show).data)


class ShowPriceView(BoxOfficeView):
    """Handler for PATCH /api/shows/{show_id}/price"""

    def patch(self, request: Request, show_id: str) -> Response:
        data = _validated(PriceUpdateSerializer, request.data)
        show = self.get_box_office().inventory.update_price(show_id, data["price"])
        return Response(ShowSerializer(show).data)


class SeatMapView(BoxOfficeView):
    """Handler for GET /api/shows/{show_id}/seats"""

    def get(self, request: Request, show_id: str) -> Response:
        seats = self.get_box_office().inventory.seat_status_map(show_id)
        return Response(
            {
                "show_id": show_id,
                "seats": SeatSerializer(list(seats.values()), many=True).data,
            }
        )


class SeatCountsView(BoxOfficeView):
    """Handler for GET /api/shows/{show_id}/seat-counts"""

    def get(self, request: Request, show_id: str) -> Response:
        counts = self.get_box_office().inventory.seat_counts(show_id)
        return Response(SeatCountsSerializer(counts).data)


class SeatToggleView(BoxOfficeView):
    """Handler for POST /api/shows/{show_id}/seats/{seat_code}/toggle"""

    def post(self, request: Request, show_id: str, seat_code: str) -> Response:
        data = _validated(ToggleSerializer, request.data)
        result = self.get_box_office().seats.toggle(
            show_id,
            seat_code,
            data["user_id"],
            hold_minutes=data.get("hold_minutes"),
        )
        return Response({"seat": seat_code, "result": result.value})


class ConfirmSelectionView(BoxOfficeView):
    """Handler for POST /api/shows/{show_id}/confirm"""

    def post(self, request: Request, show_id: str) -> Response:
        data = _validated(UserSerializer, request.data)
        quote = self.get_box_office().orders.confirm_selection(show_id, data["user_id"])
        return Response(QuoteSerializer(quote).data)


class OrderListView(BoxOfficeView):
    """Handler for GET/POST /api/orders"""

    def get(self, request: Request) -> Response:
        query = _validated(OrderQuerySerializer, request.query_params)
        order_status = OrderStatus(query["status"]) if "status" in query else None
        orders = self.get_box_office().orders.list_orders(
            status=order_status, limit=query.get("limit", DEFAULT_ORDER_LIMIT)
        )
        return Response(OrderSerializer(orders, many=True).data)

    def post(self, request: Request) -> Response:
        data = _validated(OrderCreateSerializer, request.data)
        receipt = Receipt(
            kind=ReceiptKind(data["receipt"]["kind"]), value=data["receipt"]["value"]
        )
        order = self.get_box_office().orders.create_order(
            user_id=data["user_id"],
            show_id=data["show_id"],
            seats=data["seats"],
            amount=data["amount"],
            receipt=receipt,
        )
        return Response(OrderSerializer(order).data, status=status.HTTP_201_CREATED)


class OrderDetailView(BoxOfficeView):
    """Handler for GET /api/orders/{order_id}"""

    def get(self, request: Request, order_id: str) -> Response:
        order = self.get_box_office().orders.get_order(order_id)
        return Response(OrderSerializer(order).data)


class OrderApproveView(BoxOfficeView):
    """Handler for POST /api/orders/{order_id}/approve"""

    def post(self, request: Request, order_id: str) -> Response:
        data = _validated(ApproverSerializer, request.data)
        settlement = self.get_box_office().orders.approve(order_id, data["approver_id"])
        return Response(
            {"order": OrderSerializer(settlement.order).data, "applied": settlement.applied}
        )


class OrderRejectView(BoxOfficeView):
    """Handler for POST /api/orders/{order_id}/reject"""

    def post(self, request: Request, order_id: str) -> Response:
        data = _validated(ApproverSerializer, request.data)
        settlement = self.get_box_office().orders.reject(order_id, data["approver_id"])
        return Response(
            {"order": OrderSerializer(settlement.order).data, "applied": settlement.applied}
        )


class SessionDetailView(BoxOfficeView):
    """Handler for GET/PUT/DELETE /api/sessions/{user_id}"""

    def get(self, request: Request, user_id: str) -> Response:
        session = self.get_box_office().sessions.get(user_id)
        if session is None:
            return error_response(status.HTTP_404_NOT_FOUND, "SESSION_NOT_FOUND", "Session not found")
        return Response(BuyerSessionSerializer(session).data)

    def put(self, request: Request, user_id: str) -> Response:
        data = _validated(SessionUpdateSerializer, request.data)
        session = self.get_box_office().sessions.set(
            user_id,
            data["state"],
            show_id=data.get("show_id"),
            seats=data.get("seats", ()),
            total=data.get("total"),
        )
        return Response(BuyerSessionSerializer(session).data)

    def delete(self, request: Request, user_id: str) -> Response:
        self.get_box_office().sessions.clear(user_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class SessionReceiptView(BoxOfficeView):
    """Handler for POST /api/sessions/{user_id}/receipt"""

    def post(self, request: Request, user_id: str) -> Response:
        data = _validated(ReceiptSerializer, request.data)
        receipt = Receipt(kind=ReceiptKind(data["kind"]), value=data["value"])
        order = self.get_box_office().orders.submit_receipt(user_id, receipt)
        return Response(OrderSerializer(order).data, status=status.HTTP_201_CREATED)

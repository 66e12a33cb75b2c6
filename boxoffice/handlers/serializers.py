"""Serializers for request bodies and domain model responses.

Input serializers only check shape and primitive types; domain rules (grid
bounds, seat code format, receipt content) are enforced by the services.
"""

from rest_framework import serializers

from boxoffice.domain import OrderStatus, ReceiptKind, SessionState


class ShowSerializer(serializers.Serializer):
    """Serializer for Show domain model."""

    id = serializers.UUIDField(source="id.value")
    title = serializers.CharField()
    starts_at = serializers.DateTimeField()
    rows = serializers.IntegerField(source="grid.rows")
    cols = serializers.IntegerField(source="grid.cols")
    capacity = serializers.IntegerField(source="grid.capacity")
    price = serializers.DecimalField(source="price.amount", max_digits=12, decimal_places=2)
    created_at = serializers.DateTimeField()


class SeatSerializer(serializers.Serializer):
    """Serializer for Seat domain model."""

    code = serializers.CharField()
    status = serializers.CharField(source="status.value")
    held_by = serializers.CharField(allow_null=True)
    hold_until = serializers.DateTimeField(allow_null=True)
    buyer_id = serializers.CharField(allow_null=True)
    frozen = serializers.BooleanField(source="is_frozen")


class SeatCountsSerializer(serializers.Serializer):
    available = serializers.IntegerField()
    held = serializers.IntegerField()
    sold = serializers.IntegerField()
    total = serializers.IntegerField()


class OrderSerializer(serializers.Serializer):
    """Serializer for Order domain model."""

    id = serializers.UUIDField(source="id.value")
    user_id = serializers.CharField()
    show_id = serializers.UUIDField(source="show_id.value")
    seats = serializers.ListField(child=serializers.CharField())
    amount = serializers.DecimalField(source="amount.amount", max_digits=12, decimal_places=2)
    receipt_kind = serializers.CharField(source="receipt.kind.value")
    receipt_value = serializers.CharField(source="receipt.value")
    status = serializers.CharField(source="status.value")
    created_at = serializers.DateTimeField()
    paid_at = serializers.DateTimeField(allow_null=True)
    approver_id = serializers.CharField(allow_null=True)


class QuoteSerializer(serializers.Serializer):
    show_id = serializers.UUIDField(source="show.id.value")
    seats = serializers.ListField(child=serializers.CharField())
    unit_price = serializers.DecimalField(source="show.price.amount", max_digits=12, decimal_places=2)
    total = serializers.DecimalField(source="total.amount", max_digits=12, decimal_places=2)


class BuyerSessionSerializer(serializers.Serializer):
    """Serializer for BuyerSession domain model."""

    user_id = serializers.CharField()
    state = serializers.CharField(source="state.value")
    show_id = serializers.SerializerMethodField()
    seats = serializers.ListField(child=serializers.CharField())
    total = serializers.SerializerMethodField()

    def get_show_id(self, obj) -> str | None:
        return str(obj.show_id) if obj.show_id is not None else None

    def get_total(self, obj) -> str | None:
        return str(obj.total) if obj.total is not None else None


class ShowCreateSerializer(serializers.Serializer):
    title = serializers.CharField(max_length=255)
    starts_at = serializers.CharField()
    rows = serializers.IntegerField()
    cols = serializers.IntegerField()
    price = serializers.DecimalField(max_digits=12, decimal_places=2)


class PriceUpdateSerializer(serializers.Serializer):
    price = serializers.DecimalField(max_digits=12, decimal_places=2)


class ToggleSerializer(serializers.Serializer):
    user_id = serializers.CharField(max_length=64)
    hold_minutes = serializers.IntegerField(min_value=1, required=False)


class UserSerializer(serializers.Serializer):
    user_id = serializers.CharField(max_length=64)


class ApproverSerializer(serializers.Serializer):
    approver_id = serializers.CharField(max_length=64)


class ReceiptSerializer(serializers.Serializer):
    kind = serializers.ChoiceField(choices=[kind.value for kind in ReceiptKind])
    value = serializers.CharField()


class OrderCreateSerializer(serializers.Serializer):
    user_id = serializers.CharField(max_length=64)
    show_id = serializers.CharField()
    seats = serializers.ListField(child=serializers.CharField(), allow_empty=False)
    amount = serializers.DecimalField(max_digits=12, decimal_places=2)
    receipt = ReceiptSerializer()


class OrderQuerySerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=[status.value for status in OrderStatus], required=False)
    limit = serializers.IntegerField(min_value=1, max_value=500, required=False)


class SessionUpdateSerializer(serializers.Serializer):
    state = serializers.ChoiceField(choices=[state.value for state in SessionState])
    show_id = serializers.CharField(required=False, allow_null=True)
    seats = serializers.ListField(child=serializers.CharField(), required=False)
    total = serializers.DecimalField(max_digits=12, decimal_places=2, required=False, allow_null=True)

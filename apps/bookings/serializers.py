"""Serializers for the booking domain."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from shared.domain.value_objects import DateRange

from .domain.entities import PaymentStatus, RequestedLine
from .models import Booking, BookingItem


class UserProfileSerializer(serializers.Serializer):
    """Owner details shown with each booking."""

    id = serializers.IntegerField(read_only=True)
    full_name = serializers.CharField(read_only=True)
    email = serializers.EmailField(read_only=True)


class BookingItemSerializer(serializers.ModelSerializer):
    item_id = serializers.ReadOnlyField(source="item.id")
    item_name = serializers.SerializerMethodField()
    location_id = serializers.ReadOnlyField(source="location.id")
    location_name = serializers.ReadOnlyField(source="location.name")

    class Meta:
        model = BookingItem
        fields = [
            "id",
            "item_id",
            "item_name",
            "location_id",
            "location_name",
            "quantity",
            "start_date",
            "end_date",
            "total_days",
            "status",
            "created_at",
        ]
        read_only_fields = fields

    def get_item_name(self, obj: BookingItem) -> str:
        return obj.item.name("en")


class BookingSummarySerializer(serializers.ModelSerializer):
    """Booking without its lines, used in listings."""

    user_id = serializers.ReadOnlyField(source="user.id")
    user_profile = UserProfileSerializer(source="user", read_only=True)

    class Meta:
        model = Booking
        fields = [
            "id",
            "booking_number",
            "user_id",
            "user_profile",
            "status",
            "payment_status",
            "notes",
            "decision_reason",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class BookingSerializer(BookingSummarySerializer):
    """Booking with all of its lines."""

    booking_items = BookingItemSerializer(source="items", many=True, read_only=True)

    class Meta(BookingSummarySerializer.Meta):
        fields = BookingSummarySerializer.Meta.fields + ["booking_items"]
        read_only_fields = fields


class BookingLineSerializer(serializers.Serializer):
    """One requested line of a create or update request."""

    item_id = serializers.IntegerField(min_value=1)
    quantity = serializers.IntegerField(min_value=1)
    start_date = serializers.DateField()
    end_date = serializers.DateField()

    def validate(self, attrs):  # type: ignore
        if attrs["end_date"] < attrs["start_date"]:
            raise serializers.ValidationError("End date must be on or after the start date.")
        return attrs


class BookingItemsRequestSerializer(serializers.Serializer):
    """
    Body of create and update requests.

    ``user_id`` lets an admin book on behalf of another user; it is
    ignored on update.
    """

    items = BookingLineSerializer(many=True, allow_empty=False)
    notes = serializers.CharField(required=False, allow_blank=True)
    user_id = serializers.IntegerField(required=False, min_value=1)

    def get_lines(self) -> list[RequestedLine]:
        return [
            RequestedLine(
                item_id=line["item_id"],
                quantity=line["quantity"],
                dates=DateRange(line["start_date"], line["end_date"]),
            )
            for line in self.validated_data["items"]
        ]


class DecisionSerializer(serializers.Serializer):
    """Optional reason given when rejecting or cancelling."""

    reason = serializers.CharField(required=False, allow_blank=True, max_length=500, default="")


class PaymentStatusSerializer(serializers.Serializer):
    payment_status = serializers.ChoiceField(
        choices=[status.value for status in PaymentStatus],
        allow_null=True,
    )

    def get_payment_status(self) -> PaymentStatus | None:
        value = self.validated_data["payment_status"]
        return PaymentStatus(value) if value else None

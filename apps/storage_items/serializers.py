"""Serializers for storage items."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from .models import StorageItem, StorageLocation


class StorageLocationSerializer(serializers.ModelSerializer):
    class Meta:
        model = StorageLocation
        fields = ["id", "name", "address"]


class StorageItemSerializer(serializers.ModelSerializer):
    """Item with its location and stock counters."""

    location = StorageLocationSerializer(read_only=True)

    class Meta:
        model = StorageItem
        fields = [
            "id",
            "location",
            "translations",
            "items_number_total",
            "items_number_currently_in_storage",
            "is_active",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class AvailabilityQuerySerializer(serializers.Serializer):
    """Query parameters of the availability endpoint; ``end_date`` defaults to ``start_date``."""

    start_date = serializers.DateField()
    end_date = serializers.DateField(required=False)

    def validate(self, attrs):  # type: ignore
        attrs.setdefault("end_date", attrs["start_date"])
        if attrs["end_date"] < attrs["start_date"]:
            raise serializers.ValidationError("End date must be on or after the start date.")
        return attrs

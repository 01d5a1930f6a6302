"""API views for storage items."""

from __future__ import annotations

from rest_framework import permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.bookings.domain.exceptions import ItemNotFoundError
from apps.bookings.services import calculate_available_quantity

from .models import StorageItem
from .serializers import AvailabilityQuerySerializer, StorageItemSerializer


class StorageItemViewSet(viewsets.ReadOnlyModelViewSet):
    """Read access to storage items and their availability for a date range."""

    serializer_class = StorageItemSerializer
    permission_classes = [permissions.IsAuthenticated]
    lookup_value_regex = r"\d+"

    def get_queryset(self):  # type: ignore
        return StorageItem.objects.select_related("location").filter(is_active=True)

    @action(detail=True, methods=["get"])
    def availability(self, request, pk=None):  # type: ignore
        query = AvailabilityQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)

        try:
            result = calculate_available_quantity(
                int(pk),
                query.validated_data["start_date"],
                query.validated_data["end_date"],
            )
        except ItemNotFoundError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_404_NOT_FOUND)
        return Response(result.to_dict())

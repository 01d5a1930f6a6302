"""FilterSet definitions for booking listings."""

from __future__ import annotations

import django_filters  # type: ignore
from django.db.models import Q  # type: ignore

from .models import Booking


class BookingFilterSet(django_filters.FilterSet):
    """Status filter, free-text search and ordering for the booking list."""

    status = django_filters.CharFilter(field_name="status", lookup_expr="exact")
    search = django_filters.CharFilter(method="filter_search")
    ordering = django_filters.OrderingFilter(
        fields=(
            ("booking_number", "booking_number"),
            ("created_at", "created_at"),
            ("status", "status"),
            ("payment_status", "payment_status"),
        )
    )

    class Meta:
        model = Booking
        fields = ["status"]

    def filter_search(self, queryset, name, value):  # type: ignore
        value = (value or "").strip()
        if not value:
            return queryset
        return queryset.filter(
            Q(booking_number__icontains=value)
            | Q(status__icontains=value)
            | Q(payment_status__icontains=value)
            | Q(user__full_name__icontains=value)
            | Q(user__email__icontains=value)
        )

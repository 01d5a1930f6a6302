"""Admin registration for bookings."""

from __future__ import annotations

from django.contrib import admin

from .models import Booking, BookingItem


class BookingItemInline(admin.TabularInline):
    model = BookingItem
    extra = 0
    readonly_fields = ("item", "location", "quantity", "start_date", "end_date", "total_days", "status", "created_at")
    can_delete = False


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = (
        "booking_number",
        "user",
        "status",
        "payment_status",
        "created_at",
    )
    list_filter = ("status", "payment_status")
    search_fields = ("booking_number", "user__email", "user__full_name")
    readonly_fields = (
        "booking_number",
        "status",
        "created_at",
        "updated_at",
    )
    inlines = [BookingItemInline]

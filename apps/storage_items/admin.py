"""Admin registration for storage items."""

from __future__ import annotations

from django.contrib import admin

from .models import StorageItem, StorageLocation


@admin.register(StorageLocation)
class StorageLocationAdmin(admin.ModelAdmin):
    list_display = ("name", "address", "is_active", "created_at")
    list_filter = ("is_active",)
    search_fields = ("name", "address")


@admin.register(StorageItem)
class StorageItemAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "location",
        "items_number_total",
        "items_number_currently_in_storage",
        "is_active",
        "created_at",
    )
    list_filter = ("location", "is_active")
    readonly_fields = ("created_at", "updated_at")

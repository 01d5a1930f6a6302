"""Storage item models."""

from __future__ import annotations

from django.core.exceptions import ValidationError  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class StorageLocation(models.Model):
    """A physical storage where items are kept and picked up."""

    name = models.CharField(max_length=255)
    address = models.CharField(max_length=255, blank=True)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = _("Storage location")
        verbose_name_plural = _("Storage locations")
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name


class StorageItem(models.Model):
    """A rentable item with a fixed inventory ceiling.

    ``items_number_total`` bounds how many units may be committed to
    overlapping bookings (virtual stock). ``items_number_currently_in_storage``
    counts units physically on the shelf; pickups decrement it, returns
    increment it.
    """

    location = models.ForeignKey(
        StorageLocation,
        on_delete=models.PROTECT,
        related_name="items",
    )
    translations = models.JSONField(
        default=dict,
        blank=True,
        help_text=_('Localised names, e.g. {"en": {"item_name": "Tent"}, "fi": {"item_name": "Teltta"}}.'),
    )
    items_number_total = models.PositiveIntegerField(default=0)
    items_number_currently_in_storage = models.PositiveIntegerField(default=0)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Storage item")
        verbose_name_plural = _("Storage items")
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return f"{self.name()} @ {self.location_id}"

    def clean(self) -> None:
        if self.items_number_currently_in_storage > self.items_number_total:
            raise ValidationError(
                _("Items currently in storage cannot exceed the total number of items.")
            )

    def name(self, language: str = "en") -> str:
        translation = (self.translations or {}).get(language) or {}
        return translation.get("item_name") or "Unknown"

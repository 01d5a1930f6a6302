"""Booking models."""

from __future__ import annotations

from django.conf import settings  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore

from shared.domain.base import EventRecorder
from shared.domain.value_objects import DateRange

from .domain.entities import (
    ACTIVE_ITEM_STATUSES,
    Actor,
    BookingItemStatus,
    BookingStatus,
    CancelledBy,
    PaymentStatus,
    ensure_transition,
)
from .domain.events import (
    BookingCancelled,
    BookingConfirmed,
    BookingDeleted,
    BookingItemsReturned,
    BookingRejected,
)
from .domain.exceptions import InvalidTransitionError


class Booking(EventRecorder, models.Model):
    """A reservation of one or more storage items made by a user.

    Status changes go through the ``mark_*`` methods, which check the
    transition table, update the lines and record a domain event.
    """

    STATUS_CHOICES = [(status.value, status.label) for status in BookingStatus]
    PAYMENT_STATUS_CHOICES = [(status.value, status.label) for status in PaymentStatus]

    booking_number = models.CharField(max_length=20, editable=False)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="bookings",
    )
    status = models.CharField(
        max_length=32,
        choices=STATUS_CHOICES,
        default=BookingStatus.PENDING.value,
    )
    payment_status = models.CharField(
        max_length=20,
        choices=PAYMENT_STATUS_CHOICES,
        null=True,
        blank=True,
    )
    notes = models.TextField(blank=True)
    decision_reason = models.CharField(
        max_length=500,
        blank=True,
        help_text=_("Reason given when the booking was rejected or cancelled."),
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Booking")
        verbose_name_plural = _("Bookings")
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["booking_number"], name="booking_number_idx"),
            models.Index(fields=["status"], name="booking_status_idx"),
        ]

    def __str__(self) -> str:
        return f"Booking {self.booking_number} ({self.status})"

    @property
    def state(self) -> BookingStatus:
        return BookingStatus(self.status)

    def event_fields(self, actor: Actor | None = None) -> dict:
        """Common fields of every event this booking records."""
        return {
            "aggregate_id": self.pk,
            "booking_id": self.pk,
            "booking_number": self.booking_number,
            "owner_id": self.user_id,
            "triggered_by": str(actor.user_id) if actor else "system",
        }

    def _transition(self, target: BookingStatus, action: str) -> None:
        ensure_transition(self.state, target, action)
        self.status = target.value
        self.save(update_fields=["status", "decision_reason", "updated_at"])

    def _ensure_nothing_picked_up(self, action: str) -> None:
        if self.items.filter(status=BookingItemStatus.PICKED_UP.value).exists():
            raise InvalidTransitionError(
                f"Cannot {action} a booking with picked up items; return them first"
            )

    def _release_items(self) -> int:
        """Cancel the lines still holding virtual stock."""
        return self.items.filter(
            status__in=[status.value for status in ACTIVE_ITEM_STATUSES]
        ).update(status=BookingItemStatus.CANCELLED.value)

    def mark_confirmed(self, actor: Actor) -> None:
        self._transition(BookingStatus.CONFIRMED, "confirm")
        self.items.update(status=BookingItemStatus.CONFIRMED.value)
        self.add_event(BookingConfirmed(**self.event_fields(actor)))

    def mark_rejected(self, actor: Actor, reason: str = "") -> None:
        self.decision_reason = reason
        self._transition(BookingStatus.REJECTED, "reject")
        self._release_items()
        self.add_event(BookingRejected(reason=reason, **self.event_fields(actor)))

    def mark_cancelled(self, actor: Actor, by: CancelledBy, reason: str = "") -> list[dict]:
        """Cancel the booking and return the affected lines."""
        self._ensure_nothing_picked_up("cancel")
        self.decision_reason = reason
        self._transition(BookingStatus.cancelled(by), "cancel")
        self._release_items()
        items = [line.summary() for line in self.items.all()]
        self.add_event(
            BookingCancelled(
                cancelled_by=by.value,
                reason=reason,
                items=items,
                **self.event_fields(actor),
            )
        )
        return items

    def mark_deleted(self, actor: Actor) -> None:
        self._ensure_nothing_picked_up("delete")
        self._transition(BookingStatus.DELETED, "delete")
        self._release_items()
        self.add_event(BookingDeleted(**self.event_fields(actor)))

    def mark_completed(self, actor: Actor) -> None:
        self._transition(BookingStatus.COMPLETED, "complete")
        self.add_event(BookingItemsReturned(**self.event_fields(actor)))


class BookingItem(models.Model):
    """One line of a booking: a quantity of an item over a date range.

    Lines are never edited in place; updating a booking deletes and
    re-inserts them.
    """

    STATUS_CHOICES = [(status.value, status.label) for status in BookingItemStatus]

    booking = models.ForeignKey(
        Booking,
        on_delete=models.CASCADE,
        related_name="items",
    )
    item = models.ForeignKey(
        "storage_items.StorageItem",
        on_delete=models.PROTECT,
        related_name="booking_items",
    )
    location = models.ForeignKey(
        "storage_items.StorageLocation",
        on_delete=models.PROTECT,
        related_name="booking_items",
        help_text=_("Copied from the item when the line is created."),
    )
    quantity = models.PositiveIntegerField()
    start_date = models.DateField()
    end_date = models.DateField()
    total_days = models.PositiveIntegerField(default=0)
    status = models.CharField(
        max_length=20,
        choices=STATUS_CHOICES,
        default=BookingItemStatus.PENDING.value,
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = _("Booking item")
        verbose_name_plural = _("Booking items")
        ordering = ["start_date", "id"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(quantity__gt=0),
                name="booking_item_positive_quantity",
            ),
            models.CheckConstraint(
                condition=models.Q(end_date__gte=models.F("start_date")),
                name="booking_item_valid_dates",
            ),
        ]
        indexes = [
            models.Index(
                fields=["item", "status", "start_date", "end_date"],
                name="booking_item_overlap_idx",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.quantity} x item {self.item_id} ({self.start_date} - {self.end_date})"

    @property
    def state(self) -> BookingItemStatus:
        return BookingItemStatus(self.status)

    @property
    def dates(self) -> DateRange:
        return DateRange(self.start_date, self.end_date)

    def summary(self) -> dict:
        return {
            "item_id": self.item_id,
            "quantity": self.quantity,
            "start_date": self.start_date.isoformat(),
            "end_date": self.end_date.isoformat(),
        }

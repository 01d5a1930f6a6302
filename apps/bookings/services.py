"""Domain services for booking workflows."""

from __future__ import annotations

import logging
from datetime import date

from django.conf import settings  # type: ignore
from django.db import transaction  # type: ignore
from django.db.utils import NotSupportedError  # type: ignore

from apps.storage_items.models import StorageItem
from shared.domain.value_objects import DateRange

from .domain.entities import ACTIVE_ITEM_STATUSES, RequestedLine
from .domain.exceptions import BookingError, InsufficientStockError, ItemNotFoundError
from .domain.inventory import AvailabilityResult, compute_availability
from .utils import day_diff_from_today

logger = logging.getLogger(__name__)

SHORT_NOTICE_WARNING = (
    "This is a short-notice booking. Please be aware that it might not be fulfilled in time."
)


def _lock_queryset_if_possible(queryset):
    """Apply select_for_update when inside transaction.atomic()."""

    if not transaction.get_connection().in_atomic_block:
        return queryset

    try:
        return queryset.select_for_update()
    except NotSupportedError:
        return queryset


def get_storage_item(item_id: int, *, lock: bool = False) -> StorageItem:
    """Fetch a storage item, optionally locking its row for the transaction."""

    queryset = StorageItem.objects.filter(pk=item_id)
    if lock:
        queryset = _lock_queryset_if_possible(queryset)

    item = queryset.first()
    if item is None:
        raise ItemNotFoundError("Storage item not found")
    return item


def calculate_available_quantity(
    item_id: int,
    start_date: date,
    end_date: date,
    *,
    lock: bool = False,
) -> AvailabilityResult:
    """Virtual stock of an item for an inclusive date range.

    Every pending or confirmed booking line whose range touches the
    requested one counts against ``items_number_total``. Pass ``lock=True``
    inside a transaction to serialise concurrent checks on the same item.
    """

    from .models import BookingItem  # Local import to prevent circular dependency

    dates = DateRange(start_date, end_date)
    item = get_storage_item(item_id, lock=lock)

    booked = BookingItem.objects.filter(
        item_id=item.pk,
        status__in=[status.value for status in ACTIVE_ITEM_STATUSES],
        start_date__lte=dates.end_date,
        end_date__gte=dates.start_date,
    ).values_list("quantity", flat=True)

    return compute_availability(item.pk, item.items_number_total, booked)


def check_lead_time(start_date: date) -> str | None:
    """Reject past or same-day starts; return a warning for short notice."""

    difference = day_diff_from_today(start_date)
    if difference <= 0:
        raise BookingError("Bookings must start at least one day in the future")
    if difference <= settings.BOOKING_SHORT_NOTICE_DAYS:
        return SHORT_NOTICE_WARNING
    return None


def ensure_physical_stock(item: StorageItem, quantity: int) -> None:
    if quantity > item.items_number_currently_in_storage:
        raise InsufficientStockError(
            f"Not enough physical stock in storage for item {item.pk}"
        )


def validate_booking_line(line: RequestedLine) -> tuple[StorageItem, str | None]:
    """Check one requested line against lead time and both kinds of stock.

    Must run inside the transaction that inserts the line so the item row
    lock holds until commit.
    """

    warning = check_lead_time(line.dates.start_date)

    availability = calculate_available_quantity(
        line.item_id,
        line.dates.start_date,
        line.dates.end_date,
        lock=True,
    )
    if not availability.can_fit(line.quantity):
        logger.info(
            f"Rejected line for item {line.item_id}: requested {line.quantity}, "
            f"available {availability.available_quantity}"
        )
        raise InsufficientStockError(
            f"Not enough virtual stock available for item {line.item_id}"
        )

    item = get_storage_item(line.item_id)
    ensure_physical_stock(item, line.quantity)
    return item, warning

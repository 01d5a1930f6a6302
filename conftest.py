"""Shared pytest fixtures."""

from __future__ import annotations

from datetime import timedelta

import pytest
from django.utils import timezone
from rest_framework.test import APIClient

from apps.storage_items.models import StorageItem, StorageLocation
from apps.users.models import User


@pytest.fixture
def today():
    return timezone.localdate()


@pytest.fixture
def future(today):
    """Date ``days`` ahead of today, far enough to avoid the short-notice warning by default."""

    def _future(days: int = 10):
        return today + timedelta(days=days)

    return _future


@pytest.fixture
def owner(db):
    return User.objects.create_user(
        email="owner@example.com",
        password="pass12345",
        full_name="Olli Owner",
    )


@pytest.fixture
def other_user(db):
    return User.objects.create_user(email="other@example.com", password="pass12345")


@pytest.fixture
def admin_user(db):
    return User.objects.create_user(
        email="admin@example.com",
        password="pass12345",
        role=User.RoleChoices.ADMIN,
    )


@pytest.fixture
def location(db):
    return StorageLocation.objects.create(name="Central storage", address="Main street 1")


@pytest.fixture
def make_item(location):
    def _make_item(total: int = 5, in_storage: int | None = None, name: str = "Tent"):
        return StorageItem.objects.create(
            location=location,
            translations={"en": {"item_name": name}, "fi": {"item_name": f"{name} fi"}},
            items_number_total=total,
            items_number_currently_in_storage=total if in_storage is None else in_storage,
        )

    return _make_item


@pytest.fixture
def item(make_item):
    return make_item()


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def make_booking(owner, item, future):
    """Insert a booking with one line directly, bypassing the lifecycle checks."""
    from apps.bookings.models import Booking, BookingItem

    def _make_booking(
        *,
        user=None,
        status: str = "pending",
        line_status: str | None = None,
        quantity: int = 2,
        start=None,
        end=None,
        storage_item=None,
        booking_number: str = "ORD-0001",
    ):
        storage_item = storage_item or item
        start = start or future(10)
        end = end or start + timedelta(days=3)
        booking = Booking.objects.create(
            user=user or owner,
            booking_number=booking_number,
            status=status,
        )
        BookingItem.objects.create(
            booking=booking,
            item=storage_item,
            location=storage_item.location,
            quantity=quantity,
            start_date=start,
            end_date=end,
            total_days=(end - start).days,
            status=line_status or status,
        )
        return booking

    return _make_booking

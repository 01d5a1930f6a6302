"""API tests for storage items and their availability."""

from __future__ import annotations

from datetime import timedelta

from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase

from apps.bookings.models import Booking, BookingItem
from apps.storage_items.models import StorageItem, StorageLocation
from apps.users.models import User


class StorageItemAPITests(APITestCase):
    def setUp(self) -> None:
        self.user = User.objects.create_user(email="user@example.com", password="UserPass123")
        self.location = StorageLocation.objects.create(name="Harbour storage")
        self.item = StorageItem.objects.create(
            location=self.location,
            translations={"en": {"item_name": "Canoe"}, "fi": {"item_name": "Kanootti"}},
            items_number_total=5,
            items_number_currently_in_storage=4,
        )
        self.start = timezone.localdate() + timedelta(days=10)
        self.client.force_authenticate(self.user)

    def _book(self, quantity: int, status_value: str, offset: int = 0) -> None:
        booking = Booking.objects.create(user=self.user, booking_number=f"ORD-{quantity}{offset}", status=status_value)
        start = self.start + timedelta(days=offset)
        BookingItem.objects.create(
            booking=booking,
            item=self.item,
            location=self.location,
            quantity=quantity,
            start_date=start,
            end_date=start + timedelta(days=2),
            status=status_value,
        )

    def test_list_hides_inactive_items(self) -> None:
        StorageItem.objects.create(location=self.location, items_number_total=1, is_active=False)

        response = self.client.get(reverse("storage-item-list"))

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual([entry["id"] for entry in response.data], [self.item.pk])
        self.assertEqual(response.data[0]["location"]["name"], "Harbour storage")

    def test_availability_counts_active_overlapping_lines(self) -> None:
        self._book(2, "pending")
        self._book(1, "confirmed", offset=1)
        self._book(3, "cancelled")
        self._book(3, "pending", offset=20)

        response = self.client.get(
            reverse("storage-item-availability", args=[self.item.pk]),
            {"start_date": str(self.start), "end_date": str(self.start + timedelta(days=2))},
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(
            response.data,
            {"item_id": self.item.pk, "alreadyBookedQuantity": 3, "availableQuantity": 2},
        )

    def test_availability_end_date_defaults_to_start_date(self) -> None:
        self._book(2, "pending", offset=1)

        single_day = self.client.get(
            reverse("storage-item-availability", args=[self.item.pk]),
            {"start_date": str(self.start)},
        )

        self.assertEqual(single_day.status_code, status.HTTP_200_OK, single_day.data)
        self.assertEqual(single_day.data["availableQuantity"], 5)

    def test_availability_rejects_reversed_range(self) -> None:
        response = self.client.get(
            reverse("storage-item-availability", args=[self.item.pk]),
            {"start_date": str(self.start), "end_date": str(self.start - timedelta(days=1))},
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_availability_of_unknown_item_is_404(self) -> None:
        response = self.client.get(
            reverse("storage-item-availability", args=[9999]),
            {"start_date": str(self.start)},
        )

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data["detail"], "Storage item not found")

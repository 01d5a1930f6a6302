"""Integration tests for booking API endpoints."""

from __future__ import annotations

from datetime import timedelta

from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase

from apps.bookings.models import Booking, BookingItem
from apps.bookings.services import SHORT_NOTICE_WARNING
from apps.storage_items.models import StorageItem, StorageLocation
from apps.users.models import User


class BookingAPITestBase(APITestCase):
    def setUp(self) -> None:
        self.owner = User.objects.create_user(
            email="owner@example.com",
            password="OwnerPass123",
            full_name="Olli Owner",
        )
        self.other = User.objects.create_user(
            email="other@example.com",
            password="OtherPass123",
            full_name="Outi Other",
        )
        self.admin = User.objects.create_user(
            email="admin@example.com",
            password="AdminPass123",
            role=User.RoleChoices.ADMIN,
        )
        self.location = StorageLocation.objects.create(name="Central storage")
        self.item = StorageItem.objects.create(
            location=self.location,
            translations={"en": {"item_name": "Tent"}, "fi": {"item_name": "Teltta"}},
            items_number_total=5,
            items_number_currently_in_storage=5,
        )
        self.start = timezone.localdate() + timedelta(days=10)
        self.end = self.start + timedelta(days=3)
        self.list_url = reverse("booking-list")
        self.client.force_authenticate(self.owner)

    def _booking(self, user, status_value="pending", quantity=2, number="ORD-0001") -> Booking:
        booking = Booking.objects.create(user=user, booking_number=number, status=status_value)
        BookingItem.objects.create(
            booking=booking,
            item=self.item,
            location=self.location,
            quantity=quantity,
            start_date=self.start,
            end_date=self.end,
            total_days=3,
            status=status_value,
        )
        return booking

    def _payload(self, quantity=2, start=None, end=None) -> dict:
        start = start or self.start
        end = end or self.end
        return {
            "items": [
                {
                    "item_id": self.item.pk,
                    "quantity": quantity,
                    "start_date": str(start),
                    "end_date": str(end),
                }
            ],
            "notes": "For the summer camp",
        }


class BookingReadAPITests(BookingAPITestBase):
    def test_requires_authentication(self) -> None:
        self.client.force_authenticate(None)

        response = self.client.get(self.list_url)

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_list_is_scoped_to_owner(self) -> None:
        mine = self._booking(self.owner, number="ORD-0001")
        self._booking(self.other, number="ORD-0002")

        response = self.client.get(self.list_url)

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual([entry["id"] for entry in response.data["data"]], [mine.pk])
        self.assertEqual(
            response.data["metadata"],
            {"total": 1, "page": 1, "limit": 10, "totalPages": 1},
        )
        self.assertEqual(response.data["data"][0]["user_profile"]["email"], "owner@example.com")
        self.assertNotIn("booking_items", response.data["data"][0])

    def test_admin_sees_all_bookings(self) -> None:
        self._booking(self.owner, number="ORD-0001")
        self._booking(self.other, number="ORD-0002")
        self.client.force_authenticate(self.admin)

        response = self.client.get(self.list_url, {"limit": 1, "page": 2})

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["data"][0]["booking_number"], "ORD-0002")
        self.assertEqual(response.data["metadata"]["totalPages"], 2)

    def test_status_filter_and_search(self) -> None:
        self._booking(self.owner, number="ORD-0001")
        self._booking(self.other, status_value="confirmed", number="ORD-0002")
        self.client.force_authenticate(self.admin)

        by_status = self.client.get(self.list_url, {"status": "confirmed"})
        by_name = self.client.get(self.list_url, {"search": "outi"})

        self.assertEqual([entry["booking_number"] for entry in by_status.data["data"]], ["ORD-0002"])
        self.assertEqual([entry["booking_number"] for entry in by_name.data["data"]], ["ORD-0002"])

    def test_my_returns_own_bookings_even_for_admin(self) -> None:
        self._booking(self.owner)
        own = self._booking(self.admin, number="ORD-0002")
        self.client.force_authenticate(self.admin)

        response = self.client.get(reverse("booking-my"))

        self.assertEqual([entry["id"] for entry in response.data["data"]], [own.pk])

    def test_count_is_admin_only(self) -> None:
        self._booking(self.owner)
        self._booking(self.other, number="ORD-0002")

        forbidden = self.client.get(reverse("booking-count"))
        self.client.force_authenticate(self.admin)
        allowed = self.client.get(reverse("booking-count"))

        self.assertEqual(forbidden.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(allowed.data, {"count": 2})

    def test_retrieve_paginates_booking_items(self) -> None:
        booking = self._booking(self.owner)

        response = self.client.get(reverse("booking-detail", args=[booking.pk]))

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        lines = response.data["booking_items"]
        self.assertEqual(lines["metadata"]["total"], 1)
        self.assertEqual(lines["data"][0]["item_name"], "Tent")
        self.assertEqual(lines["data"][0]["location_name"], "Central storage")

    def test_cannot_retrieve_someone_elses_booking(self) -> None:
        booking = self._booking(self.other)

        response = self.client.get(reverse("booking-detail", args=[booking.pk]))

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)


class BookingWriteAPITests(BookingAPITestBase):
    def test_create_booking(self) -> None:
        response = self.client.post(self.list_url, self._payload(), format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(response.data["message"], "Booking created")
        self.assertIsNone(response.data["warning"])
        booking = Booking.objects.get(pk=response.data["booking"]["id"])
        self.assertEqual(booking.user, self.owner)
        self.assertEqual(booking.status, "pending")
        self.assertEqual(booking.notes, "For the summer camp")
        self.assertEqual(len(response.data["booking"]["booking_items"]), 1)

    def test_short_notice_booking_carries_warning(self) -> None:
        tomorrow = timezone.localdate() + timedelta(days=1)

        response = self.client.post(self.list_url, self._payload(start=tomorrow, end=tomorrow), format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(response.data["warning"], SHORT_NOTICE_WARNING)

    def test_create_over_virtual_stock_is_rejected(self) -> None:
        self._booking(self.other, quantity=4)

        response = self.client.post(self.list_url, self._payload(quantity=2), format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)
        self.assertEqual(response.data["detail"], f"Not enough virtual stock available for item {self.item.pk}")
        self.assertEqual(Booking.objects.count(), 1)

    def test_create_validates_body(self) -> None:
        empty = self.client.post(self.list_url, {"items": []}, format="json")
        reversed_dates = self.client.post(
            self.list_url, self._payload(start=self.end, end=self.start), format="json"
        )

        self.assertEqual(empty.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(reversed_dates.status_code, status.HTTP_400_BAD_REQUEST)

    def test_cannot_create_for_another_user(self) -> None:
        payload = self._payload()
        payload["user_id"] = self.other.pk

        response = self.client.post(self.list_url, payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_update_replaces_lines(self) -> None:
        booking = self._booking(self.owner)

        response = self.client.put(
            reverse("booking-detail", args=[booking.pk]), self._payload(quantity=3), format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["message"], "Booking updated")
        self.assertEqual([line.quantity for line in booking.items.all()], [3])

    def test_confirm_requires_admin(self) -> None:
        booking = self._booking(self.owner)
        url = reverse("booking-confirm", args=[booking.pk])

        forbidden = self.client.post(url)
        self.client.force_authenticate(self.admin)
        confirmed = self.client.post(url)

        self.assertEqual(forbidden.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(confirmed.status_code, status.HTTP_200_OK, confirmed.data)
        self.assertEqual(confirmed.data["booking"]["status"], "confirmed")
        self.assertEqual(confirmed.data["booking"]["booking_items"][0]["status"], "confirmed")

    def test_confirm_missing_booking_is_404(self) -> None:
        self.client.force_authenticate(self.admin)

        response = self.client.post(reverse("booking-confirm", args=[9999]))

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data["detail"], "Booking not found")

    def test_reject_by_owner_is_forbidden(self) -> None:
        booking = self._booking(self.owner)

        response = self.client.post(reverse("booking-reject", args=[booking.pk]), {"reason": "no"})

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(response.data["detail"], "Only admins can reject bookings")

    def test_admin_rejects_with_reason(self) -> None:
        booking = self._booking(self.owner)
        self.client.force_authenticate(self.admin)

        response = self.client.post(
            reverse("booking-reject", args=[booking.pk]), {"reason": "Out of season"}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["booking"]["status"], "rejected")
        self.assertEqual(response.data["booking"]["decision_reason"], "Out of season")

    def test_owner_cancels_pending_booking(self) -> None:
        booking = self._booking(self.owner)

        response = self.client.post(reverse("booking-cancel", args=[booking.pk]), format="json")

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["message"], "Booking cancelled successfully")
        self.assertEqual(response.data["bookingId"], booking.pk)
        self.assertEqual(response.data["cancelledBy"], "user")
        self.assertEqual(response.data["items"][0]["item_id"], self.item.pk)
        booking.refresh_from_db()
        self.assertEqual(booking.status, "cancelled by user")

    def test_owner_cannot_cancel_confirmed_booking(self) -> None:
        booking = self._booking(self.owner, status_value="confirmed")

        response = self.client.post(reverse("booking-cancel", args=[booking.pk]))

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["detail"], "You can't cancel a booking that has already been confirmed")

    def test_delete_is_soft(self) -> None:
        booking = self._booking(self.owner)
        self.client.force_authenticate(self.admin)

        response = self.client.delete(reverse("booking-detail", args=[booking.pk]))

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data, {"message": "Booking deleted", "bookingId": booking.pk})
        booking.refresh_from_db()
        self.assertEqual(booking.status, "deleted")
        self.assertEqual(booking.items.get().status, "cancelled")

    def test_pickup_and_return_require_admin(self) -> None:
        booking = self._booking(self.owner, status_value="confirmed")

        pickup = self.client.post(reverse("booking-pickup", args=[booking.pk]))
        returned = self.client.post(reverse("booking-return-items", args=[booking.pk]))

        self.assertEqual(pickup.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(returned.status_code, status.HTTP_403_FORBIDDEN)

    def test_pickup_then_return_moves_physical_stock(self) -> None:
        booking = self._booking(self.owner, status_value="confirmed")
        self.client.force_authenticate(self.admin)

        pickup = self.client.post(reverse("booking-pickup", args=[booking.pk]))
        self.item.refresh_from_db()
        in_storage_after_pickup = self.item.items_number_currently_in_storage
        returned = self.client.post(reverse("booking-return-items", args=[booking.pk]))

        self.assertEqual(pickup.status_code, status.HTTP_200_OK, pickup.data)
        self.assertEqual(in_storage_after_pickup, 3)
        self.assertEqual(returned.status_code, status.HTTP_200_OK, returned.data)
        self.assertEqual(returned.data["booking"]["status"], "completed")
        self.item.refresh_from_db()
        self.assertEqual(self.item.items_number_currently_in_storage, 5)

    def test_payment_status_update(self) -> None:
        booking = self._booking(self.owner, status_value="confirmed")
        url = reverse("booking-payment-status", args=[booking.pk])
        self.client.force_authenticate(self.admin)

        response = self.client.patch(url, {"payment_status": "invoice-sent"}, format="json")
        invalid = self.client.patch(url, {"payment_status": "refunded"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["payment_status"], "invoice-sent")
        self.assertEqual(invalid.status_code, status.HTTP_400_BAD_REQUEST)
        booking.refresh_from_db()
        self.assertEqual(booking.payment_status, "invoice-sent")

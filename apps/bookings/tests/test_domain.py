"""Tests for booking domain rules that need no database."""

from datetime import date

import pytest

from apps.bookings.domain.entities import (
    Actor,
    BookingStatus,
    CancelledBy,
    RequestedLine,
    can_transition,
    ensure_transition,
)
from apps.bookings.domain.events import BookingCancelled
from apps.bookings.domain.exceptions import BookingError, InvalidTransitionError
from apps.bookings.domain.inventory import committed_quantity, compute_availability
from apps.bookings.utils import day_diff_from_today, generate_booking_number
from shared.domain.value_objects import DateRange


class TestStatusMachine:
    @pytest.mark.parametrize(
        "current, target",
        [
            (BookingStatus.PENDING, BookingStatus.CONFIRMED),
            (BookingStatus.PENDING, BookingStatus.REJECTED),
            (BookingStatus.PENDING, BookingStatus.CANCELLED_BY_USER),
            (BookingStatus.CONFIRMED, BookingStatus.CANCELLED_BY_ADMIN),
            (BookingStatus.CONFIRMED, BookingStatus.COMPLETED),
            (BookingStatus.COMPLETED, BookingStatus.DELETED),
        ],
    )
    def test_allowed(self, current, target):
        assert can_transition(current, target)

    @pytest.mark.parametrize(
        "current, target",
        [
            (BookingStatus.CONFIRMED, BookingStatus.CANCELLED_BY_USER),
            (BookingStatus.PENDING, BookingStatus.COMPLETED),
            (BookingStatus.REJECTED, BookingStatus.CONFIRMED),
            (BookingStatus.DELETED, BookingStatus.DELETED),
            (BookingStatus.CANCELLED_BY_ADMIN, BookingStatus.CONFIRMED),
        ],
    )
    def test_refused(self, current, target):
        assert not can_transition(current, target)

    def test_terminal_states(self):
        terminal = {status for status in BookingStatus if status.is_terminal}
        assert terminal == {
            BookingStatus.REJECTED,
            BookingStatus.CANCELLED_BY_USER,
            BookingStatus.CANCELLED_BY_ADMIN,
            BookingStatus.DELETED,
        }

    def test_ensure_transition_message(self):
        with pytest.raises(InvalidTransitionError, match="Cannot confirm booking with status 'rejected'"):
            ensure_transition(BookingStatus.REJECTED, BookingStatus.CONFIRMED, "confirm")

    def test_invalid_transition_is_a_booking_error(self):
        assert issubclass(InvalidTransitionError, BookingError)


def test_cancellation_variant_maps_to_status():
    assert BookingStatus.cancelled(CancelledBy.USER) is BookingStatus.CANCELLED_BY_USER
    assert BookingStatus.cancelled(CancelledBy.ADMIN) is BookingStatus.CANCELLED_BY_ADMIN
    assert BookingStatus.CANCELLED_BY_ADMIN.cancelled_by is CancelledBy.ADMIN
    assert BookingStatus.CANCELLED_BY_USER.value == "cancelled by user"
    assert BookingStatus.CONFIRMED.cancelled_by is None


def test_requested_line_needs_positive_quantity():
    dates = DateRange(date(2025, 1, 1), date(2025, 1, 2))
    with pytest.raises(ValueError):
        RequestedLine(item_id=1, quantity=0, dates=dates)


def test_actor_ownership():
    actor = Actor(user_id=3)
    assert actor.owns(3)
    assert not actor.owns(4)
    assert not actor.is_elevated


def test_availability_counts_missing_quantities_as_zero():
    assert committed_quantity([2, None, 3]) == 5
    result = compute_availability(9, 5, [2, None, 3])
    assert result.already_booked_quantity == 5
    assert result.available_quantity == 0
    assert not result.can_fit(1)


def test_availability_may_go_negative():
    result = compute_availability(9, 2, [3])
    assert result.available_quantity == -1


def test_availability_without_bookings_equals_total():
    result = compute_availability(9, 7, [])
    assert result.to_dict() == {"item_id": 9, "alreadyBookedQuantity": 0, "availableQuantity": 7}


def test_day_diff_from_today():
    today = date(2025, 3, 10)
    assert day_diff_from_today(date(2025, 3, 10), today=today) == 0
    assert day_diff_from_today(date(2025, 3, 12), today=today) == 2
    assert day_diff_from_today(date(2025, 3, 9), today=today) == -1


def test_booking_number_format():
    number = generate_booking_number()
    assert number.startswith("ORD-")
    assert len(number) == 8
    assert number[4:].isdigit()


def test_cancelled_event_serialises_common_fields():
    event = BookingCancelled(booking_id=5, booking_number="ORD-0005", owner_id=2, cancelled_by="admin")
    data = event.to_dict()
    assert data["booking_id"] == 5
    assert data["event_type"] == "BookingCancelled"
    assert data["triggered_by"] == "system"

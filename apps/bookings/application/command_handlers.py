"""
Booking Command Handlers

These are the use cases for the booking domain.
They orchestrate domain operations within transactions.

Commands:
- CreateBookingCommand: Create a pending booking with its lines
- UpdateBookingCommand: Replace the lines of a pending booking
- ConfirmBookingCommand: Confirm a pending booking
- RejectBookingCommand: Reject a pending booking
- CancelBookingCommand: Cancel a booking (owner or admin)
- DeleteBookingCommand: Soft delete a booking
- ReturnItemsCommand: Take items back into storage and complete the booking
- ConfirmPickupCommand: Hand confirmed items out of storage
- UpdatePaymentStatusCommand: Set the payment status
"""

from dataclasses import dataclass, field
import logging

from django.conf import settings
from django.contrib.auth import get_user_model
from django.db.models import F
from django.utils import timezone

from shared.application.uow import DjangoUnitOfWork
from apps.bookings.domain.entities import (
    Actor,
    BookingItemStatus,
    BookingStatus,
    CancelledBy,
    PaymentStatus,
    RequestedLine,
    ensure_transition,
)
from apps.bookings.domain.events import (
    BookingCreated,
    BookingItemsPickedUp,
    BookingUpdated,
    PaymentStatusUpdated,
)
from apps.bookings.domain.exceptions import (
    BookingError,
    BookingNotFoundError,
    BookingPermissionError,
    InsufficientStockError,
    InvalidTransitionError,
)
from apps.bookings.models import Booking, BookingItem
from apps.bookings.services import (
    _lock_queryset_if_possible,
    get_storage_item,
    validate_booking_line,
)
from apps.bookings.utils import generate_booking_number
from apps.storage_items.models import StorageItem

logger = logging.getLogger(__name__)


# ===== Commands =====

@dataclass
class CreateBookingCommand:
    """
    Command to create a new booking

    ``owner_id`` differs from the actor only when an admin books on
    behalf of another user.
    """
    actor: Actor
    owner_id: int
    lines: list[RequestedLine]
    notes: str = ''


@dataclass
class UpdateBookingCommand:
    """Command to replace all lines of a pending booking"""
    actor: Actor
    booking_id: int
    lines: list[RequestedLine]
    notes: str | None = None


@dataclass
class ConfirmBookingCommand:
    actor: Actor
    booking_id: int


@dataclass
class RejectBookingCommand:
    actor: Actor
    booking_id: int
    reason: str = ''


@dataclass
class CancelBookingCommand:
    actor: Actor
    booking_id: int
    reason: str = ''


@dataclass
class DeleteBookingCommand:
    actor: Actor
    booking_id: int


@dataclass
class ReturnItemsCommand:
    actor: Actor
    booking_id: int


@dataclass
class ConfirmPickupCommand:
    booking_id: int
    actor: Actor | None = None


@dataclass
class UpdatePaymentStatusCommand:
    booking_id: int
    payment_status: PaymentStatus | None
    actor: Actor | None = None


# ===== Results =====

@dataclass
class BookingResult:
    """Booking after a transition, plus the short-notice warning if any"""
    booking: Booking
    warning: str | None = None


@dataclass
class CancellationResult:
    booking: Booking
    cancelled_by: CancelledBy
    items: list[dict] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            'message': 'Booking cancelled successfully',
            'bookingId': self.booking.pk,
            'cancelledBy': self.cancelled_by.value,
            'items': self.items,
        }


# ===== Helpers =====

def _load_booking(booking_id: int) -> Booking:
    """Load a booking with its row locked for the current transaction"""
    booking = _lock_queryset_if_possible(
        Booking.objects.filter(pk=booking_id)
    ).first()
    if booking is None:
        raise BookingNotFoundError("Booking not found")
    return booking


def _insert_lines(booking: Booking, lines: list[RequestedLine]) -> str | None:
    """
    Validate and insert lines one by one

    Each line is inserted before the next is checked, so repeated lines
    for the same item count against each other.

    Returns: The short-notice warning if any line triggered it
    """
    if not lines:
        raise BookingError("At least one item is required")

    warning = None
    for line in lines:
        item, line_warning = validate_booking_line(line)
        warning = warning or line_warning
        BookingItem.objects.create(
            booking=booking,
            item=item,
            location_id=item.location_id,
            quantity=line.quantity,
            start_date=line.dates.start_date,
            end_date=line.dates.end_date,
            total_days=line.dates.total_days,
            status=BookingItemStatus.PENDING.value,
        )
    return warning


# ===== Command Handlers =====

class CreateBookingHandler:
    """
    Handler for CreateBooking command

    Strategy:
    1. Start database transaction (atomic)
    2. Insert the booking in PENDING
    3. For each line: lock the storage item, check lead time, virtual
       and physical stock, insert the line
    4. Record BookingCreated; it is published after commit
    Any failing line rolls back the booking and all earlier lines.
    """

    def handle(self, command: CreateBookingCommand) -> BookingResult:
        actor = command.actor
        if not actor.owns(command.owner_id) and not actor.is_elevated:
            raise BookingPermissionError("You can only create bookings for yourself")

        if not get_user_model().objects.filter(pk=command.owner_id).exists():
            raise BookingError("User not found")

        logger.info(
            f"Creating booking for user {command.owner_id} "
            f"with {len(command.lines)} line(s)"
        )

        with DjangoUnitOfWork() as uow:
            booking = Booking.objects.create(
                user_id=command.owner_id,
                booking_number=generate_booking_number(),
                status=BookingStatus.PENDING.value,
                notes=command.notes,
            )
            warning = _insert_lines(booking, command.lines)

            booking.add_event(BookingCreated(warning=warning, **booking.event_fields(actor)))
            uow.collect_events(booking)

        logger.info(f"Booking created successfully: {booking.booking_number} (ID: {booking.pk})")
        return BookingResult(booking=booking, warning=warning)


class UpdateBookingHandler:
    """Handler for replacing the lines of a pending booking"""

    def handle(self, command: UpdateBookingCommand) -> BookingResult:
        logger.info(f"Updating booking {command.booking_id}")

        with DjangoUnitOfWork() as uow:
            booking = _load_booking(command.booking_id)

            actor = command.actor
            if not actor.owns(booking.user_id) and not actor.is_elevated:
                raise BookingPermissionError("Not allowed to update this booking")

            if booking.state is not BookingStatus.PENDING:
                raise InvalidTransitionError(
                    f"Cannot update booking with status '{booking.status}'"
                )

            # Old lines must be gone before the new ones are checked
            booking.items.all().delete()
            warning = _insert_lines(booking, command.lines)

            if command.notes is not None:
                booking.notes = command.notes
            booking.save(update_fields=['notes', 'updated_at'])

            booking.add_event(BookingUpdated(**booking.event_fields(actor)))
            uow.collect_events(booking)

        logger.info(f"Booking {booking.booking_number} updated successfully")
        return BookingResult(booking=booking, warning=warning)


class ConfirmBookingHandler:
    """Handler for confirming a booking (all lines or none)"""

    def handle(self, command: ConfirmBookingCommand) -> BookingResult:
        logger.info(f"Confirming booking {command.booking_id}")

        with DjangoUnitOfWork() as uow:
            booking = _load_booking(command.booking_id)

            if booking.state is BookingStatus.CONFIRMED:
                raise InvalidTransitionError("Booking is already confirmed")
            ensure_transition(booking.state, BookingStatus.CONFIRMED, 'confirm')

            for line in booking.items.all():
                item = get_storage_item(line.item_id, lock=True)
                if line.quantity > item.items_number_currently_in_storage:
                    raise InsufficientStockError(
                        f"Not enough available quantity for item {line.item_id}"
                    )

            booking.mark_confirmed(command.actor)
            uow.collect_events(booking)

        logger.info(f"Booking {booking.booking_number} confirmed successfully")
        return BookingResult(booking=booking)


class RejectBookingHandler:
    """Handler for rejecting a pending booking"""

    def handle(self, command: RejectBookingCommand) -> BookingResult:
        logger.info(f"Rejecting booking {command.booking_id}")

        with DjangoUnitOfWork() as uow:
            booking = _load_booking(command.booking_id)

            if not command.actor.is_elevated:
                raise BookingPermissionError("Only admins can reject bookings")

            if booking.state is BookingStatus.REJECTED:
                raise InvalidTransitionError("Booking is already rejected")

            booking.mark_rejected(command.actor, command.reason)
            uow.collect_events(booking)

        logger.info(f"Booking {booking.booking_number} rejected")
        return BookingResult(booking=booking)


class CancelBookingHandler:
    """
    Handler for cancelling a booking

    Owners may cancel until the booking is confirmed; elevated actors may
    cancel any pending or confirmed booking, which records the
    cancellation as done by an admin.
    """

    def handle(self, command: CancelBookingCommand) -> CancellationResult:
        logger.info(f"Cancelling booking {command.booking_id}")

        with DjangoUnitOfWork() as uow:
            booking = _load_booking(command.booking_id)
            actor = command.actor

            if booking.state.is_cancelled:
                raise InvalidTransitionError(f"Booking has already been {booking.status}")

            if not actor.owns(booking.user_id) and not actor.is_elevated:
                raise BookingPermissionError("You can only cancel your own bookings")

            if not actor.is_elevated and booking.state is BookingStatus.CONFIRMED:
                raise InvalidTransitionError(
                    "You can't cancel a booking that has already been confirmed"
                )

            cancelled_by = CancelledBy.ADMIN if actor.is_elevated else CancelledBy.USER
            items = booking.mark_cancelled(actor, cancelled_by, command.reason)
            uow.collect_events(booking)

        logger.info(f"Booking {booking.booking_number} cancelled by {cancelled_by.value}")
        return CancellationResult(booking=booking, cancelled_by=cancelled_by, items=items)


class DeleteBookingHandler:
    """Handler for the admin soft delete"""

    def handle(self, command: DeleteBookingCommand) -> BookingResult:
        logger.info(f"Deleting booking {command.booking_id}")

        with DjangoUnitOfWork() as uow:
            booking = _load_booking(command.booking_id)

            if booking.state is BookingStatus.DELETED:
                raise InvalidTransitionError("Booking is already deleted")

            if not command.actor.is_elevated:
                raise BookingPermissionError("You are not allowed to delete this booking")

            booking.mark_deleted(command.actor)
            uow.collect_events(booking)

        logger.info(f"Booking {booking.booking_number} soft deleted")
        return BookingResult(booking=booking)


class ReturnItemsHandler:
    """Handler for bringing items back into storage"""

    def handle(self, command: ReturnItemsCommand) -> BookingResult:
        logger.info(f"Returning items of booking {command.booking_id}")

        with DjangoUnitOfWork() as uow:
            booking = _load_booking(command.booking_id)
            lines = list(booking.items.all())

            if not lines:
                raise BookingError("No items found for return")

            if any(line.state is BookingItemStatus.RETURNED for line in lines):
                raise InvalidTransitionError("Items are already returned")

            booking.mark_completed(command.actor)

            # Only lines that left the shelf go back onto it
            for line in lines:
                if line.state is not BookingItemStatus.PICKED_UP:
                    continue
                _lock_queryset_if_possible(
                    StorageItem.objects.filter(pk=line.item_id)
                ).update(
                    items_number_currently_in_storage=(
                        F('items_number_currently_in_storage') + line.quantity
                    ),
                    updated_at=timezone.now(),
                )

            booking.items.update(status=BookingItemStatus.RETURNED.value)
            uow.collect_events(booking)

        logger.info(f"Items of booking {booking.booking_number} returned")
        return BookingResult(booking=booking)


class ConfirmPickupHandler:
    """
    Handler for handing confirmed items out of storage

    Physical stock is decremented per line and may never go negative.
    The date-window check only runs when BOOKING_ENFORCE_PICKUP_WINDOW is on.
    """

    def handle(self, command: ConfirmPickupCommand) -> BookingResult:
        logger.info(f"Confirming pickup for booking {command.booking_id}")

        with DjangoUnitOfWork() as uow:
            booking = _load_booking(command.booking_id)
            lines = list(booking.items.all())

            if not lines:
                raise BookingError("No items found for pickup")

            today = timezone.localdate()
            for line in lines:
                if line.state is BookingItemStatus.PICKED_UP:
                    raise InvalidTransitionError("Items are already picked_up")
                if line.state is not BookingItemStatus.CONFIRMED:
                    raise InvalidTransitionError(
                        "Booking item is not confirmed and can't be picked up"
                    )
                if settings.BOOKING_ENFORCE_PICKUP_WINDOW and not line.dates.contains(today):
                    raise BookingError("Items can only be picked up within the booking period")

                item = get_storage_item(line.item_id, lock=True)
                remaining = item.items_number_currently_in_storage - line.quantity
                if remaining < 0:
                    raise InsufficientStockError("Not enough stock to confirm pickup")

                item.items_number_currently_in_storage = remaining
                item.save(update_fields=['items_number_currently_in_storage', 'updated_at'])

                line.status = BookingItemStatus.PICKED_UP.value
                line.save(update_fields=['status'])

            fields = booking.event_fields()
            fields['triggered_by'] = str(booking.user_id) if booking.user_id else 'system'
            booking.add_event(BookingItemsPickedUp(**fields))
            uow.collect_events(booking)

        logger.info(f"Items of booking {booking.booking_number} picked up")
        return BookingResult(booking=booking)


class UpdatePaymentStatusHandler:
    """Handler for setting the payment status (not tied to the booking FSM)"""

    def handle(self, command: UpdatePaymentStatusCommand) -> BookingResult:
        value = command.payment_status.value if command.payment_status else None
        logger.info(f"Setting payment status of booking {command.booking_id} to {value}")

        with DjangoUnitOfWork() as uow:
            booking = _load_booking(command.booking_id)
            booking.payment_status = value
            booking.save(update_fields=['payment_status', 'updated_at'])

            booking.add_event(PaymentStatusUpdated(
                payment_status=value,
                **booking.event_fields(command.actor),
            ))
            uow.collect_events(booking)

        return BookingResult(booking=booking)


COMMAND_HANDLERS = {
    CreateBookingCommand: CreateBookingHandler,
    UpdateBookingCommand: UpdateBookingHandler,
    ConfirmBookingCommand: ConfirmBookingHandler,
    RejectBookingCommand: RejectBookingHandler,
    CancelBookingCommand: CancelBookingHandler,
    DeleteBookingCommand: DeleteBookingHandler,
    ReturnItemsCommand: ReturnItemsHandler,
    ConfirmPickupCommand: ConfirmPickupHandler,
    UpdatePaymentStatusCommand: UpdatePaymentStatusHandler,
}

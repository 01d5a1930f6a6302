"""
Message bus wiring for the booking domain

Registers the lifecycle command handlers and the event handlers that
turn committed booking events into notification tasks.
"""

import logging

from shared.application.message_bus import MessageBus, message_bus
from apps.bookings.application.command_handlers import COMMAND_HANDLERS
from apps.bookings.domain.events import (
    BookingCancelled,
    BookingConfirmed,
    BookingCreated,
    BookingDeleted,
    BookingEvent,
    BookingItemsPickedUp,
    BookingItemsReturned,
    BookingRejected,
    BookingUpdated,
)
from apps.notifications.services import BookingMailType

logger = logging.getLogger(__name__)

# PaymentStatusUpdated has no mail
EVENT_MAIL_TYPES = {
    BookingCreated: BookingMailType.CREATION,
    BookingUpdated: BookingMailType.UPDATE,
    BookingConfirmed: BookingMailType.CONFIRMATION,
    BookingRejected: BookingMailType.REJECTION,
    BookingCancelled: BookingMailType.CANCELLATION,
    BookingDeleted: BookingMailType.CANCELLATION,
    BookingItemsPickedUp: BookingMailType.ITEMS_PICKED_UP,
    BookingItemsReturned: BookingMailType.ITEMS_RETURNED,
}


def enqueue_booking_mail(event: BookingEvent) -> None:
    """Queue the notification task; a broker failure never reaches the caller"""
    from apps.bookings.tasks import notify_booking_event

    mail_type = EVENT_MAIL_TYPES[type(event)]
    try:
        notify_booking_event.delay(event.booking_id, mail_type.value)
    except Exception as e:
        logger.error(
            f"Could not enqueue {mail_type.value} mail for booking {event.booking_id}: {e}",
            exc_info=True,
        )


def bootstrap(bus: MessageBus = message_bus) -> MessageBus:
    for command_type, handler_class in COMMAND_HANDLERS.items():
        if not bus.has_command_handler(command_type):
            bus.register_command_handler(command_type, handler_class().handle)

    for event_type in EVENT_MAIL_TYPES:
        bus.register_event_handler(event_type, enqueue_booking_mail)

    logger.debug("Booking message bus handlers registered")
    return bus

"""Notification services for sending booking e-mails and in-app messages."""

from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING

from django.conf import settings  # type: ignore
from django.core.mail import send_mail  # type: ignore
from django.template.loader import render_to_string  # type: ignore
from django.utils import timezone  # type: ignore
from django.utils.html import strip_tags  # type: ignore

if TYPE_CHECKING:  # pragma: no cover
    from apps.users.models import CustomUser

logger = logging.getLogger(__name__)

DATE_FORMAT = "%d.%m.%Y"


class BookingMailType(Enum):
    """Kinds of booking e-mail sent to the booking owner."""

    CREATION = "creation"
    UPDATE = "update"
    CONFIRMATION = "confirmation"
    REJECTION = "rejection"
    CANCELLATION = "cancellation"
    ITEMS_PICKED_UP = "items_picked_up"
    ITEMS_RETURNED = "items_returned"


# Subject and lead paragraph per mail type
BOOKING_MAIL_TEXT: dict[BookingMailType, tuple[str, str]] = {
    BookingMailType.CREATION: (
        "Booking received",
        "Thank you for your booking. We will review it and get back to you soon.",
    ),
    BookingMailType.UPDATE: (
        "Booking updated",
        "Your booking has been updated. The current items are listed below.",
    ),
    BookingMailType.CONFIRMATION: (
        "Booking confirmed",
        "Your booking has been confirmed. You can pick up the items on the pickup date.",
    ),
    BookingMailType.REJECTION: (
        "Booking rejected",
        "Unfortunately your booking has been rejected.",
    ),
    BookingMailType.CANCELLATION: (
        "Booking cancelled",
        "Your booking has been cancelled.",
    ),
    BookingMailType.ITEMS_PICKED_UP: (
        "Items picked up",
        "The items of your booking have been picked up.",
    ),
    BookingMailType.ITEMS_RETURNED: (
        "Items returned",
        "The items of your booking have been returned. Thank you!",
    ),
}


# ============================================================================
# EMAIL NOTIFICATIONS
# ============================================================================

def send_email_notification(
    recipient_email: str,
    subject: str,
    template_name: str | None,
    context: dict,
    *,
    html_message: str | None = None,
) -> bool:
    """
    Send a single e-mail, rendering ``template_name`` when no HTML is given.

    Args:
        recipient_email: Recipient address
        subject: Mail subject
        template_name: Django template path (optional)
        context: Template context
        html_message: Ready HTML body (optional)

    Returns:
        bool: True if the mail was handed to the backend
    """
    try:
        if html_message:
            text_message = strip_tags(html_message)
        elif template_name:
            html_message = render_to_string(template_name, context)
            text_message = strip_tags(html_message)
        else:
            text_message = context.get("message", "")
            html_message = None

        send_mail(
            subject=subject,
            message=text_message,
            from_email=settings.DEFAULT_FROM_EMAIL,
            recipient_list=[recipient_email],
            html_message=html_message,
            fail_silently=False,
        )

        logger.info(f"Email sent successfully to {recipient_email}: {subject}")
        return True

    except Exception as e:
        logger.error(f"Failed to send email to {recipient_email}: {e}", exc_info=True)
        return False


def _load_booking(booking_id: int):
    from apps.bookings.models import Booking

    return (
        Booking.objects.select_related("user")
        .prefetch_related("items__item", "items__location")
        .get(pk=booking_id)
    )


def build_booking_payload(booking) -> dict:
    """
    Collect everything a booking e-mail shows.

    The pickup date is the start date of the first line and the location
    is that line's storage location.
    """
    lines = list(booking.items.all())
    first = lines[0] if lines else None

    return {
        "booking_id": booking.pk,
        "booking_number": booking.booking_number,
        "recipient": booking.user.email,
        "user_name": booking.user.display_name,
        "location": first.location.name if first else "",
        "pickup_date": first.start_date.strftime(DATE_FORMAT) if first else "",
        "today": timezone.localdate().strftime(DATE_FORMAT),
        "reason": booking.decision_reason,
        "items": [
            {
                "item_id": line.item_id,
                "quantity": line.quantity,
                "start_date": line.start_date.strftime(DATE_FORMAT),
                "end_date": line.end_date.strftime(DATE_FORMAT),
                "translations": {
                    "fi": {"name": line.item.name("fi")},
                    "en": {"name": line.item.name("en")},
                },
            }
            for line in lines
        ],
    }


def send_booking_mail(booking_id: int, mail_type: BookingMailType) -> bool:
    """
    Send a booking e-mail to the owner and store an in-app copy.

    Returns:
        bool: Whether the e-mail was sent; the in-app copy is attempted
        either way.

    Raises:
        Booking.DoesNotExist: If the booking is gone
    """
    booking = _load_booking(booking_id)
    payload = build_booking_payload(booking)
    title, intro = BOOKING_MAIL_TEXT[mail_type]
    subject = f"{title} #{payload['booking_number']}"

    sent = send_email_notification(
        recipient_email=payload["recipient"],
        subject=subject,
        template_name="notifications/booking_email.html",
        context={**payload, "title": title, "intro": intro, "mail_type": mail_type.value},
    )
    create_in_app_notification(
        booking.user,
        subject,
        intro,
        booking=booking,
        kind=mail_type.value,
    )
    return sent


# ============================================================================
# IN-APP NOTIFICATIONS
# ============================================================================

def create_in_app_notification(
    user: "CustomUser",
    title: str,
    message: str,
    *,
    booking=None,
    kind: str = "",
) -> bool:
    """
    Store an in-app notification.

    Returns:
        bool: True if the notification was created
    """
    try:
        from .models import Notification

        Notification.objects.create(
            user=user,
            booking=booking,
            kind=kind,
            title=title,
            message=message,
        )

        logger.info(f"In-app notification created for {user.email}: {title}")
        return True

    except Exception as e:
        logger.error(f"Failed to create in-app notification for {user.email}: {e}", exc_info=True)
        return False

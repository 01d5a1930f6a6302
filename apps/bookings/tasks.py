"""Celery tasks for the booking domain."""

from __future__ import annotations

import logging

from celery import shared_task  # type: ignore

from apps.notifications.services import BookingMailType, send_booking_mail

from .models import Booking

logger = logging.getLogger(__name__)


@shared_task(name="bookings.notify_booking_event")
def notify_booking_event(booking_id: int, mail_type: str) -> bool:
    """
    Send the booking e-mail and in-app notification for one transition.

    Returns:
        bool: True if the e-mail was sent
    """
    try:
        return send_booking_mail(booking_id, BookingMailType(mail_type))
    except Booking.DoesNotExist:
        logger.warning(f"Booking {booking_id} not found for notification {mail_type}")
        return False

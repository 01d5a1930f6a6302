"""
Unit of Work

Wraps one booking write in a database transaction and hands the
domain events recorded during it to the message bus once the
outermost transaction has committed.
"""

import logging
from typing import List

from django.db import transaction

from shared.domain.base import DomainEvent, EventRecorder

logger = logging.getLogger(__name__)


class DjangoUnitOfWork:
    """
    Transaction boundary for booking writes

    Inserting a booking, inserting its lines and adjusting stock all
    happen inside one ``transaction.atomic()`` block; any exception
    rolls everything back and drops the collected events.

    Usage:
        with DjangoUnitOfWork() as uow:
            booking = _load_booking(booking_id)
            booking.mark_confirmed(actor)
            uow.collect_events(booking)
        # BookingConfirmed is published after commit
    """

    def __init__(self):
        self._events: List[DomainEvent] = []
        self._atomic = transaction.atomic()

    def __enter__(self):
        self._atomic.__enter__()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        try:
            if exc_type is None:
                self._schedule_publish()
            elif self._events:
                logger.warning(f"Booking write failed, dropping {len(self._events)} event(s)")
        finally:
            self._events = []
            self._atomic.__exit__(exc_type, exc_val, exc_tb)

    def collect_events(self, aggregate: EventRecorder):
        """Take over the events recorded on ``aggregate``"""
        events = aggregate.events
        if not events:
            return
        self._events.extend(events)
        aggregate.clear_events()
        logger.debug(
            f"Collected {len(events)} event(s) from "
            f"{aggregate.__class__.__name__} {getattr(aggregate, 'pk', None)}"
        )

    def _schedule_publish(self):
        if not self._events:
            return
        events = list(self._events)
        transaction.on_commit(lambda: _publish(events))


def _publish(events: List[DomainEvent]):
    from shared.application.message_bus import message_bus

    logger.info(f"Publishing {len(events)} committed event(s)")
    try:
        message_bus.publish_events(events)
    except Exception as e:
        # The booking is already committed; notifications are best-effort
        logger.error(f"Error publishing events: {e}", exc_info=True)

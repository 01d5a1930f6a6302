"""
Booking Domain Events

Events recorded by booking transitions. The unit of work publishes them
after the transaction commits; event handlers turn them into e-mail and
in-app notifications.
"""

from dataclasses import dataclass, field

from shared.domain.base import DomainEvent


@dataclass(kw_only=True)
class BookingEvent(DomainEvent):
    """
    Base for all booking events

    ``triggered_by`` is the acting user's id, or "system" when unknown.
    """
    booking_id: int
    booking_number: str = ''
    owner_id: int | None = None
    triggered_by: str = 'system'

    def to_dict(self) -> dict:
        data = super().to_dict()
        data.update({
            'booking_id': self.booking_id,
            'booking_number': self.booking_number,
            'owner_id': self.owner_id,
            'triggered_by': self.triggered_by,
        })
        return data


@dataclass(kw_only=True)
class BookingCreated(BookingEvent):
    """
    Event: A new pending booking was created

    Triggers:
    - "Booking created" mail to the owner
    """
    warning: str | None = None


@dataclass(kw_only=True)
class BookingUpdated(BookingEvent):
    """Event: The lines of a pending booking were replaced"""


@dataclass(kw_only=True)
class BookingConfirmed(BookingEvent):
    """Event: Booking confirmed (PENDING -> CONFIRMED)"""


@dataclass(kw_only=True)
class BookingRejected(BookingEvent):
    """Event: Booking rejected by an admin (PENDING -> REJECTED)"""
    reason: str = ''


@dataclass(kw_only=True)
class BookingCancelled(BookingEvent):
    """
    Event: Booking cancelled by its owner or an admin

    Triggers:
    - Cancellation mail listing the released lines
    """
    cancelled_by: str = 'user'
    reason: str = ''
    items: list = field(default_factory=list)


@dataclass(kw_only=True)
class BookingDeleted(BookingEvent):
    """Event: Booking soft deleted by an admin (uses the cancellation mail)"""


@dataclass(kw_only=True)
class BookingItemsPickedUp(BookingEvent):
    """Event: All lines of a confirmed booking were handed out"""


@dataclass(kw_only=True)
class BookingItemsReturned(BookingEvent):
    """Event: Items were brought back (CONFIRMED -> COMPLETED)"""


@dataclass(kw_only=True)
class PaymentStatusUpdated(BookingEvent):
    """Event: Payment status changed; no mail is sent for it"""
    payment_status: str | None = None

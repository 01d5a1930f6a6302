"""
Booking Domain Entities

Core value types of the booking lifecycle:
- BookingStatus: FSM states of a booking
- BookingItemStatus: pickup/return states tracked per booking line
- PaymentStatus: Invoice/payment tracking, independent of the FSM
- CancelledBy: Who cancelled a booking
- Actor: The authenticated caller of a lifecycle operation
- RequestedLine: One (item, date range, quantity) line of a request
"""

from dataclasses import dataclass
from enum import Enum

from shared.domain.value_objects import DateRange

from .exceptions import InvalidTransitionError


class CancelledBy(Enum):
    """Role class of the actor that cancelled a booking"""
    USER = 'user'
    ADMIN = 'admin'


class BookingStatus(Enum):
    """
    Booking Status Finite State Machine

    State transitions:
    - PENDING -> CONFIRMED (admin confirmed, physical stock available)
    - PENDING -> REJECTED (admin rejected)
    - PENDING -> CANCELLED_BY_USER / CANCELLED_BY_ADMIN
    - CONFIRMED -> COMPLETED (items returned)
    - CONFIRMED -> CANCELLED_BY_ADMIN (owners cannot cancel once confirmed)
    - PENDING / CONFIRMED / COMPLETED -> DELETED (admin soft delete)

    REJECTED, CANCELLED_* and DELETED are terminal.
    """
    PENDING = 'pending'
    CONFIRMED = 'confirmed'
    REJECTED = 'rejected'
    CANCELLED_BY_USER = 'cancelled by user'
    CANCELLED_BY_ADMIN = 'cancelled by admin'
    COMPLETED = 'completed'
    DELETED = 'deleted'

    @classmethod
    def cancelled(cls, by: CancelledBy) -> 'BookingStatus':
        if by is CancelledBy.ADMIN:
            return cls.CANCELLED_BY_ADMIN
        return cls.CANCELLED_BY_USER

    @property
    def cancelled_by(self) -> CancelledBy | None:
        return {
            BookingStatus.CANCELLED_BY_USER: CancelledBy.USER,
            BookingStatus.CANCELLED_BY_ADMIN: CancelledBy.ADMIN,
        }.get(self)

    @property
    def is_cancelled(self) -> bool:
        return self.cancelled_by is not None

    @property
    def is_terminal(self) -> bool:
        return not ALLOWED_TRANSITIONS[self]

    @property
    def label(self) -> str:
        return self.value.capitalize()


class BookingItemStatus(Enum):
    """
    Booking line states, tracked independently of the booking

    - PENDING -> CONFIRMED (booking confirmed)
    - CONFIRMED -> PICKED_UP -> RETURNED
    - PENDING / CONFIRMED -> CANCELLED (booking rejected, cancelled or deleted)
    """
    PENDING = 'pending'
    CONFIRMED = 'confirmed'
    CANCELLED = 'cancelled'
    PICKED_UP = 'picked_up'
    RETURNED = 'returned'

    @property
    def label(self) -> str:
        return self.value.replace('_', ' ').capitalize()


# Lines in these states hold virtual stock
ACTIVE_ITEM_STATUSES = (BookingItemStatus.PENDING, BookingItemStatus.CONFIRMED)


class PaymentStatus(Enum):
    """Payment status tracking (null means not invoiced yet)"""
    INVOICE_SENT = 'invoice-sent'
    PAID = 'paid'
    PAYMENT_REJECTED = 'payment-rejected'
    OVERDUE = 'overdue'

    @property
    def label(self) -> str:
        return self.value.replace('-', ' ').capitalize()


ALLOWED_TRANSITIONS: dict[BookingStatus, frozenset[BookingStatus]] = {
    BookingStatus.PENDING: frozenset({
        BookingStatus.CONFIRMED,
        BookingStatus.REJECTED,
        BookingStatus.CANCELLED_BY_USER,
        BookingStatus.CANCELLED_BY_ADMIN,
        BookingStatus.DELETED,
    }),
    BookingStatus.CONFIRMED: frozenset({
        BookingStatus.COMPLETED,
        BookingStatus.CANCELLED_BY_ADMIN,
        BookingStatus.DELETED,
    }),
    BookingStatus.COMPLETED: frozenset({BookingStatus.DELETED}),
    BookingStatus.REJECTED: frozenset(),
    BookingStatus.CANCELLED_BY_USER: frozenset(),
    BookingStatus.CANCELLED_BY_ADMIN: frozenset(),
    BookingStatus.DELETED: frozenset(),
}


def can_transition(current: BookingStatus, target: BookingStatus) -> bool:
    return target in ALLOWED_TRANSITIONS[current]


def ensure_transition(current: BookingStatus, target: BookingStatus, action: str) -> None:
    """
    Raise InvalidTransitionError unless current -> target is allowed

    Args:
        action: Verb used in the error message, e.g. "confirm"
    """
    if not can_transition(current, target):
        raise InvalidTransitionError(
            f"Cannot {action} booking with status '{current.value}'"
        )


@dataclass(frozen=True)
class Actor:
    """
    Authenticated caller of a lifecycle operation

    Elevated actors (admin, super_admin, main_admin, superVera,
    storage_manager) may act on any booking.
    """
    user_id: int
    is_elevated: bool = False

    @classmethod
    def from_user(cls, user) -> 'Actor':
        return cls(user_id=user.pk, is_elevated=bool(user.is_elevated()))

    def owns(self, owner_id: int) -> bool:
        return self.user_id == owner_id


@dataclass(frozen=True)
class RequestedLine:
    """A requested booking line: quantity of an item over a date range"""
    item_id: int
    quantity: int
    dates: DateRange

    def __post_init__(self):
        if self.quantity < 1:
            raise ValueError("Quantity must be at least 1")

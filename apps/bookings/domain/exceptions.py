"""
Booking Domain Exceptions

Every failure of a lifecycle operation is a BookingError; the API maps
the subclasses onto HTTP status codes.
"""


class BookingError(Exception):
    """A booking request was rejected (validation failure)."""


class BookingNotFoundError(BookingError):
    """The booking does not exist."""


class ItemNotFoundError(BookingError):
    """The storage item does not exist."""


class BookingPermissionError(BookingError):
    """The actor is not allowed to perform the operation."""


class InvalidTransitionError(BookingError):
    """The booking or its items are in the wrong status for the operation."""


class InsufficientStockError(BookingError):
    """Not enough virtual or physical stock for the requested quantity."""

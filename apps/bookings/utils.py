"""Date and numbering helpers for bookings."""

from __future__ import annotations

import secrets
from datetime import date

from django.utils import timezone  # type: ignore


def day_diff_from_today(start: date, *, today: date | None = None) -> int:
    """Days between local midnight today and ``start`` (negative if past)."""
    today = today or timezone.localdate()
    return (start - today).days


def generate_booking_number() -> str:
    """Human-readable number such as ``ORD-0427``; not unique by construction."""
    return f"ORD-{secrets.randbelow(10000):04d}"

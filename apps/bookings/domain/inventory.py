"""
Inventory Arithmetic

Pure calculations behind the availability check. Virtual stock of an
item over a date range is its inventory ceiling minus the quantity held by
overlapping active booking lines. Queries live in ``apps.bookings.services``.
"""

from dataclasses import dataclass
from typing import Iterable


@dataclass(frozen=True)
class AvailabilityResult:
    """
    Virtual stock of one item for one date range

    ``available_quantity`` may be negative when the item is already
    over-committed; anything below 1 is not bookable.
    """
    item_id: int
    already_booked_quantity: int
    available_quantity: int

    def can_fit(self, quantity: int) -> bool:
        return quantity <= self.available_quantity

    def to_dict(self) -> dict:
        return {
            'item_id': self.item_id,
            'alreadyBookedQuantity': self.already_booked_quantity,
            'availableQuantity': self.available_quantity,
        }


def committed_quantity(quantities: Iterable[int | None]) -> int:
    """Sum booked quantities, counting missing values as zero"""
    return sum(quantity or 0 for quantity in quantities)


def compute_availability(
    item_id: int,
    items_number_total: int,
    booked_quantities: Iterable[int | None],
) -> AvailabilityResult:
    already_booked = committed_quantity(booked_quantities)
    return AvailabilityResult(
        item_id=item_id,
        already_booked_quantity=already_booked,
        available_quantity=items_number_total - already_booked,
    )

"""
Overlap detection between a candidate interval and existing bookings.

Intervals are half-open: a booking that ends exactly when another starts
does not conflict with it. Only pending and confirmed bookings are ever
considered; cancelled, completed, and no-show bookings never block a slot.
"""

from datetime import datetime
from typing import Iterable

from booking_engine.schemas.booking_schema import Booking
from booking_engine.utils import ensure_aware


def intervals_overlap(
    new_start: datetime, new_end: datetime, existing_start: datetime, existing_end: datetime
) -> bool:
    """Return True when [new_start, new_end) collides with [existing_start, existing_end)."""
    starts_inside = new_start >= existing_start and new_start < existing_end
    ends_inside = new_end > existing_start and new_end <= existing_end
    contains = new_start <= existing_start and new_end >= existing_end
    return starts_inside or ends_inside or contains


def find_conflicts(
    start_date: datetime, end_date: datetime, existing_bookings: Iterable[Booking]
) -> list[Booking]:
    """Return every active booking overlapping the candidate interval."""
    start_date = ensure_aware(start_date)
    end_date = ensure_aware(end_date)
    return [
        booking
        for booking in existing_bookings
        if booking.is_active
        and intervals_overlap(start_date, end_date, booking.start_date, booking.end_date)
    ]


def has_conflict(start_date: datetime, end_date: datetime, existing_bookings: Iterable[Booking]) -> bool:
    return bool(find_conflicts(start_date, end_date, existing_bookings))

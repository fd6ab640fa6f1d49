"""Booking price calculation."""

from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from booking_engine.schemas.service_schema import Service


def calculate_booking_price(
    service: Service, participants: int = 1, duration: Optional[int] = None
) -> int:
    """
    Compute the total price in minor currency units.

    ``price * participants * (duration / service.duration)``, where duration
    defaults to the service duration. Fractional results are rounded half up
    to a whole minor unit.

    Examples:
        >>> calculate_booking_price(Service(id="s", name="n", duration=60, price=100, currency="USD"), 2)
        200
    """
    effective_duration = duration or service.duration
    raw = (
        Decimal(str(service.price))
        * participants
        * Decimal(effective_duration)
        / Decimal(service.duration)
    )
    return int(raw.quantize(Decimal("1"), rounding=ROUND_HALF_UP))

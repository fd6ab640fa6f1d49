"""
Pluggable strategies invoked by the lifecycle manager.

Authorizer and AvailabilityChecker are optional gates on booking creation;
a False answer rejects the request. LifecycleObservers receive side-effect
notifications after a change has been persisted. Observer failures are
logged and swallowed so they can never fail or roll back the operation
that triggered them.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Iterable, Optional, Protocol

from booking_engine.schemas.booking_schema import Booking, Caller

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthorizationRequest:
    """Everything an authorizer may inspect before a booking is made."""
    user: Caller
    service_id: str
    start_date: datetime
    end_date: datetime
    session_id: Optional[str] = None


class Authorizer(Protocol):
    def __call__(self, request: AuthorizationRequest) -> bool: ...


class AvailabilityChecker(Protocol):
    def __call__(self, service_id: str, start_date: datetime, end_date: datetime) -> bool: ...


class LifecycleObserver:
    """Base observer; override the events you care about."""

    def on_booking_created(self, booking: Booking) -> None:
        pass

    def on_booking_confirmed(self, booking: Booking) -> None:
        pass

    def on_booking_cancelled(self, booking: Booking) -> None:
        pass

    def on_payment_completed(self, booking: Booking, payment_data: Any) -> None:
        pass

    def on_booking_reminder(self, booking: Booking) -> None:
        pass


def notify_observers(
    observers: Iterable[LifecycleObserver], event: str, booking: Booking, *args: Any
) -> None:
    """Call ``event`` on every observer, isolating each failure."""
    for observer in observers:
        handler = getattr(observer, event, None)
        if handler is None:
            continue
        try:
            handler(booking, *args)
        except Exception:
            logger.exception(
                "Observer %s failed on %s for booking %s",
                type(observer).__name__, event, booking.id,
            )

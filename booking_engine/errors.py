"""
Domain errors raised by the booking lifecycle.

Every failure is a BookingError tagged with one BookingErrorKind. The kind
selects a message template; the keyword context fills it and stays available
on the exception for callers that want structured details instead of text.
"""

from enum import Enum
from typing import Any


class BookingErrorKind(str, Enum):
    """Closed set of failure kinds surfaced to callers."""
    NOT_FOUND = "not_found"
    INVALID_INPUT = "invalid_input"
    INVALID_TIME = "invalid_time"
    CONFLICT = "conflict"
    UNAUTHORIZED = "unauthorized"
    ALREADY_CANCELLED = "already_cancelled"
    CANCELLATION_NOT_ALLOWED = "cancellation_not_allowed"
    DEADLINE_PASSED = "deadline_passed"
    PAYMENT_REQUIRED = "payment_required"
    PAYMENT_NOT_CONFIGURED = "payment_not_configured"
    ALREADY_PAID = "already_paid"
    SERVICE_UNAVAILABLE = "service_unavailable"
    SERVICE_IN_USE = "service_in_use"
    INTERNAL_FAILURE = "internal_failure"


MESSAGE_TEMPLATES: dict[BookingErrorKind, str] = {
    BookingErrorKind.NOT_FOUND: "{entity} not found",
    BookingErrorKind.INVALID_INPUT: "{detail}",
    BookingErrorKind.INVALID_TIME: "{reason}",
    BookingErrorKind.CONFLICT: "Booking time conflicts with existing booking",
    BookingErrorKind.UNAUTHORIZED: "{detail}",
    BookingErrorKind.ALREADY_CANCELLED: "Booking is already cancelled",
    BookingErrorKind.CANCELLATION_NOT_ALLOWED: "Cancellation not allowed",
    BookingErrorKind.DEADLINE_PASSED: (
        "Cancellation must be made at least {hours} hours in advance"
    ),
    BookingErrorKind.PAYMENT_REQUIRED: "Booking has not been paid",
    BookingErrorKind.PAYMENT_NOT_CONFIGURED: "Payment provider not configured",
    BookingErrorKind.ALREADY_PAID: "Booking already paid",
    BookingErrorKind.SERVICE_UNAVAILABLE: "Service is not available at the requested time",
    BookingErrorKind.SERVICE_IN_USE: "Cannot delete service with active bookings",
    BookingErrorKind.INTERNAL_FAILURE: "Failed to {operation}",
}

# Fallback context for templates whose placeholder was not supplied.
_DEFAULT_CONTEXT: dict[BookingErrorKind, dict[str, Any]] = {
    BookingErrorKind.NOT_FOUND: {"entity": "Resource"},
    BookingErrorKind.INVALID_INPUT: {"detail": "Invalid request"},
    BookingErrorKind.INVALID_TIME: {"reason": "Invalid booking time"},
    BookingErrorKind.UNAUTHORIZED: {"detail": "Unauthorized to make this booking"},
    BookingErrorKind.INTERNAL_FAILURE: {"operation": "complete the operation"},
}


class BookingError(Exception):
    """Raised when a booking operation is rejected or fails.

    Example:
        >>> err = BookingError(BookingErrorKind.DEADLINE_PASSED, hours=2)
        >>> err.message
        'Cancellation must be made at least 2 hours in advance'
        >>> err.context["hours"]
        2
    """

    def __init__(self, kind: BookingErrorKind, **context: Any) -> None:
        self.kind = kind
        self.context = {**_DEFAULT_CONTEXT.get(kind, {}), **context}
        self.message = MESSAGE_TEMPLATES[kind].format(**self.context)
        super().__init__(self.message)

    def __repr__(self) -> str:
        return f"BookingError({self.kind.value!r}, {self.message!r})"


def not_found(entity: str) -> BookingError:
    return BookingError(BookingErrorKind.NOT_FOUND, entity=entity)

"""
Routing of verified payment events to booking handlers.

Handlers receive the booking ID (taken from the event object's
``metadata.bookingId``) and the event object itself. A failing handler is
logged and reported as unhandled; it never raises back to the provider,
which would otherwise keep retrying the delivery.
"""

import logging
from typing import Any, Callable

from booking_engine.schemas.payment_schema import PaymentEvent

logger = logging.getLogger(__name__)

PAYMENT_SUCCEEDED = "payment_intent.succeeded"
PAYMENT_FAILED = "payment_intent.payment_failed"
REFUND_CREATED = "refund.created"
CHARGE_REFUNDED = "charge.refunded"

EventHandler = Callable[[str, dict[str, Any]], Any]


class WebhookDispatcher:
    """Maps event types to booking handlers."""

    def __init__(self) -> None:
        self._handlers: dict[str, EventHandler] = {}

    def on(self, event_type: str, handler: EventHandler) -> None:
        self._handlers[event_type] = handler

    @property
    def event_types(self) -> list[str]:
        return list(self._handlers)

    def dispatch(self, event: PaymentEvent) -> bool:
        """Run the handler for ``event``. Returns True only if a handler completed."""
        handler = self._handlers.get(event.type)
        if handler is None:
            logger.info("Unhandled payment event type: %s", event.type)
            return False

        obj = event.data.get("object") or {}
        booking_id = (obj.get("metadata") or {}).get("bookingId")
        if not booking_id:
            logger.warning("Payment event %s (%s) has no bookingId", event.id, event.type)
            return False

        try:
            handler(booking_id, obj)
        except Exception:
            logger.exception("Error processing %s for booking %s", event.type, booking_id)
            return False
        return True

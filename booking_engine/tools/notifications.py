"""
Mock notification delivery.

In production, this would hand messages to an email or SMS provider
(SendGrid, Mailgun, AWS SES, Twilio). Here every message is logged and
kept in an outbox so callers can inspect what would have been sent.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, TypedDict

from booking_engine.config import NotificationConfig
from booking_engine.core.hooks import LifecycleObserver
from booking_engine.schemas.booking_schema import Booking

logger = logging.getLogger(__name__)


class OutboxMessage(TypedDict):
    """A notification that would have been delivered."""

    kind: str
    booking_id: str
    recipient: str
    sent_at: str


@dataclass
class NotificationObserver(LifecycleObserver):
    """Sends confirmation, cancellation, and reminder messages."""

    config: NotificationConfig = field(default_factory=NotificationConfig)
    outbox: list[OutboxMessage] = field(default_factory=list)

    def _send(self, kind: str, booking: Booking) -> None:
        recipient = booking.contact_email or booking.user_id
        self.outbox.append({
            "kind": kind,
            "booking_id": booking.id,
            "recipient": recipient,
            "sent_at": datetime.now(timezone.utc).isoformat(),
        })
        logger.info("Sending booking %s for booking %s to %s", kind, booking.id, recipient)

    def on_booking_created(self, booking: Booking) -> None:
        if self.config.enabled and self.config.send_confirmation:
            self._send("confirmation", booking)

    def on_booking_cancelled(self, booking: Booking) -> None:
        if self.config.enabled and self.config.send_confirmation:
            self._send("cancellation", booking)

    def on_booking_reminder(self, booking: Booking) -> None:
        if self.config.enabled and self.config.send_reminder:
            self._send("reminder", booking)

    def on_payment_completed(self, booking: Booking, payment_data: Any) -> None:
        if self.config.enabled:
            self._send("receipt", booking)

    def reset(self) -> None:
        """Clear the outbox. Used by test fixtures for isolation."""
        self.outbox.clear()

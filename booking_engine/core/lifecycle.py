"""
Finite state machine for booking status.

Every status change made by the lifecycle manager goes through an explicit
transition. Cancelled, completed, and no-show are terminal: nothing leaves
them. Completed and no-show are set by operational processes outside this
package, so no trigger here enters them.

Usage:
    sm = BookingStateMachine(BookingStatus.PENDING)
    sm.transition(BookingTrigger.PAYMENT_SUCCEEDED)
    assert sm.current_status == BookingStatus.CONFIRMED
"""

import logging
from dataclasses import dataclass
from enum import Enum

from booking_engine.schemas.booking_schema import BookingStatus

logger = logging.getLogger(__name__)


class BookingTrigger(str, Enum):
    """Events that cause status transitions."""
    APPROVED = "approved"
    PAYMENT_SUCCEEDED = "payment_succeeded"
    PAYMENT_FAILED = "payment_failed"
    CANCELLED_BY_USER = "cancelled_by_user"
    REFUNDED = "refunded"


@dataclass
class Transition:
    """A single valid status transition."""
    from_status: BookingStatus
    to_status: BookingStatus
    trigger: BookingTrigger


class InvalidTransitionError(Exception):
    """Raised when a transition is not valid from the current status."""


def initial_status(require_approval: bool) -> BookingStatus:
    """Status a new booking starts in."""
    return BookingStatus.PENDING if require_approval else BookingStatus.CONFIRMED


class BookingStateMachine:
    """Deterministic status machine for a single booking."""

    TRANSITIONS: list[Transition] = [
        # --- Confirmation ---
        Transition(BookingStatus.PENDING, BookingStatus.CONFIRMED, BookingTrigger.APPROVED),
        Transition(BookingStatus.PENDING, BookingStatus.CONFIRMED,
                   BookingTrigger.PAYMENT_SUCCEEDED),
        Transition(BookingStatus.CONFIRMED, BookingStatus.CONFIRMED,
                   BookingTrigger.PAYMENT_SUCCEEDED),

        # --- Cancellation ---
        Transition(BookingStatus.PENDING, BookingStatus.CANCELLED,
                   BookingTrigger.CANCELLED_BY_USER),
        Transition(BookingStatus.CONFIRMED, BookingStatus.CANCELLED,
                   BookingTrigger.CANCELLED_BY_USER),
        Transition(BookingStatus.PENDING, BookingStatus.CANCELLED, BookingTrigger.PAYMENT_FAILED),
        Transition(BookingStatus.CONFIRMED, BookingStatus.CANCELLED,
                   BookingTrigger.PAYMENT_FAILED),
        Transition(BookingStatus.PENDING, BookingStatus.CANCELLED, BookingTrigger.REFUNDED),
        Transition(BookingStatus.CONFIRMED, BookingStatus.CANCELLED, BookingTrigger.REFUNDED),
    ]

    def __init__(self, status: BookingStatus = BookingStatus.PENDING) -> None:
        self._current_status = BookingStatus(status)

    @property
    def current_status(self) -> BookingStatus:
        return self._current_status

    def can_transition(self, trigger: BookingTrigger) -> bool:
        return trigger in self.get_valid_triggers()

    def transition(self, trigger: BookingTrigger) -> BookingStatus:
        """
        Execute a status transition.

        Raises:
            InvalidTransitionError: If no valid transition exists.
        """
        for t in self.TRANSITIONS:
            if t.from_status == self._current_status and t.trigger == trigger:
                old_status = self._current_status
                self._current_status = t.to_status
                logger.debug(
                    "Status transition: %s -> %s (trigger: %s)",
                    old_status.value, self._current_status.value, trigger.value,
                )
                return self._current_status

        valid = [t.value for t in self.get_valid_triggers()]
        raise InvalidTransitionError(
            f"No valid transition from '{self._current_status.value}' "
            f"with trigger '{trigger.value}'. Valid triggers: {valid}"
        )

    def get_valid_triggers(self) -> list[BookingTrigger]:
        """Return all triggers valid from the current status."""
        return [t.trigger for t in self.TRANSITIONS if t.from_status == self._current_status]


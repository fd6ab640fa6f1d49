"""Tests for the booking status state machine."""

import pytest

from booking_engine.core.lifecycle import (
    BookingStateMachine,
    BookingTrigger,
    InvalidTransitionError,
    initial_status,
)
from booking_engine.schemas.booking_schema import BookingStatus


class TestInitialStatus:
    def test_confirmed_without_approval(self):
        assert initial_status(False) == BookingStatus.CONFIRMED

    def test_pending_with_approval(self):
        assert initial_status(True) == BookingStatus.PENDING


class TestTransitions:
    def test_approval_confirms_pending(self):
        sm = BookingStateMachine(BookingStatus.PENDING)
        assert sm.transition(BookingTrigger.APPROVED) == BookingStatus.CONFIRMED

    def test_payment_success_confirms_pending(self):
        sm = BookingStateMachine(BookingStatus.PENDING)
        sm.transition(BookingTrigger.PAYMENT_SUCCEEDED)
        assert sm.current_status == BookingStatus.CONFIRMED

    def test_payment_success_keeps_confirmed(self):
        sm = BookingStateMachine(BookingStatus.CONFIRMED)
        assert sm.transition(BookingTrigger.PAYMENT_SUCCEEDED) == BookingStatus.CONFIRMED

    @pytest.mark.parametrize("start", [BookingStatus.PENDING, BookingStatus.CONFIRMED])
    @pytest.mark.parametrize("trigger", [
        BookingTrigger.CANCELLED_BY_USER,
        BookingTrigger.PAYMENT_FAILED,
        BookingTrigger.REFUNDED,
    ])
    def test_cancellation_paths(self, start, trigger):
        sm = BookingStateMachine(start)
        assert sm.transition(trigger) == BookingStatus.CANCELLED
        assert sm.get_valid_triggers() == []

    def test_cancelled_is_terminal(self):
        sm = BookingStateMachine(BookingStatus.CANCELLED)
        assert sm.get_valid_triggers() == []
        with pytest.raises(InvalidTransitionError):
            sm.transition(BookingTrigger.APPROVED)

    def test_approved_not_valid_from_confirmed(self):
        sm = BookingStateMachine(BookingStatus.CONFIRMED)
        assert not sm.can_transition(BookingTrigger.APPROVED)

    @pytest.mark.parametrize("status", [BookingStatus.COMPLETED, BookingStatus.NO_SHOW])
    def test_operational_outcomes_are_terminal(self, status):
        sm = BookingStateMachine(status)
        assert sm.get_valid_triggers() == []
        assert not sm.can_transition(BookingTrigger.CANCELLED_BY_USER)

    def test_no_trigger_enters_operational_outcomes(self):
        targets = {t.to_status for t in BookingStateMachine.TRANSITIONS}
        assert BookingStatus.COMPLETED not in targets
        assert BookingStatus.NO_SHOW not in targets

    def test_accepts_plain_string_status(self):
        assert BookingStateMachine("pending").current_status == BookingStatus.PENDING

    def test_failed_transition_keeps_status(self):
        sm = BookingStateMachine(BookingStatus.CANCELLED)
        with pytest.raises(InvalidTransitionError, match="Valid triggers"):
            sm.transition(BookingTrigger.PAYMENT_SUCCEEDED)
        assert sm.current_status == BookingStatus.CANCELLED

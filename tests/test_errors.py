"""Tests for domain error rendering."""

from booking_engine.errors import MESSAGE_TEMPLATES, BookingError, BookingErrorKind, not_found


class TestBookingError:
    def test_every_kind_has_a_template(self):
        assert set(MESSAGE_TEMPLATES) == set(BookingErrorKind)

    def test_context_fills_template(self):
        err = BookingError(BookingErrorKind.DEADLINE_PASSED, hours=24)
        assert str(err) == "Cancellation must be made at least 24 hours in advance"
        assert err.context == {"hours": 24}

    def test_default_context(self):
        assert BookingError(BookingErrorKind.UNAUTHORIZED).message == "Unauthorized to make this booking"
        assert BookingError(BookingErrorKind.INTERNAL_FAILURE).message == "Failed to complete the operation"

    def test_not_found_helper(self):
        err = not_found("Booking")
        assert err.kind == BookingErrorKind.NOT_FOUND
        assert err.message == "Booking not found"

    def test_kind_values_are_strings(self):
        assert BookingErrorKind.CONFLICT == "conflict"
        assert repr(BookingError(BookingErrorKind.CONFLICT)) == (
            "BookingError('conflict', 'Booking time conflicts with existing booking')"
        )

"""Tests for booking price calculation."""

from booking_engine.core.pricing import calculate_booking_price
from tests.conftest import make_service


class TestCalculateBookingPrice:
    def test_price_scales_with_participants(self):
        service = make_service(price=100, duration=60)
        assert calculate_booking_price(service, participants=2) == 200

    def test_price_scales_with_duration(self):
        service = make_service(price=100, duration=60)
        assert calculate_booking_price(service, participants=1, duration=30) == 50

    def test_defaults_to_single_participant_full_duration(self):
        assert calculate_booking_price(make_service(price=1000)) == 1000

    def test_fractional_result_rounds_half_up(self):
        service = make_service(price=100, duration=60)
        # 100 * 20/60 = 33.33...
        assert calculate_booking_price(service, duration=20) == 33
        # 5 * 30/60 = 2.5
        assert calculate_booking_price(make_service(price=5, duration=60), duration=30) == 3

    def test_free_service(self):
        assert calculate_booking_price(make_service(price=0), participants=10) == 0

    def test_returns_int(self):
        assert isinstance(calculate_booking_price(make_service(price=99.5)), int)

"""Tests for configuration loading and validation."""

from dataclasses import replace

import pytest

from booking_engine.config import (
    AppConfig,
    BookingRulesConfig,
    NotificationConfig,
    PaymentConfig,
    _optional_int,
    _safe_bool,
    _safe_int,
    _validate_config,
)


def _rules(**overrides) -> BookingRulesConfig:
    values = {
        "min_advance_time": None,
        "max_advance_days": None,
        "allow_cancellation": True,
        "cancellation_deadline_hours": None,
        "require_approval": False,
        "duration_tolerance_minutes": 5,
    }
    values.update(overrides)
    return BookingRulesConfig(**values)


def _config(**overrides) -> AppConfig:
    values = {
        "rules": _rules(),
        "payment": PaymentConfig(enabled=False, provider="stripe", currency="USD"),
        "notifications": NotificationConfig(
            enabled=True, send_confirmation=True, send_reminder=False, reminder_hours=24
        ),
        "time_zone": "UTC",
        "default_currency": "USD",
        "log_level": "INFO",
        "app_name": "test",
    }
    values.update(overrides)
    return AppConfig(**values)


class TestConfigValidation:
    def test_default_config_passes_validation(self):
        _validate_config(_config())  # should not raise

    def test_unknown_time_zone(self):
        with pytest.raises(ValueError, match="BOOKING_TIME_ZONE"):
            _validate_config(_config(time_zone="Mars/Olympus_Mons"))

    def test_bad_currency(self):
        with pytest.raises(ValueError, match="DEFAULT_CURRENCY"):
            _validate_config(_config(default_currency="DOLLARS"))

    def test_negative_tolerance(self):
        with pytest.raises(ValueError, match="BOOKING_DURATION_TOLERANCE_MINUTES"):
            _validate_config(_config(rules=_rules(duration_tolerance_minutes=-1)))

    def test_negative_deadline(self):
        with pytest.raises(ValueError, match="BOOKING_CANCELLATION_DEADLINE_HOURS"):
            _validate_config(_config(rules=_rules(cancellation_deadline_hours=-2)))

    def test_reminder_hours_minimum(self):
        notifications = NotificationConfig(
            enabled=True, send_confirmation=True, send_reminder=True, reminder_hours=0
        )
        with pytest.raises(ValueError, match="NOTIFY_REMINDER_HOURS"):
            _validate_config(_config(notifications=notifications))

    def test_stripe_requires_secret_key(self):
        payment = PaymentConfig(enabled=True, provider="stripe", stripe_secret_key="", currency="USD")
        with pytest.raises(ValueError, match="STRIPE_SECRET_KEY"):
            _validate_config(_config(payment=payment))

    def test_stripe_requires_webhook_secret(self):
        payment = PaymentConfig(
            enabled=True, provider="stripe", stripe_secret_key="sk_test", stripe_webhook_secret="",
            currency="USD",
        )
        with pytest.raises(ValueError, match="STRIPE_WEBHOOK_SECRET"):
            _validate_config(_config(payment=payment))

    def test_custom_provider_needs_no_stripe_keys(self):
        payment = PaymentConfig(enabled=True, provider="custom", stripe_secret_key="", currency="USD")
        _validate_config(_config(payment=payment))

    def test_configs_are_frozen(self):
        config = _config()
        with pytest.raises(AttributeError):
            config.time_zone = "Europe/Paris"  # type: ignore[misc]
        assert replace(config, time_zone="Europe/Paris").time_zone == "Europe/Paris"


class TestEnvParsing:
    def test_safe_int_parsing(self):
        assert _safe_int("NONEXISTENT_VAR_12345", "42") == 42

    def test_safe_int_invalid(self, monkeypatch):
        monkeypatch.setenv("BOOKING_TEST_INT", "ten")
        with pytest.raises(ValueError, match="BOOKING_TEST_INT"):
            _safe_int("BOOKING_TEST_INT", "0")

    def test_optional_int_unset(self, monkeypatch):
        monkeypatch.delenv("BOOKING_TEST_OPT", raising=False)
        assert _optional_int("BOOKING_TEST_OPT") is None

    def test_optional_int_blank(self, monkeypatch):
        monkeypatch.setenv("BOOKING_TEST_OPT", "  ")
        assert _optional_int("BOOKING_TEST_OPT") is None

    def test_optional_int_set(self, monkeypatch):
        monkeypatch.setenv("BOOKING_TEST_OPT", "48")
        assert _optional_int("BOOKING_TEST_OPT") == 48

    @pytest.mark.parametrize("raw, expected", [
        ("true", True), ("1", True), ("YES", True), ("off", False), ("0", False),
    ])
    def test_safe_bool(self, monkeypatch, raw, expected):
        monkeypatch.setenv("BOOKING_TEST_BOOL", raw)
        assert _safe_bool("BOOKING_TEST_BOOL", "false") is expected

    def test_safe_bool_invalid(self, monkeypatch):
        monkeypatch.setenv("BOOKING_TEST_BOOL", "maybe")
        with pytest.raises(ValueError, match="BOOKING_TEST_BOOL"):
            _safe_bool("BOOKING_TEST_BOOL", "false")

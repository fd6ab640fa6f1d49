"""
Centralized configuration with environment variable overrides.

Booking rules, payment credentials, and notification settings are all
configurable here. Nothing is hardcoded in the lifecycle or tool logic.
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Optional

from dotenv import load_dotenv

from booking_engine.logging_context import RequestIdFilter
from booking_engine.utils import resolve_timezone

load_dotenv()

logger = logging.getLogger(__name__)


def _safe_int(env_var: str, default: str) -> int:
    """Parse an integer from an env var with a clear error on bad values."""
    raw = os.getenv(env_var, default)
    try:
        return int(raw)
    except (ValueError, TypeError):
        raise ValueError(
            f"Invalid integer for {env_var}: {raw!r}"
        ) from None


def _optional_int(env_var: str) -> Optional[int]:
    """Parse an optional integer; unset or empty means no value."""
    raw = os.getenv(env_var)
    if raw is None or not raw.strip():
        return None
    return _safe_int(env_var, raw)


def _safe_bool(env_var: str, default: str) -> bool:
    raw = os.getenv(env_var, default).strip().lower()
    if raw in ("1", "true", "yes", "on"):
        return True
    if raw in ("0", "false", "no", "off"):
        return False
    raise ValueError(f"Invalid boolean for {env_var}: {raw!r}")


@dataclass(frozen=True)
class BookingRulesConfig:
    """Scheduling and cancellation rules applied to every booking."""

    min_advance_time: Optional[int] = _optional_int("BOOKING_MIN_ADVANCE_MINUTES")
    max_advance_days: Optional[int] = _optional_int("BOOKING_MAX_ADVANCE_DAYS")
    allow_cancellation: bool = _safe_bool("BOOKING_ALLOW_CANCELLATION", "true")
    cancellation_deadline_hours: Optional[int] = _optional_int(
        "BOOKING_CANCELLATION_DEADLINE_HOURS"
    )
    require_approval: bool = _safe_bool("BOOKING_REQUIRE_APPROVAL", "false")
    duration_tolerance_minutes: int = _safe_int("BOOKING_DURATION_TOLERANCE_MINUTES", "5")


@dataclass(frozen=True)
class PaymentConfig:
    """Payment provider settings."""

    enabled: bool = _safe_bool("PAYMENT_ENABLED", "false")
    provider: str = os.getenv("PAYMENT_PROVIDER", "stripe")
    stripe_secret_key: str = os.getenv("STRIPE_SECRET_KEY", "")
    stripe_publishable_key: str = os.getenv("STRIPE_PUBLISHABLE_KEY", "")
    stripe_webhook_secret: str = os.getenv("STRIPE_WEBHOOK_SECRET", "")
    currency: str = os.getenv("PAYMENT_CURRENCY", "USD")
    automatic_payment_methods: bool = _safe_bool("STRIPE_AUTOMATIC_PAYMENT_METHODS", "true")


@dataclass(frozen=True)
class NotificationConfig:
    """Notification delivery toggles."""

    enabled: bool = _safe_bool("NOTIFICATIONS_ENABLED", "true")
    send_confirmation: bool = _safe_bool("NOTIFY_SEND_CONFIRMATION", "true")
    send_reminder: bool = _safe_bool("NOTIFY_SEND_REMINDER", "false")
    reminder_hours: int = _safe_int("NOTIFY_REMINDER_HOURS", "24")


@dataclass(frozen=True)
class AppConfig:
    """Root configuration aggregating all sub-configs."""

    rules: BookingRulesConfig = field(default_factory=BookingRulesConfig)
    payment: PaymentConfig = field(default_factory=PaymentConfig)
    notifications: NotificationConfig = field(default_factory=NotificationConfig)
    time_zone: str = os.getenv("BOOKING_TIME_ZONE", "UTC")
    default_currency: str = os.getenv("DEFAULT_CURRENCY", "USD")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    app_name: str = os.getenv("APP_NAME", "booking-engine")


def _validate_config(config: AppConfig) -> None:
    """Validate configuration values are within acceptable ranges."""
    try:
        resolve_timezone(config.time_zone)
    except (ValueError, KeyError):
        raise ValueError(f"BOOKING_TIME_ZONE is not a known time zone: {config.time_zone!r}") from None

    for name, currency in [
        ("DEFAULT_CURRENCY", config.default_currency),
        ("PAYMENT_CURRENCY", config.payment.currency),
    ]:
        if len(currency) != 3 or not currency.isalpha():
            raise ValueError(f"{name} must be a 3-letter currency code, got {currency!r}")

    rules = config.rules
    if rules.duration_tolerance_minutes < 0:
        raise ValueError(
            "BOOKING_DURATION_TOLERANCE_MINUTES must be >= 0, "
            f"got {rules.duration_tolerance_minutes}"
        )
    for name, value in [
        ("BOOKING_MIN_ADVANCE_MINUTES", rules.min_advance_time),
        ("BOOKING_MAX_ADVANCE_DAYS", rules.max_advance_days),
        ("BOOKING_CANCELLATION_DEADLINE_HOURS", rules.cancellation_deadline_hours),
    ]:
        if value is not None and value < 0:
            raise ValueError(f"{name} must be >= 0, got {value}")

    if config.notifications.reminder_hours < 1:
        raise ValueError(
            f"NOTIFY_REMINDER_HOURS must be >= 1, got {config.notifications.reminder_hours}"
        )

    payment = config.payment
    if payment.enabled and payment.provider == "stripe":
        if not payment.stripe_secret_key:
            raise ValueError("STRIPE_SECRET_KEY is required when Stripe payments are enabled")
        if not payment.stripe_webhook_secret:
            raise ValueError("STRIPE_WEBHOOK_SECRET is required when Stripe payments are enabled")


def load_config() -> AppConfig:
    """Load and validate application configuration."""
    config = AppConfig()
    _validate_config(config)
    root = logging.getLogger()
    existing = list(root.handlers)
    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format="%(asctime)s [%(name)s] [%(request_id)s] %(levelname)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    # Only the handler installed here uses the request_id format.
    for handler in root.handlers:
        if handler not in existing:
            handler.addFilter(RequestIdFilter())
    logger.info("Configuration loaded for '%s'", config.app_name)
    return config


# Singleton instance
settings = load_config()

"""Shared test fixtures and helpers."""

from datetime import datetime, timedelta, timezone
from typing import Any, Optional

import pytest

from booking_engine.config import AppConfig, BookingRulesConfig, NotificationConfig, PaymentConfig
from booking_engine.core.hooks import LifecycleObserver
from booking_engine.core.manager import BookingManager
from booking_engine.payments.gateway import WebhookVerificationError
from booking_engine.schemas.booking_schema import Booking, BookingRequest, Caller
from booking_engine.schemas.payment_schema import (
    CheckoutSessionResult,
    GatewayCustomer,
    PaymentEvent,
    PaymentIntentResult,
    RefundResult,
)
from booking_engine.schemas.service_schema import Service
from booking_engine.tools.catalog import SERVICE_MODEL, ServiceCatalog
from booking_engine.tools.storage import InMemoryAdapter

# Monday 2025-03-17 09:00 UTC
NOW = datetime(2025, 3, 17, 9, 0, tzinfo=timezone.utc)

USER = Caller(id="user-1", email="jane@example.com", name="Jane Doe")
OTHER_USER = Caller(id="user-2", email="sam@example.com")
ADMIN = Caller(id="admin-1", email="admin@example.com", role="admin")


def make_service(**overrides: Any) -> Service:
    """Helper to create a Service with sensible defaults."""
    data = {
        "id": "svc-1",
        "name": "Consultation",
        "duration": 60,
        "price": 1000,
        "currency": "USD",
    }
    data.update(overrides)
    return Service(**data)


def make_config(
    payment_enabled: bool = False,
    notifications: Optional[NotificationConfig] = None,
    **rules: Any,
) -> AppConfig:
    """Helper to build an AppConfig independent of the process environment."""
    rule_values = {
        "min_advance_time": None,
        "max_advance_days": None,
        "allow_cancellation": True,
        "cancellation_deadline_hours": None,
        "require_approval": False,
        "duration_tolerance_minutes": 5,
    }
    rule_values.update(rules)
    return AppConfig(
        rules=BookingRulesConfig(**rule_values),
        payment=PaymentConfig(
            enabled=payment_enabled,
            provider="fake",
            stripe_secret_key="",
            stripe_webhook_secret="",
            currency="USD",
        ),
        notifications=notifications or NotificationConfig(
            enabled=True, send_confirmation=True, send_reminder=True, reminder_hours=24
        ),
        time_zone="UTC",
        default_currency="USD",
    )


def make_request(
    start: datetime, minutes: int = 60, service_id: str = "svc-1", **extra: Any
) -> BookingRequest:
    return BookingRequest(
        service_id=service_id,
        start_date=start,
        end_date=start + timedelta(minutes=minutes),
        **extra,
    )


class Clock:
    """Mutable clock so tests can move time forward."""

    def __init__(self, now: datetime = NOW) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **delta: float) -> None:
        self.now = self.now + timedelta(**delta)


class RecordingObserver(LifecycleObserver):
    def __init__(self) -> None:
        self.events: list[tuple[str, str]] = []
        self.payment_data: list[Any] = []

    def on_booking_created(self, booking: Booking) -> None:
        self.events.append(("created", booking.id))

    def on_booking_confirmed(self, booking: Booking) -> None:
        self.events.append(("confirmed", booking.id))

    def on_booking_cancelled(self, booking: Booking) -> None:
        self.events.append(("cancelled", booking.id))

    def on_payment_completed(self, booking: Booking, payment_data: Any) -> None:
        self.events.append(("payment_completed", booking.id))
        self.payment_data.append(payment_data)

    def on_booking_reminder(self, booking: Booking) -> None:
        self.events.append(("reminder", booking.id))

    def kinds(self) -> list[str]:
        return [kind for kind, _ in self.events]


class ExplodingObserver(LifecycleObserver):
    def on_booking_created(self, booking: Booking) -> None:
        raise RuntimeError("mail server down")

    def on_booking_cancelled(self, booking: Booking) -> None:
        raise RuntimeError("mail server down")


class FakeGateway:
    """In-process payment gateway that records calls."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, Any]] = []
        self.fail_on: set[str] = set()
        self.next_event: Optional[PaymentEvent] = None
        self.intent_status = "requires_payment_method"

    def _maybe_fail(self, name: str) -> None:
        self.calls.append((name, None))
        if name in self.fail_on:
            raise RuntimeError(f"{name} unavailable")

    def create_or_get_customer(self, user_id, email, name=None):
        self._maybe_fail("create_or_get_customer")
        return GatewayCustomer(id=f"cus_{user_id}", email=email)

    def create_payment_intent(self, booking, description=None, metadata=None):
        self._maybe_fail("create_payment_intent")
        return PaymentIntentResult(
            id=f"pi_{booking.id}",
            client_secret=f"pi_{booking.id}_secret",
            status="requires_payment_method",
            amount=int(booking.total_price),
        )

    def create_checkout_session(self, booking, success_url, cancel_url, customer_email=None):
        self._maybe_fail("create_checkout_session")
        return CheckoutSessionResult(id=f"cs_{booking.id}", url="https://pay.example.com/cs")

    def process_refund(self, payment_intent_id, amount=None, reason=None, metadata=None):
        self._maybe_fail("process_refund")
        self.calls[-1] = ("process_refund", {"amount": amount, "reason": reason, "metadata": metadata})
        return RefundResult(id=f"re_{payment_intent_id}", amount=amount or 0, status="succeeded")

    def retrieve_payment_intent(self, payment_intent_id):
        self._maybe_fail("retrieve_payment_intent")
        return PaymentIntentResult(
            id=payment_intent_id, client_secret=f"{payment_intent_id}_secret", status=self.intent_status
        )

    def verify_and_parse_webhook(self, raw_body, signature):
        if signature != "valid":
            raise WebhookVerificationError("Invalid signature")
        return self.next_event


def payment_event(event_type: str, booking_id: Optional[str], **fields: Any) -> PaymentEvent:
    obj = {"id": fields.pop("id", "pi_123"), **fields}
    if booking_id is not None:
        obj["metadata"] = {"bookingId": booking_id}
    return PaymentEvent(id="evt_1", type=event_type, data={"object": obj})


@pytest.fixture
def adapter():
    return InMemoryAdapter()


@pytest.fixture
def catalog(adapter):
    return ServiceCatalog(adapter)


@pytest.fixture
def clock():
    return Clock()


@pytest.fixture
def observer():
    return RecordingObserver()


@pytest.fixture
def gateway():
    return FakeGateway()


@pytest.fixture
def seed_service(adapter):
    """Store a service directly and return it."""
    def _seed(**overrides: Any) -> Service:
        service = make_service(**overrides)
        adapter.create(SERVICE_MODEL, service.model_dump())
        return service
    return _seed


@pytest.fixture
def make_manager(adapter, catalog, clock, observer):
    """Factory for a BookingManager wired to the shared fixtures."""
    def _make(config: Optional[AppConfig] = None, **kwargs: Any) -> BookingManager:
        kwargs.setdefault("observers", [observer])
        return BookingManager(
            adapter, config or make_config(), catalog=catalog, clock=clock, **kwargs
        )
    return _make


@pytest.fixture
def manager(make_manager, seed_service):
    seed_service()
    return make_manager()

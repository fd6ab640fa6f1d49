"""
Payment gateway contract and provider registry.

The lifecycle manager only talks to a PaymentGateway; concrete providers
are registered here by name and created from configuration, so the manager
never imports a provider SDK directly.
"""

import logging
from typing import Any, Callable, Optional, Protocol

from booking_engine.schemas.booking_schema import Booking
from booking_engine.schemas.payment_schema import (
    CheckoutSessionResult,
    GatewayCustomer,
    PaymentEvent,
    PaymentIntentResult,
    RefundResult,
)

logger = logging.getLogger(__name__)


class WebhookVerificationError(Exception):
    """Raised when a webhook payload or signature cannot be verified."""


class PaymentGateway(Protocol):
    """Operations the booking lifecycle needs from a payment provider."""

    def create_or_get_customer(
        self, user_id: str, email: Optional[str], name: Optional[str] = None
    ) -> GatewayCustomer: ...

    def create_payment_intent(
        self,
        booking: Booking,
        description: Optional[str] = None,
        metadata: Optional[dict[str, str]] = None,
    ) -> PaymentIntentResult: ...

    def create_checkout_session(
        self,
        booking: Booking,
        success_url: str,
        cancel_url: str,
        customer_email: Optional[str] = None,
    ) -> CheckoutSessionResult: ...

    def process_refund(
        self,
        payment_intent_id: str,
        amount: Optional[int] = None,
        reason: Optional[str] = None,
        metadata: Optional[dict[str, str]] = None,
    ) -> RefundResult: ...

    def retrieve_payment_intent(self, payment_intent_id: str) -> PaymentIntentResult: ...

    def verify_and_parse_webhook(self, raw_body: bytes | str, signature: str) -> PaymentEvent: ...


_GATEWAY_REGISTRY: dict[str, Callable[..., Any]] = {}


def register_gateway(name: str, factory: Callable[..., Any]) -> None:
    """Register a payment gateway factory by provider name."""
    _GATEWAY_REGISTRY[name] = factory
    logger.debug("Payment gateway registered: %s", name)


def create_gateway(name: str, **kwargs: Any) -> PaymentGateway:
    """Create a gateway instance by registered provider name.

    Raises:
        KeyError: If the provider name is not registered.
    """
    if name not in _GATEWAY_REGISTRY:
        registered = list(_GATEWAY_REGISTRY.keys())
        raise KeyError(f"Payment provider '{name}' not registered. Available: {registered}")
    return _GATEWAY_REGISTRY[name](**kwargs)


def get_registered_gateways() -> list[str]:
    """Return names of all registered providers."""
    return list(_GATEWAY_REGISTRY.keys())


def _auto_register() -> None:
    """Register built-in providers. Called once at import time."""
    from booking_engine.payments.stripe_gateway import StripePaymentGateway

    register_gateway("stripe", StripePaymentGateway)


_auto_register()

from booking_engine.payments.gateway import (
    PaymentGateway,
    WebhookVerificationError,
    create_gateway,
    get_registered_gateways,
    register_gateway,
)
from booking_engine.payments.stripe_gateway import StripePaymentGateway
from booking_engine.payments.webhooks import WebhookDispatcher

__all__ = [
    "PaymentGateway", "WebhookVerificationError", "StripePaymentGateway", "WebhookDispatcher",
    "create_gateway", "register_gateway", "get_registered_gateways",
]

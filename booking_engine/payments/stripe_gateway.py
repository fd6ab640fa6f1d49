"""
Stripe implementation of the payment gateway.

Amounts are passed through unchanged: bookings already store totals in the
smallest currency unit, which is what Stripe expects. Every intent, session,
and refund carries ``bookingId`` in its metadata so webhook events can be
routed back to the booking.
"""

import logging
from typing import Any, Optional

import stripe

from booking_engine.config import PaymentConfig
from booking_engine.payments.gateway import WebhookVerificationError
from booking_engine.schemas.booking_schema import Booking
from booking_engine.schemas.payment_schema import (
    CheckoutSessionResult,
    GatewayCustomer,
    PaymentEvent,
    PaymentIntentResult,
    RefundResult,
)

logger = logging.getLogger(__name__)

DEFAULT_REFUND_REASON = "requested_by_customer"


def _plain(obj: Any) -> dict[str, Any]:
    to_dict = getattr(obj, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    return dict(obj)


def _booking_metadata(booking: Booking, extra: Optional[dict[str, str]] = None) -> dict[str, str]:
    return {
        "bookingId": booking.id,
        "serviceId": booking.service_id,
        "userId": booking.user_id,
        **(extra or {}),
    }


class StripePaymentGateway:
    """Payment gateway backed by the Stripe API."""

    def __init__(self, config: PaymentConfig) -> None:
        if not config.stripe_secret_key:
            raise ValueError("Stripe secret key is not configured")
        self.config = config
        self._api_key = config.stripe_secret_key

    def create_or_get_customer(
        self, user_id: str, email: Optional[str], name: Optional[str] = None
    ) -> GatewayCustomer:
        if email:
            existing = stripe.Customer.list(email=email, limit=1, api_key=self._api_key)
            if existing.data:
                customer = existing.data[0]
                return GatewayCustomer(id=customer.id, email=getattr(customer, "email", None))

        params: dict[str, Any] = {"metadata": {"userId": user_id}}
        if email:
            params["email"] = email
        if name:
            params["name"] = name
        customer = stripe.Customer.create(api_key=self._api_key, **params)
        logger.info("Stripe customer created for user %s: %s", user_id, customer.id)
        return GatewayCustomer(id=customer.id, email=email)

    def create_payment_intent(
        self,
        booking: Booking,
        description: Optional[str] = None,
        metadata: Optional[dict[str, str]] = None,
    ) -> PaymentIntentResult:
        intent = stripe.PaymentIntent.create(
            amount=int(booking.total_price),
            currency=booking.currency.lower(),
            description=description or f"Payment for booking {booking.id}",
            metadata=_booking_metadata(booking, metadata),
            automatic_payment_methods={"enabled": self.config.automatic_payment_methods},
            api_key=self._api_key,
        )
        logger.info("Stripe payment intent %s created for booking %s", intent.id, booking.id)
        return PaymentIntentResult(
            id=intent.id,
            client_secret=getattr(intent, "client_secret", None),
            status=getattr(intent, "status", None),
            amount=getattr(intent, "amount", None),
        )

    def create_checkout_session(
        self,
        booking: Booking,
        success_url: str,
        cancel_url: str,
        customer_email: Optional[str] = None,
    ) -> CheckoutSessionResult:
        params: dict[str, Any] = {
            "payment_method_types": ["card"],
            "line_items": [
                {
                    "price_data": {
                        "currency": booking.currency.lower(),
                        "product_data": {
                            "name": f"Booking {booking.id}",
                            "description": f"Service booking for {booking.service_id}",
                        },
                        "unit_amount": int(booking.total_price),
                    },
                    "quantity": 1,
                }
            ],
            "mode": "payment",
            "success_url": success_url,
            "cancel_url": cancel_url,
            "metadata": _booking_metadata(booking),
            "payment_intent_data": {"metadata": _booking_metadata(booking)},
        }
        if customer_email:
            params["customer_email"] = customer_email
        session = stripe.checkout.Session.create(api_key=self._api_key, **params)
        return CheckoutSessionResult(id=session.id, url=getattr(session, "url", None))

    def process_refund(
        self,
        payment_intent_id: str,
        amount: Optional[int] = None,
        reason: Optional[str] = None,
        metadata: Optional[dict[str, str]] = None,
    ) -> RefundResult:
        params: dict[str, Any] = {
            "payment_intent": payment_intent_id,
            "reason": reason or DEFAULT_REFUND_REASON,
        }
        if amount is not None:
            params["amount"] = amount
        if metadata:
            params["metadata"] = metadata
        refund = stripe.Refund.create(api_key=self._api_key, **params)
        logger.info("Stripe refund %s created for %s", refund.id, payment_intent_id)
        return RefundResult(id=refund.id, amount=refund.amount, status=getattr(refund, "status", None))

    def retrieve_payment_intent(self, payment_intent_id: str) -> PaymentIntentResult:
        intent = stripe.PaymentIntent.retrieve(payment_intent_id, api_key=self._api_key)
        return PaymentIntentResult(
            id=intent.id,
            client_secret=getattr(intent, "client_secret", None),
            status=getattr(intent, "status", None),
            amount=getattr(intent, "amount", None),
        )

    def verify_and_parse_webhook(self, raw_body: bytes | str, signature: str) -> PaymentEvent:
        if not self.config.stripe_webhook_secret:
            raise WebhookVerificationError("Webhook secret not configured")
        try:
            event = stripe.Webhook.construct_event(
                raw_body, signature, self.config.stripe_webhook_secret
            )
        except stripe.SignatureVerificationError as e:
            logger.warning("Invalid webhook signature: %s", e)
            raise WebhookVerificationError("Invalid signature") from e
        except ValueError as e:
            logger.warning("Invalid webhook payload: %s", e)
            raise WebhookVerificationError("Invalid payload") from e

        payload = _plain(event)
        return PaymentEvent(id=payload.get("id"), type=payload["type"], data=payload.get("data") or {})

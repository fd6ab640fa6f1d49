"""Payment gateway result models."""

from typing import Any, Optional

from pydantic import BaseModel, Field


class GatewayCustomer(BaseModel):
    id: str
    email: Optional[str] = None


class PaymentIntentResult(BaseModel):
    """Provider payment intent."""
    id: str
    client_secret: Optional[str] = None
    status: Optional[str] = None
    amount: Optional[int] = None


class CheckoutSessionResult(BaseModel):
    """Hosted checkout page."""
    id: str
    url: Optional[str] = None


class RefundResult(BaseModel):
    id: str
    amount: int
    status: Optional[str] = None


class PaymentEvent(BaseModel):
    """Verified provider webhook event."""
    id: Optional[str] = None
    type: str
    data: dict[str, Any] = Field(default_factory=dict)


class CheckoutRequest(BaseModel):
    """Checkout creation request."""
    booking_id: str
    success_url: str = Field(pattern=r"^https?://")
    cancel_url: str = Field(pattern=r"^https?://")

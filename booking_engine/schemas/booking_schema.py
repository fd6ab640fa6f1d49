"""Booking data models and request/response shapes."""

from datetime import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from booking_engine.utils import ensure_aware


class BookingStatus(str, Enum):
    """Scheduling state of a booking."""
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    COMPLETED = "completed"
    NO_SHOW = "no-show"
    # Reserved; nothing transitions into these.
    RESCHEDULED = "rescheduled"
    WAITLISTED = "waitlisted"


class PaymentStatus(str, Enum):
    """Settlement state of a booking's charge."""
    PENDING = "pending"
    PAID = "paid"
    FAILED = "failed"
    REFUNDED = "refunded"
    PARTIALLY_REFUNDED = "partially_refunded"


ACTIVE_STATUSES: tuple[BookingStatus, ...] = (BookingStatus.CONFIRMED, BookingStatus.PENDING)


class Caller(BaseModel):
    """Authenticated user on whose behalf an operation runs."""
    id: str
    email: Optional[str] = None
    name: Optional[str] = None
    role: Optional[str] = None
    session_id: Optional[str] = None

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"


class Booking(BaseModel):
    """A reservation of a service over a time interval."""
    id: str
    service_id: str
    user_id: str
    start_date: datetime
    end_date: datetime
    status: BookingStatus
    participants: int = Field(default=1, ge=1)
    total_price: float
    currency: str
    notes: Optional[str] = None
    contact_email: Optional[str] = None
    contact_phone: Optional[str] = None
    payment_status: Optional[PaymentStatus] = None
    payment_transaction_id: Optional[str] = None
    stripe_payment_intent_id: Optional[str] = None
    stripe_customer_id: Optional[str] = None
    stripe_checkout_session_id: Optional[str] = None
    metadata: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime
    updated_at: datetime

    @field_validator("start_date", "end_date", "created_at", "updated_at")
    @classmethod
    def _aware(cls, value: datetime) -> datetime:
        return ensure_aware(value)

    @property
    def is_active(self) -> bool:
        return self.status in ACTIVE_STATUSES


class BookingRequest(BaseModel):
    """Validated booking creation request."""
    service_id: str
    start_date: datetime
    end_date: datetime
    participants: int = Field(default=1, ge=1)
    notes: Optional[str] = None
    contact_email: Optional[str] = None
    contact_phone: Optional[str] = None
    metadata: Optional[dict[str, Any]] = None

    @field_validator("start_date", "end_date")
    @classmethod
    def _aware(cls, value: datetime) -> datetime:
        return ensure_aware(value)


class PaymentSetup(BaseModel):
    """Payment portion of a creation result; ``error`` marks a failed setup."""
    client_secret: Optional[str] = None
    payment_intent_id: Optional[str] = None
    customer_id: Optional[str] = None
    error: Optional[str] = None


class CreateBookingResult(BaseModel):
    """Booking creation result."""
    booking: Booking
    payment: PaymentSetup = Field(default_factory=PaymentSetup)


class PaymentStatusResult(BaseModel):
    """Stored payment status plus the live provider view when available."""
    booking_id: str
    payment_status: Optional[PaymentStatus] = None
    provider_status: Optional[str] = None
    client_secret: Optional[str] = None

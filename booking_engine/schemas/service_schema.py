"""Service catalog data models."""

from datetime import datetime
from enum import Enum
from typing import Any, Literal, Optional

from pydantic import BaseModel, Field, model_validator

CLOCK_REGEX = r"^([01]\d|2[0-3]):[0-5]\d$"


class ServiceType(str, Enum):
    """Kind of offering; informational only."""
    APPOINTMENT = "appointment"
    EVENT = "event"
    RENTAL = "rental"
    SUBSCRIPTION = "subscription"
    COURSE = "course"
    TABLE = "table"
    ROOM = "room"
    CUSTOM = "custom"


class TimeSlot(BaseModel):
    """Recurring weekly window in which a booking may start."""
    day_of_week: int = Field(ge=0, le=6)  # 0 = Sunday
    start_time: str = Field(pattern=CLOCK_REGEX)
    end_time: str = Field(pattern=CLOCK_REGEX)


class BookingWindow(BaseModel):
    """Per-service advance booking limits."""
    min_advance_hours: Optional[float] = Field(default=None, ge=0)
    max_advance_days: Optional[int] = Field(default=None, ge=0)


class CancellationPolicy(BaseModel):
    """Per-service cancellation rules."""
    allow_cancellation: bool = True
    cutoff_hours: Optional[int] = Field(default=None, ge=0)
    refund_policy: Optional[Literal["full", "partial", "none"]] = None
    refund_percentage: Optional[float] = Field(default=None, ge=0, le=100)


class Service(BaseModel):
    """A bookable offering with fixed duration, price, and scheduling rules."""
    id: str
    name: str
    description: Optional[str] = None
    duration: int = Field(gt=0)  # minutes
    price: float = Field(ge=0)  # smallest currency unit
    currency: str = Field(min_length=3, max_length=3)
    max_participants: Optional[int] = Field(default=None, gt=0)
    min_participants: Optional[int] = Field(default=None, gt=0)
    category: Optional[str] = None
    type: ServiceType = ServiceType.APPOINTMENT
    requires_approval: bool = False
    booking_window: Optional[BookingWindow] = None
    cancellation_policy: Optional[CancellationPolicy] = None
    available_slots: list[TimeSlot] = Field(default_factory=list)
    is_active: bool = True
    # Stored but not interpreted by any scheduling or pricing rule.
    recurring: Optional[dict[str, Any]] = None
    location: Optional[dict[str, Any]] = None
    pricing_tiers: Optional[list[dict[str, Any]]] = None
    required_resources: Optional[list[dict[str, Any]]] = None
    required_staff: Optional[list[dict[str, Any]]] = None
    metadata: dict[str, Any] = Field(default_factory=dict)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ServiceCreate(BaseModel):
    """Admin payload for a new service."""
    name: str = Field(min_length=1)
    description: Optional[str] = None
    duration: int = Field(gt=0)
    price: float = Field(ge=0)
    currency: str = Field(min_length=3, max_length=3)
    type: ServiceType = ServiceType.APPOINTMENT
    category: Optional[str] = None
    max_participants: Optional[int] = Field(default=None, gt=0)
    min_participants: Optional[int] = Field(default=None, gt=0)
    requires_approval: bool = False
    is_active: bool = True
    booking_window: Optional[BookingWindow] = None
    cancellation_policy: Optional[CancellationPolicy] = None
    available_slots: list[TimeSlot] = Field(default_factory=list)
    metadata: dict[str, Any] = Field(default_factory=dict)

    @model_validator(mode="after")
    def _check_participant_bounds(self) -> "ServiceCreate":
        if (
            self.min_participants is not None
            and self.max_participants is not None
            and self.min_participants > self.max_participants
        ):
            raise ValueError("min_participants cannot exceed max_participants")
        return self


class ServiceUpdate(BaseModel):
    """Admin patch for an existing service; unset fields are left alone."""
    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    duration: Optional[int] = Field(default=None, gt=0)
    price: Optional[float] = Field(default=None, ge=0)
    currency: Optional[str] = Field(default=None, min_length=3, max_length=3)
    type: Optional[ServiceType] = None
    category: Optional[str] = None
    max_participants: Optional[int] = Field(default=None, gt=0)
    min_participants: Optional[int] = Field(default=None, gt=0)
    requires_approval: Optional[bool] = None
    is_active: Optional[bool] = None
    booking_window: Optional[BookingWindow] = None
    cancellation_policy: Optional[CancellationPolicy] = None
    available_slots: Optional[list[TimeSlot]] = None
    metadata: Optional[dict[str, Any]] = None

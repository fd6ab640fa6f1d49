"""
Time validation for booking requests.

Decides whether a proposed [start, end) interval is bookable for a service.
Checks run in a fixed order and stop at the first failure, so the reason a
caller sees is always the earliest rule that was broken:

1. start must be strictly in the future
2. minimum advance notice
3. maximum advance horizon
4. end must be after start
5. duration must match the service duration within a tolerance band
6. start must fall inside one of the service's weekly slots
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone, tzinfo
from enum import Enum
from typing import Optional

from booking_engine.config import BookingRulesConfig
from booking_engine.schemas.service_schema import Service
from booking_engine.utils import clock_string, day_of_week, ensure_aware, minutes_between, utcnow

logger = logging.getLogger(__name__)

DEFAULT_DURATION_TOLERANCE_MINUTES = 5


class TimeRejection(str, Enum):
    """Why a requested interval was rejected."""
    IN_PAST = "in_past"
    TOO_SOON = "too_soon"
    TOO_FAR = "too_far"
    END_BEFORE_START = "end_before_start"
    DURATION_MISMATCH = "duration_mismatch"
    SLOT_UNAVAILABLE = "slot_unavailable"


REJECTION_MESSAGES: dict[TimeRejection, str] = {
    TimeRejection.IN_PAST: "Booking cannot be in the past",
    TimeRejection.TOO_SOON: "Booking must be at least {minutes} minutes in advance",
    TimeRejection.TOO_FAR: "Booking cannot be more than {days} days in advance",
    TimeRejection.END_BEFORE_START: "End date must be after start date",
    TimeRejection.DURATION_MISMATCH: "Booking duration must be {duration} minutes",
    TimeRejection.SLOT_UNAVAILABLE: "Selected time slot is not available for this service",
}


@dataclass
class TimeValidation:
    """Outcome of a time validation."""
    is_valid: bool
    reason: Optional[TimeRejection] = None
    message: Optional[str] = None

    @classmethod
    def valid(cls) -> "TimeValidation":
        return cls(is_valid=True)

    @classmethod
    def reject(cls, reason: TimeRejection, **context: object) -> "TimeValidation":
        return cls(
            is_valid=False,
            reason=reason,
            message=REJECTION_MESSAGES[reason].format(**context),
        )


@dataclass(frozen=True)
class SchedulingRules:
    """Advance-notice and duration rules for one validation."""
    min_advance_time: Optional[float] = None  # minutes
    max_advance_days: Optional[float] = None
    duration_tolerance_minutes: float = DEFAULT_DURATION_TOLERANCE_MINUTES

    @classmethod
    def from_config(cls, rules: BookingRulesConfig) -> "SchedulingRules":
        return cls(
            min_advance_time=rules.min_advance_time,
            max_advance_days=rules.max_advance_days,
            duration_tolerance_minutes=rules.duration_tolerance_minutes,
        )

    def for_service(self, service: Service) -> "SchedulingRules":
        """Tighten these rules with the service's own booking window.

        A window value only applies when it is stricter than the global one:
        the longer minimum notice and the shorter maximum horizon win.
        """
        window = service.booking_window
        if window is None:
            return self
        min_advance = self.min_advance_time
        if window.min_advance_hours:
            min_advance = max(min_advance or 0, window.min_advance_hours * 60)
        max_days = self.max_advance_days
        if window.max_advance_days:
            max_days = (
                window.max_advance_days
                if max_days is None
                else min(max_days, window.max_advance_days)
            )
        return SchedulingRules(
            min_advance_time=min_advance,
            max_advance_days=max_days,
            duration_tolerance_minutes=self.duration_tolerance_minutes,
        )


def _fmt(value: float) -> str:
    return f"{value:g}"


def is_time_slot_available(service: Service, start_date: datetime, tz: tzinfo = timezone.utc) -> bool:
    """Check the start moment against the service's weekly slots.

    No slots means no restriction. Both slot boundaries are inclusive, so a
    booking may start exactly at a slot's end time. The end of the booking is
    never compared against the slot.
    """
    if not service.available_slots:
        return True

    local = ensure_aware(start_date).astimezone(tz)
    weekday = day_of_week(local)
    clock = clock_string(local)

    return any(
        slot.day_of_week == weekday and slot.start_time <= clock <= slot.end_time
        for slot in service.available_slots
    )


def validate_booking_time(
    start_date: datetime,
    end_date: datetime,
    service: Service,
    rules: Optional[SchedulingRules] = None,
    *,
    now: Optional[datetime] = None,
    tz: tzinfo = timezone.utc,
) -> TimeValidation:
    """
    Validate a requested booking interval for a service.

    Args:
        start_date: Requested start. Naive values are treated as UTC.
        end_date: Requested end.
        service: The service being booked.
        rules: Advance and tolerance rules; defaults apply when omitted.
        now: Reference time, defaults to the current UTC time.
        tz: Zone in which weekly slots are evaluated.

    Returns:
        A TimeValidation carrying the first broken rule, if any.
    """
    rules = rules or SchedulingRules()
    now = ensure_aware(now) if now is not None else utcnow()
    start_date = ensure_aware(start_date)
    end_date = ensure_aware(end_date)

    if start_date <= now:
        return TimeValidation.reject(TimeRejection.IN_PAST)

    if rules.min_advance_time:
        if start_date < now + timedelta(minutes=rules.min_advance_time):
            return TimeValidation.reject(
                TimeRejection.TOO_SOON, minutes=_fmt(rules.min_advance_time)
            )

    if rules.max_advance_days:
        if start_date > now + timedelta(days=rules.max_advance_days):
            return TimeValidation.reject(
                TimeRejection.TOO_FAR, days=_fmt(rules.max_advance_days)
            )

    if end_date <= start_date:
        return TimeValidation.reject(TimeRejection.END_BEFORE_START)

    booked_minutes = minutes_between(start_date, end_date)
    if abs(booked_minutes - service.duration) > rules.duration_tolerance_minutes:
        return TimeValidation.reject(TimeRejection.DURATION_MISMATCH, duration=service.duration)

    if not is_time_slot_available(service, start_date, tz):
        return TimeValidation.reject(TimeRejection.SLOT_UNAVAILABLE)

    return TimeValidation.valid()


def validate_participants(service: Service, participants: int) -> Optional[str]:
    """Return an error message when the participant count is outside the service bounds."""
    if service.min_participants is not None and participants < service.min_participants:
        return f"At least {service.min_participants} participants required"
    if service.max_participants is not None and participants > service.max_participants:
        return f"At most {service.max_participants} participants allowed"
    return None

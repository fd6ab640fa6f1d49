from booking_engine.core.conflicts import find_conflicts, has_conflict, intervals_overlap
from booking_engine.core.hooks import (
    AuthorizationRequest,
    Authorizer,
    AvailabilityChecker,
    LifecycleObserver,
)
from booking_engine.core.lifecycle import (
    BookingStateMachine,
    BookingTrigger,
    InvalidTransitionError,
)
from booking_engine.core.pricing import calculate_booking_price
from booking_engine.core.validator import (
    SchedulingRules,
    TimeRejection,
    TimeValidation,
    is_time_slot_available,
    validate_booking_time,
)

__all__ = [
    "intervals_overlap", "find_conflicts", "has_conflict",
    "AuthorizationRequest", "Authorizer", "AvailabilityChecker", "LifecycleObserver",
    "BookingStateMachine", "BookingTrigger", "InvalidTransitionError",
    "calculate_booking_price",
    "SchedulingRules", "TimeRejection", "TimeValidation",
    "is_time_slot_available", "validate_booking_time",
]

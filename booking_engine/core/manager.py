"""
Booking lifecycle manager.

Orchestrates the service catalog, time validator, conflict detector, and
price calculator against the persistence adapter to create, confirm, and
cancel bookings, and applies payment status reports from the gateway.

Every operation is a sequence of reads followed by one write. Validation
and policy failures raise BookingError before anything is persisted.
Side effects (observer notifications) run after the write and can never
fail the operation.
"""

import uuid
from datetime import datetime, timedelta
from typing import Any, Callable, Iterable, Optional, Union

from pydantic import ValidationError

from booking_engine.config import AppConfig, settings
from booking_engine.core.conflicts import find_conflicts
from booking_engine.core.hooks import (
    AuthorizationRequest,
    Authorizer,
    AvailabilityChecker,
    LifecycleObserver,
    notify_observers,
)
from booking_engine.core.lifecycle import BookingStateMachine, BookingTrigger, initial_status
from booking_engine.core.pricing import calculate_booking_price
from booking_engine.core.validator import (
    SchedulingRules,
    validate_booking_time,
    validate_participants,
)
from booking_engine.errors import BookingError, BookingErrorKind, not_found
from booking_engine.logging_context import get_request_logger
from booking_engine.payments.gateway import (
    PaymentGateway,
    WebhookVerificationError,
    create_gateway,
    get_registered_gateways,
)
from booking_engine.payments.webhooks import (
    CHARGE_REFUNDED,
    PAYMENT_FAILED,
    PAYMENT_SUCCEEDED,
    REFUND_CREATED,
    WebhookDispatcher,
)
from booking_engine.schemas.booking_schema import (
    ACTIVE_STATUSES,
    Booking,
    BookingRequest,
    BookingStatus,
    Caller,
    CreateBookingResult,
    PaymentSetup,
    PaymentStatus,
    PaymentStatusResult,
)
from booking_engine.schemas.payment_schema import CheckoutRequest, CheckoutSessionResult, RefundResult
from booking_engine.schemas.service_schema import Service, ServiceCreate, ServiceUpdate
from booking_engine.tools.catalog import BOOKING_MODEL, ServiceCatalog
from booking_engine.tools.storage import ExclusionViolation, StorageAdapter, Where
from booking_engine.utils import ensure_aware, resolve_timezone, utcnow

logger = get_request_logger(__name__)

REFUND_REASONS = ("duplicate", "fraudulent", "requested_by_customer")
PAYMENT_SETUP_FAILED = "Payment setup failed"


def new_booking_id() -> str:
    return f"bk_{uuid.uuid4().hex[:12]}"


def _invalid_input(detail: str) -> BookingError:
    return BookingError(BookingErrorKind.INVALID_INPUT, detail=detail)


class BookingManager:
    """
    Entry point for every booking, service, and payment operation.

    Args:
        adapter: Persistence collaborator.
        config: Application configuration; the loaded settings by default.
        catalog: Service catalog; built on ``adapter`` when omitted.
        payment_gateway: Payment provider. Created from configuration when
            payments are enabled and the provider is registered.
        authorizer: Optional gate called before a booking is created.
        availability_checker: Optional external availability gate.
        observers: Receivers of lifecycle side effects.
        clock: Source of "now"; aware UTC time by default.
    """

    def __init__(
        self,
        adapter: StorageAdapter,
        config: Optional[AppConfig] = None,
        *,
        catalog: Optional[ServiceCatalog] = None,
        payment_gateway: Optional[PaymentGateway] = None,
        authorizer: Optional[Authorizer] = None,
        availability_checker: Optional[AvailabilityChecker] = None,
        observers: Optional[Iterable[LifecycleObserver]] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self.adapter = adapter
        self.config = config or settings
        self.catalog = catalog or ServiceCatalog(adapter)
        self.payment_gateway = payment_gateway
        if (
            self.payment_gateway is None
            and self.config.payment.enabled
            and self.config.payment.provider in get_registered_gateways()
        ):
            self.payment_gateway = create_gateway(
                self.config.payment.provider, config=self.config.payment
            )
        self.authorizer = authorizer
        self.availability_checker = availability_checker
        self.observers: list[LifecycleObserver] = list(observers or [])
        self._clock = clock or utcnow
        self._tz = resolve_timezone(self.config.time_zone)
        self.rules = SchedulingRules.from_config(self.config.rules)

        self.webhooks = WebhookDispatcher()
        self.webhooks.on(PAYMENT_SUCCEEDED, self._on_payment_succeeded)
        self.webhooks.on(PAYMENT_FAILED, self._on_payment_failed)
        self.webhooks.on(REFUND_CREATED, self._on_refund_created)
        self.webhooks.on(CHARGE_REFUNDED, self._on_charge_refunded)

    # ------------------------------------------------------------------ #
    # Internal helpers
    # ------------------------------------------------------------------ #

    def _now(self) -> datetime:
        return ensure_aware(self._clock())

    @property
    def payment_enabled(self) -> bool:
        return self.config.payment.enabled

    def _require_gateway(self) -> PaymentGateway:
        if not self.payment_enabled or self.payment_gateway is None:
            raise BookingError(BookingErrorKind.PAYMENT_NOT_CONFIGURED)
        return self.payment_gateway

    @staticmethod
    def _require_admin(caller: Caller) -> None:
        if not caller.is_admin:
            raise BookingError(BookingErrorKind.UNAUTHORIZED, detail="Admin access required")

    def _load_booking(self, booking_id: str) -> Booking:
        record = self.adapter.find_one(BOOKING_MODEL, [Where("id", booking_id)])
        if record is None:
            raise not_found("Booking")
        return Booking.model_validate(record)

    def _load_owned_booking(self, caller: Caller, booking_id: str) -> Booking:
        booking = self._load_booking(booking_id)
        if booking.user_id != caller.id:
            logger.warning("User %s denied access to booking %s", caller.id, booking_id)
            raise BookingError(
                BookingErrorKind.UNAUTHORIZED, detail="Unauthorized to access this booking"
            )
        return booking

    def _save(self, booking_id: str, patch: dict[str, Any]) -> Booking:
        try:
            record = self.adapter.update(BOOKING_MODEL, [Where("id", booking_id)], patch)
        except ExclusionViolation as e:
            raise BookingError(
                BookingErrorKind.CONFLICT, conflicting_ids=[e.conflicting_id]
            ) from e
        if record is None:
            raise BookingError(BookingErrorKind.INTERNAL_FAILURE, operation="update booking")
        return Booking.model_validate(record)

    def _active_bookings_for(self, service_id: str) -> list[Booking]:
        records = self.adapter.find_many(
            BOOKING_MODEL,
            [
                Where("service_id", service_id),
                Where("status", [s.value for s in ACTIVE_STATUSES], operator="in"),
            ],
        )
        return [Booking.model_validate(r) for r in records]

    def _notify(self, event: str, booking: Booking, *args: Any) -> None:
        notify_observers(self.observers, event, booking, *args)

    # ------------------------------------------------------------------ #
    # Bookings
    # ------------------------------------------------------------------ #

    def create_booking(
        self, caller: Caller, request: Union[BookingRequest, dict[str, Any]]
    ) -> CreateBookingResult:
        """
        Create a booking for the caller.

        Raises:
            BookingError: ``not_found`` for a missing or inactive service,
                ``invalid_time`` with the validator's reason, ``invalid_input``
                for participant bounds, ``unauthorized``,
                ``service_unavailable``, or ``conflict``.
        """
        if not isinstance(request, BookingRequest):
            try:
                request = BookingRequest.model_validate(request)
            except ValidationError as e:
                raise _invalid_input(str(e)) from e

        service = self.catalog.get_service(request.service_id)
        if service is None:
            raise not_found("Service")

        now = self._now()
        validation = validate_booking_time(
            request.start_date,
            request.end_date,
            service,
            self.rules.for_service(service),
            now=now,
            tz=self._tz,
        )
        if not validation.is_valid:
            logger.info("Booking rejected for service %s: %s", service.id, validation.message)
            raise BookingError(
                BookingErrorKind.INVALID_TIME,
                reason=validation.message,
                rejection=validation.reason,
            )

        participants_error = validate_participants(service, request.participants)
        if participants_error:
            raise _invalid_input(participants_error)

        if self.authorizer is not None:
            authorized = self.authorizer(AuthorizationRequest(
                user=caller,
                service_id=service.id,
                start_date=request.start_date,
                end_date=request.end_date,
                session_id=caller.session_id,
            ))
            if not authorized:
                raise BookingError(
                    BookingErrorKind.UNAUTHORIZED, detail="Unauthorized to make this booking"
                )

        if self.availability_checker is not None:
            if not self.availability_checker(service.id, request.start_date, request.end_date):
                raise BookingError(BookingErrorKind.SERVICE_UNAVAILABLE)

        conflicts = find_conflicts(
            request.start_date, request.end_date, self._active_bookings_for(service.id)
        )
        if conflicts:
            logger.info(
                "Booking conflict on service %s: overlaps %s",
                service.id, ", ".join(b.id for b in conflicts),
            )
            raise BookingError(
                BookingErrorKind.CONFLICT, conflicting_ids=[b.id for b in conflicts]
            )

        booking = Booking(
            id=new_booking_id(),
            service_id=service.id,
            user_id=caller.id,
            start_date=request.start_date,
            end_date=request.end_date,
            status=initial_status(self.config.rules.require_approval or service.requires_approval),
            participants=request.participants,
            total_price=calculate_booking_price(service, request.participants),
            currency=service.currency,
            notes=request.notes,
            contact_email=request.contact_email or caller.email,
            contact_phone=request.contact_phone,
            payment_status=PaymentStatus.PENDING if self.payment_enabled else None,
            metadata=request.metadata or {},
            created_at=now,
            updated_at=now,
        )
        try:
            record = self.adapter.create(BOOKING_MODEL, booking.model_dump())
        except ExclusionViolation as e:
            logger.info("Booking on service %s lost a concurrent race", service.id)
            raise BookingError(
                BookingErrorKind.CONFLICT, conflicting_ids=[e.conflicting_id]
            ) from e
        booking = Booking.model_validate(record)
        logger.info(
            "Booking created: %s for user %s on %s (%s)",
            booking.id, caller.id, service.id, booking.status.value,
        )

        payment = PaymentSetup()
        if self.payment_enabled:
            booking, payment = self._setup_payment(caller, service, booking)

        self._notify("on_booking_created", booking)
        if booking.status == BookingStatus.CONFIRMED and not self.payment_enabled:
            self._notify("on_booking_confirmed", booking)

        return CreateBookingResult(booking=booking, payment=payment)

    def _setup_payment(
        self, caller: Caller, service: Service, booking: Booking
    ) -> tuple[Booking, PaymentSetup]:
        """Create the provider intent for a new booking. Failures never undo the booking."""
        if self.payment_gateway is None:
            logger.error("Payments enabled but no gateway configured for booking %s", booking.id)
            return booking, PaymentSetup(error=PAYMENT_SETUP_FAILED)
        try:
            customer = self.payment_gateway.create_or_get_customer(
                caller.id, caller.email, caller.name
            )
            intent = self.payment_gateway.create_payment_intent(
                booking,
                description=f"Payment for {service.name} booking",
                metadata={"customerId": customer.id},
            )
            booking = self._save(booking.id, {
                "stripe_payment_intent_id": intent.id,
                "stripe_customer_id": customer.id,
            })
        except Exception:
            logger.exception("Failed to create payment intent for booking %s", booking.id)
            return booking, PaymentSetup(error=PAYMENT_SETUP_FAILED)
        return booking, PaymentSetup(
            client_secret=intent.client_secret,
            payment_intent_id=intent.id,
            customer_id=customer.id,
        )

    def get_booking(self, caller: Caller, booking_id: str) -> Booking:
        return self._load_owned_booking(caller, booking_id)

    def list_bookings(
        self,
        caller: Caller,
        status: Optional[Union[BookingStatus, str]] = None,
        service_id: Optional[str] = None,
        from_date: Optional[datetime] = None,
        to_date: Optional[datetime] = None,
    ) -> list[Booking]:
        """List the caller's bookings; the date range bounds ``start_date`` inclusively."""
        where = [Where("user_id", caller.id)]
        if status:
            try:
                where.append(Where("status", BookingStatus(status).value))
            except ValueError as e:
                raise _invalid_input(f"Unknown booking status: {status}") from e
        if service_id:
            where.append(Where("service_id", service_id))

        bookings = [Booking.model_validate(r) for r in self.adapter.find_many(BOOKING_MODEL, where)]
        if from_date is not None:
            from_date = ensure_aware(from_date)
            bookings = [b for b in bookings if b.start_date >= from_date]
        if to_date is not None:
            to_date = ensure_aware(to_date)
            bookings = [b for b in bookings if b.start_date <= to_date]
        return sorted(bookings, key=lambda b: b.start_date)

    def cancel_booking(
        self, caller: Caller, booking_id: str, reason: Optional[str] = None
    ) -> Booking:
        """
        Cancel one of the caller's bookings.

        Raises:
            BookingError: ``not_found``, ``unauthorized``,
                ``already_cancelled``, ``cancellation_not_allowed``, or
                ``deadline_passed``.
        """
        booking = self._load_owned_booking(caller, booking_id)
        if booking.status == BookingStatus.CANCELLED:
            raise BookingError(BookingErrorKind.ALREADY_CANCELLED)

        service = self.catalog.get_service(booking.service_id, include_inactive=True)
        policy = service.cancellation_policy if service else None
        if not self.config.rules.allow_cancellation or (policy and not policy.allow_cancellation):
            raise BookingError(BookingErrorKind.CANCELLATION_NOT_ALLOWED)

        machine = BookingStateMachine(booking.status)
        if not machine.can_transition(BookingTrigger.CANCELLED_BY_USER):
            raise BookingError(BookingErrorKind.CANCELLATION_NOT_ALLOWED, status=booking.status)

        now = self._now()
        deadline_hours = (
            policy.cutoff_hours
            if policy and policy.cutoff_hours is not None
            else self.config.rules.cancellation_deadline_hours
        )
        if deadline_hours:
            deadline = booking.start_date - timedelta(hours=deadline_hours)
            if now > deadline:
                raise BookingError(
                    BookingErrorKind.DEADLINE_PASSED, hours=deadline_hours, deadline=deadline
                )

        updated = self._save(booking_id, {
            "status": machine.transition(BookingTrigger.CANCELLED_BY_USER),
            "updated_at": now,
            "metadata": {
                **booking.metadata,
                "cancellationReason": reason,
                "cancelledAt": now.isoformat(),
            },
        })
        logger.info("Booking cancelled: %s by user %s", booking_id, caller.id)
        self._notify("on_booking_cancelled", updated)
        return updated

    def approve_booking(self, caller: Caller, booking_id: str) -> Booking:
        """Confirm a pending booking (admin only)."""
        self._require_admin(caller)
        booking = self._load_booking(booking_id)
        machine = BookingStateMachine(booking.status)
        if not machine.can_transition(BookingTrigger.APPROVED):
            raise _invalid_input(
                f"Booking cannot be approved from status '{booking.status.value}'"
            )
        updated = self._save(booking_id, {
            "status": machine.transition(BookingTrigger.APPROVED),
            "updated_at": self._now(),
        })
        logger.info("Booking approved: %s by %s", booking_id, caller.id)
        self._notify("on_booking_confirmed", updated)
        return updated

    def send_reminders(self) -> list[Booking]:
        """Notify observers about confirmed bookings starting within the reminder window."""
        if not self.config.notifications.send_reminder:
            return []
        now = self._now()
        horizon = now + timedelta(hours=self.config.notifications.reminder_hours)
        records = self.adapter.find_many(
            BOOKING_MODEL, [Where("status", BookingStatus.CONFIRMED.value)]
        )
        reminded = []
        for booking in (Booking.model_validate(r) for r in records):
            if "reminderSentAt" in booking.metadata:
                continue
            if not now < booking.start_date <= horizon:
                continue
            updated = self._save(booking.id, {
                "metadata": {**booking.metadata, "reminderSentAt": now.isoformat()},
            })
            self._notify("on_booking_reminder", updated)
            reminded.append(updated)
        if reminded:
            logger.info("Sent %d booking reminders", len(reminded))
        return reminded

    # ------------------------------------------------------------------ #
    # Payment status reports
    # ------------------------------------------------------------------ #

    def mark_payment_succeeded(
        self, booking_id: str, transaction_id: str, payment_data: Any = None
    ) -> Booking:
        """Record a captured payment and confirm the booking."""
        booking = self._load_booking(booking_id)
        patch: dict[str, Any] = {
            "payment_status": PaymentStatus.PAID,
            "payment_transaction_id": transaction_id,
            "updated_at": self._now(),
        }
        machine = BookingStateMachine(booking.status)
        if machine.can_transition(BookingTrigger.PAYMENT_SUCCEEDED):
            patch["status"] = machine.transition(BookingTrigger.PAYMENT_SUCCEEDED)
        else:
            logger.warning(
                "Payment succeeded for booking %s in status %s; status left unchanged",
                booking_id, booking.status.value,
            )

        updated = self._save(booking_id, patch)
        logger.info("Payment recorded for booking %s (%s)", booking_id, transaction_id)
        if updated.status == BookingStatus.CONFIRMED:
            self._notify("on_booking_confirmed", updated)
        self._notify("on_payment_completed", updated, payment_data)
        return updated

    def mark_payment_failed(self, booking_id: str) -> Booking:
        """Record a failed payment and cancel the booking."""
        booking = self._load_booking(booking_id)
        patch: dict[str, Any] = {
            "payment_status": PaymentStatus.FAILED,
            "updated_at": self._now(),
        }
        machine = BookingStateMachine(booking.status)
        if machine.can_transition(BookingTrigger.PAYMENT_FAILED):
            patch["status"] = machine.transition(BookingTrigger.PAYMENT_FAILED)
        updated = self._save(booking_id, patch)
        logger.info("Payment failed for booking %s", booking_id)
        return updated

    def mark_refunded(self, booking_id: str, refunded_amount: float) -> Booking:
        """Record a refund; it is full when it covers the booking total."""
        booking = self._load_booking(booking_id)
        payment_status = (
            PaymentStatus.REFUNDED
            if refunded_amount >= booking.total_price
            else PaymentStatus.PARTIALLY_REFUNDED
        )
        updated = self._save(booking_id, {
            "payment_status": payment_status,
            "updated_at": self._now(),
        })
        logger.info(
            "Refund of %s recorded for booking %s (%s)",
            refunded_amount, booking_id, payment_status.value,
        )
        return updated

    def _on_payment_succeeded(self, booking_id: str, obj: dict[str, Any]) -> None:
        self.mark_payment_succeeded(booking_id, obj["id"], obj)

    def _on_payment_failed(self, booking_id: str, obj: dict[str, Any]) -> None:
        self.mark_payment_failed(booking_id)

    def _on_refund_created(self, booking_id: str, obj: dict[str, Any]) -> None:
        self.mark_refunded(booking_id, obj.get("amount") or 0)

    def _on_charge_refunded(self, booking_id: str, obj: dict[str, Any]) -> None:
        self.mark_refunded(booking_id, obj.get("amount_refunded") or 0)

    # ------------------------------------------------------------------ #
    # Payment operations
    # ------------------------------------------------------------------ #

    def handle_payment_webhook(self, raw_body: Union[bytes, str], signature: Optional[str]) -> dict:
        """Verify a provider webhook and apply it. Handler failures are only logged."""
        gateway = self._require_gateway()
        if not signature:
            raise _invalid_input("Missing payment signature")
        if not raw_body:
            raise _invalid_input("Empty request body")
        try:
            event = gateway.verify_and_parse_webhook(raw_body, signature)
        except WebhookVerificationError as e:
            logger.error("Webhook verification failed: %s", e)
            raise _invalid_input("Invalid signature") from e

        handled = self.webhooks.dispatch(event)
        return {"received": True, "handled": handled, "event_type": event.type}

    def create_payment_checkout(
        self, caller: Caller, booking_id: str, success_url: str, cancel_url: str
    ) -> CheckoutSessionResult:
        gateway = self._require_gateway()
        try:
            CheckoutRequest(booking_id=booking_id, success_url=success_url, cancel_url=cancel_url)
        except ValidationError as e:
            raise _invalid_input(str(e)) from e

        booking = self._load_owned_booking(caller, booking_id)
        if booking.payment_status == PaymentStatus.PAID:
            raise BookingError(BookingErrorKind.ALREADY_PAID)

        try:
            session = gateway.create_checkout_session(
                booking, success_url, cancel_url, customer_email=caller.email
            )
        except Exception as e:
            logger.exception("Failed to create checkout session for booking %s", booking_id)
            raise BookingError(
                BookingErrorKind.INTERNAL_FAILURE, operation="create checkout session"
            ) from e

        self._save(booking_id, {"stripe_checkout_session_id": session.id})
        return session

    def get_payment_status(self, caller: Caller, booking_id: str) -> PaymentStatusResult:
        booking = self._load_owned_booking(caller, booking_id)
        result = PaymentStatusResult(booking_id=booking.id, payment_status=booking.payment_status)
        if self.payment_enabled and self.payment_gateway and booking.stripe_payment_intent_id:
            try:
                intent = self.payment_gateway.retrieve_payment_intent(
                    booking.stripe_payment_intent_id
                )
            except Exception:
                logger.exception("Failed to fetch provider payment status for %s", booking_id)
            else:
                result.provider_status = intent.status
                result.client_secret = intent.client_secret
        return result

    def refund_booking(
        self,
        caller: Caller,
        booking_id: str,
        amount: Optional[int] = None,
        reason: Optional[str] = None,
    ) -> RefundResult:
        """Refund a paid booking in full or in part and cancel it."""
        gateway = self._require_gateway()
        if reason is not None and reason not in REFUND_REASONS:
            raise _invalid_input(f"Refund reason must be one of {list(REFUND_REASONS)}")

        booking = self._load_owned_booking(caller, booking_id)
        if booking.payment_status != PaymentStatus.PAID:
            raise BookingError(BookingErrorKind.PAYMENT_REQUIRED)
        if not booking.stripe_payment_intent_id:
            raise _invalid_input("No payment found for this booking")
        if amount is not None and not 0 < amount <= booking.total_price:
            raise _invalid_input("Refund amount must be positive and at most the booking total")

        try:
            refund = gateway.process_refund(
                booking.stripe_payment_intent_id,
                amount,
                reason,
                metadata={"bookingId": booking.id},
            )
        except Exception as e:
            logger.exception("Failed to process refund for booking %s", booking_id)
            raise BookingError(BookingErrorKind.INTERNAL_FAILURE, operation="process refund") from e

        patch: dict[str, Any] = {
            "payment_status": (
                PaymentStatus.PARTIALLY_REFUNDED
                if amount is not None and amount < booking.total_price
                else PaymentStatus.REFUNDED
            ),
            "updated_at": self._now(),
        }
        machine = BookingStateMachine(booking.status)
        if machine.can_transition(BookingTrigger.REFUNDED):
            patch["status"] = machine.transition(BookingTrigger.REFUNDED)
        updated = self._save(booking_id, patch)
        logger.info("Refund %s issued for booking %s", refund.id, booking_id)
        if updated.status != booking.status:
            self._notify("on_booking_cancelled", updated)
        return refund

    # ------------------------------------------------------------------ #
    # Service catalog
    # ------------------------------------------------------------------ #

    def get_service(self, service_id: str) -> Service:
        service = self.catalog.get_service(service_id)
        if service is None:
            raise not_found("Service")
        return service

    def get_services(
        self,
        category: Optional[str] = None,
        type: Optional[str] = None,
        active: Optional[bool] = None,
    ) -> list[Service]:
        return self.catalog.get_services(category=category, type=type, active=active)

    def create_service(
        self, caller: Caller, data: Union[ServiceCreate, dict[str, Any]]
    ) -> Service:
        self._require_admin(caller)
        try:
            payload = data if isinstance(data, ServiceCreate) else ServiceCreate.model_validate(data)
        except ValidationError as e:
            raise _invalid_input(str(e)) from e
        return self.catalog.create_service(payload, now=self._now())

    def update_service(
        self, caller: Caller, service_id: str, patch: Union[ServiceUpdate, dict[str, Any]]
    ) -> Service:
        self._require_admin(caller)
        try:
            payload = patch if isinstance(patch, ServiceUpdate) else ServiceUpdate.model_validate(patch)
            updated = self.catalog.update_service(service_id, payload, now=self._now())
        except ValidationError as e:
            raise _invalid_input(str(e)) from e
        if updated is None:
            raise not_found("Service")
        return updated

    def delete_service(self, caller: Caller, service_id: str) -> bool:
        self._require_admin(caller)
        if self.catalog.get_service(service_id, include_inactive=True) is None:
            raise not_found("Service")
        if self.catalog.has_active_bookings(service_id):
            raise BookingError(BookingErrorKind.SERVICE_IN_USE)
        return self.catalog.delete_service(service_id)

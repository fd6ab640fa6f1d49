"""
Offline console demo: walks the booking lifecycle end to end.

Uses the real validator, conflict detector, pricing, and lifecycle manager
against the in-memory storage adapter. No payment provider, no network
calls.

Usage:
    python main.py
    python main.py --scenario conflict
    python main.py --scenario all
"""

import argparse
import sys
from datetime import datetime, timedelta, timezone

from booking_engine.config import AppConfig, BookingRulesConfig, PaymentConfig, settings
from booking_engine.core.manager import BookingManager
from booking_engine.errors import BookingError
from booking_engine.logging_context import request_scope
from booking_engine.schemas.booking_schema import BookingRequest, Caller
from booking_engine.schemas.service_schema import ServiceCreate
from booking_engine.tools.notifications import NotificationObserver
from booking_engine.tools.storage import InMemoryAdapter

GREEN = "\033[92m"
YELLOW = "\033[93m"
RED = "\033[91m"
DIM = "\033[2m"
RESET = "\033[0m"
BOLD = "\033[1m"

ADMIN = Caller(id="admin-1", email="admin@example.com", role="admin")
CUSTOMER = Caller(id="user-1", email="jane@example.com", name="Jane Doe")


class ConsoleDemo:
    """Seeds a service and runs scripted lifecycle scenarios."""

    def __init__(self, payment_enabled: bool = False) -> None:
        config = AppConfig(
            rules=BookingRulesConfig(cancellation_deadline_hours=2),
            # "console" has no registered gateway, so payment setup degrades gracefully.
            payment=PaymentConfig(enabled=payment_enabled, provider="console"),
            notifications=settings.notifications,
        )
        self.notifier = NotificationObserver(config=config.notifications)
        self.manager = BookingManager(
            InMemoryAdapter(), config, observers=[self.notifier]
        )
        self.service = self.manager.create_service(ADMIN, ServiceCreate(
            name="Consultation",
            duration=60,
            price=1000,
            currency="USD",
        ))
        self.now = datetime.now(timezone.utc).replace(second=0, microsecond=0)

    def ok(self, text: str) -> None:
        print(f"{GREEN}  OK  {RESET}{text}")

    def rejected(self, err: BookingError) -> None:
        print(f"{YELLOW}  REJ {RESET}{err.kind.value}: {err.message}")

    def _request(self, start: datetime) -> BookingRequest:
        return BookingRequest(
            service_id=self.service.id,
            start_date=start,
            end_date=start + timedelta(minutes=self.service.duration),
        )

    def _book(self, start: datetime):
        return self.manager.create_booking(CUSTOMER, self._request(start))

    def scenario_create(self) -> None:
        result = self._book(self.now + timedelta(hours=2))
        b = result.booking
        self.ok(f"booking {b.id} status={b.status.value} total={b.total_price:g} {b.currency}")

    def scenario_conflict(self) -> None:
        first = self._book(self.now + timedelta(hours=4)).booking
        self.ok(f"first booking {first.id} {first.start_date:%H:%M}-{first.end_date:%H:%M}")
        try:
            self._book(first.end_date - timedelta(minutes=1))
        except BookingError as e:
            self.rejected(e)

    def scenario_deadline(self) -> None:
        booking = self._book(self.now + timedelta(hours=1)).booking
        self.ok(f"booking {booking.id} starts in 1 hour")
        try:
            self.manager.cancel_booking(CUSTOMER, booking.id, reason="Change of plans")
        except BookingError as e:
            self.rejected(e)

    def scenario_payment_failed(self) -> None:
        demo = ConsoleDemo(payment_enabled=True)
        result = demo._book(demo.now + timedelta(hours=6))
        booking = result.booking
        self.ok(
            f"booking {booking.id} payment_status={booking.payment_status.value} "
            f"(setup: {result.payment.error})"
        )
        failed = demo.manager.mark_payment_failed(booking.id)
        self.ok(f"after failure: status={failed.status.value} payment_status={failed.payment_status.value}")

    SCENARIOS = {
        "create": scenario_create,
        "conflict": scenario_conflict,
        "deadline": scenario_deadline,
        "payment-failed": scenario_payment_failed,
    }

    def run(self, names: list[str]) -> None:
        print()
        print(f"{BOLD}{'=' * 60}{RESET}")
        print(f"{BOLD}  BOOKING ENGINE - Console Demo{RESET}")
        print(f"{BOLD}  Service: {self.service.name} ({self.service.duration} min){RESET}")
        print(f"{BOLD}{'=' * 60}{RESET}")
        for name in names:
            print(f"\n{BOLD}[{name}]{RESET}")
            with request_scope(f"DEMO-{name}"):
                self.SCENARIOS[name](self)
        print(f"\n{DIM}  Notifications sent: {len(self.notifier.outbox)}{RESET}")
        print(f"{BOLD}{'=' * 60}{RESET}")


def main() -> None:
    parser = argparse.ArgumentParser(description="Booking engine console demo")
    parser.add_argument(
        "--scenario",
        default="all",
        choices=["all", *ConsoleDemo.SCENARIOS],
        help="Scenario to run (default: all)",
    )
    args = parser.parse_args()

    names = list(ConsoleDemo.SCENARIOS) if args.scenario == "all" else [args.scenario]
    try:
        ConsoleDemo().run(names)
    except KeyboardInterrupt:
        print(f"\n{RED}Interrupted.{RESET}")
        sys.exit(130)


if __name__ == "__main__":
    main()

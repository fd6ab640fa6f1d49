"""
In-memory persistence adapter.

In production, the host framework supplies a database adapter with the
same create / find_one / find_many / update / delete contract. Filters are
lists of field conditions ANDed together; ``operator="in"`` matches any
value in a collection.

The in-memory adapter also enforces an overlap exclusion constraint for
active bookings, the equivalent of a PostgreSQL ``EXCLUDE USING gist``
constraint on (service_id, tstzrange(start_date, end_date)). The check and
the write happen under one lock, so two concurrent creates for overlapping
intervals cannot both succeed.
"""

import copy
import logging
import threading
import uuid
from dataclasses import dataclass, field
from typing import Any, Iterable, Literal, Optional, Protocol

from booking_engine.core.conflicts import intervals_overlap
from booking_engine.utils import ensure_aware

logger = logging.getLogger(__name__)

Record = dict[str, Any]


@dataclass(frozen=True)
class Where:
    """A single field condition."""
    field: str
    value: Any
    operator: Literal["eq", "in"] = "eq"

    def matches(self, record: Record) -> bool:
        actual = record.get(self.field)
        if self.operator == "in":
            return actual in tuple(self.value)
        return actual == self.value


class ExclusionViolation(Exception):
    """Raised when a write would break an exclusion constraint."""

    def __init__(self, constraint: str, conflicting_id: str) -> None:
        self.constraint = constraint
        self.conflicting_id = conflicting_id
        super().__init__(f"Write violates {constraint}: overlaps record {conflicting_id}")


@dataclass(frozen=True)
class OverlapConstraint:
    """No two active records in the same group may have overlapping intervals."""
    name: str
    model: str
    group_field: str
    start_field: str
    end_field: str
    status_field: str
    active_values: tuple[str, ...]

    def check(self, candidate: Record, rows: Iterable[Record]) -> None:
        if candidate.get(self.status_field) not in self.active_values:
            return
        start = ensure_aware(candidate[self.start_field])
        end = ensure_aware(candidate[self.end_field])
        for row in rows:
            if row.get("id") == candidate.get("id"):
                continue
            if row.get(self.group_field) != candidate.get(self.group_field):
                continue
            if row.get(self.status_field) not in self.active_values:
                continue
            if intervals_overlap(
                start, end, ensure_aware(row[self.start_field]), ensure_aware(row[self.end_field])
            ):
                raise ExclusionViolation(self.name, row["id"])


BOOKING_OVERLAP_CONSTRAINT = OverlapConstraint(
    name="booking_no_overlap",
    model="booking",
    group_field="service_id",
    start_field="start_date",
    end_field="end_date",
    status_field="status",
    active_values=("pending", "confirmed"),
)


class StorageAdapter(Protocol):
    """Persistence contract consumed by the catalog and lifecycle manager."""

    def create(self, model: str, data: Record) -> Record: ...

    def find_one(self, model: str, where: list[Where]) -> Optional[Record]: ...

    def find_many(self, model: str, where: Optional[list[Where]] = None) -> list[Record]: ...

    def update(self, model: str, where: list[Where], patch: Record) -> Optional[Record]: ...

    def delete(self, model: str, where: list[Where]) -> int: ...


@dataclass
class InMemoryAdapter:
    """Thread-safe dict-backed adapter. Records are copied in and out."""

    constraints: list[OverlapConstraint] = field(
        default_factory=lambda: [BOOKING_OVERLAP_CONSTRAINT]
    )
    _tables: dict[str, dict[str, Record]] = field(default_factory=dict)
    _lock: threading.RLock = field(default_factory=threading.RLock)

    def _table(self, model: str) -> dict[str, Record]:
        return self._tables.setdefault(model, {})

    def _check_constraints(self, model: str, candidate: Record) -> None:
        for constraint in self.constraints:
            if constraint.model == model:
                constraint.check(candidate, self._table(model).values())

    @staticmethod
    def _select(rows: Iterable[Record], where: Optional[list[Where]]) -> list[Record]:
        conditions = where or []
        return [row for row in rows if all(c.matches(row) for c in conditions)]

    def create(self, model: str, data: Record) -> Record:
        record = copy.deepcopy(data)
        record.setdefault("id", uuid.uuid4().hex)
        with self._lock:
            table = self._table(model)
            if record["id"] in table:
                raise ValueError(f"Duplicate id for {model}: {record['id']}")
            self._check_constraints(model, record)
            table[record["id"]] = record
        logger.debug("Created %s %s", model, record["id"])
        return copy.deepcopy(record)

    def find_one(self, model: str, where: list[Where]) -> Optional[Record]:
        with self._lock:
            rows = self._select(self._table(model).values(), where)
            return copy.deepcopy(rows[0]) if rows else None

    def find_many(self, model: str, where: Optional[list[Where]] = None) -> list[Record]:
        with self._lock:
            return [copy.deepcopy(row) for row in self._select(self._table(model).values(), where)]

    def update(self, model: str, where: list[Where], patch: Record) -> Optional[Record]:
        """Apply ``patch`` to every matching record and return the first one."""
        with self._lock:
            table = self._table(model)
            rows = self._select(table.values(), where)
            if not rows:
                return None
            updated = []
            for row in rows:
                candidate = {**row, **copy.deepcopy(patch), "id": row["id"]}
                self._check_constraints(model, candidate)
                updated.append(candidate)
            for candidate in updated:
                table[candidate["id"]] = candidate
            return copy.deepcopy(updated[0])

    def delete(self, model: str, where: list[Where]) -> int:
        with self._lock:
            table = self._table(model)
            rows = self._select(table.values(), where)
            for row in rows:
                del table[row["id"]]
            return len(rows)

    def reset(self) -> None:
        """Clear all tables. Used by test fixtures for isolation."""
        with self._lock:
            self._tables.clear()

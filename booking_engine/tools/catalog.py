"""
Service catalog backed by the persistence adapter.

Read access is used by the lifecycle manager to resolve scheduling rules
and pricing; the write helpers back the admin operations.
"""

import logging
import uuid
from datetime import datetime
from typing import Optional

from booking_engine.schemas.booking_schema import ACTIVE_STATUSES
from booking_engine.schemas.service_schema import Service, ServiceCreate, ServiceUpdate
from booking_engine.tools.storage import StorageAdapter, Where
from booking_engine.utils import utcnow

logger = logging.getLogger(__name__)

SERVICE_MODEL = "booking_service"
BOOKING_MODEL = "booking"


def new_service_id() -> str:
    return f"service_{uuid.uuid4().hex[:12]}"


class ServiceCatalog:
    """Lookup and admin persistence for services."""

    def __init__(self, adapter: StorageAdapter) -> None:
        self.adapter = adapter

    def get_service(self, service_id: str, include_inactive: bool = False) -> Optional[Service]:
        """Return a service by ID. Inactive services are hidden unless asked for."""
        where = [Where("id", service_id)]
        if not include_inactive:
            where.append(Where("is_active", True))
        record = self.adapter.find_one(SERVICE_MODEL, where)
        return Service.model_validate(record) if record else None

    def get_services(
        self,
        category: Optional[str] = None,
        type: Optional[str] = None,
        active: Optional[bool] = None,
    ) -> list[Service]:
        """List services. Only active services are returned unless ``active`` says otherwise."""
        where = [Where("is_active", True if active is None else active)]
        if category:
            where.append(Where("category", category))
        services = [Service.model_validate(r) for r in self.adapter.find_many(SERVICE_MODEL, where)]
        if type:
            services = [s for s in services if s.type == type]
        return sorted(services, key=lambda s: s.name)

    def create_service(self, data: ServiceCreate, now: Optional[datetime] = None) -> Service:
        now = now or utcnow()
        service = Service(
            id=new_service_id(),
            created_at=now,
            updated_at=now,
            **data.model_dump(),
        )
        created = self.adapter.create(SERVICE_MODEL, service.model_dump())
        logger.info("Service created: %s (%s)", service.id, service.name)
        return Service.model_validate(created)

    def update_service(
        self, service_id: str, patch: ServiceUpdate, now: Optional[datetime] = None
    ) -> Optional[Service]:
        current = self.get_service(service_id, include_inactive=True)
        if current is None:
            return None
        changes = patch.model_dump(exclude_unset=True)
        # Re-validate the merged record so field constraints still hold.
        merged = Service.model_validate(
            {**current.model_dump(), **changes, "updated_at": now or utcnow()}
        )
        updated = self.adapter.update(
            SERVICE_MODEL, [Where("id", service_id)], merged.model_dump()
        )
        logger.info("Service updated: %s (%s)", service_id, ", ".join(sorted(changes)) or "no fields")
        return Service.model_validate(updated) if updated else None

    def has_active_bookings(self, service_id: str) -> bool:
        active = self.adapter.find_many(
            BOOKING_MODEL,
            [
                Where("service_id", service_id),
                Where("status", [s.value for s in ACTIVE_STATUSES], operator="in"),
            ],
        )
        return bool(active)

    def delete_service(self, service_id: str) -> bool:
        deleted = self.adapter.delete(SERVICE_MODEL, [Where("id", service_id)])
        if deleted:
            logger.info("Service deleted: %s", service_id)
        return bool(deleted)

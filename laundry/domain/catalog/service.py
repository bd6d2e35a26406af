"""Catalog service - Business logic for the laundry service catalog"""

import logging

from sqlalchemy.orm import Session

from ...errors import ConflictError, NotFoundError, ValidationError
from ...models import Service
from .repository import ServiceRepository
from .schemas import ServiceCreate, ServiceUpdate

logger = logging.getLogger(__name__)

DEFAULT_ESTIMATED_DAYS = 2

# Request field -> column
UPDATABLE_FIELDS = {
    "name": "name",
    "description": "description",
    "price": "price",
    "icon": "icon",
    "image": "image",
    "estimatedDays": "estimated_days",
    "isActive": "is_active",
}
REQUIRED_COLUMNS = {"name", "description", "price", "estimated_days", "is_active"}


class CatalogService:
    """Service layer for catalog business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = ServiceRepository()

    def list_services(self, include_inactive: bool = False) -> list[Service]:
        return self.repo.list_services(self.db, active_only=not include_inactive)

    def get_service(self, service_id: str) -> Service:
        service = self.repo.get_by_id(self.db, service_id)
        if not service:
            raise NotFoundError("Service not found")
        return service

    def _ensure_name_available(self, name: str) -> None:
        if self.repo.get_by_name(self.db, name):
            logger.info(f"⚠️ Duplicate service name rejected: {name}")
            raise ConflictError("Service with this name already exists")

    def create_service(self, data: ServiceCreate) -> Service:
        if not data.name or not data.description or data.price is None:
            raise ValidationError("Please provide name, description, and price")
        if data.price < 0:
            raise ValidationError("Price cannot be negative")

        self._ensure_name_available(data.name)

        service = self.repo.create_service(
            self.db,
            name=data.name,
            description=data.description,
            price=data.price,
            icon=data.icon,
            image=data.image,
            estimated_days=data.estimatedDays or DEFAULT_ESTIMATED_DAYS,
            is_active=True,
        )
        logger.info(f"🆕 Service created: {service.name} ({service.id})")
        return service

    def update_service(self, service_id: str, data: ServiceUpdate) -> Service:
        """Apply only the fields the caller sent"""
        service = self.get_service(service_id)
        patch = data.model_dump(exclude_unset=True)

        if patch.get("price") is not None and patch["price"] < 0:
            raise ValidationError("Price cannot be negative")

        if patch.get("name") and patch["name"] != service.name:
            self._ensure_name_available(patch["name"])

        updates = {}
        for field, value in patch.items():
            column = UPDATABLE_FIELDS[field]
            # Required columns cannot be cleared
            if column in REQUIRED_COLUMNS and value in (None, ""):
                continue
            updates[column] = value

        service = self.repo.update_service(self.db, service, **updates)
        logger.info(f"✏️ Service updated: {service.id} ({', '.join(updates) or 'no changes'})")
        return service

    def soft_delete_service(self, service_id: str) -> None:
        service = self.get_service(service_id)
        self.repo.update_service(self.db, service, is_active=False)
        logger.info(f"🗑️ Service deactivated: {service_id}")

    def permanent_delete_service(self, service_id: str) -> None:
        service = self.get_service(service_id)
        self.repo.delete_service(self.db, service)
        logger.info(f"🗑️ Service permanently deleted: {service_id}")

    def toggle_service(self, service_id: str) -> Service:
        service = self.get_service(service_id)
        service = self.repo.update_service(self.db, service, is_active=not service.is_active)
        logger.info(f"🔀 Service {service_id} is now {'active' if service.is_active else 'inactive'}")
        return service

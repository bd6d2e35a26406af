"""Catalog router - Public service listing and admin catalog management"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import get_current_admin
from ...database import get_db
from ...models import Admin
from ...schemas import dump
from .schemas import ServiceCreate, ServiceResponse, ServiceUpdate
from .service import CatalogService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/services", tags=["Services"])


def get_catalog_service(db: Session = Depends(get_db)) -> CatalogService:
    """Dependency injection for CatalogService"""
    return CatalogService(db)


# ============================================================================
# PUBLIC
# ============================================================================


@router.get("")
async def get_services(service: CatalogService = Depends(get_catalog_service)):
    """Active services, newest first"""
    services = service.list_services()
    return {"success": True, "count": len(services), "services": [dump(ServiceResponse, s) for s in services]}


@router.get("/all")
async def get_all_services(
    current_admin: Admin = Depends(get_current_admin),
    service: CatalogService = Depends(get_catalog_service),
):
    """Every service including deactivated ones"""
    services = service.list_services(include_inactive=True)
    return {"success": True, "count": len(services), "services": [dump(ServiceResponse, s) for s in services]}


@router.get("/{service_id}")
async def get_service(service_id: str, service: CatalogService = Depends(get_catalog_service)):
    return {"success": True, "service": dump(ServiceResponse, service.get_service(service_id))}


# ============================================================================
# ADMIN
# ============================================================================


@router.post("", status_code=201)
async def create_service(
    data: ServiceCreate,
    current_admin: Admin = Depends(get_current_admin),
    service: CatalogService = Depends(get_catalog_service),
):
    created = service.create_service(data)
    return {"success": True, "message": "Service created successfully", "service": dump(ServiceResponse, created)}


@router.put("/{service_id}")
async def update_service(
    service_id: str,
    data: ServiceUpdate,
    current_admin: Admin = Depends(get_current_admin),
    service: CatalogService = Depends(get_catalog_service),
):
    updated = service.update_service(service_id, data)
    return {"success": True, "message": "Service updated successfully", "service": dump(ServiceResponse, updated)}


@router.delete("/{service_id}")
async def delete_service(
    service_id: str,
    current_admin: Admin = Depends(get_current_admin),
    service: CatalogService = Depends(get_catalog_service),
):
    """Soft delete - the service is hidden from the public list but kept"""
    service.soft_delete_service(service_id)
    return {"success": True, "message": "Service deleted successfully"}


@router.delete("/{service_id}/permanent")
async def permanent_delete_service(
    service_id: str,
    current_admin: Admin = Depends(get_current_admin),
    service: CatalogService = Depends(get_catalog_service),
):
    service.permanent_delete_service(service_id)
    return {"success": True, "message": "Service permanently deleted"}


@router.patch("/{service_id}/toggle")
async def toggle_service(
    service_id: str,
    current_admin: Admin = Depends(get_current_admin),
    service: CatalogService = Depends(get_catalog_service),
):
    toggled = service.toggle_service(service_id)
    state = "activated" if toggled.is_active else "deactivated"
    return {"success": True, "message": f"Service {state} successfully", "service": dump(ServiceResponse, toggled)}

"""Contact router - FastAPI endpoints for contact sync"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import get_current_admin, get_current_user
from ...database import get_db
from ...models import Admin, User
from ...schemas import dump
from ...shared.pagination import total_pages
from .schemas import AdminContactResponse, ContactResponse, ContactSyncRequest
from .service import ContactService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/contacts", tags=["Contacts"])
admin_router = APIRouter(prefix="/api/admin/contacts", tags=["Contacts"])


def get_contact_service(db: Session = Depends(get_db)) -> ContactService:
    """Dependency injection for ContactService"""
    return ContactService(db)


@router.post("/sync")
async def sync_contacts(
    data: ContactSyncRequest,
    current_user: User = Depends(get_current_user),
    service: ContactService = Depends(get_contact_service),
):
    """Upload the device address book"""
    result = service.sync_contacts(current_user, data.contacts, data.userPhoneNumber)
    if result.empty:
        return {"success": False, "message": "No contacts to sync"}

    return {
        "success": True,
        "message": "Contacts synced successfully",
        "data": result.to_dict(),
    }


@router.get("/my-contacts")
async def get_my_contacts(
    page: int = Query(1, ge=1),
    limit: int = Query(50, ge=1, le=500),
    search: Optional[str] = Query(None),
    current_user: User = Depends(get_current_user),
    service: ContactService = Depends(get_contact_service),
):
    contacts, total = service.get_my_contacts(current_user, page, limit, search)
    return {
        "success": True,
        "data": [dump(ContactResponse, c) for c in contacts],
        "totalPages": total_pages(total, limit),
        "currentPage": page,
        "total": total,
    }


@router.delete("/my-contacts")
async def delete_my_contacts(
    current_user: User = Depends(get_current_user),
    service: ContactService = Depends(get_contact_service),
):
    deleted = service.delete_my_contacts(current_user)
    return {"success": True, "message": "All contacts deleted successfully", "deletedCount": deleted}


@admin_router.get("")
async def get_all_contacts(
    page: int = Query(1, ge=1),
    limit: int = Query(50, ge=1, le=500),
    search: Optional[str] = Query(None),
    userId: Optional[str] = Query(None),
    userPhone: Optional[str] = Query(None),
    current_admin: Admin = Depends(get_current_admin),
    service: ContactService = Depends(get_contact_service),
):
    """All synced contacts across users, newest first"""
    contacts, total = service.get_all_contacts(page, limit, search=search, user_id=userId, user_phone=userPhone)
    return {
        "success": True,
        "data": [dump(AdminContactResponse, c) for c in contacts],
        "totalPages": total_pages(total, limit),
        "currentPage": page,
        "total": total,
    }


@admin_router.get("/stats")
async def get_contact_stats(
    current_admin: Admin = Depends(get_current_admin),
    service: ContactService = Depends(get_contact_service),
):
    return {"success": True, "data": service.get_contact_stats()}

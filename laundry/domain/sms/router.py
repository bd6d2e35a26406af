"""SMS router - FastAPI endpoints for device message sync"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from ...auth import get_current_admin, get_current_user
from ...database import get_db
from ...errors import ForbiddenError
from ...models import Admin, SmsType, User
from ...schemas import dump
from ...shared.pagination import total_pages
from .schemas import AdminSmsResponse, SmsResponse, SmsSyncRequest
from .service import SmsService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/sms", tags=["SMS"])


def get_sms_service(db: Session = Depends(get_db)) -> SmsService:
    """Dependency injection for SmsService"""
    return SmsService(db)


def _ensure_owner(user_id: Optional[str], current_user: User) -> None:
    if user_id and user_id != current_user.id:
        logger.warning(f"🚫 User {current_user.id} tried to access SMS of user {user_id}")
        raise ForbiddenError("Not authorized to access SMS for this user")


def _type_filter(value: Optional[str]) -> Optional[SmsType]:
    # Unknown values are ignored rather than rejected
    if value in (SmsType.INBOX.value, SmsType.SENT.value):
        return SmsType(value)
    return None


def _paginated(messages, total: int, page: int, limit: int, response_model) -> dict:
    return {
        "smsMessages": [dump(response_model, m) for m in messages],
        "pagination": {"total": total, "page": page, "limit": limit, "pages": total_pages(total, limit)},
    }


@router.post("/sync")
async def sync_sms(
    data: SmsSyncRequest,
    current_user: User = Depends(get_current_user),
    service: SmsService = Depends(get_sms_service),
):
    """Sync a single message; already known messages are acknowledged without a write"""
    _ensure_owner(data.userId, current_user)
    sms, created = service.sync_one(data.userId, data.smsData)
    if not created:
        return {"success": True, "message": "SMS already synced", "data": dump(SmsResponse, sms)}

    return JSONResponse(
        status_code=201,
        content={"success": True, "message": "SMS synced successfully", "data": dump(SmsResponse, sms)},
    )


@router.post("/sync-batch")
async def sync_sms_batch(
    data: SmsSyncRequest,
    current_user: User = Depends(get_current_user),
    service: SmsService = Depends(get_sms_service),
):
    _ensure_owner(data.userId, current_user)
    result = service.sync_batch(data.userId, data.smsData)
    return {"success": True, "message": "SMS batch sync completed", "data": result.to_dict()}


@router.get("/user/{user_id}")
async def get_user_sms(
    user_id: str,
    page: int = Query(1, ge=1),
    limit: int = Query(100, ge=1, le=1000),
    type: Optional[str] = Query(None),
    search: Optional[str] = Query(None),
    current_user: User = Depends(get_current_user),
    service: SmsService = Depends(get_sms_service),
):
    _ensure_owner(user_id, current_user)
    messages, total = service.get_user_sms(user_id, page, limit, _type_filter(type), search)
    return {"success": True, "data": _paginated(messages, total, page, limit, SmsResponse)}


@router.get("/all")
async def get_all_sms(
    page: int = Query(1, ge=1),
    limit: int = Query(100, ge=1, le=1000),
    userId: Optional[str] = Query(None),
    type: Optional[str] = Query(None),
    search: Optional[str] = Query(None),
    current_admin: Admin = Depends(get_current_admin),
    service: SmsService = Depends(get_sms_service),
):
    messages, total = service.get_all_sms(page, limit, userId, _type_filter(type), search)
    return {"success": True, "data": _paginated(messages, total, page, limit, AdminSmsResponse)}


@router.get("/statistics")
async def get_sms_statistics(
    userId: Optional[str] = Query(None),
    current_admin: Admin = Depends(get_current_admin),
    service: SmsService = Depends(get_sms_service),
):
    return {"success": True, "data": service.get_statistics(userId)}


@router.delete("/user/{user_id}")
async def delete_user_sms(
    user_id: str,
    current_admin: Admin = Depends(get_current_admin),
    service: SmsService = Depends(get_sms_service),
):
    deleted = service.delete_user_sms(user_id)
    return {
        "success": True,
        "message": f"Deleted {deleted} SMS messages",
        "data": {"deletedCount": deleted},
    }

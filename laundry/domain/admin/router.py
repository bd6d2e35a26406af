"""Admin panel router - Dashboard, marketing data and admin account"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import get_current_admin
from ...database import get_db
from ...models import Admin
from ...schemas import AdminResponse, UserResponse, dump
from ..orders.schemas import AdminOrderResponse
from .schemas import AdminProfileUpdate, ChangePasswordRequest
from .service import AdminPanelService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin", tags=["Admin"])


def get_admin_panel_service(db: Session = Depends(get_db)) -> AdminPanelService:
    """Dependency injection for AdminPanelService"""
    return AdminPanelService(db)


@router.get("/stats")
async def get_dashboard_stats(
    current_admin: Admin = Depends(get_current_admin),
    service: AdminPanelService = Depends(get_admin_panel_service),
):
    stats = service.get_stats()
    return {
        "success": True,
        "stats": {
            "overview": stats["overview"],
            "orderStats": stats["orderStats"],
            "recent": {
                "users": [dump(UserResponse, u) for u in stats["recent_users"]],
                "orders": [dump(AdminOrderResponse, o) for o in stats["recent_orders"]],
            },
        },
    }


@router.get("/sms-logs")
async def get_sms_logs(
    current_admin: Admin = Depends(get_current_admin),
    service: AdminPanelService = Depends(get_admin_panel_service),
):
    """SMS logs stored on user records by older app versions"""
    logs = service.get_legacy_sms_logs()
    return {"success": True, "count": len(logs), "smsLogs": logs}


@router.get("/marketing-stats")
async def get_marketing_stats(
    current_admin: Admin = Depends(get_current_admin),
    service: AdminPanelService = Depends(get_admin_panel_service),
):
    return {"success": True, "stats": service.get_marketing_stats()}


@router.get("/profile")
async def get_admin_profile(current_admin: Admin = Depends(get_current_admin)):
    return {"success": True, "admin": dump(AdminResponse, current_admin)}


@router.put("/profile")
async def update_admin_profile(
    data: AdminProfileUpdate,
    current_admin: Admin = Depends(get_current_admin),
    service: AdminPanelService = Depends(get_admin_panel_service),
):
    admin = service.update_profile(current_admin, data)
    return {"success": True, "message": "Profile updated successfully", "admin": dump(AdminResponse, admin)}


@router.put("/change-password")
async def change_password(
    data: ChangePasswordRequest,
    current_admin: Admin = Depends(get_current_admin),
    service: AdminPanelService = Depends(get_admin_panel_service),
):
    service.change_password(current_admin, data)
    return {"success": True, "message": "Password changed successfully"}

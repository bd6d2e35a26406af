"""User router - Profile and dashboard for customers, user management for admins"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import get_current_admin, get_current_user
from ...database import get_db
from ...models import Admin, User
from ...schemas import UserResponse, dump
from ..orders.schemas import OrderResponse
from .schemas import AdminUserUpdate, ProfileUpdate
from .service import UserService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/user", tags=["Users"])


def get_user_service(db: Session = Depends(get_db)) -> UserService:
    """Dependency injection for UserService"""
    return UserService(db)


@router.get("/profile")
async def get_profile(current_user: User = Depends(get_current_user)):
    return {"success": True, "user": dump(UserResponse, current_user)}


@router.put("/profile")
async def update_profile(
    data: ProfileUpdate,
    current_user: User = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    user = service.update_profile(current_user, data)
    return {"success": True, "message": "Profile updated successfully", "user": dump(UserResponse, user)}


@router.get("/dashboard")
async def get_dashboard(
    current_user: User = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    """Order counts and the five most recent orders"""
    stats, recent = service.get_dashboard(current_user)
    return {
        "success": True,
        "user": dump(UserResponse, current_user),
        "stats": stats,
        "recentOrders": [dump(OrderResponse, o) for o in recent],
    }


@router.get("/all")
async def get_all_users(
    current_admin: Admin = Depends(get_current_admin),
    service: UserService = Depends(get_user_service),
):
    users = service.list_users()
    return {"success": True, "count": len(users), "users": [dump(UserResponse, u) for u in users]}


@router.get("/{user_id}")
async def get_user(
    user_id: str,
    current_admin: Admin = Depends(get_current_admin),
    service: UserService = Depends(get_user_service),
):
    return {"success": True, "user": dump(UserResponse, service.get_user(user_id))}


@router.put("/{user_id}")
async def update_user(
    user_id: str,
    data: AdminUserUpdate,
    current_admin: Admin = Depends(get_current_admin),
    service: UserService = Depends(get_user_service),
):
    user = service.update_user(user_id, data)
    return {"success": True, "message": "User updated successfully", "user": dump(UserResponse, user)}


@router.delete("/{user_id}")
async def delete_user(
    user_id: str,
    current_admin: Admin = Depends(get_current_admin),
    service: UserService = Depends(get_user_service),
):
    service.delete_user(user_id)
    return {"success": True, "message": "User deleted successfully"}

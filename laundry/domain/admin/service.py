"""Admin panel service - Dashboard statistics and admin account management"""

import logging
from datetime import datetime
from typing import Any

from sqlalchemy.orm import Session

from ...errors import ConflictError, UnauthorizedError, ValidationError
from ...models import Admin, OrderStatus
from ...security_utils import hash_password, verify_password
from ...shared.validators import parse_timestamp
from ..orders.repository import OrderRepository
from ..users.repository import UserRepository
from .repository import AdminPanelRepository
from .schemas import AdminProfileUpdate, ChangePasswordRequest

logger = logging.getLogger(__name__)

RECENT_USERS_LIMIT = 5
RECENT_ORDERS_LIMIT = 10


def _log_sort_key(log: dict) -> datetime:
    try:
        return parse_timestamp(log.get("date"))
    except ValueError:
        return datetime.min


class AdminPanelService:
    """Service layer for the admin dashboard"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = AdminPanelRepository()
        self.orders = OrderRepository()
        self.users = UserRepository()

    def get_stats(self) -> dict:
        counts = self.orders.count_by_status(self.db)
        return {
            "overview": {
                "totalUsers": self.repo.count_users(self.db),
                "totalServices": self.repo.count_services(self.db),
                "totalOrders": sum(counts.values()),
                "pendingOrders": counts[OrderStatus.PENDING],
                "totalRevenue": self.orders.delivered_revenue(self.db),
            },
            "orderStats": {
                "pending": counts[OrderStatus.PENDING],
                "picked": counts[OrderStatus.PICKED],
                "inProcess": counts[OrderStatus.IN_PROCESS],
                "delivered": counts[OrderStatus.DELIVERED],
                "cancelled": counts[OrderStatus.CANCELLED],
            },
            "recent_users": self.users.list_users(self.db, limit=RECENT_USERS_LIMIT),
            "recent_orders": self.orders.get_all_orders(self.db, limit=RECENT_ORDERS_LIMIT),
        }

    def get_legacy_sms_logs(self) -> list[dict[str, Any]]:
        """Flatten the SMS logs embedded on user records, newest first"""
        logs = []
        for user in self.repo.users_with_sms_permission(self.db):
            for index, log in enumerate(user.legacy_sms_logs or []):
                if not isinstance(log, dict):
                    continue
                logs.append(
                    {
                        "id": log.get("_id") or f"{user.id}:{index}",
                        "userName": user.name,
                        "userPhone": user.phone_number,
                        "userId": user.id,
                        "message": log.get("message"),
                        "from": log.get("from"),
                        "date": log.get("date"),
                    }
                )
        logs.sort(key=_log_sort_key, reverse=True)
        return logs

    def get_marketing_stats(self) -> dict:
        total_sms, users_with_sms = self.repo.sms_totals(self.db)
        total_contacts, users_with_contacts = self.repo.contact_totals(self.db)
        return {
            "totalUsers": self.repo.count_users(self.db),
            "smsPermission": {
                "enabled": self.repo.count_users(self.db, sms_permission=True),
                "withLogs": users_with_sms,
                "totalLogs": total_sms,
            },
            "contactPermission": {
                "enabled": self.repo.count_users(self.db, contact_permission=True),
                "withContacts": users_with_contacts,
                "totalContacts": total_contacts,
            },
        }

    def update_profile(self, admin: Admin, data: AdminProfileUpdate) -> Admin:
        patch = data.model_dump(exclude_unset=True)
        updates = {k: v for k, v in patch.items() if not (k in ("name", "email") and not v)}

        if "email" in updates and updates["email"] != admin.email:
            if self.repo.get_admin_by_email(self.db, updates["email"]):
                raise ConflictError("Email is already in use")

        admin = self.repo.update_admin(self.db, admin, **updates)
        logger.info(f"✏️ Admin profile updated: {admin.email}")
        return admin

    def change_password(self, admin: Admin, data: ChangePasswordRequest) -> None:
        if not data.currentPassword or not data.newPassword:
            raise ValidationError("Please provide current and new password")

        if not verify_password(data.currentPassword, admin.password_hash):
            logger.warning(f"🚫 Wrong current password for admin {admin.email}")
            raise UnauthorizedError("Current password is incorrect")

        self.repo.update_admin(self.db, admin, password_hash=hash_password(data.newPassword))
        logger.info(f"🔐 Password changed for admin {admin.email}")

"""User service - Profile, dashboard and admin user management"""

import logging

from sqlalchemy.orm import Session

from ...errors import NotFoundError
from ...models import Order, OrderStatus, User
from ..orders.repository import OrderRepository
from .repository import UserRepository
from .schemas import AdminUserUpdate, ProfileUpdate

logger = logging.getLogger(__name__)

RECENT_ORDERS_LIMIT = 5

PROFILE_FIELDS = {
    "name": "name",
    "email": "email",
    "address": "address",
    "smsPermission": "sms_permission",
    "contactPermission": "contact_permission",
    "fcmToken": "fcm_token",
}
BOOLEAN_COLUMNS = {"sms_permission", "contact_permission"}


class UserService:
    """Service layer for user business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = UserRepository()
        self.orders = OrderRepository()

    def update_profile(self, user: User, data: ProfileUpdate) -> User:
        """
        Apply the fields present in the request.

        The profile counts as complete once a single update carries both a
        name and an address.
        """
        patch = data.model_dump(exclude_unset=True)
        updates = {}
        for field, value in patch.items():
            column = PROFILE_FIELDS[field]
            if column in BOOLEAN_COLUMNS and value is None:
                continue
            updates[column] = value

        if patch.get("name") and patch.get("address"):
            updates["is_profile_complete"] = True

        user = self.repo.update_user(self.db, user, **updates)
        logger.info(f"👤 Profile updated for user {user.id}: {', '.join(updates) or 'no changes'}")
        return user

    def get_dashboard(self, user: User) -> tuple[dict, list[Order]]:
        counts = self.orders.count_by_status(self.db, user.id)
        stats = {
            "totalOrders": sum(counts.values()),
            "deliveredOrders": counts[OrderStatus.DELIVERED],
            "cancelledOrders": counts[OrderStatus.CANCELLED],
            # Anything still in flight
            "pendingOrders": counts[OrderStatus.PENDING]
            + counts[OrderStatus.PICKED]
            + counts[OrderStatus.IN_PROCESS],
        }
        recent = self.orders.get_orders_for_user(self.db, user.id, limit=RECENT_ORDERS_LIMIT)
        return stats, recent

    # ------------------------------------------------------------------
    # Admin
    # ------------------------------------------------------------------

    def list_users(self) -> list[User]:
        return self.repo.list_users(self.db)

    def get_user(self, user_id: str) -> User:
        user = self.repo.get_by_id(self.db, user_id)
        if not user:
            raise NotFoundError("User not found")
        return user

    def update_user(self, user_id: str, data: AdminUserUpdate) -> User:
        user = self.get_user(user_id)
        user = self.repo.update_user(self.db, user, **data.model_dump(exclude_unset=True))
        logger.info(f"✏️ Admin updated user {user_id}")
        return user

    def delete_user(self, user_id: str) -> None:
        user = self.get_user(user_id)
        self.repo.delete_user(self.db, user)
        logger.info(f"🗑️ User {user_id} deleted")

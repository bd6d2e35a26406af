"""Order service - Order lifecycle, bookings and order statistics"""

import logging
from datetime import datetime
from typing import Any, Optional

from sqlalchemy.orm import Session

from ...errors import ForbiddenError, InvalidStateError, NotFoundError, ValidationError
from ...models import Order, OrderStatus, User
from ...shared.validators import parse_timestamp
from ..catalog.repository import ServiceRepository
from .repository import OrderRepository
from .schemas import BookingCreate, OrderCreate

logger = logging.getLogger(__name__)

# Cancellation is refused once an order has reached either of these
CANCEL_BLOCKED_STATUSES = {OrderStatus.DELIVERED, OrderStatus.CANCELLED}


def parse_status(value: Optional[str]) -> OrderStatus:
    if not value:
        raise ValidationError("Status is required")
    try:
        return OrderStatus(value)
    except ValueError:
        raise ValidationError("Invalid status value") from None


def _parse_pickup_date(value: Any) -> datetime:
    try:
        return parse_timestamp(value)
    except ValueError as e:
        raise ValidationError("Invalid pickup date", error=str(e)) from e


def summarize_counts(counts: dict[OrderStatus, int], detailed: bool = False) -> dict:
    stats = {
        "totalOrders": sum(counts.values()),
        "delivered": counts[OrderStatus.DELIVERED],
        "cancelled": counts[OrderStatus.CANCELLED],
        "pending": counts[OrderStatus.PENDING],
    }
    if detailed:
        stats["picked"] = counts[OrderStatus.PICKED]
        stats["inProcess"] = counts[OrderStatus.IN_PROCESS]
    return stats


class OrderService:
    """Service layer for order and booking business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = OrderRepository()
        self.services = ServiceRepository()

    # ------------------------------------------------------------------
    # Customer side
    # ------------------------------------------------------------------

    def get_user_orders(self, user: User) -> tuple[list[Order], dict]:
        orders = self.repo.get_orders_for_user(self.db, user.id)
        stats = summarize_counts(self.repo.count_by_status(self.db, user.id))
        return orders, stats

    def create_order(self, user: User, data: OrderCreate) -> Order:
        if not all([data.serviceId, data.serviceName, data.pickupDate, data.pickupTime, data.address]):
            raise ValidationError("Please provide all required fields")

        order = self.repo.create_order(
            self.db,
            user.id,
            service_id=data.serviceId,
            service_name=data.serviceName,
            pickup_date=_parse_pickup_date(data.pickupDate),
            pickup_time=data.pickupTime,
            address=data.address,
            notes=data.notes,
            amount=data.amount or 0,
            customer_name=user.name,
            customer_phone=user.phone_number,
        )
        logger.info(f"🧺 Order {order.id} created by user {user.id}")
        return order

    def get_order(self, order_id: str, user: User) -> Order:
        order = self.repo.get_by_id(self.db, order_id)
        if not order:
            raise NotFoundError("Order not found")
        if order.user_id != user.id:
            logger.warning(f"🚫 User {user.id} tried to read order {order_id}")
            raise ForbiddenError("Not authorized to access this order")
        return order

    def cancel_order(self, order_id: str, user: User) -> Order:
        order = self.repo.get_by_id(self.db, order_id)
        if not order:
            raise NotFoundError("Order not found")
        if order.user_id != user.id:
            logger.warning(f"🚫 User {user.id} tried to cancel order {order_id}")
            raise ForbiddenError("Not authorized to cancel this order")

        if order.status in CANCEL_BLOCKED_STATUSES:
            raise InvalidStateError(f"Cannot cancel order with status: {order.status.value}")

        order = self.repo.set_status(self.db, order, OrderStatus.CANCELLED)
        logger.info(f"❌ Order {order_id} cancelled by user {user.id}")
        return order

    def create_booking(self, user: User, data: BookingCreate) -> Order:
        """Book a catalog service; the price at booking time becomes the amount"""
        if not data.serviceId or not data.pickupDate or not data.pickupTime:
            raise ValidationError("Please provide all required fields")

        service = self.services.get_by_id(self.db, data.serviceId)
        if not service:
            raise NotFoundError("Service not found")

        order = self.repo.create_order(
            self.db,
            user.id,
            service_id=service.id,
            service_name=service.name,
            pickup_date=_parse_pickup_date(data.pickupDate),
            pickup_time=data.pickupTime,
            amount=service.price,
            address=data.address or user.address,
            notes=data.notes,
            customer_name=user.name,
            customer_phone=user.phone_number,
            status=OrderStatus.PENDING,
        )
        logger.info(f"📅 Booking {order.id} for '{service.name}' created by user {user.id}")
        return order

    # ------------------------------------------------------------------
    # Admin side
    # ------------------------------------------------------------------

    def update_status(self, order_id: str, status: Optional[str]) -> Order:
        """Set any status from any state; only the value itself is validated"""
        new_status = parse_status(status)

        order = self.repo.get_by_id(self.db, order_id)
        if not order:
            raise NotFoundError("Order not found")

        previous = order.status
        order = self.repo.set_status(self.db, order, new_status)
        logger.info(f"🔄 Order {order_id} status {previous.value} -> {new_status.value}")
        return order

    def get_all_orders(self) -> tuple[list[Order], dict]:
        orders = self.repo.get_all_orders(self.db)
        return orders, self.get_stats()

    def get_stats(self) -> dict:
        return summarize_counts(self.repo.count_by_status(self.db), detailed=True)

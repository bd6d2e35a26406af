"""Order repository - Database operations for orders and bookings"""

from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from ...models import Order, OrderStatus


class OrderRepository:
    """Repository for order database operations"""

    @staticmethod
    def get_orders_for_user(db: Session, user_id: str, limit: Optional[int] = None) -> list[Order]:
        query = db.query(Order).filter(Order.user_id == user_id).order_by(Order.created_at.desc())
        if limit:
            query = query.limit(limit)
        return query.all()

    @staticmethod
    def get_all_orders(db: Session, limit: Optional[int] = None) -> list[Order]:
        query = db.query(Order).options(joinedload(Order.user)).order_by(Order.created_at.desc())
        if limit:
            query = query.limit(limit)
        return query.all()

    @staticmethod
    def get_by_id(db: Session, order_id: str) -> Optional[Order]:
        return db.get(Order, order_id)

    @staticmethod
    def create_order(db: Session, user_id: str, **fields) -> Order:
        order = Order(user_id=user_id, **fields)
        db.add(order)
        db.commit()
        db.refresh(order)
        return order

    @staticmethod
    def set_status(db: Session, order: Order, status: OrderStatus) -> Order:
        order.status = status
        db.commit()
        db.refresh(order)
        return order

    @staticmethod
    def count_by_status(db: Session, user_id: Optional[str] = None) -> dict[OrderStatus, int]:
        """Order counts per status, every status present"""
        query = db.query(Order.status, func.count(Order.id))
        if user_id:
            query = query.filter(Order.user_id == user_id)
        counts = {status: 0 for status in OrderStatus}
        for status, count in query.group_by(Order.status).all():
            counts[OrderStatus(status)] = count
        return counts

    @staticmethod
    def delivered_revenue(db: Session) -> float:
        total = (
            db.query(func.coalesce(func.sum(Order.amount), 0))
            .filter(Order.status == OrderStatus.DELIVERED)
            .scalar()
        )
        return float(total or 0)

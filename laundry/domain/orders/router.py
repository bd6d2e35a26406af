"""Order router - FastAPI endpoints for orders and bookings"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import get_current_admin, get_current_user
from ...database import get_db
from ...models import Admin, User
from ...schemas import dump
from .schemas import AdminOrderResponse, BookingCreate, OrderCreate, OrderResponse, OrderStatusUpdate
from .service import OrderService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/orders", tags=["Orders"])
bookings_router = APIRouter(prefix="/api/bookings", tags=["Bookings"])


def get_order_service(db: Session = Depends(get_db)) -> OrderService:
    """Dependency injection for OrderService"""
    return OrderService(db)


# ============================================================================
# ORDERS
# ============================================================================


@router.get("")
async def get_my_orders(
    current_user: User = Depends(get_current_user),
    service: OrderService = Depends(get_order_service),
):
    """Own orders, newest first, with status counts"""
    orders, stats = service.get_user_orders(current_user)
    return {"success": True, "stats": stats, "orders": [dump(OrderResponse, o) for o in orders]}


@router.post("", status_code=201)
async def create_order(
    data: OrderCreate,
    current_user: User = Depends(get_current_user),
    service: OrderService = Depends(get_order_service),
):
    order = service.create_order(current_user, data)
    return {"success": True, "message": "Order created successfully", "order": dump(OrderResponse, order)}


# Fixed admin paths are declared before /{order_id} so they are not captured by it


@router.get("/all")
async def get_all_orders(
    current_admin: Admin = Depends(get_current_admin),
    service: OrderService = Depends(get_order_service),
):
    orders, stats = service.get_all_orders()
    return {"success": True, "stats": stats, "orders": [dump(AdminOrderResponse, o) for o in orders]}


@router.get("/stats")
async def get_order_stats(
    current_admin: Admin = Depends(get_current_admin),
    service: OrderService = Depends(get_order_service),
):
    return {"success": True, "stats": service.get_stats()}


@router.get("/{order_id}")
async def get_order(
    order_id: str,
    current_user: User = Depends(get_current_user),
    service: OrderService = Depends(get_order_service),
):
    return {"success": True, "order": dump(OrderResponse, service.get_order(order_id, current_user))}


@router.patch("/{order_id}/cancel")
async def cancel_order(
    order_id: str,
    current_user: User = Depends(get_current_user),
    service: OrderService = Depends(get_order_service),
):
    order = service.cancel_order(order_id, current_user)
    return {"success": True, "message": "Order cancelled successfully", "order": dump(OrderResponse, order)}


@router.patch("/{order_id}/status")
async def update_order_status(
    order_id: str,
    data: OrderStatusUpdate,
    current_admin: Admin = Depends(get_current_admin),
    service: OrderService = Depends(get_order_service),
):
    order = service.update_status(order_id, data.status)
    return {"success": True, "message": "Order status updated successfully", "order": dump(OrderResponse, order)}


# ============================================================================
# BOOKINGS
# ============================================================================


@bookings_router.post("", status_code=201)
async def create_booking(
    data: BookingCreate,
    current_user: User = Depends(get_current_user),
    service: OrderService = Depends(get_order_service),
):
    order = service.create_booking(current_user, data)
    return {"success": True, "message": "Booking created successfully", "order": dump(OrderResponse, order)}


@bookings_router.get("/user")
async def get_user_bookings(
    current_user: User = Depends(get_current_user),
    service: OrderService = Depends(get_order_service),
):
    orders, _ = service.get_user_orders(current_user)
    return {"success": True, "count": len(orders), "orders": [dump(OrderResponse, o) for o in orders]}


@bookings_router.get("/all")
async def get_all_bookings(
    current_admin: Admin = Depends(get_current_admin),
    service: OrderService = Depends(get_order_service),
):
    orders, _ = service.get_all_orders()
    return {"success": True, "count": len(orders), "orders": [dump(AdminOrderResponse, o) for o in orders]}


@bookings_router.put("/{order_id}")
async def update_booking_status(
    order_id: str,
    data: OrderStatusUpdate,
    current_admin: Admin = Depends(get_current_admin),
    service: OrderService = Depends(get_order_service),
):
    order = service.update_status(order_id, data.status)
    return {"success": True, "message": "Order status updated", "order": dump(OrderResponse, order)}

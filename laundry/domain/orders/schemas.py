"""Order domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel

from ...models import OrderStatus
from ...schemas import ResponseModel, UserSummary


class OrderCreate(BaseModel):
    """Direct order; serviceId is stored as given and never resolved"""

    serviceId: Optional[str] = None
    serviceName: Optional[str] = None
    pickupDate: Any = None
    pickupTime: Optional[str] = None
    address: Optional[str] = None
    notes: Optional[str] = None
    amount: Optional[float] = None


class BookingCreate(BaseModel):
    """Booking against a catalog service; name and amount come from the service"""

    serviceId: Optional[str] = None
    pickupDate: Any = None
    pickupTime: Optional[str] = None
    address: Optional[str] = None
    notes: Optional[str] = None


class OrderStatusUpdate(BaseModel):
    status: Optional[str] = None


class OrderResponse(ResponseModel):
    id: str
    user_id: str
    service_id: str
    service_name: str
    pickup_date: datetime
    pickup_time: str
    status: OrderStatus
    amount: float
    address: Optional[str] = None
    notes: Optional[str] = None
    customer_name: Optional[str] = None
    customer_phone: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class AdminOrderResponse(OrderResponse):
    user: Optional[UserSummary] = None

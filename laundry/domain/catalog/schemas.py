"""Catalog domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from ...schemas import ResponseModel


class ServiceCreate(BaseModel):
    """Schema for creating a service; required fields are checked by the service layer"""

    name: Optional[str] = None
    description: Optional[str] = None
    price: Optional[float] = None
    icon: Optional[str] = None
    image: Optional[str] = None
    estimatedDays: Optional[int] = None


class ServiceUpdate(BaseModel):
    """Partial update - only fields present in the request body are applied"""

    name: Optional[str] = None
    description: Optional[str] = None
    price: Optional[float] = None
    icon: Optional[str] = None
    image: Optional[str] = None
    estimatedDays: Optional[int] = None
    isActive: Optional[bool] = None


class ServiceResponse(ResponseModel):
    id: str
    name: str
    description: str
    price: float
    icon: Optional[str] = None
    image: Optional[str] = None
    is_active: bool
    estimated_days: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

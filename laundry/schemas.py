from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from .models import AdminRole


class ResponseModel(BaseModel):
    """Base for API output: reads ORM objects, writes camelCase keys"""

    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)


class UserResponse(ResponseModel):
    """User projection - never carries OTP fields"""

    id: str
    phone_number: str
    name: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    is_verified: bool = False
    sms_permission: bool = False
    contact_permission: bool = False
    is_profile_complete: bool = False
    fcm_token: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class UserSummary(ResponseModel):
    id: str
    name: Optional[str] = None
    phone_number: str
    email: Optional[str] = None


class AdminResponse(ResponseModel):
    id: str
    email: str
    name: str
    role: AdminRole
    phone: Optional[str] = None
    is_active: bool = True
    created_at: Optional[datetime] = None


class MessageResponse(BaseModel):
    success: bool = True
    message: str


def dump(model_cls: type[ResponseModel], obj) -> dict:
    """Serialize an ORM object through a response model with camelCase keys"""
    return model_cls.model_validate(obj).model_dump(by_alias=True, mode="json")

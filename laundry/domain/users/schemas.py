"""User domain schemas - Pydantic models for validation"""

from typing import Optional

from pydantic import BaseModel, field_validator

from ...shared.validators import validate_email


class ProfileUpdate(BaseModel):
    """Self-service profile patch - absent fields are left untouched"""

    name: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    smsPermission: Optional[bool] = None
    contactPermission: Optional[bool] = None
    fcmToken: Optional[str] = None

    @field_validator("email")
    @classmethod
    def validate_email_format(cls, v):
        return validate_email(v)


class AdminUserUpdate(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None

    @field_validator("email")
    @classmethod
    def validate_email_format(cls, v):
        return validate_email(v)

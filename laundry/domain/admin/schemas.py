"""Admin panel schemas - Pydantic models for validation"""

from typing import Optional

from pydantic import BaseModel, field_validator

from ...shared.validators import validate_email


class AdminProfileUpdate(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None

    @field_validator("email")
    @classmethod
    def validate_email_format(cls, v):
        return validate_email(v)


class ChangePasswordRequest(BaseModel):
    currentPassword: Optional[str] = None
    newPassword: Optional[str] = None

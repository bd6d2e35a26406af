"""Auth domain schemas - Pydantic models for validation"""

from typing import Optional

from pydantic import BaseModel


class PhoneRequest(BaseModel):
    """Body for login and resend - the format check lives in the service"""

    phoneNumber: Optional[str] = None


class VerifyOtpRequest(BaseModel):
    phoneNumber: Optional[str] = None
    otp: Optional[str] = None


class AdminLoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class AdminCreateRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None
    name: Optional[str] = None

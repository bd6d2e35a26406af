"""Auth router - OTP login, resend, verification and admin login"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...config import OTP_RATE_LIMIT, OTP_RATE_WINDOW_SECONDS
from ...database import get_db
from ...rate_limiter import create_rate_limiter
from ...schemas import AdminResponse, UserResponse, dump
from .schemas import AdminCreateRequest, AdminLoginRequest, PhoneRequest, VerifyOtpRequest
from .service import AdminAuthService, OtpAuthenticator

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Authentication"])

rate_limit_otp_request = create_rate_limiter(
    limit=OTP_RATE_LIMIT, window_seconds=OTP_RATE_WINDOW_SECONDS, key_prefix="otp_request"
)
rate_limit_otp_verify = create_rate_limiter(
    limit=OTP_RATE_LIMIT * 2, window_seconds=OTP_RATE_WINDOW_SECONDS, key_prefix="otp_verify"
)


def get_otp_authenticator(db: Session = Depends(get_db)) -> OtpAuthenticator:
    """Dependency injection for OtpAuthenticator"""
    return OtpAuthenticator(db)


def get_admin_auth_service(db: Session = Depends(get_db)) -> AdminAuthService:
    return AdminAuthService(db)


@router.post("/login")
async def send_otp(
    data: PhoneRequest,
    _: None = Depends(rate_limit_otp_request),
    authenticator: OtpAuthenticator = Depends(get_otp_authenticator),
):
    """Send a login code to the phone number, registering it on first use"""
    issue = await authenticator.request_otp(data.phoneNumber)
    response = {"success": True, "message": "OTP sent successfully"}
    if authenticator.echo_otp:
        response["otp"] = issue.otp
    return response


@router.post("/verify-otp")
async def verify_otp(
    data: VerifyOtpRequest,
    _: None = Depends(rate_limit_otp_verify),
    authenticator: OtpAuthenticator = Depends(get_otp_authenticator),
):
    """Exchange a valid login code for a session token"""
    grant = authenticator.verify_otp(data.phoneNumber, data.otp)
    return {
        "success": True,
        "message": "OTP verified successfully",
        "token": grant.token,
        "user": dump(UserResponse, grant.user),
    }


@router.post("/resend-otp")
async def resend_otp(
    data: PhoneRequest,
    _: None = Depends(rate_limit_otp_request),
    authenticator: OtpAuthenticator = Depends(get_otp_authenticator),
):
    """Issue a fresh code for an already registered number"""
    issue = await authenticator.resend_otp(data.phoneNumber)
    response = {"success": True, "message": "OTP resent successfully"}
    if authenticator.echo_otp:
        response["otp"] = issue.otp
    return response


@router.post("/logout")
async def logout():
    # Tokens are stateless; the client discards its copy
    return {"success": True, "message": "Logged out successfully"}


@router.post("/admin/login")
async def admin_login(
    data: AdminLoginRequest,
    service: AdminAuthService = Depends(get_admin_auth_service),
):
    token, admin = service.login(data.email, data.password)
    return {
        "success": True,
        "message": "Login successful",
        "token": token,
        "admin": dump(AdminResponse, admin),
    }


@router.post("/admin/create", status_code=201)
async def create_admin(
    data: AdminCreateRequest,
    service: AdminAuthService = Depends(get_admin_auth_service),
):
    """Initial admin setup"""
    admin = service.create_admin(data.email, data.password, data.name)
    return {
        "success": True,
        "message": "Admin created successfully",
        "admin": dump(AdminResponse, admin),
    }

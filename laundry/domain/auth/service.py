"""Auth service - OTP login for customers and password login for admins"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ...config import OTP_EXPIRY_MINUTES, OTP_LENGTH, STATIC_OTP, is_development
from ...errors import (
    ConflictError,
    ExpiredError,
    MismatchError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)
from ...models import Admin, User, utcnow
from ...security_utils import create_access_token, generate_numeric_code, hash_password, verify_password
from ...services.sms_gateway import OtpSender, get_otp_sender
from ...shared.validators import is_valid_phone
from .repository import CredentialRepository

logger = logging.getLogger(__name__)


@dataclass
class OtpIssue:
    user: User
    otp: str
    created: bool


@dataclass
class SessionGrant:
    token: str
    user: User


class OtpAuthenticator:
    """
    Issues, verifies and expires one-time passcodes bound to a phone number.

    Each request or resend overwrites the stored code and expiry, so only the
    most recent code is ever accepted. A successful verification clears both
    fields, which makes a replay of the same code fail as a mismatch.
    """

    def __init__(
        self,
        db: Session,
        sender: Optional[OtpSender] = None,
        static_otp: Optional[str] = STATIC_OTP,
        echo_otp: Optional[bool] = None,
        expiry_minutes: int = OTP_EXPIRY_MINUTES,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.db = db
        self.repo = CredentialRepository()
        self.sender = sender or get_otp_sender()
        self.static_otp = static_otp
        # Production responses never carry the code unless a static override is active
        self.echo_otp = echo_otp if echo_otp is not None else (is_development() or bool(static_otp))
        self.expiry_minutes = expiry_minutes
        self.clock = clock

    def _new_code(self) -> tuple[str, datetime]:
        otp = self.static_otp or generate_numeric_code(OTP_LENGTH)
        return otp, self.clock() + timedelta(minutes=self.expiry_minutes)

    async def _dispatch(self, phone_number: str, otp: str) -> None:
        sent, error = await self.sender.send_otp(phone_number, otp)
        if not sent:
            # The code is stored either way; the client can ask for a resend
            logger.error(f"❌ OTP dispatch to {phone_number} failed: {error}")

    async def request_otp(self, phone_number: Optional[str]) -> OtpIssue:
        """Issue a code for the number, creating the user on first contact"""
        if not phone_number:
            raise ValidationError("Phone number is required")
        if not is_valid_phone(phone_number):
            logger.info(f"❌ Invalid phone number format: {phone_number}")
            raise ValidationError("Please provide a valid 10 digit phone number")

        otp, expires_at = self._new_code()
        user = self.repo.get_user_by_phone(self.db, phone_number)
        created = False

        if not user:
            try:
                user = self.repo.create_user_with_otp(self.db, phone_number, otp, expires_at)
                created = True
                logger.info(f"🆕 New user created: {user.id}")
            except IntegrityError:
                # A concurrent request registered the number first; last write wins
                self.db.rollback()
                user = self.repo.get_user_by_phone(self.db, phone_number)
                if not user:
                    raise
                user = self.repo.set_otp(self.db, user, otp, expires_at)
        else:
            user = self.repo.set_otp(self.db, user, otp, expires_at)
            logger.info(f"🔄 OTP refreshed for user {user.id}")

        await self._dispatch(phone_number, otp)
        return OtpIssue(user=user, otp=otp, created=created)

    async def resend_otp(self, phone_number: Optional[str]) -> OtpIssue:
        """Same as request_otp but never creates a user"""
        if not phone_number:
            raise ValidationError("Phone number is required")

        user = self.repo.get_user_by_phone(self.db, phone_number)
        if not user:
            raise NotFoundError("User not found")

        otp, expires_at = self._new_code()
        user = self.repo.set_otp(self.db, user, otp, expires_at)
        logger.info(f"🔁 OTP resent for user {user.id}")

        await self._dispatch(phone_number, otp)
        return OtpIssue(user=user, otp=otp, created=False)

    def verify_otp(self, phone_number: Optional[str], otp: Optional[str]) -> SessionGrant:
        """Check the code and issue a session token"""
        if not phone_number or not otp:
            raise ValidationError("Phone number and OTP are required")

        user = self.repo.get_user_by_phone(self.db, phone_number)
        if not user:
            raise NotFoundError("User not found")

        if user.otp_expires_at is not None and user.otp_expires_at < self.clock():
            logger.warning(f"⏰ OTP expired for user {user.id} (expired at {user.otp_expires_at})")
            raise ExpiredError("OTP has expired")

        # Exact match, no normalization; a cleared code never matches
        if user.otp is None or user.otp != otp:
            logger.warning(f"❌ Invalid OTP for user {user.id}")
            raise MismatchError("Invalid OTP")

        user = self.repo.mark_verified(self.db, user)
        token = create_access_token(user.id)
        logger.info(f"🎉 Phone verification complete for user {user.id}")
        return SessionGrant(token=token, user=user)


class AdminAuthService:
    """Password login and setup for back-office admins"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = CredentialRepository()

    def login(self, email: Optional[str], password: Optional[str]) -> tuple[str, Admin]:
        if not email or not password:
            raise ValidationError("Please provide email and password")

        admin = self.repo.get_admin_by_email(self.db, email)
        if not admin or not verify_password(password, admin.password_hash):
            logger.warning(f"🚫 Failed admin login for {email}")
            raise UnauthorizedError("Invalid credentials")

        if not admin.is_active:
            logger.warning(f"🚫 Deactivated admin {admin.email} attempted login")
            raise UnauthorizedError("Account is deactivated")

        logger.info(f"✅ Admin logged in: {admin.email}")
        return create_access_token(admin.id), admin

    def create_admin(self, email: Optional[str], password: Optional[str], name: Optional[str]) -> Admin:
        if not email or not password or not name:
            raise ValidationError("Please provide all required fields")

        if self.repo.get_admin_by_email(self.db, email):
            raise ConflictError("Admin already exists")

        admin = self.repo.create_admin(self.db, email, hash_password(password), name)
        logger.info(f"🆕 Admin created: {admin.email}")
        return admin

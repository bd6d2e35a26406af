import logging
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from .database import get_db
from .errors import ForbiddenError, UnauthorizedError
from .models import Admin, User
from .security_utils import decode_access_token

logger = logging.getLogger(__name__)

# auto_error=False so a missing header surfaces as our own 401 body
security = HTTPBearer(auto_error=False)


def _bearer_token(credentials: Optional[HTTPAuthorizationCredentials]) -> str:
    if not credentials or not credentials.credentials:
        logger.debug("❌ No credentials provided")
        raise UnauthorizedError()

    token = credentials.credentials
    # Basic token format validation before processing
    if len(token.split(".")) != 3:
        logger.warning(f"⚠️ Malformed token received, length: {len(token)}")
        raise UnauthorizedError()
    return token


def authenticate_user(db: Session, token: str) -> User:
    """Resolve a session token to the User it was issued to"""
    subject_id = decode_access_token(token)
    user = db.get(User, subject_id)
    if not user:
        logger.warning(f"⚠️ Token subject {subject_id} is not a user")
        raise UnauthorizedError("User not found")
    return user


def authenticate_admin(db: Session, token: str) -> Admin:
    """
    Resolve a session token to an Admin.

    A valid token whose subject is not an admin, or whose admin has been
    deactivated, is forbidden rather than unauthenticated.
    """
    subject_id = decode_access_token(token)
    admin = db.get(Admin, subject_id)
    if not admin:
        logger.warning(f"🚫 Token subject {subject_id} attempted admin access")
        raise ForbiddenError("Access denied - Admin privileges required")
    if not admin.is_active:
        logger.warning(f"🚫 Deactivated admin {admin.email} attempted admin access")
        raise ForbiddenError("Account is deactivated")
    return admin


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db),
) -> User:
    """Get current user from the bearer token"""
    user = authenticate_user(db, _bearer_token(credentials))
    logger.debug(f"✅ User authenticated: {user.id}")
    return user


async def get_current_admin(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db),
) -> Admin:
    """Get current admin from the bearer token"""
    admin = authenticate_admin(db, _bearer_token(credentials))
    logger.debug(f"✅ Admin authenticated: {admin.email}")
    return admin

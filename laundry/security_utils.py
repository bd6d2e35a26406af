"""
Security utilities: session tokens and password hashing.

Session tokens are JWTs carrying only the subject id. Users and admins share
the same token format; the access guards decide which store a subject is
resolved against.
"""

import logging
import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import ExpiredSignatureError, JWTError
from jose import jwt as jose_jwt
from passlib.context import CryptContext

from .config import JWT_ALGORITHM, JWT_EXPIRE_DAYS, SECRET_KEY
from .errors import UnauthorizedError

logger = logging.getLogger(__name__)

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


# ============================================================================
# PASSWORD SECURITY
# ============================================================================


def hash_password(password: str) -> str:
    """Hash password using bcrypt"""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify password against bcrypt hash"""
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except Exception as e:
        logger.error(f"Password verification error: {e}")
        return False


# ============================================================================
# SESSION TOKENS
# ============================================================================


def generate_numeric_code(length: int = 6) -> str:
    """Uniform random code of exactly ``length`` digits with no leading zero"""
    low = 10 ** (length - 1)
    return str(low + secrets.randbelow(9 * low))


def create_access_token(subject_id: str, expires_delta: Optional[timedelta] = None) -> str:
    """
    Create a session token bound to a user or admin id

    Args:
        subject_id: Id of the principal the token is issued to
        expires_delta: Token validity (default JWT_EXPIRE_DAYS days)
    """
    if expires_delta is None:
        expires_delta = timedelta(days=JWT_EXPIRE_DAYS)
    expire = datetime.now(timezone.utc) + expires_delta
    to_encode = {"id": subject_id, "exp": expire}
    return jose_jwt.encode(to_encode, SECRET_KEY, algorithm=JWT_ALGORITHM)


def decode_access_token(token: str) -> str:
    """
    Verify a session token and return its subject id

    Raises:
        UnauthorizedError: bad signature, expired token or missing subject
    """
    try:
        payload = jose_jwt.decode(token, SECRET_KEY, algorithms=[JWT_ALGORITHM])
    except ExpiredSignatureError as e:
        logger.info("ℹ️ Expired session token presented")
        raise UnauthorizedError("Token has expired") from e
    except JWTError as e:
        logger.warning(f"JWT verification failed: {e}")
        raise UnauthorizedError() from e

    subject_id = payload.get("id")
    if not subject_id or not isinstance(subject_id, str):
        logger.warning(f"❌ Token missing subject claim. Available claims: {list(payload.keys())}")
        raise UnauthorizedError("Invalid token payload")
    return subject_id

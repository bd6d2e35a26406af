import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./laundry.db")

# "development", "production" or "test"
ENVIRONMENT = os.getenv("ENVIRONMENT", "development").lower()

# Security - CRITICAL: No default secret key in production
SECRET_KEY = os.getenv("JWT_SECRET") or os.getenv("SECRET_KEY")
if not SECRET_KEY:
    import warnings

    warnings.warn(
        "JWT_SECRET not set! Using insecure default - DO NOT USE IN PRODUCTION", RuntimeWarning, stacklevel=2
    )
    SECRET_KEY = "INSECURE-DEV-KEY-CHANGE-IN-PRODUCTION"  # noqa: S105 - Dev fallback only

JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
JWT_EXPIRE_DAYS = int(os.getenv("JWT_EXPIRE_DAYS", "7"))

# OTP configuration
# STATIC_OTP pins the code for test environments and makes responses echo it
STATIC_OTP = os.getenv("STATIC_OTP") or None
OTP_LENGTH = 6
OTP_EXPIRY_MINUTES = int(os.getenv("OTP_EXPIRY_MINUTES", "10"))

# Rate limiting for the public OTP endpoints
RATE_LIMIT_ENABLED = os.getenv("RATE_LIMIT_ENABLED", "true").lower() == "true"
OTP_RATE_LIMIT = int(os.getenv("OTP_RATE_LIMIT", "5"))
OTP_RATE_WINDOW_SECONDS = int(os.getenv("OTP_RATE_WINDOW_SECONDS", "600"))

# Twilio SMS gateway for OTP delivery (optional - codes are only logged when unset)
TWILIO_ACCOUNT_SID = os.getenv("TWILIO_ACCOUNT_SID")
TWILIO_AUTH_TOKEN = os.getenv("TWILIO_AUTH_TOKEN")
TWILIO_FROM_NUMBER = os.getenv("TWILIO_FROM_NUMBER")
# Local 10 digit numbers are prefixed with this code before dispatch
SMS_COUNTRY_CODE = os.getenv("SMS_COUNTRY_CODE", "+91")

ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "*").split(",")


def is_development() -> bool:
    return ENVIRONMENT == "development"

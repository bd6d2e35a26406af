"""
SMS gateway for OTP delivery.

Production sends through the Twilio REST API; without credentials the code
is only written to the log so local and test setups need no carrier account.
"""

import logging
from typing import Optional, Protocol

import httpx

from ..config import (
    OTP_EXPIRY_MINUTES,
    SMS_COUNTRY_CODE,
    TWILIO_ACCOUNT_SID,
    TWILIO_AUTH_TOKEN,
    TWILIO_FROM_NUMBER,
)

logger = logging.getLogger(__name__)


class OtpSender(Protocol):
    async def send_otp(self, phone_number: str, otp: str) -> tuple[bool, Optional[str]]: ...


def to_e164(phone_number: str) -> str:
    """Prefix a local 10 digit number with the configured country code"""
    if phone_number.startswith("+"):
        return phone_number
    return f"{SMS_COUNTRY_CODE}{phone_number}"


def otp_message(otp: str) -> str:
    return f"Your laundry login code is {otp}. It expires in {OTP_EXPIRY_MINUTES} minutes."


class LoggingOtpSender:
    """Stand-in used when no carrier is configured"""

    async def send_otp(self, phone_number: str, otp: str) -> tuple[bool, Optional[str]]:
        logger.info(f"📧 OTP for {phone_number}: {otp}")
        return True, None


class TwilioOtpSender:
    def __init__(self, account_sid: str, auth_token: str, from_number: str):
        self.account_sid = account_sid
        self.auth_token = auth_token
        self.from_number = from_number

    async def send_otp(self, phone_number: str, otp: str) -> tuple[bool, Optional[str]]:
        """
        Send the OTP as an SMS

        Returns:
            Tuple of (success: bool, error_message: Optional[str])
        """
        to_phone = to_e164(phone_number)
        data = {"To": to_phone, "From": self.from_number, "Body": otp_message(otp)}

        try:
            logger.info(f"🚀 Sending OTP SMS to Twilio API for {to_phone}")
            async with httpx.AsyncClient() as client:
                response = await client.post(
                    f"https://api.twilio.com/2010-04-01/Accounts/{self.account_sid}/Messages.json",
                    auth=(self.account_sid, self.auth_token),
                    data=data,
                    timeout=10.0,
                )
        except httpx.HTTPError as e:
            logger.error(f"❌ Twilio request failed for {to_phone}: {str(e)}")
            return False, str(e)

        logger.info(f"📡 Twilio API response status: {response.status_code}")
        if response.status_code in [200, 201]:
            logger.info(f"✅ OTP SMS sent to {to_phone} (SID: {response.json().get('sid')})")
            return True, None

        try:
            error_message = response.json().get("message", response.text)
        except ValueError:
            error_message = response.text
        logger.error(f"❌ Twilio rejected OTP SMS to {to_phone}: {error_message}")
        return False, error_message


def get_otp_sender() -> OtpSender:
    if TWILIO_ACCOUNT_SID and TWILIO_AUTH_TOKEN and TWILIO_FROM_NUMBER:
        return TwilioOtpSender(TWILIO_ACCOUNT_SID, TWILIO_AUTH_TOKEN, TWILIO_FROM_NUMBER)
    return LoggingOtpSender()

"""SMS domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel

from ...models import SmsType
from ...schemas import ResponseModel, UserSummary


class SmsSyncRequest(BaseModel):
    """
    Single message or batch upload from the device.

    ``smsData`` is an object for /sync and a list for /sync-batch; items are
    validated one by one so a bad item never rejects the whole batch.
    """

    userId: Optional[str] = None
    smsData: Any = None


class SmsResponse(ResponseModel):
    id: str
    user_id: str
    sms_id: str
    address: str
    body: str
    date: datetime
    type: SmsType
    created_at: Optional[datetime] = None


class AdminSmsResponse(SmsResponse):
    user: Optional[UserSummary] = None

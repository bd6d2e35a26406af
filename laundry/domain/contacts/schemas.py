"""Contact domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel

from ...schemas import ResponseModel, UserSummary


class ContactSyncRequest(BaseModel):
    """Device address-book upload; the list shape is checked by the service"""

    contacts: Any = None
    userPhoneNumber: Optional[str] = None


class ContactResponse(ResponseModel):
    id: str
    user_id: str
    name: str
    phone_number: str
    email: Optional[str] = None
    synced_at: datetime
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class AdminContactResponse(ContactResponse):
    user: Optional[UserSummary] = None

"""SMS service - Device message log sync and reporting"""

import logging
from dataclasses import dataclass, field
from typing import Any, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ...errors import ValidationError
from ...models import Sms, SmsType
from ...shared.pagination import page_offset
from ...shared.validators import parse_timestamp
from .repository import SmsRepository

logger = logging.getLogger(__name__)


@dataclass
class SmsFailure:
    sms_id: Optional[str]
    error: str


@dataclass
class SmsBatchResult:
    """Outcome of a batch sync; every submitted item lands in exactly one bucket"""

    synced: int = 0
    skipped: int = 0
    failed: list[SmsFailure] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "synced": self.synced,
            "skipped": self.skipped,
            "errors": len(self.failed),
            "errorDetails": [{"smsId": f.sms_id, "error": f.error} for f in self.failed],
        }


def _raw_sms_id(raw: Any) -> Optional[str]:
    if isinstance(raw, dict) and raw.get("id") is not None:
        return str(raw["id"])
    return None


def parse_sms_item(raw: Any) -> dict:
    """
    Validate one device message and map it to column values.

    Raises:
        ValueError: With a message naming the first bad field
    """
    if not isinstance(raw, dict):
        raise ValueError("SMS item must be an object")

    sms_id = _raw_sms_id(raw)
    if not sms_id:
        raise ValueError("id is required")

    address = raw.get("address")
    if not isinstance(address, str) or not address:
        raise ValueError("address is required")

    body = raw.get("body")
    if not isinstance(body, str):
        raise ValueError("body is required")

    sms_type = raw.get("type")
    try:
        sms_type = SmsType(sms_type)
    except ValueError:
        raise ValueError(f"type must be one of: inbox, sent (got {sms_type!r})") from None

    return {
        "sms_id": sms_id,
        "address": address,
        "body": body,
        "date": parse_timestamp(raw.get("date")),
        "type": sms_type,
    }


class SmsService:
    """Service layer for SMS sync business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = SmsRepository()

    def sync_one(self, user_id: Optional[str], sms_data: Any) -> tuple[Sms, bool]:
        """
        Store one message unless (user, device message id) is already known.

        Returns:
            Tuple of (stored message, created)
        """
        if not user_id or not sms_data:
            raise ValidationError("userId and smsData are required")

        try:
            fields = parse_sms_item(sms_data)
        except ValueError as e:
            raise ValidationError("Invalid SMS data", error=str(e)) from e

        existing = self.repo.get_by_sms_id(self.db, user_id, fields["sms_id"])
        if existing:
            logger.debug(f"⏭️ SMS {fields['sms_id']} already synced for user {user_id}")
            return existing, False

        try:
            sms = self.repo.create_sms(self.db, user_id, **fields)
        except IntegrityError:
            # Lost a race with a concurrent upload of the same message
            self.db.rollback()
            existing = self.repo.get_by_sms_id(self.db, user_id, fields["sms_id"])
            if not existing:
                raise
            return existing, False

        logger.info(f"📩 SMS {sms.sms_id} synced for user {user_id}")
        return sms, True

    def sync_batch(self, user_id: Optional[str], items: Any) -> SmsBatchResult:
        """
        Best-effort sync of many messages.

        Each item is validated on its own and inserted inside a SAVEPOINT, so a
        malformed or conflicting item is recorded and the rest still go in.
        """
        if not user_id or not isinstance(items, list):
            raise ValidationError("userId and smsData array are required")

        result = SmsBatchResult()
        candidate_ids = [sid for sid in (_raw_sms_id(raw) for raw in items) if sid]
        known_ids = self.repo.existing_sms_ids(self.db, user_id, candidate_ids)

        for raw in items:
            try:
                fields = parse_sms_item(raw)
            except ValueError as e:
                result.failed.append(SmsFailure(sms_id=_raw_sms_id(raw), error=str(e)))
                continue

            if fields["sms_id"] in known_ids:
                result.skipped += 1
                continue

            try:
                with self.db.begin_nested():
                    self.db.add(Sms(user_id=user_id, **fields))
            except IntegrityError as e:
                # Only the SAVEPOINT is rolled back; earlier items stay pending
                if self.repo.get_by_sms_id(self.db, user_id, fields["sms_id"]):
                    result.skipped += 1
                else:
                    result.failed.append(SmsFailure(sms_id=fields["sms_id"], error=str(e.orig)))
                continue
            except SQLAlchemyError as e:
                # Values the column rejects (e.g. too long for it) fail this item only
                logger.warning(f"⚠️ SMS {fields['sms_id']} rejected by the database: {e}")
                result.failed.append(SmsFailure(sms_id=fields["sms_id"], error=str(getattr(e, "orig", e))))
                continue

            known_ids.add(fields["sms_id"])
            result.synced += 1

        self.db.commit()
        logger.info(
            f"✅ SMS batch for user {user_id}: {result.synced} synced, "
            f"{result.skipped} skipped, {len(result.failed)} failed"
        )
        return result

    def get_user_sms(
        self,
        user_id: str,
        page: int,
        limit: int,
        sms_type: Optional[SmsType] = None,
        search: Optional[str] = None,
    ) -> tuple[list[Sms], int]:
        return self.repo.search(
            self.db, page_offset(page, limit), limit, user_id=user_id, sms_type=sms_type, search=search
        )

    def get_all_sms(
        self,
        page: int,
        limit: int,
        user_id: Optional[str] = None,
        sms_type: Optional[SmsType] = None,
        search: Optional[str] = None,
    ) -> tuple[list[Sms], int]:
        return self.repo.search(
            self.db,
            page_offset(page, limit),
            limit,
            user_id=user_id,
            sms_type=sms_type,
            search=search,
            with_user=True,
        )

    def get_statistics(self, user_id: Optional[str] = None) -> dict:
        return {
            "total": self.repo.count(self.db, user_id),
            "inbox": self.repo.count(self.db, user_id, SmsType.INBOX),
            "sent": self.repo.count(self.db, user_id, SmsType.SENT),
            # Distinct users only make sense across everyone
            "users": None if user_id else self.repo.count_distinct_users(self.db),
        }

    def delete_user_sms(self, user_id: str) -> int:
        deleted = self.repo.delete_for_user(self.db, user_id)
        logger.info(f"🗑️ Deleted {deleted} SMS messages for user {user_id}")
        return deleted

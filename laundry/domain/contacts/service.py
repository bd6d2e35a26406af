"""Contact service - Address-book sync and lookups"""

import logging
from dataclasses import dataclass, field
from typing import Any, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ...errors import ValidationError
from ...models import Contact, User, utcnow
from ...shared.pagination import page_offset
from .repository import ContactRepository

logger = logging.getLogger(__name__)

SELF_CONTACT_NAME = "Me (Own Number)"


@dataclass
class ContactEntry:
    name: str
    phone_number: str
    email: Optional[str] = None


@dataclass
class ContactSyncResult:
    inserted: int = 0
    updated: int = 0
    total: int = 0
    empty: bool = False
    invalid: list[dict] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "inserted": self.inserted,
            "updated": self.updated,
            "total": self.total,
            "invalid": len(self.invalid),
            "errorDetails": self.invalid,
        }


class ContactService:
    """Service layer for contact sync business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = ContactRepository()

    @staticmethod
    def _clean_phone(phone: Any) -> Optional[str]:
        if isinstance(phone, int) and not isinstance(phone, bool):
            phone = str(phone)
        if not isinstance(phone, str) or not phone.strip():
            return None
        return phone.strip()

    @classmethod
    def _parse_entry(cls, raw: Any) -> ContactEntry:
        """
        Raises:
            ValueError: If the entry is not an object or has no phone number
        """
        if not isinstance(raw, dict):
            raise ValueError("Contact is not an object")

        phone = cls._clean_phone(raw.get("phoneNumber"))
        if not phone:
            raise ValueError("Contact has no phoneNumber")

        name = raw.get("name")
        name = name.strip() if isinstance(name, str) and name.strip() else phone
        email = raw.get("email") if isinstance(raw.get("email"), str) else None
        return ContactEntry(name=name, phone_number=phone, email=email or None)

    def _apply(self, user: User, merged: dict[str, ContactEntry]) -> int:
        """Upsert every merged entry in one commit; returns how many rows were inserted"""
        existing = self.repo.get_by_phone_numbers(self.db, user.id, list(merged))
        synced_at = utcnow()
        inserted = 0

        for phone, entry in merged.items():
            contact = existing.get(phone)
            if contact:
                contact.name = entry.name
                contact.email = entry.email
                contact.synced_at = synced_at
            else:
                self.db.add(
                    Contact(
                        user_id=user.id,
                        name=entry.name,
                        phone_number=phone,
                        email=entry.email,
                        synced_at=synced_at,
                    )
                )
                inserted += 1

        user.contact_permission = True
        self.db.commit()
        return inserted

    def sync_contacts(self, user: User, contacts: Any, own_phone_number: Optional[str] = None) -> ContactSyncResult:
        """
        Merge a device address book into the user's contacts.

        Rows are keyed on (user, phone number): a known number has its name,
        email and sync time overwritten, an unknown one is inserted. Repeating
        the same batch converges on the same rows. Duplicate numbers inside
        one batch collapse onto one row with the later entry winning.
        Malformed entries are reported and skipped; the rest still sync and
        the contact permission is granted either way.
        """
        if not isinstance(contacts, list):
            logger.info(f"❌ Invalid contacts payload from user {user.id}")
            raise ValidationError("Invalid contacts data")

        if not contacts:
            logger.info(f"⚠️ No contacts to sync for user {user.id}")
            return ContactSyncResult(empty=True)

        entries: list[ContactEntry] = []
        invalid: list[dict] = []
        for index, raw in enumerate(contacts):
            try:
                entries.append(self._parse_entry(raw))
            except ValueError as e:
                invalid.append({"index": index, "error": str(e)})

        own_phone = self._clean_phone(own_phone_number)
        if own_phone:
            entries.append(
                ContactEntry(
                    name=user.name or SELF_CONTACT_NAME,
                    phone_number=own_phone,
                    email=user.email or None,
                )
            )
        if invalid:
            logger.warning(f"⚠️ Skipping {len(invalid)} malformed contacts from user {user.id}")

        merged: dict[str, ContactEntry] = {}
        for entry in entries:
            merged[entry.phone_number] = entry

        logger.info(f"📞 Syncing {len(entries)} contacts ({len(merged)} unique) for user {user.id}")

        try:
            inserted = self._apply(user, merged)
        except IntegrityError:
            # A concurrent sync inserted one of these numbers first; merge again over its rows
            self.db.rollback()
            logger.warning(f"⚠️ Contact sync for user {user.id} raced another sync, retrying once")
            inserted = self._apply(user, merged)

        result = ContactSyncResult(
            inserted=inserted, updated=len(entries) - inserted, total=len(entries), invalid=invalid
        )
        logger.info(f"✅ Contacts synced for user {user.id}: {result.inserted} inserted, {result.updated} updated")
        return result

    def get_my_contacts(self, user: User, page: int, limit: int, search: Optional[str] = None):
        return self.repo.search_user_contacts(self.db, user.id, page_offset(page, limit), limit, search)

    def get_all_contacts(
        self,
        page: int,
        limit: int,
        search: Optional[str] = None,
        user_id: Optional[str] = None,
        user_phone: Optional[str] = None,
    ):
        return self.repo.search_all_contacts(
            self.db, page_offset(page, limit), limit, search=search, user_id=user_id, user_phone=user_phone
        )

    def delete_my_contacts(self, user: User) -> int:
        """Drop all of the user's contacts and withdraw the contact permission with them"""
        deleted = self.repo.delete_for_user(self.db, user.id)
        user.contact_permission = False
        self.db.commit()
        logger.info(f"🗑️ Deleted {deleted} contacts for user {user.id}")
        return deleted

    def get_contact_stats(self) -> dict:
        total, users, last_synced = self.repo.get_stats(self.db)
        return {
            "totalContacts": total,
            "usersWithContacts": users,
            "lastSyncedAt": last_synced.isoformat() if last_synced else None,
        }

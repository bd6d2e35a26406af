"""Contact repository - Database operations for synced contacts"""

from datetime import datetime
from typing import Optional

from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session, joinedload

from ...models import Contact, User
from ...shared.validators import LIKE_ESCAPE, contains_pattern


class ContactRepository:
    """Repository for contact database operations"""

    @staticmethod
    def get_by_phone_numbers(db: Session, user_id: str, phone_numbers: list[str]) -> dict[str, Contact]:
        """Existing contacts for a user keyed by phone number"""
        if not phone_numbers:
            return {}
        rows = (
            db.query(Contact)
            .filter(Contact.user_id == user_id, Contact.phone_number.in_(phone_numbers))
            .all()
        )
        return {row.phone_number: row for row in rows}

    @staticmethod
    def search_user_contacts(
        db: Session, user_id: str, offset: int, limit: int, search: Optional[str] = None
    ) -> tuple[list[Contact], int]:
        query = db.query(Contact).filter(Contact.user_id == user_id)
        if search:
            pattern = contains_pattern(search)
            query = query.filter(
                or_(
                    Contact.name.ilike(pattern, escape=LIKE_ESCAPE),
                    Contact.phone_number.ilike(pattern, escape=LIKE_ESCAPE),
                )
            )

        total = query.count()
        contacts = query.order_by(Contact.name.asc()).offset(offset).limit(limit).all()
        return contacts, total

    @staticmethod
    def search_all_contacts(
        db: Session,
        offset: int,
        limit: int,
        search: Optional[str] = None,
        user_id: Optional[str] = None,
        user_phone: Optional[str] = None,
    ) -> tuple[list[Contact], int]:
        query = db.query(Contact).options(joinedload(Contact.user))
        if user_id:
            query = query.filter(Contact.user_id == user_id)
        if user_phone:
            matching_users = select(User.id).where(
                User.phone_number.ilike(contains_pattern(user_phone), escape=LIKE_ESCAPE)
            )
            query = query.filter(Contact.user_id.in_(matching_users))
        if search:
            pattern = contains_pattern(search)
            query = query.filter(
                or_(
                    Contact.name.ilike(pattern, escape=LIKE_ESCAPE),
                    Contact.phone_number.ilike(pattern, escape=LIKE_ESCAPE),
                )
            )

        total = query.count()
        contacts = query.order_by(Contact.created_at.desc()).offset(offset).limit(limit).all()
        return contacts, total

    @staticmethod
    def delete_for_user(db: Session, user_id: str) -> int:
        return db.query(Contact).filter(Contact.user_id == user_id).delete(synchronize_session=False)

    @staticmethod
    def get_stats(db: Session) -> tuple[int, int, Optional[datetime]]:
        """Total contacts, distinct users with contacts and the most recent sync time"""
        total, users, last_synced = db.query(
            func.count(Contact.id),
            func.count(func.distinct(Contact.user_id)),
            func.max(Contact.synced_at),
        ).one()
        return total, users, last_synced

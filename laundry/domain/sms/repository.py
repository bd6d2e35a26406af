"""SMS repository - Database operations for synced messages"""

from typing import Optional

from sqlalchemy import func, or_
from sqlalchemy.orm import Session, joinedload

from ...models import Sms, SmsType
from ...shared.validators import LIKE_ESCAPE, contains_pattern


class SmsRepository:
    """Repository for SMS database operations"""

    @staticmethod
    def get_by_sms_id(db: Session, user_id: str, sms_id: str) -> Optional[Sms]:
        return db.query(Sms).filter(Sms.user_id == user_id, Sms.sms_id == sms_id).first()

    @staticmethod
    def existing_sms_ids(db: Session, user_id: str, sms_ids: list[str]) -> set[str]:
        if not sms_ids:
            return set()
        rows = db.query(Sms.sms_id).filter(Sms.user_id == user_id, Sms.sms_id.in_(sms_ids)).all()
        return {row.sms_id for row in rows}

    @staticmethod
    def create_sms(db: Session, user_id: str, **fields) -> Sms:
        sms = Sms(user_id=user_id, **fields)
        db.add(sms)
        db.commit()
        db.refresh(sms)
        return sms

    @staticmethod
    def search(
        db: Session,
        offset: int,
        limit: int,
        user_id: Optional[str] = None,
        sms_type: Optional[SmsType] = None,
        search: Optional[str] = None,
        with_user: bool = False,
    ) -> tuple[list[Sms], int]:
        query = db.query(Sms)
        if with_user:
            query = query.options(joinedload(Sms.user))
        if user_id:
            query = query.filter(Sms.user_id == user_id)
        if sms_type:
            query = query.filter(Sms.type == sms_type)
        if search:
            pattern = contains_pattern(search)
            query = query.filter(
                or_(
                    Sms.address.ilike(pattern, escape=LIKE_ESCAPE),
                    Sms.body.ilike(pattern, escape=LIKE_ESCAPE),
                )
            )

        total = query.count()
        messages = query.order_by(Sms.date.desc()).offset(offset).limit(limit).all()
        return messages, total

    @staticmethod
    def count(db: Session, user_id: Optional[str] = None, sms_type: Optional[SmsType] = None) -> int:
        query = db.query(func.count(Sms.id))
        if user_id:
            query = query.filter(Sms.user_id == user_id)
        if sms_type:
            query = query.filter(Sms.type == sms_type)
        return query.scalar()

    @staticmethod
    def count_distinct_users(db: Session) -> int:
        return db.query(func.count(func.distinct(Sms.user_id))).scalar()

    @staticmethod
    def delete_for_user(db: Session, user_id: str) -> int:
        deleted = db.query(Sms).filter(Sms.user_id == user_id).delete(synchronize_session=False)
        db.commit()
        return deleted

"""Admin panel repository - Read-side aggregates and admin account updates"""

from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from ...models import Admin, Contact, Service, Sms, User


class AdminPanelRepository:
    """Repository for dashboard counts and admin records"""

    @staticmethod
    def count_users(db: Session, sms_permission: Optional[bool] = None, contact_permission: Optional[bool] = None) -> int:
        query = db.query(func.count(User.id))
        if sms_permission is not None:
            query = query.filter(User.sms_permission.is_(sms_permission))
        if contact_permission is not None:
            query = query.filter(User.contact_permission.is_(contact_permission))
        return query.scalar()

    @staticmethod
    def count_services(db: Session) -> int:
        return db.query(func.count(Service.id)).scalar()

    @staticmethod
    def users_with_sms_permission(db: Session) -> list[User]:
        return db.query(User).filter(User.sms_permission.is_(True)).all()

    @staticmethod
    def sms_totals(db: Session) -> tuple[int, int]:
        """Stored messages and distinct users owning them"""
        return db.query(func.count(Sms.id), func.count(func.distinct(Sms.user_id))).one()

    @staticmethod
    def contact_totals(db: Session) -> tuple[int, int]:
        """Stored contacts and distinct users owning them"""
        return db.query(func.count(Contact.id), func.count(func.distinct(Contact.user_id))).one()

    @staticmethod
    def get_admin_by_email(db: Session, email: str) -> Optional[Admin]:
        return db.query(Admin).filter(Admin.email == email).first()

    @staticmethod
    def update_admin(db: Session, admin: Admin, **updates) -> Admin:
        for key, value in updates.items():
            setattr(admin, key, value)
        db.commit()
        db.refresh(admin)
        return admin

"""Auth repository - Credential store operations for users and admins"""

from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from ...models import Admin, AdminRole, User


class CredentialRepository:
    """Repository for user and admin credential records"""

    @staticmethod
    def get_user_by_phone(db: Session, phone_number: str) -> Optional[User]:
        return db.query(User).filter(User.phone_number == phone_number).first()

    @staticmethod
    def create_user_with_otp(db: Session, phone_number: str, otp: str, expires_at: datetime) -> User:
        user = User(phone_number=phone_number, otp=otp, otp_expires_at=expires_at)
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    @staticmethod
    def set_otp(db: Session, user: User, otp: str, expires_at: datetime) -> User:
        """Overwrite the pending code; the previous one stops working immediately"""
        user.otp = otp
        user.otp_expires_at = expires_at
        db.commit()
        db.refresh(user)
        return user

    @staticmethod
    def mark_verified(db: Session, user: User) -> User:
        """Mark the phone number verified and drop the spent code"""
        user.is_verified = True
        user.otp = None
        user.otp_expires_at = None
        db.commit()
        db.refresh(user)
        return user

    @staticmethod
    def get_admin_by_email(db: Session, email: str) -> Optional[Admin]:
        return db.query(Admin).filter(Admin.email == email.strip().lower()).first()

    @staticmethod
    def create_admin(
        db: Session, email: str, password_hash: str, name: str, role: AdminRole = AdminRole.ADMIN
    ) -> Admin:
        admin = Admin(
            email=email.strip().lower(),
            password_hash=password_hash,
            name=name,
            role=role,
            is_active=True,
        )
        db.add(admin)
        db.commit()
        db.refresh(admin)
        return admin

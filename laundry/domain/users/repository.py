"""User repository - Database operations for customer accounts"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import User


class UserRepository:
    """Repository for user database operations"""

    @staticmethod
    def get_by_id(db: Session, user_id: str) -> Optional[User]:
        return db.get(User, user_id)

    @staticmethod
    def list_users(db: Session, limit: Optional[int] = None) -> list[User]:
        query = db.query(User).order_by(User.created_at.desc())
        if limit:
            query = query.limit(limit)
        return query.all()

    @staticmethod
    def update_user(db: Session, user: User, **updates) -> User:
        for key, value in updates.items():
            setattr(user, key, value)
        db.commit()
        db.refresh(user)
        return user

    @staticmethod
    def delete_user(db: Session, user: User) -> None:
        """Delete the user; orders, contacts and messages go with it"""
        db.delete(user)
        db.commit()

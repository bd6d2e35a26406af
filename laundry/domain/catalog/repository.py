"""Catalog repository - Database operations for laundry services"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import Service


class ServiceRepository:
    """Repository for service catalog database operations"""

    @staticmethod
    def list_services(db: Session, active_only: bool = True) -> list[Service]:
        query = db.query(Service)
        if active_only:
            query = query.filter(Service.is_active.is_(True))
        return query.order_by(Service.created_at.desc()).all()

    @staticmethod
    def get_by_id(db: Session, service_id: str) -> Optional[Service]:
        return db.get(Service, service_id)

    @staticmethod
    def get_by_name(db: Session, name: str) -> Optional[Service]:
        """Name lookup across active and inactive services"""
        return db.query(Service).filter(Service.name == name).first()

    @staticmethod
    def create_service(db: Session, **fields) -> Service:
        service = Service(**fields)
        db.add(service)
        db.commit()
        db.refresh(service)
        return service

    @staticmethod
    def update_service(db: Session, service: Service, **updates) -> Service:
        for key, value in updates.items():
            setattr(service, key, value)
        db.commit()
        db.refresh(service)
        return service

    @staticmethod
    def delete_service(db: Session, service: Service) -> None:
        db.delete(service)
        db.commit()

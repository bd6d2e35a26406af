import enum
import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    Enum,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from .database import Base


def generate_id():
    """Generate an opaque identifier for a stored record"""
    return str(uuid.uuid4())


def utcnow() -> datetime:
    """Naive UTC timestamp, matching what the DateTime columns store"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class OrderStatus(str, enum.Enum):
    PENDING = "pending"
    PICKED = "picked"
    IN_PROCESS = "in-process"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class AdminRole(str, enum.Enum):
    ADMIN = "admin"
    SUPER_ADMIN = "super-admin"


class SmsType(str, enum.Enum):
    INBOX = "inbox"
    SENT = "sent"


def _enum_values(enum_cls):
    return [member.value for member in enum_cls]


class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=generate_id)
    phone_number = Column(String(10), unique=True, index=True, nullable=False)
    name = Column(String(255), nullable=True)
    email = Column(String(255), nullable=True)
    address = Column(Text, nullable=True)
    otp = Column(String(10), nullable=True)  # Current login code, cleared once verified
    otp_expires_at = Column(DateTime, nullable=True)
    is_verified = Column(Boolean, default=False, nullable=False)
    sms_permission = Column(Boolean, default=False, nullable=False)
    contact_permission = Column(Boolean, default=False, nullable=False)
    is_profile_complete = Column(Boolean, default=False, nullable=False)
    fcm_token = Column(String(500), nullable=True)  # Device push token
    # Embedded arrays from the first app release, superseded by the contacts / sms tables
    legacy_contacts = Column(JSON, default=list, nullable=True)  # [{name, phoneNumber}]
    legacy_sms_logs = Column(JSON, default=list, nullable=True)  # [{message, date, from}]
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    orders = relationship("Order", back_populates="user", cascade="all, delete-orphan")
    contacts = relationship("Contact", back_populates="user", cascade="all, delete-orphan")
    sms_messages = relationship("Sms", back_populates="user", cascade="all, delete-orphan")


class Admin(Base):
    __tablename__ = "admins"

    id = Column(String(36), primary_key=True, default=generate_id)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    name = Column(String(255), nullable=False)
    phone = Column(String(50), nullable=True)
    role = Column(
        Enum(AdminRole, values_callable=_enum_values, native_enum=False),
        default=AdminRole.ADMIN,
        nullable=False,
    )
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)


class Service(Base):
    __tablename__ = "services"

    id = Column(String(36), primary_key=True, default=generate_id)
    name = Column(String(255), nullable=False, index=True)
    description = Column(Text, nullable=False)
    price = Column(Float, nullable=False)
    icon = Column(String(255), nullable=True)
    image = Column(String(500), nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    estimated_days = Column(Integer, default=2, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)


class Order(Base):
    __tablename__ = "orders"

    id = Column(String(36), primary_key=True, default=generate_id)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    # Opaque reference - orders outlive catalog edits, so this is not a foreign key
    service_id = Column(String(255), nullable=False)
    service_name = Column(String(255), nullable=False)
    pickup_date = Column(DateTime, nullable=False)
    pickup_time = Column(String(50), nullable=False)
    status = Column(
        Enum(OrderStatus, values_callable=_enum_values, native_enum=False),
        default=OrderStatus.PENDING,
        nullable=False,
        index=True,
    )
    amount = Column(Float, default=0, nullable=False)
    address = Column(Text, nullable=True)
    notes = Column(Text, nullable=True)
    customer_name = Column(String(255), nullable=True)
    customer_phone = Column(String(10), nullable=True)
    created_at = Column(DateTime, default=utcnow, nullable=False, index=True)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    user = relationship("User", back_populates="orders")


class Contact(Base):
    __tablename__ = "contacts"
    __table_args__ = (UniqueConstraint("user_id", "phone_number", name="uq_contacts_user_phone"),)

    id = Column(String(36), primary_key=True, default=generate_id)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    phone_number = Column(String(50), nullable=False)
    email = Column(String(255), nullable=True)
    synced_at = Column(DateTime, default=utcnow, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    user = relationship("User", back_populates="contacts")


class Sms(Base):
    __tablename__ = "sms"
    __table_args__ = (
        UniqueConstraint("user_id", "sms_id", name="uq_sms_user_sms_id"),
        Index("ix_sms_date", "date"),
    )

    id = Column(String(36), primary_key=True, default=generate_id)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    sms_id = Column(String(255), nullable=False)  # Device-local message id
    address = Column(String(255), nullable=False)
    body = Column(Text, nullable=False)
    date = Column(DateTime, nullable=False)
    type = Column(Enum(SmsType, values_callable=_enum_values, native_enum=False), nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    user = relationship("User", back_populates="sms_messages")

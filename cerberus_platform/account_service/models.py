from sqlalchemy import Column, String, Date, DateTime, Enum, ForeignKey, Index, JSON
from sqlalchemy.orm import relationship
from datetime import datetime
from typing import Tuple
import enum
import uuid

from .db import Base


class UserStatus(str, enum.Enum):
    PENDING_APPROVAL = "pending_approval"
    APPROVED = "approved"
    ADMINISTRATOR = "administrator"
    DEACTIVATED = "deactivated"

    @property
    def scopes(self) -> Tuple[str, ...]:
        """Authorization scopes granted to accounts in this status, in claim order."""
        return STATUS_SCOPES[self]


STATUS_SCOPES = {
    UserStatus.PENDING_APPROVAL: ("selfservice.read",),
    UserStatus.APPROVED: ("selfservice.read", "selfservice.write"),
    UserStatus.ADMINISTRATOR: ("fullaccess",),
    UserStatus.DEACTIVATED: (),
}


class User(Base):
    __tablename__ = "users"
    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    password = Column(String, nullable=False)
    date_of_birth = Column(Date, nullable=True)
    user_status = Column(
        Enum(UserStatus, name="user_status"),
        default=UserStatus.APPROVED,
        nullable=False
    )
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    events = relationship("AccountEvent", back_populates="user", cascade="all, delete-orphan")


class AccountEvent(Base):
    __tablename__ = "account_events"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False)
    email = Column(String, nullable=False)
    event_type = Column(
        Enum("account_created", "account_updated", "login_success", "login_failure",
             name="account_event_type"),
        nullable=False
    )
    ip_address = Column(String, nullable=True)
    user_agent = Column(String, nullable=True)
    timestamp = Column(DateTime, default=datetime.utcnow, nullable=False)
    event_metadata = Column(JSON, nullable=True)

    user = relationship("User", back_populates="events")

    __table_args__ = (
        Index('ix_account_events_user_id', 'user_id'),
        Index('ix_account_events_timestamp', 'timestamp'),
        Index('ix_account_events_event_type', 'event_type'),
        Index('ix_account_events_user_id_timestamp', 'user_id', 'timestamp'),
    )

    def to_dict(self) -> dict:
        """
        Serialize AccountEvent to a dictionary for logs and API responses.

        Returns:
            Dictionary with all event fields, datetimes in ISO 8601 format
        """
        return {
            "id": self.id,
            "user_id": self.user_id,
            "email": self.email,
            "event_type": self.event_type,
            "ip_address": self.ip_address,
            "user_agent": self.user_agent,
            "timestamp": self.timestamp.isoformat() if self.timestamp else None,
            "metadata": self.event_metadata or {}
        }

from datetime import datetime
from typing import Optional
import logging
import uuid

from fastapi import Request
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..auth import hash_password
from ..exceptions import AccountAlreadyExistsException, AccountNotFoundException
from ..models import User, UserStatus
from ..schemas import UserCreationRequest, UserDetail, UserUpdationRequest
from ..utils.event_logger import log_account_event

logger = logging.getLogger(__name__)

# Columns that reject NULL; an explicit null for these leaves the value unchanged
NON_NULLABLE_FIELDS = {"first_name", "last_name"}


class UserService:
    """Account creation, self-service update and retrieval."""

    def __init__(self, db: Session, request: Optional[Request] = None):
        self.db = db
        self.request = request

    def create(self, user_creation_request: UserCreationRequest) -> None:
        email = user_creation_request.email
        if self.db.query(User).filter(User.email == email).first():
            raise AccountAlreadyExistsException()

        user = User(
            first_name=user_creation_request.first_name,
            last_name=user_creation_request.last_name,
            email=email,
            password=hash_password(user_creation_request.password),
            date_of_birth=user_creation_request.date_of_birth,
            user_status=UserStatus.APPROVED,
        )
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError as exc:
            # Concurrent registration with the same email won the unique index
            self.db.rollback()
            raise AccountAlreadyExistsException() from exc
        self.db.refresh(user)

        logger.info("User account created user_id=%s", user.id)
        log_account_event("account_created", user, self.db, self.request)

    def update(self, user_id: uuid.UUID, user_updation_request: UserUpdationRequest) -> None:
        user = self._get_user(user_id)

        changes = {
            field_name: value
            for field_name, value in user_updation_request.model_dump(exclude_unset=True).items()
            if value is not None or field_name not in NON_NULLABLE_FIELDS
        }
        for field_name, value in changes.items():
            setattr(user, field_name, value)
        user.updated_at = datetime.utcnow()
        self.db.commit()
        self.db.refresh(user)

        logger.info("User account updated user_id=%s fields=%s", user.id, ",".join(sorted(changes)))
        log_account_event(
            "account_updated", user, self.db, self.request,
            metadata={"fields": sorted(changes)}
        )

    def get_by_id(self, user_id: uuid.UUID) -> UserDetail:
        user = self._get_user(user_id)
        return UserDetail(
            id=uuid.UUID(user.id),
            first_name=user.first_name,
            last_name=user.last_name,
            email=user.email,
            status=UserStatus(user.user_status).value,
            date_of_birth=user.date_of_birth,
            created_at=user.created_at,
        )

    def _get_user(self, user_id: uuid.UUID) -> User:
        user = self.db.query(User).filter(User.id == str(user_id)).first()
        if not user:
            raise AccountNotFoundException()
        return user

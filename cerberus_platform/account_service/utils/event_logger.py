"""
Event logger utility for account lifecycle and login events.
"""
from datetime import datetime
from typing import Optional
import logging

from fastapi import Request
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

from ..models import AccountEvent, User

logger = logging.getLogger(__name__)


ALLOWED_EVENT_TYPES = {
    "account_created",
    "account_updated",
    "login_success",
    "login_failure",
}


def client_ip_address(request: Optional[Request]) -> Optional[str]:
    """Client address, falling back to the first X-Forwarded-For hop."""
    if request is None:
        return None

    ip_address = request.client.host if request.client else None
    if not ip_address and request.headers.get("x-forwarded-for"):
        ip_address = request.headers.get("x-forwarded-for").split(",")[0].strip()
    return ip_address


def log_account_event(
    event_type: str,
    user: User,
    db: Session,
    request: Optional[Request] = None,
    metadata: dict = None
) -> None:
    """
    Persist an account event and mirror it to the application log.

    Args:
        event_type: One of: account_created, account_updated,
                    login_success, login_failure
        user: User the event concerns
        db: Database session
        request: Originating request, when available
        metadata: Optional dictionary of additional context

    Raises:
        ValueError: If event_type is invalid
    """
    if event_type not in ALLOWED_EVENT_TYPES:
        raise ValueError(
            f"Invalid event_type '{event_type}'. Must be one of: {', '.join(sorted(ALLOWED_EVENT_TYPES))}"
        )

    user_id, email = user.id, user.email
    ip_address = client_ip_address(request)
    user_agent = request.headers.get("user-agent") if request is not None else None

    try:
        account_event = AccountEvent(
            user_id=user_id,
            email=email,
            event_type=event_type,
            ip_address=ip_address,
            user_agent=user_agent,
            timestamp=datetime.utcnow(),
            event_metadata=metadata or {}
        )
        db.add(account_event)
        db.commit()

        logger.info(
            "ACCOUNT %s user_id=%s ip=%s timestamp=%s",
            event_type, user_id, ip_address, account_event.timestamp.isoformat()
        )

    except SQLAlchemyError as e:
        # Event persistence failure must not break the request
        logger.warning(
            "Failed to log account event user_id=%s event_type=%s error=%s",
            user_id, event_type, e
        )
        db.rollback()

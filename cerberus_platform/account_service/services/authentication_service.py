from typing import Optional
import logging

from fastapi import Request
from sqlalchemy.orm import Session

from ..auth import generate_access_token, get_expiration_timestamp, hash_password, verify_password
from ..exceptions import AccountDeactivatedException, InvalidLoginCredentialsException
from ..models import User, UserStatus
from ..schemas import TokenSuccessResponse, UserLoginRequest
from ..utils.event_logger import log_account_event

logger = logging.getLogger(__name__)

# Verified against for unknown emails so both failure paths cost one hash
DUMMY_PASSWORD_HASH = hash_password("cerberus-unknown-account")


class AuthenticationService:
    """Exchanges email/password credentials for an access token."""

    def __init__(self, db: Session, request: Optional[Request] = None):
        self.db = db
        self.request = request

    def login(self, user_login_request: UserLoginRequest) -> TokenSuccessResponse:
        user = self.db.query(User).filter(User.email == user_login_request.email).first()
        if not user:
            verify_password(user_login_request.password, DUMMY_PASSWORD_HASH)
            raise InvalidLoginCredentialsException()

        if not verify_password(user_login_request.password, user.password):
            log_account_event("login_failure", user, self.db, self.request)
            raise InvalidLoginCredentialsException()

        if UserStatus(user.user_status) is UserStatus.DEACTIVATED:
            log_account_event(
                "login_failure", user, self.db, self.request,
                metadata={"reason": "account_deactivated"}
            )
            raise AccountDeactivatedException()

        access_token = generate_access_token(user)
        log_account_event("login_success", user, self.db, self.request)
        return TokenSuccessResponse(
            access_token=access_token,
            expires_at=get_expiration_timestamp(access_token),
        )

"""
Login endpoint issuing bearer access tokens.
"""
from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from ..db import get_db
from ..schemas import ErrorResponse, TokenSuccessResponse, UserLoginRequest
from ..services import AuthenticationService

router = APIRouter(prefix="/auth", tags=["authentication"])


def get_authentication_service(request: Request, db: Session = Depends(get_db)) -> AuthenticationService:
    return AuthenticationService(db, request)


@router.post(
    "/login",
    response_model=TokenSuccessResponse,
    responses={
        401: {"description": "Invalid login credentials provided", "model": ErrorResponse},
        403: {"description": "User account has been deactivated", "model": ErrorResponse},
    },
    summary="Logs in a user account",
    description="Validates email/password credentials and returns a signed access token",
)
def login(
    user_login_request: UserLoginRequest,
    authentication_service: AuthenticationService = Depends(get_authentication_service),
) -> TokenSuccessResponse:
    return authentication_service.login(user_login_request)

"""
User account endpoints: registration, self-service update and retrieval.
"""
from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.orm import Session
import uuid

from ..db import get_db
from ..schemas import ErrorResponse, UserCreationRequest, UserDetail, UserUpdationRequest
from ..security import get_authenticated_user_id, require_any_authority
from ..services import UserService

router = APIRouter(prefix="/users", tags=["users"])


def get_user_service(request: Request, db: Session = Depends(get_db)) -> UserService:
    return UserService(db, request)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_class=Response,
    responses={
        201: {"description": "User account created successfully"},
        409: {"description": "User account with provided email-id already exists", "model": ErrorResponse},
    },
    summary="Creates a user account",
    description="Registers a unique user record in the system corresponding to the provided information",
)
def create_user(
    user_creation_request: UserCreationRequest,
    user_service: UserService = Depends(get_user_service),
):
    user_service.create(user_creation_request)
    return Response(status_code=status.HTTP_201_CREATED)


@router.patch(
    "",
    status_code=status.HTTP_200_OK,
    response_class=Response,
    dependencies=[Depends(require_any_authority("selfservice.write", "fullaccess"))],
    responses={
        200: {"description": "User account details updated successfully"},
        401: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
    },
    summary="Updates user account details",
    description="Updates account details for the logged-in user",
)
def update_user(
    user_updation_request: UserUpdationRequest,
    user_id: uuid.UUID = Depends(get_authenticated_user_id),
    user_service: UserService = Depends(get_user_service),
):
    user_service.update(user_id, user_updation_request)
    return Response(status_code=status.HTTP_200_OK)


@router.get(
    "",
    response_model=UserDetail,
    dependencies=[Depends(require_any_authority("selfservice.read", "fullaccess"))],
    responses={
        401: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
    },
    summary="Retrieves current logged-in user's account details",
    description="Private endpoint which retrieves user account details against the access token provided in headers",
)
def retrieve_user(
    user_id: uuid.UUID = Depends(get_authenticated_user_id),
    user_service: UserService = Depends(get_user_service),
) -> UserDetail:
    return user_service.get_by_id(user_id)

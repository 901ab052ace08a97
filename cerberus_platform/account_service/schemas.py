from pydantic import BaseModel, Field, field_validator
from datetime import date, datetime
from typing import Optional
import uuid

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class UserCreationRequest(BaseModel):
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., max_length=255, pattern=EMAIL_PATTERN)
    password: str = Field(..., min_length=8, max_length=128)
    date_of_birth: Optional[date] = None

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()


class UserUpdationRequest(BaseModel):
    """Self-service profile changes. Only fields present in the body are applied."""
    first_name: Optional[str] = Field(None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(None, min_length=1, max_length=100)
    date_of_birth: Optional[date] = None


class UserDetail(BaseModel):
    id: uuid.UUID
    first_name: str
    last_name: str
    email: str
    status: str
    date_of_birth: Optional[date] = None
    created_at: datetime


class UserLoginRequest(BaseModel):
    email: str = Field(..., max_length=255, pattern=EMAIL_PATTERN)
    password: str = Field(..., min_length=1)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()


class TokenSuccessResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_at: datetime


class ErrorResponse(BaseModel):
    detail: str

"""
Account service exceptions.

Each exception carries the HTTP status it is translated to by the handler
registered in `main.py`.
"""
from fastapi import status


class AccountServiceError(Exception):
    """Base exception for the account service."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    detail = "Internal server error"

    def __init__(self, detail: str = None):
        self.detail = detail or self.detail
        super().__init__(self.detail)


class AccountAlreadyExistsException(AccountServiceError):
    status_code = status.HTTP_409_CONFLICT
    detail = "User account with provided email-id already exists"


class AccountNotFoundException(AccountServiceError):
    status_code = status.HTTP_404_NOT_FOUND
    detail = "No user account exists with provided id"


class InvalidLoginCredentialsException(AccountServiceError):
    status_code = status.HTTP_401_UNAUTHORIZED
    detail = "Invalid login credentials provided"


class InvalidTokenException(AccountServiceError):
    """Token missing, malformed, badly signed, or expired."""

    status_code = status.HTTP_401_UNAUTHORIZED
    detail = "Authentication failure: token missing, invalid or expired"


class InsufficientScopeException(AccountServiceError):
    status_code = status.HTTP_403_FORBIDDEN
    detail = "Access denied: insufficient privileges to perform this action"


class AccountDeactivatedException(AccountServiceError):
    status_code = status.HTTP_403_FORBIDDEN
    detail = "User account has been deactivated"

from .authentication_service import AuthenticationService
from .user_service import UserService

__all__ = ["AuthenticationService", "UserService"]

"""Request guards resolving the caller's identity and scopes from a bearer token."""
from dataclasses import dataclass, field
from typing import Callable, List, Optional
import logging
import uuid

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from .auth import extract_user_id, get_authorities, validate_token
from .exceptions import InsufficientScopeException, InvalidTokenException

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class AuthenticatedPrincipal:
    user_id: uuid.UUID
    authorities: List[str] = field(default_factory=list)

    def has_any_authority(self, *authorities: str) -> bool:
        return any(authority in self.authorities for authority in authorities)


def get_authenticated_principal(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> AuthenticatedPrincipal:
    # HTTPBearer yields None for a missing header or a non-Bearer scheme
    if credentials is None:
        raise InvalidTokenException("Not authenticated")

    token = credentials.credentials
    user_id = extract_user_id(token)
    if not validate_token(token, user_id):
        logger.info("Rejected expired token user_id=%s", user_id)
        raise InvalidTokenException("Token has expired")

    return AuthenticatedPrincipal(user_id=user_id, authorities=get_authorities(token))


def get_authenticated_user_id(
    principal: AuthenticatedPrincipal = Depends(get_authenticated_principal),
) -> uuid.UUID:
    return principal.user_id


def require_any_authority(*authorities: str) -> Callable[..., AuthenticatedPrincipal]:
    """
    Build a dependency that admits only callers holding one of `authorities`.

    Used in a route's `dependencies=[...]` so the check runs before the
    handler body and before any service dependency is resolved.
    """
    def guard(
        principal: AuthenticatedPrincipal = Depends(get_authenticated_principal),
    ) -> AuthenticatedPrincipal:
        if not principal.has_any_authority(*authorities):
            logger.warning(
                "Scope check failed user_id=%s required=%s granted=%s",
                principal.user_id, ",".join(authorities), ",".join(principal.authorities)
            )
            raise InsufficientScopeException()
        return principal

    return guard

from passlib.context import CryptContext
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List
import logging
import uuid

import jwt

from .config import settings
from .exceptions import InvalidTokenException
from .models import User, UserStatus

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"
BEARER_PREFIX = "Bearer "
SCOPE_CLAIM_NAME = "scp"
REQUIRED_CLAIMS = ["exp", "iat", "aud", "iss"]

# Use pbkdf2_sha256 to avoid external bcrypt backend issues in some environments
pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def generate_access_token(user: User) -> str:
    """
    Issue a signed access token for the given user.

    The token carries the application name as issuer, the user's id as its
    single audience value, and the scopes of the user's account status joined
    by single spaces in the `scp` claim.
    """
    issued_at = datetime.now(timezone.utc)
    expiration = issued_at + timedelta(minutes=settings.ACCESS_TOKEN_VALIDITY_MINUTES)
    scopes = " ".join(UserStatus(user.user_status).scopes)

    payload = {
        SCOPE_CLAIM_NAME: scopes,
        "iss": settings.APP_NAME,
        "iat": issued_at,
        "exp": expiration,
        "aud": str(user.id),
    }
    token = jwt.encode(payload, settings.JWT_SECRET_KEY, algorithm=ALGORITHM)
    logger.info("Access token issued user_id=%s expires_at=%s", user.id, expiration.isoformat())
    return token


def extract_user_id(token: str) -> uuid.UUID:
    """Return the audience claim of a verified token as a user id."""
    audience = _extract_claims(token)["aud"]
    if isinstance(audience, list):
        if len(audience) != 1:
            raise InvalidTokenException("Token must carry exactly one audience value")
        audience = audience[0]
    try:
        return uuid.UUID(str(audience))
    except ValueError as exc:
        raise InvalidTokenException("Token audience is not a valid user id") from exc


def get_authorities(token: str) -> List[str]:
    """Split the scope claim into one authority per scope, preserving order."""
    scopes = _extract_claims(token).get(SCOPE_CLAIM_NAME) or ""
    return [scope for scope in scopes.split(" ") if scope]


def validate_token(token: str, user_id: uuid.UUID) -> bool:
    return extract_user_id(token) == user_id and not is_token_expired(token)


def is_token_expired(token: str) -> bool:
    return get_expiration_timestamp(token) < datetime.now(timezone.utc)


def get_expiration_timestamp(token: str) -> datetime:
    """Expiration claim as a timezone-aware UTC datetime."""
    expiration = _extract_claims(token)["exp"]
    try:
        return datetime.fromtimestamp(expiration, tz=timezone.utc)
    except (OverflowError, OSError, ValueError) as exc:
        raise InvalidTokenException("Token expiration is out of range") from exc


def _extract_claims(token: str) -> Dict[str, Any]:
    # Expiry is reported by is_token_expired rather than raised here, and the
    # audience is the subject's id, so neither is verified by the decoder.
    sanitized_token = token.strip()
    if sanitized_token.startswith(BEARER_PREFIX):
        sanitized_token = sanitized_token[len(BEARER_PREFIX):].strip()
    try:
        claims = jwt.decode(
            sanitized_token,
            settings.JWT_SECRET_KEY,
            algorithms=[ALGORITHM],
            issuer=settings.APP_NAME,
            options={
                "verify_exp": False,
                "verify_aud": False,
                "require": REQUIRED_CLAIMS,
            },
        )
    except jwt.PyJWTError as exc:
        logger.warning("Token verification failed: %s", exc)
        raise InvalidTokenException() from exc

    expiration = claims["exp"]
    if isinstance(expiration, bool) or not isinstance(expiration, (int, float)):
        raise InvalidTokenException("Token expiration must be a numeric date")
    if not isinstance(claims.get(SCOPE_CLAIM_NAME) or "", str):
        raise InvalidTokenException("Token scope claim must be a space-delimited string")
    return claims

# storefront/core/auth.py
from typing import Any

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import jwt, JWTError

from storefront.core.config import get_settings
from storefront.core.errors import UnauthorizedError

settings = get_settings()

# HTTP Bearer scheme:
# - auto_error=False => a missing Authorization header does not raise
#   FastAPI's own 403; require_user turns it into our 401.
bearer_scheme = HTTPBearer(auto_error=False)


def decode_access_token(token: str) -> dict[str, Any]:
    """
    Decode and verify an access token (JWT) issued by the identity provider.

    Verification:
      - signature (JWT_ALG using JWT_SECRET)
      - expiration time (exp), when present
      - audience is NOT verified

    Args:
        token: raw JWT from the Authorization header.

    Returns:
        Decoded JWT claims.

    Raises:
        UnauthorizedError: if token is invalid/expired.
    """
    try:
        return jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[settings.JWT_ALG],
            options={"verify_aud": False},
        )
    except JWTError:
        raise UnauthorizedError("Invalid or expired token")


def _user_id_from_claims(claims: dict[str, Any]) -> int:
    sub = claims.get("sub")
    try:
        user_id = int(sub)
    except (TypeError, ValueError):
        raise UnauthorizedError("Invalid sub in token")
    if user_id <= 0:
        raise UnauthorizedError("Invalid sub in token")
    return user_id


def get_current_user_id(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> int | None:
    """
    Resolve the caller's user id from the bearer token.

    Returns:
        The integer user id from the `sub` claim, or None when no
        Authorization header was sent.

    Raises:
        UnauthorizedError: if a token was sent but cannot be verified.
    """
    if credentials is None:
        return None

    claims = decode_access_token(credentials.credentials)
    return _user_id_from_claims(claims)


def require_user(user_id: int | None = Depends(get_current_user_id)) -> int:
    """
    Enforce authentication.

    Cart and order routes depend on this; anonymous callers get 401.
    """
    if user_id is None:
        raise UnauthorizedError()
    return user_id

"""Request authentication helpers."""

from fastapi import HTTPException, status

from homestead.domain.service import JWTService
from homestead.domain.value import Principal

BEARER_PREFIX = "bearer "


def extract_bearer(authorization: str | None) -> str | None:
    """Return the token from an ``Authorization: Bearer <token>`` header."""
    if authorization and authorization.lower().startswith(BEARER_PREFIX):
        token = authorization[len(BEARER_PREFIX) :].strip()
        return token or None
    return None


def require_principal(
    jwt_service: JWTService,
    authorization: str | None,
    auth_token: str | None = None,
) -> Principal:
    """Authenticate a request from its bearer header or auth cookie.

    Raises:
        HTTPException: 401 if no valid token was presented
    """
    token = extract_bearer(authorization) or auth_token
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )

    principal = jwt_service.get_principal(token)
    if principal is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        )
    return principal

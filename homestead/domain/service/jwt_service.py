"""JWT token domain service."""

import logfire

from homestead.config import AuthSettings
from homestead.domain.value import Principal, Role, UserId
from homestead.util.jwt import JWTError, TokenPayload, create_token, verify_token

from .base import Service


class JWTService(Service):
    """Domain service for JWT token operations."""

    def __init__(self, auth_settings: AuthSettings) -> None:
        """Initialize JWT service.

        Args:
            auth_settings: Authentication settings
        """
        self.auth_settings = auth_settings

    def create_token(self, user_id: UserId, role: Role = Role.USER) -> str:
        """Create JWT token for user.

        Args:
            user_id: User ID
            role: Account role

        Returns:
            JWT token string
        """
        with logfire.span("jwt_service.create_token", user_id=user_id):
            token = create_token(user_id, role, self.auth_settings)
            logfire.info("JWT token created", user_id=user_id, role=role.value)
            return token

    def verify_token(self, token: str) -> TokenPayload:
        """Verify JWT token and extract payload.

        Raises:
            JWTError: If token is invalid or expired
        """
        with logfire.span("jwt_service.verify_token"):
            try:
                payload = verify_token(token, self.auth_settings)
                logfire.info("JWT token verified", user_id=payload.user_id)
                return payload
            except Exception as e:
                logfire.warn("JWT token verification failed", error=str(e))
                raise

    def get_principal(self, token: str | None) -> Principal | None:
        """Resolve a token to a principal without raising.

        Args:
            token: JWT token string (optional)

        Returns:
            Principal if token is valid, None if token is missing or invalid
        """
        if not token:
            return None

        try:
            payload = self.verify_token(token)
        except JWTError as e:
            logfire.debug(
                "JWT verification failed, treating as unauthenticated", error=str(e)
            )
            return None
        return Principal(user_id=UserId(payload.user_id), role=payload.role)

"""JWT token domain service."""

import logfire

from ziora.config import AuthSettings
from ziora.domain.error import NotAuthorizedError
from ziora.util.jwt import JWTError, TokenPayload, verify_token

from .base import Service


class JWTService(Service):
    """Domain service for JWT token operations.

    Tokens are issued at login by the account service; this API verifies them
    and checks the role claim for admin routes.
    """

    def __init__(self, auth_settings: AuthSettings) -> None:
        """Initialize JWT service.

        Args:
            auth_settings: Authentication settings
        """
        self.auth_settings = auth_settings

    def verify_token(self, token: str) -> TokenPayload:
        """Verify JWT token and extract payload.

        Args:
            token: JWT token string

        Returns:
            Token payload

        Raises:
            JWTError: If token is invalid or expired
        """
        with logfire.span("jwt_service.verify_token"):
            try:
                payload = verify_token(token, self.auth_settings)
                logfire.info(
                    "JWT token verified", user_id=payload.user_id, role=payload.role
                )
                return payload
            except JWTError as e:
                logfire.warn("JWT token verification failed", error=str(e))
                raise

    def require_admin(self, token: str | None) -> TokenPayload:
        """Verify a token and check it carries the admin role.

        Args:
            token: JWT token string (optional)

        Returns:
            Token payload

        Raises:
            JWTError: If the token is missing, invalid or expired
            NotAuthorizedError: If the role claim is not the admin role
        """
        if not token:
            raise JWTError("Authentication required")

        payload = self.verify_token(token)
        if payload.role != self.auth_settings.admin_role:
            logfire.warn(
                "Non-admin access to admin route",
                user_id=payload.user_id,
                role=payload.role,
            )
            raise NotAuthorizedError("access admin routes", payload.user_id)
        return payload

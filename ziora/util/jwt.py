"""JWT token utilities."""

from datetime import UTC, datetime, timedelta

import jwt
from pydantic import BaseModel

from ziora.config import AuthSettings


class TokenPayload(BaseModel):
    """JWT token payload."""

    user_id: str
    email: str | None = None
    role: str = "user"
    exp: datetime


class JWTError(Exception):
    """JWT-related error."""

    pass


def create_token(
    user_id: str, role: str, settings: AuthSettings, email: str | None = None
) -> str:
    """Create a JWT token for the user.

    Args:
        user_id: User ID
        role: Role claim ("admin" for moderators)
        settings: Authentication settings
        email: Optional email claim

    Returns:
        Encoded JWT token
    """
    expiry = datetime.now(UTC) + timedelta(days=settings.jwt_expiry_days)

    payload = {
        "user_id": user_id,
        "email": email,
        "role": role,
        "exp": expiry,
    }

    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(token: str, settings: AuthSettings) -> TokenPayload:
    """Verify and decode a JWT token.

    Args:
        token: JWT token to verify
        settings: Authentication settings

    Returns:
        Token payload if valid

    Raises:
        JWTError: If token is invalid or expired
    """
    try:
        payload = jwt.decode(
            token, settings.jwt_secret, algorithms=[settings.jwt_algorithm]
        )
        return TokenPayload(**payload)
    except jwt.ExpiredSignatureError:
        raise JWTError("Token has expired")
    except jwt.InvalidTokenError:
        raise JWTError("Invalid token")

"""JWT token utilities."""

from datetime import datetime, timedelta, timezone

import jwt
from pydantic import BaseModel, ValidationError

from invitely.config import AuthSettings

ADMIN_ROLE = "admin"
USER_ROLE = "user"


class TokenPayload(BaseModel):
    """JWT token payload shared by admin and end-user tokens."""

    sub: str
    email: str
    name: str | None = None
    role: str | None = None
    exp: datetime


class JWTError(Exception):
    """JWT-related error."""

    def __init__(self, message: str, expired: bool = False) -> None:
        super().__init__(message)
        self.expired = expired


def create_token(
    subject: str,
    email: str,
    name: str | None,
    role: str,
    expires_in: timedelta,
    settings: AuthSettings,
) -> str:
    """Create a signed JWT.

    Args:
        subject: Admin or user ID
        email: Account email
        name: Display name
        role: Role claim ("admin" or "user")
        expires_in: Lifetime of the token
        settings: Authentication settings

    Returns:
        Encoded JWT token
    """
    payload = {
        "sub": subject,
        "email": email,
        "name": name,
        "role": role,
        "exp": datetime.now(timezone.utc) + expires_in,
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
        raise JWTError("Token has expired", expired=True)
    except (jwt.InvalidTokenError, ValidationError):
        raise JWTError("Invalid token")

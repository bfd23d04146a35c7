"""
Access token service.

Tokens are issued by the account service; this API only verifies them to
identify the requester.
"""

from datetime import datetime, timedelta, timezone
from uuid import UUID
from jose import JWTError, jwt

from wagerdesk.core.config import settings


class AuthService:
    """JWT access token helpers."""

    def create_access_token(self, user_id: UUID | str) -> str:
        """Create JWT access token."""
        expire = datetime.now(timezone.utc) + timedelta(
            minutes=settings.auth.access_token_expire_minutes
        )
        payload = {
            "sub": str(user_id),
            "exp": expire,
            "type": "access",
        }
        return jwt.encode(
            payload,
            settings.auth.secret_key,
            algorithm=settings.auth.algorithm,
        )

    def decode_access_token(self, token: str) -> str | None:
        """Return the subject of a valid access token, None otherwise."""
        try:
            payload = jwt.decode(
                token,
                settings.auth.secret_key,
                algorithms=[settings.auth.algorithm],
            )
        except JWTError:
            return None

        if payload.get("type") != "access":
            return None
        return payload.get("sub")

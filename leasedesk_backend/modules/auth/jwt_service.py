"""JWT service for LeaseDesk authentication.

Tokens are issued by the identity service; this module only needs to
validate them. ``create_access_token`` mirrors the issuer's claim layout
for operator tooling and tests.
"""

from datetime import datetime, timedelta, timezone
from uuid import UUID

import jwt

from ...config import settings


def create_access_token(
    user_id: UUID,
    email: str,
    role: str,
    full_name: str = "",
    is_email_verified: bool = True,
    expires_delta: timedelta | None = None,
) -> str:
    """Create a signed access token."""
    now = datetime.now(timezone.utc)
    expire = now + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )

    payload = {
        "sub": str(user_id),
        "email": email,
        "role": role,
        "full_name": full_name,
        "email_verified": is_email_verified,
        "exp": expire,
        "iat": now,
        "type": "access",
    }

    return jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> dict | None:
    """Decode and validate a JWT access token.

    Returns:
        Token payload if valid, None if invalid or expired.
    """
    try:
        payload = jwt.decode(
            token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm]
        )
    except jwt.ExpiredSignatureError:
        return None
    except jwt.InvalidTokenError:
        return None

    if payload.get("type") != "access":
        return None
    return payload

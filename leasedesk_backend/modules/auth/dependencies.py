"""FastAPI dependencies resolving the caller from a Bearer token."""

from typing import Annotated
from uuid import UUID

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ...core.exceptions import AuthenticationError
from .jwt_service import decode_access_token
from .schemas import AuthenticatedUser

bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Annotated[
        HTTPAuthorizationCredentials | None, Depends(bearer_scheme)
    ],
) -> AuthenticatedUser:
    """Build the caller from the token claims; no database round trip.

    Raises:
        AuthenticationError: If the token is missing, invalid or expired
    """
    if credentials is None:
        raise AuthenticationError("Missing bearer token")

    claims = decode_access_token(credentials.credentials)
    if claims is None:
        raise AuthenticationError("Invalid or expired token")

    try:
        user_id = UUID(claims["sub"])
        return AuthenticatedUser(
            id=user_id,
            email=claims["email"],
            full_name=claims.get("full_name", ""),
            role=claims["role"],
            is_email_verified=claims.get("email_verified", False),
        )
    except (KeyError, ValueError) as exc:
        raise AuthenticationError(f"Malformed token claims: {exc}") from exc


CurrentUser = Annotated[AuthenticatedUser, Depends(get_current_user)]

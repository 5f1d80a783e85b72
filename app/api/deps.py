"""Shared route dependencies: current user from a bearer access token."""

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.security import TokenError, decode_token, user_id_from_claims
from app.db.session import get_db
from app.models.user import User

# auto_error=False so a missing header gets our 401 message instead of a 403
bearer_scheme = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db),
) -> User:
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise _unauthorized("No token provided.")
    try:
        user_id = user_id_from_claims(decode_token(credentials.credentials, "access"))
    except TokenError:
        raise _unauthorized("Invalid or expired token.")

    user = await db.get(User, user_id)
    if user is None:
        raise _unauthorized("User not found.")
    return user

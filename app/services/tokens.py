"""Refresh-token persistence and rotation.

Only the SHA-256 hash of each refresh token is stored. Rotation deletes the
presented token's row and inserts the replacement inside the caller's
transaction, so a token can be exchanged at most once.
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.security import (
    TokenError,
    create_access_token,
    create_refresh_token,
    decode_token,
    hash_token,
    user_id_from_claims,
)
from app.models.user import RefreshToken, User

logger = logging.getLogger(__name__)


async def issue_token_pair(db: AsyncSession, user_id: uuid.UUID) -> tuple[str, str]:
    """Mint access + refresh tokens and persist the refresh token's hash."""
    access_token = create_access_token(user_id)
    refresh_token, expires_at = create_refresh_token(user_id)
    db.add(RefreshToken(user_id=user_id, token_hash=hash_token(refresh_token), expires_at=expires_at))
    await db.flush()
    return access_token, refresh_token


async def purge_expired_tokens(db: AsyncSession, user_id: uuid.UUID) -> None:
    await db.execute(
        delete(RefreshToken).where(
            RefreshToken.user_id == user_id,
            RefreshToken.expires_at < datetime.now(timezone.utc),
        )
    )


async def rotate_refresh_token(db: AsyncSession, token: str) -> tuple[User, str, str]:
    """verify signature -> delete the stored, unexpired row -> issue new pair.

    The single conditional DELETE is the check: of two requests racing with
    the same token only one can remove the row. Raises TokenError for
    anything that should surface as 401.
    """
    claims = decode_token(token, "refresh")
    user_id = user_id_from_claims(claims)

    user = await db.get(User, user_id)
    if user is None:
        raise TokenError("User not found.")

    result = await db.execute(
        delete(RefreshToken).where(
            RefreshToken.token_hash == hash_token(token),
            RefreshToken.user_id == user_id,
            RefreshToken.expires_at > datetime.now(timezone.utc),
        ).execution_options(synchronize_session=False)
    )
    if result.rowcount != 1:
        logger.warning("Refresh attempt with unknown, expired or reused token for user %s", user_id)
        raise TokenError("Invalid or expired refresh token.")

    await purge_expired_tokens(db, user_id)
    access_token, refresh_token = await issue_token_pair(db, user_id)
    return user, access_token, refresh_token


async def revoke_refresh_token(db: AsyncSession, token: str) -> bool:
    """Delete the stored row for a valid refresh token. Returns False if nothing was revoked."""
    try:
        claims = decode_token(token, "refresh")
        user_id = user_id_from_claims(claims)
    except TokenError:
        return False
    result = await db.execute(
        delete(RefreshToken).where(
            RefreshToken.token_hash == hash_token(token),
            RefreshToken.user_id == user_id,
        )
    )
    await purge_expired_tokens(db, user_id)
    return (result.rowcount or 0) > 0


async def revoke_all_for_user(db: AsyncSession, user_id: uuid.UUID) -> int:
    result = await db.execute(delete(RefreshToken).where(RefreshToken.user_id == user_id))
    return result.rowcount or 0

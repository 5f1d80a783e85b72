from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import select

from app.core.security import TokenError, hash_password, hash_token
from app.models.user import RefreshToken, User
from app.services.tokens import issue_token_pair, rotate_refresh_token


@pytest.fixture
async def refresh_token(session_maker):
    async with session_maker() as session:
        user = User(name="Dee", email="dee@example.com", password_hash=hash_password("long-enough-1"))
        session.add(user)
        await session.flush()
        _, token = await issue_token_pair(session, user.id)
        await session.commit()
    return token


async def test_rotation_replaces_the_stored_token(session_maker, refresh_token):
    async with session_maker() as session:
        _, _, new_refresh = await rotate_refresh_token(session, refresh_token)
        await session.commit()

    async with session_maker() as session:
        hashes = set((await session.execute(select(RefreshToken.token_hash))).scalars())
    assert hashes == {hash_token(new_refresh)}


async def test_token_read_by_a_slower_request_cannot_be_rotated_again(session_maker, refresh_token):
    async with session_maker() as first, session_maker() as second:
        # The slower request has already seen the row before the faster one rotates it
        seen = await second.execute(
            select(RefreshToken).where(RefreshToken.token_hash == hash_token(refresh_token))
        )
        assert seen.scalar_one_or_none() is not None

        await rotate_refresh_token(first, refresh_token)
        await first.commit()

        with pytest.raises(TokenError):
            await rotate_refresh_token(second, refresh_token)


async def test_expired_stored_token_is_rejected(session_maker, refresh_token):
    async with session_maker() as session:
        stored = (
            await session.execute(
                select(RefreshToken).where(RefreshToken.token_hash == hash_token(refresh_token))
            )
        ).scalar_one()
        stored.expires_at = datetime.now(timezone.utc) - timedelta(minutes=1)
        await session.commit()

    async with session_maker() as session:
        with pytest.raises(TokenError):
            await rotate_refresh_token(session, refresh_token)

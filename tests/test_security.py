import uuid
from datetime import datetime, timedelta, timezone

import jwt
import pytest

from app.core.config import get_settings
from app.core.security import (
    TokenError,
    create_access_token,
    create_refresh_token,
    decode_token,
    hash_password,
    hash_token,
    user_id_from_claims,
    verify_password,
)


def test_password_hash_roundtrip():
    hashed = hash_password("s3cret-pass")
    assert hashed != "s3cret-pass"
    assert verify_password("s3cret-pass", hashed)
    assert not verify_password("wrong-pass", hashed)


def test_access_token_claims():
    user_id = uuid.uuid4()
    claims = decode_token(create_access_token(user_id), "access")
    assert claims["type"] == "access"
    assert user_id_from_claims(claims) == user_id
    assert claims["jti"]


def test_refresh_token_is_not_accepted_as_access():
    token, expires_at = create_refresh_token(uuid.uuid4())
    assert expires_at > datetime.now(timezone.utc) + timedelta(days=6)
    with pytest.raises(TokenError):
        decode_token(token, "access")


def test_tokens_minted_together_are_distinct():
    user_id = uuid.uuid4()
    assert create_refresh_token(user_id)[0] != create_refresh_token(user_id)[0]


def test_expired_token_rejected():
    settings = get_settings()
    past = datetime.now(timezone.utc) - timedelta(minutes=5)
    token = jwt.encode(
        {"sub": str(uuid.uuid4()), "type": "access", "iat": past - timedelta(minutes=15), "exp": past},
        settings.jwt_access_secret,
        algorithm=settings.jwt_algorithm,
    )
    with pytest.raises(TokenError, match="expired"):
        decode_token(token, "access")


def test_tampered_token_rejected():
    token = create_access_token(uuid.uuid4())
    with pytest.raises(TokenError):
        decode_token(token[:-2] + "xx", "access")


def test_hash_token_is_sha256_hex():
    digest = hash_token("abc")
    assert len(digest) == 64
    assert digest == hash_token("abc")
    assert digest != hash_token("abd")

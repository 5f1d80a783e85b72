"""Security utilities: bcrypt password hashing and JWT access/refresh tokens."""

from __future__ import annotations

import hashlib
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Literal

import jwt
from jwt import ExpiredSignatureError, InvalidTokenError
from passlib.context import CryptContext

from app.core.config import get_settings

settings = get_settings()

password_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.bcrypt_rounds,
)

TokenKind = Literal["access", "refresh"]


class TokenError(Exception):
    """Raised when a JWT is malformed, expired, or of the wrong kind."""


def hash_password(plain: str) -> str:
    return password_context.hash(plain)


def verify_password(plain: str, hashed: str) -> bool:
    return password_context.verify(plain, hashed)


def _secret_for(kind: TokenKind) -> str:
    return settings.jwt_access_secret if kind == "access" else settings.jwt_refresh_secret


def _lifetime_for(kind: TokenKind) -> timedelta:
    if kind == "access":
        return timedelta(minutes=settings.access_token_expire_minutes)
    return timedelta(days=settings.refresh_token_expire_days)


def _create_token(user_id: uuid.UUID, kind: TokenKind) -> tuple[str, datetime]:
    now = datetime.now(timezone.utc)
    expires_at = now + _lifetime_for(kind)
    payload = {
        "sub": str(user_id),
        "type": kind,
        # jti keeps two tokens minted in the same second distinct
        "jti": uuid.uuid4().hex,
        "iat": now,
        "exp": expires_at,
    }
    token = jwt.encode(payload, _secret_for(kind), algorithm=settings.jwt_algorithm)
    return token, expires_at


def create_access_token(user_id: uuid.UUID) -> str:
    token, _ = _create_token(user_id, "access")
    return token


def create_refresh_token(user_id: uuid.UUID) -> tuple[str, datetime]:
    """Return (token, expires_at); the expiry is persisted alongside the token hash."""
    return _create_token(user_id, "refresh")


def decode_token(token: str, kind: TokenKind) -> dict[str, Any]:
    """Verify signature, expiry and token type. Raises TokenError on any failure."""
    try:
        claims = jwt.decode(token, _secret_for(kind), algorithms=[settings.jwt_algorithm])
    except ExpiredSignatureError as e:
        raise TokenError("Token has expired.") from e
    except InvalidTokenError as e:
        raise TokenError("Token is invalid.") from e
    if claims.get("type") != kind or "sub" not in claims:
        raise TokenError("Token is invalid.")
    return claims


def user_id_from_claims(claims: dict[str, Any]) -> uuid.UUID:
    try:
        return uuid.UUID(claims["sub"])
    except (KeyError, ValueError) as e:
        raise TokenError("Token is invalid.") from e


def hash_token(token: str) -> str:
    """SHA-256 hex digest; refresh tokens are stored only in this form."""
    return hashlib.sha256(token.encode("utf-8")).hexdigest()

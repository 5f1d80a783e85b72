"""Registration, login, token rotation, logout and password change."""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_user
from app.core.config import get_settings
from app.core.constants import MIN_PASSWORD_LENGTH
from app.core.enums import SubscriptionPlan, SubscriptionStatus
from app.core.rate_limit import limiter
from app.core.security import TokenError, hash_password, verify_password
from app.db.session import get_db
from app.models.subscription import Subscription
from app.models.user import User
from app.schemas.auth import (
    AuthResponse,
    ChangePasswordRequest,
    LoginRequest,
    LogoutRequest,
    RefreshRequest,
    RegisterRequest,
    TokenPair,
    UserRead,
)
from app.schemas.common import Message
from app.services.tokens import (
    issue_token_pair,
    purge_expired_tokens,
    revoke_all_for_user,
    revoke_refresh_token,
    rotate_refresh_token,
)

logger = logging.getLogger(__name__)
settings = get_settings()

router = APIRouter()

PASSWORD_TOO_SHORT = f"Password must be at least {MIN_PASSWORD_LENGTH} characters."


def _normalise_email(email: str) -> str:
    return email.strip().lower()


@router.post("/register", response_model=AuthResponse, status_code=201)
@limiter.limit(settings.rate_limit_auth)
async def register(
    request: Request,
    payload: RegisterRequest,
    db: AsyncSession = Depends(get_db),
):
    """Create an account on the free plan and sign it in."""
    if len(payload.password) < MIN_PASSWORD_LENGTH:
        raise HTTPException(status_code=400, detail=PASSWORD_TOO_SHORT)

    email = _normalise_email(payload.email)
    existing = await db.execute(select(User.id).where(User.email == email))
    if existing.scalar_one_or_none() is not None:
        raise HTTPException(status_code=409, detail="Email already registered.")

    user = User(name=payload.name.strip(), email=email, password_hash=hash_password(payload.password))
    db.add(user)
    await db.flush()
    db.add(Subscription(user_id=user.id, plan=SubscriptionPlan.FREE, status=SubscriptionStatus.ACTIVE))

    access_token, refresh_token = await issue_token_pair(db, user.id)
    await db.refresh(user)
    logger.info("New user registered: %s", user.id)
    return AuthResponse(
        user=UserRead.model_validate(user),
        access_token=access_token,
        refresh_token=refresh_token,
    )


@router.post("/login", response_model=AuthResponse)
@limiter.limit(settings.rate_limit_auth)
async def login(
    request: Request,
    payload: LoginRequest,
    db: AsyncSession = Depends(get_db),
):
    result = await db.execute(select(User).where(User.email == _normalise_email(payload.email)))
    user = result.scalar_one_or_none()
    # Same message for unknown email and wrong password
    if user is None or not verify_password(payload.password, user.password_hash):
        raise HTTPException(status_code=401, detail="Invalid email or password.")

    user.last_login = datetime.now(timezone.utc)
    await purge_expired_tokens(db, user.id)
    access_token, refresh_token = await issue_token_pair(db, user.id)
    await db.refresh(user)
    return AuthResponse(
        user=UserRead.model_validate(user),
        access_token=access_token,
        refresh_token=refresh_token,
    )


@router.post("/refresh", response_model=TokenPair)
async def refresh(payload: RefreshRequest, db: AsyncSession = Depends(get_db)):
    """Exchange a refresh token for a new pair. The presented token stops working."""
    try:
        _, access_token, refresh_token = await rotate_refresh_token(db, payload.refresh_token)
    except TokenError as e:
        raise HTTPException(status_code=401, detail=str(e) or "Invalid or expired refresh token.")
    return TokenPair(access_token=access_token, refresh_token=refresh_token)


@router.post("/logout", response_model=Message)
async def logout(payload: LogoutRequest | None = None, db: AsyncSession = Depends(get_db)):
    if payload and payload.refresh_token:
        await revoke_refresh_token(db, payload.refresh_token)
    return Message(message="Logged out successfully.")


@router.get("/me", response_model=UserRead)
async def me(current_user: User = Depends(get_current_user)):
    return current_user


@router.post("/change-password", response_model=Message)
async def change_password(
    payload: ChangePasswordRequest,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Change password and sign out every session (all refresh tokens revoked)."""
    if len(payload.new_password) < MIN_PASSWORD_LENGTH:
        raise HTTPException(status_code=400, detail=PASSWORD_TOO_SHORT)
    if not verify_password(payload.current_password, current_user.password_hash):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Current password is incorrect.")

    current_user.password_hash = hash_password(payload.new_password)
    revoked = await revoke_all_for_user(db, current_user.id)
    logger.info("Password changed for user %s; %d refresh token(s) revoked", current_user.id, revoked)
    return Message(message="Password changed. Please log in again.")

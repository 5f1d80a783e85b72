"""Subscription endpoints. Checkout is a stub until a payment provider is wired in."""

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.api.deps import get_current_user
from app.core.config import get_settings
from app.core.constants import RECENT_PAYMENTS_LIMIT
from app.core.enums import SubscriptionPlan, SubscriptionStatus
from app.db.session import get_db
from app.models.subscription import Subscription
from app.models.user import User
from app.schemas.subscription import (
    CancelResponse,
    CheckoutRequest,
    CheckoutResponse,
    PaymentRead,
    PlanRead,
    SubscriptionRead,
)

logger = logging.getLogger(__name__)
settings = get_settings()
router = APIRouter()

PLANS = [
    PlanRead(
        plan=SubscriptionPlan.FREE,
        price_monthly=0.0,
        features=["Exercise library", "Workout logging", "Streaks & achievements"],
    ),
    PlanRead(
        plan=SubscriptionPlan.PRO,
        price_monthly=9.99,
        features=["Everything in Free", "All training programs", "Progress analytics"],
    ),
    PlanRead(
        plan=SubscriptionPlan.PREMIUM,
        price_monthly=19.99,
        features=["Everything in Pro", "Premium programs", "Priority support"],
    ),
]
PAID_PLANS = (SubscriptionPlan.PRO, SubscriptionPlan.PREMIUM)


async def _get_subscription(db: AsyncSession, user: User) -> Subscription | None:
    result = await db.execute(
        select(Subscription).options(selectinload(Subscription.payments)).where(Subscription.user_id == user.id)
    )
    return result.scalar_one_or_none()


def _to_read(subscription: Subscription) -> SubscriptionRead:
    data = SubscriptionRead.model_validate(subscription).model_dump(exclude={"payments"})
    payments = [PaymentRead.model_validate(p) for p in subscription.payments[:RECENT_PAYMENTS_LIMIT]]
    return SubscriptionRead(**data, payments=payments)


@router.get("/plans", response_model=list[PlanRead])
async def list_plans(_: User = Depends(get_current_user)):
    return PLANS


@router.get("/me", response_model=SubscriptionRead)
async def my_subscription(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Current subscription with recent payments; free tier when no row exists."""
    subscription = await _get_subscription(db, current_user)
    if subscription is None:
        return SubscriptionRead(
            user_id=current_user.id,
            plan=SubscriptionPlan.FREE,
            status=SubscriptionStatus.ACTIVE,
        )
    return _to_read(subscription)


@router.post("/checkout", response_model=CheckoutResponse)
async def create_checkout(
    payload: CheckoutRequest,
    current_user: User = Depends(get_current_user),
):
    plan_name = payload.plan.strip().upper()
    if plan_name not in {p.value for p in PAID_PLANS}:
        raise HTTPException(
            status_code=400,
            detail=f"Plan must be one of: {', '.join(p.value for p in PAID_PLANS)}.",
        )
    plan = SubscriptionPlan(plan_name)
    logger.info("Checkout requested by user %s for plan %s", current_user.id, plan.value)
    return CheckoutResponse(
        checkout_url=f"{settings.frontend_url.rstrip('/')}/checkout?plan={plan.value.lower()}",
        plan=plan,
        message="Payment integration coming soon.",
    )


@router.post("/cancel", response_model=CancelResponse)
async def cancel_subscription(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    subscription = await _get_subscription(db, current_user)
    if subscription is None or subscription.status == SubscriptionStatus.CANCELLED:
        raise HTTPException(status_code=404, detail="No active subscription found.")

    subscription.status = SubscriptionStatus.CANCELLED
    subscription.cancel_at_period_end = True
    await db.flush()
    logger.info("User %s cancelled their %s subscription", current_user.id, subscription.plan.value)
    return CancelResponse(
        subscription=_to_read(subscription),
        message="Subscription cancelled. You will retain access until the end of your billing period.",
    )

"""Subscription and checkout schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from app.core.enums import PaymentStatus, SubscriptionPlan, SubscriptionStatus


class PaymentRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    amount: float
    currency: str
    status: PaymentStatus
    provider: str | None = None
    created_at: datetime


class SubscriptionRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID | None = None
    user_id: UUID
    plan: SubscriptionPlan
    status: SubscriptionStatus
    current_period_start: datetime | None = None
    current_period_end: datetime | None = None
    cancel_at_period_end: bool = False
    payments: list[PaymentRead] = []


class PlanRead(BaseModel):
    plan: SubscriptionPlan
    price_monthly: float
    currency: str = "USD"
    features: list[str]


class CheckoutRequest(BaseModel):
    plan: str = Field(..., min_length=1, max_length=20)


class CheckoutResponse(BaseModel):
    checkout_url: str
    plan: SubscriptionPlan
    message: str


class CancelResponse(BaseModel):
    subscription: SubscriptionRead
    message: str

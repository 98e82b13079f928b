"""
MembershipPlan Entity

Sellable plan definition: either time-based or a pack of session credits.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, SQLModel

from src.domain.base import utcnow

from .enums import PlanKind


class MembershipPlan(SQLModel, table=True):
    """
    MembershipPlan entity.

    Business Rules:
    - plan_kind=sessions: session_credits are granted as remaining_sessions
    - duration_days bounds the membership validity window (open-ended if unset)
    - category_id restricts which classes the plan can book
    """

    __tablename__ = "membership_plans"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    tenant_id: UUID = Field(foreign_key="tenants.id", nullable=False, index=True)

    name: str = Field(max_length=255)
    plan_kind: PlanKind = Field(default=PlanKind.duration)
    duration_days: Optional[int] = Field(default=None)
    session_credits: Optional[int] = Field(default=None)
    price: Decimal = Field(default=Decimal("0"), max_digits=10, decimal_places=2)
    category_id: Optional[UUID] = Field(default=None)

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

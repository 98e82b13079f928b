"""
Membership Entity

A member's purchased plan within one tenant, with a snapshot of the plan.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import CheckConstraint
from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utcnow

from .enums import MembershipStatus, PlanKind


class Membership(SQLModel, table=True):
    """
    Membership entity - links a member to a plan for a validity window.

    Business Rules:
    - Usable iff status=active, now within [starts_at, ends_at] and, for
      sessions plans, remaining_sessions > 0
    - remaining_sessions is only ever changed by the session-credit ledger
    - plan_kind/plan_name/plan_price are snapshots for historical accuracy
    """

    __tablename__ = "memberships"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    tenant_id: UUID = Field(foreign_key="tenants.id", nullable=False, index=True)
    user_id: UUID = Field(foreign_key="profiles.id", nullable=False, index=True)
    plan_id: UUID = Field(foreign_key="membership_plans.id", nullable=False)

    status: MembershipStatus = Field(default=MembershipStatus.active)
    starts_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime, nullable=False))
    ends_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    remaining_sessions: Optional[int] = Field(default=None)

    # Plan snapshot
    plan_kind: PlanKind = Field(default=PlanKind.duration)
    plan_name: Optional[str] = Field(default=None, max_length=255)
    plan_price: Optional[Decimal] = Field(default=None, max_digits=10, decimal_places=2)

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_membership_tenant_user_status", "tenant_id", "user_id", "status"),
        CheckConstraint(
            "remaining_sessions IS NULL OR remaining_sessions >= 0",
            name="ck_membership_remaining_sessions_non_negative",
        ),
    )

    @property
    def is_credit_based(self) -> bool:
        return self.plan_kind == PlanKind.sessions

    def is_within_window(self, now: datetime) -> bool:
        if self.starts_at is not None and now < self.starts_at:
            return False
        if self.ends_at is not None and now > self.ends_at:
            return False
        return True

    def has_credit(self) -> bool:
        if not self.is_credit_based:
            return True
        return (self.remaining_sessions or 0) > 0

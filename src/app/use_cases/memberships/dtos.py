"""
Membership Use Case DTOs
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel

from src.domain.entities import Membership


class MembershipResponse(BaseModel):
    """Membership as returned to callers"""

    id: str
    tenant_id: str
    user_id: str
    plan_id: str
    status: str
    plan_kind: str
    plan_name: Optional[str] = None
    plan_price: Optional[Decimal] = None
    starts_at: datetime
    ends_at: Optional[datetime] = None
    remaining_sessions: Optional[int] = None

    @classmethod
    def from_entity(cls, membership: Membership) -> "MembershipResponse":
        return cls(
            id=str(membership.id),
            tenant_id=str(membership.tenant_id),
            user_id=str(membership.user_id),
            plan_id=str(membership.plan_id),
            status=membership.status.value,
            plan_kind=membership.plan_kind.value,
            plan_name=membership.plan_name,
            plan_price=membership.plan_price,
            starts_at=membership.starts_at,
            ends_at=membership.ends_at,
            remaining_sessions=membership.remaining_sessions,
        )

"""
Create Membership Use Case

Issues a membership from a plan to a member of the tenant.
"""

import logging
from datetime import datetime, timedelta
from typing import Callable, Optional
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.caller_context import CallerContext
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import Membership, MembershipStatus

from .dtos import MembershipResponse

logger = logging.getLogger(__name__)


class CreateMembershipUseCase:
    """
    Use case for selling a plan to a member.

    Business Rules:
    - Admin only, within the caller's tenant
    - Plan and member must belong to the tenant
    - ends_at = starts_at + duration_days (open-ended without a duration)
    - remaining_sessions starts at the plan's session_credits, if any
    - Plan kind, name and price are copied onto the membership
    """

    def __init__(self, uow: UnitOfWork, clock: Callable = utcnow):
        self.uow = uow
        self.clock = clock

    async def execute(
        self,
        caller: CallerContext,
        tenant_id: UUID,
        user_id: UUID,
        plan_id: UUID,
        starts_at: Optional[datetime] = None,
    ) -> Result[MembershipResponse]:
        if not caller.is_admin:
            return Return.err(Error("forbidden", "Only admins can issue memberships"))
        if tenant_id != caller.tenant_id:
            return Return.err(Error("tenant_mismatch", "Cannot issue outside your own tenant"))

        starts_at = starts_at or self.clock()

        async with self.uow:
            plan = await self.uow.membership_plans.get_by_id(plan_id)
            if plan is None:
                return Return.err(Error("plan_not_found", "Membership plan not found"))
            if plan.tenant_id != tenant_id:
                return Return.err(Error("plan_wrong_tenant", "Plan belongs to another tenant"))

            profile = await self.uow.profiles.get_by_id(user_id)
            if profile is None or profile.tenant_id != tenant_id:
                return Return.err(
                    Error("target_user_wrong_tenant", "Member does not belong to this tenant")
                )

            ends_at = None
            if plan.duration_days and plan.duration_days > 0:
                ends_at = starts_at + timedelta(days=plan.duration_days)

            remaining_sessions = None
            if plan.session_credits and plan.session_credits > 0:
                remaining_sessions = plan.session_credits

            membership = await self.uow.memberships.create(
                Membership(
                    tenant_id=tenant_id,
                    user_id=user_id,
                    plan_id=plan.id,
                    status=MembershipStatus.active,
                    starts_at=starts_at,
                    ends_at=ends_at,
                    remaining_sessions=remaining_sessions,
                    plan_kind=plan.plan_kind,
                    plan_name=plan.name,
                    plan_price=plan.price,
                )
            )
            await self.uow.commit()

            logger.info(
                f"Membership {membership.id} issued to {user_id} from plan {plan.id} "
                f"({plan.plan_kind.value})"
            )
            return Return.ok(MembershipResponse.from_entity(membership))

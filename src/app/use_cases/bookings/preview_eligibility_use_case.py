"""
Preview Eligibility Use Case

Read-only: tells a member (or an admin on a member's behalf) how a booking
for a session would be paid, without creating it.
"""

from typing import Callable, Optional
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.caller_context import CallerContext
from src.app.services.eligibility import EligibilityEvaluator
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow

from .dtos import EligibilityResponse


class PreviewEligibilityUseCase:
    def __init__(self, uow: UnitOfWork, clock: Callable = utcnow):
        self.uow = uow
        self.clock = clock

    async def execute(
        self,
        caller: CallerContext,
        session_id: UUID,
        user_id: Optional[UUID] = None,
    ) -> Result[EligibilityResponse]:
        if user_id is not None and user_id != caller.user_id and not caller.is_admin:
            return Return.err(Error("forbidden", "Members can only preview for themselves"))
        target_user_id = user_id or caller.user_id
        tenant_id = caller.tenant_id

        async with self.uow:
            if target_user_id != caller.user_id:
                profile = await self.uow.profiles.get_by_id(target_user_id)
                if profile is None or profile.tenant_id != tenant_id:
                    return Return.err(
                        Error("target_user_wrong_tenant", "Member does not belong to this tenant")
                    )

            session = await self.uow.class_sessions.get_by_id(session_id)
            if session is None:
                return Return.err(Error("session_not_found", "Session not found"))
            if session.tenant_id != tenant_id:
                return Return.err(
                    Error("session_wrong_tenant", "Session belongs to another tenant")
                )

            studio_class = await self.uow.classes.get_by_id(session.class_id)
            if studio_class is None:
                return Return.err(Error("class_not_found", "Class not found"))
            if studio_class.tenant_id != tenant_id:
                return Return.err(Error("class_wrong_tenant", "Class belongs to another tenant"))

            # Always the member's own rules, never the admin override
            decision = await EligibilityEvaluator(self.uow).evaluate(
                tenant_id, target_user_id, studio_class, self.clock()
            )

        booking_type = decision.booking_type
        return Return.ok(
            EligibilityResponse(
                outcome=decision.outcome.value,
                booking_type=booking_type.value if booking_type else None,
                membership_id=str(decision.membership_id) if decision.membership_id else None,
                plan_kind=decision.plan_kind.value if decision.plan_kind else None,
                reason=decision.reason,
            )
        )

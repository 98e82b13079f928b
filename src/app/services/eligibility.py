"""
Eligibility Evaluator

Decides how a member pays for a class: against their membership, as a
drop-in, or not at all.
"""

from datetime import datetime
from enum import Enum
from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import (
    BookingType,
    Membership,
    MembershipPlan,
    PlanKind,
    StudioClass,
)


class EligibilityOutcome(str, Enum):
    use_membership = "use_membership"
    use_drop_in = "use_drop_in"
    ineligible = "ineligible"


class MembershipCheck(BaseModel):
    """Individual conditions evaluated against a membership"""

    time_ok: bool
    credit_ok: bool
    category_ok: bool

    @property
    def usable(self) -> bool:
        return self.time_ok and self.credit_ok and self.category_ok


class EligibilityDecision(BaseModel):
    outcome: EligibilityOutcome
    membership_id: Optional[UUID] = None
    plan_kind: Optional[PlanKind] = None
    reason: Optional[str] = None  # error token when ineligible

    @classmethod
    def use_membership(
        cls, membership_id: Optional[UUID] = None, plan_kind: Optional[PlanKind] = None
    ) -> "EligibilityDecision":
        return cls(
            outcome=EligibilityOutcome.use_membership,
            membership_id=membership_id,
            plan_kind=plan_kind,
        )

    @classmethod
    def use_drop_in(cls) -> "EligibilityDecision":
        return cls(outcome=EligibilityOutcome.use_drop_in)

    @classmethod
    def ineligible(cls, reason: str) -> "EligibilityDecision":
        return cls(outcome=EligibilityOutcome.ineligible, reason=reason)

    @property
    def booking_type(self) -> Optional[BookingType]:
        if self.outcome == EligibilityOutcome.use_membership:
            return BookingType.membership
        if self.outcome == EligibilityOutcome.use_drop_in:
            return BookingType.drop_in
        return None

    @property
    def consumes_credit(self) -> bool:
        return (
            self.outcome == EligibilityOutcome.use_membership
            and self.membership_id is not None
            and self.plan_kind == PlanKind.sessions
        )


def categories_match(plan: Optional[MembershipPlan], studio_class: StudioClass) -> bool:
    """An uncategorised class or plan matches anything"""
    plan_category = plan.category_id if plan is not None else None
    return (
        studio_class.category_id is None
        or plan_category is None
        or plan_category == studio_class.category_id
    )


def check_membership(
    membership: Membership,
    plan: Optional[MembershipPlan],
    studio_class: StudioClass,
    now: datetime,
) -> MembershipCheck:
    return MembershipCheck(
        time_ok=membership.is_within_window(now),
        credit_ok=membership.has_credit(),
        category_ok=categories_match(plan, studio_class),
    )


def decide_for_member(
    membership: Optional[Membership],
    plan: Optional[MembershipPlan],
    studio_class: StudioClass,
    now: datetime,
) -> EligibilityDecision:
    """Membership first, then drop-in, else ineligible"""
    if membership is not None and check_membership(membership, plan, studio_class, now).usable:
        return EligibilityDecision.use_membership(membership.id, membership.plan_kind)
    if studio_class.drop_in_enabled:
        return EligibilityDecision.use_drop_in()
    return EligibilityDecision.ineligible("no_active_membership")


def decide_drop_in(studio_class: StudioClass) -> EligibilityDecision:
    if not studio_class.drop_in_enabled:
        return EligibilityDecision.ineligible("drop_in_not_allowed_for_class")
    return EligibilityDecision.use_drop_in()


class EligibilityEvaluator:
    """
    Loads the member's membership through the unit of work and applies the
    decision rules.

    - Requested drop-in only checks class.drop_in_enabled; the membership is
      never looked at, so an opted-in drop-in is never charged to it.
    - Administrators without a drop-in request get use_membership with no
      check at all (trusted operator override).
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def evaluate(
        self,
        tenant_id: UUID,
        user_id: UUID,
        studio_class: StudioClass,
        now: datetime,
        requested_type: Optional[BookingType] = None,
        is_admin: bool = False,
    ) -> EligibilityDecision:
        if requested_type == BookingType.drop_in:
            return decide_drop_in(studio_class)

        if is_admin:
            return EligibilityDecision.use_membership()

        membership = await self.uow.memberships.get_latest_active(tenant_id, user_id)
        plan = None
        if membership is not None:
            plan = await self.uow.membership_plans.get_by_id(membership.plan_id)
        return decide_for_member(membership, plan, studio_class, now)

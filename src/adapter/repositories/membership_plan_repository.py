from typing import Optional
from uuid import UUID

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.membership_plan_repository import IMembershipPlanRepository
from src.domain.entities import MembershipPlan


class MembershipPlanRepository(IMembershipPlanRepository):
    """Membership plan repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, plan_id: UUID) -> Optional[MembershipPlan]:
        """Get plan by ID"""
        stmt = select(MembershipPlan).where(MembershipPlan.id == plan_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

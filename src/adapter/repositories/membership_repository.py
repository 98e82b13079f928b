from typing import Optional
from uuid import UUID

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.membership_repository import IMembershipRepository
from src.domain.entities import Membership, MembershipStatus


class MembershipRepository(IMembershipRepository):
    """Membership repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, membership_id: UUID) -> Optional[Membership]:
        """Get membership by ID"""
        stmt = select(Membership).where(Membership.id == membership_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_latest_active(
        self, tenant_id: UUID, user_id: UUID
    ) -> Optional[Membership]:
        """Most recently started active membership (most-recent-start wins)"""
        stmt = (
            select(Membership)
            .where(
                Membership.tenant_id == tenant_id,
                Membership.user_id == user_id,
                Membership.status == MembershipStatus.active,
            )
            .order_by(Membership.starts_at.desc())
            .limit(1)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def create(self, membership: Membership) -> Membership:
        """Create a new membership"""
        self.session.add(membership)
        await self.session.flush()
        await self.session.refresh(membership)
        return membership

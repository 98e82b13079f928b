from typing import Optional
from uuid import UUID

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.checkin_repository import ICheckinRepository
from src.domain.entities import Checkin


class CheckinRepository(ICheckinRepository):
    """Checkin repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(
        self, tenant_id: UUID, session_id: UUID, user_id: UUID
    ) -> Optional[Checkin]:
        """Get attendance row for the triple"""
        stmt = select(Checkin).where(
            Checkin.tenant_id == tenant_id,
            Checkin.session_id == session_id,
            Checkin.user_id == user_id,
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def create(self, checkin: Checkin) -> Checkin:
        """Create attendance row"""
        self.session.add(checkin)
        await self.session.flush()
        return checkin

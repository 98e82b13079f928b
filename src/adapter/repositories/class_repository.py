from typing import Optional
from uuid import UUID

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.class_repository import IClassRepository
from src.domain.entities import StudioClass


class ClassRepository(IClassRepository):
    """Class repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, class_id: UUID) -> Optional[StudioClass]:
        """Get class by ID"""
        stmt = select(StudioClass).where(StudioClass.id == class_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

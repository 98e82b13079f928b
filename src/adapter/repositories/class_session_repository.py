from datetime import datetime
from typing import List, Optional
from uuid import UUID

from sqlalchemy import and_, or_
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.class_session_repository import IClassSessionRepository
from src.domain.entities import ClassSession


class ClassSessionRepository(IClassSessionRepository):
    """Class session repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(
        self, session_id: UUID, for_update: bool = False
    ) -> Optional[ClassSession]:
        """Get session by ID, optionally locking the row (ignored by SQLite)"""
        stmt = select(ClassSession).where(ClassSession.id == session_id)
        if for_update:
            stmt = stmt.with_for_update()
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_ids_with_closed_checkin(
        self, tenant_id: UUID, ended_before: datetime, started_before: datetime
    ) -> List[UUID]:
        """Sessions past their check-in window"""
        stmt = select(ClassSession.id).where(
            ClassSession.tenant_id == tenant_id,
            or_(
                and_(ClassSession.ends_at.is_not(None), ClassSession.ends_at < ended_before),
                and_(ClassSession.ends_at.is_(None), ClassSession.starts_at < started_before),
            ),
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
